"""IMAP 收取到的原始邮件值对象"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from domain.common.base_value_object import BaseValueObject


@dataclass(frozen=True)
class FetchedMessage(BaseValueObject):
    """
    IMAP 收取到的原始邮件

    同时携带原始 RFC822 字节和信封元数据，正文解析交给 MimeParser。

    Attributes:
        sequence: 服务器返回的邮件序号
        raw: 原始邮件字节
        internal_date: 服务器记录的接收时间（INTERNALDATE）
        message_id: Message-ID header
        from_address: 发件人
        subject: 邮件主题
    """

    sequence: str
    raw: bytes = field(repr=False)
    internal_date: Optional[datetime] = None
    message_id: str = ""
    from_address: str = ""
    subject: str = ""
