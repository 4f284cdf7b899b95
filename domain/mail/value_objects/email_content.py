"""邮件正文值对象"""

from dataclasses import dataclass
from typing import Optional

from domain.common.base_value_object import BaseValueObject


@dataclass(frozen=True)
class EmailContent(BaseValueObject):
    """MimeParser 的解析结果，纯文本和 HTML 正文都可能缺失"""

    text: Optional[str] = None
    html: Optional[str] = None

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    @property
    def has_html(self) -> bool:
        return bool(self.html)

    @property
    def is_empty(self) -> bool:
        return not (self.text or self.html)
