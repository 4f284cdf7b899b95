"""MIME 解析接口"""

from abc import ABC, abstractmethod

from domain.mail.value_objects.email_content import EmailContent


class MimeParser(ABC):
    """将原始邮件字节解析为纯文本 / HTML 正文"""

    @abstractmethod
    def parse(self, raw: bytes) -> EmailContent:
        """
        解析原始邮件

        Raises:
            MimeParseError: 邮件格式错误
        """
        raise NotImplementedError


class MimeParseError(Exception):
    """MIME 解析失败"""
