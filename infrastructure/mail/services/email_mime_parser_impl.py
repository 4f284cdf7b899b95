"""基于标准库 email 的 MIME 解析实现"""

import email
from email.message import Message
from typing import Optional, Tuple

from domain.mail.services.mime_parser import MimeParser, MimeParseError
from domain.mail.value_objects.email_content import EmailContent


class EmailMimeParserImpl(MimeParser):
    """
    MIME 解析实现

    取第一个非附件的 text/plain 和 text/html 部分，按声明的字符集解码。
    """

    def parse(self, raw: bytes) -> EmailContent:
        """
        解析原始邮件

        Raises:
            MimeParseError: 邮件无法解析
        """
        if not raw:
            raise MimeParseError("Empty message")

        try:
            msg = email.message_from_bytes(raw)
            body_text, body_html = self._extract_body(msg)
        except (TypeError, ValueError, LookupError, IndexError, AttributeError) as e:
            raise MimeParseError(f"Malformed MIME message: {e}") from e

        return EmailContent(text=body_text, html=body_html)

    def _extract_body(self, msg: Message) -> Tuple[Optional[str], Optional[str]]:
        """
        提取邮件正文（纯文本和 HTML）

        Returns:
            (纯文本正文, HTML 正文) 元组
        """
        body_text: Optional[str] = None
        body_html: Optional[str] = None

        parts = msg.walk() if msg.is_multipart() else [msg]
        for part in parts:
            if part.is_multipart():
                continue

            # 跳过附件
            if "attachment" in str(part.get("Content-Disposition", "")):
                continue

            content_type = part.get_content_type()
            if content_type not in ("text/plain", "text/html"):
                continue

            decoded = self._decode_payload(part)
            if decoded is None:
                continue

            if content_type == "text/plain" and body_text is None:
                body_text = decoded
            elif content_type == "text/html" and body_html is None:
                body_html = decoded

        return body_text, body_html

    @staticmethod
    def _decode_payload(part: Message) -> Optional[str]:
        payload = part.get_payload(decode=True)
        if not isinstance(payload, bytes):
            return None

        charset = part.get_content_charset() or "utf-8"
        try:
            return payload.decode(charset, errors="replace")
        except (LookupError, UnicodeDecodeError):
            return payload.decode("utf-8", errors="replace")
