"""邮件领域服务模块"""

from domain.mail.services.mail_client import (
    MailClient,
    MailSession,
    MailClientError,
    ImapConnectionError,
    ImapAuthenticationError,
    ImapCommandError,
)
from domain.mail.services.mime_parser import MimeParser, MimeParseError
from domain.mail.services.message_content_normalizer import (
    MessageContentNormalizer,
    strip_html,
)

__all__ = [
    "MailClient",
    "MailSession",
    "MailClientError",
    "ImapConnectionError",
    "ImapAuthenticationError",
    "ImapCommandError",
    "MimeParser",
    "MimeParseError",
    "MessageContentNormalizer",
    "strip_html",
]
