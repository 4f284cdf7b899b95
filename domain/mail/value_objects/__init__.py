"""邮件值对象模块"""

from domain.mail.value_objects.email_content import EmailContent
from domain.mail.value_objects.fetched_message import FetchedMessage

__all__ = ["EmailContent", "FetchedMessage"]
