"""账号描述用到的值对象：IMAP 连接参数和加密密码"""

from domain.mailbox.value_objects.encrypted_password import EncryptedPassword
from domain.mailbox.value_objects.imap_config import ImapConfig

__all__ = ["EncryptedPassword", "ImapConfig"]
