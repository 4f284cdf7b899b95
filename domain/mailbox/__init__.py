"""
邮箱账号界限上下文

账号在启动时从配置加载，之后只读：
- MailboxAccount 实体
- ImapConfig, EncryptedPassword 值对象
- MailboxAccountRepository 仓储接口（账号注册表）
"""

from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mailbox.repositories.mailbox_account_repository import MailboxAccountRepository
from domain.mailbox.value_objects import EncryptedPassword, ImapConfig

__all__ = ["MailboxAccount", "MailboxAccountRepository", "ImapConfig", "EncryptedPassword"]
