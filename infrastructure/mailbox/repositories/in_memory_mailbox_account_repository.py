"""邮箱账号内存仓储实现"""

import logging
from typing import Iterable, List, Optional, Sequence, Union

from domain.common.exceptions import InvalidOperationException
from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mailbox.repositories.mailbox_account_repository import MailboxAccountRepository
from domain.mailbox.value_objects.imap_config import ImapConfig
from infrastructure.config.settings import EmailAccountSettings


class InMemoryMailboxAccountRepository(MailboxAccountRepository):
    """
    邮箱账号内存仓储实现

    账号集合在构造时确定（启动时从配置加载），之后只读，
    可以被并发的检索请求安全共享。
    """

    DEFAULT_IMAP_HOST = "imap.gmail.com"

    def __init__(self, accounts: Iterable[MailboxAccount]):
        """
        初始化仓储

        Args:
            accounts: 账号列表，保留声明顺序

        Raises:
            InvalidOperationException: 账号 ID 重复
        """
        self._accounts: List[MailboxAccount] = list(accounts)

        seen = set()
        for account in self._accounts:
            if account.id in seen:
                raise InvalidOperationException(
                    operation="load_mailbox_accounts",
                    reason=f"Duplicate account id: {account.id}"
                )
            seen.add(account.id)

    @classmethod
    def from_settings(
        cls,
        account_settings: Sequence[EmailAccountSettings],
        encryption_key: Union[str, bytes],
        logger: Optional[logging.Logger] = None,
    ) -> "InMemoryMailboxAccountRepository":
        """
        从配置构建仓储

        Args:
            account_settings: 账号配置列表
            encryption_key: 加密账号密码的密钥
            logger: 可选的日志记录器

        Returns:
            仓储实例
        """
        logger = logger or logging.getLogger(__name__)
        repository = cls(cls._to_entity(item, encryption_key) for item in account_settings)

        active = len(repository.list_active())
        logger.info(
            f"Loaded {len(repository.list_all())} email account(s), {active} active"
        )
        return repository

    def list_all(self) -> List[MailboxAccount]:
        """获取所有邮箱账号"""
        return list(self._accounts)

    def list_active(self) -> List[MailboxAccount]:
        """获取启用且凭据完整的账号"""
        return [account for account in self._accounts if account.is_searchable]

    def get_by_id(self, account_id: str) -> Optional[MailboxAccount]:
        """根据 ID 获取邮箱账号"""
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    @classmethod
    def _to_entity(
        cls, item: EmailAccountSettings, encryption_key: Union[str, bytes]
    ) -> MailboxAccount:
        """配置项转换为实体"""
        if item.host:
            imap_config = ImapConfig(server=item.host, port=item.port, use_ssl=item.secure)
        elif item.provider:
            imap_config = ImapConfig.for_provider(item.provider)
        else:
            imap_config = ImapConfig(
                server=cls.DEFAULT_IMAP_HOST, port=item.port, use_ssl=item.secure
            )

        return MailboxAccount.create(
            id=item.id,
            imap_config=imap_config,
            username=item.user,
            password=item.password,
            encryption_key=encryption_key,
            email=item.email or item.user,
            is_active=item.is_active,
        )
