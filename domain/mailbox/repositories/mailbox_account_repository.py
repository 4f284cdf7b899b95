"""邮箱账号仓储接口"""

from abc import ABC, abstractmethod
from typing import Optional, List

from domain.mailbox.entities.mailbox_account import MailboxAccount


class MailboxAccountRepository(ABC):
    """
    邮箱账号仓储接口（账号注册表）

    只读契约：账号集合在启动时确定，查询没有副作用。
    """

    @abstractmethod
    def list_all(self) -> List[MailboxAccount]:
        """
        获取所有邮箱账号

        Returns:
            邮箱账号列表，按配置声明顺序
        """
        raise NotImplementedError

    @abstractmethod
    def list_active(self) -> List[MailboxAccount]:
        """
        获取可搜索的邮箱账号

        Returns:
            启用且用户名、密码均非空的账号，按配置声明顺序
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, account_id: str) -> Optional[MailboxAccount]:
        """
        根据 ID 获取邮箱账号（不论是否启用）

        Args:
            account_id: 账号 ID

        Returns:
            邮箱账号实体，不存在返回 None
        """
        raise NotImplementedError
