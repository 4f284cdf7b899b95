"""邮件协议客户端接口"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import ContextManager, List

from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mail.value_objects.fetched_message import FetchedMessage


class MailSession(ABC):
    """
    已认证的邮箱会话

    一个会话只属于一次账号搜索，不在并发搜索之间共享。
    """

    @abstractmethod
    def lock_mailbox(self, mailbox: str = "INBOX") -> ContextManager[None]:
        """
        独占锁定邮箱文件夹

        返回上下文管理器，进入时获取锁，退出时（包括异常退出）释放锁。

        Raises:
            MailClientError: 文件夹无法打开
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_since(self, since: datetime) -> List[FetchedMessage]:
        """
        收取指定时间之后到达的邮件（需先锁定邮箱）

        Args:
            since: 时间下限（含），带时区

        Returns:
            按服务器返回顺序排列的邮件

        Raises:
            MailClientError: 搜索或收取失败
        """
        raise NotImplementedError

    @abstractmethod
    def logout(self) -> None:
        """关闭会话"""
        raise NotImplementedError


class MailClient(ABC):
    """
    邮件协议客户端接口

    具体实现在基础设施层（imaplib）。连接、认证、锁定、收取中的任何失败
    都以 MailClientError 抛出。
    """

    @abstractmethod
    def open_session(self, account: MailboxAccount) -> MailSession:
        """
        连接并登录账号的 IMAP 服务器

        Raises:
            ImapConnectionError: 连接失败
            ImapAuthenticationError: 认证失败
        """
        raise NotImplementedError


class MailClientError(Exception):
    """邮件协议错误基类"""


class ImapConnectionError(MailClientError):
    """IMAP 连接错误"""

    def __init__(self, server: str, port: int, message: str):
        self.server = server
        self.port = port
        super().__init__(f"Failed to connect to {server}:{port} - {message}")


class ImapAuthenticationError(MailClientError):
    """IMAP 认证错误"""

    def __init__(self, username: str, message: str):
        self.username = username
        super().__init__(f"Authentication failed for {username} - {message}")


class ImapCommandError(MailClientError):
    """IMAP 命令执行失败（SELECT / SEARCH / FETCH）"""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(f"IMAP {command} failed - {message}")
