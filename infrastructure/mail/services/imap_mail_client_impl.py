"""IMAP 邮件协议客户端实现"""

import imaplib
import logging
import ssl
import threading
import time
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from email.header import decode_header
from email.parser import BytesHeaderParser
from typing import Generator, List, Optional, Tuple, Union

from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mail.services.mail_client import (
    MailClient,
    MailSession,
    ImapAuthenticationError,
    ImapCommandError,
    ImapConnectionError,
)
from domain.mail.value_objects.fetched_message import FetchedMessage


_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def imap_date(value: datetime) -> str:
    """格式化为 IMAP SEARCH 使用的日期（DD-Mon-YYYY），不依赖 locale"""
    return f"{value.day:02d}-{_MONTHS[value.month - 1]}-{value.year}"


def decode_header_value(value: Optional[str]) -> str:
    """
    解码邮件头部值（处理编码）

    Args:
        value: 原始头部值

    Returns:
        解码后的字符串
    """
    if not value:
        return ""

    result_parts = []
    for part, charset in decode_header(value):
        if isinstance(part, bytes):
            try:
                decoded = part.decode(charset or "utf-8", errors="replace")
            except (LookupError, UnicodeDecodeError):
                decoded = part.decode("utf-8", errors="replace")
            result_parts.append(decoded)
        else:
            result_parts.append(part)

    return "".join(result_parts)


class ImapMailSession(MailSession):
    """
    基于 imaplib 的邮箱会话

    邮箱锁 = 会话内的互斥锁 + 只读 SELECT，释放时 CLOSE 文件夹。
    只读打开保证 CLOSE 不会清除任何邮件，BODY.PEEK 不会设置 \\Seen。
    """

    def __init__(
        self,
        imap: imaplib.IMAP4,
        account_id: str,
        logger: Optional[logging.Logger] = None,
    ):
        self._imap = imap
        self._account_id = account_id
        self._lock = threading.Lock()
        self._logger = logger or logging.getLogger(__name__)

    @contextmanager
    def lock_mailbox(self, mailbox: str = "INBOX") -> Generator[None, None, None]:
        """
        锁定邮箱文件夹

        用法:
            with session.lock_mailbox("INBOX"):
                messages = session.fetch_since(since)
        """
        with self._lock:
            try:
                status, data = self._imap.select(mailbox, readonly=True)
            except (imaplib.IMAP4.error, OSError) as e:
                raise ImapCommandError("SELECT", str(e)) from e
            if status != "OK":
                raise ImapCommandError("SELECT", f"{mailbox}: {data!r}")

            try:
                yield
            finally:
                self._release(mailbox)

    def _release(self, mailbox: str) -> None:
        try:
            # close() 只能在 SELECTED 状态调用
            if self._imap.state == "SELECTED":
                self._imap.close()
        except (imaplib.IMAP4.error, OSError) as e:
            self._logger.debug(f"[{self._account_id}] Error closing {mailbox}: {e}")

    def fetch_since(self, since: datetime) -> List[FetchedMessage]:
        """
        收取 since 之后到达的邮件

        IMAP SEARCH SINCE 只精确到日期，且按服务器时区判断，
        因此先放宽一天搜索，再按 INTERNALDATE 精确过滤。
        """
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)

        search_date = imap_date((since - timedelta(days=1)).astimezone(timezone.utc))
        try:
            status, data = self._imap.search(None, "SINCE", search_date)
        except (imaplib.IMAP4.error, OSError) as e:
            raise ImapCommandError("SEARCH", str(e)) from e
        if status != "OK":
            raise ImapCommandError("SEARCH", f"status {status}")

        message_ids = data[0].split() if data and data[0] else []
        self._logger.debug(
            f"[{self._account_id}] SEARCH SINCE {search_date}: {len(message_ids)} candidate(s)"
        )

        messages: List[FetchedMessage] = []
        for message_id in message_ids:
            message = self._fetch_message(message_id)
            if message is None:
                continue
            if message.internal_date is not None and message.internal_date < since:
                continue
            messages.append(message)

        return messages

    def _fetch_message(self, message_id: bytes) -> Optional[FetchedMessage]:
        """获取单封邮件的原始内容和信封信息"""
        try:
            status, msg_data = self._imap.fetch(message_id, "(INTERNALDATE BODY.PEEK[])")
        except (imaplib.IMAP4.error, OSError) as e:
            raise ImapCommandError("FETCH", str(e)) from e
        if status != "OK":
            raise ImapCommandError("FETCH", f"status {status}")

        parts = self._response_parts(msg_data)
        if parts is None:
            self._logger.debug(
                f"[{self._account_id}] Unexpected FETCH response for {message_id!r}"
            )
            return None

        meta, raw = parts
        headers = BytesHeaderParser().parsebytes(raw)

        return FetchedMessage(
            sequence=message_id.decode("ascii", errors="replace"),
            raw=raw,
            internal_date=self._parse_internal_date(meta),
            message_id=headers.get("Message-ID", ""),
            from_address=decode_header_value(headers.get("From", "")),
            subject=decode_header_value(headers.get("Subject", "")),
        )

    @staticmethod
    def _response_parts(msg_data: list) -> Optional[Tuple[bytes, bytes]]:
        for item in msg_data or []:
            if isinstance(item, tuple) and len(item) >= 2 and isinstance(item[1], bytes):
                return item[0], item[1]
        return None

    @staticmethod
    def _parse_internal_date(meta: bytes) -> Optional[datetime]:
        parsed = imaplib.Internaldate2tuple(meta)
        if parsed is None:
            return None
        return datetime.fromtimestamp(time.mktime(parsed), tz=timezone.utc)

    def logout(self) -> None:
        """关闭会话，失败时抛出 ImapCommandError"""
        try:
            self._imap.logout()
        except (imaplib.IMAP4.error, OSError) as e:
            raise ImapCommandError("LOGOUT", str(e)) from e


class ImapMailClientImpl(MailClient):
    """
    IMAP 邮件协议客户端实现

    使用 Python 标准库 imaplib，支持 SSL/TLS（993）和明文（143）连接。
    不做自动重连：失败直接抛出，由调用方记录为该账号的失败结果。
    """

    DEFAULT_TIMEOUT = 30  # 秒

    def __init__(
        self,
        encryption_key: Union[str, bytes],
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化 IMAP 客户端

        Args:
            encryption_key: 用于解密邮箱密码的加密密钥
            timeout: socket 超时（秒）
            logger: 可选的日志记录器
        """
        self._encryption_key = encryption_key
        self._timeout = timeout
        self._logger = logger or logging.getLogger(__name__)

    def open_session(self, account: MailboxAccount) -> ImapMailSession:
        """
        建立 IMAP 连接并登录

        Raises:
            ImapConnectionError: 连接失败
            ImapAuthenticationError: 认证失败
            InvalidOperationException: 账号未配置密码
        """
        imap = self._connect(account)

        try:
            password = account.get_decrypted_password(self._encryption_key)
            self._logger.debug(f"[{account.id}] Authenticating as {account.username}")
            imap.login(account.username, password)
        except imaplib.IMAP4.error as e:
            self._abort(imap)
            raise ImapAuthenticationError(username=account.username, message=str(e)) from e
        except OSError as e:
            self._abort(imap)
            raise ImapConnectionError(
                server=account.imap_config.server,
                port=account.imap_config.port,
                message=str(e),
            ) from e
        except Exception:
            self._abort(imap)
            raise

        self._logger.info(f"[{account.id}] Connected to {account.imap_config.connection_string}")
        return ImapMailSession(imap, account.id, logger=self._logger)

    def _connect(self, account: MailboxAccount) -> imaplib.IMAP4:
        server = account.imap_config.server
        port = account.imap_config.port

        try:
            self._logger.debug(f"[{account.id}] Connecting to {server}:{port}")
            if account.imap_config.use_ssl:
                return imaplib.IMAP4_SSL(
                    host=server,
                    port=port,
                    ssl_context=ssl.create_default_context(),
                    timeout=self._timeout,
                )
            return imaplib.IMAP4(host=server, port=port, timeout=self._timeout)
        except (imaplib.IMAP4.error, OSError) as e:
            raise ImapConnectionError(server=server, port=port, message=str(e)) from e

    def _abort(self, imap: imaplib.IMAP4) -> None:
        try:
            imap.shutdown()
        except OSError as e:
            self._logger.debug(f"Error during shutdown: {e}")
