"""单账号 OTP 搜索服务"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from domain.common.exceptions import DomainException
from domain.mail.services.mail_client import MailClient, MailClientError, MailSession
from domain.mail.services.message_content_normalizer import MessageContentNormalizer
from domain.mail.value_objects.fetched_message import FetchedMessage
from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.otp.services.otp_extractor import OtpExtractor
from domain.otp.value_objects.search_outcome import SearchOutcome


class AccountSearchService:
    """
    单账号 OTP 搜索服务

    在一个账号的收件箱中查找包含参考码的最近邮件并提取 OTP：
    1. 打开 IMAP 会话（连接 + 登录）
    2. 锁定 INBOX
    3. 收取最近 search_window_minutes 分钟内到达的邮件
    4. 按服务器顺序逐封规范化，包含参考码的邮件交给 OtpExtractor
    5. 第一个提取结果即返回

    该方法是同步阻塞的，由 OtpRetrievalService 放在线程池中执行。
    无论成功、未找到还是出错，邮箱锁都会在返回前释放，会话随后关闭；
    关闭失败只记录日志，不影响结果。
    """

    MAILBOX = "INBOX"
    DEFAULT_SEARCH_WINDOW_MINUTES = 10

    def __init__(
        self,
        mail_client: MailClient,
        normalizer: MessageContentNormalizer,
        extractor: OtpExtractor,
        search_window_minutes: int = DEFAULT_SEARCH_WINDOW_MINUTES,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化搜索服务

        Args:
            mail_client: 邮件协议客户端
            normalizer: 邮件内容规范化服务
            extractor: OTP 提取器
            search_window_minutes: 只搜索最近多少分钟内的邮件
            logger: 可选的日志记录器
        """
        self._mail_client = mail_client
        self._normalizer = normalizer
        self._extractor = extractor
        self._search_window = timedelta(minutes=search_window_minutes)
        self._logger = logger or logging.getLogger(__name__)

    def search(self, account: MailboxAccount, reference_code: str) -> SearchOutcome:
        """
        在单个账号中搜索 OTP

        Args:
            account: 邮箱账号
            reference_code: 参考码

        Returns:
            SearchOutcome，协议错误也转换为失败结果
        """
        session: Optional[MailSession] = None
        try:
            session = self._mail_client.open_session(account)

            with session.lock_mailbox(self.MAILBOX):
                since = datetime.now(timezone.utc) - self._search_window
                messages = session.fetch_since(since)
                self._logger.debug(
                    f"[{account.id}] {len(messages)} message(s) since {since.isoformat()}"
                )

                for message in messages:
                    otp = self._scan_message(message, reference_code)
                    if otp:
                        self._logger.info(
                            f"[{account.id}] OTP found for reference code {reference_code}"
                        )
                        return SearchOutcome.found(
                            otp=otp, account_id=account.id, email=account.email
                        )

            return SearchOutcome.failed(
                error=f"No OTP found for reference code: {reference_code}",
                account_id=account.id,
                email=account.email,
            )

        except (MailClientError, DomainException) as e:
            self._logger.warning(f"[{account.id}] Search failed: {e}")
            return SearchOutcome.failed(
                error=f"Error searching account {account.id}: {e}",
                account_id=account.id,
                email=account.email,
            )

        finally:
            if session is not None:
                self._close(account, session)

    def _scan_message(self, message: FetchedMessage, reference_code: str) -> Optional[str]:
        text = self._normalizer.normalize(message.raw)
        if reference_code not in text:
            return None
        return self._extractor.extract(text, reference_code)

    def _close(self, account: MailboxAccount, session: MailSession) -> None:
        try:
            session.logout()
        except Exception as e:
            self._logger.error(f"[{account.id}] Error closing IMAP connection: {e}")
