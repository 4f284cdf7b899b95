"""OTP 检索服务 - 多账号并行搜索"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

from application.otp.services.account_search_service import AccountSearchService
from application.queries.otp.get_otp import GetOtpQuery
from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mailbox.repositories.mailbox_account_repository import MailboxAccountRepository
from domain.otp.value_objects.search_outcome import SearchOutcome


SettledResult = Union[SearchOutcome, BaseException]


class OtpRetrievalService:
    """
    OTP 检索服务

    - 校验参考码，解析要搜索的账号
    - 每个账号一个带超时的搜索任务，全部并行（asyncio.gather）
    - 阻塞的 IMAP 搜索在线程池中执行
    - 超时的搜索被放弃而不是强制终止，线程自己完成后会关闭会话
    - 等所有任务结束后按账号顺序聚合：第一个成功结果优先
    """

    REFERENCE_CODE_LENGTH = 5
    DEFAULT_TIMEOUT_MS = 30000
    DEFAULT_MAX_WORKERS = 16

    INVALID_LENGTH_ERROR = "Reference code must be exactly 5 characters"
    INVALID_CHARS_ERROR = "Reference code must contain only letters and numbers"
    NO_ACCOUNTS_ERROR = "No active email accounts found"
    ALL_FAILED_ERROR = "Failed to retrieve OTP from any account"

    def __init__(
        self,
        mailbox_repository: MailboxAccountRepository,
        search_service: AccountSearchService,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        logger: Optional[logging.Logger] = None,
    ):
        """
        初始化检索服务

        Args:
            mailbox_repository: 邮箱账号仓储（账号注册表）
            search_service: 单账号搜索服务
            default_timeout_ms: 请求未指定超时时的单账号超时（毫秒）
            max_workers: IMAP 搜索线程池大小
            logger: 可选的日志记录器
        """
        self._mailbox_repository = mailbox_repository
        self._search_service = search_service
        self._default_timeout_ms = default_timeout_ms
        self._logger = logger or logging.getLogger(__name__)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="otp-search-",
        )

    @property
    def default_timeout_ms(self) -> int:
        return self._default_timeout_ms

    async def retrieve(self, query: GetOtpQuery) -> SearchOutcome:
        """
        按参考码检索 OTP

        Args:
            query: 检索请求

        Returns:
            聚合后的 SearchOutcome，从不抛出异常
        """
        error = self.validate_request(query)
        if error is not None:
            return SearchOutcome.failed(error=error)

        reference_code: str = query.reference_code  # type: ignore[assignment]

        try:
            accounts = self.get_accounts_to_search(query.account_ids)
            if not accounts:
                self._logger.info("No active email accounts to search")
                return SearchOutcome.failed(error=self.NO_ACCOUNTS_ERROR)

            timeout_ms = (
                query.timeout_ms if query.timeout_ms is not None else self._default_timeout_ms
            )
            self._logger.info(
                f"Searching {len(accounts)} account(s) for reference code "
                f"{reference_code} (timeout={timeout_ms}ms)"
            )

            results = await asyncio.gather(
                *(
                    self.search_with_timeout(account, reference_code, timeout_ms)
                    for account in accounts
                ),
                return_exceptions=True,
            )
            return self.find_successful_result(results)

        except Exception as e:
            self._logger.exception(f"Unexpected error retrieving OTP: {e}")
            return SearchOutcome.failed(error=f"Unexpected error: {e}")

    def validate_request(self, query: GetOtpQuery) -> Optional[str]:
        """
        校验检索请求

        Returns:
            错误信息，合法时返回 None
        """
        code = query.reference_code
        if not code or len(code) != self.REFERENCE_CODE_LENGTH:
            return self.INVALID_LENGTH_ERROR
        if not (code.isascii() and code.isalnum()):
            return self.INVALID_CHARS_ERROR
        return None

    def get_accounts_to_search(
        self, account_ids: Optional[Sequence[str]] = None
    ) -> List[MailboxAccount]:
        """
        解析要搜索的账号

        指定了 account_ids 时按给定顺序查找，只保留存在且启用的账号，
        重复的 ID 不去重；否则返回所有可搜索账号。
        """
        if not account_ids:
            return self._mailbox_repository.list_active()

        accounts: List[MailboxAccount] = []
        for account_id in account_ids:
            account = self._mailbox_repository.get_by_id(account_id)
            if account is not None and account.is_active:
                accounts.append(account)
        return accounts

    async def search_with_timeout(
        self,
        account: MailboxAccount,
        reference_code: str,
        timeout_ms: int,
    ) -> SearchOutcome:
        """
        带超时的单账号搜索

        超时后不再等待线程中的搜索，其结果被丢弃；任何异常都转换为失败结果。
        """
        loop = asyncio.get_running_loop()

        try:
            future = loop.run_in_executor(
                self._executor,
                self._search_service.search,
                account,
                reference_code,
            )
            return await asyncio.wait_for(future, timeout=timeout_ms / 1000)
        except asyncio.TimeoutError:
            self._logger.warning(
                f"[{account.id}] Search timed out after {timeout_ms}ms, abandoning"
            )
            return self._guard_failure(account, "Search timeout")
        except Exception as e:
            self._logger.error(f"[{account.id}] Search raised: {e}")
            return self._guard_failure(account, str(e))

    @classmethod
    def find_successful_result(cls, results: Sequence[SettledResult]) -> SearchOutcome:
        """
        按账号顺序聚合已结束的搜索结果

        1. 第一个成功结果
        2. 否则第一个正常结束（未抛异常）的失败结果
        3. 全部抛异常时返回通用失败
        """
        for result in results:
            if isinstance(result, SearchOutcome) and result.success:
                return result

        for result in results:
            if isinstance(result, SearchOutcome):
                return result

        return SearchOutcome.failed(error=cls.ALL_FAILED_ERROR)

    def shutdown(self) -> None:
        """关闭线程池，不等待仍在运行的搜索"""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._logger.info("OTP retrieval service stopped")

    @staticmethod
    def _guard_failure(account: MailboxAccount, reason: str) -> SearchOutcome:
        return SearchOutcome.failed(
            error=f"Timeout or error searching account {account.id}: {reason}",
            account_id=account.id,
            email=account.email,
        )
