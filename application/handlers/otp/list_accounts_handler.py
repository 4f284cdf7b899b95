"""查询可用邮箱账号处理器"""

from application.queries.otp.list_accounts import (
    AccountItem,
    ListAccountsQuery,
    ListAccountsResult,
)
from domain.mailbox.repositories.mailbox_account_repository import MailboxAccountRepository


class ListAccountsHandler:
    """
    查询可用邮箱账号处理器

    只返回可搜索的账号，不包含凭据。
    """

    def __init__(self, repository: MailboxAccountRepository):
        self._repository = repository

    def handle(self, query: ListAccountsQuery) -> ListAccountsResult:
        items = [
            AccountItem(id=account.id, email=account.email, is_active=account.is_active)
            for account in self._repository.list_active()
        ]
        return ListAccountsResult(accounts=items)
