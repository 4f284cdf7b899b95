"""OTP 查询"""

from application.queries.otp.get_otp import GetOtpQuery
from application.queries.otp.list_accounts import (
    ListAccountsQuery,
    ListAccountsResult,
    AccountItem,
)

__all__ = ["GetOtpQuery", "ListAccountsQuery", "ListAccountsResult", "AccountItem"]
