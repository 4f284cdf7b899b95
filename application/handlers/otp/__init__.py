"""OTP 处理器"""

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.handlers.otp.list_accounts_handler import ListAccountsHandler

__all__ = ["GetOtpHandler", "ListAccountsHandler"]
