"""OTP 应用层服务"""

from application.otp.services.account_search_service import AccountSearchService
from application.otp.services.otp_retrieval_service import OtpRetrievalService

__all__ = ["AccountSearchService", "OtpRetrievalService"]
