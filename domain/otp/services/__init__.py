"""OTP 领域服务"""

from domain.otp.services.otp_extractor import OtpExtractor

__all__ = ["OtpExtractor"]
