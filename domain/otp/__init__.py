"""
OTP 界限上下文

- SearchOutcome 值对象：单账号搜索结果 / 聚合结果
- OtpExtractor 领域服务：按参考码从邮件文本中提取 OTP
"""

from domain.otp.value_objects.search_outcome import SearchOutcome
from domain.otp.services.otp_extractor import OtpExtractor

__all__ = ["SearchOutcome", "OtpExtractor"]
