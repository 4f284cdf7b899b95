"""OTP 值对象"""

from domain.otp.value_objects.search_outcome import SearchOutcome, utc_timestamp

__all__ = ["SearchOutcome", "utc_timestamp"]
