"""OTP 搜索结果值对象"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.common.base_value_object import BaseValueObject


def utc_timestamp() -> str:
    """当前 UTC 时间，ISO-8601 毫秒精度，Z 结尾"""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class SearchOutcome(BaseValueObject):
    """
    OTP 搜索结果

    既表示单个账号的搜索结果，也表示整个请求的聚合结果。

    Attributes:
        success: 是否找到 OTP
        otp: 找到的 OTP（仅成功时）
        account_id: 来源账号 ID（实际搜索过账号时）
        email: 来源账号邮箱地址
        error: 失败原因（仅失败时）
        timestamp: 结果生成时间
    """

    success: bool
    otp: Optional[str] = None
    account_id: Optional[str] = None
    email: Optional[str] = None
    error: Optional[str] = None
    timestamp: str = field(default_factory=utc_timestamp)

    @classmethod
    def found(cls, otp: str, account_id: str, email: str) -> "SearchOutcome":
        """创建成功结果"""
        return cls(success=True, otp=otp, account_id=account_id, email=email)

    @classmethod
    def failed(
        cls,
        error: str,
        account_id: Optional[str] = None,
        email: Optional[str] = None,
    ) -> "SearchOutcome":
        """创建失败结果"""
        return cls(success=False, error=error, account_id=account_id, email=email)

    def to_dict(self) -> Dict[str, Any]:
        """
        转换为对外的 JSON 结构

        键名使用 camelCase，值为 None 的字段省略。
        """
        data: Dict[str, Any] = {
            "success": self.success,
            "otp": self.otp,
            "accountId": self.account_id,
            "email": self.email,
            "error": self.error,
            "timestamp": self.timestamp,
        }
        return {key: value for key, value in data.items() if value is not None}
