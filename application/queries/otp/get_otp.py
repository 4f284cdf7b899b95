"""按参考码获取 OTP 的 Query"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class GetOtpQuery:
    """按参考码获取 OTP 的 Query

    Attributes:
        reference_code: 参考码，必须恰好 5 个字母或数字
        account_ids: 要搜索的账号 ID（按顺序），为空则搜索所有可用账号
        timeout_ms: 单账号搜索超时（毫秒），为空使用默认值
    """

    reference_code: Optional[str]
    account_ids: Optional[List[str]] = None
    timeout_ms: Optional[int] = None
