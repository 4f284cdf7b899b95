"""查询可用邮箱账号"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ListAccountsQuery:
    """查询可用邮箱账号（无参数）"""


@dataclass
class AccountItem:
    """
    账号列表项

    不包含任何凭据
    """

    id: str
    email: str
    is_active: bool


@dataclass
class ListAccountsResult:
    """查询结果"""

    accounts: List[AccountItem] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.accounts)
