"""邮箱账号 API 路由"""

from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from application.handlers.otp.list_accounts_handler import ListAccountsHandler
from application.queries.otp.list_accounts import ListAccountsQuery


router = APIRouter(tags=["Accounts"])


# ============ Handler 依赖注入 ============

# 全局 handler getter，由 DI 容器在启动时设置
_list_handler_getter: Optional[Callable[[], ListAccountsHandler]] = None


def set_list_handler_getter(getter: Optional[Callable[[], ListAccountsHandler]]) -> None:
    """设置 list handler 获取器（由 DI 容器调用）"""
    global _list_handler_getter
    _list_handler_getter = getter


def get_list_accounts_handler() -> Optional[ListAccountsHandler]:
    """获取 ListAccountsHandler 实例"""
    if _list_handler_getter is None:
        return None
    return _list_handler_getter()


# ============ Response DTOs ============


class AccountItemDTO(BaseModel):
    """账号列表项（不包含凭据）"""

    id: str = Field(..., description="账号 ID")
    email: str = Field(..., description="邮箱地址")
    isActive: bool = Field(..., description="是否启用")


class AccountListResponse(BaseModel):
    """账号列表响应"""

    success: bool = Field(True, description="固定为 true")
    accounts: List[AccountItemDTO] = Field(..., description="可用账号")
    count: int = Field(..., description="账号数量")


# ============ API Endpoints ============


@router.get(
    "/accounts",
    response_model=AccountListResponse,
    summary="查询可用邮箱账号",
    description="返回启用且凭据完整的邮箱账号，不包含任何凭据。",
)
def list_accounts(
    handler: Optional[ListAccountsHandler] = Depends(get_list_accounts_handler),
) -> AccountListResponse:
    """查询可用邮箱账号"""
    if handler is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Handler not configured. Please configure dependency injection.",
        )

    result = handler.handle(ListAccountsQuery())

    return AccountListResponse(
        accounts=[
            AccountItemDTO(id=item.id, email=item.email, isActive=item.is_active)
            for item in result.accounts
        ],
        count=result.count,
    )
