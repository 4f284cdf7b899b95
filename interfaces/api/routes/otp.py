"""OTP 检索 API 路由"""

from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.queries.otp.get_otp import GetOtpQuery
from domain.otp.value_objects.search_outcome import utc_timestamp


router = APIRouter(tags=["OTP"])


# ============ Handler 依赖注入 ============

_get_otp_handler_getter: Optional[Callable[[], GetOtpHandler]] = None


def set_get_otp_handler_getter(getter: Optional[Callable[[], GetOtpHandler]]) -> None:
    """设置 get_otp handler 获取器（由 DI 容器调用）"""
    global _get_otp_handler_getter
    _get_otp_handler_getter = getter


def get_otp_handler() -> Optional[GetOtpHandler]:
    """获取 GetOtpHandler 实例"""
    if _get_otp_handler_getter is None:
        return None
    return _get_otp_handler_getter()


# ============ Request/Response DTOs ============


class OtpRequest(BaseModel):
    """
    OTP 检索请求

    Attributes:
        referenceCode: 参考码（5 个字母或数字）
        accountIds: 指定搜索的账号 ID，为空则搜索所有可用账号
        timeout: 单账号超时（毫秒）
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"referenceCode": "ABC12"},
                {"referenceCode": "ABC12", "accountIds": ["account1"], "timeout": 15000},
            ]
        }
    )

    referenceCode: Optional[str] = Field(default=None, description="参考码")
    accountIds: Optional[List[str]] = Field(default=None, description="账号 ID 列表")
    timeout: Optional[int] = Field(default=None, ge=1, description="单账号超时（毫秒）")


class OtpResponseDTO(BaseModel):
    """OTP 检索响应（200 / 404）"""

    success: bool = Field(..., description="是否找到 OTP")
    otp: Optional[str] = Field(None, description="OTP")
    accountId: Optional[str] = Field(None, description="来源账号 ID")
    email: Optional[str] = Field(None, description="来源账号邮箱")
    error: Optional[str] = Field(None, description="失败原因")
    timestamp: str = Field(..., description="时间 (ISO 格式)")


class ErrorResponseDTO(BaseModel):
    """请求错误响应（400）"""

    success: bool = Field(False, description="固定为 false")
    error: str = Field(..., description="错误详情")
    timestamp: str = Field(..., description="时间 (ISO 格式)")


_RESPONSES = {
    200: {"model": OtpResponseDTO, "description": "找到 OTP"},
    404: {"model": OtpResponseDTO, "description": "未找到 OTP"},
    400: {"model": ErrorResponseDTO, "description": "请求参数错误"},
}


def bad_request(error: str) -> JSONResponse:
    """构造 400 响应"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": error, "timestamp": utc_timestamp()},
    )


def _check_reference_code(reference_code: Optional[str]) -> Optional[JSONResponse]:
    if not reference_code:
        return bad_request("Reference code is required")
    if len(reference_code) != 5:
        return bad_request("Reference code must be exactly 5 characters")
    if not (reference_code.isascii() and reference_code.isalnum()):
        return bad_request("Reference code must contain only letters and numbers")
    return None


async def _retrieve(handler: Optional[GetOtpHandler], query: GetOtpQuery) -> JSONResponse:
    if handler is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Handler not configured. Please configure dependency injection.",
        )

    outcome = await handler.handle(query)
    return JSONResponse(
        status_code=status.HTTP_200_OK if outcome.success else status.HTTP_404_NOT_FOUND,
        content=outcome.to_dict(),
    )


# ============ API Endpoints ============


@router.post(
    "/otp",
    responses=_RESPONSES,
    summary="按参考码检索 OTP",
    description="""
    在所有（或指定的）邮箱中并行搜索最近 10 分钟内包含参考码的邮件，
    返回第一个提取到的 OTP。

    **状态说明：**
    - **200 OK**: 找到 OTP
    - **404 Not Found**: 所有账号都未找到（或超时）
    - **400 Bad Request**: 参考码缺失、长度不是 5 或请求格式错误
    """,
)
async def retrieve_otp(
    request: OtpRequest,
    handler: Optional[GetOtpHandler] = Depends(get_otp_handler),
):
    """按参考码检索 OTP"""
    error = _check_reference_code(request.referenceCode)
    if error is not None:
        return error

    query = GetOtpQuery(
        reference_code=request.referenceCode,
        account_ids=request.accountIds,
        timeout_ms=request.timeout,
    )
    return await _retrieve(handler, query)


@router.get(
    "/otp/{reference_code}",
    responses=_RESPONSES,
    summary="按参考码检索 OTP（GET）",
    description="与 POST /otp 相同，参数通过路径和查询字符串传递，便于测试。",
)
async def retrieve_otp_by_path(
    reference_code: str = Path(..., description="参考码", examples=["ABC12"]),
    accounts: Optional[str] = Query(None, description="逗号分隔的账号 ID", examples=["account1,account2"]),
    timeout: Optional[int] = Query(None, ge=1, description="单账号超时（毫秒）"),
    handler: Optional[GetOtpHandler] = Depends(get_otp_handler),
):
    """按参考码检索 OTP"""
    error = _check_reference_code(reference_code)
    if error is not None:
        return error

    account_ids = [item.strip() for item in accounts.split(",") if item.strip()] if accounts else None

    query = GetOtpQuery(
        reference_code=reference_code,
        account_ids=account_ids,
        timeout_ms=timeout,
    )
    return await _retrieve(handler, query)
