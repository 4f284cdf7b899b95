"""
FastAPI 应用工厂

组装 DI 容器、路由和异常处理。
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from domain.otp.value_objects.search_outcome import utc_timestamp
from infrastructure.config.settings import Settings
from infrastructure.containers import Bootstrap, bootstrap
from interfaces.api.routes import accounts_router, otp_router
from interfaces.api.routes.accounts import set_list_handler_getter
from interfaces.api.routes.otp import bad_request, set_get_otp_handler_getter


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    boot: Optional[Bootstrap] = None,
) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        settings: 可选的配置实例，默认读取环境变量
        boot: 可选的已组装容器（测试时注入）

    Returns:
        FastAPI 实例，容器挂在 app.state.bootstrap
    """
    boot = boot or bootstrap(settings)
    app_settings = boot.config.settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # 启动时加载账号，配置错误尽早暴露
        boot.infra.mailbox_account_repository()
        yield
        boot.app.otp_retrieval_service().shutdown()

    app = FastAPI(
        title=app_settings.app_name,
        description="按参考码从多个 IMAP 邮箱中并行检索 OTP",
        version=app_settings.app_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.bootstrap = boot

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # 注册 Handler Getters（连接 DI 容器到路由）
    set_get_otp_handler_getter(boot.app.get_otp_handler)
    set_list_handler_getter(boot.app.list_accounts_handler)

    app.include_router(otp_router)
    app.include_router(accounts_router)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Invalid request to {request.url.path}: {exc.errors()}")
        return bad_request("Invalid request format")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Application error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Internal server error",
                "timestamp": utc_timestamp(),
            },
        )

    @app.get("/", tags=["Health"], summary="健康检查")
    async def root():
        """服务信息"""
        return {
            "status": "OK",
            "message": app_settings.app_name,
            "version": app_settings.app_version,
            "timestamp": utc_timestamp(),
        }

    @app.get("/health", tags=["Health"])
    async def health():
        """健康检查"""
        return {"status": "healthy"}

    return app
