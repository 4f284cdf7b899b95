"""
应用容器（AppContainer）

管理应用层组件：OTP 检索服务和查询处理器。
依赖 InfraContainer 获取基础设施。
"""

from dependency_injector import containers, providers

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.handlers.otp.list_accounts_handler import ListAccountsHandler
from application.otp.services.account_search_service import AccountSearchService
from application.otp.services.otp_retrieval_service import OtpRetrievalService


class AppContainer(containers.DeclarativeContainer):
    """应用容器 - 管理应用层服务"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # 依赖基础设施容器
    infra = providers.DependenciesContainer()

    # ============ 应用服务 ============

    # 单账号搜索服务
    account_search_service = providers.Singleton(
        AccountSearchService,
        mail_client=infra.mail_client,
        normalizer=infra.message_content_normalizer,
        extractor=infra.otp_extractor,
        search_window_minutes=config.settings.provided.otp_search_window_minutes,
    )

    # OTP 检索服务（单例，持有搜索线程池）
    otp_retrieval_service = providers.Singleton(
        OtpRetrievalService,
        mailbox_repository=infra.mailbox_account_repository,
        search_service=account_search_service,
        default_timeout_ms=config.settings.provided.otp_default_timeout_ms,
        max_workers=config.settings.provided.otp_max_workers,
    )

    # ============ 查询处理器 ============

    get_otp_handler = providers.Factory(
        GetOtpHandler,
        retrieval_service=otp_retrieval_service,
    )

    list_accounts_handler = providers.Factory(
        ListAccountsHandler,
        repository=infra.mailbox_account_repository,
    )
