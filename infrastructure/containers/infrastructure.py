"""
基础设施容器（InfraContainer）

管理所有基础设施组件：账号注册表、IMAP 客户端、MIME 解析器等。
依赖 ConfigContainer 获取配置。
"""

from dependency_injector import containers, providers

from domain.mail.services.message_content_normalizer import MessageContentNormalizer
from domain.otp.services.otp_extractor import OtpExtractor
from infrastructure.mail.services.email_mime_parser_impl import EmailMimeParserImpl
from infrastructure.mail.services.imap_mail_client_impl import ImapMailClientImpl
from infrastructure.mailbox.repositories.in_memory_mailbox_account_repository import (
    InMemoryMailboxAccountRepository,
)


class InfraContainer(containers.DeclarativeContainer):
    """基础设施容器 - 管理技术实现"""

    # 依赖配置容器
    config = providers.DependenciesContainer()

    # ============ 仓储 ============

    # 邮箱账号注册表（单例，启动时加载一次）
    mailbox_account_repository = providers.Singleton(
        InMemoryMailboxAccountRepository.from_settings,
        account_settings=config.settings.provided.account_settings.call(),
        encryption_key=config.encryption_key,
    )

    # ============ 邮件服务 ============

    # IMAP 客户端（无状态，每次搜索打开独立会话）
    mail_client = providers.Singleton(
        ImapMailClientImpl,
        encryption_key=config.encryption_key,
        timeout=config.settings.provided.imap_connect_timeout,
    )

    # MIME 解析器
    mime_parser = providers.Singleton(EmailMimeParserImpl)

    # ============ 领域服务 ============

    message_content_normalizer = providers.Singleton(
        MessageContentNormalizer,
        parser=mime_parser,
    )

    otp_extractor = providers.Singleton(OtpExtractor)
