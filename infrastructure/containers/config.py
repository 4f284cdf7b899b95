"""
配置容器（ConfigContainer）

提供 Settings 以及由配置派生的值。
"""

from dependency_injector import containers, providers

from domain.mailbox.value_objects.encrypted_password import EncryptedPassword
from infrastructure.config.settings import Settings, get_settings


def resolve_encryption_key(settings: Settings) -> str:
    """配置了密钥则使用，否则为本进程生成一个"""
    return settings.encryption_key or EncryptedPassword.generate_key()


class ConfigContainer(containers.DeclarativeContainer):
    """配置容器"""

    settings = providers.Singleton(get_settings)

    # 账号密码在内存中的加密密钥（单例，整个进程共用）
    encryption_key = providers.Singleton(resolve_encryption_key, settings=settings)
