"""
依赖注入容器

用法：
    from infrastructure.containers import bootstrap

    boot = bootstrap()
    handler = boot.app.get_otp_handler()
"""

from typing import Optional

from dependency_injector import providers

from infrastructure.config.settings import Settings
from infrastructure.containers.application import AppContainer
from infrastructure.containers.config import ConfigContainer
from infrastructure.containers.infrastructure import InfraContainer


class Bootstrap:
    """
    容器组装结果

    Attributes:
        config: 配置容器
        infra: 基础设施容器
        app: 应用容器
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.config = ConfigContainer()
        if settings is not None:
            self.config.settings.override(providers.Object(settings))

        self.infra = InfraContainer(config=self.config)
        self.app = AppContainer(config=self.config, infra=self.infra)


def bootstrap(settings: Optional[Settings] = None) -> Bootstrap:
    """
    组装配置、基础设施、应用三个容器

    Args:
        settings: 可选的配置实例（测试时注入），默认读取环境变量
    """
    return Bootstrap(settings)


__all__ = [
    "AppContainer",
    "Bootstrap",
    "ConfigContainer",
    "InfraContainer",
    "bootstrap",
]
