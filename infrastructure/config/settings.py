"""
应用配置管理

使用 pydantic-settings 管理环境变量和配置
"""

import os
from pathlib import Path
from typing import Dict, List, Literal, Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmailAccountSettings(BaseModel):
    """
    单个邮箱账号配置

    host 为空时使用 provider 预设（gmail/outlook/yahoo/apple）。
    """

    id: str
    provider: Optional[str] = None
    host: Optional[str] = None
    port: int = 993
    secure: bool = True
    user: str = ""
    password: str = Field(default="", repr=False)
    email: Optional[str] = None
    is_active: bool = True


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseSettings):
    """
    应用配置类

    自动从环境变量和 .env 文件读取配置
    """

    # ========== 应用环境 ==========
    app_env: Literal["test", "dev", "staging", "prod"] = "dev"
    app_name: str = "Email OTP Retrieval API (IMAP)"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    # ========== 日志配置 ==========
    log_level: str = "INFO"
    log_file: str = ""

    # ========== 安全 ==========
    # 用于在内存中加密账号密码的 Fernet 密钥，留空则每次启动随机生成
    encryption_key: str = ""

    # ========== OTP 检索 ==========
    otp_default_timeout_ms: int = 30000
    otp_search_window_minutes: int = 10
    otp_max_workers: int = 16
    imap_connect_timeout: float = 30.0

    # ========== 邮箱账号 ==========
    # EMAIL_ACCOUNTS 为 JSON 列表；未设置时读取编号变量 EMAIL_USER_1 ... EMAIL_USER_n
    email_accounts: List[EmailAccountSettings] = Field(default_factory=list)
    email_account_slots: int = 2

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 忽略未定义的环境变量
    )

    @property
    def is_test(self) -> bool:
        """是否为测试环境"""
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        """是否为生产环境"""
        return self.app_env == "prod"

    def account_settings(self, environ: Optional[Mapping[str, str]] = None) -> List[EmailAccountSettings]:
        """
        获取邮箱账号配置（按声明顺序）

        Args:
            environ: 编号变量来源，默认为 .env 文件 + 进程环境变量（后者优先）

        Returns:
            账号配置列表
        """
        if self.email_accounts:
            return list(self.email_accounts)

        env = dict(environ) if environ is not None else self._numbered_env_source()
        return [
            self._numbered_account(env, index)
            for index in range(1, self.email_account_slots + 1)
        ]

    def _numbered_env_source(self) -> Dict[str, str]:
        env: Dict[str, str] = {}
        env_file = self.model_config.get("env_file")
        if isinstance(env_file, str) and Path(env_file).is_file():
            env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        env.update(os.environ)
        return env

    @staticmethod
    def _numbered_account(env: Mapping[str, str], index: int) -> EmailAccountSettings:
        user = env.get(f"EMAIL_USER_{index}", "")
        return EmailAccountSettings(
            id=f"account{index}",
            provider=env.get(f"IMAP_PROVIDER_{index}") or None,
            host=env.get(f"IMAP_HOST_{index}") or None,
            port=int(env.get(f"IMAP_PORT_{index}") or 993),
            secure=_env_bool(env.get(f"IMAP_SECURE_{index}"), True),
            user=user,
            password=env.get(f"EMAIL_PASS_{index}", ""),
            email=env.get(f"EMAIL_ADDRESS_{index}") or user,
            is_active=_env_bool(env.get(f"EMAIL_ACTIVE_{index}"), True),
        )


# 全局配置实例（单例）
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    获取配置实例（单例模式）

    Returns:
        Settings 实例
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
