"""IMAP 配置值对象"""

from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException


@dataclass(frozen=True)
class ImapConfig(BaseValueObject):
    """
    IMAP 服务器配置值对象

    封装 IMAP 服务器连接所需的配置信息。

    Attributes:
        server: IMAP 服务器地址
        port: IMAP 服务器端口，默认 993 (SSL/TLS)
        use_ssl: 是否使用 SSL/TLS 加密，默认 True
    """

    server: str
    port: int = 993
    use_ssl: bool = True

    # 常见邮箱服务商的 IMAP 配置 (server, port, use_ssl)
    PROVIDERS: ClassVar[Dict[str, Tuple[str, int, bool]]] = {
        "gmail": ("imap.gmail.com", 993, True),
        "outlook": ("outlook.office365.com", 993, True),
        "yahoo": ("imap.mail.yahoo.com", 993, True),
        "apple": ("imap.mail.me.com", 993, True),
    }

    def validate(self) -> None:
        """验证 IMAP 配置的有效性"""
        if not self.server or not self.server.strip():
            raise InvalidValueObjectException(
                value_object_type="ImapConfig",
                value=self.server,
                reason="IMAP server cannot be empty"
            )

        if not 1 <= self.port <= 65535:
            raise InvalidValueObjectException(
                value_object_type="ImapConfig",
                value=self.port,
                reason=f"Invalid port number: {self.port}. Must be between 1 and 65535"
            )

    @classmethod
    def for_provider(cls, provider: str) -> "ImapConfig":
        """
        根据服务商名称创建配置

        Args:
            provider: 服务商名称（gmail, outlook, yahoo, apple），大小写不敏感

        Returns:
            ImapConfig 实例

        Raises:
            InvalidValueObjectException: 未知的服务商
        """
        preset = cls.PROVIDERS.get(provider.strip().lower())
        if preset is None:
            raise InvalidValueObjectException(
                value_object_type="ImapConfig",
                value=provider,
                reason=f"Unknown IMAP provider. Known providers: {', '.join(sorted(cls.PROVIDERS))}"
            )
        server, port, use_ssl = preset
        return cls(server=server, port=port, use_ssl=use_ssl)

    @property
    def connection_string(self) -> str:
        """返回连接字符串格式"""
        protocol = "imaps" if self.use_ssl else "imap"
        return f"{protocol}://{self.server}:{self.port}"
