"""邮箱账号实体"""

from dataclasses import dataclass, field
from typing import Optional, Union

from domain.common.exceptions import InvalidOperationException
from domain.mailbox.value_objects.imap_config import ImapConfig
from domain.mailbox.value_objects.encrypted_password import EncryptedPassword


@dataclass(frozen=True)
class MailboxAccount:
    """
    邮箱账号实体

    描述一个可被搜索 OTP 的邮箱：IMAP 连接参数、登录凭据、展示用邮箱地址
    以及是否启用。账号在进程启动时从配置加载，之后不可变。

    Attributes:
        id: 账号唯一标识（如 "account1"）
        imap_config: IMAP 服务器配置
        username: IMAP 登录用户名
        encrypted_password: 加密存储的密码，未配置密码时为 None
        email: 展示用邮箱地址
        is_active: 是否启用
    """

    id: str
    imap_config: ImapConfig
    username: str = ""
    encrypted_password: Optional[EncryptedPassword] = field(default=None, repr=False)
    email: str = ""
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise InvalidOperationException(
                operation="create_mailbox_account",
                reason="Account id cannot be empty"
            )

    @classmethod
    def create(
        cls,
        id: str,
        imap_config: ImapConfig,
        username: str,
        password: str,
        encryption_key: Union[str, bytes],
        email: Optional[str] = None,
        is_active: bool = True,
    ) -> "MailboxAccount":
        """
        工厂方法：创建邮箱账号

        Args:
            id: 账号 ID
            imap_config: IMAP 配置
            username: 登录用户名
            password: 明文密码（将被加密保存，可为空）
            encryption_key: 加密密钥
            email: 展示用邮箱地址，默认与用户名相同
            is_active: 是否启用

        Returns:
            MailboxAccount 实例
        """
        encrypted_password = (
            EncryptedPassword.from_plain(password, encryption_key) if password else None
        )
        return cls(
            id=id,
            imap_config=imap_config,
            username=username,
            encrypted_password=encrypted_password,
            email=email if email is not None else username,
            is_active=is_active,
        )

    @property
    def has_credentials(self) -> bool:
        """用户名和密码是否都已配置"""
        return bool(self.username) and self.encrypted_password is not None

    @property
    def is_searchable(self) -> bool:
        """启用且凭据完整的账号才会被默认搜索"""
        return self.is_active and self.has_credentials

    def get_decrypted_password(self, encryption_key: Union[str, bytes]) -> str:
        """
        获取解密后的密码

        Raises:
            InvalidOperationException: 如果没有设置密码
        """
        if self.encrypted_password is None:
            raise InvalidOperationException(
                operation="get_decrypted_password",
                reason="No password has been set"
            )

        return self.encrypted_password.decrypt(encryption_key)
