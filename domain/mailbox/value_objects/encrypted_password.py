"""加密密码值对象"""

from dataclasses import dataclass
from typing import Union

from cryptography.fernet import Fernet, InvalidToken

from domain.common.base_value_object import BaseValueObject
from domain.common.exceptions import InvalidValueObjectException


def _fernet(encryption_key: Union[str, bytes]) -> Fernet:
    key = encryption_key if isinstance(encryption_key, bytes) else encryption_key.encode()
    return Fernet(key)


@dataclass(frozen=True)
class EncryptedPassword(BaseValueObject):
    """
    加密密码值对象

    账号密码在进程内存中以 Fernet 密文保存，只在登录 IMAP 时解密，
    避免明文出现在 repr、日志或异常信息中。

    Attributes:
        encrypted_value: 加密后的密码字节
    """

    encrypted_value: bytes

    def validate(self) -> None:
        """验证加密密码的有效性"""
        if not self.encrypted_value:
            raise InvalidValueObjectException(
                value_object_type="EncryptedPassword",
                value=None,
                reason="Encrypted password cannot be empty"
            )

    @staticmethod
    def generate_key() -> str:
        """生成新的 Fernet 密钥（base64 字符串）"""
        return Fernet.generate_key().decode("ascii")

    @classmethod
    def from_plain(
        cls,
        plain_password: str,
        encryption_key: Union[str, bytes]
    ) -> "EncryptedPassword":
        """
        从明文密码创建加密密码值对象

        Args:
            plain_password: 明文密码
            encryption_key: Fernet 加密密钥（32 字节 base64 编码）

        Returns:
            EncryptedPassword 实例

        Raises:
            InvalidValueObjectException: 如果密码为空或加密失败
        """
        if not plain_password:
            raise InvalidValueObjectException(
                value_object_type="EncryptedPassword",
                value=None,
                reason="Password cannot be empty"
            )

        try:
            encrypted = _fernet(encryption_key).encrypt(plain_password.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise InvalidValueObjectException(
                value_object_type="EncryptedPassword",
                value="[REDACTED]",
                reason=f"Failed to encrypt password: {e}"
            ) from e
        return cls(encrypted_value=encrypted)

    def decrypt(self, encryption_key: Union[str, bytes]) -> str:
        """
        解密获取明文密码

        Raises:
            InvalidValueObjectException: 密钥错误或密文损坏
        """
        try:
            return _fernet(encryption_key).decrypt(self.encrypted_value).decode("utf-8")
        except InvalidToken as e:
            raise InvalidValueObjectException(
                value_object_type="EncryptedPassword",
                value="[ENCRYPTED]",
                reason="Failed to decrypt password: invalid key or corrupted data"
            ) from e
        except (ValueError, TypeError) as e:
            raise InvalidValueObjectException(
                value_object_type="EncryptedPassword",
                value="[ENCRYPTED]",
                reason=f"Failed to decrypt password: {e}"
            ) from e

    def __repr__(self) -> str:
        """安全的字符串表示，不暴露加密值"""
        return "EncryptedPassword([ENCRYPTED])"

    def __str__(self) -> str:
        return "[ENCRYPTED]"
