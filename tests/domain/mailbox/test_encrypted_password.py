"""Tests for EncryptedPassword value object"""

import pytest
from cryptography.fernet import Fernet

from domain.mailbox.value_objects.encrypted_password import EncryptedPassword
from domain.common.exceptions import InvalidValueObjectException


class TestEncryptedPassword:
    """EncryptedPassword 值对象测试"""

    @pytest.fixture
    def encryption_key(self) -> bytes:
        """生成测试用加密密钥"""
        return Fernet.generate_key()

    def test_round_trip_with_bytes_key(self, encryption_key: bytes):
        """测试加密后可用同一密钥解密"""
        password = EncryptedPassword.from_plain("app-password", encryption_key)

        assert password.encrypted_value != b"app-password"
        assert password.decrypt(encryption_key) == "app-password"

    def test_generated_string_key_is_usable(self):
        """测试 generate_key 生成的字符串密钥可直接使用"""
        key = EncryptedPassword.generate_key()

        assert isinstance(key, str)
        password = EncryptedPassword.from_plain("app-password", key)
        assert password.decrypt(key) == "app-password"

    def test_create_with_empty_password_raises_error(self, encryption_key: bytes):
        """测试空密码抛出异常"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            EncryptedPassword.from_plain("", encryption_key)

        assert "Password cannot be empty" in exc_info.value.message

    def test_create_with_invalid_key_raises_error(self):
        """测试非法密钥抛出异常且不泄露密码"""
        with pytest.raises(InvalidValueObjectException) as exc_info:
            EncryptedPassword.from_plain("app-password", "not-a-fernet-key")

        assert "Failed to encrypt password" in exc_info.value.message
        assert "app-password" not in str(exc_info.value)

    def test_decrypt_with_wrong_key_raises_error(self, encryption_key: bytes):
        """测试使用错误密钥解密抛出异常"""
        password = EncryptedPassword.from_plain("app-password", encryption_key)

        with pytest.raises(InvalidValueObjectException) as exc_info:
            password.decrypt(Fernet.generate_key())

        assert "Failed to decrypt password" in exc_info.value.message

    def test_repr_and_str_do_not_expose_value(self, encryption_key: bytes):
        """测试 repr / str 不暴露加密值"""
        password = EncryptedPassword.from_plain("app-password", encryption_key)

        assert repr(password) == "EncryptedPassword([ENCRYPTED])"
        assert str(password) == "[ENCRYPTED]"

    def test_empty_encrypted_value_raises_error(self):
        """测试空密文抛出异常"""
        with pytest.raises(InvalidValueObjectException):
            EncryptedPassword(encrypted_value=b"")
