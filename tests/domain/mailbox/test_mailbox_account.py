"""Tests for MailboxAccount entity"""

import pytest

from domain.common.exceptions import InvalidOperationException
from domain.mailbox.entities.mailbox_account import MailboxAccount
from domain.mailbox.value_objects.imap_config import ImapConfig


TEST_ENCRYPTION_KEY = "xiJ-vQsN3KaewjOgc0qvuNE831TgyRAPSs-8X14qHes="


def make_account(**overrides) -> MailboxAccount:
    kwargs = {
        "id": "account1",
        "imap_config": ImapConfig(server="imap.gmail.com"),
        "username": "user@gmail.com",
        "password": "app-password",
        "encryption_key": TEST_ENCRYPTION_KEY,
    }
    kwargs.update(overrides)
    return MailboxAccount.create(**kwargs)


class TestMailboxAccountCreate:
    """创建测试"""

    def test_create_encrypts_password(self):
        """测试密码被加密保存"""
        account = make_account()

        assert account.encrypted_password is not None
        assert account.get_decrypted_password(TEST_ENCRYPTION_KEY) == "app-password"

    def test_email_defaults_to_username(self):
        """测试邮箱地址默认等于用户名"""
        assert make_account().email == "user@gmail.com"
        assert make_account(email="alias@gmail.com").email == "alias@gmail.com"

    def test_empty_password_is_stored_as_none(self):
        """测试空密码不加密"""
        account = make_account(password="")

        assert account.encrypted_password is None
        assert account.has_credentials is False

    def test_empty_id_raises_error(self):
        """测试空 ID 抛出异常"""
        with pytest.raises(InvalidOperationException):
            make_account(id="  ")

    def test_repr_does_not_expose_password(self):
        """测试 repr 不包含密码"""
        assert "app-password" not in repr(make_account())

    def test_is_immutable(self):
        """测试实体不可变"""
        account = make_account()

        with pytest.raises(Exception):  # FrozenInstanceError
            account.is_active = False


class TestMailboxAccountSearchable:
    """可搜索状态测试"""

    def test_active_with_credentials_is_searchable(self):
        assert make_account().is_searchable is True

    def test_inactive_is_not_searchable(self):
        assert make_account(is_active=False).is_searchable is False

    @pytest.mark.parametrize("overrides", [{"username": ""}, {"password": ""}])
    def test_missing_credentials_is_not_searchable(self, overrides):
        assert make_account(**overrides).is_searchable is False

    def test_get_decrypted_password_without_password_raises_error(self):
        """测试未设置密码时解密抛出异常"""
        with pytest.raises(InvalidOperationException) as exc_info:
            make_account(password="").get_decrypted_password(TEST_ENCRYPTION_KEY)

        assert "No password has been set" in exc_info.value.message
