"""Settings 单元测试"""

import pytest

from infrastructure.config.settings import EmailAccountSettings, Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, email_accounts=[])


class TestSettingsDefaults:
    """默认值测试"""

    def test_defaults(self, settings):
        assert settings.app_name == "Email OTP Retrieval API (IMAP)"
        assert settings.otp_default_timeout_ms == 30000
        assert settings.otp_search_window_minutes == 10
        assert settings.email_account_slots == 2


class TestNumberedAccounts:
    """编号环境变量测试"""

    def test_two_numbered_accounts(self, settings):
        """测试读取 account1 / account2"""
        environ = {
            "EMAIL_USER_1": "first@gmail.com",
            "EMAIL_PASS_1": "pass1",
            "IMAP_HOST_2": "outlook.office365.com",
            "IMAP_PORT_2": "143",
            "IMAP_SECURE_2": "false",
            "EMAIL_USER_2": "login2",
            "EMAIL_PASS_2": "pass2",
            "EMAIL_ADDRESS_2": "second@outlook.com",
        }

        accounts = settings.account_settings(environ)

        assert [a.id for a in accounts] == ["account1", "account2"]
        first, second = accounts
        assert first.user == "first@gmail.com"
        assert first.email == "first@gmail.com"
        assert first.host is None
        assert first.port == 993
        assert first.secure is True
        assert second.host == "outlook.office365.com"
        assert second.port == 143
        assert second.secure is False
        assert second.email == "second@outlook.com"

    def test_missing_credentials_produce_empty_entries(self, settings):
        """测试未配置的槽位仍然存在但凭据为空"""
        accounts = settings.account_settings({})

        assert [a.id for a in accounts] == ["account1", "account2"]
        assert all(a.user == "" and a.password == "" for a in accounts)

    def test_provider_and_active_flag(self, settings):
        """测试 provider 和启用开关"""
        accounts = settings.account_settings({
            "IMAP_PROVIDER_1": "yahoo",
            "EMAIL_ACTIVE_1": "0",
        })

        assert accounts[0].provider == "yahoo"
        assert accounts[0].is_active is False
        assert accounts[1].is_active is True

    def test_slot_count(self):
        """测试槽位数量可配置"""
        settings = Settings(_env_file=None, email_accounts=[], email_account_slots=3)

        assert [a.id for a in settings.account_settings({})] == ["account1", "account2", "account3"]


class TestJsonAccounts:
    """EMAIL_ACCOUNTS 列表测试"""

    def test_explicit_list_wins(self):
        """测试显式列表优先于编号变量"""
        settings = Settings(
            _env_file=None,
            email_accounts=[EmailAccountSettings(id="work", provider="outlook", user="me@corp.com", password="x")],
        )

        accounts = settings.account_settings({"EMAIL_USER_1": "ignored@gmail.com"})

        assert [a.id for a in accounts] == ["work"]

    def test_from_environment_json(self, monkeypatch):
        """测试从环境变量读取 JSON"""
        monkeypatch.setenv(
            "EMAIL_ACCOUNTS",
            '[{"id": "a", "user": "a@gmail.com", "password": "p"}, {"id": "b", "host": "imap.example.com"}]',
        )

        settings = Settings(_env_file=None)

        assert [a.id for a in settings.account_settings()] == ["a", "b"]
        assert settings.email_accounts[1].host == "imap.example.com"

    def test_password_not_in_repr(self):
        """测试 repr 不包含密码"""
        item = EmailAccountSettings(id="a", user="a@gmail.com", password="secret-pass")

        assert "secret-pass" not in repr(item)
