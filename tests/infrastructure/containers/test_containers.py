"""依赖注入容器测试"""

import pytest

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.handlers.otp.list_accounts_handler import ListAccountsHandler
from application.otp.services.otp_retrieval_service import OtpRetrievalService
from infrastructure.config.settings import EmailAccountSettings, Settings
from infrastructure.containers import bootstrap
from infrastructure.mail.services.imap_mail_client_impl import ImapMailClientImpl
from infrastructure.mailbox.repositories.in_memory_mailbox_account_repository import (
    InMemoryMailboxAccountRepository,
)


TEST_ENCRYPTION_KEY = "xiJ-vQsN3KaewjOgc0qvuNE831TgyRAPSs-8X14qHes="


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        encryption_key=TEST_ENCRYPTION_KEY,
        otp_default_timeout_ms=1234,
        email_accounts=[
            EmailAccountSettings(id="account1", user="a@gmail.com", password="p"),
            EmailAccountSettings(id="account2", provider="outlook", user="b@outlook.com", password="p"),
        ],
    )


@pytest.fixture
def boot(settings):
    boot = bootstrap(settings)
    yield boot
    boot.app.otp_retrieval_service().shutdown()


class TestBootstrap:
    """容器组装测试"""

    def test_settings_override(self, boot, settings):
        """测试注入的配置被使用"""
        assert boot.config.settings() is settings
        assert boot.config.encryption_key() == TEST_ENCRYPTION_KEY

    def test_repository_loaded_from_settings(self, boot):
        """测试账号注册表从配置加载"""
        repository = boot.infra.mailbox_account_repository()

        assert isinstance(repository, InMemoryMailboxAccountRepository)
        assert [a.id for a in repository.list_active()] == ["account1", "account2"]
        assert repository is boot.infra.mailbox_account_repository()

    def test_mail_client(self, boot):
        assert isinstance(boot.infra.mail_client(), ImapMailClientImpl)

    def test_retrieval_service_is_singleton(self, boot):
        """测试检索服务是单例并使用配置的超时"""
        service = boot.app.otp_retrieval_service()

        assert isinstance(service, OtpRetrievalService)
        assert service is boot.app.otp_retrieval_service()
        assert service.default_timeout_ms == 1234

    def test_handlers(self, boot):
        assert isinstance(boot.app.get_otp_handler(), GetOtpHandler)
        assert isinstance(boot.app.list_accounts_handler(), ListAccountsHandler)

    def test_generated_key_when_not_configured(self, settings):
        """测试未配置密钥时生成一个并在进程内复用"""
        settings.encryption_key = ""
        boot = bootstrap(settings)
        try:
            key = boot.config.encryption_key()
            assert key
            assert boot.config.encryption_key() == key
        finally:
            boot.app.otp_retrieval_service().shutdown()
