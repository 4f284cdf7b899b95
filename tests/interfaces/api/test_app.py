"""FastAPI 应用端到端测试"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from application.handlers.otp.list_accounts_handler import ListAccountsHandler
from domain.mail.services.mail_client import ImapAuthenticationError
from infrastructure.config.settings import EmailAccountSettings, Settings
from infrastructure.containers import bootstrap
from interfaces.api import create_app


TEST_ENCRYPTION_KEY = "xiJ-vQsN3KaewjOgc0qvuNE831TgyRAPSs-8X14qHes="


def make_settings(*accounts: EmailAccountSettings) -> Settings:
    return Settings(
        _env_file=None,
        app_env="test",
        encryption_key=TEST_ENCRYPTION_KEY,
        otp_default_timeout_ms=2000,
        email_accounts=list(accounts),
        email_account_slots=0,
    )


@pytest.fixture
def client():
    settings = make_settings(
        EmailAccountSettings(id="account1", user="a@gmail.com", password="p"),
        EmailAccountSettings(id="account2", user="b@gmail.com", password="p", is_active=False),
    )
    with TestClient(create_app(settings), raise_server_exceptions=False) as client:
        yield client


class TestHealth:
    """健康检查测试"""

    def test_root(self, client):
        data = client.get("/").json()

        assert data["status"] == "OK"
        assert data["message"] == "Email OTP Retrieval API (IMAP)"
        assert data["version"] == "1.0.0"
        assert data["timestamp"].endswith("Z")

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestErrors:
    """错误响应测试"""

    def test_invalid_json_body(self, client):
        """测试请求体格式错误返回 400"""
        response = client.post("/otp", content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request format"

    def test_invalid_timeout(self, client):
        """测试非法超时返回 400"""
        response = client.get("/otp/ABC12", params={"timeout": "0"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request format"

    def test_unhandled_error(self, client):
        """测试未处理异常返回 500"""
        with patch.object(ListAccountsHandler, "handle", side_effect=RuntimeError("boom")):
            response = client.get("/accounts")

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"


class TestEndToEnd:
    """经过 DI 容器的完整流程"""

    def test_accounts_lists_only_active(self, client):
        data = client.get("/accounts").json()

        assert data["count"] == 1
        assert data["accounts"] == [{"id": "account1", "email": "a@gmail.com", "isActive": True}]

    def test_no_active_accounts(self):
        """测试没有可用账号时返回 404"""
        app = create_app(boot=bootstrap(make_settings()))

        with TestClient(app) as client:
            response = client.post("/otp", json={"referenceCode": "ABC12"})

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"] == "No active email accounts found"

    def test_authentication_failure_is_reported(self, client):
        """测试 IMAP 认证失败返回 404 和账号错误"""
        mail_client = client.app.state.bootstrap.infra.mail_client()
        with patch.object(
            mail_client,
            "open_session",
            side_effect=ImapAuthenticationError("a@gmail.com", "invalid credentials"),
        ):
            response = client.get("/otp/ABC12")

        assert response.status_code == 404
        data = response.json()
        assert data["accountId"] == "account1"
        assert data["error"].startswith("Error searching account account1: Authentication failed")
