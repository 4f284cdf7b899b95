"""OTP API 路由测试"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.queries.otp.get_otp import GetOtpQuery
from domain.otp.value_objects.search_outcome import SearchOutcome
from interfaces.api.routes.otp import router, set_get_otp_handler_getter


@pytest.fixture
def mock_handler() -> Mock:
    """创建 Mock Handler"""
    handler = Mock(spec=GetOtpHandler)
    handler.handle = AsyncMock(
        return_value=SearchOutcome.found(otp="123456", account_id="account1", email="a@gmail.com")
    )
    return handler


@pytest.fixture
def client(mock_handler: Mock):
    """创建测试客户端"""
    app = FastAPI()
    app.include_router(router)
    set_get_otp_handler_getter(lambda: mock_handler)
    yield TestClient(app)
    set_get_otp_handler_getter(None)


class TestPostOtp:
    """POST /otp 测试"""

    def test_found(self, client, mock_handler):
        """测试找到 OTP 返回 200"""
        response = client.post("/otp", json={"referenceCode": "ABC12"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["otp"] == "123456"
        assert data["accountId"] == "account1"
        assert data["email"] == "a@gmail.com"
        assert data["timestamp"].endswith("Z")
        mock_handler.handle.assert_awaited_once_with(GetOtpQuery(reference_code="ABC12"))

    def test_passes_accounts_and_timeout(self, client, mock_handler):
        """测试账号列表和超时被传递"""
        client.post("/otp", json={"referenceCode": "ABC12", "accountIds": ["account2"], "timeout": 5000})

        mock_handler.handle.assert_awaited_once_with(
            GetOtpQuery(reference_code="ABC12", account_ids=["account2"], timeout_ms=5000)
        )

    def test_not_found(self, client, mock_handler):
        """测试未找到返回 404"""
        mock_handler.handle.return_value = SearchOutcome.failed(
            error="No OTP found for reference code: ABC12", account_id="account1", email="a@gmail.com"
        )

        response = client.post("/otp", json={"referenceCode": "ABC12"})

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["error"] == "No OTP found for reference code: ABC12"
        assert "otp" not in response.json()

    def test_missing_reference_code(self, client, mock_handler):
        """测试缺少参考码返回 400"""
        response = client.post("/otp", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Reference code is required"
        mock_handler.handle.assert_not_called()

    @pytest.mark.parametrize("code", ["ABC1", "ABC123"])
    def test_wrong_length(self, client, mock_handler, code):
        """测试长度错误返回 400"""
        response = client.post("/otp", json={"referenceCode": code})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Reference code must be exactly 5 characters",
            "timestamp": response.json()["timestamp"],
        }
        mock_handler.handle.assert_not_called()

    def test_non_alphanumeric(self, client, mock_handler):
        """测试非字母数字返回 400"""
        response = client.post("/otp", json={"referenceCode": "AB-12"})

        assert response.status_code == 400
        mock_handler.handle.assert_not_called()

    def test_handler_not_configured(self, client):
        """测试 handler 未配置返回 500"""
        set_get_otp_handler_getter(None)

        response = client.post("/otp", json={"referenceCode": "ABC12"})

        assert response.status_code == 500


class TestGetOtp:
    """GET /otp/{referenceCode} 测试"""

    def test_found(self, client, mock_handler):
        """测试 GET 方式检索"""
        response = client.get("/otp/ABC12")

        assert response.status_code == 200
        assert response.json()["otp"] == "123456"
        mock_handler.handle.assert_awaited_once_with(GetOtpQuery(reference_code="ABC12"))

    def test_accounts_and_timeout_query(self, client, mock_handler):
        """测试逗号分隔的账号和超时"""
        client.get("/otp/ABC12", params={"accounts": "account1, account2,", "timeout": "1500"})

        mock_handler.handle.assert_awaited_once_with(
            GetOtpQuery(reference_code="ABC12", account_ids=["account1", "account2"], timeout_ms=1500)
        )

    def test_wrong_length(self, client, mock_handler):
        """测试路径参数长度错误"""
        response = client.get("/otp/ABCDEF")

        assert response.status_code == 400
        assert response.json()["error"] == "Reference code must be exactly 5 characters"
        mock_handler.handle.assert_not_called()
