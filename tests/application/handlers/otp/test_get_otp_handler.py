"""GetOtpHandler 单元测试"""

from unittest.mock import AsyncMock, Mock

import pytest

from application.handlers.otp.get_otp_handler import GetOtpHandler
from application.otp.services.otp_retrieval_service import OtpRetrievalService
from application.queries.otp.get_otp import GetOtpQuery
from domain.otp.value_objects.search_outcome import SearchOutcome


@pytest.fixture
def retrieval_service() -> Mock:
    service = Mock(spec=OtpRetrievalService)
    service.retrieve = AsyncMock()
    return service


class TestGetOtpHandler:
    """GetOtpHandler 测试"""

    @pytest.mark.asyncio
    async def test_returns_service_outcome(self, retrieval_service):
        """测试返回检索服务的结果"""
        expected = SearchOutcome.found(otp="123456", account_id="account1", email="a@example.com")
        retrieval_service.retrieve.return_value = expected
        handler = GetOtpHandler(retrieval_service=retrieval_service)
        query = GetOtpQuery(reference_code="ABC12", account_ids=["account1"], timeout_ms=5000)

        outcome = await handler.handle(query)

        assert outcome is expected
        retrieval_service.retrieve.assert_awaited_once_with(query)

    @pytest.mark.asyncio
    async def test_failure_is_returned_unchanged(self, retrieval_service):
        """测试失败结果原样返回"""
        expected = SearchOutcome.failed(error="No active email accounts found")
        retrieval_service.retrieve.return_value = expected

        outcome = await GetOtpHandler(retrieval_service).handle(GetOtpQuery(reference_code="ABC12"))

        assert outcome is expected
