"""获取 OTP Handler"""

import logging
from typing import Optional

from application.otp.services.otp_retrieval_service import OtpRetrievalService
from application.queries.otp.get_otp import GetOtpQuery
from domain.otp.value_objects.search_outcome import SearchOutcome


class GetOtpHandler:
    """获取 OTP Handler

    处理 GetOtpQuery，把请求原样交给 OtpRetrievalService。
    """

    def __init__(
        self,
        retrieval_service: OtpRetrievalService,
        logger: Optional[logging.Logger] = None,
    ):
        self._retrieval_service = retrieval_service
        self._logger = logger or logging.getLogger(__name__)

    async def handle(self, query: GetOtpQuery) -> SearchOutcome:
        """处理查询请求

        Args:
            query: 查询对象

        Returns:
            聚合后的 SearchOutcome
        """
        self._logger.debug(
            f"Handling GetOtpQuery reference_code={query.reference_code} "
            f"accounts={query.account_ids} timeout_ms={query.timeout_ms}"
        )
        outcome = await self._retrieval_service.retrieve(query)

        if outcome.success:
            self._logger.info(
                f"OTP for {query.reference_code} retrieved from {outcome.account_id}"
            )
        else:
            self._logger.info(f"OTP for {query.reference_code} not retrieved: {outcome.error}")

        return outcome
