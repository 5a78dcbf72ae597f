"""
Eligibility oracle backed by the external policy service.

The policy service answers, per company and feature, whether the company is
blocked (for instance because of its plan tier). Any failure to get a clear
answer is a collaborator failure and raises EligibilityCheckException.
"""

import logging
from typing import Optional

import httpx

from champion_store.core.config import Settings, get_settings
from champion_store.domain.models import CompanyDomain
from champion_store.utils.error_handler import EligibilityCheckException

logger = logging.getLogger(__name__)


class PolicyServiceEligibilityOracle:
    """Checks company eligibility through the policy service HTTP API."""

    def __init__(
        self,
        base_url: str,
        feature_key: str = "champion_store",
        headers: Optional[dict] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Policy service root URL
            feature_key: Feature whose blocking is queried
            headers: Extra request headers (authentication, user agent)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.feature_key = feature_key
        self.headers = headers or {}
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "PolicyServiceEligibilityOracle":
        """Create the oracle from application settings."""
        settings = settings or get_settings()
        if not settings.POLICY_SERVICE_URL:
            raise ValueError("POLICY_SERVICE_URL must be configured to check company eligibility")
        return cls(
            base_url=settings.POLICY_SERVICE_URL,
            feature_key=settings.POLICY_FEATURE_KEY,
            headers=settings.get_policy_service_headers(),
            timeout=settings.POLICY_SERVICE_TIMEOUT,
            transport=transport,
        )

    def _company_url(self, company_id: str) -> str:
        return f"{self.base_url}/companies/{company_id}/features/{self.feature_key}"

    async def is_blocked(self, company: CompanyDomain) -> bool:
        """
        Ask the policy service whether the company is blocked from the feature.

        Raises:
            EligibilityCheckException: On timeout, transport error, non-2xx
                response or a body without a boolean ``blocked`` field
        """
        url = self._company_url(company.id)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers, transport=self._transport
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise EligibilityCheckException(
                message=f"Policy service timeout for company {company.id}",
                company_id=company.id,
            ) from e
        except httpx.HTTPError as e:
            raise EligibilityCheckException(
                message=f"Policy service unreachable for company {company.id}: {e}",
                company_id=company.id,
            ) from e

        if response.status_code != 200:
            raise EligibilityCheckException(
                message=f"Policy service error {response.status_code} for company {company.id}",
                company_id=company.id,
                status_code=response.status_code,
            )

        try:
            blocked = response.json().get("blocked")
        except (ValueError, AttributeError) as e:
            raise EligibilityCheckException(
                message=f"Malformed policy service response for company {company.id}",
                company_id=company.id,
                status_code=response.status_code,
            ) from e

        if not isinstance(blocked, bool):
            raise EligibilityCheckException(
                message=f"Policy service response for company {company.id} has no boolean 'blocked' field",
                company_id=company.id,
                status_code=response.status_code,
            )

        logger.debug(f"Company {company.id} blocked={blocked} for feature {self.feature_key}")
        return blocked
