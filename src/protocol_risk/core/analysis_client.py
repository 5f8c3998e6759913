"""
Analysis Client
Abstracts the external risk scoring service behind a single async call.
"""

import asyncio
import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from protocol_risk.core.errors import AnalysisError
from protocol_risk.utils.http_client import get_async_client
from protocol_risk.utils.schema import ProtocolQuery, RiskAssessment

logger = logging.getLogger(__name__)

DEFAULT_SIMULATED_DELAY = 2.0

# Canned response returned by the simulated service
SAMPLE_ASSESSMENT: Dict[str, Any] = {
    "score": 85,
    "level": "medium",
    "findings": [
        {
            "id": "1",
            "title": "Smart Contract Audit Status",
            "description": "The protocol has not undergone a complete security audit by a reputable firm.",
            "severity": "critical",
        },
        {
            "id": "2",
            "title": "Token Economics",
            "description": "Complex tokenomics with potential inflation risks and unclear vesting schedules.",
            "severity": "warning",
        },
        {
            "id": "3",
            "title": "Governance Structure",
            "description": "Decentralized governance implementation needs review for potential centralization risks.",
            "severity": "info",
        },
    ],
    "recommendations": [
        {
            "id": "1",
            "title": "Wait for Audit Completion",
            "description": "Hold off on large investments until a complete security audit is performed and published.",
        },
        {
            "id": "2",
            "title": "Review Documentation",
            "description": "Thoroughly examine the whitepaper, focusing on tokenomics and vesting schedules.",
        },
        {
            "id": "3",
            "title": "Start Small",
            "description": "Begin with minimal test transactions to understand protocol behavior.",
        },
    ],
    "metrics": {
        "tvl": "$5.2M",
        "holders": 12500,
        "transactions": 45000,
        "age": "6 months",
    },
}


class AnalysisClient(ABC):
    """Base class for risk analysis service clients."""

    @abstractmethod
    async def submit(self, query: ProtocolQuery) -> RiskAssessment:
        """
        Request a risk assessment for a protocol.

        Raises:
            AnalysisError: If the service cannot produce an assessment
        """

    async def aclose(self) -> None:
        """Release any resources held by the client."""


class SimulatedAnalysisClient(AnalysisClient):
    """Offline client that answers with a fixed assessment after a delay."""

    def __init__(
        self,
        delay: float = DEFAULT_SIMULATED_DELAY,
        payload: Optional[Dict[str, Any]] = None,
    ):
        self.delay = delay
        self.payload = payload if payload is not None else SAMPLE_ASSESSMENT
        self.calls = 0

    async def submit(self, query: ProtocolQuery) -> RiskAssessment:
        self.calls += 1
        logger.debug(f"Simulating analysis of '{query.value}' ({self.delay:.1f}s)")
        await asyncio.sleep(self.delay)
        try:
            return RiskAssessment.model_validate(copy.deepcopy(self.payload))
        except ValidationError as e:
            raise AnalysisError("Simulated payload is not a valid assessment", cause=e)


class HttpAnalysisClient(AnalysisClient):
    """Client for a remote scoring service speaking JSON over HTTP."""

    ENDPOINT = "/assessments"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Shared pooled client, closed by close_async_client() on shutdown
            self._client = get_async_client(timeout=self.timeout)
        return self._client

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def submit(self, query: ProtocolQuery) -> RiskAssessment:
        url = f"{self.base_url}{self.ENDPOINT}"
        logger.info(f"Requesting risk assessment for '{query.value}'")

        try:
            response = await self._get_client().post(
                url, json={"protocol": query.value}, headers=self._headers()
            )
        except httpx.TimeoutException as e:
            raise AnalysisError("Analysis service timed out", cause=e)
        except httpx.HTTPError as e:
            raise AnalysisError(f"Could not reach analysis service: {e}", cause=e)

        if response.status_code >= 400:
            raise AnalysisError(
                _error_message(response), status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AnalysisError(
                "Analysis service returned invalid JSON",
                status_code=response.status_code,
                cause=e,
            )

        if isinstance(data, dict) and isinstance(data.get("assessment"), dict):
            data = data["assessment"]

        try:
            return RiskAssessment.model_validate(data)
        except ValidationError as e:
            logger.debug(f"Rejected assessment payload: {e}")
            raise AnalysisError(
                "Analysis service returned a malformed assessment",
                status_code=response.status_code,
                cause=e,
            )

    async def aclose(self) -> None:
        self._client = None


def _error_message(response: httpx.Response) -> str:
    """Pull a human readable message out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("detail", "error", "message"):
            if isinstance(body.get(key), str):
                return body[key]

    return f"Analysis service responded with {response.status_code}"


def create_client(config, api_key: Optional[str] = None) -> AnalysisClient:
    """
    Build the analysis client described by a ClientConfig.

    A configured service URL is only used when simulation is switched off.
    """
    if config.simulate or not config.service_url:
        if not config.simulate:
            logger.warning("No service URL configured, falling back to simulated analysis")
        return SimulatedAnalysisClient(delay=config.simulated_delay)

    return HttpAnalysisClient(
        base_url=config.service_url,
        api_key=api_key,
        timeout=config.request_timeout,
    )
