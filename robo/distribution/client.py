"""
HIT Client

Async HTTP adapter for the HIT (shareable task link) creation endpoint.

Transport, timeouts and connection pooling belong to httpx; this client only
builds the request and maps failures to HitServiceError subclasses whose
``description`` can be shown to the user.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from ..common.config import APIConfig
from ..common.errors import (
    DecodingError,
    HTTPStatusError,
    InvalidURLError,
    RequestFailedError,
)
from ..common.schemas.distribution import HitCreationRequest, HitCreationResult

logger = logging.getLogger("robo.distribution.client")

HITS_PATH = "/api/hits"


class HitClient:
    """
    Creates HITs on the Robo API.

    The underlying httpx.AsyncClient is created lazily on first use unless one
    is injected.

    Usage:
        client = HitClient(base_url="https://robo.app", device_id="dev-123")
        result = await client.create_hit(request)
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        device_id: str = "",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize HIT client.

        Args:
            base_url: API root, e.g. "https://robo.app"
            device_id: Sent as X-Device-ID
            timeout: Request timeout in seconds (ignored for an injected client)
            http_client: Pre-built client, mainly for tests
        """
        self.base_url = (base_url or "").rstrip("/")
        self.device_id = device_id
        self.timeout = timeout
        self._http = http_client
        self._owns_http = http_client is None

    def _ensure_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._http

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _make_url(self, path: str) -> str:
        try:
            parsed = urlparse(self.base_url)
            parsed.port  # raises ValueError for a non-numeric port
        except ValueError as e:
            raise InvalidURLError() from e
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURLError()
        return self.base_url + path

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.device_id:
            headers["X-Device-ID"] = self.device_id
        return headers

    async def create_hit(self, request: HitCreationRequest) -> HitCreationResult:
        """
        Submit a HIT creation request.

        Args:
            request: Validated creation request

        Returns:
            Parsed creation result

        Raises:
            InvalidURLError: If base_url is not an http(s) URL
            RequestFailedError: If the request could not be sent or timed out
            HTTPStatusError: If the server answered with a non-2xx status
            DecodingError: If the response body is not a valid result
        """
        url = self._make_url(HITS_PATH)
        http = self._ensure_http()

        try:
            response = await http.post(url, json=request.to_payload(), headers=self._headers())
        except httpx.InvalidURL as e:
            logger.warning("Rejected HIT URL %s: %s", url, e)
            raise InvalidURLError() from e
        except httpx.HTTPError as e:
            logger.warning("HIT request to %s failed: %s", url, e)
            raise RequestFailedError(str(e) or type(e).__name__) from e

        if not response.is_success:
            message = response.text or "Unknown error"
            logger.warning("HIT request returned %d: %s", response.status_code, message[:200])
            raise HTTPStatusError(response.status_code, message)

        try:
            result = HitCreationResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Could not decode HIT response: %s", e)
            raise DecodingError(str(e)) from e

        logger.info(
            "Created %s HIT (%d link(s))",
            request.mode.value,
            len(result.hits) if result.hits else (1 if result.url else 0),
        )
        return result


def create_hit_client(config: APIConfig, http_client: Optional[httpx.AsyncClient] = None) -> HitClient:
    """
    Build a HitClient from API config.

    Args:
        config: API section of RoboConfig
        http_client: Optional pre-built httpx client

    Returns:
        HitClient
    """
    if not config.device_id:
        logger.info("No device id configured; HIT requests will be sent without X-Device-ID")

    return HitClient(
        base_url=config.base_url,
        device_id=config.device_id,
        timeout=config.timeout,
        http_client=http_client,
    )
