# =============================================================================
# omi/client.py  —  HTTP Client for the Omi integrations API
# =============================================================================
#
# The ONLY place in the project that touches the network.
#
# ONE AsyncClient PER CALL:
#   Each send() opens its own httpx.AsyncClient and closes it when the
#   response is in, so concurrent tool invocations share nothing mutable.
#
# NO RETRIES:
#   The two create operations are not idempotent.  A failed call surfaces as
#   an error and is never replayed.
#
# TESTING:
#   Pass transport=httpx.MockTransport(handler) to serve canned responses
#   without a network.
# =============================================================================

import logging

import httpx

from omi.config import OmiConfig
from omi.errors import InternalError
from omi.request_builder import OmiRequest

logger = logging.getLogger(__name__)


class OmiClient:
    """Sends OmiRequests with bearer-token authentication."""

    def __init__(
        self,
        config: OmiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, request: OmiRequest) -> httpx.Response:
        """Perform one HTTP call and return the (fully read) response.

        Raises:
            InternalError: On any transport-level failure (connection
                refused, DNS, timeout, protocol error).
        """
        logger.debug(
            "%s %s%s params=%s body=%s",
            request.method, self._config.base_url, request.path, request.query, request.body,
        )
        try:
            async with httpx.AsyncClient(
                base_url=self._config.base_url,
                headers=self._headers(),
                timeout=self._config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    request.method,
                    request.path,
                    params=request.query,
                    json=request.body,
                )
        except httpx.HTTPError as exc:
            raise InternalError(
                f"Request to Omi API failed: {type(exc).__name__}: {exc}"
            ) from exc

        logger.info("Omi API %s %s → %d", request.method, request.path, response.status_code)
        return response
