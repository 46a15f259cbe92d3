# =============================================================================
# core/client.py  —  CUFinder HTTP Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one POST to a CUFinder endpoint and returns the parsed JSON
#   envelope as a ProviderResponse.  Every request carries the static
#   x-api-key header and the fixed 60 second timeout from Settings.
#
# TWO BODY ENCODINGS:
#   CUFinder's single-entity lookups (/enc, /tep) take a form-encoded body;
#   the multi-filter searches (/cse, /pse, /lbs) take a JSON body.  The
#   handler for each endpoint says which one to use.  Responses are JSON in
#   both cases.
#
# FAILURES:
#   - Connection errors and timeouts  → TransportError
#   - Non-2xx status                  → ProviderError (with the status code)
#   - 2xx with a non-JSON body        → ProviderError
#   - 2xx without the {status, data} envelope → ProviderError
#   There are no retries: one failed attempt is reported immediately.
# =============================================================================

import logging
import time
from typing import Any, Optional

import requests

from cufinder_mcp.core.config import Settings
from cufinder_mcp.core.errors import ProviderError, TransportError
from cufinder_mcp.core.models import Encoding, ProviderResponse

logger = logging.getLogger(__name__)

_MAX_ERROR_TEXT = 200


def _error_message(response: requests.Response) -> str:
    """Best human-readable reason for a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = (response.text or "").strip()
    if text:
        return text[:_MAX_ERROR_TEXT]
    return response.reason or "request failed"


def _has_envelope(body: dict[str, Any]) -> bool:
    """True for {"status": 1 | -1, "data": {...}}."""
    status = body.get("status")
    if isinstance(status, bool) or status not in (1, -1):
        return False
    return isinstance(body.get("data"), dict)


class CufinderClient:
    """Thin wrapper around a requests.Session bound to one Settings object."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-api-key": settings.api_key,
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        })

    def url_for(self, endpoint: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def send(self, endpoint: str, payload: dict[str, Any], encoding: Encoding = Encoding.FORM) -> ProviderResponse:
        """POST ``payload`` to ``endpoint`` and return the provider's envelope.

        Args:
            endpoint: Provider path, e.g. "/enc".
            payload: Fields forwarded verbatim to the provider.
            encoding: FORM for a url-encoded body, JSON for a JSON body.

        Raises:
            TransportError: the request could not be completed.
            ProviderError: the provider answered with an error or bad body.
        """
        url = self.url_for(endpoint)
        headers = {"Content-Type": encoding.value}
        body: dict[str, Any] = {"data": payload} if encoding is Encoding.FORM else {"json": payload}

        logger.debug("POST %s (%s) fields=%s", endpoint, encoding.name.lower(), sorted(payload))
        started = time.monotonic()
        try:
            response = self.session.post(url, headers=headers, timeout=self.settings.timeout_seconds, **body)
        except requests.Timeout as exc:
            raise TransportError(
                f"request to {endpoint} timed out after {self.settings.timeout_seconds:g}s"
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug("POST %s -> %s in %.0f ms", endpoint, response.status_code, elapsed_ms)

        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.error("CUFinder %s failed: status=%s, message=%s", endpoint, response.status_code, message)
            raise ProviderError(message, status_code=response.status_code)

        try:
            payload_json = response.json()
        except ValueError as exc:
            raise ProviderError(f"{endpoint} returned a non-JSON body") from exc
        if not isinstance(payload_json, dict):
            raise ProviderError(f"{endpoint} returned an unexpected JSON body")
        if not _has_envelope(payload_json):
            logger.error("CUFinder %s returned no envelope: keys=%s", endpoint, sorted(payload_json))
            raise ProviderError(f"{endpoint} returned no status/data envelope")

        return ProviderResponse.from_payload(payload_json)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CufinderClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
