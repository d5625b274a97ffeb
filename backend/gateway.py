"""Transport gateway that relays chat turns to the remote dialogue endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from chat.constants import OFFLINE_END_SESSION_TEXT, UNKNOWN_ERROR_TEXT, UNREACHABLE_SERVICE_TEXT

from .models import TurnRequest, TurnResponse

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class GatewayError(Exception):
    """Raised internally when the remote endpoint cannot produce a usable payload."""


def fallback_response(end_session: bool, error: Optional[BaseException] = None) -> Dict[str, Any]:
    """Build the payload returned in place of a failed remote call."""

    if end_session:
        fallback = TurnResponse(response=OFFLINE_END_SESSION_TEXT, session_ended=True)
    else:
        details = str(error) if error is not None and str(error) else UNKNOWN_ERROR_TEXT
        fallback = TurnResponse(
            response=f"{UNREACHABLE_SERVICE_TEXT}\n\nError details: {details}",
            error=True,
        )
    return fallback.model_dump(exclude_none=True)


class TransportGateway:
    """Forwards one turn per call to the remote endpoint and never raises."""

    def __init__(self, endpoint_url: str, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.endpoint_url = endpoint_url
        self._client = client

    async def send_turn(self, request: TurnRequest) -> Dict[str, Any]:
        # The request is parsed once by the caller; the fallback reuses this copy.
        end_session = request.end_session
        try:
            return await self._post(request)
        except Exception as exc:  # Any failure becomes a fallback payload.
            logger.error(f"API Error: {exc!r} (session={request.session_id}, end_session={end_session})")
            return fallback_response(end_session, exc)

    async def _post(self, request: TurnRequest) -> Dict[str, Any]:
        if self._client is not None:
            response = await self._client.post(self.endpoint_url, json=request.model_dump(), headers=JSON_HEADERS)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.endpoint_url, json=request.model_dump(), headers=JSON_HEADERS)

        if not response.is_success:
            raise GatewayError(f"API responded with status: {response.status_code}")

        data = response.json()
        if not isinstance(data, dict):
            raise GatewayError(f"API returned a non-object payload: {type(data).__name__}")
        return data
