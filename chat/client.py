"""HTTP turn sender used when the gateway runs behind the backend API."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from backend.models import TurnRequest


class ChatApiError(RuntimeError):
    """Raised when the backend chat route does not return a usable payload."""


class ChatApiClient:
    """Posts turns to the backend `/api/chat` route."""

    def __init__(self, api_url: str, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.api_url = api_url
        self._client = client

    async def send_turn(self, request: TurnRequest) -> Dict[str, Any]:
        """
        Send one turn and return the decoded payload.

        Raises:
            ChatApiError: If the status is not 2xx or the body is not a JSON object
            httpx.HTTPError: If the request could not be completed
        """
        headers = {"Content-Type": "application/json"}
        if self._client is not None:
            response = await self._client.post(self.api_url, json=request.model_dump(), headers=headers)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.api_url, json=request.model_dump(), headers=headers)

        if not response.is_success:
            raise ChatApiError(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ChatApiError("Chat API returned malformed JSON") from exc
        if not isinstance(data, dict):
            raise ChatApiError("Chat API returned a non-object payload")
        return data
