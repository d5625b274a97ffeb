"""FastAPI backend that relays chat turns to the remote dialogue service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from chat.config import load_chat_config

from .gateway import TransportGateway, fallback_response
from .models import TurnRequest

logger = logging.getLogger(__name__)


def create_app(gateway: Optional[TransportGateway] = None) -> FastAPI:
    if gateway is None:
        gateway = TransportGateway(load_chat_config().endpoint_url)

    app = FastAPI(title="Chat Session Gateway", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.gateway = gateway

    @app.get("/healthz")
    def health_check() -> dict:
        return {"status": "ok"}

    @app.post("/api/chat")
    async def chat_turn(request: Request) -> JSONResponse:
        # The body is read exactly once; failures below reuse the decoded copy.
        body = None
        try:
            body = await request.json()
            turn = TurnRequest.model_validate(body)
        except (ValueError, ValidationError) as exc:
            end_session = bool(body.get("end_session")) if isinstance(body, dict) else False
            logger.warning(f"Rejected malformed chat turn: {exc}")
            return JSONResponse(fallback_response(end_session, exc))

        payload = await gateway.send_turn(turn)
        return JSONResponse(payload)

    return app


app = create_app()
