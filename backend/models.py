"""Pydantic schemas for the chat turn contract."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class TurnRequest(BaseModel):
    input_text: str = Field(..., description="User message text or the end-of-session sentinel.")
    session_id: Optional[str] = Field(None, description="Opaque session identifier.")
    end_session: bool = Field(False, description="True for the terminating turn.")
    session_attributes: Dict[str, Any] = Field(default_factory=dict, description="Per-deployment attributes.")


class TurnResponse(BaseModel):
    response: str = Field(..., description="Human-readable reply, may contain <b>/<i> markup.")
    error: Optional[bool] = Field(None, description="Set when the turn failed.")
    session_ended: Optional[bool] = Field(None, description="Set when the session was closed.")
