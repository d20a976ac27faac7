"""Shapes of inbound Socket.IO payloads.

Field names follow the wire format used by the web client (camelCase);
handlers read the snake_case attributes.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class EventPayload(BaseModel):
    model_config = ConfigDict(strict=True)


class JoinGame(EventPayload):
    room_id: str = Field(alias='roomId', min_length=1, max_length=50)
    user_name: str = Field(alias='userName', min_length=1, max_length=30)


class Draw(EventPayload):
    room_id: str = Field(alias='roomId')
    # Stroke/patch record from the canvas; shape is up to the client
    data: Dict[str, Any]


class Guess(EventPayload):
    room_id: str = Field(alias='roomId')
    guess: str


class LeaveGame(EventPayload):
    room_id: str = Field(alias='roomId')
