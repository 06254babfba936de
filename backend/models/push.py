"""Pydantic models for outgoing push notifications."""

from typing import Literal

from pydantic import BaseModel, Field

from models.types import PushData, PushToken


def _default_push_data() -> PushData:
    return {"someData": "goes here"}


class PushMessage(BaseModel):
    """Message accepted by the Expo push API."""

    to: PushToken = Field(..., min_length=1)
    title: str
    body: str
    sound: Literal["default"] = "default"
    data: PushData = Field(default_factory=_default_push_data)
