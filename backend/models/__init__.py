"""Pydantic models for data validation and type checking."""

from models.coincidence import (
    CoincidenceEvent,
    CoincidenceRecord,
    MatchRecipient,
    MatchView,
    PushDestination,
)
from models.push import PushMessage

__all__ = [
    "CoincidenceEvent",
    "CoincidenceRecord",
    "MatchView",
    "PushDestination",
    "MatchRecipient",
    "PushMessage",
]
