"""Pydantic models for coincidence (potential match) data."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.types import CoincidenceID, MatchPercentage, PushToken, UserID


class CoincidenceRecord(BaseModel):
    """Row inserted into coincidencias_notificadas. Only the id is read."""

    model_config = ConfigDict(str_strip_whitespace=True)

    coincidencia_id: CoincidenceID = Field(..., min_length=1)

    @field_validator("coincidencia_id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        # Ids arrive as bigint or uuid depending on the table definition
        if isinstance(value, bool):
            raise ValueError("coincidencia_id must be a string or integer")
        if isinstance(value, int):
            return str(value)
        return value


class CoincidenceEvent(BaseModel):
    """Database webhook payload for an inserted coincidence."""

    record: CoincidenceRecord


class MatchView(BaseModel):
    """Row of vista_coincidencias_potenciales."""

    model_config = ConfigDict(str_strip_whitespace=True)

    coincidencia_id: CoincidenceID | None = None
    usuario_perdida_id: UserID = Field(..., min_length=1)
    porcentaje_coincidencia: MatchPercentage
    especie: str | None = None
    raza: str | None = None

    @field_validator("coincidencia_id", "usuario_perdida_id", mode="before")
    @classmethod
    def _ids_as_strings(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PushDestination(BaseModel):
    """Push token registered by a user (user_push_tokens)."""

    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: UserID | None = None
    push_token: PushToken = Field(..., min_length=1)


class MatchRecipient(BaseModel):
    """Resolved match together with the lost-report owner's push destination."""

    match: MatchView
    destination: PushDestination
