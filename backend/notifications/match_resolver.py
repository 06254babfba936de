"""
Match and recipient lookups for the match notifier.

Two dependent Supabase queries: the enriched match from
vista_coincidencias_potenciales, then the push token of the user who
reported the lost pet. The first failure ends the chain.
"""

from typing import Any, cast

from pydantic import ValidationError

from models.coincidence import MatchRecipient, MatchView, PushDestination
from models.types import CoincidenceID, UserID
from notifications.errors import MatchNotFound, TokenNotFound

MATCH_VIEW = "vista_coincidencias_potenciales"
PUSH_TOKENS_TABLE = "user_push_tokens"


def fetch_match(supabase: Any, coincidencia_id: CoincidenceID) -> MatchView:
    """
    Fetch the match details for a coincidence.

    Args:
        supabase: Supabase client
        coincidencia_id: Identifier of the notified coincidence

    Returns:
        Validated MatchView row

    Raises:
        MatchNotFound: If the query fails, returns no row, or the row is unusable
    """
    try:
        response = (
            supabase.table(MATCH_VIEW)
            .select("*")
            .eq("coincidencia_id", coincidencia_id)
            .single()
            .execute()
        )
    except Exception as e:
        raise MatchNotFound(f"Match not found or error: {e}") from e

    if not response.data:
        raise MatchNotFound(f"Match not found or error: no row for {coincidencia_id}")

    try:
        return MatchView.model_validate(cast(dict[str, Any], response.data))
    except ValidationError as e:
        raise MatchNotFound(
            f"Match not found or error: invalid row for {coincidencia_id}: {e}"
        ) from e


def fetch_push_destination(supabase: Any, user_id: UserID) -> PushDestination:
    """
    Fetch the push token registered by a user.

    Raises:
        TokenNotFound: If the query fails, returns no row, or the token is empty
    """
    try:
        response = (
            supabase.table(PUSH_TOKENS_TABLE)
            .select("push_token")
            .eq("user_id", user_id)
            .single()
            .execute()
        )
    except Exception as e:
        raise TokenNotFound(f"User push token not found or error: {e}") from e

    if not response.data:
        raise TokenNotFound(
            f"User push token not found or error: no token for user {user_id}"
        )

    row = dict(cast(dict[str, Any], response.data))
    row.setdefault("user_id", user_id)
    try:
        return PushDestination.model_validate(row)
    except ValidationError as e:
        raise TokenNotFound(
            f"User push token not found or error: invalid token for user {user_id}"
        ) from e


def resolve_recipient(supabase: Any, coincidencia_id: CoincidenceID) -> MatchRecipient:
    """Resolve the match, then the push destination of its lost-report owner."""
    match = fetch_match(supabase, coincidencia_id)
    destination = fetch_push_destination(supabase, match.usuario_perdida_id)
    return MatchRecipient(match=match, destination=destination)
