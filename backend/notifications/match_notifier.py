"""
Consumer for inserted coincidencias_notificadas records.

Validates the database webhook payload, resolves the match and the
recipient's push token, and dispatches one push notification. Every failure
is caught here and turned into a 400 response body.
"""

import json
from typing import Any

from pydantic import ValidationError

from models.coincidence import CoincidenceEvent
from models.types import CoincidenceID
from notifications.dedupe import RecentDeliveries
from notifications.error_logger import report_notification_error
from notifications.errors import MalformedPayload, MatchNotificationError
from notifications.match_resolver import resolve_recipient
from notifications.push_sender import dispatch_match_notification
from shared.settings import NotifierSettings

SUCCESS_MESSAGE = "Notification sent successfully"
DUPLICATE_MESSAGE = "Notification already sent"


def parse_coincidence_event(payload: Any) -> CoincidenceID:
    """
    Extract coincidencia_id from a webhook payload.

    Args:
        payload: Raw request body (bytes/str) or already-decoded JSON

    Returns:
        The coincidence identifier

    Raises:
        MalformedPayload: If the body is not JSON or lacks record.coincidencia_id
    """
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise MalformedPayload(f"Invalid JSON payload: {e}") from e

    try:
        event = CoincidenceEvent.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "payload"
            for err in e.errors()
        )
        raise MalformedPayload(f"Invalid coincidence payload: {fields}") from e

    return event.record.coincidencia_id


def process_coincidence_event(
    payload: Any,
    supabase: Any,
    settings: NotifierSettings,
    recent: RecentDeliveries | None = None,
) -> tuple[int, dict[str, str]]:
    """
    Handle one inserted coincidence end to end.

    Args:
        payload: Webhook body containing {"record": {"coincidencia_id": ...}}
        supabase: Supabase client used for the lookups
        settings: Notifier settings (push gateway, delivery error policy)
        recent: Optional dedupe window for redelivered events

    Returns:
        Tuple of (HTTP status, JSON body)
    """
    coincidencia_id: CoincidenceID | None = None
    try:
        coincidencia_id = parse_coincidence_event(payload)
        print(f"Processing coincidence {coincidencia_id}")

        if recent is not None and not recent.claim(coincidencia_id):
            print(f"  ⊘ Coincidence {coincidencia_id} already notified, skipping")
            return 200, {"message": DUPLICATE_MESSAGE}

        recipient = resolve_recipient(supabase, coincidencia_id)
        if recipient.match.coincidencia_id is None:
            recipient.match.coincidencia_id = coincidencia_id

        dispatch_match_notification(recipient, settings)

        return 200, {"message": SUCCESS_MESSAGE}

    except MatchNotificationError as e:
        _release(recent, coincidencia_id)
        _report_failure(e.error_type, str(e), coincidencia_id)
        return 400, {"error": str(e)}
    except Exception as e:
        _release(recent, coincidencia_id)
        _report_failure("unexpected", str(e), coincidencia_id)
        return 400, {"error": str(e)}


def _release(
    recent: RecentDeliveries | None, coincidencia_id: CoincidenceID | None
) -> None:
    if recent is not None and coincidencia_id is not None:
        recent.release(coincidencia_id)


def _report_failure(
    error_type: str, error_message: str, coincidencia_id: CoincidenceID | None
) -> None:
    print(f"  ✗ Error in send-match-notification: {error_message}")
    report_notification_error(
        error_type=error_type,
        error_message=error_message,
        context={"coincidencia_id": coincidencia_id},
    )
