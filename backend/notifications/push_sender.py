"""
Push notification sending via the Expo push API.

Formats the "possible match" message for the owner of a lost-pet report
and submits it to the push gateway. Gateway failures are reported in the
result dict; whether they abort the invocation is decided by the caller's
settings.
"""

from typing import Any

import requests

from models.coincidence import MatchRecipient, MatchView
from models.push import PushMessage
from models.types import PushToken
from notifications.error_logger import report_notification_error
from notifications.errors import DeliveryFailure
from shared.settings import DEFAULT_EXPO_PUSH_URL, NotifierSettings

MATCH_TITLE = "¡Posible coincidencia encontrada!"

PUSH_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
    "Content-Type": "application/json",
}


def format_percentage(value: float) -> str:
    """Render a match percentage the way it is stored (75, not 75.0)."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def build_match_body(match: MatchView) -> str:
    """Build the notification body for a potential match."""
    # Species and breed are each optional in the view
    labels = [label for label in (match.especie, match.raza) if label]
    animal = f" ({' - '.join(labels)})" if labels else ""
    return (
        f"Se encontró una mascota{animal} que coincide en un "
        f"{format_percentage(match.porcentaje_coincidencia)}% con tu reporte."
    )


def build_match_message(match: MatchView, push_token: PushToken) -> PushMessage:
    """Build the push message sent to the lost-report owner."""
    return PushMessage(to=push_token, title=MATCH_TITLE, body=build_match_body(match))


def _ticket_error(payload: Any) -> str | None:
    """Return an error description if the Expo response reports a failure."""
    if not isinstance(payload, dict):
        return "Unexpected push gateway response"

    errors = payload.get("errors")
    if isinstance(errors, str) and errors:
        return errors
    if isinstance(errors, list) and errors:
        messages = [
            str(err.get("message", err)) if isinstance(err, dict) else str(err)
            for err in errors
        ]
        return "; ".join(messages)

    tickets = payload.get("data")
    if isinstance(tickets, dict):
        tickets = [tickets]
    if not isinstance(tickets, list):
        return "Unexpected push gateway response"
    for ticket in tickets:
        if isinstance(ticket, dict) and ticket.get("status") == "error":
            return str(ticket.get("message", "Push ticket error"))

    return None


def send_push_notification(
    message: PushMessage,
    push_url: str = DEFAULT_EXPO_PUSH_URL,
    timeout: float = 10.0,
    access_token: str | None = None,
) -> dict[str, Any]:
    """
    Send one push message to the Expo push gateway.

    Args:
        message: Message to deliver
        push_url: Push gateway endpoint
        timeout: Request timeout in seconds
        access_token: Optional Expo access token (enhanced push security)

    Returns:
        Dictionary with 'success' (bool), 'ticket' (gateway response if parsed),
        'error' (str if failed)
    """
    headers = dict(PUSH_HEADERS)
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"

    try:
        response = requests.post(
            push_url, json=message.model_dump(), headers=headers, timeout=timeout
        )
    except requests.RequestException as e:
        return {"success": False, "ticket": None, "error": str(e)}

    try:
        ticket = response.json()
    except ValueError:
        ticket = None

    if not 200 <= response.status_code < 300:
        return {
            "success": False,
            "ticket": ticket,
            "error": f"Push gateway returned HTTP {response.status_code}",
        }

    if ticket is None:
        return {
            "success": False,
            "ticket": None,
            "error": "Push gateway returned invalid JSON",
        }

    error = _ticket_error(ticket)
    if error:
        return {"success": False, "ticket": ticket, "error": error}

    return {"success": True, "ticket": ticket}


def dispatch_match_notification(
    recipient: MatchRecipient, settings: NotifierSettings
) -> dict[str, Any]:
    """
    Build and send the match notification for a resolved recipient.

    Delivery failures are logged and returned in the result dict. They only
    raise when settings.propagate_delivery_errors is enabled.

    Raises:
        DeliveryFailure: If sending failed and failures are configured to propagate
    """
    message = build_match_message(recipient.match, recipient.destination.push_token)
    result = send_push_notification(
        message,
        push_url=settings.expo_push_url,
        timeout=settings.expo_push_timeout,
        access_token=settings.expo_access_token,
    )

    if result["success"]:
        print(f"  ✓ Push notification sent: {result.get('ticket')}")
        return result

    error_msg = result.get("error", "Unknown error")
    print(f"  ✗ Error sending push notification: {error_msg}")
    report_notification_error(
        error_type=DeliveryFailure.error_type,
        error_message=error_msg,
        context={
            "coincidencia_id": recipient.match.coincidencia_id,
            "user_id": recipient.match.usuario_perdida_id,
            "ticket": result.get("ticket"),
        },
    )

    if settings.propagate_delivery_errors:
        raise DeliveryFailure(f"Push delivery failed: {error_msg}")

    return result
