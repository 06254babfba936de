"""
Error types for the match notification pipeline.

Lookup errors are fatal to an invocation and reach the top-level handler.
DeliveryFailure is only raised when delivery errors are configured to propagate.
"""


class MatchNotificationError(Exception):
    """Base class for all match notification failures."""

    error_type = "notification"


class MalformedPayload(MatchNotificationError):
    """Inbound event is not JSON or lacks record.coincidencia_id."""

    error_type = "payload"


class MatchNotFound(MatchNotificationError):
    """No usable vista_coincidencias_potenciales row for the coincidence."""

    error_type = "match_lookup"


class TokenNotFound(MatchNotificationError):
    """No usable push token for the lost-report owner."""

    error_type = "token_lookup"


class DeliveryFailure(MatchNotificationError):
    """Push gateway call failed or rejected the message."""

    error_type = "delivery"
