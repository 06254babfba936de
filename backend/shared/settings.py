"""Runtime settings for the match notifier, read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class NotifierSettings:
    """Settings shared by the HTTP app, the CLI and the notifier core."""

    expo_push_url: str = DEFAULT_EXPO_PUSH_URL
    expo_push_timeout: float = 10.0
    expo_access_token: str | None = None
    propagate_delivery_errors: bool = False
    dedupe_ttl_seconds: float = 0.0


def load_settings() -> NotifierSettings:
    """Build settings from environment variables (after loading .env)."""
    return NotifierSettings(
        expo_push_url=os.getenv("EXPO_PUSH_URL") or DEFAULT_EXPO_PUSH_URL,
        expo_push_timeout=float(os.getenv("EXPO_PUSH_TIMEOUT") or 10),
        expo_access_token=os.getenv("EXPO_ACCESS_TOKEN") or None,
        propagate_delivery_errors=_env_flag("PROPAGATE_DELIVERY_ERRORS"),
        dedupe_ttl_seconds=float(
            os.getenv("MATCH_NOTIFICATION_DEDUPE_TTL_SECONDS") or 0
        ),
    )
