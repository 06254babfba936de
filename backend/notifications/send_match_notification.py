"""
CLI script for replaying a match notification.

Usage:
    # Send the notification for one coincidence
    uv run python -m notifications.send_match_notification --coincidencia-id 42

    # Dry run (resolve match and token, print the message, don't send)
    uv run python -m notifications.send_match_notification --coincidencia-id 42 --dry-run
"""

import argparse
import sys

from models.types import CoincidenceID
from notifications.errors import MatchNotificationError
from notifications.match_notifier import process_coincidence_event
from notifications.match_resolver import resolve_recipient
from notifications.push_sender import build_match_message
from shared.db import get_supabase_client
from shared.settings import load_settings


def preview_notification(coincidencia_id: CoincidenceID) -> int:
    """Resolve the recipient and print the message that would be sent."""
    supabase = get_supabase_client()
    try:
        recipient = resolve_recipient(supabase, coincidencia_id)
    except MatchNotificationError as e:
        print(f"✗ {e}")
        return 1

    message = build_match_message(recipient.match, recipient.destination.push_token)
    print(f"[DRY RUN] Would send to user {recipient.match.usuario_perdida_id}:")
    print(f"  To:    {message.to}")
    print(f"  Title: {message.title}")
    print(f"  Body:  {message.body}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Send the potential-match push notification for a coincidence"
    )

    parser.add_argument(
        "--coincidencia-id",
        required=True,
        help="Identifier of the coincidence to notify",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Dry run mode (resolve and print the message, don't send it)",
    )

    args = parser.parse_args(argv)

    if args.dry_run:
        return preview_notification(CoincidenceID(args.coincidencia_id))

    status, body = process_coincidence_event(
        {"record": {"coincidencia_id": args.coincidencia_id}},
        get_supabase_client(),
        load_settings(),
    )
    print(f"{status}: {body}")
    return 0 if status == 200 else 1


if __name__ == "__main__":
    sys.exit(main())
