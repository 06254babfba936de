"""
Error logging utility for the match notifier.

Logs notification processing errors to timestamped files for debugging.
"""

import os
from datetime import datetime
from typing import Any


def _log_dir() -> str:
    return os.getenv("NOTIFICATION_LOG_DIR") or os.path.join(
        os.path.dirname(__file__), "logs"
    )


def log_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str:
    """
    Log a notification error to a timestamped file.

    Args:
        error_type: Type of error (e.g., 'payload', 'match_lookup', 'delivery')
        error_message: The error message
        context: Optional dictionary with additional context (coincidencia_id, user_id, etc.)

    Returns:
        Path to the log file created
    """
    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)

    # Microseconds keep concurrent invocations from sharing a file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    filename = os.path.join(log_dir, f"notification_error_{error_type}_{timestamp}.txt")

    with open(filename, "w", encoding="utf-8") as f:
        f.write(f"Match Notification Error Report - {datetime.now()}\n")
        f.write("=" * 60 + "\n\n")
        f.write(f"Error Type: {error_type}\n")
        f.write(f"Error Message: {error_message}\n\n")

        if context:
            f.write("Context:\n")
            f.write("-" * 60 + "\n")
            for key, value in context.items():
                f.write(f"{key}: {value}\n")

    return filename


def report_notification_error(
    error_type: str, error_message: str, context: dict[str, Any] | None = None
) -> str | None:
    """
    Write an error report, printing instead of raising if the write fails.

    Returns:
        Path to the log file created, or None if it could not be written
    """
    try:
        error_file = log_notification_error(error_type, error_message, context)
    except OSError as e:
        print(f"    ✗ Could not write error report: {e}")
        return None
    print(f"    Error details logged to: {error_file}")
    return error_file
