"""
Match notification system for FiruFinds.

This module handles:
- Validating coincidence webhook payloads
- Resolving the match and the lost-report owner's push token
- Sending potential-match push notifications via Expo
"""

from .match_notifier import process_coincidence_event
from .match_resolver import resolve_recipient
from .push_sender import dispatch_match_notification, send_push_notification

__all__ = [
    'process_coincidence_event',
    'resolve_recipient',
    'dispatch_match_notification',
    'send_push_notification',
]
