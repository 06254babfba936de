"""
Unit tests for notifications/match_resolver.py

Tests the match lookup, the push token lookup, and the short-circuit
between them.
"""

import unittest

from notifications.errors import MatchNotFound, TokenNotFound
from notifications.match_resolver import (
    MATCH_VIEW,
    PUSH_TOKENS_TABLE,
    fetch_match,
    fetch_push_destination,
    resolve_recipient,
)
from tests.fixtures.coincidence_factory import create_test_match, create_test_push_token
from tests.fixtures.mock_helpers import create_mock_supabase, create_mock_supabase_tables


class TestFetchMatch(unittest.TestCase):
    """Tests for fetch_match()."""

    def test_returns_match(self):
        supabase = create_mock_supabase(create_test_match(usuario_perdida_id="user-1"))

        match = fetch_match(supabase, "42")

        self.assertEqual(match.usuario_perdida_id, "user-1")
        supabase.table.assert_called_once_with(MATCH_VIEW)
        supabase.select.assert_called_once_with("*")
        supabase.eq.assert_called_once_with("coincidencia_id", "42")
        supabase.single.assert_called_once()

    def test_no_row_raises(self):
        supabase = create_mock_supabase(None)
        supabase.execute.return_value.data = None

        with self.assertRaises(MatchNotFound):
            fetch_match(supabase, "42")

    def test_query_error_raises(self):
        """Errors from .single() (e.g. zero rows) become MatchNotFound."""
        supabase = create_mock_supabase()
        supabase.execute.side_effect = Exception(
            "JSON object requested, multiple (or no) rows returned"
        )

        with self.assertRaises(MatchNotFound) as ctx:
            fetch_match(supabase, "42")

        self.assertIn("Match not found or error", str(ctx.exception))
        self.assertIn("no) rows returned", str(ctx.exception))

    def test_invalid_row_raises(self):
        """Row missing required columns is unusable."""
        supabase = create_mock_supabase(create_test_match(porcentaje_coincidencia=None))

        with self.assertRaises(MatchNotFound):
            fetch_match(supabase, "42")


class TestFetchPushDestination(unittest.TestCase):
    """Tests for fetch_push_destination()."""

    def test_returns_token(self):
        supabase = create_mock_supabase(create_test_push_token("ExponentPushToken[xyz]"))

        destination = fetch_push_destination(supabase, "user-1")

        self.assertEqual(destination.push_token, "ExponentPushToken[xyz]")
        self.assertEqual(destination.user_id, "user-1")
        supabase.table.assert_called_once_with(PUSH_TOKENS_TABLE)
        supabase.select.assert_called_once_with("push_token")
        supabase.eq.assert_called_once_with("user_id", "user-1")

    def test_no_row_raises(self):
        supabase = create_mock_supabase()
        supabase.execute.return_value.data = None

        with self.assertRaises(TokenNotFound):
            fetch_push_destination(supabase, "user-1")

    def test_query_error_raises(self):
        supabase = create_mock_supabase()
        supabase.execute.side_effect = Exception("connection reset")

        with self.assertRaises(TokenNotFound) as ctx:
            fetch_push_destination(supabase, "user-1")

        self.assertIn("User push token not found or error", str(ctx.exception))

    def test_empty_token_raises(self):
        supabase = create_mock_supabase(create_test_push_token(""))

        with self.assertRaises(TokenNotFound):
            fetch_push_destination(supabase, "user-1")


class TestResolveRecipient(unittest.TestCase):
    """Tests for resolve_recipient() chaining."""

    def test_resolves_both_lookups(self):
        supabase, queries = create_mock_supabase_tables(
            {
                MATCH_VIEW: create_test_match(usuario_perdida_id="owner-9"),
                PUSH_TOKENS_TABLE: create_test_push_token("ExponentPushToken[owner]"),
            }
        )

        recipient = resolve_recipient(supabase, "42")

        self.assertEqual(recipient.match.usuario_perdida_id, "owner-9")
        self.assertEqual(recipient.destination.push_token, "ExponentPushToken[owner]")
        queries[PUSH_TOKENS_TABLE].eq.assert_called_once_with("user_id", "owner-9")

    def test_match_failure_skips_token_lookup(self):
        supabase, queries = create_mock_supabase_tables(
            {
                MATCH_VIEW: Exception("no rows"),
                PUSH_TOKENS_TABLE: create_test_push_token(),
            }
        )

        with self.assertRaises(MatchNotFound):
            resolve_recipient(supabase, "42")

        queries[PUSH_TOKENS_TABLE].execute.assert_not_called()
        supabase.table.assert_called_once_with(MATCH_VIEW)


if __name__ == "__main__":
    unittest.main()
