"""
Unit tests for notifications/send_match_notification.py (replay CLI)
"""

import unittest
from unittest.mock import patch

from notifications.match_resolver import MATCH_VIEW, PUSH_TOKENS_TABLE
from notifications.send_match_notification import main
from shared.settings import NotifierSettings
from tests.fixtures.coincidence_factory import create_test_match, create_test_push_token
from tests.fixtures.mock_helpers import create_mock_supabase_tables


@patch("builtins.print")
class TestReplayCli(unittest.TestCase):
    @patch("notifications.send_match_notification.load_settings")
    @patch("notifications.send_match_notification.get_supabase_client")
    @patch("notifications.send_match_notification.process_coincidence_event")
    def test_sends_notification(self, mock_process, mock_client, mock_settings, mock_print):
        mock_process.return_value = (200, {"message": "Notification sent successfully"})
        mock_settings.return_value = NotifierSettings()

        exit_code = main(["--coincidencia-id", "42"])

        self.assertEqual(exit_code, 0)
        payload = mock_process.call_args.args[0]
        self.assertEqual(payload, {"record": {"coincidencia_id": "42"}})

    @patch("notifications.send_match_notification.load_settings")
    @patch("notifications.send_match_notification.get_supabase_client")
    @patch("notifications.send_match_notification.process_coincidence_event")
    def test_failure_exit_code(self, mock_process, mock_client, mock_settings, mock_print):
        mock_process.return_value = (400, {"error": "Match not found or error: x"})
        mock_settings.return_value = NotifierSettings()

        self.assertEqual(main(["--coincidencia-id", "42"]), 1)

    @patch("notifications.push_sender.requests.post")
    @patch("notifications.send_match_notification.get_supabase_client")
    def test_dry_run_does_not_send(self, mock_client, mock_post, mock_print):
        supabase, _ = create_mock_supabase_tables(
            {
                MATCH_VIEW: create_test_match(),
                PUSH_TOKENS_TABLE: create_test_push_token(),
            }
        )
        mock_client.return_value = supabase

        exit_code = main(["--coincidencia-id", "42", "--dry-run"])

        self.assertEqual(exit_code, 0)
        mock_post.assert_not_called()
        printed = " ".join(str(call.args[0]) for call in mock_print.call_args_list)
        self.assertIn("que coincide en un 75% con tu reporte.", printed)

    @patch("notifications.send_match_notification.get_supabase_client")
    def test_dry_run_lookup_failure(self, mock_client, mock_print):
        supabase, _ = create_mock_supabase_tables({MATCH_VIEW: Exception("no rows")})
        mock_client.return_value = supabase

        self.assertEqual(main(["--coincidencia-id", "42", "--dry-run"]), 1)

    def test_requires_coincidence_id(self, mock_print):
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                main([])


if __name__ == "__main__":
    unittest.main()
