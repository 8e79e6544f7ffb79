import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

from schemefinder.http_client import HttpClient


class TestFetchText(unittest.TestCase):
    def setUp(self):
        self.client = HttpClient({"User-Agent": "test-agent", "Cache-Control": "no-cache"}, timeout=3.5)

    def tearDown(self):
        self.client.close()

    def test_headers_applied_to_session(self):
        self.assertEqual(self.client.session.headers["User-Agent"], "test-agent")
        self.assertEqual(self.client.session.headers["Cache-Control"], "no-cache")

    def test_success_returns_text_with_timeout(self):
        resp = MagicMock(ok=True, status_code=200, text="<html>ok</html>")
        with patch.object(self.client.session, "get", return_value=resp) as get:
            self.assertEqual(self.client.fetch_text("https://example.org/"), "<html>ok</html>")
        _, kwargs = get.call_args
        self.assertEqual(kwargs["timeout"], 3.5)

    def test_non_success_returns_none(self):
        resp = MagicMock(ok=False, status_code=403, text="denied")
        with patch.object(self.client.session, "get", return_value=resp):
            self.assertIsNone(self.client.fetch_text("https://example.org/"))

    def test_transport_error_returns_none(self):
        with patch.object(self.client.session, "get", side_effect=requests.ConnectionError("down")):
            self.assertIsNone(self.client.fetch_text("https://example.org/"))

    def test_timeout_returns_none(self):
        with patch.object(self.client.session, "get", side_effect=requests.Timeout("slow")):
            self.assertIsNone(self.client.fetch_text("https://example.org/"))

    def test_unexpected_error_returns_none(self):
        with patch.object(self.client.session, "get", side_effect=RuntimeError("weird")):
            self.assertIsNone(self.client.fetch_text("https://example.org/"))


if __name__ == "__main__":
    unittest.main()
