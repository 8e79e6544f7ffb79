import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from schemefinder.config import DEFAULT_SITE, Config


ENV_KEYS = [
    "SITE_BASE_URL",
    "REQUEST_TIMEOUT",
    "USER_AGENT",
    "GEOCODER_URL",
    "GEOCODER_USER_AGENT",
    "MAX_ITEMS",
    "CURATED_DATA_PATH",
    "API_HOST",
    "API_PORT",
    "LOG_LEVEL",
]


def clean_env(**values):
    env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
    env.update(values)
    return env


class TestConfig(unittest.TestCase):
    def load(self, **values):
        with patch.dict(os.environ, clean_env(**values), clear=True), patch(
            "schemefinder.config.load_dotenv"
        ):
            return Config.from_env()

    def test_defaults(self):
        cfg = self.load()
        self.assertEqual(cfg.site_base_url, DEFAULT_SITE)
        self.assertEqual(cfg.request_timeout, 15.0)
        self.assertEqual(cfg.max_items, 50)
        self.assertIsNone(cfg.curated_data_path)
        self.assertEqual(cfg.api_port, 8000)

    def test_headers(self):
        cfg = self.load(SITE_BASE_URL="https://mirror.example/")
        headers = cfg.headers
        self.assertEqual(headers["Referer"], "https://mirror.example/")
        self.assertEqual(headers["Cache-Control"], "no-cache")
        self.assertIn("Mozilla", headers["User-Agent"])
        self.assertIn("application/json", headers["Accept"])

    def test_invalid_numbers_fall_back(self):
        cfg = self.load(REQUEST_TIMEOUT="soon", MAX_ITEMS="-3", API_PORT="http")
        self.assertEqual(cfg.request_timeout, 15.0)
        self.assertEqual(cfg.max_items, 50)
        self.assertEqual(cfg.api_port, 8000)

    def test_overrides(self):
        cfg = self.load(REQUEST_TIMEOUT="2.5", MAX_ITEMS="10", CURATED_DATA_PATH="data/curated.json", LOG_LEVEL="debug")
        self.assertEqual(cfg.request_timeout, 2.5)
        self.assertEqual(cfg.max_items, 10)
        self.assertEqual(cfg.curated_data_path, Path("data/curated.json"))
        self.assertEqual(cfg.log_level, "DEBUG")


if __name__ == "__main__":
    unittest.main()
