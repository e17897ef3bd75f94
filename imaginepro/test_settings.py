"""
Unit tests for environment-driven settings
"""

import os
import unittest
from unittest.mock import patch

from .settings import DEFAULT_BASE_URL, Settings, load_settings


class TestLoadSettings(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {"IMAGINEPRO_API_KEY": "k"}, clear=True):
            settings = load_settings(env_file=None)

        self.assertEqual(settings.api_key, "k")
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)
        self.assertEqual(settings.fetch_interval, 2.0)
        self.assertEqual(settings.default_timeout, 1800.0)
        self.assertEqual(settings.video_timeout, 900.0)
        self.assertEqual(settings.log_level, "INFO")

    def test_overrides(self):
        env = {
            "IMAGINEPRO_API_KEY": " k ",
            "IMAGINEPRO_BASE_URL": "https://proxy.example.com/",
            "IMAGINEPRO_FETCH_INTERVAL": "0.5",
            "IMAGINEPRO_TIMEOUT": "60",
            "IMAGINEPRO_VIDEO_TIMEOUT": "120",
            "IMAGINEPRO_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings(env_file=None)

        self.assertEqual(settings.api_key, "k")
        self.assertEqual(settings.base_url, "https://proxy.example.com")
        self.assertEqual(settings.fetch_interval, 0.5)
        self.assertEqual(settings.default_timeout, 60.0)
        self.assertEqual(settings.video_timeout, 120.0)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_bad_number(self):
        with patch.dict(os.environ, {"IMAGINEPRO_TIMEOUT": "soon"}, clear=True):
            with self.assertRaises(RuntimeError):
                load_settings(env_file=None)

    def test_require_api_key(self):
        with self.assertRaises(RuntimeError):
            Settings(api_key="").require_api_key()
        self.assertEqual(Settings(api_key="k").require_api_key(), "k")

    def test_env_file_is_loaded(self):
        with patch.dict(os.environ, {}, clear=True), patch("imaginepro.settings.load_dotenv") as load_dotenv:
            load_settings(env_file=".env.test")
        load_dotenv.assert_called_once_with(".env.test")


if __name__ == "__main__":
    unittest.main()
