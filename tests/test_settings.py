import os
import unittest
from unittest import mock
from zoneinfo import ZoneInfo

from runningorder import settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(settings.running_order_url(), settings.DEFAULT_URL)
            self.assertEqual(settings.load_timezone(), ZoneInfo("Europe/Ljubljana"))
            self.assertEqual(settings.request_timeout(), 30.0)

    def test_environment_overrides(self) -> None:
        env = {
            "RUNNINGORDER_URL": "http://example.com/lineup",
            "RUNNINGORDER_TZ": "Europe/Berlin",
            "RUNNINGORDER_TIMEOUT": "5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual(settings.running_order_url(), "http://example.com/lineup")
            self.assertEqual(settings.load_timezone(), ZoneInfo("Europe/Berlin"))
            self.assertEqual(settings.request_timeout(), 5.0)

    def test_bad_timeout_falls_back(self) -> None:
        with mock.patch.dict(os.environ, {"RUNNINGORDER_TIMEOUT": "soon"}, clear=True):
            self.assertEqual(settings.request_timeout(), 30.0)

    def test_explicit_timezone_wins(self) -> None:
        with mock.patch.dict(os.environ, {"RUNNINGORDER_TZ": "Europe/Berlin"}, clear=True):
            self.assertEqual(settings.load_timezone("UTC"), ZoneInfo("UTC"))


if __name__ == "__main__":
    unittest.main()
