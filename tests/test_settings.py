from __future__ import annotations

import importlib
import logging
import os
import sys
import unittest
from unittest import mock

from interface.cli import build_toggler
from infrastructure.profiles.store import ProfileStore
from interface.settings import AppSettings


class AppSettingsTests(unittest.TestCase):
    def test_defaults_when_environment_is_empty(self) -> None:
        settings = AppSettings.from_env({})

        self.assertEqual(settings, AppSettings())
        self.assertTrue(settings.toggle_enabled)
        self.assertEqual(settings.toggle_interval_seconds, 300.0)

    def test_reads_overrides(self) -> None:
        settings = AppSettings.from_env(
            {
                "LOG_LEVEL": "debug",
                "API_HOST": "0.0.0.0",
                "API_PORT": "9000",
                "TOGGLE_ENABLED": "off",
                "TOGGLE_PROFILE": "User",
                "TOGGLE_PERMISSION": "CanDelete",
                "TOGGLE_INTERVAL_SECONDS": "2.5",
            }
        )

        self.assertEqual(settings.log_level, "DEBUG")
        self.assertEqual(settings.api_host, "0.0.0.0")
        self.assertEqual(settings.api_port, 9000)
        self.assertFalse(settings.toggle_enabled)
        self.assertEqual(settings.toggle_profile, "User")
        self.assertEqual(settings.toggle_permission, "CanDelete")
        self.assertEqual(settings.toggle_interval_seconds, 2.5)

    def test_malformed_values_name_the_variable(self) -> None:
        cases = {
            "API_PORT": "eighty",
            "TOGGLE_ENABLED": "sometimes",
            "TOGGLE_INTERVAL_SECONDS": "soon",
        }
        for key, raw in cases.items():
            with self.assertRaisesRegex(ValueError, key):
                AppSettings.from_env({key: raw})

    def test_interval_must_be_positive(self) -> None:
        with self.assertRaisesRegex(ValueError, "TOGGLE_INTERVAL_SECONDS"):
            AppSettings.from_env({"TOGGLE_INTERVAL_SECONDS": "0"})

    def test_build_toggler_uses_configured_target(self) -> None:
        settings = AppSettings(toggle_profile="User", toggle_permission="CanDelete", toggle_interval_seconds=5)

        toggler = build_toggler(ProfileStore(), settings)

        self.assertEqual(toggler.profile_name, "User")
        self.assertEqual(toggler.permission, "CanDelete")
        self.assertEqual(toggler.interval_seconds, 5)


class MainEntryPointTests(unittest.TestCase):
    def test_import_configures_root_logging_from_env(self) -> None:
        sys.modules.pop("main", None)
        self.addCleanup(sys.modules.pop, "main", None)
        env = {"LOG_LEVEL": "debug", "TOGGLE_ENABLED": "false"}

        with mock.patch.dict(os.environ, env), mock.patch("logging.basicConfig") as basic_config:
            module = importlib.import_module("main")

        basic_config.assert_called_once()
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.DEBUG)
        self.assertTrue(hasattr(module, "app"))


if __name__ == "__main__":
    unittest.main()
