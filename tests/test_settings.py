"""Tests for settings loading and logging setup."""

import logging
from unittest.mock import patch

from ezid_client.settings import EzidSettings, get_settings, reload_settings
from ezid_client.utils import LOG_FORMAT, setup_logging


class TestEzidSettings:
    def test_environment_variables(self):
        settings = EzidSettings()
        assert settings.user == "apitest"
        assert settings.default_shoulder == "ark:/99999/fk4"

    def test_base_url_default_port(self):
        assert EzidSettings(host="ezid.example.org").base_url == "https://ezid.example.org"

    def test_base_url_custom_port(self):
        settings = EzidSettings(host="localhost", port=8000, use_ssl=False)
        assert settings.base_url == "http://localhost:8000"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "ezid.yaml"
        path.write_text("host: ezid.example.org\ntimeout: 5\ndefault_shoulder: doi:10.5072/FK2\n")
        settings = EzidSettings.from_yaml(path)
        assert settings.host == "ezid.example.org"
        assert settings.timeout == 5.0
        assert settings.default_shoulder == "doi:10.5072/FK2"

    def test_from_missing_yaml_uses_defaults(self, tmp_path):
        settings = EzidSettings.from_yaml(tmp_path / "missing.yaml")
        assert settings.host == "ezid.cdlib.org"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "ezid.yaml"
        path.write_text("")
        assert EzidSettings.from_yaml(path).port == 443

    def test_reload_settings(self, tmp_path):
        path = tmp_path / "ezid.yaml"
        path.write_text("host: ezid.example.org\n")
        try:
            assert reload_settings(path).host == "ezid.example.org"
            assert get_settings().host == "ezid.example.org"
        finally:
            reload_settings()
        assert get_settings().host == "ezid.cdlib.org"


class TestSetupLogging:
    def test_uses_settings_level(self):
        with patch("ezid_client.utils.logging.basicConfig") as basic_config:
            setup_logging()
        _, kwargs = basic_config.call_args
        assert kwargs["level"] == logging.INFO
        assert kwargs["format"] == LOG_FORMAT

    def test_explicit_level(self):
        with patch("ezid_client.utils.logging.basicConfig") as basic_config:
            setup_logging("debug")
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
