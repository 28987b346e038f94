"""Tests for CocoaPods driver configuration."""

import json
import logging

import pytest

from constants import Constants
from registry.cocoapods.config import CocoapodsConfig, load_config


@pytest.fixture(autouse=True)
def no_default_config(monkeypatch, tmp_path):
    """Keep user config files out of the way."""
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", [str(tmp_path / "absent.yml")])


class TestCocoapodsConfig:
    """Test CocoapodsConfig dataclass."""

    def test_defaults(self):
        config = CocoapodsConfig()

        assert config.specs_endpoint == "https://github.com/CocoaPods/Specs/tree/master"
        assert config.specs_raw_endpoint == "https://raw.githubusercontent.com/CocoaPods/Specs/master"
        assert config.metadata_endpoint == "https://cocoapods.org"
        assert config.download_dir == "."

    def test_trailing_slash_stripped(self):
        assert CocoapodsConfig(metadata_endpoint="https://index.test/").metadata_endpoint == "https://index.test"

    def test_empty_endpoint_rejected(self):
        with pytest.raises(ValueError):
            CocoapodsConfig(specs_endpoint="  ")


class TestLoadConfig:
    """Test load_config precedence."""

    def test_defaults_without_sources(self):
        assert load_config(environ={}) == CocoapodsConfig()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "podfetch.yml"
        path.write_text(
            "cocoapods:\n"
            "  metadata_endpoint: https://index.test\n"
            "  download_dir: /tmp/pods\n",
            encoding="utf-8",
        )

        config = load_config(str(path), environ={})

        assert config.metadata_endpoint == "https://index.test"
        assert config.download_dir == "/tmp/pods"
        assert config.specs_endpoint == Constants.COCOAPODS_SPECS_ENDPOINT

    def test_json_file(self, tmp_path):
        path = tmp_path / "podfetch.json"
        path.write_text(json.dumps({"cocoapods": {"specs_raw_endpoint": "https://raw.test"}}), encoding="utf-8")

        assert load_config(str(path), environ={}).specs_raw_endpoint == "https://raw.test"

    def test_environment_wins_over_file(self, tmp_path):
        path = tmp_path / "podfetch.yml"
        path.write_text("cocoapods:\n  specs_endpoint: https://file.test\n", encoding="utf-8")
        env = {Constants.ENV_SPECS_ENDPOINT: "https://env.test"}

        assert load_config(str(path), environ=env).specs_endpoint == "https://env.test"

    def test_default_location_is_used(self, monkeypatch, tmp_path):
        path = tmp_path / "podfetch.yml"
        path.write_text("cocoapods:\n  metadata_endpoint: https://default.test\n", encoding="utf-8")
        monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", [str(path)])

        assert load_config(environ={}).metadata_endpoint == "https://default.test"

    def test_malformed_file_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "podfetch.yml"
        path.write_text("cocoapods: [unclosed\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            assert load_config(str(path), environ={}) == CocoapodsConfig()
        assert "Ignoring config file" in caplog.text

    def test_missing_file_is_ignored(self, tmp_path):
        assert load_config(str(tmp_path / "nope.yml"), environ={}) == CocoapodsConfig()

    def test_unknown_keys_are_reported(self, tmp_path, caplog):
        path = tmp_path / "podfetch.yml"
        path.write_text("cocoapods:\n  mirror: https://x.test\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            assert load_config(str(path), environ={}) == CocoapodsConfig()
        assert "Unknown cocoapods config key: mirror" in caplog.text
