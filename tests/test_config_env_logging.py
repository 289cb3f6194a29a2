"""Tests for configuration loading, the asdf environment and logging helpers."""

import json
import logging
import os

import pytest

from asdf_env import load_env
from cli_config import apply_config, load_config_file
from common.logging_utils import JsonFormatter, Timer, extra_context, safe_url
from constants import Constants


class TestConfig:
    """YAML configuration overrides."""

    def test_no_config(self, monkeypatch):
        monkeypatch.delenv("AGI_CONFIG", raising=False)
        assert load_config_file(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_config_file(str(tmp_path / "nope.yml")) == {}

    def test_load_yaml(self, tmp_path):
        cfg = tmp_path / "agi.yml"
        cfg.write_text("request_timeout: 5\npkgsite_base_url: https://pkg.example.dev\n")

        assert load_config_file(str(cfg)) == {
            "request_timeout": 5,
            "pkgsite_base_url": "https://pkg.example.dev",
        }

    def test_load_from_environment(self, tmp_path, monkeypatch):
        cfg = tmp_path / "agi.yml"
        cfg.write_text("git_timeout: 9\n")
        monkeypatch.setenv("AGI_CONFIG", str(cfg))

        assert load_config_file(None) == {"git_timeout": 9}

    def test_malformed_yaml(self, tmp_path):
        cfg = tmp_path / "agi.yml"
        cfg.write_text("request_timeout: [unclosed\n")

        assert load_config_file(str(cfg)) == {}

    def test_non_mapping(self, tmp_path):
        cfg = tmp_path / "agi.yml"
        cfg.write_text("- a\n- b\n")

        assert load_config_file(str(cfg)) == {}

    def test_apply(self, monkeypatch):
        monkeypatch.setattr(Constants, "REQUEST_TIMEOUT", Constants.REQUEST_TIMEOUT)
        monkeypatch.setattr(Constants, "HTTP_RETRY_MAX", Constants.HTTP_RETRY_MAX)

        apply_config({"request_timeout": "7", "http_retry_max": "oops", "unknown": 1})

        assert Constants.REQUEST_TIMEOUT == 7
        assert Constants.HTTP_RETRY_MAX == 3

    @pytest.mark.parametrize("key, attr", [("http_retry_max", "HTTP_RETRY_MAX"), ("request_timeout", "REQUEST_TIMEOUT")])
    @pytest.mark.parametrize("value", [0, -2])
    def test_apply_rejects_values_below_one(self, monkeypatch, key, attr, value):
        default = getattr(Constants, attr)
        monkeypatch.setattr(Constants, attr, default)

        apply_config({key: value})

        assert getattr(Constants, attr) == default


class TestEnv:
    """Reading the asdf environment."""

    def test_defaults(self):
        env = load_env({})

        assert env.data_dir == os.path.expanduser("~/.asdf")
        assert env.plugin_name is None
        assert env.install_version is None

    def test_values(self):
        env = load_env({
            "ASDF_DATA_DIR": "/opt/asdf",
            "ASDF_PLUGIN_PATH": "/opt/asdf/plugins/govulncheck/",
            "ASDF_INSTALL_VERSION": "v1.1.3",
            "ASDF_INSTALL_PATH": "/opt/asdf/installs/govulncheck/v1.1.3",
            "ASDF_DOWNLOAD_PATH": "",
        })

        assert env.data_dir == "/opt/asdf"
        assert env.plugin_name == "govulncheck"
        assert env.install_version == "v1.1.3"
        assert env.install_path.endswith("v1.1.3")
        assert env.download_path is None


class TestLoggingUtils:
    """Structured logging helpers."""

    def test_extra_context_drops_none(self):
        assert extra_context(a=1, b=None) == {"a": 1}

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://user:pw@pkg.go.dev/x?tab=versions#top", "https://pkg.go.dev/x"),
            ("https://pkg.go.dev:8443/x", "https://pkg.go.dev:8443/x"),
        ],
    )
    def test_safe_url(self, url, expected):
        assert safe_url(url) == expected

    def test_json_formatter_includes_extra(self):
        record = logging.LogRecord("agi", logging.WARNING, __file__, 1, "skip %s", ("vA",), None)
        record.package = "example"

        out = json.loads(JsonFormatter().format(record))

        assert out["message"] == "skip vA"
        assert out["level"] == "WARNING"
        assert out["package"] == "example"

    def test_timer(self):
        with Timer() as t:
            pass
        assert t.duration_ms() >= 0
