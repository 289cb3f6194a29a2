"""Tests for the agi command-line front end."""

import json
from unittest.mock import patch

import pytest

from agi import exit_code_for, main
from args import parse_args
from constants import ExitCodes
from errors import (
    EncodingError,
    FetchError,
    ManifestNotFoundError,
    NoStableVersionError,
    PersistenceError,
    ValidationError,
)
from manifest.models import Manifest
from registry.pkgsite import VersionBatch

PKG = "golang.org/x/vuln/cmd/govulncheck"
REPO = "https://go.googlesource.com/vuln"


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch("agi.configure_logging"), patch("agi.load_config_file", return_value={}):
        yield


@pytest.fixture
def fetch():
    with patch("registry.pkgsite.PkgSiteSource.fetch") as mock_fetch:
        mock_fetch.return_value = VersionBatch(
            versions=["v1.1.0", "v1.0.0", "v1.2.0-rc.1", "bogus"],
            repository=REPO,
        )
        yield mock_fetch


class TestArgParsing:
    """Subcommands and global options."""

    def test_list_all(self):
        ns = parse_args(["list-all", PKG])
        assert ns.action == "list-all"
        assert ns.PACKAGE == PKG

    def test_resolve_options(self):
        ns = parse_args(["--data-dir", "/tmp/asdf", "resolve", "govulncheck", PKG, "--no-reference"])
        assert ns.DATA_DIR == "/tmp/asdf"
        assert ns.PLUGIN == "govulncheck"
        assert ns.NO_REFERENCE is True

    def test_defaults(self):
        ns = parse_args(["show", "govulncheck"])
        assert ns.LOG_LEVEL is None
        assert ns.CONFIG is None
        assert ns.DATA_DIR is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestMain:
    """End-to-end command behavior with the network mocked."""

    def test_list_all(self, fetch, capsys):
        assert main(["list-all", PKG]) == ExitCodes.SUCCESS.value

        assert capsys.readouterr().out.strip() == "v1.0.0 v1.1.0 v1.2.0-rc.1"
        fetch.assert_called_once_with(PKG)

    def test_latest(self, fetch, capsys):
        assert main(["latest", PKG]) == ExitCodes.SUCCESS.value

        assert capsys.readouterr().out.strip() == "v1.1.0"

    def test_latest_without_stable(self, fetch, capsys):
        fetch.return_value = VersionBatch(versions=["v1.0.0-rc.1"], repository=REPO)

        assert main(["latest", PKG]) == ExitCodes.NOT_FOUND.value
        assert capsys.readouterr().out == ""

    def test_fetch_error(self, fetch):
        fetch.side_effect = FetchError("pkgsite returned HTTP 404", status_code=404)

        assert main(["list-all", PKG]) == ExitCodes.CONNECTION_ERROR.value

    def test_resolve_and_show(self, fetch, tmp_path, capsys):
        data_dir = str(tmp_path)

        assert main(["--data-dir", data_dir, "resolve", "govulncheck", PKG, "--no-reference"]) == 0
        assert capsys.readouterr().out.strip() == "v1.1.0"
        assert Manifest.read(data_dir, "govulncheck") == Manifest.new("govulncheck", PKG, REPO)

        assert main(["--data-dir", data_dir, "show", "govulncheck"]) == 0
        shown = json.loads(capsys.readouterr().out)
        assert shown["manifestPayload"]["gitRepository"] == REPO
        assert "gitReference" not in shown["manifestPayload"]

    @patch("agi.resolve_tag_reference")
    def test_resolve_uses_reference_resolver(self, mock_resolve, fetch, tmp_path):
        mock_resolve.return_value = None

        assert main(["--data-dir", str(tmp_path), "resolve", "govulncheck", PKG]) == 0
        assert mock_resolve.call_count == 1

    def test_show_missing_manifest(self, tmp_path):
        assert main(["--data-dir", str(tmp_path), "show", "nope"]) == ExitCodes.NOT_FOUND.value

    def test_data_dir_from_environment(self, fetch, tmp_path, monkeypatch):
        monkeypatch.setenv("ASDF_DATA_DIR", str(tmp_path))

        assert main(["resolve", "govulncheck", PKG, "--no-reference"]) == 0
        assert (tmp_path / "plugins" / "govulncheck" / "manifest.json").is_file()


class TestExitCodes:
    """Error to exit code mapping."""

    @pytest.mark.parametrize(
        "exc, code",
        [
            (NoStableVersionError(), ExitCodes.NOT_FOUND),
            (ManifestNotFoundError("missing"), ExitCodes.NOT_FOUND),
            (ValidationError([]), ExitCodes.INVALID_MANIFEST),
            (FetchError("down"), ExitCodes.CONNECTION_ERROR),
            (PersistenceError("denied"), ExitCodes.FILE_ERROR),
            (EncodingError("bad json"), ExitCodes.FILE_ERROR),
        ],
    )
    def test_mapping(self, exc, code):
        assert exit_code_for(exc) is code
