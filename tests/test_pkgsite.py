"""Tests for the pkg.go.dev version source."""

from unittest.mock import patch

import pytest

from errors import FetchError
from registry.pkgsite import (
    PkgSiteSource,
    VersionBatch,
    parse_repository_link,
    parse_version_tags,
)

VERSIONS_HTML = """
<html><body><main><article>
<div class="Versions">
  <div class="Versions-list">
    <div class="Version-tag"><a class="js-versionLink" href="/golang.org/x/vuln@v1.1.3">v1.1.3</a></div>
    <div class="Version-commitTime">Jul 1, 2024</div>
    <div class="Version-tag"><a href="/golang.org/x/vuln@v1.1.2">
        v1.1.2
    </a></div>
    <div class="Version-tag other"><a href="/x">v0.0.0-20220516100000-0123456789ab</a></div>
    <div class="Version-details"><a href="/ignored">v9.9.9</a></div>
  </div>
</div>
<br><img src="x.png">
</article></main></body></html>
"""

PACKAGE_HTML = """
<html><body><main><aside>
<div class="UnitMeta">
  <div class="UnitMeta-repo">
    <a href="https://go.googlesource.com/vuln" title="Open source repository">go.googlesource.com/vuln</a>
  </div>
  <div class="UnitMeta-links"><a href="https://example.com/other">other</a></div>
</div>
</aside></main></body></html>
"""


class TestParsers:
    """HTML extraction of version tags and repository links."""

    def test_parse_version_tags(self):
        assert parse_version_tags(VERSIONS_HTML) == [
            "v1.1.3",
            "v1.1.2",
            "v0.0.0-20220516100000-0123456789ab",
        ]

    def test_parse_version_tags_empty_page(self):
        assert parse_version_tags("<html><body></body></html>") == []

    def test_nested_divs_stay_inside_container(self):
        html = (
            '<div class="Version-tag"><div><span>x</span></div><a href="/a">v1.0.0</a></div>'
            '<a href="/b">v2.0.0</a>'
        )
        assert parse_version_tags(html) == ["v1.0.0"]

    def test_parse_repository_link(self):
        assert parse_repository_link(PACKAGE_HTML) == "https://go.googlesource.com/vuln"

    def test_parse_repository_link_missing(self):
        assert parse_repository_link(VERSIONS_HTML) is None


class TestPkgSiteSource:
    """Fetching through the HTTP client."""

    def test_urls(self):
        src = PkgSiteSource("https://pkg.example.dev/")

        assert src.package_url("golang.org/x/vuln/cmd/govulncheck") == \
            "https://pkg.example.dev/golang.org/x/vuln/cmd/govulncheck"
        assert src.versions_url("golang.org/x/vuln") == "https://pkg.example.dev/golang.org/x/vuln?tab=versions"

    @patch("registry.pkgsite.get_text")
    def test_fetch(self, mock_get_text):
        mock_get_text.side_effect = [VERSIONS_HTML, PACKAGE_HTML]

        batch = PkgSiteSource().fetch("golang.org/x/vuln/cmd/govulncheck")

        assert batch == VersionBatch(
            versions=["v1.1.3", "v1.1.2", "v0.0.0-20220516100000-0123456789ab"],
            repository="https://go.googlesource.com/vuln",
        )
        urls = [c.args[0] for c in mock_get_text.call_args_list]
        assert urls == [
            "https://pkg.go.dev/golang.org/x/vuln/cmd/govulncheck?tab=versions",
            "https://pkg.go.dev/golang.org/x/vuln/cmd/govulncheck",
        ]

    @patch("registry.pkgsite.get_text")
    def test_fetch_is_all_or_nothing(self, mock_get_text):
        mock_get_text.side_effect = [VERSIONS_HTML, FetchError("boom", status_code=500)]

        with pytest.raises(FetchError):
            PkgSiteSource().fetch("golang.org/x/vuln")

    @patch("registry.pkgsite.get_text")
    def test_fetch_without_repository(self, mock_get_text):
        mock_get_text.side_effect = [VERSIONS_HTML, "<html></html>"]

        assert PkgSiteSource().fetch("example.com/tool").repository is None
