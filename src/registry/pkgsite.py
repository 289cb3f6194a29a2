"""pkg.go.dev version source: scrape candidate versions and the repository URL."""
from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import List, NamedTuple, Optional, Protocol, Tuple
from urllib.parse import quote, urlencode

from constants import Constants
from common.http_client import get_text
from common.logging_utils import extra_context, is_debug_enabled, safe_url

logger = logging.getLogger(__name__)

HEADERS_HTML = {"Accept": "text/html"}


class VersionBatch(NamedTuple):
    """Raw, unordered version strings plus the repository URL, if reported."""
    versions: List[str]
    repository: Optional[str]


class VersionSource(Protocol):
    """Supplies candidate versions for a package.

    fetch() is all-or-nothing: it either returns a complete batch or
    raises FetchError.
    """

    def fetch(self, package: str) -> VersionBatch:
        ...


class ContainerAnchorParser(HTMLParser):
    """Collect (text, href) of every anchor nested in a div with a given class."""

    def __init__(self, container_class: str) -> None:
        super().__init__()
        self._container_class = container_class
        self._depth = 0
        self._in_anchor = False
        self._href: Optional[str] = None
        self._text: List[str] = []
        self.anchors: List[Tuple[str, Optional[str]]] = []

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag == "div":
            if self._depth:
                self._depth += 1
            else:
                classes = (dict(attrs).get("class") or "").split()
                if self._container_class in classes:
                    self._depth = 1
            return
        if tag == "a" and self._depth:
            self._in_anchor = True
            self._href = dict(attrs).get("href")
            self._text = []

    def handle_endtag(self, tag: str) -> None:
        if tag == "div" and self._depth:
            self._depth -= 1
        elif tag == "a" and self._in_anchor:
            self._in_anchor = False
            self.anchors.append(("".join(self._text).strip(), self._href))

    def handle_data(self, data: str) -> None:
        if self._in_anchor:
            self._text.append(data)


def parse_version_tags(html: str) -> List[str]:
    """Extract the version strings listed on a pkg.go.dev versions tab."""
    parser = ContainerAnchorParser(Constants.PKGSITE_VERSION_CONTAINER)
    parser.feed(html)
    parser.close()
    return [text for text, _ in parser.anchors if text]


def parse_repository_link(html: str) -> Optional[str]:
    """Extract the source repository URL from a pkg.go.dev package page."""
    parser = ContainerAnchorParser(Constants.PKGSITE_REPOSITORY_CONTAINER)
    parser.feed(html)
    parser.close()
    for _, href in parser.anchors:
        if href:
            return href
    return None


class PkgSiteSource:
    """VersionSource backed by the pkg.go.dev web-site."""

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or Constants.PKGSITE_BASE_URL).rstrip("/")

    def package_url(self, package: str) -> str:
        return f"{self.base_url}/{quote(package, safe='/@')}"

    def versions_url(self, package: str) -> str:
        query = urlencode({Constants.PKGSITE_TAB_KEY: Constants.PKGSITE_VERSIONS_TAB})
        return f"{self.package_url(package)}?{query}"

    def fetch(self, package: str) -> VersionBatch:
        """Scrape the versions tab and the package page for package.

        Raises:
            FetchError: either page could not be retrieved.
        """
        versions_url = self.versions_url(package)
        if is_debug_enabled(logger):
            logger.debug(
                "Scraping target",
                extra=extra_context(
                    event="scrape",
                    component="pkgsite",
                    target=safe_url(versions_url),
                    goal="versions",
                ),
            )
        versions = parse_version_tags(get_text(versions_url, context="pkgsite", headers=HEADERS_HTML))

        package_url = self.package_url(package)
        if is_debug_enabled(logger):
            logger.debug(
                "Scraping target repository URL",
                extra=extra_context(
                    event="scrape",
                    component="pkgsite",
                    target=safe_url(package_url),
                    goal="repository",
                ),
            )
        repository = parse_repository_link(get_text(package_url, context="pkgsite", headers=HEADERS_HTML))

        return VersionBatch(versions=versions, repository=repository)
