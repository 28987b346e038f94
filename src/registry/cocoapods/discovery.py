"""CocoaPods page scraping and podspec interpretation.

Pure helpers with no network access:
- version labels from a Specs directory listing page
- the "See Podspec" link on a cocoapods.org pod page, and its raw-content form
- the downloadable archive URL declared in a podspec's ``source``
"""
from __future__ import annotations

import logging
import os
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Directory entries on the GitHub tree view of the Specs repository
VERSION_LINK_SELECTOR = "tbody a.js-navigation-open"
PARENT_DIRECTORY_LABEL = ".."

# Link list on a cocoapods.org pod page
METADATA_LINK_SELECTOR = "ul.links a"
PODSPEC_LINK_LABEL = "See Podspec"

_GITHUB_BLOB_URL = re.compile(r"^https?://github\.com/([^/]+)/([^/]+)/blob/(.+)$")
RAW_CONTENT_HOST = "https://raw.githubusercontent.com"


def parse_version_listing(html: str) -> List[str]:
    """Return distinct version labels from a Specs directory listing, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    versions: List[str] = []
    seen = set()
    for anchor in soup.select(VERSION_LINK_SELECTOR):
        label = anchor.get_text(strip=True)
        if not label or label == PARENT_DIRECTORY_LABEL:
            continue
        if label in seen:
            continue
        seen.add(label)
        versions.append(label)
    return versions


def find_podspec_link(html: str) -> Optional[str]:
    """Return the href of the "See Podspec" link on a pod page, if any."""
    soup = BeautifulSoup(html, "html.parser")
    for anchor in soup.select(METADATA_LINK_SELECTOR):
        if anchor.get_text(strip=True) == PODSPEC_LINK_LABEL:
            href = anchor.get("href")
            if href:
                return str(href)
    return None


def rewrite_podspec_url(url: str) -> str:
    """Turn a GitHub browser URL into its raw-content equivalent.

    ``https://github.com/Org/Specs/blob/master/p.podspec.json`` becomes
    ``https://raw.githubusercontent.com/Org/Specs/master/p.podspec.json``.
    URLs that are not GitHub blob links are returned unchanged.
    """
    match = _GITHUB_BLOB_URL.match(url)
    if not match:
        return url
    owner, repo, rest = match.groups()
    return f"{RAW_CONTENT_HOST}/{owner}/{repo}/{rest}"


def resolve_source_url(podspec: Any) -> Optional[str]:
    """Return the archive URL declared by a podspec, or None.

    ``source.git`` together with ``source.tag`` wins over ``source.http``; a
    trailing ``.git`` is dropped and ``/archive/<tag>.zip`` appended.
    """
    if not isinstance(podspec, dict):
        return None
    source: Dict[str, Any] = podspec.get("source") or {}
    if not isinstance(source, dict):
        return None

    git_url = source.get("git")
    tag = source.get("tag")
    if git_url and tag:
        git_url = str(git_url)
        if git_url.endswith(".git"):
            git_url = git_url[:-4]
        return f"{git_url}/archive/{tag}.zip"

    http_url = source.get("http")
    if http_url:
        return str(http_url)

    logger.debug("Podspec source has no git+tag or http entry: %s", sorted(source))
    return None


def archive_extension(url: str) -> str:
    """Extension of the URL path (".zip", ".gz", ...), or "" when there is none."""
    return os.path.splitext(urlsplit(url).path)[1]
