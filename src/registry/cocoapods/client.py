"""CocoaPods driver: version listing, metadata and source archive download.

Versions are scraped from the GitHub tree view of the CocoaPods Specs
repository, podspecs are read from its raw-content mirror, and metadata comes
from the pod's page on cocoapods.org.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, List, Optional, Union

from common import archive
from common import http_client
from common.http_client import FetchError
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from constants import PackageManagers
from versioning.sort import sort_versions

from .config import CocoapodsConfig
from .discovery import (
    archive_extension,
    find_podspec_link,
    parse_version_listing,
    resolve_source_url,
    rewrite_podspec_url,
)
from .models import DriverResult, ErrorKind, PackageIdentifier
from .prefix import get_prefix

logger = logging.getLogger(__name__)

CONTEXT = "cocoapods"
TARGET_PREFIX = "cocoapods-"

Identifier = Union[PackageIdentifier, str, None]
VersionSorter = Callable[[Iterable[str]], List[str]]


def _coerce_identifier(identifier: Identifier) -> PackageIdentifier:
    if isinstance(identifier, PackageIdentifier):
        purl = identifier
    elif identifier is None or not str(identifier).strip():
        return PackageIdentifier(name=None)
    else:
        purl = PackageIdentifier.parse(str(identifier))
    if purl.ecosystem != PackageManagers.COCOAPODS.value:
        raise ValueError(f"Not a Cocoapods package: {purl}")
    return purl


class CocoapodsDriver:
    """Driver for the CocoaPods ecosystem.

    Args:
        config: Endpoint configuration; defaults to ``CocoapodsConfig()``.
        version_sorter: Orders the version labels of a pod, oldest first; the
            last label it returns is taken as the latest version.
    """

    def __init__(
        self,
        config: Optional[CocoapodsConfig] = None,
        version_sorter: VersionSorter = sort_versions,
    ):
        self.config = config or CocoapodsConfig()
        self.version_sorter = version_sorter

    # URL construction

    def versions_url(self, name: str) -> str:
        return f"{self.config.specs_endpoint}/Specs/{get_prefix(name)}/{name}"

    def podspec_url(self, name: str, version: str) -> str:
        return (
            f"{self.config.specs_raw_endpoint}/Specs/{get_prefix(name)}"
            f"/{name}/{version}/{name}.podspec.json"
        )

    def metadata_url(self, name: str) -> str:
        return f"{self.config.metadata_endpoint}/pods/{name}"

    # Versions

    def fetch_versions(self, identifier: Identifier) -> DriverResult[List[str]]:
        """List known versions of a pod, keeping the failure kind on error."""
        try:
            purl = _coerce_identifier(identifier)
        except ValueError as exc:
            return DriverResult.failure(ErrorKind.MISSING_INPUT, str(exc))
        if not purl.has_name():
            return DriverResult.failure(ErrorKind.MISSING_INPUT, "Package name is required")

        name = purl.name
        url = self.versions_url(name)
        try:
            html = http_client.get_text(url, context=CONTEXT)
            labels = parse_version_listing(html)
            for label in labels:
                logger.debug("Identified %s version %s.", name, label)
            versions = list(self.version_sorter(labels))
        except FetchError as exc:
            return DriverResult.failure(ErrorKind.REMOTE_FAILURE, str(exc))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return DriverResult.failure(
                ErrorKind.REMOTE_FAILURE, f"Unable to read version listing for {name}: {exc}"
            )

        if is_debug_enabled(logger):
            logger.debug(
                "Enumerated versions",
                extra=extra_context(
                    event="decision",
                    component="client",
                    action="enumerate_versions",
                    outcome="empty" if not versions else "non_empty",
                    count=len(versions),
                    target=safe_url(url),
                    package_manager=CONTEXT,
                ),
            )
        return DriverResult.success(versions)

    def enumerate_versions(self, identifier: Identifier) -> List[str]:
        """List known versions of a pod; failures are logged and yield []."""
        logger.debug("EnumerateVersions %s", identifier)
        result = self.fetch_versions(identifier)
        if not result.ok:
            logger.error("Error enumerating Cocoapods packages: %s", result.message)
            return []
        return result.value or []

    def latest_version(self, identifier: Identifier) -> Optional[str]:
        """Newest version of a pod in the configured sorter's order, or None."""
        versions = self.enumerate_versions(identifier)
        if not versions:
            return None
        return versions[-1]

    # Metadata

    def fetch_metadata(self, identifier: Identifier) -> DriverResult[str]:
        """Pod page text plus podspec text, keeping the failure kind on error."""
        try:
            purl = _coerce_identifier(identifier)
        except ValueError as exc:
            return DriverResult.failure(ErrorKind.MISSING_INPUT, str(exc))
        if not purl.has_name():
            return DriverResult.failure(ErrorKind.MISSING_INPUT, "Package name is required")

        try:
            page = http_client.get_text(self.metadata_url(purl.name), context=CONTEXT)
            podspec_content = ""
            link = find_podspec_link(page)
            if link:
                podspec_content = http_client.get_text(rewrite_podspec_url(link), context=CONTEXT)
        except FetchError as exc:
            return DriverResult.failure(ErrorKind.REMOTE_FAILURE, str(exc))
        except Exception as exc:  # pylint: disable=broad-exception-caught
            return DriverResult.failure(
                ErrorKind.REMOTE_FAILURE, f"Unable to read metadata for {purl.name}: {exc}"
            )
        return DriverResult.success(page + " " + podspec_content)

    def get_metadata(self, identifier: Identifier) -> Optional[str]:
        """Pod page text plus podspec text; failures are logged and yield None."""
        result = self.fetch_metadata(identifier)
        if not result.ok:
            logger.error("Error fetching Cocoapods metadata: %s", result.message)
            return None
        return result.value

    # Download

    def resolve_download_url(self, identifier: Identifier) -> DriverResult[str]:
        """Find the archive URL for an exact pod version.

        Podspec fetch failures are not caught here; only missing input and an
        absent source location are reported through the result.
        """
        try:
            purl = _coerce_identifier(identifier)
        except ValueError as exc:
            return DriverResult.failure(ErrorKind.MISSING_INPUT, str(exc))
        if not purl.has_name() or not purl.has_version():
            return DriverResult.failure(
                ErrorKind.MISSING_INPUT,
                f"Unable to download [{purl.name} {purl.version}]. Both must be defined.",
            )

        podspec = http_client.get_json(self.podspec_url(purl.name, purl.version), context=CONTEXT)
        url = resolve_source_url(podspec)
        if url is None:
            return DriverResult.failure(
                ErrorKind.NO_SOURCE,
                f"Unable to find download location for {purl.name}@{purl.version}",
            )
        return DriverResult.success(url)

    def download_version(self, identifier: Identifier, extract: bool = True) -> List[str]:
        """Download the source archive of an exact pod version.

        Args:
            identifier: Package with both name and version.
            extract: Extract into ``cocoapods-<name>@<version>`` when True,
                otherwise write the archive file itself.

        Returns:
            list: Paths written (empty when input is missing or the podspec
            declares no downloadable source).

        Raises:
            requests.HTTPError: When the archive responds with a non-success status.
            FetchError: When the podspec cannot be fetched.
        """
        logger.debug("DownloadVersion %s", identifier)
        resolved = self.resolve_download_url(identifier)
        if resolved.error is ErrorKind.MISSING_INPUT:
            logger.error(resolved.message)
            return []
        if resolved.error is ErrorKind.NO_SOURCE:
            logger.warning(resolved.message)
            return []

        purl = _coerce_identifier(identifier)
        url = resolved.value
        logger.debug("Downloading %s...", purl)
        with Timer() as timer:
            data = http_client.get_bytes(url, context=CONTEXT)

        target_name = f"{TARGET_PREFIX}{purl.name}@{purl.version}"
        if extract:
            path = archive.extract_archive(target_name, data, self.config.download_dir)
        else:
            target_name += archive_extension(url)
            path = archive.write_file(os.path.join(self.config.download_dir, target_name), data)

        logger.info(
            "Downloaded %s to %s",
            purl,
            path,
            extra=extra_context(
                event="download",
                component="client",
                action="download_version",
                outcome="success",
                duration_ms=timer.duration_ms(),
                target=safe_url(url),
                package_manager=CONTEXT,
            ),
        )
        return [path]
