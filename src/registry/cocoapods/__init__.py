"""CocoaPods registry package.

This package provides CocoaPods package manager support:
- prefix.py: MD5 shard prefix used by the Specs repository layout
- discovery.py: version listing, podspec link and podspec source parsing
- client.py: HTTP interactions with the Specs repository and cocoapods.org
- config.py: endpoint configuration (defaults, config file, environment)
- models.py: package identifiers and driver results
"""

from .client import CocoapodsDriver  # noqa: F401
from .config import CocoapodsConfig, load_config  # noqa: F401
from .discovery import resolve_source_url, rewrite_podspec_url  # noqa: F401
from .models import DriverResult, ErrorKind, PackageIdentifier  # noqa: F401
from .prefix import get_prefix  # noqa: F401

__all__ = [
    "CocoapodsDriver",
    "CocoapodsConfig",
    "load_config",
    "resolve_source_url",
    "rewrite_podspec_url",
    "DriverResult",
    "ErrorKind",
    "PackageIdentifier",
    "get_prefix",
]
