"""Data models for the CocoaPods driver."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar
from urllib.parse import unquote

from constants import PackageManagers

T = TypeVar("T")

PURL_SCHEME = "pkg:"


class ErrorKind(Enum):
    """Why a driver operation produced no value."""
    MISSING_INPUT = "missing_input"
    REMOTE_FAILURE = "remote_failure"
    NO_SOURCE = "no_source"


@dataclass(frozen=True)
class PackageIdentifier:
    """A package name with an optional exact version."""
    name: Optional[str]
    version: Optional[str] = None
    ecosystem: str = PackageManagers.COCOAPODS.value

    @classmethod
    def parse(cls, token: str) -> "PackageIdentifier":
        """Parse ``pkg:cocoapods/Name@1.0`` or a bare ``Name[@1.0]`` token.

        Qualifiers (``?...``) and subpaths (``#...``) of a package URL are ignored.

        Raises:
            ValueError: If the token is empty or a package URL lacks a type.
        """
        text = (token or "").strip()
        if not text:
            raise ValueError("Empty package identifier")

        ecosystem = PackageManagers.COCOAPODS.value
        if text.lower().startswith(PURL_SCHEME):
            text = text[len(PURL_SCHEME):].lstrip("/")
            text = text.split("#", 1)[0].split("?", 1)[0]
            if "/" not in text:
                raise ValueError(f"Package URL is missing a type: {token}")
            ecosystem, text = text.split("/", 1)
            ecosystem = ecosystem.lower()

        name, sep, version = text.rpartition("@")
        if not sep:
            name, version = text, ""
        name = unquote(name.strip("/"))
        version = unquote(version) or None
        return cls(name=name or None, version=version, ecosystem=ecosystem)

    def has_name(self) -> bool:
        """True when the name is set and not blank."""
        return bool(self.name and self.name.strip())

    def has_version(self) -> bool:
        """True when the version is set and not blank."""
        return bool(self.version and self.version.strip())

    def __str__(self) -> str:
        base = f"pkg:{self.ecosystem}/{self.name or ''}"
        return f"{base}@{self.version}" if self.version else base


@dataclass
class DriverResult(Generic[T]):
    """Outcome of a driver operation: a value, or the kind of failure that prevented one."""
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "DriverResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "DriverResult[T]":
        return cls(error=error, message=message)
