"""Archive extraction and file output for downloaded packages."""
from __future__ import annotations

import io
import logging
import os
import tarfile
import zipfile
import zlib

logger = logging.getLogger(__name__)


class ArchiveError(ValueError):
    """Raised when a payload cannot be extracted safely."""


def _is_within(base: str, target: str) -> bool:
    base = os.path.realpath(base)
    target = os.path.realpath(target)
    return os.path.commonpath([base, target]) == base


def _extract_zip(data: bytes, dest: str) -> None:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            for member in zf.namelist():
                if not _is_within(dest, os.path.join(dest, member)):
                    raise ArchiveError(f"Refusing to extract {member!r} outside {dest}")
            zf.extractall(dest)
    except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError) as exc:
        raise ArchiveError(f"Unsupported or corrupt archive: {exc}") from exc


def _extract_tar(data: bytes, dest: str) -> None:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as tf:
            for member in tf.getmembers():
                if not _is_within(dest, os.path.join(dest, member.name)):
                    raise ArchiveError(f"Refusing to extract {member.name!r} outside {dest}")
            tf.extractall(path=dest, filter="data")  # noqa: S202
    except tarfile.TarError as exc:
        raise ArchiveError(f"Unsupported or corrupt archive: {exc}") from exc


def extract_archive(target_name: str, data: bytes, base_dir: str = ".") -> str:
    """Extract an in-memory zip or tar payload into ``base_dir/target_name``.

    Args:
        target_name: Directory name to create under ``base_dir``.
        data: Archive bytes; the format is detected from content.
        base_dir: Parent directory for the extraction.

    Returns:
        str: Path of the extraction directory.

    Raises:
        ArchiveError: If the payload is not a supported archive or a member
            would land outside the extraction directory.
    """
    dest = os.path.join(base_dir, target_name)
    os.makedirs(dest, exist_ok=True)

    if zipfile.is_zipfile(io.BytesIO(data)):
        _extract_zip(data, dest)
    else:
        _extract_tar(data, dest)

    logger.info("Extracted %s to %s", target_name, dest)
    return dest


def write_file(path: str, data: bytes) -> str:
    """Write ``data`` to ``path``, creating parent directories as needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "wb") as fh:
        fh.write(data)
    return path
