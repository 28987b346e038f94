"""Version ordering for ecosystem version labels."""

from typing import Iterable, List, Optional, Tuple

import semantic_version


def parse_version(label: str) -> Optional[semantic_version.Version]:
    """Coerce a version label into a semantic version, or None when it cannot be read.

    CocoaPods labels are loosely semver: "5.4", "1.0.0-beta.1", "4.0.0-swift3"
    and "1.0.0.10" all occur in the Specs repository. A leading "v" is tolerated.
    """
    text = (label or "").strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    try:
        return semantic_version.Version.coerce(text)
    except ValueError:
        return None


def _identifier_key(part: str) -> Tuple[int, int, str]:
    # Numeric identifiers sort before alphanumeric ones
    if part.isdigit():
        return (0, int(part), "")
    return (1, 0, part)


def _sort_key(label: str) -> Tuple:
    parsed = parse_version(label)
    if parsed is None:
        # Unreadable labels sort before all parseable ones
        return (0, (), (), label)

    # coerce() moves a fourth release component ("1.0.0.10") into build metadata,
    # which semantic_version ignores when comparing
    release = (parsed.major, parsed.minor, parsed.patch) + tuple(
        int(part) for part in parsed.build if part.isdigit()
    )
    if parsed.prerelease:
        prerelease = (0,) + tuple(_identifier_key(part) for part in parsed.prerelease)
    else:
        prerelease = (1,)
    return (1, release, prerelease, label)


def sort_versions(versions: Iterable[str], reverse: bool = False) -> List[str]:
    """Return ``versions`` ordered by version precedence (ascending by default).

    Args:
        versions: Version labels; duplicates are kept, callers dedupe first.
        reverse: Newest first when True.

    Returns:
        list: Ordered labels.
    """
    return sorted(versions, key=_sort_key, reverse=reverse)
