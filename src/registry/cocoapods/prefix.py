"""Shard prefix used by the CocoaPods Specs repository."""

import hashlib


def get_prefix(package_name: str) -> str:
    """Return the ``a/b/c`` shard path for ``package_name``.

    The Specs repository nests each pod under the first three hex characters
    of the MD5 digest of its UTF-8 name, e.g. "Alamofire" -> "d/a/2".
    """
    # MD5 is mandated by the repository layout, not used for security
    digest = hashlib.md5(package_name.encode("utf-8"), usedforsecurity=False).hexdigest()
    return "/".join(digest[:3])
