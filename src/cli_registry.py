"""CLI Registry utilities."""

import logging
import sys

from constants import ExitCodes, PackageManagers


def get_driver(pkgtype, config=None):
    """Return the driver for a package manager type.

    Args:
        pkgtype: Package manager type, i.e. "cocoapods".
        config: Optional driver configuration.
    """
    if pkgtype == PackageManagers.COCOAPODS.value:
        from registry.cocoapods import CocoapodsDriver  # pylint: disable=import-outside-toplevel
        return CocoapodsDriver(config)
    logging.error("Selected package type %s is not supported.", pkgtype)
    sys.exit(ExitCodes.INPUT_ERROR.value)
