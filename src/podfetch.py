"""podfetch - CocoaPods version, metadata and source archive fetcher

    Returns:
        int: Exit code
"""
import dataclasses
import logging
import sys

import requests

from args import parse_args
from cli_registry import get_driver
from common.archive import ArchiveError
from common.http_client import FetchError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes, Constants
from registry.cocoapods import PackageIdentifier, load_config


def build_config(args):
    """Resolve driver configuration, applying CLI overrides last."""
    config = load_config(getattr(args, "CONFIG", None))
    overrides = {}
    if getattr(args, "SPECS_ENDPOINT", None):
        overrides["specs_endpoint"] = args.SPECS_ENDPOINT
    if getattr(args, "SPECS_RAW_ENDPOINT", None):
        overrides["specs_raw_endpoint"] = args.SPECS_RAW_ENDPOINT
    if getattr(args, "METADATA_ENDPOINT", None):
        overrides["metadata_endpoint"] = args.METADATA_ENDPOINT
    if getattr(args, "DOWNLOAD_DIR", None):
        overrides["download_dir"] = args.DOWNLOAD_DIR
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def _emit(lines):
    for line in lines:
        print(line)


def run(args):
    """Execute the requested action and return an exit code."""
    logger = logging.getLogger(__name__)

    try:
        purl = PackageIdentifier.parse(args.package)
    except ValueError as e:
        logging.error("Invalid package: %s", e)
        return ExitCodes.INPUT_ERROR.value
    if purl.ecosystem not in Constants.SUPPORTED_PACKAGES:
        logging.error("Selected package type %s is not supported.", purl.ecosystem)
        return ExitCodes.INPUT_ERROR.value

    try:
        config = build_config(args)
    except ValueError as e:
        logging.error("Invalid configuration: %s", e)
        return ExitCodes.FILE_ERROR.value
    driver = get_driver(purl.ecosystem, config)

    if is_debug_enabled(logger):
        logger.debug(
            "Dispatching action",
            extra=extra_context(
                event="function_entry",
                component="cli",
                action=args.ACTION,
                target=str(purl),
                package_manager=purl.ecosystem,
            )
        )

    if args.ACTION == "versions":
        versions = driver.enumerate_versions(purl)
        _emit(versions)
        return ExitCodes.SUCCESS.value if versions else ExitCodes.EXIT_WARNINGS.value

    if args.ACTION == "latest":
        latest = driver.latest_version(purl)
        if latest is None:
            logging.warning("No versions found for %s.", purl.name)
            return ExitCodes.EXIT_WARNINGS.value
        _emit([latest])
        return ExitCodes.SUCCESS.value

    if args.ACTION == "metadata":
        metadata = driver.get_metadata(purl)
        if metadata is None:
            return ExitCodes.EXIT_WARNINGS.value
        _emit([metadata])
        return ExitCodes.SUCCESS.value

    if args.ACTION == "download":
        try:
            paths = driver.download_version(purl, extract=not args.NO_EXTRACT)
        except (requests.RequestException, FetchError) as e:
            logging.error("Download of %s failed: %s", purl, e)
            return ExitCodes.CONNECTION_ERROR.value
        except (ArchiveError, OSError) as e:
            logging.error("Unable to store %s: %s", purl, e)
            return ExitCodes.FILE_ERROR.value
        _emit(paths)
        return ExitCodes.SUCCESS.value if paths else ExitCodes.EXIT_WARNINGS.value

    logging.error("Unknown action %s.", args.ACTION)
    return ExitCodes.INPUT_ERROR.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))
    logging.debug("Arguments parsed.")
    sys.exit(run(args))


if __name__ == "__main__":
    main()
