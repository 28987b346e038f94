"""Argument parsing functionality for podfetch."""

import argparse


def _add_package_argument(parser, help_text):
    parser.add_argument("package",
                        help=help_text,
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="podfetch",
        description=(
            "podfetch - CocoaPods version, metadata and source archive fetcher"
        ),
        add_help=True,
    )

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: $PODFETCH_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--specs-endpoint",
                        dest="SPECS_ENDPOINT",
                        help="Base URL of the browsable Specs repository tree",
                        action="store",
                        type=str)
    parser.add_argument("--specs-raw-endpoint",
                        dest="SPECS_RAW_ENDPOINT",
                        help="Base URL of the raw Specs repository content",
                        action="store",
                        type=str)
    parser.add_argument("--metadata-endpoint",
                        dest="METADATA_ENDPOINT",
                        help="Base URL of the package index website",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="ACTION", metavar="ACTION")
    subparsers.required = True

    versions = subparsers.add_parser("versions", help="List known versions of a pod")
    _add_package_argument(versions, "Pod name or package URL, i.e: Alamofire, pkg:cocoapods/Alamofire")

    latest = subparsers.add_parser("latest", help="Print the highest known version of a pod")
    _add_package_argument(latest, "Pod name or package URL")

    metadata = subparsers.add_parser("metadata", help="Print the pod page and podspec text")
    _add_package_argument(metadata, "Pod name or package URL")

    download = subparsers.add_parser("download", help="Download the source archive of a pod version")
    _add_package_argument(download, "Pod with version, i.e: Alamofire@5.4.0, pkg:cocoapods/Alamofire@5.4.0")
    download.add_argument("--no-extract",
                          dest="NO_EXTRACT",
                          help="Save the archive file instead of extracting it",
                          action="store_true")
    download.add_argument("-d", "--directory",
                          dest="DOWNLOAD_DIR",
                          help="Directory that receives downloads",
                          action="store",
                          type=str)

    return parser.parse_args(argv)
