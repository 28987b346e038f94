"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    EXIT_WARNINGS = 3
    INPUT_ERROR = 4


class PackageManagers(Enum):
    """Package managers supported by the program.

    Args:
        Enum (string): Package managers supported by the program.
    """

    COCOAPODS = "cocoapods"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    COCOAPODS_SPECS_ENDPOINT = "https://github.com/CocoaPods/Specs/tree/master"
    COCOAPODS_SPECS_RAW_ENDPOINT = "https://raw.githubusercontent.com/CocoaPods/Specs/master"
    COCOAPODS_METADATA_ENDPOINT = "https://cocoapods.org"
    DOWNLOAD_DIR = "."
    SUPPORTED_PACKAGES = [
        PackageManagers.COCOAPODS.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "podfetch/0.1"

    # Environment overrides
    ENV_LOG_LEVEL = "PODFETCH_LOG_LEVEL"
    ENV_SPECS_ENDPOINT = "PODFETCH_COCOAPODS_SPECS_ENDPOINT"
    ENV_SPECS_RAW_ENDPOINT = "PODFETCH_COCOAPODS_SPECS_RAW_ENDPOINT"
    ENV_METADATA_ENDPOINT = "PODFETCH_COCOAPODS_METADATA_ENDPOINT"
    ENV_DOWNLOAD_DIR = "PODFETCH_DOWNLOAD_DIR"

    # Config file lookup, first hit wins
    DEFAULT_CONFIG_PATHS = [
        "./podfetch.yml",
        "./podfetch.yaml",
        "~/.config/podfetch/podfetch.yml",
    ]

    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300
