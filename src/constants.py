"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_INPUT = 2
    NOT_FOUND = 3


class OutputFormats(Enum):
    """Output formats supported by the command line.

    Args:
        Enum (string): Output formats supported by the command line.
    """

    TEXT = "text"
    JSON = "json"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    NODE_MODULES_DIR = "node_modules"
    INDEX_BASENAME = "index"
    CORE_MODULE_PREFIX = "node:"
    FILE_URL_SCHEME = "file:"
    DEFAULT_EXTENSIONS = [".js", ".mjs", ".cjs", ".json"]
    DEFAULT_CONDITIONS = ["import", "require", "default"]
    # Declaration-only condition; never a runtime target
    EXCLUDED_CONDITIONS = ["types"]
    SUPPORTED_FORMATS = [OutputFormats.TEXT.value, OutputFormats.JSON.value]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    # Environment variables
    ENV_LOG_LEVEL = "RESOLVEWITH_LOG_LEVEL"
    ENV_CONFIG = "RESOLVEWITH_CONFIG"
    CONFIG_SECTION = "resolver"
