"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NOT_FOUND = 2


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MANIFEST_DIR_ENV = "CARGO_MANIFEST_DIR"
    MANIFEST_FILE = "Cargo.toml"

    # Manifest keys
    DEPENDENCIES_KEY = "dependencies"
    DEV_DEPENDENCIES_KEY = "dev-dependencies"
    BUILD_DEPENDENCIES_KEY = "build-dependencies"
    TARGET_KEY = "target"
    RENAME_FIELD = "package"
    VERSION_FIELD = "version"

    # Passed to version-aware predicates when a declaration has no version
    VERSION_WILDCARD = "*"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "CRATEFIND_LOG_LEVEL"
    ENV_CONFIG = "CRATEFIND_CONFIG"
    CONFIG_FILE = "cratefind.yml"
