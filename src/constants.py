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
    EXIT_UPDATES = 3
    CONFIG_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REPOSITORY_URL_MAVEN = "https://repo1.maven.org/maven2"
    MAVEN_METADATA_FILE = "maven-metadata.xml"
    SUPPORTED_COMPARATORS = ["maven", "numeric", "semver", "pep440"]
    DEFAULT_COMPARATOR = "maven"
    MODES = ["summary", "latest"]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_ENV = "DEPWATCH_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 0.3
    HTTP_CACHE_TTL_SEC = 300
    DEFAULT_MAX_WORKERS = 4
    REPORT_LINE_WIDTH = 68
