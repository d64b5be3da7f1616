"""Argument parsing functionality for depwatch."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depwatch",
        description=(
            "depwatch - Find newer versions of Maven dependencies"
        ),
        add_help=True,
    )

    parser.add_argument("-p", "--package",
                        dest="SINGLE",
                        help="Component as groupId:artifactId:version (repeatable).",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-l", "--load_list",
                        dest="LIST_FROM_FILE",
                        help="Load list of groupId:artifactId:version tokens from a file",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    parser.add_argument("-m", "--mode",
                        dest="MODE",
                        help="summary: latest incremental/minor/major; latest: single best version (default: summary)",
                        action="store", type=str,
                        choices=Constants.MODES,
                        default="summary")
    parser.add_argument("--comparator",
                        dest="COMPARATOR",
                        help="Default version ordering scheme",
                        action="store", type=str.lower,
                        choices=Constants.SUPPORTED_COMPARATORS)
    parser.add_argument("--allow-snapshots",
                        dest="ALLOW_SNAPSHOTS",
                        help="Consider snapshot and pre-release versions.",
                        action="store_true",
                        default=None)
    parser.add_argument("--show-all",
                        dest="SHOW_ALL",
                        help="Report every component, including those without updates.",
                        action="store_true",
                        default=None)
    parser.add_argument("--search-reactor",
                        dest="SEARCH_REACTOR",
                        help="Also consider versions built locally (see --reactor).",
                        action="store_true",
                        default=None)
    parser.add_argument("--prefer-reactor",
                        dest="PREFER_REACTOR",
                        help="Always use the reactor version when one is found.",
                        action="store_true",
                        default=None)
    parser.add_argument("--reactor",
                        dest="REACTOR",
                        help="Locally built artifact as groupId:artifactId:version (repeatable).",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--repository-url",
                        dest="REPOSITORY_URL",
                        help=f"Maven repository base URL (default: {Constants.REPOSITORY_URL_MAVEN})",
                        action="store",
                        type=str)
    parser.add_argument("--workers",
                        dest="WORKERS",
                        help=f"Components evaluated in parallel (default: {Constants.DEFAULT_MAX_WORKERS})",
                        action="store",
                        type=int,
                        default=Constants.DEFAULT_MAX_WORKERS)

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=['json', 'csv'])

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help=f"Set the logging level (default: ${Constants.LOG_LEVEL_ENV} or INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log warnings and errors.",
                        action="store_true")
    parser.add_argument("--error-on-updates",
                        dest="ERROR_ON_UPDATES",
                        help="Exit with a non-zero status code if updates are available.",
                        action="store_true")

    return parser.parse_args(argv)
