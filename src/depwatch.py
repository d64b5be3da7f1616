"""depwatch - report newer versions of Maven dependencies.

    Returns:
        int: Exit code
"""
import logging
import sys
from typing import Dict, List

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import LoadedConfig, load_config
from constants import ExitCodes
from registry.maven.discovery import MavenMetadataProvider
from registry.reactor import ReactorProvider
from registry.static import StaticMetadataProvider
from report import export_csv, export_json, render_lines
from versioning.errors import ConfigError
from versioning.models import ComponentRequest, EvaluationMode, FailureKind
from versioning.parser import parse_cli_token
from versioning.service import UpdateService
from versioning.settings import EngineSettings

logger = logging.getLogger(__name__)


def load_pkgs_file(file_name: str) -> List[str]:
    """Loads component tokens from a file, skipping blanks and # comments.

    Raises:
        OSError: if the file cannot be read
    """
    with open(file_name, encoding="utf-8") as file:
        lines = [line.strip() for line in file]
    return [line for line in lines if line and not line.startswith("#")]


def build_requests(args, loaded: LoadedConfig) -> List[ComponentRequest]:
    """Config components, then list files, then -p tokens; later ones win per coordinate.

    Raises:
        OSError: if a list file cannot be read
        ValueError: if a token is not a coordinate
    """
    requests: Dict[str, ComponentRequest] = {}
    for request in loaded.requests:
        requests[request.coordinate] = request
    for file_name in args.LIST_FROM_FILE:
        for token in load_pkgs_file(file_name):
            request = parse_cli_token(token, source="list")
            requests[request.coordinate] = request
    for token in args.SINGLE:
        request = parse_cli_token(token)
        requests[request.coordinate] = request
    return list(requests.values())


def apply_cli_overrides(settings: EngineSettings, args) -> None:
    """CLI flags take precedence over configuration defaults."""
    settings.override(
        comparator=args.COMPARATOR,
        include_snapshots=args.ALLOW_SNAPSHOTS,
        show_all=args.SHOW_ALL,
        search_reactor=args.SEARCH_REACTOR,
        prefer_reactor=args.PREFER_REACTOR,
    )


def export(report, args) -> None:
    """Write the report to --output in the requested or inferred format."""
    fmt = args.OUTPUT_FORMAT
    if not fmt:
        fmt = "csv" if args.OUTPUT.lower().endswith(".csv") else "json"
    if fmt == "csv":
        export_csv(report, args.OUTPUT)
    else:
        export_json(report, args.OUTPUT)


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging("WARNING" if args.QUIET else args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug("CLI start", extra=extra_context(event="function_entry", component="cli", action="main"))

    try:
        loaded = load_config(args.CONFIG) if args.CONFIG else LoadedConfig()
    except ConfigError as exc:
        logging.error("%s", exc)
        return ExitCodes.CONFIG_ERROR.value
    apply_cli_overrides(loaded.settings, args)

    try:
        requests = build_requests(args, loaded)
    except OSError as exc:
        logging.error("Could not read component list: %s, aborting", exc)
        return ExitCodes.FILE_ERROR.value
    except ValueError as exc:
        logging.error("%s", exc)
        return ExitCodes.CONFIG_ERROR.value

    if not requests:
        logging.warning("No components to evaluate.")
        return ExitCodes.SUCCESS.value

    try:
        reactor = ReactorProvider(loaded.reactor + args.REACTOR)
    except ValueError as exc:
        logging.error("%s", exc)
        return ExitCodes.CONFIG_ERROR.value
    if loaded.settings.search_reactor and not reactor.coordinates():
        logging.warning("Reactor search is enabled but no reactor artifacts were given.")

    provider = StaticMetadataProvider(
        loaded.versions,
        fallback=MavenMetadataProvider(args.REPOSITORY_URL or loaded.repository_url),
    )
    service = UpdateService(
        provider,
        loaded.settings,
        reactor=reactor,
        max_workers=args.WORKERS,
        collect_trace=is_debug_enabled(logging.getLogger("versioning.service")),
    )
    mode = EvaluationMode(args.MODE)
    report = service.evaluate_all(requests, mode)
    if report.aborted is not None:
        return ExitCodes.CONFIG_ERROR.value

    for line in render_lines(report, mode):
        logging.info(line)

    if args.OUTPUT:
        try:
            export(report, args)
        except OSError as exc:
            logging.error("Output file couldn't be written to disk: %s", exc)
            return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug("CLI finished", extra=extra_context(
            event="function_exit", component="cli", action="main",
            count=len(report.outcomes), outcome="updates" if report.updates else "current"
        ))

    if report.outcomes and all(
        o.failure is not None and o.failure.kind is FailureKind.RETRIEVAL for o in report.outcomes
    ):
        return ExitCodes.CONNECTION_ERROR.value
    if args.ERROR_ON_UPDATES and report.updates:
        return ExitCodes.EXIT_UPDATES.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
