"""resolvewith - resolve module specifiers from the command line.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import Constants, ExitCodes, OutputFormats
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import build_config
from resolution import Resolver
from resolution.config import ConfigError
from resolution.errors import ResolutionError
from resolution.models import SpecifierKind

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments.

    Args:
        args: Parsed CLI arguments.
    """
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def describe(resolver, specifier, base):
    """Resolve one specifier and collect what the JSON output reports.

    Args:
        resolver (Resolver): Resolver to use.
        specifier (str): Specifier to resolve.
        base (str): Base path, or None for the working directory.

    Returns:
        dict: specifier, kind, resolved value and owning package details.
    """
    kind = resolver.classify(specifier)
    resolved = resolver.resolve(specifier, base)
    entry = {
        "specifier": specifier,
        "kind": kind.value,
        "resolved": resolved,
        "package": None,
    }
    descriptor = None
    if kind is SpecifierKind.PACKAGE:
        location = resolver.find_package(specifier, base)
        descriptor = location.descriptor if location else None
    elif resolved is not None and kind is SpecifierKind.PATH:
        descriptor = resolver.owning_package(resolved)
    if descriptor is not None:
        entry["package"] = {
            "name": descriptor.name,
            "version": str(descriptor.version) if descriptor.version else None,
            "type": descriptor.type,
            "path": descriptor.path,
        }
    return entry


def render(results, output_format):
    """Render resolution results for the console.

    Args:
        results (list): Entries as produced by describe().
        output_format (str): "text" or "json".

    Returns:
        str: Text to print.
    """
    if output_format == OutputFormats.JSON.value:
        return json.dumps(results, indent=2)
    lines = []
    for entry in results:
        value = entry["resolved"] if entry["resolved"] is not None else "null"
        lines.append(f"{entry['specifier']}\t{value}")
    return "\n".join(lines)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main", count=len(args.specifiers))
        )

    try:
        config = build_config(args)
    except ConfigError as e:
        logging.error("Configuration error: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)

    resolver = Resolver(config)
    results = []
    try:
        for specifier in args.specifiers:
            results.append(describe(resolver, specifier, args.BASE))
    except ResolutionError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.INVALID_INPUT.value)

    if is_debug_enabled(logger):
        stats = resolver.cache.stats()
        logger.debug(
            "Resolution cache: %d entries, %d resolved, %d not found",
            stats["total_entries"],
            stats["resolved_entries"],
            stats["not_found_entries"],
            extra=extra_context(event="cache_summary", component="cli", count=stats["total_entries"]),
        )

    if not args.QUIET:
        print(render(results, args.OUTPUT_FORMAT))

    missing = [r["specifier"] for r in results if r["resolved"] is None]
    if missing:
        logging.warning("Could not resolve: %s", ", ".join(missing))
        sys.exit(ExitCodes.NOT_FOUND.value)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
