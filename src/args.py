"""Argument parsing functionality for resolvewith."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="resolvewith",
        description=(
            "resolvewith - resolve module specifiers to file URLs or core module ids"
        ),
        add_help=True,
    )

    parser.add_argument("specifiers",
                        metavar="SPECIFIER",
                        help="Relative path, absolute path, package name or core module name",
                        nargs="+")
    parser.add_argument("-b", "--base",
                        dest="BASE",
                        help="Directory, file or file URL to resolve from (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        default="text",
                        choices=Constants.SUPPORTED_FORMATS)

    # Resolver overrides (highest precedence over config file)
    parser.add_argument("--condition",
                        dest="CONDITIONS",
                        help="Export condition in priority order; repeat to build the list",
                        action="append",
                        type=str)
    parser.add_argument("--extension",
                        dest="EXTENSIONS",
                        help="File extension to probe in order; repeat to build the list",
                        action="append",
                        type=str)
    parser.add_argument("--prefer-module",
                        dest="PREFER_MODULE",
                        help="Prefer the package.json \"module\" field over \"main\"",
                        action="store_true")
    parser.add_argument("--strict",
                        dest="STRICT",
                        help="Fail on malformed package.json instead of ignoring it",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='WARNING')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console; rely on the exit code.",
                        action="store_true")

    return parser.parse_args(argv)
