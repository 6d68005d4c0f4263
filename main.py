#!/usr/bin/env python3
"""
glvdctl -- Query the Garden Linux Vulnerability Database from the terminal.

Usage:
  glvdctl version list
  glvdctl cve list 1592.0
  glvdctl cve show CVE-2024-1234
  glvdctl cve show CVE-2024-1234 --json
  glvdctl --no-color cve list 1592.0

Environment variables:
  GLVD_API_URL           Base URL of the GLVD API (default: public GLVD /v1 endpoint)
  GLVD_REQUEST_TIMEOUT   Request timeout in seconds (default: 30)
  GLVD_VULNERABLE_FIELD  JSON key of the per-CVE vulnerability flag: vulnerable or isVulnerable
  GLVD_LOG_LEVEL         Logging level (default: WARNING)
"""

import argparse
import logging
import re
import sys
from typing import Optional

from pydantic import ValidationError

from glvd.config import get_settings
from glvd.fetcher import FetchError, fetch_detail, fetch_summaries, fetch_versions
from glvd.formatter import print_detail, print_summaries, print_versions, to_json
from glvd.models import CVE_PATTERN
from glvd.styles import disable_color

logger = logging.getLogger("glvd.cli")

_CVE_RE = re.compile(CVE_PATTERN)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def version_list(args: argparse.Namespace) -> None:
    versions = fetch_versions()
    if args.output_format == "json":
        print(to_json(versions))
    else:
        print_versions(versions)


def cve_list(args: argparse.Namespace) -> None:
    summaries = fetch_summaries(args.version)
    if args.output_format == "json":
        print(to_json(summaries))
    else:
        print_summaries(summaries)


def cve_show(args: argparse.Namespace) -> None:
    record = fetch_detail(args.cve_id)
    if args.output_format == "json":
        print(to_json(record))
    else:
        print_detail(record)


def _cve_id(value: str) -> str:
    """argparse type: normalize and validate a CVE id before any request is made."""
    cve_id = value.strip().upper()
    if not _CVE_RE.match(cve_id):
        raise argparse.ArgumentTypeError(f"'{value}' doesn't look like a valid CVE ID. Expected format: CVE-YYYY-NNNNN")
    return cve_id


def _version(value: str) -> str:
    version = value.strip()
    if not version:
        raise argparse.ArgumentTypeError("expected Garden Linux version as positional argument")
    return version


def _describe_settings_error(e: ValidationError) -> str:
    """One line per failed GLVD_* setting, without pydantic's traceback noise."""
    parts = []
    for err in e.errors():
        field = ".".join(str(p) for p in err["loc"])
        parts.append(f"GLVD_{field.upper()}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_output_flags(parser: argparse.ArgumentParser, suppress: bool = False) -> None:
    """Add the flags every command accepts.

    Leaf subcommands get copies with SUPPRESS defaults so that a flag given
    before the subcommand is not reset by the subcommand's own default.
    """
    group = parser.add_argument_group("output options")
    group.add_argument(
        "--format",
        choices=["terminal", "json"],
        default=argparse.SUPPRESS if suppress else None,
        metavar="FORMAT",
        help="Output format: terminal (default) or json",
    )
    for flags, help_text in [
        (("--json",), "Output structured JSON (shorthand for --format json)"),
        (("--no-color",), "Disable ANSI color codes in terminal output"),
        (("-v", "--verbose"), "Log HTTP requests and failures (debug level)"),
    ]:
        group.add_argument(
            *flags,
            action="store_true",
            default=argparse.SUPPRESS if suppress else False,
            help=help_text,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glvdctl",
        description="Inspect the Garden Linux Vulnerability Database (GLVD).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  glvdctl version list
  glvdctl cve list 1592.0
  glvdctl cve show CVE-2024-1234
  glvdctl --format json cve list 1592.0 > cves.json
  glvdctl cve show CVE-2024-1234 --json
        """,
    )
    _add_output_flags(parser)

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    version = commands.add_parser("version", help="list Garden Linux releases known in GLVD")
    version_commands = version.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")
    version_list_parser = version_commands.add_parser("list", help="list Garden Linux releases known in GLVD")
    _add_output_flags(version_list_parser, suppress=True)
    version_list_parser.set_defaults(handler=version_list)

    cve = commands.add_parser("cve", aliases=["cves"], help="inspect CVEs known to GLVD")
    cve_commands = cve.add_subparsers(dest="subcommand", metavar="SUBCOMMAND")
    cve_list_parser = cve_commands.add_parser("list", help="list known CVEs for this Garden Linux version")
    cve_list_parser.add_argument("version", type=_version, metavar="VERSION", help="Garden Linux version, e.g. 1592.0")
    _add_output_flags(cve_list_parser, suppress=True)
    cve_list_parser.set_defaults(handler=cve_list)
    cve_show_parser = cve_commands.add_parser("show", help="show details about this CVE")
    cve_show_parser.add_argument("cve_id", type=_cve_id, metavar="CVE-ID", help="CVE identifier")
    _add_output_flags(cve_show_parser, suppress=True)
    cve_show_parser.set_defaults(handler=cve_show)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"  [!] Invalid configuration: {_describe_settings_error(e)}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Apply color preference before any output
    if args.no_color:
        disable_color()

    # --json is a shorthand alias for --format json
    args.output_format = args.format or ("json" if args.json else "terminal")

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0

    try:
        handler(args)
    except FetchError as e:
        logger.debug("Command %s %s failed", args.command, args.subcommand, exc_info=True)
        print(f"  [!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
