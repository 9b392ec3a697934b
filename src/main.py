# src/main.py — v1
"""CLI entry point: optimize, toon, zon, unzon, filter commands.

Usage:
    tokenslim optimize [file] [--type text|markdown|json] [--stats]
    tokenslim toon [file] [--schema '{"id": "ID"}']
    tokenslim zon [file]
    tokenslim unzon [file]
    tokenslim filter [file] [--filters extra-whitespace,repeated-lines]

Input is read from ``file`` or stdin; results go to stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import uuid
from pathlib import Path

from tokenslim.core.models import CONTENT_TYPES
from tokenslim.logging.context import clear_context, set_request_context
from tokenslim.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        _setup_logging(args.verbose)
        set_request_context(uuid.uuid4().hex[:12])
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1
    finally:
        clear_context()


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tokenslim",
        description=f"tokenslim v{__version__}: token-cost reducer for LLM content",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- optimize ---
    p_optimize = subparsers.add_parser(
        "optimize", help="Sanitize and normalize text, markdown or JSON",
    )
    _add_input_argument(p_optimize)
    p_optimize.add_argument(
        "-t", "--type", dest="content_type", default="text",
        choices=list(CONTENT_TYPES),
        help="Content class (default: text)",
    )
    p_optimize.add_argument(
        "--stats", action="store_true",
        help="Print a size comparison to stderr",
    )
    p_optimize.set_defaults(func=_cmd_optimize)

    # --- toon ---
    p_toon = subparsers.add_parser(
        "toon", help="Render JSON as Toon (display only)",
    )
    _add_input_argument(p_toon)
    p_toon.add_argument(
        "--schema", default=None,
        help="JSON object renaming columns, e.g. '{\"id\": \"ID\"}'",
    )
    p_toon.set_defaults(func=_cmd_toon)

    # --- zon ---
    p_zon = subparsers.add_parser("zon", help="Encode JSON as Zon")
    _add_input_argument(p_zon)
    p_zon.set_defaults(func=_cmd_zon)

    # --- unzon ---
    p_unzon = subparsers.add_parser("unzon", help="Decode Zon back to JSON")
    _add_input_argument(p_unzon)
    p_unzon.set_defaults(func=_cmd_unzon)

    # --- filter ---
    p_filter = subparsers.add_parser(
        "filter", help="Filter already-generated agent output",
    )
    _add_input_argument(p_filter)
    p_filter.add_argument(
        "--filters", default=None,
        help="Comma-separated filter names or regexes (default: from settings)",
    )
    p_filter.set_defaults(func=_cmd_filter)

    return parser


def _add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "file", type=Path, nargs="?", default=None,
        help="Input file (default: stdin)",
    )


def _cmd_optimize(args: argparse.Namespace) -> int:
    """Optimize content for its content class."""
    optimizer = _build_optimizer()
    content = _read_input(args.file)
    if not optimizer.settings.optimization_enabled:
        print(content)
        return 0

    result = optimizer.optimize_content(content, args.content_type)
    print(result)
    if args.stats:
        report = optimizer.report(content, result)
        print(
            f"chars: {report.original_chars} -> {report.optimized_chars}, "
            f"tokens (est.): {report.original_tokens_est} -> "
            f"{report.optimized_tokens_est} ({report.tokens_saved} saved, {report.savings_pct}%)",
            file=sys.stderr,
        )
    return 0


def _cmd_toon(args: argparse.Namespace) -> int:
    """Render JSON input as Toon."""
    schema = None
    if args.schema:
        try:
            schema = json.loads(args.schema)
        except json.JSONDecodeError as e:
            logger.error("Invalid --schema: %s", e)
            return 1
        if not isinstance(schema, dict):
            logger.error("Invalid --schema: expected a JSON object")
            return 1

    optimizer = _build_optimizer()
    print(optimizer.json_to_toon(_read_input(args.file), schema))
    return 0


def _cmd_zon(args: argparse.Namespace) -> int:
    """Encode JSON input as Zon."""
    from tokenslim.codecs.zon import ZonEncodeError

    optimizer = _build_optimizer()
    try:
        print(optimizer.json_to_zon(_read_input(args.file)))
    except ZonEncodeError as e:
        logger.error("%s", e)
        return 1
    return 0


def _cmd_unzon(args: argparse.Namespace) -> int:
    """Decode Zon input to indented JSON."""
    from tokenslim.codecs.zon import ZonDecodeError

    optimizer = _build_optimizer()
    try:
        print(optimizer.zon_to_json(_read_input(args.file)))
    except ZonDecodeError as e:
        logger.error("%s", e)
        return 1
    return 0


def _cmd_filter(args: argparse.Namespace) -> int:
    """Filter agent output."""
    from tokenslim.filters.output_filter import InvalidFilterPatternError

    optimizer = _build_optimizer()
    content = _read_input(args.file)
    if not optimizer.settings.output_filter_enabled:
        print(content)
        return 0

    if args.filters is None:
        filters = optimizer.settings.default_output_filters_list
    else:
        filters = [f.strip() for f in args.filters.split(",") if f.strip()]

    try:
        print(optimizer.filter_output(content, filters))
    except InvalidFilterPatternError as e:
        logger.error("%s", e)
        return 1
    return 0


def _build_optimizer():
    from tokenslim.api.facade import TokenOptimizer
    from tokenslim.config.settings import load_settings

    return TokenOptimizer(settings=load_settings())


def _read_input(path: Path | None) -> str:
    """Read the whole input file, or stdin when no file is given."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _setup_logging(verbose: bool) -> None:
    """Configure logging from settings; console output goes to stderr."""
    from tokenslim.config.settings import load_settings
    from tokenslim.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
