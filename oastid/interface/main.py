import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from oastid import __version__
from oastid.config import OASTConfig
from oastid.tools.oast.extractor import ExtractionError

from .cli import run_decode, run_extract, run_validate


logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oastid",
        description="Recognize, validate and decode OAST callback domains.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of tables (overrides OASTID_OUTPUT)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides OASTID_LOG_LEVEL)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Check domains are well-formed OAST domains")
    validate_parser.add_argument("domains", nargs="+", metavar="DOMAIN")

    decode_parser = subparsers.add_parser("decode", help="Decode the preamble of OAST domains")
    decode_parser.add_argument("domains", nargs="+", metavar="DOMAIN")

    extract_parser = subparsers.add_parser("extract", help="Find OAST domains in files or stdin")
    extract_parser.add_argument("files", nargs="*", metavar="FILE", help="Files to scan (default: stdin)")
    extract_parser.add_argument("--decode", action="store_true", help="Also decode every match")

    return parser.parse_args(argv)


def setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_sources(files: list[str]) -> list[tuple[str, str]]:
    if not files:
        return [("<stdin>", sys.stdin.read())]

    sources = []
    for name in files:
        path = Path(name)
        sources.append((name, path.read_text(encoding="utf-8", errors="replace")))
    return sources


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = parse_arguments(argv)
    console = console or Console()

    try:
        config = OASTConfig(
            log_level=args.log_level,
            output_format="json" if args.json else None,
        )
    except ValueError as e:
        console.print(f"[bold red]Configuration error:[/] {escape(str(e))}")
        return 2

    setup_logging(config.log_level_value)

    if args.command == "validate":
        return run_validate(args.domains, config, console)

    if args.command == "decode":
        return run_decode(args.domains, config, console)

    try:
        sources = _read_sources(args.files)
        return run_extract(sources, config, console, decode_matches=args.decode)
    except OSError as e:
        logger.debug(f"Failed to read input: {e}")
        console.print(f"[bold red]Error reading input:[/] {escape(str(e))}")
        return 2
    except ExtractionError as e:
        console.print(f"[bold red]Extraction failed:[/] {escape(str(e))}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
