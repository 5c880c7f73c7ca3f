import json
import logging
from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oastid.config import OASTConfig
from oastid.tools.oast.decoder import DecodedPreamble, decode
from oastid.tools.oast.domains import match_known_suffix
from oastid.tools.oast.extractor import OASTMatch, extract
from oastid.tools.oast.validator import validate_domain


logger = logging.getLogger(__name__)


def _print_json(console: Console, data: Any) -> None:
    console.out(json.dumps(data, indent=2), highlight=False)


def build_decode_table(results: Iterable[DecodedPreamble], title: str = "Decoded OAST Domains") -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Domain", style="white", overflow="fold")
    table.add_column("Issued (UTC)", style="green")
    table.add_column("Machine", style="magenta")
    table.add_column("PID", justify="right")
    table.add_column("Counter", justify="right")
    table.add_column("K-sort", style="cyan")
    table.add_column("Campaign", style="cyan")
    table.add_column("Nonce", style="dim", overflow="fold")

    for result in results:
        if not result.valid:
            table.add_row(
                result.original,
                Text(f"✗ {result.error}", style="bold red"),
                "",
                "",
                "",
                "",
                "",
                "",
            )
            continue

        issued_at = result.issued_at
        table.add_row(
            result.original,
            issued_at.strftime("%Y-%m-%d %H:%M:%S") if issued_at else "",
            result.machine_id_hex,
            str(result.pid),
            str(result.counter),
            result.ksort,
            result.campaign,
            result.nonce,
        )

    return table


def build_match_table(matches: Iterable[OASTMatch], source: str) -> Table:
    table = Table(title=f"OAST Domains in {source}", show_header=True, header_style="bold cyan")
    table.add_column("Offset", justify="right", style="dim")
    table.add_column("Domain", style="bold white", overflow="fold")
    table.add_column("Provider", style="magenta")

    for match in matches:
        table.add_row(str(match.start), match.full, match.suffix)

    return table


def run_validate(domains: list[str], config: OASTConfig, console: Console) -> int:
    results = [
        {"domain": d, "valid": validate_domain(d), "suffix": match_known_suffix(d)}
        for d in domains
    ]

    if config.output_format == "json":
        _print_json(console, results)
    else:
        for item in results:
            line = Text()
            if item["valid"]:
                line.append("✓ ", style="bold green")
            else:
                line.append("✗ ", style="bold red")
            line.append(item["domain"], style="white")
            if item["suffix"]:
                line.append(f"  ({item['suffix']})", style="dim")
            console.print(line)

    return 0 if all(item["valid"] for item in results) else 1


def run_decode(domains: list[str], config: OASTConfig, console: Console) -> int:
    results = [decode(d) for d in domains]

    if config.output_format == "json":
        _print_json(console, [r.to_dict() for r in results])
    else:
        console.print(build_decode_table(results))

    return 0 if all(r.valid for r in results) else 1


def run_extract(
    sources: list[tuple[str, str]],
    config: OASTConfig,
    console: Console,
    decode_matches: bool = False,
) -> int:
    """Scan each ``(name, text)`` source and report the OAST domains found."""
    report: list[dict[str, Any]] = []
    total = 0

    for name, text in sources:
        matches = extract(text)
        total += len(matches)
        logger.info(f"{name}: {len(matches)} OAST domain(s)")

        entry: dict[str, Any] = {"source": name, "domains": [m.full for m in matches]}
        decoded: list[DecodedPreamble] = []
        if decode_matches:
            decoded = [decode(m.full) for m in matches]
            if not config.show_invalid:
                decoded = [d for d in decoded if d.valid]
            entry["decoded"] = [d.to_dict() for d in decoded]
        report.append(entry)

        if config.output_format == "table" and matches:
            console.print(build_match_table(matches, name))
            if decode_matches and decoded:
                console.print(build_decode_table(decoded, title=f"Decoded ({name})"))

    if config.output_format == "json":
        _print_json(console, report)
    else:
        summary = Text()
        summary.append("📊 ", style="bold")
        summary.append(f"{total} OAST domain(s) ", style="bold green" if total else "bold yellow")
        summary.append(f"in {len(sources)} source(s)", style="white")
        console.print(Panel(summary, title="[bold cyan]OAST Extraction", border_style="cyan"))

    return 0 if total else 1
