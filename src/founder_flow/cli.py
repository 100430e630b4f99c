#!/usr/bin/env python3
"""
Command line tools for inspecting scraped founder listings

Usage:
    founder-flow classify entries.json [--all] [--query "fintech"]
    founder-flow validate https://acme.com/careers hi@acme.com --context apply_url
    founder-flow patterns
    founder-flow preview https://www.linkedin.com/in/jane
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from founder_flow.config import Settings, load_settings
from founder_flow.models import RawEntry
from founder_flow.utils.link_classifier import choose_links, filter_actionable_entries
from founder_flow.utils.link_preview import fetch_link_preview_image
from founder_flow.utils.url_validator import (
    get_blocked_patterns,
    get_default_validator,
    validate_url_with_details,
)

logger = logging.getLogger(__name__)

console = Console()

MISSING = "[dim]missing[/dim]"

# (column title, ClassifiedLinks attribute, validator context)
LINK_COLUMNS = (
    ("LinkedIn", "linkedin_url", "linkedin_url"),
    ("Apply", "apply_url", "apply_url"),
    ("Roles", "roles_url", "careers_url"),
    ("Website", "company_url", "company_url"),
)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_entries(path: Path) -> list[dict[str, Any]]:
    """
    Load raw entries from a JSON file

    Accepts either a JSON array of records or an object with an "entries" array.

    Raises:
        ValueError: If the file does not contain a list of records
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("entries", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of entries")

    return [record for record in data if isinstance(record, dict)]


def _link_cell(url: str | None, context: str, log_results: bool) -> str:
    if url and get_default_validator().is_valid(url, log_results=log_results, context=context):
        return f"[green]{url}[/green]"
    return MISSING


def classify_command(args: argparse.Namespace, settings: Settings) -> int:
    """Classify links for every entry in a JSON file and print a table"""
    try:
        records = load_entries(Path(args.file))
    except (OSError, ValueError) as e:
        console.print(f"[bold red]Could not read entries:[/bold red] {e}")
        return 1

    logger.debug(f"Loaded {len(records)} entries from {args.file}")

    if args.all:
        entries = [RawEntry.from_record(record) for record in records]
    else:
        entries = filter_actionable_entries(records, search_query=args.query or "")

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Company", style="cyan")
    for title, _attr, _context in LINK_COLUMNS:
        table.add_column(title, overflow="fold")
    table.add_column("Email", style="blue")

    for entry in entries:
        links = choose_links(entry)
        cells = [
            _link_cell(getattr(links, attr), context, settings.log_validation)
            for _title, attr, context in LINK_COLUMNS
        ]
        table.add_row(
            entry.company or "Stealth",
            *cells,
            links.email or MISSING,
        )

    console.print(table)
    console.print(f"\n[bold]{len(entries)}[/bold] of {len(records)} entries shown")
    return 0


def validate_command(args: argparse.Namespace, _settings: Settings) -> int:
    """Print detailed validation results for each URL"""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("URL", overflow="fold")
    table.add_column("Valid")
    table.add_column("Reason", style="yellow")

    all_valid = True
    for url in args.urls:
        result = validate_url_with_details(url, context=args.context)
        all_valid = all_valid and result.is_valid
        table.add_row(
            result.original_url,
            "[green]yes[/green]" if result.is_valid else "[red]no[/red]",
            result.reason or "",
        )

    console.print(table)
    return 0 if all_valid else 2


def patterns_command(_args: argparse.Namespace, _settings: Settings) -> int:
    """Print the blocked URL patterns"""
    patterns = get_blocked_patterns()
    for pattern in patterns:
        console.print(f"  {pattern}")
    console.print(f"\n[bold]{len(patterns)}[/bold] blocked patterns")
    return 0


def preview_command(args: argparse.Namespace, settings: Settings) -> int:
    """Print the og:image of a LinkedIn page"""
    image = fetch_link_preview_image(args.url, timeout=settings.preview_timeout)
    if image is None:
        console.print(f"[yellow]No preview image for[/yellow] {args.url}")
        return 1

    console.print(image)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="founder-flow", description="Classify and validate links in founder listings"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify = subparsers.add_parser("classify", help="Classify links in a JSON file of entries")
    classify.add_argument("file", help="JSON file with an array of raw entries")
    classify.add_argument(
        "--all", action="store_true", help="Include entries without actionable links"
    )
    classify.add_argument("--query", type=str, help="Only show entries matching this text")
    classify.set_defaults(handler=classify_command)

    validate = subparsers.add_parser("validate", help="Explain URL validation verdicts")
    validate.add_argument("urls", nargs="+", help="URLs to validate")
    validate.add_argument(
        "--context",
        type=str,
        default="unknown",
        choices=["apply_url", "company_url", "linkedin_url", "careers_url", "email", "unknown"],
        help="Field the URLs came from (default: unknown)",
    )
    validate.set_defaults(handler=validate_command)

    patterns = subparsers.add_parser("patterns", help="List blocked URL patterns")
    patterns.set_defaults(handler=patterns_command)

    preview = subparsers.add_parser("preview", help="Fetch the preview image of a LinkedIn URL")
    preview.add_argument("url", help="LinkedIn profile or company URL")
    preview.set_defaults(handler=preview_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red]\n{e}")
        return 1

    setup_logging(settings)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
