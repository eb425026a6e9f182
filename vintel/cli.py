"""
VINTEL CLI - look up a VIN or licence plate from the terminal
"""
import json
import sys

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vintel import __version__
from vintel.exceptions import UsageError, VintelError
from vintel.models import Aggregate
from vintel.normalize import clean
from vintel.pipeline import build_pipeline
from vintel.report import MAX_REPORT_HITS
from vintel.settings import reload_settings
from vintel.utils import get_logger, link_domain, setup_logging
from vintel.vin import CHECK_DIGIT_INDEX, expected_check_digit

console = Console()
logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════
# MAIN CLI GROUP
# ═══════════════════════════════════════════════════════════════════

@click.group()
@click.version_option(version=__version__)
def main():
    """
    VINTEL - Vehicle identifier intelligence

    Decode a VIN or plate, search the web for it, flag risks and
    summarise the findings.
    """
    load_dotenv()


# ═══════════════════════════════════════════════════════════════════
# LOOKUP
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('query', required=False)
@click.option('--json', 'as_json', is_flag=True, help='Print the full result as JSON')
@click.option('--log-level', default=None, help='Override VINTEL_LOG_LEVEL')
def lookup(query, as_json, log_level):
    """Enrich a VIN or licence plate"""
    settings = reload_settings()
    setup_logging(log_level or settings.log_level, settings.log_file)

    try:
        pipeline = build_pipeline(settings)
        aggregate = pipeline.run(query)
    except UsageError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        console.print('Usage: vintel lookup "<VIN or plate>"')
        sys.exit(1)
    except VintelError as e:
        logger.debug("Lookup failed", exc_info=True)
        console.print(f"\n[red]✗ Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(aggregate.model_dump_json(indent=2))
        return

    _print_result(aggregate)


def _print_result(aggregate: Aggregate) -> None:
    console.print("\n[bold blue]=== MARKERS ===[/bold blue]")
    table = Table(show_header=True)
    table.add_column("Marker", style="cyan")
    table.add_column("Status")
    table.add_column("Note", style="magenta")
    for name, entry in (aggregate.markers or {}).items():
        status = "[green]OK[/green]" if entry.ok else "[yellow]WARN[/yellow]"
        table.add_row(name, status, entry.note)
    console.print(table)

    console.print("\n[bold blue]=== FACTS ===[/bold blue]")
    facts = aggregate.facts.to_record() if aggregate.facts else {}
    console.print_json(json.dumps(facts))

    console.print("\n[bold blue]=== SOURCES ===[/bold blue]")
    hits = (aggregate.web_hits or [])[:MAX_REPORT_HITS]
    if not hits:
        console.print("(no sources)")
    for hit in hits:
        domain = link_domain(hit.link) or "link"
        console.print(f"• {escape(hit.title)} [dim]\\[{domain}][/dim]")

    console.print("\n[bold blue]=== REPORT ===[/bold blue]")
    console.print(escape(aggregate.report or "(no report)"))


# ═══════════════════════════════════════════════════════════════════
# CHECKSUM
# ═══════════════════════════════════════════════════════════════════

@main.command()
@click.argument('vin')
def checksum(vin):
    """Validate a VIN check digit offline"""
    value = clean(vin)
    expected = expected_check_digit(value)
    if expected is None:
        console.print(f"[red]✗ {escape(value or repr(vin))} is not a 17-character VIN[/red]")
        sys.exit(1)

    actual = value[CHECK_DIGIT_INDEX]
    table = Table(title="VIN Check Digit")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("VIN", value)
    table.add_row("Check digit", actual)
    table.add_row("Expected", expected)
    table.add_row("Valid", "yes" if actual == expected else "no")
    console.print(table)


if __name__ == '__main__':
    main()
