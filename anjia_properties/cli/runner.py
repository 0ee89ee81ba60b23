# anjia_properties/cli/runner.py

"""Headless CLI runner that reuses the resolution pipeline."""

import json
import logging
import sys
from typing import Any

from rich.console import Console
from rich.table import Table

from anjia_properties.models.filter_set import FilterSet
from anjia_properties.models.property import Property
from anjia_properties.models.results import SourceTag
from anjia_properties.services.health_checker import HealthChecker
from anjia_properties.services.resolution_pipeline import ResolutionPipeline

logger = logging.getLogger("anjia.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _dump_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _print_table(properties: list[Property], title: str) -> None:
    """Render a Rich table of properties to stdout."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim")
    table.add_column("Title", max_width=50)
    table.add_column("Location", max_width=30)
    table.add_column("Type", style="magenta")
    table.add_column("Beds", justify="center")
    table.add_column("Price", justify="right", style="green")

    for p in properties:
        table.add_row(
            p.id,
            p.title[:50],
            p.location,
            p.property_type,
            p.bedrooms,
            f"{p.currency} {p.price}",
        )

    Console().print(table)


def _source_note(source: SourceTag, error: str | None) -> None:
    if source is SourceTag.MOCK_ERROR:
        _err.print(f"[red]{error or 'All sources unavailable'}[/red]")
    elif source in (SourceTag.STATIC, SourceTag.FALLBACK):
        _err.print(f"[yellow]Served from {source.value} data[/yellow]")
    else:
        _err.print(f"[dim]source={source.value}[/dim]")


async def cli_property(
    property_id: str,
    output_format: str,
    pipeline: ResolutionPipeline | None = None,
) -> int:
    """Resolve one property and print it (0=real data, 1=synthetic)."""
    property_id = property_id.strip()
    if not property_id:
        _err.print("[red]Property ID is required[/red]")
        return 1

    pipeline = pipeline or ResolutionPipeline()
    try:
        resolution = await pipeline.resolve_property(property_id)
    finally:
        await pipeline.close()

    _source_note(resolution.source, resolution.error)
    if output_format == "table":
        _print_table([resolution.property], f"Property {property_id}")
    else:
        _dump_json(resolution.to_dict())
    return 1 if resolution.source is SourceTag.MOCK_ERROR else 0


async def cli_listings(
    params: dict[str, Any],
    page: int,
    output_format: str,
    pipeline: ResolutionPipeline | None = None,
) -> int:
    """Resolve one listing page and print it (0=ok, 1=nothing found)."""
    filters = FilterSet.from_params(params)
    _err.print(
        f"[bold]Listing:[/bold] page {page}  "
        f"[dim]{filters.describe()}[/dim]"
    )

    pipeline = pipeline or ResolutionPipeline()
    try:
        result = await pipeline.resolve_listing(filters, page)
    finally:
        await pipeline.close()

    _source_note(result.source, result.error)
    if not result.items:
        _err.print("[yellow]No properties found.[/yellow]")
        return 1

    _err.print(
        f"[green]✓ {len(result.items)} of {result.total_count} properties"
        f" (page {result.current_page}/{result.total_pages})[/green]"
    )
    if output_format == "table":
        _print_table(list(result.items), "Properties")
    else:
        _dump_json(result.to_dict())
    return 0


async def run_health_check(checker: HealthChecker | None = None) -> int:
    """Run a connectivity health check on the CMS sources."""
    _err.print("[bold]Running CMS health check...[/bold]")
    checker = checker or HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Source Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Source", style="bold")
    table.add_column("URL", overflow="fold", style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]OK[/green]"
        elif r.status == "slow":
            status = "[yellow]SLOW[/yellow]"
        else:
            status = "[red]DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "-"
        )
        table.add_row(
            r.source_id, r.url, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
