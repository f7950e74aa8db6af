"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from flixor_core.config.settings import Settings
from flixor_core.constants import SERVICE_CACHE_PATTERNS
from flixor_core.models.cache import CacheStats
from flixor_infra.cache.manager import CacheManager
from flixor_services.factories import create_cache_manager
from flixor_services.invalidation import invalidate_service_cache
from flixor_services.observability import bind_cache_context, configure_logging

app = typer.Typer(
    name="flixor-cache",
    help="Inspect and maintain the persistent metadata cache",
)
console = Console()


def _load_settings(cache_dir: Path | None, verbose: bool) -> Settings:
    settings = Settings()
    if cache_dir is not None:
        settings.cache_dir = cache_dir
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    bind_cache_context(str(settings.disk_cache_path))
    return settings


def _format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


@app.command()
def stats(
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Override the cache root directory"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Show disk tier size and entry counts."""
    settings = _load_settings(cache_dir, verbose)
    cache = create_cache_manager(settings)
    result: CacheStats = asyncio.run(cache.stats())

    table = Table(title=f"Cache: {cache.directory}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Disk entries", str(result.disk_entries))
    table.add_row("Disk size", _format_bytes(result.disk_bytes))
    table.add_row("Memory limit", str(result.memory_limit))
    console.print(table)


@app.command()
def sweep(
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Override the cache root directory"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Delete expired and corrupt records now."""
    settings = _load_settings(cache_dir, verbose)
    cache = create_cache_manager(settings)
    removed = asyncio.run(cache.remove_expired())
    console.print(f"[bold green]Swept:[/bold green] {removed} expired record(s) removed")


@app.command()
def invalidate(
    pattern: str = typer.Argument(..., help="Key glob, '*' matches any run of characters"),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Override the cache root directory"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Remove every cached record whose key matches PATTERN."""
    settings = _load_settings(cache_dir, verbose)
    settings.disk_pattern_invalidation = True
    cache = create_cache_manager(settings)
    removed = asyncio.run(cache.invalidate_pattern(pattern))
    console.print(f"[bold green]Invalidated:[/bold green] {removed} record(s) matching {pattern!r}")


@app.command()
def clear(
    service: str | None = typer.Option(
        None,
        "--service",
        help=f"Only clear one service: {', '.join(sorted(SERVICE_CACHE_PATTERNS))}",
    ),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Override the cache root directory"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Delete every cached record, or only those of one service."""
    settings = _load_settings(cache_dir, verbose)
    if service is not None and service not in SERVICE_CACHE_PATTERNS:
        console.print(f"[red]Error:[/red] Unknown service {service!r}", style="bold")
        raise typer.Exit(code=1)

    cache = create_cache_manager(settings)
    if service is None:
        asyncio.run(cache.clear())
        console.print("[bold green]Cache cleared[/bold green]")
        return

    removed = asyncio.run(invalidate_service_cache(cache, service))
    console.print(f"[bold green]Cleared {service}:[/bold green] {removed} record(s) removed")


@app.command()
def show(
    key: str = typer.Argument(..., help="Exact cache key"),
    cache_dir: Path | None = typer.Option(
        None, "--cache-dir", help="Override the cache root directory"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Print the cached JSON value stored under KEY."""
    settings = _load_settings(cache_dir, verbose)
    cache = create_cache_manager(settings)
    value = asyncio.run(_lookup(cache, key))
    if value is None:
        console.print(f"[yellow]Miss:[/yellow] {key}")
        raise typer.Exit(code=1)
    console.print_json(data=value)


@app.command()
def version() -> None:
    """Show version."""
    console.print("flixor-cache v0.1.0")


async def _lookup(cache: CacheManager, key: str) -> Any:
    """Fetch ``key`` as untyped JSON."""
    return await cache.get(key, Any)  # type: ignore[arg-type]


if __name__ == "__main__":
    app()
