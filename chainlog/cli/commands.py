"""CLI commands for chainlog."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chainlog import __version__, __logo__

app = typer.Typer(
    name="chainlog",
    help=f"{__logo__} chainlog - In-memory commit chain ledger",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} chainlog v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
):
    """chainlog - In-memory commit chain ledger."""
    if verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("chainlog")


# ============================================================================
# Replay
# ============================================================================


@app.command()
def replay(
    script: Path = typer.Argument(..., help="JSON replay script"),
    strict: bool = typer.Option(False, "--strict", help="Require repositories to be created first"),
    oneline: bool = typer.Option(False, "--oneline", help="Print final logs in one-line format"),
    mermaid: bool = typer.Option(False, "--mermaid", help="Print final logs as Mermaid timelines"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Replay a script of repository operations and show the result."""
    from chainlog.config.loader import load_config
    from chainlog.ledger.errors import LedgerError
    from chainlog.ledger.manager import RepositoryManager
    from chainlog.ledger.replay import load_script, run_steps
    from chainlog.ledger.visualize import (
        format_commit_log,
        format_commit_oneline,
        generate_mermaid_timeline,
    )

    if not script.exists():
        console.print(f"[red]Script not found: {script}[/red]")
        raise typer.Exit(1)

    config = load_config(config_path)
    manager = RepositoryManager.from_config(config)

    try:
        names, steps = load_script(script)
        for name in names:
            manager.get_or_create(name)
        results = run_steps(manager, steps, strict=strict)
    except LedgerError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for i, result in enumerate(results, 1):
        value = result.value
        if result.step.op == "create":
            value = value.name
        console.print(f"[dim]{i:>3}[/dim] [cyan]{escape(str(result.step))}[/cyan] -> {escape(str(value))}")

    _print_repositories(manager)

    if mermaid:
        formatter = generate_mermaid_timeline
    elif oneline:
        formatter = format_commit_oneline
    else:
        formatter = format_commit_log
    for repo in manager.list_repositories():
        if repo.is_empty():
            continue
        console.print(f"\n[bold]{repo.name}[/bold]")
        console.print(formatter(repo, config.ledger.history_default), markup=False)


# ============================================================================
# Demo
# ============================================================================


@app.command()
def demo():
    """Merge two interleaved histories and print the result."""
    from chainlog.ledger.clock import LogicalClock
    from chainlog.ledger.manager import RepositoryManager
    from chainlog.ledger.visualize import format_commit_oneline, format_repositories

    manager = RepositoryManager(clock=LogicalClock())
    first = manager.create("first")
    second = manager.create("second")

    first.commit("Jan")
    second.commit("Feb")
    first.commit("Mar")
    second.commit("Apr")
    second.commit("May")

    console.print("[bold]Before synchronize[/bold]")
    console.print(format_repositories(manager), markup=False)

    manager.synchronize("first", "second")

    console.print("\n[bold]After synchronize[/bold]")
    console.print(format_repositories(manager), markup=False)
    console.print()
    console.print(format_commit_oneline(first), markup=False)


# ============================================================================
# Config Commands
# ============================================================================

config_app = typer.Typer(help="Manage chainlog configuration")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show(
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Show the effective configuration."""
    from chainlog.config.loader import get_config_path, load_config

    path = config_path or get_config_path()
    config = load_config(path)

    source = str(path) if path.exists() else "defaults"
    console.print(f"\n[bold]Configuration[/bold] [dim]({source})[/dim]")

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    ledger = config.ledger
    table.add_row("Clock:", ledger.clock)
    if ledger.clock == "logical":
        table.add_row("Clock step:", f"{ledger.logical_step_seconds}s")
    table.add_row("First id:", str(ledger.id_start))
    table.add_row("Timestamp format:", ledger.timestamp_format)
    table.add_row("History lines:", str(ledger.history_default))

    console.print(table)


def _print_repositories(manager) -> None:
    """Helper to print a table of repositories."""
    table = Table()
    table.add_column("Repository", style="cyan")
    table.add_column("Head", justify="right")
    table.add_column("Commits", justify="right")

    for repo in manager.list_repositories():
        table.add_row(repo.name, repo.head() or "[dim]empty[/dim]", str(repo.size()))

    console.print(table)


if __name__ == "__main__":
    app()
