"""
Web Step Engine - CLI Entry Point.

Checks binding files without a browser, by resolving them in dry-run mode.

Usage:
    web-step-engine validate bindings.yaml
    web-step-engine resolve bindings.yaml "search field"
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from web_step_engine import __version__
from web_step_engine.config import load_config
from web_step_engine.engine.context import WebContext
from web_step_engine.exceptions import BrowserError, WebStepEngineError
from web_step_engine.scopes import load_bindings
from web_step_engine.utils.logging import configure_logging

# Create the CLI app
app = typer.Typer(
    name="web-step-engine",
    help="Resolve and validate web test bindings",
    add_completion=False,
)

console = Console()


def _dry_run_context(bindings: Path, config: Optional[Path], verbose: bool) -> WebContext:
    """Build a dry-run context with the bindings loaded into the feature scope."""
    settings = load_config(config_path=config, run={"dry_run": True})
    configure_logging(settings.logging, "DEBUG" if verbose else "WARNING")
    context = WebContext(settings=settings, driver_factory=_no_browser)
    count = load_bindings(bindings, context.store.feature_scope)
    console.print(f"[dim]Loaded {count} binding(s) from {escape(str(bindings))}[/dim]")
    return context


def _no_browser():
    raise BrowserError("No browser is started in dry-run mode")


@app.command()
def validate(
    bindings: Path = typer.Argument(..., help="YAML file of bindings"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Resolve every element locator in a bindings file.
    
    Exits with code 1 if any locator fails to resolve.
    """
    try:
        context = _dry_run_context(bindings, config, verbose)
    except WebStepEngineError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    
    elements = sorted({
        key[: -len("/locator")]
        for key, _ in context.store.visible_entries_with_prefix("")
        if key.endswith("/locator")
    })
    
    table = Table(title="Locator bindings")
    table.add_column("Element", style="cyan")
    table.add_column("Locator")
    table.add_column("Status")
    
    failures = 0
    for element in elements:
        try:
            binding = context.get_locator_binding(element)
            table.add_row(escape(element), escape(str(binding)), "[green]✓[/green]")
        except WebStepEngineError as e:
            failures += 1
            table.add_row(escape(element), escape(str(e)), "[red]✗[/red]")
    
    console.print(table)
    if failures:
        console.print(f"[red]{failures} of {len(elements)} locator(s) failed to resolve[/red]")
        raise typer.Exit(1)
    console.print(f"[green]All {len(elements)} locator(s) resolved[/green]")


@app.command()
def resolve(
    bindings: Path = typer.Argument(..., help="YAML file of bindings"),
    name: str = typer.Argument(..., help="Name of the attribute to resolve"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Resolve a single attribute without a browser.
    
    Values that need the browser or an evaluator show as placeholders such
    as `$[javascript:...]`.
    """
    try:
        context = _dry_run_context(bindings, config, verbose)
        value = context.get_attribute(name)
    except WebStepEngineError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    console.print(value, markup=False, highlight=False)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]Web Step Engine[/bold] v{__version__}")


if __name__ == "__main__":
    app()
