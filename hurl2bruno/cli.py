"""Command-line interface for Hurl to Bruno.

This module provides a Click-based CLI for regenerating the Bruno API test
collection from Hurl files and for checking that the committed collection
is in sync with them (for CI).
"""

import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hurl2bruno import __version__
from hurl2bruno.core.bru_generator import BruGenerator, file_name
from hurl2bruno.core.collection_checker import CollectionChecker
from hurl2bruno.core.hurl_parser import HurlParser
from hurl2bruno.core.settings import ConverterSettings, load_settings
from hurl2bruno.core.translator import UNHANDLED_PREFIX, assert_to_js
from hurl2bruno.exceptions import Hurl2BrunoException

console = Console()
err_console = Console(stderr=True)

# Column width for the diff kind label, e.g. "extra:   "
_KIND_WIDTH = len("changed:") + 1


def source_options(func):
    """Options shared by commands that read Hurl files and a collection."""
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        help="Settings file (default: ./hurl2bruno.yaml if present)",
    )(func)
    func = click.option(
        "--output",
        "-o",
        type=click.Path(file_okay=False),
        help="Bruno collection directory (default: api/bruno)",
    )(func)
    func = click.option(
        "--source",
        "-s",
        type=click.Path(file_okay=False),
        help="Directory containing .hurl files (default: api/hurl)",
    )(func)
    return func


def _resolve_settings(
    config_path: Optional[str], source: Optional[str], output: Optional[str]
) -> ConverterSettings:
    return load_settings(config_path).with_overrides(source_dir=source, output_dir=output)


def _fail(message: str) -> None:
    err_console.print(f"\n[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    sys.exit(1)


def _run_check(settings: ConverterSettings) -> None:
    """Print the drift report and exit 1 if the collection is out of sync."""
    checker = CollectionChecker(BruGenerator(settings))
    diff = checker.check(settings.source_dir, settings.output_dir)

    if diff.has_changes:
        err_console.print("Bruno collection is out of sync with Hurl files:", soft_wrap=True)
        for entry in diff.entries:
            label = f"{entry.kind}:".ljust(_KIND_WIDTH)
            err_console.print(f"  {label}{escape(entry.path)}", soft_wrap=True, highlight=False)
        err_console.print(
            "\nRun `hurl2bruno generate` to regenerate.", soft_wrap=True, highlight=False
        )
        sys.exit(1)

    console.print("[green]Bruno collection is up to date.[/green]")


@click.group()
@click.version_option(version=__version__, prog_name="hurl2bruno")
def cli():
    """Hurl to Bruno - Generate a Bruno collection from Hurl API tests.

    Every .hurl file becomes a Bruno folder and every request in it a .bru
    file. Use 'check' in CI to make sure the committed collection is current.
    """
    pass


@cli.command()
@source_options
@click.option(
    "--check",
    "check_only",
    is_flag=True,
    help="Only report differences with the committed collection",
)
@click.option("--verbose", "-v", is_flag=True, help="Show requests written per folder")
def generate(
    source: Optional[str],
    output: Optional[str],
    config_path: Optional[str],
    check_only: bool,
    verbose: bool,
):
    """Delete and regenerate the Bruno collection from Hurl files.

    Example:
        hurl2bruno generate
        hurl2bruno generate --source api/hurl --output api/bruno
        hurl2bruno generate --check
    """
    try:
        settings = _resolve_settings(config_path, source, output)

        if check_only:
            _run_check(settings)
            return

        generator = BruGenerator(settings)
        result = generator.regenerate(settings.source_dir, settings.output_dir)

        if verbose:
            table = Table(title="Bruno Collection", show_header=True)
            table.add_column("Folder", style="cyan")
            table.add_column("Requests", style="green", justify="right")
            for folder, count in result.folders.items():
                table.add_row(folder, str(count))
            console.print(table)

        console.print(
            f"Generated {result.files_written} files in {escape(result.output_dir)}/",
            soft_wrap=True,
            highlight=False,
        )

    except (Hurl2BrunoException, OSError) as e:
        _fail(str(e))


@cli.command()
@source_options
def check(source: Optional[str], output: Optional[str], config_path: Optional[str]):
    """Check that the Bruno collection matches the Hurl files.

    Regenerates into a temporary directory and compares file by file.
    Exits with status 1 when any file is missing, extra or changed.

    Example:
        hurl2bruno check
        hurl2bruno check --output api/bruno
    """
    try:
        _run_check(_resolve_settings(config_path, source, output))
    except (Hurl2BrunoException, OSError) as e:
        _fail(str(e))


@cli.command()
@click.argument("hurl_path", type=click.Path(exists=True, dir_okay=False))
def inspect(hurl_path: str):
    """Show the requests parsed from a single Hurl file.

    Example:
        hurl2bruno inspect api/hurl/articles.hurl
    """
    try:
        requests = HurlParser().parse(hurl_path)
    except OSError as e:
        _fail(str(e))
        return

    if not requests:
        console.print(f"\n[yellow]No requests found in {escape(hurl_path)}[/yellow]")
        return

    table = Table(title=f"{len(requests)} request(s) in {hurl_path}", show_header=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("File", style="cyan")
    table.add_column("Method", style="green")
    table.add_column("URL")
    table.add_column("Status", justify="right")
    table.add_column("Captures", justify="right")
    table.add_column("Asserts", justify="right")

    for i, request in enumerate(requests):
        table.add_row(
            str(i + 1),
            file_name(request, i),
            request.method,
            escape(request.url),
            str(request.status_code) if request.status_code is not None else "-",
            str(len(request.captures)),
            str(len(request.asserts)),
        )

    console.print()
    console.print(table)

    unhandled = [
        (i + 1, line)
        for i, request in enumerate(requests)
        for line in request.asserts
        if assert_to_js(line).startswith(UNHANDLED_PREFIX)
    ]
    if unhandled:
        console.print(
            Panel(
                "\n".join(f"[{n}] {escape(line)}" for n, line in unhandled),
                title="Asserts that will not translate",
                border_style="yellow",
            )
        )


def main():
    """Entry point for CLI application."""
    cli()


if __name__ == "__main__":
    main()
