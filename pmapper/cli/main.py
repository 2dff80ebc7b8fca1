"""
Main CLI entry point for pmapper.

This module defines the main Click CLI group and its commands.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from pmapper import __version__
from pmapper.core import PmapperException, get_config, get_logger, setup_logging
from pmapper.processing import parallel_map
from pmapper.cli.utils import KEY_VALUE, load_target, parse_value, read_items_file, split_pairs

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """
    pmapper - parallel map with a progress bar.

    Applies a Python function to every item of a file on a pool of worker
    processes, shows progress as items complete and prints the results
    in input order.

    Examples:

      # Square every number in numbers.txt with 4 workers
      pmapper run mymodule:square numbers.txt --data-arg x --workers 4

      # Pass extra arguments alongside each item
      pmapper run mymodule:scale numbers.json -d x --arg 3 --kwarg offset=1

      # Show the effective configuration
      pmapper info
    """
    try:
        config = get_config()
    except PmapperException as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    setup_logging(
        level=config.log_level,
        log_to_file=config.log_to_file,
        log_dir=config.log_dir
    )

    if verbose:
        logging.getLogger("pmapper").setLevel(logging.DEBUG)
        for handler in logging.getLogger("pmapper").handlers:
            handler.setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


@cli.command()
@click.argument("target")
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--data-arg", "-d", required=True, help="Parameter of TARGET that receives each item")
@click.option("--arg", "-a", "extra_args", multiple=True, help="Extra positional argument (JSON or string)")
@click.option("--kwarg", "-k", "extra_kwargs", type=KEY_VALUE, multiple=True, help="Extra keyword argument as KEY=VALUE")
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Worker pool size (default: CPU count)")
@click.option("--chunksize", type=click.IntRange(min=1), help="Items per dispatch (default: sqrt heuristic)")
@click.option("--backend", type=click.Choice(["process", "thread"]), help="Worker pool backend")
@click.option("--column", help="Column to read from a CSV items file (default: first)")
@click.option("--no-progress", is_flag=True, help="Don't render the progress bar")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write results to this JSON file instead of stdout")
def run(
    target: str,
    items_file: Path,
    data_arg: str,
    extra_args: tuple,
    extra_kwargs: tuple,
    workers: int,
    chunksize: int,
    backend: str,
    column: str,
    no_progress: bool,
    output: Path
):
    """
    Map TARGET (package.module:function) over the items in ITEMS_FILE.

    ITEMS_FILE may be a JSON array, a CSV file or a text file with one
    item per line. Results are written as a JSON array.
    """
    try:
        func = load_target(target)
        items = read_items_file(items_file, column=column)

        results = parallel_map(
            func,
            items,
            data_arg,
            *[parse_value(raw) for raw in extra_args],
            max_workers=workers,
            chunksize=chunksize,
            backend=backend,
            show_progress=False if no_progress else None,
            description=target,
            **split_pairs(extra_kwargs)
        )
    except (PmapperException, ValueError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    payload = json.dumps(results, indent=2, default=str)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n")
        err_console.print(f"[green]Wrote {len(results)} results to {output}[/green]")
    else:
        click.echo(payload)


@cli.command()
def info():
    """
    Show the effective configuration.
    """
    config = get_config()

    console.print(Panel.fit(
        f"[bold cyan]pmapper {__version__}[/bold cyan]\n"
        f"Workers: {config.num_workers}\n"
        f"Backend: {config.backend}\n"
        f"Chunk size: {config.chunksize or 'auto (sqrt(N) * workers / 2)'}\n"
        f"Progress bar: {'on' if config.show_progress else 'off'}\n"
        f"Log level: {config.log_level}\n"
        f"Log to file: {config.log_dir if config.log_to_file else 'off'}",
        title="Configuration"
    ))


if __name__ == "__main__":
    cli()
