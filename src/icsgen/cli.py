"""Typer CLI for generating calendar fixtures."""

import logging
from pathlib import Path
from typing import Optional

import typer

from icsgen.config.settings import RuntimeConfig, load_options, options_from_dict
from icsgen.core.encoder import encode, render_document
from icsgen.core.generator import generate_document
from icsgen.exceptions.errors import IcsGenError
from icsgen.utils.paths import resolve_output_path

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.command()
def generate(
    options_file: Optional[Path] = typer.Argument(
        None, help="JSON file with generator options."
    ),
    out: Optional[str] = typer.Option(
        None, "--out", "-o", help="Output file; '-' or omitted writes to stdout."
    ),
    items: Optional[int] = typer.Option(None, "--items", "-n", help="Number of items."),
    start: Optional[str] = typer.Option(
        None, "--start", help="Earliest date, e.g. 'today', 'next monday', '2024-05-01'."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output."),
    zoneinfo_dir: Optional[Path] = typer.Option(
        None, "--zoneinfo-dir", help="libical zoneinfo directory with <TZID>.ics files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Generate a random iCalendar document of events and tasks."""
    if verbose:
        logging.getLogger("icsgen").setLevel(logging.DEBUG)

    try:
        runtime = RuntimeConfig.from_env()
        options = load_options(options_file)

        overrides = {}
        if runtime.zoneinfo_dir and not options.zoneinfo_dir:
            overrides["zoneinfoDir"] = runtime.zoneinfo_dir
        if zoneinfo_dir is not None:
            overrides["zoneinfoDir"] = str(zoneinfo_dir)
        if items is not None:
            overrides["items"] = items
        if start is not None:
            overrides["start"] = start
        if seed is not None:
            overrides["seed"] = seed
        if out is not None:
            overrides["outfile"] = out
        if overrides:
            options = options_from_dict(overrides, base=options)

        document = generate_document(options)
        content = render_document(encode(document))
    except IcsGenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    outfile = resolve_output_path(options.outfile)
    if outfile is None:
        typer.echo(content, nl=False)
    else:
        with open(outfile, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        logger.info("Wrote %s", outfile)
