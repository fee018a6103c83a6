"""
Command line interface for simlsh.

Computes fingerprints for texts given as arguments or on stdin and compares
texts by the Hamming distance of their fingerprints.
"""

import base64
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import DEFAULT_CONFIG_NAME, FingerprintConfig
from .errors import SimLSHError
from .pipeline.fingerprint import Fingerprinter
from .similarity import hamming_distance, similarity
from .utils.logging_setup import log_operation, setup_logging

logger = logging.getLogger(__name__)
console = Console()
err_console = Console(stderr=True)

ENCODERS = {
    "base64": lambda raw: base64.b64encode(raw).decode("ascii"),
    "hex": lambda raw: raw.hex(),
}


def _build_config(config_path, width, chars, digest):
    config = FingerprintConfig.load_or_default(config_path)
    overrides = config.to_dict()
    if width is not None:
        overrides["shingle_width"] = width
    if chars:
        overrides["tokenizer"] = "chars"
    if digest:
        overrides["digest"] = digest
    return FingerprintConfig.from_dict(overrides)


@click.group()
@click.version_option(__version__, prog_name="simlsh")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """Locality sensitive hashes for near-duplicate text detection."""
    ctx.ensure_object(dict)
    setup_logging(level="DEBUG" if verbose else "WARNING")


def _config_options(func):
    func = click.option("--config", "config_path", type=click.Path(), help="Path to config file")(func)
    func = click.option("--digest", help="hashlib algorithm, e.g. md5, sha1, sha256")(func)
    func = click.option("--chars", is_flag=True, help="Tokenize into graphemes instead of words")(func)
    func = click.option("--width", "-w", type=int, help="Shingle width (1 = bag of words)")(func)
    return func


@cli.command(name="fingerprint")
@click.argument("texts", nargs=-1)
@_config_options
@click.option(
    "--encoding",
    type=click.Choice(sorted(ENCODERS)),
    default="base64",
    show_default=True,
    help="Output encoding",
)
@click.option("--stdin", "from_stdin", is_flag=True, help="Read one text per line from stdin")
def fingerprint_cmd(texts, width, chars, digest, config_path, encoding, from_stdin):
    """Print the fingerprint of each TEXT."""
    try:
        config = _build_config(config_path, width, chars, digest)
        fingerprinter = Fingerprinter.from_config(config)
    except (SimLSHError, FileNotFoundError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    if from_stdin:
        texts = tuple(texts) + tuple(line.rstrip("\n") for line in sys.stdin)
    if not texts:
        raise click.UsageError("no input text given")

    encode = ENCODERS[encoding]
    for raw in fingerprinter.fingerprint_many(texts):
        click.echo(encode(raw))


@cli.command(name="compare")
@click.argument("reference")
@click.argument("others", nargs=-1, required=True)
@_config_options
def compare_cmd(reference, others, width, chars, digest, config_path):
    """Compare REFERENCE against each of OTHERS."""
    try:
        config = _build_config(config_path, width, chars, digest)
        fingerprinter = Fingerprinter.from_config(config)
    except (SimLSHError, FileNotFoundError) as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    base = fingerprinter.fingerprint(reference)
    table = Table(title=f"Similarity to {escape(repr(reference[:40]))} ({len(base) * 8} bits)")
    table.add_column("Text", style="cyan")
    table.add_column("Hamming", justify="right")
    table.add_column("Similarity", justify="right", style="green")

    for text in others:
        other = fingerprinter.fingerprint(text)
        table.add_row(escape(text[:60]), str(hamming_distance(base, other)), f"{similarity(base, other):.3f}")

    console.print(table)


@cli.group(name="config")
def config_group():
    """Manage fingerprint configuration."""
    pass


@config_group.command(name="init")
@click.option(
    "--path",
    type=click.Path(),
    default=DEFAULT_CONFIG_NAME,
    help="Path for config file"
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_init(path, force):
    """Write a default configuration file."""
    config_path = Path(path)

    if config_path.exists() and not force:
        if not click.confirm(f"Config file {path} already exists. Overwrite?"):
            console.print("[yellow]Aborted[/yellow]")
            return

    log_operation(logger, "config_init", path=str(config_path))
    FingerprintConfig().save_to_file(config_path)
    console.print(f"[green]✓ Created config file at {path}[/green]")


@config_group.command(name="show")
@click.option(
    "--path",
    type=click.Path(exists=True),
    help="Path to config file"
)
def config_show(path):
    """Display the effective configuration."""
    try:
        config = FingerprintConfig.load_or_default(path)
    except SimLSHError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    table = Table(title="simlsh configuration")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in config.to_dict().items():
        table.add_row(key, escape(repr(value)))
    console.print(table)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
