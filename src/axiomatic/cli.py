"""Axiomatic command-line driver."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from axiomatic import __version__, parse
from axiomatic.config import CONFIG_NAME, AxiomaticConfig, find_config, load_config
from axiomatic.errors import LexError, ParseError
from axiomatic.tokenizer import Tokenizer
from axiomatic.visitor import NodeCounter

log = logging.getLogger("axiomatic")


def _configure_logging(verbosity: int) -> None:
    """0 -> WARNING, 1 -> INFO, 2+ -> DEBUG, on stderr."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt="%(levelname)s %(name)s: %(message)s")
    )
    log.setLevel(level)
    log.handlers[:] = [handler]
    log.propagate = False


def _display(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _check_file(path: Path, config: AxiomaticConfig) -> bool:
    """Parse one definition file, reporting the outcome. Returns True if OK."""
    name = _display(path, config.root)
    log.info("parsing %s", path)
    try:
        parse(path.read_text())
    except LexError as e:
        click.echo(f"error: {name}: {e.message} at offset {e.offset}", err=True)
        return False
    except ParseError as e:
        if config.check.furthest_offset:
            click.echo(
                f"error: {name}: not a definition (stopped at offset {e.offset})",
                err=True,
            )
        else:
            click.echo(f"error: {name}: not a definition", err=True)
        return False
    click.echo(f"ok {name}")
    return True


@click.group()
@click.version_option(__version__, prog_name="axiomatic")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
def main(verbose: int) -> None:
    """Lex and parse algebraic-structure definitions."""
    _configure_logging(verbose)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Print the tokens of a definition file, one per line."""
    source = Path(file).read_text()
    try:
        for tok in Tokenizer(source):
            click.echo(str(tok))
    except LexError as e:
        click.echo(f"error: {e.message} at offset {e.offset}", err=True)
        raise SystemExit(1)


@main.command(name="parse")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def parse_cmd(file: str) -> None:
    """Parse a definition file and print how many nodes of each shape it has."""
    source = Path(file).read_text()
    try:
        root = parse(source)
    except LexError as e:
        click.echo(f"error: {e.message} at offset {e.offset}", err=True)
        raise SystemExit(1)
    except ParseError as e:
        click.echo(f"error: not a definition (stopped at offset {e.offset})", err=True)
        raise SystemExit(1)

    counter = NodeCounter()
    root.accept(counter)
    click.echo(f"definition {root.name.name}")
    for shape, count in sorted(counter.counts.items()):
        click.echo(f"  {shape}: {count}")


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
def check(path: str) -> None:
    """Parse every definition file of a project."""
    try:
        config_path = find_config(Path(path))
    except FileNotFoundError:
        click.echo(f"error: no {CONFIG_NAME} found", err=True)
        raise SystemExit(1)

    config = load_config(config_path)
    click.echo(f"checking {config.package.name}...")
    files = config.source_files()
    if not files:
        click.echo(f"warning: no {config.check.extension} files found", err=True)
        return

    failed = 0
    for def_file in files:
        if not _check_file(def_file, config):
            failed += 1

    if failed:
        click.echo(f"{failed} of {len(files)} file(s) failed", err=True)
        raise SystemExit(1)
    click.echo(f"checked {config.package.name}: {len(files)} file(s), no errors")
