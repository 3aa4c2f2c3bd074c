"""Command-line interface for Pagesmith.

This module defines the CLI commands using Click framework.

Commands:
- generate: Generate the static site.
- list: List the content pages of a site.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .config import PREVIEW_BASE_URL
from .errors import GenerationError


def _info(text: str) -> None:
    click.echo(f"[{click.style('INFO', fg='yellow')}]\t{text}")


def _done(text: str) -> None:
    click.echo(f"[{click.style('DONE', fg='green')}]\t{text}")


def _error(text: str) -> None:
    click.echo(f"[{click.style('ERROR', fg='red')}]\t{text}", err=True)


def _project_root(path: str | None) -> Path:
    root = Path(path or Path.cwd()).resolve()
    if not root.is_dir():
        _error("Invalid directory provided")
        raise SystemExit(2)
    return root


@click.group()
@click.version_option(version=__version__, prog_name="pagesmith")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Pagesmith static site generator."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


@cli.command()
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option(
    "--serve",
    is_flag=True,
    help=f"Generate for local preview (base_url forced to {PREVIEW_BASE_URL})",
)
def generate(path: str | None, serve: bool):
    """Generate static files."""
    project_root = _project_root(path)
    from .build import build_site

    overrides = {}
    _info("Generate website")
    if serve:
        overrides = {"site": {"base_url": PREVIEW_BASE_URL}}
        _info("You should re-generate before deploy")
    try:
        result = build_site(project_root, overrides=overrides)
    except GenerationError as exc:
        _error(exc.message)
        raise SystemExit(2) from None
    for message in result.messages:
        _done(message)


@cli.command("list")
@click.argument("kind", type=click.Choice(["pages"]))
@click.argument("path", required=False, type=click.Path(file_okay=False))
def list_command(kind: str, path: str | None):
    """List the content pages."""
    project_root = _project_root(path)
    from .build import list_pages

    _info("List pages")
    try:
        names = list_pages(project_root)
    except GenerationError as exc:
        _error(exc.message)
        raise SystemExit(2) from None
    for name in names:
        click.echo(f"- {name}")


def main():
    """Entry point for the CLI application."""
    cli()
