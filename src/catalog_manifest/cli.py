"""Typer-based command line interface for catalog-manifest."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

import typer
import yaml
from pydantic import ValidationError

from . import mirrors, releases, wares
from .errors import CatalogError
from .utils.config import CatalogConfig, load_config
from .utils.logging import configure_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Walks a warpforge catalog and joins information.",
)


@dataclass(slots=True)
class CliState:
    catalog_path: Path
    config: CatalogConfig


def _resolve_root(path: Path) -> Path:
    if not path.is_dir():
        raise typer.BadParameter(f"Path {path} is not a directory", param_hint="--catalog-path")
    return path


def _emit(ctx: typer.Context, build: Callable[[Path, CatalogConfig], Any]) -> None:
    state: CliState = ctx.obj
    try:
        document = build(state.catalog_path, state.config)
    except (CatalogError, OSError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))


@app.callback()
def main(
    ctx: typer.Context,
    catalog_path: Path = typer.Option(
        ..., "--catalog-path", "-c", help="The catalog directory to walk.", metavar="DIRECTORY"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML configuration file."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    try:
        config = load_config(config_path)
    except (ValidationError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"invalid configuration: {exc}", param_hint="--config") from exc
    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = CliState(catalog_path=_resolve_root(catalog_path), config=config)


@app.command("releases")
def releases_command(ctx: typer.Context) -> None:
    """Print a JSON object of references and ware IDs."""

    _emit(ctx, releases.collect)


@app.command("mirrors")
def mirrors_command(ctx: typer.Context) -> None:
    """Print a unified mirrors JSON object."""

    _emit(ctx, lambda root, config: mirrors.collect(root, config).as_record())


@app.command("wares")
def wares_command(ctx: typer.Context) -> None:
    """Print ware IDs and their fully qualified mirror locations."""

    _emit(ctx, wares.resolve_all)


if __name__ == "__main__":
    app()
