from __future__ import annotations

import importlib
import sys
from typing import List, Optional, Type

import typer

from liteorm.config import get_settings
from liteorm.database import Database
from liteorm.domain.models import Model
from liteorm.reporter import print_catalog, print_changes
from liteorm.utils.logging import configure_logging

app = typer.Typer(help="liteorm: SQLite object mapper utilities.")

DB_OPTION = typer.Option(
    None,
    "--db",
    "-d",
    help="Database file path (default from LITEORM_DB_PATH).",
)


def _load_model(reference: str) -> Type[Model]:
    """Import a record type given as 'package.module:ClassName'."""
    module_name, sep, class_name = reference.partition(":")
    if not sep or not module_name or not class_name:
        raise typer.BadParameter(f"expected MODULE:CLASS, got {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import {module_name!r}: {exc}") from exc
    model = getattr(module, class_name, None)
    if not isinstance(model, type) or not issubclass(model, Model):
        raise typer.BadParameter(f"{reference!r} is not a liteorm Model")
    return model


@app.command()
def info(db: Optional[str] = DB_OPTION) -> None:
    """
    Show effective configuration values and the SQLite version.
    """
    settings = get_settings()
    with Database(db, settings) as database:
        typer.echo(
            f"DB={database.path} | sqlite={database.version()} | "
            f"log_level={settings.log_level} echo_sql={settings.echo_sql}"
        )


@app.command()
def catalog(db: Optional[str] = DB_OPTION) -> None:
    """
    List tables, columns and indexes of the database.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    with Database(db, settings) as database:
        print_catalog(database.catalog())


@app.command()
def sync(
    models: List[str] = typer.Argument(..., help="Record types as MODULE:CLASS."),
    db: Optional[str] = DB_OPTION,
) -> None:
    """
    Create or migrate tables and indexes for the given record types.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    model_types = [_load_model(reference) for reference in models]
    with Database(db, settings) as database:
        print_changes(database.tables(*model_types))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
