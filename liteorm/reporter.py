from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from liteorm.schema.catalog import CatalogSnapshot
from liteorm.schema.sync import SchemaChange


def print_catalog(catalog: CatalogSnapshot, console: Optional[Console] = None) -> None:
    """
    Render the tables, columns and created indexes of a catalog snapshot.
    """
    console = console or Console()

    if not catalog.tables:
        console.print("[yellow]No tables.[/yellow]")
        return

    table = Table(title="Catalog", box=box.ROUNDED)
    table.add_column("Table", style="cyan", no_wrap=True)
    table.add_column("Column", style="magenta")
    table.add_column("Type", style="green")
    table.add_column("Index", style="yellow")

    for name in sorted(catalog.tables):
        indexed = {
            info.column: info.name
            for info in catalog.indexes.values()
            if info.table == name and info.column is not None
        }
        for position, (column, sql_type) in enumerate(catalog.tables[name].items()):
            table.add_row(
                name if position == 0 else "",
                column,
                sql_type,
                indexed.get(column, ""),
            )
        table.add_section()

    console.print(table)


def print_changes(changes: List[SchemaChange], console: Optional[Console] = None) -> None:
    """
    Render the DDL applied by a schema synchronization.
    """
    console = console or Console()

    if not changes:
        console.print("[green]Schema already up to date.[/green]")
        return

    table = Table(title="Schema changes", box=box.ROUNDED, caption=f"{len(changes)} statement(s)")
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Table", style="magenta")
    table.add_column("Target", style="yellow")
    table.add_column("Statement", style="dim")

    for change in changes:
        table.add_row(change.action.value, change.table, change.target, change.statement)

    console.print(table)


__all__ = ["print_catalog", "print_changes"]
