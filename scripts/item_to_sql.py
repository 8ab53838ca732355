from pathlib import Path

import click

from itemsdat.core.growtopia.sql import export
from scripts.utils import load_registry


@click.command()
@click.option("--items", type=click.Path(path_type=Path), default=None, help="items.dat to read")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=Path("items.db"), show_default=True)
def items_to_sql(items: Path | None, output: Path) -> None:
    db = load_registry(items).db
    count = export(db, output)
    print(f"wrote {count} items to {output}")
