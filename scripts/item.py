from pathlib import Path
from pprint import pprint

import click

from scripts.utils import fail, load_registry


@click.command()
@click.argument("id", type=int)
@click.option("--items", type=click.Path(path_type=Path), default=None, help="items.dat to read")
def item(id: int, items: Path | None) -> None:
    registry = load_registry(items)
    try:
        pprint(registry.get(id))
    except KeyError as e:
        fail(str(e.args[0]))
