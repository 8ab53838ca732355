from pathlib import Path

import click

from scripts.utils import load_registry


@click.command()
@click.argument("name")
@click.option("-n", default=20, type=int, help="number of results")
@click.option("--items", type=click.Path(path_type=Path), default=None, help="items.dat to read")
def search(name: str, n: int, items: Path | None) -> None:
    registry = load_registry(items)
    for i, (ent, score) in reversed(list(enumerate(registry.search(name, n=n, return_scores=True), 1))):
        line = f"{i:<5} {ent.id:<10} {ent.name_str:<30} {score:<6.2f} {ent.type.name}"
        print(f"\x1b[2m{line}\x1b[0m" if i % 5 == 0 else line)
