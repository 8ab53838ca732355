import logging
from pathlib import Path
import time

import click

from itemsdat.core.growtopia.report import write_report
from itemsdat.setting import setting
from scripts.utils import fail, load_registry

logger = logging.getLogger("parse")


@click.command()
@click.argument("items", required=False, type=click.Path(path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=setting.output_file, show_default=True, help="report file")
@click.option("-m", "--min", "--minified", "minified", is_flag=True, help="only write id and name")
def parse(items: Path | None, output: Path, minified: bool) -> None:
    """Decode ITEMS and write it as a '|' delimited text report."""
    start = time.perf_counter()

    db = load_registry(items).db
    try:
        written = write_report(db, output, minified=minified, delimiter=setting.delimiter)
    except OSError as e:
        fail(f"Failed to open output file {output}: {e}")

    elapsed = time.perf_counter() - start
    logger.debug(f"report for {db.item_count} items written to {output}")

    print(f"Info: items.dat version: {db.version}, item count: {db.item_count}")
    print(f"Success: wrote {written} bytes to {output} in {elapsed:.4f} seconds.")
