from dataclasses import fields, is_dataclass
from enum import Enum, IntFlag
import logging
from pathlib import Path
import sqlite3
from typing import Any, Callable

from itemsdat.core.growtopia.items_dat import ItemDatabase

logger = logging.getLogger("sql")


def _column_type(value: Any) -> tuple[str, Callable[[Any], Any]]:
    # flag combinations may have no name, so keep their bits
    if isinstance(value, IntFlag):
        return "INTEGER", int
    if isinstance(value, Enum):
        return "TEXT", lambda x: x.name if x.name is not None else str(x.value)
    if isinstance(value, bool):
        return "INTEGER", int
    if isinstance(value, int):
        return "INTEGER", int
    if isinstance(value, float):
        return "REAL", float
    if isinstance(value, bytes):
        return "TEXT", lambda x: x.decode("utf-8", errors="replace")
    return "TEXT", str


def insert(conn: sqlite3.Connection, obj: Any, table_name: str | None = None, primary_key: str | None = "id", create_table: bool = True) -> None:
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError("obj must be a dataclass instance")

    table = table_name or type(obj).__name__
    dc_fields = fields(obj)

    values = []
    column_defs = []
    for f in dc_fields:
        v = getattr(obj, f.name)
        col_type, convert = _column_type(v)
        values.append(convert(v))
        column_defs.append(f"{f.name} {col_type} PRIMARY KEY" if f.name == primary_key else f"{f.name} {col_type}")

    if create_table:
        conn.execute(f"CREATE TABLE IF NOT EXISTS {table} ({', '.join(column_defs)})")

    columns = ", ".join(f.name for f in dc_fields)
    placeholders = ", ".join("?" for _ in dc_fields)
    conn.execute(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})", values)


def export(db: ItemDatabase, path: str | Path, table_name: str = "Item") -> int:
    with sqlite3.connect(str(path)) as conn:
        conn.execute(f"DROP TABLE IF EXISTS {table_name}")
        for item in db.items:
            insert(conn, item, table_name)
        conn.commit()
    conn.close()

    logger.info(f"exported {len(db.items)} items to {path} ({table_name})")
    return len(db.items)
