from pathlib import Path
import sqlite3

from itemsdat.core.growtopia.items_dat import ItemFlag2, decode
from itemsdat.core.growtopia.sql import export, insert
from tests import FULL, database, record, sample_database


def test_export_row_count(tmp_path: Path) -> None:
    out = tmp_path / "items.db"
    assert export(decode(sample_database()), out) == 8

    with sqlite3.connect(out) as conn:
        (count,) = conn.execute("SELECT COUNT(*) FROM Item").fetchone()
    conn.close()
    assert count == 8


def test_flags_keep_unnamed_bits(tmp_path: Path) -> None:
    flags2 = 0x80F00020
    db = decode(database(14, [record(14, 0, b"Dirt", **{**FULL, "properties2": flags2})]))
    assert db.items[0].properties2 & ItemFlag2.ROBOT_CAN_SHOOT

    out = tmp_path / "items.db"
    export(db, out)
    with sqlite3.connect(out) as conn:
        row = conn.execute("SELECT properties, properties2, type, material FROM Item").fetchone()
    conn.close()

    assert row == (0x8001, flags2, "NORMAL", "ROCK")


def test_unknown_enum_stored_by_name(tmp_path: Path) -> None:
    db = decode(database(14, [record(14, 0, b"New", type=250)]))

    with sqlite3.connect(tmp_path / "items.db") as conn:
        insert(conn, db.items[0], "Item")
        (value,) = conn.execute("SELECT type FROM Item").fetchone()
    conn.close()

    assert value == "UNKNOWN_250"
