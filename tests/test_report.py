from pathlib import Path

from itemsdat.core.growtopia.items_dat import decode, fields_for_version
from itemsdat.core.growtopia.report import format_item, render, write_report
from tests import FULL, database, record, sample_database, verify


def test_minified() -> None:
    db = decode(database(2, [record(2, 0, b"Dirt", **FULL)]))
    assert format_item(db.items[0], db.version, minified=True) == b"0|Dirt"


def test_full_line_v2() -> None:
    db = decode(database(2, [record(2, 0, b"Dirt", **FULL)]))
    columns = format_item(db.items[0], db.version).split(b"|")

    assert len(columns) == len(fields_for_version(2))
    assert columns[:6] == [b"0", b"32769", b"17", b"2", b"Dirt", b"tiles_page1.rttex"]
    assert columns[6] == str(0xDEADBEEF).encode()
    assert columns[-1] == b"31"


def test_columns_follow_version() -> None:
    db = decode(database(11, [record(11, 0, b"Dirt", **FULL)]))
    columns = format_item(db.items[0], db.version).split(b"|")
    names = fields_for_version(11)

    assert len(columns) == len(names)
    assert columns[names.index("pet_ability")] == b"abil"
    assert columns[names.index("properties2")] == b"32"
    assert columns[-1] == b"punch"


def test_custom_delimiter() -> None:
    db = decode(database(2, [record(2, 0, b"Dirt")]))
    assert format_item(db.items[0], db.version, minified=True, delimiter=b"\t") == b"0\tDirt"


def test_render_one_line_per_item() -> None:
    db = decode(sample_database())
    lines = render(db, minified=True).split(b"\n")

    assert lines[-1] == b""
    assert lines[:-1] == [b"0|Blank", b"1|Blank Seed", b"2|Dirt", b"3|Dirt Seed", b"4|Rock", b"5|Rock Seed", b"6|Lava", b"7|Lava Seed"]


def test_render_empty() -> None:
    assert render(decode(database(14, []))) == b""


def test_render_full() -> None:
    verify(render(decode(sample_database())).decode())


def test_write_report(tmp_path: Path) -> None:
    db = decode(sample_database(5))
    out = tmp_path / "itemsdat_parsed.txt"

    written = write_report(db, out)

    assert written == out.stat().st_size
    assert out.read_bytes() == render(db)
