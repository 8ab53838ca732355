from pathlib import Path

from itemsdat.core.growtopia.items_dat import Item, ItemDatabase, fields_for_version

MINIFIED_FIELDS = ("id", "name")


def _column(v: object) -> bytes:
    if isinstance(v, bytes):
        return v
    return str(int(v)).encode()  # pyright: ignore[reportArgumentType]


def format_item(item: Item, version: int, minified: bool = False, delimiter: bytes = b"|") -> bytes:
    names = MINIFIED_FIELDS if minified else fields_for_version(version)
    return delimiter.join(_column(getattr(item, name)) for name in names)


def render(db: ItemDatabase, minified: bool = False, delimiter: bytes = b"|") -> bytes:
    return b"".join(format_item(item, db.version, minified, delimiter) + b"\n" for item in db.items)


def write_report(db: ItemDatabase, path: str | Path, minified: bool = False, delimiter: bytes = b"|") -> int:
    data = render(db, minified, delimiter)
    Path(path).write_bytes(data)
    return len(data)
