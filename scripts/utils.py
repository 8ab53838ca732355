from pathlib import Path
import sys
from typing import NoReturn

from itemsdat.core.errors import DecodeError, MalformedDatabase, OutOfBounds, SequenceMismatch, UnsupportedVersion
from itemsdat.core.growtopia.item_database import ItemRegistry
from itemsdat.setting import setting


def describe_error(e: DecodeError) -> str:
    match e:
        case UnsupportedVersion():
            return f"Invalid version of items.dat: {e.version} (max supported is {e.max_version})."
        case MalformedDatabase(cause=SequenceMismatch() as cause):
            return f"Corrupt or malformed items.dat: item at index {cause.index} has id {cause.found}."
        case MalformedDatabase(index=None):
            return "Corrupt or malformed items.dat: header is truncated."
        case MalformedDatabase(cause=OutOfBounds() as cause):
            return f"Corrupt or malformed items.dat: truncated while reading item {e.index} (offset {cause.offset}, wanted {cause.wanted}, size {cause.size})."
        case _:
            return f"Corrupt or malformed items.dat: {e}"


def fail(msg: str) -> NoReturn:
    print(f"\x1b[31m{msg}\x1b[0m", file=sys.stderr)
    sys.exit(1)


def load_registry(items: Path | None) -> ItemRegistry:
    cache_dir = setting.cache_dir if setting.use_cache else None
    try:
        if items is None:
            return ItemRegistry.from_candidates(setting.candidates(), cache_dir)

        registry = ItemRegistry(cache_dir)
        registry.load(items)
        return registry
    except (FileNotFoundError, IsADirectoryError) as e:
        fail(f"Missing items.dat file: {e}")
    except DecodeError as e:
        fail(describe_error(e))
