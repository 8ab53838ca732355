import inspect
import json
import os
from pathlib import Path
import struct
from typing import Any, Protocol

from itemsdat.core.growtopia.crypto import xor_name


SNAPSHOT_DIR = Path(__file__).parent / "snapshots"
SNAPSHOT_DIR.mkdir(exist_ok=True)


class SupportsStr(Protocol):
    def __str__(self) -> str: ...


def verify(data: str | bytes | object, *, key: SupportsStr = "", name: SupportsStr | None = None) -> None:
    frame = inspect.stack()[1]
    caller = frame.function if not name else str(name)

    name = f"{Path(frame.filename).stem}-{caller}{str(key)}"
    snapshot_file = SNAPSHOT_DIR / f"{name}.snap"
    output_file = SNAPSHOT_DIR / f"{name}.out"

    if isinstance(data, bytes):
        data = data.hex()
    elif not isinstance(data, str):
        data = json.dumps(data, ensure_ascii=False, default=str)

    output_file.write_text(data, encoding="utf-8")

    if os.getenv("UPDATE") or not snapshot_file.exists():
        snapshot_file.write_text(data, encoding="utf-8")
        return

    expected = snapshot_file.read_text(encoding="utf-8")
    assert data == expected, f"snapshot mismatch {data=} != {expected=}"


# items.dat fixtures. The library only reads, so the layout is spelled out here.

GATED = {
    "pet_name": 4,
    "pet_prefix": 4,
    "pet_suffix": 4,
    "pet_ability": 5,
    "anim_type": 7,
    "anim_string": 7,
    "anim_tex": 8,
    "anim_string2": 8,
    "dlayer1": 8,
    "dlayer2": 8,
    "properties2": 9,
    "tile_range": 10,
    "pile_range": 10,
    "custom_punch": 11,
}

FULL: dict[str, Any] = dict(
    properties=0x8001,
    type=17,
    material=2,
    file_name=b"tiles_page1.rttex",
    file_hash=0xDEADBEEF,
    visual_type=3,
    cook_time=100,
    tex_x=1,
    tex_y=2,
    storage_type=2,
    layer=3,
    collision_type=1,
    hardness=6,
    regen_time=8,
    clothing_type=4,
    rarity=5,
    max_hold=200,
    alt_file_path=b"alt.rttex",
    alt_file_hash=7,
    anim_ms=200,
    pet_name=b"Pet",
    pet_prefix=b"pre",
    pet_suffix=b"suf",
    pet_ability=b"abil",
    seed_base=1,
    seed_over=2,
    tree_base=3,
    tree_over=4,
    bg_col=0xFF102030,
    fg_col=0xFF405060,
    seed1=0,
    seed2=0,
    bloom_time=31,
    anim_type=9,
    anim_string=b"a1",
    anim_tex=b"t",
    anim_string2=b"a2",
    dlayer1=11,
    dlayer2=12,
    properties2=0x20,
    tile_range=5,
    pile_range=200,
    custom_punch=b"punch",
)


def lp(b: bytes) -> bytes:
    return struct.pack("<H", len(b)) + b


def record(version: int, id: int, name: bytes = b"", reserved: int = 0x00, **kw: Any) -> bytes:
    f: dict[str, Any] = {k: (b"" if isinstance(v, bytes) else 0) for k, v in FULL.items()}
    f.update(kw)

    out = struct.pack("<IHBB", id, f["properties"], f["type"], f["material"])
    out += lp(xor_name(name, id) if version >= 3 else name)
    out += lp(f["file_name"])
    out += struct.pack("<IBI", f["file_hash"], f["visual_type"], f["cook_time"])
    out += struct.pack("<BBBBBBI", f["tex_x"], f["tex_y"], f["storage_type"], f["layer"], f["collision_type"], f["hardness"], f["regen_time"])
    out += struct.pack("<BHB", f["clothing_type"], f["rarity"], f["max_hold"])
    out += lp(f["alt_file_path"])
    out += struct.pack("<II", f["alt_file_hash"], f["anim_ms"])
    if version >= 4:
        out += lp(f["pet_name"]) + lp(f["pet_prefix"]) + lp(f["pet_suffix"])
        if version >= 5:
            out += lp(f["pet_ability"])
    out += struct.pack(
        "<BBBBIIHHI",
        f["seed_base"],
        f["seed_over"],
        f["tree_base"],
        f["tree_over"],
        f["bg_col"],
        f["fg_col"],
        f["seed1"],
        f["seed2"],
        f["bloom_time"],
    )
    if version >= 7:
        out += struct.pack("<I", f["anim_type"]) + lp(f["anim_string"])
    if version >= 8:
        out += lp(f["anim_tex"]) + lp(f["anim_string2"]) + struct.pack("<II", f["dlayer1"], f["dlayer2"])
    if version >= 9:
        out += struct.pack("<I", f["properties2"]) + bytes([reserved]) * 60
    if version >= 10:
        out += struct.pack("<II", f["tile_range"], f["pile_range"])
    if version >= 11:
        out += lp(f["custom_punch"])
    if version >= 12:
        out += bytes([reserved]) * 13
    if version >= 13:
        out += bytes([reserved]) * 4
    if version >= 14:
        out += bytes([reserved]) * 4

    return out


def database(version: int, records: list[bytes], count: int | None = None) -> bytes:
    return struct.pack("<HI", version, len(records) if count is None else count) + b"".join(records)


def sample_database(version: int = 14) -> bytes:
    names = [b"Blank", b"Blank Seed", b"Dirt", b"Dirt Seed", b"Rock", b"Rock Seed", b"Lava", b"Lava Seed"]
    return database(version, [record(version, i, name, **FULL) for i, name in enumerate(names)])
