from dataclasses import dataclass
from enum import IntEnum, IntFlag
import logging
from typing import Any, Iterator

from itemsdat.core.buffer import Buffer, BytesLike
from itemsdat.core.errors import MalformedDatabase, OutOfBounds, SequenceMismatch, UnsupportedVersion
from itemsdat.core.growtopia.crypto import decrypt_name


MAX_VERSION = 14

logger = logging.getLogger("items_dat")


class _OpenIntEnum(IntEnum):
    """IntEnum that keeps values it has no member for instead of raising."""

    @classmethod
    def _missing_(cls, value: object) -> "_OpenIntEnum":
        if not isinstance(value, int):
            return None  # pyright: ignore[reportReturnType]
        obj = int.__new__(cls, value)
        obj._name_ = f"UNKNOWN_{value}"
        obj._value_ = value
        return obj


class ItemFlag(IntFlag):
    NONE = 0
    FLIPPABLE = 1 << 0
    EDITABLE = 1 << 1
    SEEDLESS = 1 << 2
    PERMANENT = 1 << 3
    DROPLESS = 1 << 4
    NO_SELF = 1 << 5
    NO_SHADOW = 1 << 6
    WORLD_LOCKED = 1 << 7
    BETA = 1 << 8
    AUTO_PICKUP = 1 << 9
    MOD_FLAG = 1 << 10
    RANDOM_GROW = 1 << 11
    PUBLIC = 1 << 12
    FOREGROUND = 1 << 13
    HOLIDAY = 1 << 14
    UNTRADEABLE = 1 << 15


class ItemFlag2(IntFlag):
    NONE = 0
    ROBOT_DEADLY = 1 << 0
    ROBOT_SHOOT_LEFT = 1 << 1
    ROBOT_SHOOT_RIGHT = 1 << 2
    ROBOT_SHOOT_DOWN = 1 << 3
    ROBOT_SHOOT_UP = 1 << 4
    ROBOT_CAN_SHOOT = 1 << 5
    ROBOT_LAVA = 1 << 6
    ROBOT_POINTY = 1 << 7
    ROBOT_SHOOT_DEADLY = 1 << 8
    GUILD_ITEM = 1 << 9
    GUILD_FLAG = 1 << 10
    STARSHIP_HELM = 1 << 11
    STARSHIP_REACTOR = 1 << 12
    STARSHIP_VIEW_SCREEN = 1 << 13
    SUPER_MOD = 1 << 14
    TILE_DEADLY_IF_ON = 1 << 15
    LONG_HAND_ITEM64X32 = 1 << 16
    GEMLESS = 1 << 17
    TRANSMUTABLE = 1 << 18
    DUNGEON_ITEM = 1 << 19


class ItemType(_OpenIntEnum):
    FIST = 0
    WRENCH = 1
    USER_DOOR = 2
    LOCK = 3
    GEMS = 4
    TREASURE = 5
    DEADLY = 6
    TRAMPOLINE = 7
    CONSUMABLE = 8
    GATEWAY = 9
    SIGN = 10
    SFX_WITH_EXTRA_FRAME = 11
    BOOMBOX = 12
    DOOR = 13
    PLATFORM = 14
    BEDROCK = 15
    LAVA = 16
    NORMAL = 17
    BACKGROUND = 18
    SEED = 19
    CLOTHES = 20
    NORMAL_WITH_EXTRA_FRAME = 21
    BACKGD_SFX_EXTRA_FRAME = 22
    BACK_BOOMBOX = 23
    BOUNCY = 24
    POINTY = 25
    PORTAL = 26
    CHECKPOINT = 27
    MUSICNOTE = 28
    ICE = 29
    RACE_FLAG = 30
    SWITCHEROO = 31
    CHEST = 32
    MAILBOX = 33
    BULLETIN = 34
    PINATA = 35
    DICE = 36
    COMPONENT = 37
    PROVIDER = 38
    LAB = 39
    ACHIEVEMENT = 40
    WEATHER_MACHINE = 41
    SCOREBOARD = 42
    SUNGATE = 43
    PROFILE = 44
    DEADLY_IF_ON = 45
    HEART_MONITOR = 46
    DONATION_BOX = 47
    TOYBOX = 48
    MANNEQUIN = 49
    CAMERA = 50
    MAGICEGG = 51
    TEAM = 52
    GAME_GEN = 53
    XENONITE = 54
    DRESSUP = 55
    CRYSTAL = 56
    BURGLAR = 57
    COMPACTOR = 58
    SPOTLIGHT = 59
    WIND = 60
    DISPLAY_BLOCK = 61
    VENDING = 62
    FISHTANK = 63
    PETFISH = 64
    SOLAR = 65
    FORGE = 66
    GIVING_TREE = 67
    GIVING_TREE_STUMP = 68
    STEAMPUNK = 69
    STEAM_LAVA_IF_ON = 70
    STEAM_ORGAN = 71
    TAMAGOTCHI = 72
    SEWING = 73
    FLAG = 74
    LOBSTER_TRAP = 75
    ARTCANVAS = 76
    BATTLE_CAGE = 77
    PET_TRAINER = 78
    STEAM_ENGINE = 79
    LOCK_BOT = 80
    WEATHER_SPECIAL = 81
    SPIRIT_STORAGE = 82
    DISPLAY_SHELF = 83
    VIP_DOOR = 84
    CHAL_TIMER = 85
    CHAL_FLAG = 86
    FISH_MOUNT = 87
    PORTRAIT = 88
    WEATHER_SPECIAL2 = 89
    FOSSIL = 90
    FOSSIL_PREP = 91
    DNA_MACHINE = 92


class MaterialType(_OpenIntEnum):
    WOODEN = 0
    GLASS = 1
    ROCK = 2
    METAL = 3


class StorageType(_OpenIntEnum):
    SINGLE_FRAME_ALONE = 0
    SINGLE_FRAME = 1
    SMART_EDGE = 2
    SMART_EDGE_HORIZ = 3
    SMART_CLING = 4
    SMART_CLING2 = 5
    SMART_OUTER = 6
    RANDOM = 7
    SMART_EDGE_VERT = 8
    SMART_EDGE_HORIZ_CAVE = 9
    SMART_EDGE_DIAGON = 10


class CollisionType(_OpenIntEnum):
    NONE = 0
    FULL = 1
    JUMP_THROUGH = 2
    GATEWAY = 3
    COLLIDE_IF_OFF = 4
    ONE_WAY = 5
    VIP_DOOR = 6
    JUMP_DOWN = 7
    ADVENTURE = 8
    COLLIDE_IF_ON = 9


class ClothingType(_OpenIntEnum):
    NONE = 0
    SHIRT = 1
    PANTS = 2
    SHOES = 3
    FACE = 4
    HAND = 5
    BACK = 6
    HAIR = 7
    NECK = 8


@dataclass(frozen=True, slots=True)
class ItemColor:
    a: int = 0
    r: int = 0
    g: int = 0
    b: int = 0

    @classmethod
    def from_int(cls, x: int) -> "ItemColor":
        return cls((x >> 24) & 0xFF, (x >> 16) & 0xFF, (x >> 8) & 0xFF, x & 0xFF)

    def __int__(self) -> int:
        return ((self.a & 0xFF) << 24) | ((self.r & 0xFF) << 16) | ((self.g & 0xFF) << 8) | (self.b & 0xFF)


@dataclass(frozen=True, slots=True)
class Item:
    id: int = 0  # u32
    properties: ItemFlag = ItemFlag.NONE  # u16
    type: ItemType = ItemType.FIST  # u8
    material: MaterialType = MaterialType.WOODEN  # u8
    name: bytes = b""  # lpchar, encrypted from v3
    file_name: bytes = b""  # lpchar
    file_hash: int = 0  # u32
    visual_type: int = 0  # u8
    cook_time: int = 0  # u32
    tex_x: int = 0  # u8
    tex_y: int = 0  # u8
    storage_type: StorageType = StorageType.SINGLE_FRAME_ALONE  # u8
    layer: int = 0  # u8
    collision_type: CollisionType = CollisionType.NONE  # u8
    hardness: int = 0  # u8
    regen_time: int = 0  # u32
    clothing_type: ClothingType = ClothingType.NONE  # u8
    rarity: int = 0  # u16
    max_hold: int = 0  # u8
    alt_file_path: bytes = b""  # lpchar
    alt_file_hash: int = 0  # u32
    anim_ms: int = 0  # u32
    pet_name: bytes = b""  # lpchar, v4
    pet_prefix: bytes = b""  # lpchar, v4
    pet_suffix: bytes = b""  # lpchar, v4
    pet_ability: bytes = b""  # lpchar, v5
    seed_base: int = 0  # u8
    seed_over: int = 0  # u8
    tree_base: int = 0  # u8
    tree_over: int = 0  # u8
    bg_col: int = 0  # u32
    fg_col: int = 0  # u32
    seed1: int = 0  # u16
    seed2: int = 0  # u16
    bloom_time: int = 0  # u32
    anim_type: int = 0  # u32, v7
    anim_string: bytes = b""  # lpchar, v7
    anim_tex: bytes = b""  # lpchar, v8
    anim_string2: bytes = b""  # lpchar, v8
    dlayer1: int = 0  # u32, v8
    dlayer2: int = 0  # u32, v8
    properties2: ItemFlag2 = ItemFlag2.NONE  # u32, v9 (+60 reserved)
    tile_range: int = 0  # u32, v10
    pile_range: int = 0  # u32, v10
    custom_punch: bytes = b""  # lpchar, v11

    @property
    def name_str(self) -> str:
        return self.name.decode("utf-8", errors="replace")

    @property
    def bg_color(self) -> ItemColor:
        return ItemColor.from_int(self.bg_col)

    @property
    def fg_color(self) -> ItemColor:
        return ItemColor.from_int(self.fg_col)

    def is_seed(self) -> bool:
        return self.id % 2 == 1

    def is_background(self) -> bool:
        return self.type in (ItemType.BACKGROUND, ItemType.BACKGD_SFX_EXTRA_FRAME, ItemType.MUSICNOTE)

    @classmethod
    def deserialize(cls, s: Buffer, version: int, ordinal: int) -> "Item":
        """Read one record starting at the cursor.

        Fields have no tags, only positions, so every width here has to match the
        layout exactly. The id check is the only thing that catches a desync.
        """
        f: dict[str, Any] = {}

        f["id"] = s.read_u32()
        if f["id"] != ordinal:
            raise SequenceMismatch(ordinal, f["id"])

        f["properties"] = ItemFlag(s.read_u16())
        f["type"] = ItemType(s.read_u8())
        f["material"] = MaterialType(s.read_u8())
        if version >= 3:
            f["name"] = decrypt_name(s.read_pascal_bytes("H"), ordinal)
        else:
            f["name"] = s.read_pascal_bytes("H")
        f["file_name"] = s.read_pascal_bytes("H")
        f["file_hash"] = s.read_u32()
        f["visual_type"] = s.read_u8()
        f["cook_time"] = s.read_u32()
        f["tex_x"] = s.read_u8()
        f["tex_y"] = s.read_u8()
        f["storage_type"] = StorageType(s.read_u8())
        f["layer"] = s.read_u8()
        f["collision_type"] = CollisionType(s.read_u8())
        f["hardness"] = s.read_u8()
        f["regen_time"] = s.read_u32()
        f["clothing_type"] = ClothingType(s.read_u8())
        f["rarity"] = s.read_u16()
        f["max_hold"] = s.read_u8()
        f["alt_file_path"] = s.read_pascal_bytes("H")
        f["alt_file_hash"] = s.read_u32()
        f["anim_ms"] = s.read_u32()
        if version >= 4:
            f["pet_name"] = s.read_pascal_bytes("H")
            f["pet_prefix"] = s.read_pascal_bytes("H")
            f["pet_suffix"] = s.read_pascal_bytes("H")
            if version >= 5:
                f["pet_ability"] = s.read_pascal_bytes("H")
        f["seed_base"] = s.read_u8()
        f["seed_over"] = s.read_u8()
        f["tree_base"] = s.read_u8()
        f["tree_over"] = s.read_u8()
        f["bg_col"] = s.read_u32()
        f["fg_col"] = s.read_u32()
        f["seed1"] = s.read_u16()
        f["seed2"] = s.read_u16()
        f["bloom_time"] = s.read_u32()
        if version >= 7:
            f["anim_type"] = s.read_u32()
            f["anim_string"] = s.read_pascal_bytes("H")
        if version >= 8:
            f["anim_tex"] = s.read_pascal_bytes("H")
            f["anim_string2"] = s.read_pascal_bytes("H")
            f["dlayer1"] = s.read_u32()
            f["dlayer2"] = s.read_u32()
        if version >= 9:
            f["properties2"] = ItemFlag2(s.read_u32())
            s.skip(60)
        if version >= 10:
            f["tile_range"] = s.read_u32()
            f["pile_range"] = s.read_u32()
        if version >= 11:
            f["custom_punch"] = s.read_pascal_bytes("H")
        # reserved, meaning unknown
        if version >= 12:
            s.skip(13)
        if version >= 13:
            s.skip(4)
        if version >= 14:
            s.skip(4)

        return cls(**f)


# report columns, in wire order, grouped by the version that introduced them
FIELDS_BY_VERSION: tuple[tuple[int, tuple[str, ...]], ...] = (
    (
        0,
        (
            "id", "properties", "type", "material", "name", "file_name", "file_hash", "visual_type", "cook_time",
            "tex_x", "tex_y", "storage_type", "layer", "collision_type", "hardness", "regen_time", "clothing_type",
            "rarity", "max_hold", "alt_file_path", "alt_file_hash", "anim_ms",
        ),
    ),
    (4, ("pet_name", "pet_prefix", "pet_suffix")),
    (5, ("pet_ability",)),
    (0, ("seed_base", "seed_over", "tree_base", "tree_over", "bg_col", "fg_col", "seed1", "seed2", "bloom_time")),
    (7, ("anim_type", "anim_string")),
    (8, ("anim_tex", "anim_string2", "dlayer1", "dlayer2")),
    (9, ("properties2",)),
    (10, ("tile_range", "pile_range")),
    (11, ("custom_punch",)),
)  # fmt: skip


def fields_for_version(version: int) -> tuple[str, ...]:
    return tuple(name for since, names in FIELDS_BY_VERSION if version >= since for name in names)


@dataclass(frozen=True, slots=True)
class ItemDatabase:
    version: int
    items: tuple[Item, ...]

    @property
    def item_count(self) -> int:
        return len(self.items)

    def get(self, id: int) -> Item:
        if not 0 <= id < len(self.items):
            raise KeyError(f"no item with id {id} (item count {len(self.items)})")
        return self.items[id]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    @classmethod
    def deserialize(cls, data: BytesLike) -> "ItemDatabase":
        s = Buffer(data)
        try:
            version = s.read_u16()
            item_count = s.read_u32()
        except OutOfBounds as e:
            raise MalformedDatabase(None, e) from e

        if version > MAX_VERSION:
            raise UnsupportedVersion(version, MAX_VERSION)

        logger.debug(f"items.dat header: version={version} item_count={item_count} size={len(s)}")

        # records are variable length, so the count can't be checked against the size up front
        items: list[Item] = []
        for i in range(item_count):
            try:
                items.append(Item.deserialize(s, version, i))
            except (OutOfBounds, SequenceMismatch) as e:
                raise MalformedDatabase(i, e) from e

        if s.remaining():
            logger.debug(f"ignoring {s.remaining()} trailing bytes after item {item_count - 1}")

        return cls(version=version, items=tuple(items))


def decode(data: BytesLike) -> ItemDatabase:
    return ItemDatabase.deserialize(data)
