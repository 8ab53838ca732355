from dataclasses import dataclass
import os
from pathlib import Path

from itemsdat.core.wsl import windows_home


@dataclass(frozen=True)
class _Setting:
    appdir_name: Path
    appdir: Path
    cache_dir: Path
    log_dir: Path
    items_path: Path
    game_cache_items: Path
    output_file: Path
    delimiter: bytes
    use_cache: bool

    def candidates(self) -> list[Path]:
        return [self.items_path, self.game_cache_items, self.appdir / "resources" / "items.dat"]


def _load() -> _Setting:
    appdir = Path(os.environ["ITEMSDAT_HOME"]) if os.environ.get("ITEMSDAT_HOME") else Path.home() / ".itemsdat"
    return _Setting(
        appdir_name=Path(".itemsdat"),
        appdir=appdir,
        cache_dir=appdir / "item_database",
        log_dir=appdir / "logs",
        items_path=Path(os.getenv("ITEMS", "items.dat")),
        game_cache_items=windows_home() / "AppData" / "Local" / "Growtopia" / "cache" / "items.dat",
        output_file=Path("itemsdat_parsed.txt"),
        delimiter=b"|",
        use_cache=not os.environ.get("ITEMSDAT_NO_CACHE"),
    )


setting = _load()
