import logging
import os
from pathlib import Path
import pickle
import tempfile
from typing import Any, Hashable, Iterable, Literal, Sequence, overload

from rapidfuzz import fuzz, process
import xxhash

from itemsdat.core.errors import DecodeError
from itemsdat.core.growtopia.items_dat import Item, ItemDatabase, decode


class ItemRegistry:
    """Holds one decoded items.dat and the lookups built on top of it.

    Decoding is deterministic, so results can be cached on disk keyed by the
    xxhash64 of the raw file. Pass `cache_dir=None` to keep everything in memory.
    """

    logger = logging.getLogger("item_database")

    def __init__(self, cache_dir: str | Path | None = None) -> None:
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        self._db: ItemDatabase | None = None
        self._name_index: dict[bytes, Item] = {}
        self._name_str_to_items: dict[str, list[Item]] = {}
        self._name_str_list: list[str] = []

    @property
    def db(self) -> ItemDatabase:
        if self._db is None:
            raise ValueError("no items.dat loaded")
        return self._db

    def _cache_path(self, hash: str, version: int) -> Path | None:
        if self.cache_dir is None:
            return None
        return self.cache_dir / f"v{version}" / f"{hash}.pkl"

    def _load_cache(self, hash: str, version: int) -> ItemDatabase | None:
        path = self._cache_path(hash, version)
        if path is None or not path.is_file():
            return None

        try:
            with path.open("rb") as f:
                cached = pickle.load(f)
        except Exception as e:
            self.logger.error(f"failed parsing pickle object {path}: {e}")
            return None

        if not isinstance(cached, ItemDatabase) or cached.version != version:
            self.logger.warning(f"cached file version mismatch {path} (expected {version})")
            return None

        self.logger.info(f"loaded cache {path}")
        return cached

    def _save_cache(self, hash: str, db: ItemDatabase) -> None:
        path = self._cache_path(hash, db.version)
        if path is None or path.exists():
            return

        tmp: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix="tmp_itemdb-", suffix=".pkl", dir=str(path.parent))
            with os.fdopen(fd, "wb") as f:
                pickle.dump(db, f, protocol=pickle.HIGHEST_PROTOCOL)
            os.replace(tmp, path)
            self.logger.info(f"wrote cache {path} version={db.version}")
        except OSError as e:
            self.logger.error(f"failed saving cache {path}: {e}")
        finally:
            if tmp is not None and Path(tmp).exists():
                Path(tmp).unlink()

    def load(self, path_or_data: str | Path | bytes | bytearray) -> ItemDatabase:
        if isinstance(path_or_data, (bytes, bytearray)):
            data = bytes(path_or_data)
        else:
            data = Path(path_or_data).read_bytes()

        hash = xxhash.xxh64_hexdigest(data)
        # the version is needed to locate the cache entry; a short buffer just misses the cache
        version = int.from_bytes(data[:2], "little") if len(data) >= 2 else -1

        db = self._load_cache(hash, version)
        if db is None:
            db = decode(data)
            self._save_cache(hash, db)

        self._db = db
        self._build_name_index(db)
        return db

    @classmethod
    def from_candidates(cls, candidates: Iterable[str | Path], cache_dir: str | Path | None = None) -> "ItemRegistry":
        registry = cls(cache_dir)
        tried: list[str] = []
        last_error: DecodeError | None = None
        for path in map(Path, candidates):
            tried.append(str(path))
            if not path.is_file() or path.stat().st_size == 0:
                continue

            try:
                registry.load(path)
            except DecodeError as e:
                cls.logger.error(f"failed parsing items.dat {path}: {e}")
                last_error = e
                continue

            cls.logger.info(f"using items.dat from {path}")
            return registry

        # a file was there but none decoded: report why, not that it is missing
        if last_error is not None:
            raise last_error

        raise FileNotFoundError(f"no valid items.dat found (tried {', '.join(tried)})")

    def _build_name_index(self, db: ItemDatabase) -> None:
        self._name_index = {}
        self._name_str_to_items = {}
        self._name_str_list = []

        for item in db.items:
            self._name_index.setdefault(item.name, item)

            name_str = item.name_str
            if name_str not in self._name_str_to_items:
                self._name_str_to_items[name_str] = []
                self._name_str_list.append(name_str)
            self._name_str_to_items[name_str].append(item)

        self.logger.debug(f"built name index for version {db.version} ({len(self._name_str_list)} names)")

    def items(self) -> tuple[Item, ...]:
        return self.db.items

    def get(self, id: int) -> Item:
        return self.db.get(id)

    def get_by_name(self, name: bytes | str) -> Item:
        key = name.encode() if isinstance(name, str) else name
        try:
            return self._name_index[key]
        except KeyError:
            raise KeyError(f"no item with exact name {key!r} in version {self.db.version}")

    @overload
    def search(self, query: bytes | str, n: int = ..., cutoff: float = ..., return_scores: Literal[False] = ...) -> Sequence[Item]: ...
    @overload
    def search(self, query: bytes | str, n: int = ..., cutoff: float = ..., *, return_scores: Literal[True]) -> Sequence[tuple[Item, float]]: ...

    def search(
        self,
        query: bytes | str,
        n: int = 5,
        cutoff: float = 0.6,
        return_scores: bool = False,
    ) -> Sequence[tuple[Item, float]] | Sequence[Item]:
        query = query if isinstance(query, str) else query.decode(errors="replace")
        if not self._name_str_list:
            return []

        query_normalized = query.strip().lower()

        def combined_scorer(_s1: Sequence[Hashable], s2: Sequence[Hashable], score_cutoff: float | None = None, **_: Any) -> float:
            choice_normalized = str(s2).lower()

            if query_normalized == choice_normalized:
                return 100.0
            if choice_normalized.startswith(query_normalized):
                return 95.0
            if f" {query_normalized} " in f" {choice_normalized} ":
                return 90.0

            scores = sorted(
                (
                    fuzz.ratio(query_normalized, choice_normalized) * 1.0,
                    fuzz.partial_ratio(query_normalized, choice_normalized) * 0.9,
                    fuzz.token_sort_ratio(query_normalized, choice_normalized) * 0.85,
                    fuzz.token_set_ratio(query_normalized, choice_normalized) * 0.8,
                ),
                reverse=True,
            )
            return max(scores[0] * 0.5 + scores[1] * 0.3 + scores[2] * 0.15 + scores[3] * 0.05, 0.0)

        matches = process.extract(query, self._name_str_list, scorer=combined_scorer, score_cutoff=cutoff * 100, limit=n * 3)

        results: list[tuple[Item, float]] = []
        seen_item_ids: set[int] = set()
        for matched_name, score, _ in matches:
            for item in self._name_str_to_items.get(matched_name, []):
                if item.id in seen_item_ids:
                    continue
                results.append((item, score / 100.0))
                seen_item_ids.add(item.id)

        # stable: equal scores keep name-list (id) order
        results.sort(key=lambda x: x[1], reverse=True)
        results = results[:n]

        if return_scores:
            return results
        return [itm for itm, _ in results]
