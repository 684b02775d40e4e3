import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple

from pydantic import ValidationError

from antd_rush.config import COMPONENT_MAP_FILE, DATA_DIR
from antd_rush.errors import CatalogError
from antd_rush.models import ComponentEntry
from antd_rush.services.naming import normalize

logger = logging.getLogger(__name__)


class Catalog:
    """
    Read-only registry of component name -> supported handler names.

    Keys keep their display spelling (`Table.Column`) but every lookup goes
    through `normalize`, so `TableColumn`, `table.column` and `Table.Column`
    all land on the same entry.
    """

    def __init__(self, entries: Mapping[str, ComponentEntry]):
        self._entries: Dict[str, ComponentEntry] = dict(entries)
        self._index: Dict[str, str] = {}
        for key in self._entries:
            normalized = normalize(key)
            existing = self._index.get(normalized)
            if existing is not None:
                raise CatalogError(
                    f"catalog keys {existing!r} and {key!r} both normalize to {normalized!r}"
                )
            self._index[normalized] = key

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "Catalog":
        try:
            entries = {name: ComponentEntry.model_validate(value) for name, value in raw.items()}
        except ValidationError as e:
            raise CatalogError(f"invalid catalog entry: {e}") from e
        return cls(entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[ComponentEntry]:
        return self._entries.get(key)

    def handlers(self, key: str) -> Optional[Tuple[str, ...]]:
        entry = self._entries.get(key)
        if entry is None or not entry.methods:
            return None
        return tuple(entry.methods)

    # --- Matching ---

    def match_exact(self, name: str) -> Optional[str]:
        return self._index.get(normalize(name))

    def match_by_folder(self, folder_name: str) -> Optional[str]:
        return self._index.get(normalize(folder_name))

    def match_fuzzy(self, folder_name: str, symbol_name: str) -> Optional[str]:
        # Sub-components are often declared as <Folder><Symbol>,
        # e.g. folder "table" + symbol "Column" -> "TableColumn".
        return self._index.get(normalize(folder_name + symbol_name))

    def resolve(self, symbol_name: str, folder_name: str) -> Optional[str]:
        """
        Find the canonical key for a symbol declared inside `folder_name`.

        The symbol's own name is tried first, then the folder name (for
        generic re-exported names such as `Props`), then the two concatenated.
        """
        return (
            self.match_exact(symbol_name)
            or self.match_by_folder(folder_name)
            or self.match_fuzzy(folder_name, symbol_name)
        )


def load_catalog(path: Optional[Path] = None) -> Catalog:
    path = path or DATA_DIR / COMPONENT_MAP_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"failed to load catalog from {path}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogError(f"catalog at {path} must be a JSON object")

    catalog = Catalog.from_mapping(raw)
    logger.info(f"Loaded {len(catalog)} components from {path.name}")
    return catalog


_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog
