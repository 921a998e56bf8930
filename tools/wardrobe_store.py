"""Wardrobe snapshot storage: the abstract interface and an in-memory implementation."""
from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models.wardrobe_item import WardrobeItem, from_raw_metadata

logger = logging.getLogger(__name__)


def _coerce_items(raw_items: Iterable[Any]) -> List[WardrobeItem]:
    """Build items from loose payloads, skipping entries that fail validation."""

    items: List[WardrobeItem] = []
    for raw in raw_items:
        if isinstance(raw, WardrobeItem):
            items.append(raw)
            continue
        try:
            items.append(from_raw_metadata(dict(raw)))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


class WardrobeStore:
    """Read interface the stylist consumes; implementations own persistence."""

    def add_item(self, user_id: str, item: WardrobeItem | Mapping[str, Any]) -> WardrobeItem:
        raise NotImplementedError

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def list_items_for_user(self, user_id: str, active_only: bool = False) -> List[WardrobeItem]:
        raise NotImplementedError

    def remove_item(self, user_id: str, item_id: str) -> bool:
        raise NotImplementedError


class InMemoryWardrobeStore(WardrobeStore):
    """Dictionary-backed store keyed by user, preserving insertion order."""

    def __init__(self, items_by_user: Optional[Mapping[str, Iterable[Any]]] = None) -> None:
        self._items: Dict[str, Dict[str, WardrobeItem]] = {}
        for user_id, raw_items in (items_by_user or {}).items():
            self.add_items(user_id, raw_items)

    @classmethod
    def from_json_file(cls, path: str | Path, user_id: str) -> "InMemoryWardrobeStore":
        """Load a JSON list of item payloads for one user."""

        raw = json.loads(Path(path).read_text())
        if isinstance(raw, Mapping):
            raw = raw.get("items", [])
        if not isinstance(raw, list):
            raise ValueError(f"Expected a list of wardrobe items in {path}")
        return cls({user_id: raw})

    def add_item(self, user_id: str, item: WardrobeItem | Mapping[str, Any]) -> WardrobeItem:
        stored = item if isinstance(item, WardrobeItem) else from_raw_metadata(dict(item))
        self._items.setdefault(user_id, {})[stored.id] = stored
        return stored

    def add_items(self, user_id: str, raw_items: Iterable[Any]) -> List[WardrobeItem]:
        return [self.add_item(user_id, item) for item in _coerce_items(raw_items)]

    def get_item(self, user_id: str, item_id: str) -> Optional[WardrobeItem]:
        item = self._items.get(user_id, {}).get(item_id)
        return copy.deepcopy(item) if item else None

    def list_items_for_user(self, user_id: str, active_only: bool = False) -> List[WardrobeItem]:
        items = self._items.get(user_id, {}).values()
        return [copy.deepcopy(item) for item in items if item.active or not active_only]

    def remove_item(self, user_id: str, item_id: str) -> bool:
        return self._items.get(user_id, {}).pop(item_id, None) is not None


__all__ = ["WardrobeStore", "InMemoryWardrobeStore"]
