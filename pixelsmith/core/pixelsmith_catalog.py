#!/usr/bin/env python3
"""
Sprite catalog and current user session

The catalog records which sprites a user owns and where each sprite file
lives. It is consulted only when a sprite is opened or saved, never while
drawing.
"""

# Standard library imports
import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from .pixelsmith_exceptions import CatalogError
from .pixelsmith_utils import debug_log


class UserSession:
    """Holds the id of the logged-in user"""

    def __init__(self, user_id: Optional[int] = None) -> None:
        self._user_id = user_id

    @property
    def current_user_id(self) -> Optional[int]:
        return self._user_id

    def set_current_user_id(self, user_id: Optional[int]) -> None:
        self._user_id = user_id
        debug_log("SESSION", f"Current user set to {user_id}", "DEBUG")

    def is_logged_in(self) -> bool:
        return self._user_id is not None

    def clear(self) -> None:
        self._user_id = None


@dataclass
class SpriteRecord:
    """One catalog entry"""

    sprite_id: int
    user_id: int
    name: str
    path: Optional[str]
    created: str = ""
    modified: str = ""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class SpriteCatalog(ABC):
    """Interface to the store of sprite metadata"""

    @abstractmethod
    def create_sprite(self, user_id: int, name: str, path: str) -> int:
        """Register a new sprite, return its id"""

    @abstractmethod
    def update_sprite(self, sprite_id: int, path: str) -> None:
        """Point an existing sprite at a (new) file path"""

    @abstractmethod
    def get_sprite(self, sprite_id: int) -> Optional[SpriteRecord]:
        """Look up a sprite by id"""

    @abstractmethod
    def list_sprites(self, user_id: int) -> list[SpriteRecord]:
        """Sprites owned by a user that have a file path"""

    @abstractmethod
    def find_sprite_id(self, name: str, path: str) -> Optional[int]:
        """Find the id of a sprite by name and path"""


class JsonSpriteCatalog(SpriteCatalog):
    """Catalog persisted to a local JSON file"""

    def __init__(self, catalog_file: Union[str, Path]) -> None:
        self.catalog_file = Path(catalog_file)
        self.data = self._load()

    def _default_data(self) -> dict[str, Any]:
        return {"next_id": 1, "sprites": {}}

    def _load(self) -> dict[str, Any]:
        """Load catalog from file"""
        if not self.catalog_file.exists():
            return self._default_data()
        try:
            with open(self.catalog_file) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read sprite catalog {self.catalog_file}: {e}") from e
        if not isinstance(data, dict) or "sprites" not in data:
            raise CatalogError(f"Invalid sprite catalog format: {self.catalog_file}")
        data.setdefault("next_id", 1 + max((int(k) for k in data["sprites"]), default=0))
        return data

    def _save(self) -> None:
        try:
            self.catalog_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.catalog_file, "w") as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            raise CatalogError(f"Cannot write sprite catalog {self.catalog_file}: {e}") from e

    def _record(self, entry: dict[str, Any]) -> SpriteRecord:
        return SpriteRecord(**entry)

    def create_sprite(self, user_id: int, name: str, path: str) -> int:
        if not name:
            raise CatalogError("Sprite name cannot be empty")
        sprite_id = int(self.data["next_id"])
        timestamp = _now()
        record = SpriteRecord(
            sprite_id=sprite_id,
            user_id=user_id,
            name=name,
            path=str(path),
            created=timestamp,
            modified=timestamp,
        )
        self.data["sprites"][str(sprite_id)] = asdict(record)
        self.data["next_id"] = sprite_id + 1
        self._save()
        debug_log("CATALOG", f"Created sprite {sprite_id} '{name}' for user {user_id}")
        return sprite_id

    def update_sprite(self, sprite_id: int, path: str) -> None:
        entry = self.data["sprites"].get(str(sprite_id))
        if entry is None:
            raise CatalogError(f"Unknown sprite id {sprite_id}", sprite_id)
        entry["path"] = str(path)
        entry["modified"] = _now()
        self._save()
        debug_log("CATALOG", f"Updated sprite {sprite_id} -> {path}")

    def get_sprite(self, sprite_id: int) -> Optional[SpriteRecord]:
        entry = self.data["sprites"].get(str(sprite_id))
        return self._record(entry) if entry else None

    def list_sprites(self, user_id: int) -> list[SpriteRecord]:
        records = []
        for entry in self.data["sprites"].values():
            if entry["user_id"] != user_id:
                continue
            if not entry.get("path"):
                debug_log("CATALOG", f"Skipping sprite with no path: {entry['name']}", "WARNING")
                continue
            records.append(self._record(entry))
        return sorted(records, key=lambda record: record.sprite_id)

    def find_sprite_id(self, name: str, path: str) -> Optional[int]:
        for entry in self.data["sprites"].values():
            if entry["name"] == name and entry.get("path") == str(path):
                return int(entry["sprite_id"])
        return None
