# -*- coding: utf-8 -*-
"""Key-value persistence used by the game session.

The engine only needs `get(key) -> str | None` and `set(key, value)`. Reads
and writes go through `load_json` / `save_json`, which never raise: missing
or corrupt data means "use defaults" and a failed write is logged and lost.
"""
from typing import Dict, Optional, Protocol, Type, TypeVar
import logging
import os
import pathlib
import re
import tempfile

from pydantic import BaseModel

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class Storage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


def safe_key(key: str) -> str:
    k = re.sub(r"[^\w\-.]", "_", key or "").strip("._")
    if not k:
        raise ValueError("Storage key must contain at least one word character.")
    return k


class JsonFileStorage:
    """One `<key>.json` file per key inside `directory`."""

    def __init__(self, directory: str):
        self.directory = pathlib.Path(directory)

    def _path(self, key: str) -> pathlib.Path:
        return self.directory / f"{safe_key(key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # Write to a temp file first so a crash never leaves half a snapshot
        fd, tmp = tempfile.mkstemp(prefix=path.stem + ".", suffix=".tmp", dir=str(self.directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise


def load_json(storage: Optional[Storage], key: str, model: Type[M]) -> Optional[M]:
    """Returns the stored model, or None when absent, unreadable or invalid."""
    if storage is None:
        return None
    try:
        data = storage.get(key)
        if not data:
            return None
        return model.model_validate_json(data)
    except Exception as e:
        logger.warning("Failed to load %s: %s", key, e)
        return None


def save_json(storage: Optional[Storage], key: str, value: BaseModel) -> bool:
    """Writes `value` under `key`. Returns False (after logging) if the write failed."""
    if storage is None:
        return False
    try:
        storage.set(key, value.model_dump_json(by_alias=True))
        return True
    except Exception as e:
        logger.warning("Failed to save %s: %s", key, e)
        return False
