"""Filesystem-backed key/value store."""

import os
import re
from pathlib import Path
from typing import Optional, Union

import structlog

from ..config import Settings
from ..exceptions import PersistenceError

logger = structlog.get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStore:
    """Persist each key as ``<key>.json`` inside a directory.

    Writes go to a temporary file that is then moved over the target, so a
    reader never observes a half-written blob.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JsonFileStore":
        """Create a store in the directory named by ``settings.storage_dir``."""
        if not settings.storage_dir:
            raise ValueError("storage_dir must be set to use a file store")
        return cls(settings.storage_dir)

    def path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("Store key cannot be empty")
        return self.directory / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(key, f"Failed to read {path}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise PersistenceError(key, f"Failed to write {path}") from exc
        logger.debug("Blob written", key=key, path=str(path), size=len(value))
