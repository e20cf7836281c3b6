"""On-device key-value storage.

Implements the same synchronous storage protocol that Supabase Auth uses for
session persistence, so one store can hold both the local profile data and
the auth session.
"""

import logging
import re
from pathlib import Path

from supabase_auth import SyncMemoryStorage, SyncSupportedStorage

from network20.core.config import Settings

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileStorage(SyncSupportedStorage):
    """Key-value storage keeping one UTF-8 file per key in a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / _UNSAFE_KEY_CHARS.sub("_", key)

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path_for(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


def create_storage(settings: Settings, ephemeral: bool = False) -> SyncSupportedStorage:
    """Create the key-value storage used by the local adapter and auth session.

    Args:
        settings: Application settings.
        ephemeral: Keep everything in memory instead of on disk.

    Returns:
        SyncSupportedStorage: Storage instance.
    """
    if ephemeral:
        return SyncMemoryStorage()
    logger.debug("Using file storage at %s", settings.local_storage_dir)
    return FileStorage(settings.local_storage_dir)
