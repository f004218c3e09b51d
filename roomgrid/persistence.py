"""
StoreBackend interface for pluggable memory persistence.

roomgrid only manipulates the in-memory value tree. Getting that tree to and
from durable storage belongs to the host, so this module provides the
abstract StoreBackend interface plus three small adapters:

1. InMemoryBackend - keeps the serialized string in process (tests, prototyping)
2. JsonFileBackend - one JSON file on disk
3. StorageHandleBackend - wraps a host ``StorageHandle`` primitive slot

Every backend round-trips through ``MemoryStore.to_json``/``from_json`` so
the stored form is identical regardless of where it lives.

Usage pattern:
    backend = JsonFileBackend("memory.json")
    await backend.initialize()

    store = await backend.load()      # start of tick
    store.set("rooms.E3N6.scouted", True)
    await backend.save(store)         # end of tick

    await backend.close()
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .bindings import StorageHandle
from .config import Config
from .logging_utils import log_debug, log_info
from .store import MemoryStore


class StoreBackend(ABC):
    """Abstract base class for memory persistence.

    All methods are async so file or network backed implementations do not
    block the host loop. A backend is used by one tick at a time; the host
    serializes access.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, open handles)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any resources held by the backend."""
        pass

    @abstractmethod
    async def load_raw(self) -> Optional[str]:
        """Return the serialized memory string, or None if nothing was saved yet."""
        pass

    @abstractmethod
    async def save_raw(self, text: str) -> None:
        """Persist the serialized memory string."""
        pass

    async def load(self) -> MemoryStore:
        """Load the stored tree; an empty store if nothing was saved yet.

        Raises:
            json.JSONDecodeError: If the stored text is not valid JSON.
        """
        text = await self.load_raw()
        store = MemoryStore.from_json(text)
        log_debug(f"{type(self).__name__}: loaded {len(text or '')} chars of memory")
        return store

    async def save(self, store: MemoryStore) -> None:
        text = store.to_json()
        await self.save_raw(text)
        log_debug(f"{type(self).__name__}: saved {len(text)} chars of memory")


class InMemoryBackend(StoreBackend):
    """Keeps the serialized memory string in process. Lost on exit."""

    def __init__(self, initial: Optional[str] = None):
        self.raw: Optional[str] = initial

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def load_raw(self) -> Optional[str]:
        return self.raw

    async def save_raw(self, text: str) -> None:
        self.raw = text


class JsonFileBackend(StoreBackend):
    """Stores memory as a single JSON file.

    File I/O runs in a worker thread via ``asyncio.to_thread``. Writes go to a
    temporary sibling file that is then renamed over the target, so a crash
    mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else Config.STORE_PATH

    async def initialize(self) -> None:
        await asyncio.to_thread(self.path.parent.mkdir, parents=True, exist_ok=True)
        log_info(f"Memory file: {self.path}")

    async def close(self) -> None:
        # Nothing to clean up for file persistence
        return None

    async def load_raw(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return await asyncio.to_thread(self.path.read_text, "utf-8")

    async def save_raw(self, text: str) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")

        def _write() -> None:
            tmp_path.write_text(text, "utf-8")
            tmp_path.replace(self.path)

        await asyncio.to_thread(_write)


class StorageHandleBackend(StoreBackend):
    """Adapts a host ``StorageHandle`` (a single primitive string slot)."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def load_raw(self) -> Optional[str]:
        return self.handle.read()

    async def save_raw(self, text: str) -> None:
        self.handle.write(text)
