"""Narrow interfaces to the live game environment.

roomgrid never talks to the simulation directly. Hosts hand it objects that
satisfy these protocols: a world handle that evaluates named entry points,
and a storage handle that reads/writes one primitive string.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from .position import LocalPosition, deserialize_position


@runtime_checkable
class WorldHandle(Protocol):
    """Opaque game object that can evaluate a named entry point."""

    def invoke(self, entry_point: str, *args: Any) -> Any:
        ...


@runtime_checkable
class StorageHandle(Protocol):
    """Opaque slot holding the serialized memory string."""

    def read(self) -> Optional[str]:
        ...

    def write(self, text: str) -> None:
        ...


def query_position(world: WorldHandle, entry_point: str, *args: Any) -> Optional[LocalPosition]:
    """Evaluate a coordinate-producing entry point and decode its result.

    The result may be a readable record or a packed integer. ``None`` from the
    host means "no position" and is passed through.

    Raises:
        RoomGridError: If the host returns something that is not a position.
    """

    result = world.invoke(entry_point, *args)
    if result is None:
        return None
    return deserialize_position(result)
