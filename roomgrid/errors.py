"""Error types raised by the roomgrid codecs and store.

Every error is a ``ValueError`` so callers that only care about "bad input"
can catch one type. None of these are fatal: they describe a single rejected
value and never leave partial writes behind.
"""

from __future__ import annotations

from typing import Any


class RoomGridError(ValueError):
    """Base class for all roomgrid errors."""


class MalformedRoomName(RoomGridError):
    """A string did not match the ``[EW]<n>[NS]<n>`` grammar or the sim literal."""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Malformed room name: {name!r}")


class InvalidLocal(RoomGridError):
    """A local offset fell outside the in-room range [0, 49]."""

    def __init__(self, x: Any, y: Any):
        self.x = x
        self.y = y
        super().__init__(f"Local position ({x}, {y}) is outside [0, 49]")


class RoomOutOfRange(RoomGridError):
    """A room coordinate cannot be represented in the packed position format."""

    def __init__(self, room_x: int, room_y: int):
        self.room_x = room_x
        self.room_y = room_y
        super().__init__(
            f"Room coordinate ({room_x}, {room_y}) is outside the packable range [-127, 127]"
        )


class CorruptPackedPosition(RoomGridError):
    """A packed integer did not decode to a valid position."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Corrupt packed position {value!r}: {reason}")


class InvalidPositionRecord(RoomGridError):
    """Deserialization input was neither a readable record nor a packed integer."""

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot decode position from {value!r}: {reason}")


class EmptyPath(RoomGridError):
    """A store path string was empty."""

    def __init__(self) -> None:
        super().__init__("Store path must not be empty")


class CorruptCostMatrix(RoomGridError):
    """A serialized cost matrix had the wrong length or out-of-room entries."""
