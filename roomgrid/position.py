"""Local positions: a room plus in-room offsets, packed into one integer.

A ``LocalPosition`` stores only its packed 32-bit form::

    bits 31..24  room_x + 128
    bits 23..16  room_y + 128
    bits 15..8   local x (0-49)
    bits  7..0   local y (0-49)

Positions can be written in two shapes, chosen by the caller:

- readable: ``{"roomName": "E3N6", "x": 25, "y": 25}``
- compact: the packed integer

``deserialize_position`` accepts either shape without a type tag, so stores
holding a mix of legacy readable records and compact integers stay loadable.
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import core_schema

from .config import Config
from .errors import CorruptPackedPosition, InvalidLocal, InvalidPositionRecord
from .room_name import (
    RoomCoordinate,
    format_room_name,
    pack_room,
    parse_room_name,
    unpack_room,
)

ROOM_SIZE = 50
MAX_LOCAL = ROOM_SIZE - 1
MAX_PACKED = 0xFFFFFFFF


class PositionMode(str, Enum):
    """Write shape for ``serialize_position``."""

    READABLE = "readable"
    COMPACT = "compact"


class ReadablePosition(BaseModel):
    """Human-readable position record used in logs and hand-edited config."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    room_name: str = Field(..., alias="roomName", description="Room name such as 'E3N6'")
    x: int = Field(..., description="Local x offset (0-49)")
    y: int = Field(..., description="Local y offset (0-49)")


@functools.total_ordering
class LocalPosition:
    """Immutable room position. Equality, ordering and hashing use the packed form."""

    __slots__ = ("_packed",)

    def __init__(self, room: Union[RoomCoordinate, str], x: int, y: int):
        if isinstance(room, str):
            room = parse_room_name(room)
        if not _is_local(x) or not _is_local(y):
            raise InvalidLocal(x, y)
        object.__setattr__(self, "_packed", (pack_room(room) << 16) | (x << 8) | y)

    @classmethod
    def from_packed(cls, value: int) -> "LocalPosition":
        return unpack(value)

    @classmethod
    def _trusted(cls, packed: int) -> "LocalPosition":
        pos = cls.__new__(cls)
        object.__setattr__(pos, "_packed", packed)
        return pos

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError("LocalPosition is immutable")

    # Components ----------------------------------------------------------------

    @property
    def packed(self) -> int:
        return self._packed

    @property
    def room(self) -> RoomCoordinate:
        return unpack_room(self._packed >> 16)

    @property
    def room_name(self) -> str:
        return format_room_name(self.room)

    @property
    def x(self) -> int:
        return (self._packed >> 8) & 0xFF

    @property
    def y(self) -> int:
        return self._packed & 0xFF

    @property
    def coords(self) -> Tuple[int, int]:
        """In-room ``(x, y)`` pair."""
        return self.x, self.y

    @property
    def world_coords(self) -> Tuple[int, int]:
        return to_world(self)

    # Spatial helpers -----------------------------------------------------------

    def offset(self, dx: int, dy: int) -> "LocalPosition":
        """Shift by ``dx``/``dy`` cells, crossing room borders as needed."""
        wx, wy = to_world(self)
        return from_world(wx + dx, wy + dy)

    def get_range_to(self, other: "LocalPosition") -> int:
        """Chebyshev distance in world cells."""
        if self.room.is_sim or other.room.is_sim:
            if not (self.room.is_sim and other.room.is_sim):
                raise ValueError("Cannot measure range between the sim room and the room grid")
            return max(abs(self.x - other.x), abs(self.y - other.y))
        ax, ay = to_world(self)
        bx, by = to_world(other)
        return max(abs(ax - bx), abs(ay - by))

    def in_range_to(self, other: "LocalPosition", distance: int) -> bool:
        return self.get_range_to(other) <= distance

    def is_near_to(self, other: "LocalPosition") -> bool:
        return self.in_range_to(other, 1)

    def is_equal_to(self, other: "LocalPosition") -> bool:
        return self == other

    # Value semantics -----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalPosition):
            return NotImplemented
        return self._packed == other._packed

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LocalPosition):
            return NotImplemented
        if self.room.is_sim != other.room.is_sim:
            # sim positions have no defined order relative to the room grid
            raise TypeError("Positions in the sim room are not ordered against grid positions")
        return self._packed < other._packed

    def __hash__(self) -> int:
        return hash(self._packed)

    def __repr__(self) -> str:
        return f"LocalPosition({self.room_name}, {self.x}, {self.y})"

    def __reduce__(self):
        return (unpack, (self._packed,))

    # Pydantic integration ------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            deserialize_position,
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_for_pydantic,
                info_arg=True,
            ),
        )


def _is_local(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_LOCAL


def from_room_and_local(room: RoomCoordinate, x: int, y: int) -> LocalPosition:
    """Build a position from a room and in-room offsets.

    Raises:
        InvalidLocal: If ``x`` or ``y`` is outside [0, 49].
        RoomOutOfRange: If the room cannot be packed.
    """
    return LocalPosition(room, x, y)


def to_world(pos: LocalPosition) -> Tuple[int, int]:
    """Return ``(room_x * 50 + x, room_y * 50 + y)``.

    Raises:
        ValueError: For positions in the sim room, which lies off the grid.
    """
    room = pos.room
    if room.is_sim:
        raise ValueError("Positions in the sim room have no world coordinates")
    return room.room_x * ROOM_SIZE + pos.x, room.room_y * ROOM_SIZE + pos.y


def from_world(world_x: int, world_y: int) -> LocalPosition:
    """Inverse of ``to_world``. Floor division keeps offsets in [0, 49] for negative input."""
    room_x, local_x = divmod(world_x, ROOM_SIZE)
    room_y, local_y = divmod(world_y, ROOM_SIZE)
    return LocalPosition(RoomCoordinate(room_x, room_y), local_x, local_y)


def pack(pos: LocalPosition) -> int:
    return pos.packed


def unpack(value: int) -> LocalPosition:
    """Decode a packed position supplied from outside.

    Raises:
        CorruptPackedPosition: If ``value`` is not an unsigned 32-bit integer,
            its offsets fall outside [0, 49], or its room bits are invalid.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptPackedPosition(value, "expected an integer")
    if not 0 <= value <= MAX_PACKED:
        raise CorruptPackedPosition(value, "outside the unsigned 32-bit range")

    x = (value >> 8) & 0xFF
    y = value & 0xFF
    if x > MAX_LOCAL or y > MAX_LOCAL:
        raise CorruptPackedPosition(value, f"local offsets ({x}, {y}) outside [0, 49]")

    unpack_room(value >> 16)
    return LocalPosition._trusted(value)


# ---------------------------------------------------------------------------
# Dual-format serialization
# ---------------------------------------------------------------------------


def _coerce_mode(mode: Union[PositionMode, str, None]) -> PositionMode:
    if mode is None:
        mode = Config.POSITION_MODE
    return PositionMode(mode)


def serialize_position(
    pos: LocalPosition, mode: Union[PositionMode, str, None] = None
) -> Union[Dict[str, Any], int]:
    """Write ``pos`` in the requested shape.

    ``mode`` defaults to ``Config.POSITION_MODE``; an explicit value always wins.
    """

    if _coerce_mode(mode) is PositionMode.READABLE:
        record = ReadablePosition(room_name=pos.room_name, x=pos.x, y=pos.y)
        return record.model_dump(by_alias=True)
    return pos.packed


def deserialize_position(value: Any) -> LocalPosition:
    """Read a position from either a readable record or a packed integer.

    Raises:
        InvalidPositionRecord: If ``value`` has neither shape, or a readable
            record has fields of the wrong type (``"25"`` is not an offset).
        MalformedRoomName: If a readable record names an unparseable room.
        InvalidLocal: If a readable record carries offsets outside [0, 49].
        CorruptPackedPosition: If a packed integer fails validation.
    """

    if isinstance(value, LocalPosition):
        return value

    if isinstance(value, bool):
        raise InvalidPositionRecord(value, "booleans are not positions")

    if isinstance(value, int):
        return unpack(value)

    if isinstance(value, float):
        # JSON stores with a single number type may hand back 1.0-style floats
        if not value.is_integer():
            raise CorruptPackedPosition(value, "packed position must be integral")
        return unpack(int(value))

    if isinstance(value, Mapping):
        if "roomName" not in value and "room_name" not in value:
            raise InvalidPositionRecord(value, "record has no roomName field")
        try:
            record = ReadablePosition.model_validate(dict(value), strict=True)
        except ValidationError as exc:
            raise InvalidPositionRecord(value, str(exc)) from exc
        return from_room_and_local(parse_room_name(record.room_name), record.x, record.y)

    raise InvalidPositionRecord(value, f"unsupported type {type(value).__name__}")


def _serialize_for_pydantic(pos: LocalPosition, info: Any) -> Union[Dict[str, Any], int]:
    context: Optional[Mapping[str, Any]] = getattr(info, "context", None)
    mode = context.get("position_mode") if context else None
    return serialize_position(pos, mode)
