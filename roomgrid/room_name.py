"""Room-name grammar and room-grid coordinates.

Rooms are addressed by names like ``E3N6`` or ``W12S0``. East and north map to
non-negative grid coordinates; west and south are shifted by one so that there
is no shared room "0" between hemispheres::

    E<k> -> room_x = k        W<k> -> room_x = -k - 1
    N<k> -> room_y = k        S<k> -> room_y = -k - 1

The non-grid simulation room is named ``sim`` and parses to ``SIM_ROOM``, a
sentinel that compares unequal to every real coordinate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .errors import CorruptPackedPosition, MalformedRoomName, RoomOutOfRange

SIM_ROOM_NAME = "sim"

# Room fields are stored as 8-bit unsigned values with this bias added.
ROOM_BIAS = 128
# Raw value 0 on both axes is reserved for the sim room, so real rooms stay within +/-127.
MAX_PACKABLE_ROOM = 127
MIN_PACKABLE_ROOM = -127

_ROOM_NAME_RE = re.compile(r"([EW])([0-9]+)([NS])([0-9]+)", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True, slots=True)
class RoomCoordinate:
    """Signed position of a room on the world's room grid."""

    room_x: int
    room_y: int
    sim: bool = field(default=False, init=False, repr=False)

    @property
    def is_sim(self) -> bool:
        return self.sim

    @property
    def name(self) -> str:
        return format_room_name(self)

    @property
    def packed(self) -> int:
        """16-bit packed form, see ``pack_room``."""
        return pack_room(self)

    def is_packable(self) -> bool:
        if self.sim:
            return True
        return (
            MIN_PACKABLE_ROOM <= self.room_x <= MAX_PACKABLE_ROOM
            and MIN_PACKABLE_ROOM <= self.room_y <= MAX_PACKABLE_ROOM
        )

    def offset(self, dx: int, dy: int) -> "RoomCoordinate":
        """Return the room ``dx`` columns east and ``dy`` rows north of this one."""
        if self.sim:
            raise ValueError("The sim room has no neighbours on the room grid")
        return RoomCoordinate(self.room_x + dx, self.room_y + dy)

    def __str__(self) -> str:
        return format_room_name(self)


SIM_ROOM = RoomCoordinate(0, 0)
# sim is not an init field, so the sentinel is the only instance carrying it
object.__setattr__(SIM_ROOM, "sim", True)


def parse_room_name(name: str) -> RoomCoordinate:
    """Parse a room name into a ``RoomCoordinate``.

    Direction letters are case-insensitive. Digits may carry leading zeros
    (``E03N6`` parses like ``E3N6``), although only the canonical form
    round-trips through ``format_room_name``.

    Raises:
        MalformedRoomName: If ``name`` is not a string matching the grammar
            and is not the sim room literal.
    """

    if not isinstance(name, str):
        raise MalformedRoomName(name)

    if name.lower() == SIM_ROOM_NAME:
        return SIM_ROOM

    match = _ROOM_NAME_RE.fullmatch(name)
    if match is None:
        raise MalformedRoomName(name)

    ew, x_digits, ns, y_digits = match.groups()
    x_value = int(x_digits)
    y_value = int(y_digits)

    room_x = x_value if ew.upper() == "E" else -x_value - 1
    room_y = y_value if ns.upper() == "N" else -y_value - 1
    return RoomCoordinate(room_x, room_y)


def format_room_name(coord: RoomCoordinate) -> str:
    """Format a coordinate as a canonical room name (uppercase letters)."""

    if coord.sim:
        return SIM_ROOM_NAME

    if coord.room_x >= 0:
        horizontal = f"E{coord.room_x}"
    else:
        horizontal = f"W{-coord.room_x - 1}"

    if coord.room_y >= 0:
        vertical = f"N{coord.room_y}"
    else:
        vertical = f"S{-coord.room_y - 1}"

    return horizontal + vertical


def pack_room(coord: RoomCoordinate) -> int:
    """Pack a room coordinate into 16 bits: ``(x + 128) << 8 | (y + 128)``.

    The sim room packs to 0.

    Raises:
        RoomOutOfRange: If either axis is outside [-127, 127].
    """

    if coord.sim:
        return 0
    if not coord.is_packable():
        raise RoomOutOfRange(coord.room_x, coord.room_y)
    return ((coord.room_x + ROOM_BIAS) << 8) | (coord.room_y + ROOM_BIAS)


def unpack_room(raw: int) -> RoomCoordinate:
    """Inverse of ``pack_room``.

    Raises:
        CorruptPackedPosition: If ``raw`` is not a 16-bit value or only one
            of its two room fields carries the sim marker.
    """

    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= 0xFFFF:
        raise CorruptPackedPosition(raw, "room bits must be a 16-bit unsigned integer")

    x_raw = (raw >> 8) & 0xFF
    y_raw = raw & 0xFF

    if x_raw == 0 and y_raw == 0:
        return SIM_ROOM
    if x_raw == 0 or y_raw == 0:
        raise CorruptPackedPosition(raw, "room field 0 is reserved for the sim room")

    return RoomCoordinate(x_raw - ROOM_BIAS, y_raw - ROOM_BIAS)
