"""
Roomgrid - typed room coordinates and path-addressed memory for grid worlds.

Encodes room names and in-room positions into compact integers (and back),
and gives type-checked access into a persisted, weakly typed memory tree
addressed by dotted paths.

No live game access. No global state beyond environment configuration.
Persistence is pluggable and optional.
"""

__version__ = "0.1.0"

# Room and position codecs
from .room_name import (
    RoomCoordinate,
    SIM_ROOM,
    SIM_ROOM_NAME,
    parse_room_name,
    format_room_name,
    pack_room,
    unpack_room,
)
from .position import (
    LocalPosition,
    PositionMode,
    ReadablePosition,
    from_room_and_local,
    to_world,
    from_world,
    pack,
    unpack,
    serialize_position,
    deserialize_position,
)

# Path-addressed store
from .store import (
    StoreValue,
    PathSegment,
    Path,
    MemoryStore,
    parse_path,
    get_path,
    has_path,
    set_path,
    delete_path,
    convert_value,
    to_store_value,
)

# Persistence and host bindings
from .persistence import (
    StoreBackend,
    InMemoryBackend,
    JsonFileBackend,
    StorageHandleBackend,
)
from .bindings import WorldHandle, StorageHandle, query_position

from .cost_matrix import LocalCostMatrix, SparseCostMatrix

from .errors import (
    RoomGridError,
    MalformedRoomName,
    InvalidLocal,
    RoomOutOfRange,
    CorruptPackedPosition,
    InvalidPositionRecord,
    EmptyPath,
    CorruptCostMatrix,
)

__all__ = [
    # Room names
    "RoomCoordinate",
    "SIM_ROOM",
    "SIM_ROOM_NAME",
    "parse_room_name",
    "format_room_name",
    "pack_room",
    "unpack_room",
    # Positions
    "LocalPosition",
    "PositionMode",
    "ReadablePosition",
    "from_room_and_local",
    "to_world",
    "from_world",
    "pack",
    "unpack",
    "serialize_position",
    "deserialize_position",
    # Store
    "StoreValue",
    "PathSegment",
    "Path",
    "MemoryStore",
    "parse_path",
    "get_path",
    "has_path",
    "set_path",
    "delete_path",
    "convert_value",
    "to_store_value",
    # Persistence
    "StoreBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "StorageHandleBackend",
    # Bindings
    "WorldHandle",
    "StorageHandle",
    "query_position",
    # Cost matrices
    "LocalCostMatrix",
    "SparseCostMatrix",
    # Errors
    "RoomGridError",
    "MalformedRoomName",
    "InvalidLocal",
    "RoomOutOfRange",
    "CorruptPackedPosition",
    "InvalidPositionRecord",
    "EmptyPath",
    "CorruptCostMatrix",
]
