"""Path-addressed access into a weakly typed value tree.

Persisted memory is a plain JSON-like tree (dicts, lists, strings, numbers,
booleans and ``None``). Paths are dot-separated: numeric segments index into
lists, everything else is a dict key::

    creeps.harvester1.target.0

Reads are forgiving. ``get_path`` returns ``None`` when the path is missing,
when a segment hits the wrong kind of container, or when the terminal value
cannot be converted to the requested type, so callers need a single fallback.

Writes are total. ``set_path`` creates missing containers on the way down and
replaces anything that is in the way with a fresh container of the right kind.
That discards the old subtree; it is logged as a warning but never raised.
Keys containing a literal ``.`` cannot be addressed.

Index padding is unbounded: writing ``a.5000000`` allocates a list of five
million ``None`` entries. Paths built from untrusted input should have their
numeric segments range-checked by the caller before reaching ``set_path``.
"""

from __future__ import annotations

import functools
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import EmptyPath, RoomGridError
from .logging_utils import log_debug, log_warning
from .position import LocalPosition, PositionMode, deserialize_position, serialize_position

# StoreValue mirrors what a JSON document can hold. "Absent" is a missing key
# or index rather than a value of its own.
StoreValue = Union[None, bool, int, float, str, List["StoreValue"], Dict[str, "StoreValue"]]

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One token of a dotted path."""

    text: str

    @property
    def is_index(self) -> bool:
        return self.text.isascii() and self.text.isdigit()

    @property
    def index(self) -> Optional[int]:
        return int(self.text) if self.is_index else None

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Path:
    """Non-empty sequence of segments; ``str(path)`` gives back the dotted form."""

    segments: Tuple[PathSegment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise EmptyPath()

    def __iter__(self) -> Iterator[PathSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return ".".join(segment.text for segment in self.segments)

    def child(self, segment: Union[str, int]) -> "Path":
        return Path(self.segments + (PathSegment(str(segment)),))


def parse_path(path: Union[str, Path]) -> Path:
    """Split a dotted path string into segments.

    Empty segments (``a..b``) are kept as empty-string keys.

    Raises:
        EmptyPath: If ``path`` is the empty string.
    """

    if isinstance(path, Path):
        return path
    if not path:
        raise EmptyPath()
    return Path(tuple(PathSegment(token) for token in path.split(".")))


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

_MISSING = object()


def _step(node: Any, segment: PathSegment) -> Any:
    """Return the child of ``node`` at ``segment`` or ``_MISSING``."""

    if segment.is_index:
        if isinstance(node, list) and segment.index < len(node):
            return node[segment.index]
        return _MISSING
    if isinstance(node, dict) and segment.text in node:
        return node[segment.text]
    return _MISSING


def _walk(root: StoreValue, path: Path) -> Any:
    node: Any = root
    for segment in path:
        node = _step(node, segment)
        if node is _MISSING:
            return _MISSING
    return node


def get_path(root: StoreValue, path: Union[str, Path], as_type: Optional[Type[T]] = None) -> Optional[T]:
    """Read the value at ``path``, optionally converted to ``as_type``.

    Returns ``None`` if the path is absent, a segment does not match the
    container kind it meets, or the conversion fails.
    """

    node = _walk(root, parse_path(path))
    if node is _MISSING or node is None:
        return None
    if as_type is None:
        return node
    return convert_value(node, as_type)


def has_path(root: StoreValue, path: Union[str, Path]) -> bool:
    return _walk(root, parse_path(path)) is not _MISSING


# ---------------------------------------------------------------------------
# Typed conversion
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=128)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def convert_value(value: StoreValue, as_type: Any) -> Any:
    """Convert a stored value to ``as_type`` or return ``None`` on a shape mismatch.

    Primitive targets are matched exactly: booleans are never numbers, and a
    float converts to ``int`` only when it is integral. Positions accept both
    stored shapes. Pydantic models and other annotations go through
    pydantic in strict mode, so ``"5"`` never reads as ``5``.
    """

    if as_type is bool:
        return value if isinstance(value, bool) else None

    if as_type is int:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    if as_type is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)

    if as_type is str:
        return value if isinstance(value, str) else None

    if as_type is list:
        return value if isinstance(value, list) else None

    if as_type is dict:
        return value if isinstance(value, dict) else None

    if as_type is LocalPosition:
        try:
            return deserialize_position(value)
        except RoomGridError:
            return None

    if isinstance(as_type, type) and issubclass(as_type, BaseModel):
        try:
            return as_type.model_validate(value, strict=True)
        except ValidationError:
            return None

    try:
        return _adapter(as_type).validate_python(value, strict=True)
    except ValidationError:
        return None


def to_store_value(value: Any, mode: Union[PositionMode, str, None] = None) -> StoreValue:
    """Lower rich values (positions, pydantic models, tuples) to a plain tree."""

    if isinstance(value, LocalPosition):
        return serialize_position(value, mode)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, context={"position_mode": mode})
    if isinstance(value, (list, tuple)):
        return [to_store_value(item, mode) for item in value]
    if isinstance(value, dict):
        return {str(key): to_store_value(item, mode) for key, item in value.items()}
    return value


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def _fits(node: Any, segment: PathSegment) -> bool:
    return isinstance(node, list) if segment.is_index else isinstance(node, dict)


def _new_container(segment: PathSegment) -> StoreValue:
    return [] if segment.is_index else {}


def _assign(container: StoreValue, segment: PathSegment, value: StoreValue) -> None:
    if segment.is_index:
        index = segment.index
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    else:
        container[segment.text] = value


def _replace_warning(where: str, old: Any, segment: PathSegment) -> None:
    wanted = "list" if segment.is_index else "dict"
    log_warning(
        f"Replacing {type(old).__name__} at '{where}' with an empty {wanted} "
        f"to reach segment '{segment.text}'"
    )


def set_path(root: StoreValue, path: Union[str, Path], value: StoreValue) -> StoreValue:
    """Write ``value`` at ``path`` and return the (possibly new) root.

    Containers are created as needed: a key segment creates a dict, an index
    segment creates a list padded with ``None`` up to the index. An existing
    value of the wrong kind is replaced, dropping its subtree. The root is
    mutated in place when it already has the right container kind; callers
    must still use the returned root, which differs when it had to be replaced.
    """

    parsed = parse_path(path)
    segments = parsed.segments

    if not _fits(root, segments[0]):
        if root is not None:
            _replace_warning("<root>", root, segments[0])
        root = _new_container(segments[0])

    node = root
    for depth, (segment, following) in enumerate(zip(segments, segments[1:])):
        child = _step(node, segment)
        if not _fits(child, following):
            if child is not _MISSING and child is not None:
                where = ".".join(s.text for s in segments[: depth + 1])
                _replace_warning(where, child, following)
            child = _new_container(following)
            _assign(node, segment, child)
        node = child

    _assign(node, segments[-1], value)
    return root


def delete_path(root: StoreValue, path: Union[str, Path]) -> bool:
    """Remove the value at ``path``; returns whether anything was removed.

    List entries are removed with ``pop``, shifting later entries down.
    Ancestors are left in place even when they become empty.
    """

    parsed = parse_path(path)
    *parents, last = parsed.segments

    node: Any = root
    for segment in parents:
        node = _step(node, segment)
        if node is _MISSING:
            return False

    if last.is_index:
        if isinstance(node, list) and last.index < len(node):
            node.pop(last.index)
            return True
        return False

    if isinstance(node, dict) and last.text in node:
        del node[last.text]
        return True
    return False


# ---------------------------------------------------------------------------
# Object wrapper
# ---------------------------------------------------------------------------


class MemoryStore:
    """Owns a value tree and offers typed accessors over dotted paths.

    The store is not thread-safe. One tick of the host simulation should own
    it exclusively, load it at the start, and persist it at the end.
    """

    def __init__(self, root: Optional[Dict[str, StoreValue]] = None):
        self.root: StoreValue = root if root is not None else {}

    # Reads -------------------------------------------------------------------

    def get(self, path: Union[str, Path], as_type: Optional[Type[T]] = None) -> Optional[T]:
        return get_path(self.root, path, as_type)

    def get_int(self, path: Union[str, Path]) -> Optional[int]:
        return get_path(self.root, path, int)

    def get_float(self, path: Union[str, Path]) -> Optional[float]:
        return get_path(self.root, path, float)

    def get_bool(self, path: Union[str, Path]) -> Optional[bool]:
        return get_path(self.root, path, bool)

    def get_str(self, path: Union[str, Path]) -> Optional[str]:
        return get_path(self.root, path, str)

    def get_list(self, path: Union[str, Path]) -> Optional[List[StoreValue]]:
        return get_path(self.root, path, list)

    def get_dict(self, path: Union[str, Path]) -> Optional[Dict[str, StoreValue]]:
        return get_path(self.root, path, dict)

    def get_position(self, path: Union[str, Path]) -> Optional[LocalPosition]:
        return get_path(self.root, path, LocalPosition)

    def get_model(self, path: Union[str, Path], model: Type[T]) -> Optional[T]:
        return get_path(self.root, path, model)

    def contains(self, path: Union[str, Path]) -> bool:
        return has_path(self.root, path)

    def keys(self, path: Union[str, Path, None] = None) -> List[str]:
        """Keys of the dict at ``path`` (the root when omitted); empty if not a dict."""
        node = self.root if path is None else get_path(self.root, path)
        return list(node.keys()) if isinstance(node, dict) else []

    # Writes ------------------------------------------------------------------

    def set(self, path: Union[str, Path], value: Any, mode: Union[PositionMode, str, None] = None) -> None:
        self.root = set_path(self.root, path, to_store_value(value, mode))

    def set_position(
        self,
        path: Union[str, Path],
        pos: LocalPosition,
        mode: Union[PositionMode, str, None] = None,
    ) -> None:
        self.root = set_path(self.root, path, serialize_position(pos, mode))

    def delete(self, path: Union[str, Path]) -> bool:
        return delete_path(self.root, path)

    # Raw round trip ----------------------------------------------------------

    def to_json(self) -> str:
        return json.dumps(self.root, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: Optional[str]) -> "MemoryStore":
        """Build a store from serialized memory; blank input gives an empty store."""
        if text is None or not text.strip():
            return cls()
        root = json.loads(text)
        if not isinstance(root, dict):
            log_debug(f"Raw memory root is a {type(root).__name__}, not a dict")
        return cls(root)

    def __repr__(self) -> str:
        return f"MemoryStore(keys={self.keys()!r})"
