"""Per-room movement cost grids.

``LocalCostMatrix`` is a dense 50x50 byte grid stored column-major
(``index = x * 50 + y``), matching the layout path-finding collaborators
expect. ``SparseCostMatrix`` keeps only explicitly set cells. A cost of 0
means "unset / use terrain default" in both.
"""

from __future__ import annotations

from typing import Annotated, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import Field, TypeAdapter, ValidationError

from .errors import CorruptCostMatrix
from .position import ROOM_SIZE, LocalPosition

CELL_COUNT = ROOM_SIZE * ROOM_SIZE

Cost = Annotated[int, Field(ge=0, le=255)]
Cell = Union[Tuple[int, int], LocalPosition]

_DENSE_ADAPTER = TypeAdapter(Annotated[List[Cost], Field(min_length=CELL_COUNT, max_length=CELL_COUNT)])
_SPARSE_ADAPTER = TypeAdapter(List[Tuple[int, int, Cost]])


def _index(x: int, y: int) -> int:
    if not (0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE):
        raise IndexError(f"Cell ({x}, {y}) is outside the room")
    return x * ROOM_SIZE + y


def _cell_xy(cell: Cell) -> Tuple[int, int]:
    if isinstance(cell, LocalPosition):
        return cell.coords
    x, y = cell
    return x, y


class LocalCostMatrix:
    """Dense cost grid for one room."""

    __slots__ = ("_bits",)

    def __init__(self, bits: Union[bytes, bytearray, None] = None):
        if bits is None:
            self._bits = bytearray(CELL_COUNT)
        else:
            if len(bits) != CELL_COUNT:
                raise CorruptCostMatrix(f"expected {CELL_COUNT} cells, got {len(bits)}")
            self._bits = bytearray(bits)

    def get(self, x: int, y: int) -> int:
        return self._bits[_index(x, y)]

    def set(self, x: int, y: int, value: int) -> None:
        self._bits[_index(x, y)] = value

    def __getitem__(self, cell: Cell) -> int:
        return self.get(*_cell_xy(cell))

    def __setitem__(self, cell: Cell, value: int) -> None:
        self.set(*_cell_xy(cell), value)

    def get_bits(self) -> bytes:
        return bytes(self._bits)

    def iter(self) -> Iterator[Tuple[Tuple[int, int], int]]:
        """Yield ``((x, y), cost)`` for every cell in storage order."""
        for idx, value in enumerate(self._bits):
            yield divmod(idx, ROOM_SIZE), value

    def merge_from_dense(self, src: "LocalCostMatrix") -> None:
        """Copy every non-zero cell of ``src`` over this matrix."""
        for idx, value in enumerate(src._bits):
            if value:
                self._bits[idx] = value

    def merge_from_sparse(self, src: "SparseCostMatrix") -> None:
        """Copy every entry of ``src``, zeros included, over this matrix."""
        for (x, y), value in src.iter():
            self._bits[_index(x, y)] = value

    def to_sparse(self) -> "SparseCostMatrix":
        return SparseCostMatrix({xy: value for xy, value in self.iter() if value})

    @classmethod
    def from_sparse(cls, sparse: "SparseCostMatrix") -> "LocalCostMatrix":
        dense = cls()
        dense.merge_from_sparse(sparse)
        return dense

    # Serialization ------------------------------------------------------------

    def to_list(self) -> List[int]:
        return list(self._bits)

    @classmethod
    def from_list(cls, values: Sequence[int]) -> "LocalCostMatrix":
        """Rebuild from ``to_list`` output.

        Raises:
            CorruptCostMatrix: If ``values`` is not exactly 2500 costs in [0, 255].
        """
        try:
            costs = _DENSE_ADAPTER.validate_python(values)
        except ValidationError as exc:
            raise CorruptCostMatrix(str(exc)) from exc
        return cls(bytes(costs))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalCostMatrix):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        set_cells = sum(1 for value in self._bits if value)
        return f"LocalCostMatrix(set_cells={set_cells})"


class SparseCostMatrix:
    """Cost entries for explicitly set cells only."""

    __slots__ = ("_inner",)

    def __init__(self, entries: Optional[Mapping[Cell, int]] = None):
        self._inner: Dict[Tuple[int, int], int] = {}
        for cell, value in (entries or {}).items():
            x, y = _cell_xy(cell)
            # out-of-room keys are dropped rather than rejected
            if 0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE:
                self._inner[(x, y)] = value

    def get(self, x: int, y: int) -> int:
        _index(x, y)
        return self._inner.get((x, y), 0)

    def set(self, x: int, y: int, value: int) -> None:
        _index(x, y)
        if not 0 <= value <= 255:
            raise ValueError(f"Cost {value} is outside [0, 255]")
        self._inner[(x, y)] = value

    def __getitem__(self, cell: Cell) -> int:
        return self.get(*_cell_xy(cell))

    def __setitem__(self, cell: Cell, value: int) -> None:
        self.set(*_cell_xy(cell), value)

    def __len__(self) -> int:
        return len(self._inner)

    def iter(self) -> Iterator[Tuple[Tuple[int, int], int]]:
        return iter(self._inner.items())

    def merge_from_dense(self, src: LocalCostMatrix) -> None:
        self._inner.update((xy, value) for xy, value in src.iter() if value)

    def merge_from_sparse(self, src: "SparseCostMatrix") -> None:
        self._inner.update(src._inner)

    def to_dense(self) -> LocalCostMatrix:
        return LocalCostMatrix.from_sparse(self)

    # Serialization ------------------------------------------------------------

    def to_list(self) -> List[List[int]]:
        """``[[x, y, cost], ...]`` sorted by cell."""
        return [[x, y, value] for (x, y), value in sorted(self._inner.items())]

    @classmethod
    def from_list(cls, entries: Sequence[Sequence[int]]) -> "SparseCostMatrix":
        """Rebuild from ``to_list`` output.

        Raises:
            CorruptCostMatrix: If an entry is malformed or addresses a cell outside the room.
        """
        try:
            triples = _SPARSE_ADAPTER.validate_python(entries)
        except ValidationError as exc:
            raise CorruptCostMatrix(str(exc)) from exc

        matrix = cls()
        for x, y, value in triples:
            if not (0 <= x < ROOM_SIZE and 0 <= y < ROOM_SIZE):
                raise CorruptCostMatrix(f"entry ({x}, {y}) is outside the room")
            matrix._inner[(x, y)] = value
        return matrix

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseCostMatrix):
            return NotImplemented
        return self._inner == other._inner

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"SparseCostMatrix(entries={len(self._inner)})"
