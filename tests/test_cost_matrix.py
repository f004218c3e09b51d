"""Tests for dense and sparse cost matrices."""

import pytest

from roomgrid.cost_matrix import CELL_COUNT, LocalCostMatrix, SparseCostMatrix
from roomgrid.errors import CorruptCostMatrix
from roomgrid.position import LocalPosition


def test_dense_matrix_get_set_and_layout():
    matrix = LocalCostMatrix()
    matrix.set(3, 7, 255)
    assert matrix.get(3, 7) == 255
    assert matrix.get(7, 3) == 0
    assert matrix.get_bits()[3 * 50 + 7] == 255

    matrix[LocalPosition("E1N1", 10, 20)] = 5
    assert matrix[(10, 20)] == 5


def test_dense_matrix_bounds():
    matrix = LocalCostMatrix()
    with pytest.raises(IndexError):
        matrix.get(50, 0)
    with pytest.raises(IndexError):
        matrix.set(0, -1, 1)
    with pytest.raises(ValueError):
        matrix.set(0, 0, 256)


def test_dense_iter_yields_every_cell():
    matrix = LocalCostMatrix()
    matrix.set(49, 0, 9)
    cells = list(matrix.iter())
    assert len(cells) == CELL_COUNT
    assert cells[0] == ((0, 0), 0)
    assert cells[49 * 50] == ((49, 0), 9)


def test_merges():
    base = LocalCostMatrix()
    base.set(1, 1, 10)
    base.set(2, 2, 20)

    overlay = LocalCostMatrix()
    overlay.set(2, 2, 99)
    base.merge_from_dense(overlay)
    assert base.get(1, 1) == 10  # zeros in the overlay do not clear cells
    assert base.get(2, 2) == 99

    sparse = SparseCostMatrix({(1, 1): 0, (4, 4): 44})
    base.merge_from_sparse(sparse)
    assert base.get(1, 1) == 0  # explicit sparse zeros do
    assert base.get(4, 4) == 44

    collected = SparseCostMatrix()
    collected.merge_from_dense(base)
    assert dict(collected.iter()) == {(2, 2): 99, (4, 4): 44}
    collected.merge_from_sparse(SparseCostMatrix({(0, 0): 1}))
    assert collected.get(0, 0) == 1


def test_dense_sparse_conversion():
    dense = LocalCostMatrix()
    dense.set(0, 49, 3)
    dense.set(25, 25, 7)
    sparse = dense.to_sparse()
    assert len(sparse) == 2
    assert sparse.to_dense() == dense
    assert LocalCostMatrix.from_sparse(sparse) == dense


def test_dense_serialization():
    dense = LocalCostMatrix()
    dense.set(10, 10, 200)
    values = dense.to_list()
    assert len(values) == CELL_COUNT
    assert LocalCostMatrix.from_list(values) == dense

    with pytest.raises(CorruptCostMatrix):
        LocalCostMatrix.from_list(values[:-1])
    with pytest.raises(CorruptCostMatrix):
        LocalCostMatrix.from_list([0] * (CELL_COUNT - 1) + [256])
    with pytest.raises(CorruptCostMatrix):
        LocalCostMatrix(b"\x00" * 10)


def test_sparse_matrix_basics():
    sparse = SparseCostMatrix({(1, 2): 3, (60, 0): 9, LocalPosition("E0N0", 5, 5): 4})
    assert len(sparse) == 2  # the out-of-room key was dropped
    assert sparse.get(1, 2) == 3
    assert sparse[LocalPosition("W3S3", 5, 5)] == 4
    assert sparse.get(0, 0) == 0

    with pytest.raises(IndexError):
        sparse.get(0, 50)
    with pytest.raises(ValueError):
        sparse.set(0, 0, -1)


def test_sparse_serialization():
    sparse = SparseCostMatrix({(5, 1): 8, (1, 5): 2})
    assert sparse.to_list() == [[1, 5, 2], [5, 1, 8]]
    assert SparseCostMatrix.from_list(sparse.to_list()) == sparse

    with pytest.raises(CorruptCostMatrix):
        SparseCostMatrix.from_list([[50, 0, 1]])
    with pytest.raises(CorruptCostMatrix):
        SparseCostMatrix.from_list([[1, 2]])
    with pytest.raises(CorruptCostMatrix):
        SparseCostMatrix.from_list([[1, 2, 300]])
