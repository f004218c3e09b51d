"""Tests for the host collaborator protocols."""

import pytest

from roomgrid.bindings import StorageHandle, WorldHandle, query_position
from roomgrid.errors import InvalidPositionRecord
from roomgrid.position import LocalPosition


class FakeWorld:
    def __init__(self, results):
        self.results = results
        self.calls = []

    def invoke(self, entry_point, *args):
        self.calls.append((entry_point, args))
        return self.results[entry_point]


class FakeSlot:
    def read(self):
        return None

    def write(self, text):
        pass


def test_fakes_satisfy_the_protocols():
    assert isinstance(FakeWorld({}), WorldHandle)
    assert isinstance(FakeSlot(), StorageHandle)
    assert not isinstance(object(), WorldHandle)


def test_query_position_decodes_both_result_shapes():
    pos = LocalPosition("E3N6", 10, 20)
    world = FakeWorld(
        {
            "creepPos": {"roomName": "E3N6", "x": 10, "y": 20},
            "packedPos": pos.packed,
            "noTarget": None,
            "weird": "E3N6",
        }
    )

    assert query_position(world, "creepPos", "harvester1") == pos
    assert world.calls[0] == ("creepPos", ("harvester1",))
    assert query_position(world, "packedPos") == pos
    assert query_position(world, "noTarget") is None

    with pytest.raises(InvalidPositionRecord):
        query_position(world, "weird")
