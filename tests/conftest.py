"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from replica import Accessor, CloneSettings, DataSlot, Record


@pytest.fixture
def point_proto():
    """Prototype record with a shared method and a computed accessor."""
    proto = Record()
    proto.define("describe", DataSlot(lambda self: f"({self['x']}, {self['y']})"))
    proto.define(
        "manhattan",
        Accessor(getter=lambda self: abs(self["x"]) + abs(self["y"])),
    )
    return proto


@pytest.fixture
def point(point_proto):
    """Record linked to point_proto with own x and y."""
    p = Record.create(point_proto)
    p["x"] = 3
    p["y"] = -4
    return p


@pytest.fixture
def quiet_settings():
    """Clone settings that degrade unsupported containers silently."""
    return CloneSettings(on_unsupported="empty")


@dataclass
class FixtureNode:
    label: str
    children: list


@pytest.fixture
def node_cls():
    return FixtureNode
