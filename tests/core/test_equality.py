"""Tests for structural equality."""

from dataclasses import dataclass

from replica import DataSlot, Record, Symbol, deep_equal


def test_primitive_values():
    assert deep_equal(0, 0)
    assert not deep_equal(True, 1)
    assert deep_equal(False, False)
    assert deep_equal(None, None)
    assert deep_equal(1, 1.0)


def test_arrays():
    assert deep_equal([], [])
    assert deep_equal(["1"], ["1"])
    assert not deep_equal([1], ["1"])
    assert deep_equal([1, 2, 3], [1, 2, 3])
    assert not deep_equal([1, 2, 3], [1, 3, 2])
    assert not deep_equal([1, 2], [1, 2, 3])


def test_booleans_are_not_numbers():
    assert deep_equal([True], [True])
    assert not deep_equal([True], [1])
    assert not deep_equal([0], [False])


def test_objects():
    assert deep_equal({"foo": "bar"}, {"foo": "bar"})
    assert deep_equal({"foo": "bar", "id": 1}, {"id": 1, "foo": "bar"})
    assert deep_equal([{"foo": 1}], [{"foo": 1}])
    assert not deep_equal([{"foo": 1}], [{"foo": 2}])
    assert not deep_equal({"foo": 1}, {"foo": 1, "bar": 2})


def test_different_kinds_differ():
    assert not deep_equal({}, [])
    assert not deep_equal((1,), [1])


def test_cyclic_graphs():
    a = {"name": "a"}
    a["self"] = a
    b = {"name": "a"}
    b["self"] = b

    assert deep_equal(a, b)


def test_instances_compare_own_state():
    class Box:
        def __init__(self, content):
            self.content = content

    assert deep_equal(Box([1]), Box([1]))
    assert not deep_equal(Box([1]), Box([2]))


def test_dataclasses_with_cycles():
    @dataclass(eq=False)
    class Node:
        value: int
        next: object = None

    a = Node(1)
    a.next = a
    b = Node(1)
    b.next = b

    assert deep_equal(a, b)


def test_functions_are_equal_only_to_themselves():
    def f():
        return 1

    def g():
        return 1

    assert deep_equal(f, f)
    assert not deep_equal(f, g)


def test_records_compare_proto_and_enumerable_keys(point_proto):
    a = Record.create(point_proto)
    b = Record.create(point_proto)
    a["x"] = b["x"] = 1
    a.define("hidden", DataSlot("a", enumerable=False))
    b.define("hidden", DataSlot("b", enumerable=False))

    assert deep_equal(a, b)

    b["x"] = 2
    assert not deep_equal(a, b)
    assert not deep_equal(Record.create(point_proto), Record())


def test_exceptions_compare_args():
    """CRITICAL: exception payloads live outside __dict__ and still count."""
    assert deep_equal(ValueError("a", [1]), ValueError("a", [1]))
    assert not deep_equal(ValueError("a"), ValueError("b"))
    assert not deep_equal(ValueError("a"), KeyError("a"))


def test_exceptions_compare_cause():
    a = RuntimeError("outer")
    b = RuntimeError("outer")
    a.__cause__ = KeyError("x")
    b.__cause__ = KeyError("y")

    assert not deep_equal(a, b)


def test_builtin_container_subclasses_compare_contents():
    class Tags(set):
        pass

    class Buffer(bytearray):
        pass

    assert deep_equal(Tags({1}), Tags({1}))
    assert not deep_equal(Tags({1}), Tags({2}))
    assert not deep_equal(Buffer(b"a"), Buffer(b"b"))


def test_distinct_symbols_differ():
    assert not deep_equal(Symbol("tag"), Symbol("tag"))
