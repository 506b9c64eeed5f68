"""Tests for EqualityStrategyMixin."""
import copy
from dataclasses import dataclass

import pytest

from equalityforge import (
    CachedStrategy,
    EqualityStrategyMixin,
    FieldBased,
    ValueSupplier,
    field_based,
    reference_based,
    value_based,
)


class Point(EqualityStrategyMixin):
    """Default field-based equality."""
    def __init__(self, x, y):
        super().__init__()
        self.x = x
        self.y = y


class Point3D(Point):
    """Subclass adding a field after the base initializer."""
    def __init__(self, x, y, z):
        super().__init__(x, y)
        self.z = z


class PlainPoint:
    def __init__(self, x, y):
        self.x = x
        self.y = y


class ValuePoint(EqualityStrategyMixin, ValueSupplier):
    """Equality defined by explicit values; the label is ignored."""
    def __init__(self, x, y, label=""):
        super().__init__()
        self.x = x
        self.y = y
        self.label = label

    def get_values(self):
        return (self.x, self.y)

    def create_equality_strategy(self):
        return value_based(self)


class Handle(EqualityStrategyMixin):
    """Identity semantics."""
    def __init__(self, name):
        super().__init__()
        self.name = name

    def create_equality_strategy(self):
        return reference_based(self)


class FrozenPoint(Point):
    """Memoized hash code."""
    def create_equality_strategy(self):
        return super().create_equality_strategy().cached()


def test_default_strategy_is_field_based():
    """Verify the default strategy compares instance fields."""
    p = Point(1, 2)
    assert isinstance(p.equality_strategy, FieldBased)
    assert p.equality_strategy.field_names == ('x', 'y')


def test_field_based_equality():
    """Verify objects with equal fields are equal and hash alike."""
    p1 = Point(1, 2)
    p2 = Point(1, 2)
    p3 = Point(1, 3)

    assert p1 == p2
    assert not (p1 != p2)
    assert p1 != p3
    assert hash(p1) == hash(p2) == 994


def test_bookkeeping_attributes_are_not_fields():
    """Verify the init flag and the strategy itself never count as fields."""
    p = Point(1, 2)
    assert '_init_finished' not in p.equality_strategy.field_names
    assert '_equality_strategy' not in p.equality_strategy.field_names


def test_subclass_fields_are_included():
    """Verify fields assigned after the base initializer are captured."""
    p = Point3D(1, 2, 3)
    assert p.equality_strategy.field_names == ('x', 'y', 'z')
    assert p == Point3D(1, 2, 3)
    assert p != Point3D(1, 2, 4)


def test_equality_with_other_objects():
    """Verify comparisons with None and objects lacking the fields."""
    p = Point(1, 2)
    assert p != None  # noqa: E711
    assert p != "Point(1, 2)"
    assert p != 123


def test_equality_with_plain_object_having_same_fields():
    """Verify field-based equality does not require the same type."""
    assert Point(1, 2) == PlainPoint(1, 2)


def test_usable_in_sets_and_dicts():
    """Verify instances work as set members and dict keys."""
    points = {Point(1, 2), Point(1, 2), Point(2, 1)}
    assert len(points) == 2

    lookup = {Point(1, 2): "a"}
    assert lookup[Point(1, 2)] == "a"


def test_value_based_override():
    """Verify value-based equality ignores fields that are not supplied."""
    v1 = ValuePoint(1, 2, label="first")
    v2 = ValuePoint(1, 2, label="second")

    assert v1 == v2
    assert hash(v1) == hash(v2) == 994
    assert v1 != ValuePoint(2, 1)
    assert v1 != Point(1, 2)


def test_reference_based_override():
    """Verify identity semantics through the mixin."""
    h1 = Handle("a")
    h2 = Handle("a")

    assert h1 == h1
    assert h1 != h2
    assert len({h1, h2}) == 2


def test_cached_override():
    """Verify the memoized hash code survives later changes."""
    p = FrozenPoint(1, 2)
    assert isinstance(p.equality_strategy, CachedStrategy)
    assert hash(p) == 994

    p.y = 3
    assert hash(p) == 994
    # Rejected by the stale hash code before the fields are compared.
    assert p != FrozenPoint(1, 3)


def test_cached_equality():
    """Verify memoized instances compare by fields when hashes match."""
    assert FrozenPoint(1, 2) == FrozenPoint(1, 2)
    assert FrozenPoint(1, 2) != FrozenPoint(2, 1)


def test_strategy_created_once():
    """Verify create_equality_strategy() runs once per instance."""
    class Counting(EqualityStrategyMixin):
        calls = 0

        def __init__(self, x):
            super().__init__()
            self.x = x

        def create_equality_strategy(self):
            type(self).calls += 1
            return field_based(self, exclude=('_init_finished',))

    c = Counting(1)
    hash(c)
    assert c == Counting(1)
    assert Counting.calls == 2


def test_hash_during_init_rejected():
    """Verify the strategy cannot be used before initialization completes."""
    class Eager(EqualityStrategyMixin):
        def __init__(self):
            super().__init__()
            self.code = hash(self)

    with pytest.raises(RuntimeError, match="uninitialized"):
        Eager()


def test_post_init_override_must_call_super():
    """Verify a __post_init__ override that skips super() is reported."""
    class Forgetful(EqualityStrategyMixin):
        def __init__(self):
            super().__init__()
            self.x = 1

        def __post_init__(self):
            self.ready = True

    obj = Forgetful()
    with pytest.raises(RuntimeError, match="super\\(\\).__post_init__"):
        hash(obj)


def test_post_init_override_calling_super():
    """Verify a cooperating __post_init__ override keeps equality working."""
    class Cooperative(EqualityStrategyMixin):
        def __init__(self, x):
            super().__init__()
            self.x = x

        def __post_init__(self):
            super().__post_init__()
            self.ready = True

    assert Cooperative(1) == Cooperative(1)
    assert Cooperative(1).equality_strategy.field_names == ('x',)


def test_dataclass_rejected():
    """Verify the mixin cannot be combined with dataclasses."""
    @dataclass(eq=False)
    class Data(EqualityStrategyMixin):
        x: int

    with pytest.raises(TypeError, match="dataclass"):
        Data(1)


def test_copy_gets_its_own_strategy():
    """Verify a shallow copy compares and hashes by its own fields."""
    original = Point(1, 2)
    clone = copy.copy(original)

    assert clone == original
    assert clone.equality_strategy.target is clone

    clone.y = 99
    assert clone == Point(1, 99)
    assert clone != Point(1, 2)
    assert hash(clone) == hash(Point(1, 99))
    assert original == Point(1, 2)


def test_copy_of_cached_instance_starts_uncomputed():
    """Verify copying rebuilds a memoizing strategy with an empty memo."""
    original = FrozenPoint(1, 2)
    hash(original)
    clone = copy.copy(original)

    assert isinstance(clone.equality_strategy, CachedStrategy)
    assert clone.equality_strategy.is_computed is False
    clone.y = 3
    assert hash(clone) == hash(FrozenPoint(1, 3))


def test_copy_of_value_based_instance():
    """Verify copies of value suppliers keep value-based equality."""
    clone = copy.copy(ValuePoint(1, 2, label="a"))
    clone.x = 5
    assert clone == ValuePoint(5, 2)
    assert clone.equality_strategy.target is clone
