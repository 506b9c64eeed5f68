"""Tests for primitive kind classification and bit conversions."""
import math

import numpy as np
import pytest

from equalityforge import ElementKind
from equalityforge.utility_functions.primitive_kinds import (
    array_kind_of,
    canonical_bits,
    double_to_long_bits,
    float_to_int_bits,
    fold_long_bits,
    primitive_kind_of,
    to_int32,
    to_int64,
)


@pytest.mark.parametrize("value, kind", [
    (True, ElementKind.BOOLEAN),
    (np.bool_(False), ElementKind.BOOLEAN),
    (np.int8(1), ElementKind.BYTE),
    (np.uint16(1), ElementKind.CHAR),
    (np.int16(1), ElementKind.SHORT),
    (np.int32(1), ElementKind.INT),
    (np.int64(1), ElementKind.LONG),
    (np.float32(1.0), ElementKind.FLOAT),
    (np.float64(1.0), ElementKind.DOUBLE),
    (1.5, ElementKind.DOUBLE),
    (5, ElementKind.INT),
    (-2 ** 31, ElementKind.INT),
    (2 ** 31 - 1, ElementKind.INT),
    (2 ** 31, ElementKind.LONG),
    (-2 ** 31 - 1, ElementKind.LONG),
])
def test_primitive_kind_of_primitives(value, kind):
    """Verify scalars are classified by their runtime width."""
    assert primitive_kind_of(value) is kind


@pytest.mark.parametrize("value", [
    None, "a", 2 ** 63, [1], (1,), np.uint8(1), object(),
])
def test_primitive_kind_of_non_primitives(value):
    """Verify non-primitive values have no primitive kind."""
    assert primitive_kind_of(value) is None


@pytest.mark.parametrize("value, kind", [
    ([1, 2], ElementKind.OBJECT),
    ((1,), ElementKind.OBJECT),
    (np.array([None, 1], dtype=object), ElementKind.OBJECT),
    (np.zeros((2, 2), dtype=np.int32), ElementKind.OBJECT),
    (np.array([True]), ElementKind.BOOLEAN),
    (np.array([1], dtype=np.int8), ElementKind.BYTE),
    (np.array([1], dtype=np.uint16), ElementKind.CHAR),
    (np.array([1], dtype=np.int16), ElementKind.SHORT),
    (np.array([1], dtype=np.int32), ElementKind.INT),
    (np.array([1], dtype='>i4'), ElementKind.INT),
    (np.array([1], dtype=np.int64), ElementKind.LONG),
    (np.array([1], dtype=np.float32), ElementKind.FLOAT),
    (np.array([1], dtype=np.float64), ElementKind.DOUBLE),
])
def test_array_kind_of_arrays(value, kind):
    """Verify arrays are classified by their element kind."""
    assert array_kind_of(value) is kind


@pytest.mark.parametrize("value", ["abc", 5, None, {1: 2}, {1, 2}])
def test_array_kind_of_non_arrays(value):
    """Verify strings, scalars and other collections are not arrays."""
    assert array_kind_of(value) is None


@pytest.mark.parametrize("value", [
    np.array([1j]), np.array(["a"]), np.array(5), np.array([1], dtype=np.uint32),
])
def test_array_kind_of_rejects_unsupported_arrays(value):
    """Verify unsupported ndarray shapes fail fast."""
    with pytest.raises(TypeError):
        array_kind_of(value)


@pytest.mark.parametrize("value, expected", [
    (0, 0),
    (-1, -1),
    (2 ** 31, -2 ** 31),
    (2 ** 32 + 5, 5),
    (0xFFFFFFFF, -1),
    (np.int64(2 ** 31), -2 ** 31),
])
def test_to_int32_wraps_around(value, expected):
    """Verify 32-bit two's complement wrap-around."""
    assert to_int32(value) == expected


def test_to_int64_wraps_around():
    """Verify 64-bit two's complement wrap-around."""
    assert to_int64(2 ** 63) == -2 ** 63
    assert to_int64(2 ** 64 + 7) == 7


def test_float_to_int_bits():
    """Verify single precision bit patterns."""
    assert float_to_int_bits(1.0) == 0x3F800000
    assert float_to_int_bits(np.float32(1.0)) == 0x3F800000
    assert float_to_int_bits(0.0) == 0
    assert float_to_int_bits(-0.0) == -2 ** 31


def test_float_to_int_bits_canonicalizes_nan():
    """Verify every NaN maps to the canonical float NaN pattern."""
    payload_nan = np.array([0x7FC00001], dtype=np.int32).view(np.float32)[0]
    assert math.isnan(payload_nan)
    assert float_to_int_bits(float('nan')) == 0x7FC00000
    assert float_to_int_bits(payload_nan) == 0x7FC00000


def test_double_to_long_bits():
    """Verify double precision bit patterns."""
    assert double_to_long_bits(1.0) == 0x3FF0000000000000
    assert double_to_long_bits(0.0) == 0
    assert double_to_long_bits(-0.0) == -2 ** 63
    assert double_to_long_bits(float('nan')) == 0x7FF8000000000000
    assert double_to_long_bits(-float('nan')) == 0x7FF8000000000000


def test_fold_long_bits():
    """Verify folding XORs the two 32-bit halves."""
    assert fold_long_bits(-1) == 0
    assert fold_long_bits(2 ** 32) == 1
    assert fold_long_bits(0x3FF0000000000000) == 0x3FF00000


def test_canonical_bits_wraps_to_kind_width():
    """Verify integers are wrapped to the width of their kind."""
    assert canonical_bits(ElementKind.BYTE, 255) == -1
    assert canonical_bits(ElementKind.SHORT, 40000) == -25536
    assert canonical_bits(ElementKind.CHAR, 'a') == 97
    assert canonical_bits(ElementKind.CHAR, np.uint16(65535)) == 65535
    assert canonical_bits(ElementKind.BOOLEAN, np.bool_(True)) == 1


@pytest.mark.parametrize("value", ["ab", "", "\U0001F600"])
def test_canonical_bits_rejects_invalid_chars(value):
    """Verify chars must be exactly one UTF-16 code unit."""
    with pytest.raises(ValueError):
        canonical_bits(ElementKind.CHAR, value)


def test_canonical_bits_rejects_object_kind():
    """Verify object elements have no canonical bits."""
    with pytest.raises(ValueError, match="no canonical bit representation"):
        canonical_bits(ElementKind.OBJECT, 1)
