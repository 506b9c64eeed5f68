"""Classification of values into fixed-width primitive kinds.

Python values carry no declared width, so hashing and equality helpers
derive one from the runtime type: numpy scalar types map to the integer and
floating point widths they represent, while plain ``bool``, ``int`` and
``float`` map to boolean, int (or long, when out of the 32-bit range) and
double. Arrays are one-dimensional numpy arrays of those dtypes, or object
sequences (lists, tuples, object-dtype and multi-dimensional ndarrays).

The module also provides the bit-level conversions the helpers rely on:
signed wrap-around to a given width and canonical bit patterns for
single and double precision floats.
"""
from __future__ import annotations

import enum
import math
from typing import Any, Final

import numpy as np

__all__ = [
    'ElementKind',
    'array_kind_of',
    'canonical_bits',
    'double_to_long_bits',
    'float_to_int_bits',
    'fold_long_bits',
    'primitive_kind_of',
    'to_int32',
    'to_int64',
]


class ElementKind(enum.Enum):
    """Kind of a scalar value or of the elements of an array."""
    BOOLEAN = "boolean"
    BYTE = "byte"
    CHAR = "char"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    OBJECT = "object"


INT32_MIN: Final[int] = -2 ** 31
INT32_MAX: Final[int] = 2 ** 31 - 1
INT64_MIN: Final[int] = -2 ** 63
INT64_MAX: Final[int] = 2 ** 63 - 1

_MASK_32: Final[int] = 0xFFFFFFFF
_MASK_64: Final[int] = 0xFFFFFFFFFFFFFFFF

CANONICAL_FLOAT_NAN_BITS: Final[int] = 0x7FC00000
CANONICAL_DOUBLE_NAN_BITS: Final[int] = 0x7FF8000000000000

# Keyed by (dtype.kind, dtype.itemsize) so that byte order and platform
# aliases (np.int_, np.longlong, ...) resolve to the same kind.
_DTYPE_KINDS: Final[dict[tuple[str, int], ElementKind]] = {
    ('b', 1): ElementKind.BOOLEAN,
    ('i', 1): ElementKind.BYTE,
    ('u', 2): ElementKind.CHAR,
    ('i', 2): ElementKind.SHORT,
    ('i', 4): ElementKind.INT,
    ('i', 8): ElementKind.LONG,
    ('f', 4): ElementKind.FLOAT,
    ('f', 8): ElementKind.DOUBLE,
}


def _wrap_signed(value: int, bits: int) -> int:
    """Truncate value to its lowest bits, read back as two's complement."""
    mask = (1 << bits) - 1
    value = int(value) & mask
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def to_int32(value: Any) -> int:
    """Wrap an integer to the signed 32-bit range.

    Args:
        value: Any integer (Python int or numpy integer scalar).

    Returns:
        The value modulo 2**32, interpreted as a signed 32-bit integer.
    """
    return _wrap_signed(value, 32)


def to_int64(value: Any) -> int:
    """Wrap an integer to the signed 64-bit range."""
    return _wrap_signed(value, 64)


def float_to_int_bits(value: Any) -> int:
    """Return the canonical single precision bit pattern of value.

    Every NaN maps to the same canonical pattern, so two NaNs compare equal.
    Positive and negative zero keep distinct patterns.

    Args:
        value: A number convertible to float32.

    Returns:
        The IEEE 754 single precision bits as a signed 32-bit integer.
    """
    if math.isnan(value):
        return _wrap_signed(CANONICAL_FLOAT_NAN_BITS, 32)
    return int(np.array(value, dtype=np.float32).view(np.int32).item())


def double_to_long_bits(value: Any) -> int:
    """Return the canonical double precision bit pattern of value.

    Every NaN maps to the same canonical pattern, so two NaNs compare equal.
    Positive and negative zero keep distinct patterns.

    Args:
        value: A number convertible to float64.

    Returns:
        The IEEE 754 double precision bits as a signed 64-bit integer.
    """
    if math.isnan(value):
        return _wrap_signed(CANONICAL_DOUBLE_NAN_BITS, 64)
    return int(np.array(value, dtype=np.float64).view(np.int64).item())


def fold_long_bits(value: int) -> int:
    """Fold a 64-bit value into 32 bits by XOR-ing its two halves."""
    unsigned = int(value) & _MASK_64
    return to_int32((unsigned ^ (unsigned >> 32)) & _MASK_32)


def _char_code(value: Any) -> int:
    """Return the UTF-16 code unit for a one-character string or an integer."""
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError(
                f"A char must be a single character, got {value!r}")
        code = ord(value)
        if code > 0xFFFF:
            raise ValueError(
                f"Character {value!r} does not fit in one UTF-16 code unit")
        return code
    return int(value) & 0xFFFF


_CANONICALIZERS: Final = {
    ElementKind.BOOLEAN: lambda v: 1 if v else 0,
    ElementKind.BYTE: lambda v: _wrap_signed(v, 8),
    ElementKind.CHAR: _char_code,
    ElementKind.SHORT: lambda v: _wrap_signed(v, 16),
    ElementKind.INT: to_int32,
    ElementKind.LONG: to_int64,
    ElementKind.FLOAT: float_to_int_bits,
    ElementKind.DOUBLE: double_to_long_bits,
}


def canonical_bits(kind: ElementKind, value: Any) -> int:
    """Return the canonical integer representation of a primitive value.

    Integers are wrapped to the width of their kind, booleans become 0 or 1
    and floating point values become their canonical bit patterns. Two
    values of the same kind are equal exactly when their canonical bits are.

    Args:
        kind: The primitive kind to interpret value as.
        value: The value to convert.

    Returns:
        The canonical bits of value as a Python int.

    Raises:
        ValueError: If kind is ElementKind.OBJECT.
    """
    canonicalizer = _CANONICALIZERS.get(kind)
    if canonicalizer is None:
        raise ValueError(f"{kind} has no canonical bit representation")
    return canonicalizer(value)


def primitive_kind_of(value: Any) -> ElementKind | None:
    """Classify a scalar value into its primitive kind.

    Args:
        value: Any object.

    Returns:
        The primitive kind of value, or None if value is not a primitive
        scalar (None, strings, arrays and arbitrary objects included).
    """
    if isinstance(value, (bool, np.bool_)):
        return ElementKind.BOOLEAN
    if isinstance(value, np.generic):
        return _DTYPE_KINDS.get((value.dtype.kind, value.dtype.itemsize))
    if isinstance(value, float):
        return ElementKind.DOUBLE
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return ElementKind.INT
        if INT64_MIN <= value <= INT64_MAX:
            return ElementKind.LONG
    return None


def array_kind_of(value: Any) -> ElementKind | None:
    """Classify an array value by the kind of its elements.

    Lists, tuples, object-dtype ndarrays and ndarrays with more than one
    dimension are object arrays; their elements are classified one by one
    when they are hashed or compared.

    Args:
        value: Any object.

    Returns:
        The element kind of the array, or None if value is not an array.

    Raises:
        TypeError: If value is a zero-dimensional ndarray or a
            one-dimensional ndarray whose dtype has no primitive kind.
    """
    if isinstance(value, (list, tuple)):
        return ElementKind.OBJECT
    if not isinstance(value, np.ndarray):
        return None
    if value.ndim == 0:
        raise TypeError(
            f"Zero-dimensional arrays are not supported, got {value!r}")
    if value.ndim > 1 or value.dtype.kind == 'O':
        return ElementKind.OBJECT
    kind = _DTYPE_KINDS.get((value.dtype.kind, value.dtype.itemsize))
    if kind is None:
        raise TypeError(
            f"Unsupported array dtype {value.dtype}: expected bool, int8, "
            "uint16, int16, int32, int64, float32, float64 or object")
    return kind
