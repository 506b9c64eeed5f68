"""Hash-combination helpers for primitive values, objects and arrays.

Each helper folds one contribution into a running seed using the classic
``31 * seed + contribution`` scheme with signed 32-bit wrap-around:

    >>> h = MULTI_VALUE
    >>> h = hash_value(h, 42)
    >>> h = hash_value(h, "name")
    >>> h = hash_value(h, np.array([1, 2, 3], dtype=np.int32))

Start from MULTI_VALUE when several values contribute to one hash code and
from SINGLE_VALUE when only one does. Arrays are folded element by element
into an accumulator of their own, starting at MULTI_VALUE, which is then
combined with the outer seed once.
"""
from __future__ import annotations

from typing import Any, Final

from .primitive_kinds import (
    ElementKind,
    array_kind_of,
    canonical_bits,
    fold_long_bits,
    primitive_kind_of,
    to_int32,
)

__all__ = [
    'MULTI_VALUE',
    'PRIME',
    'SINGLE_VALUE',
    'hash_array',
    'hash_boolean',
    'hash_byte',
    'hash_char',
    'hash_double',
    'hash_float',
    'hash_int',
    'hash_long',
    'hash_short',
    'hash_value',
]

SINGLE_VALUE: Final[int] = 0
MULTI_VALUE: Final[int] = 1
PRIME: Final[int] = 31

_TRUE_CONTRIBUTION: Final[int] = 1231
_FALSE_CONTRIBUTION: Final[int] = 1237


def _combine(seed: Any, contribution: int) -> int:
    return to_int32(PRIME * int(seed) + contribution)


def _contribution(kind: ElementKind, value: Any) -> int:
    """Return the 32-bit contribution of a primitive value of the given kind."""
    bits = canonical_bits(kind, value)
    if kind is ElementKind.BOOLEAN:
        return _TRUE_CONTRIBUTION if bits else _FALSE_CONTRIBUTION
    if kind in (ElementKind.LONG, ElementKind.DOUBLE):
        return fold_long_bits(bits)
    return bits


def hash_boolean(seed: int, value: Any) -> int:
    """Fold a boolean into seed (1231 for true, 1237 for false)."""
    return _combine(seed, _contribution(ElementKind.BOOLEAN, value))


def hash_byte(seed: int, value: Any) -> int:
    """Fold a signed 8-bit integer into seed."""
    return _combine(seed, _contribution(ElementKind.BYTE, value))


def hash_char(seed: int, value: Any) -> int:
    """Fold a UTF-16 code unit (one-character str or integer) into seed."""
    return _combine(seed, _contribution(ElementKind.CHAR, value))


def hash_short(seed: int, value: Any) -> int:
    """Fold a signed 16-bit integer into seed."""
    return _combine(seed, _contribution(ElementKind.SHORT, value))


def hash_int(seed: int, value: Any) -> int:
    """Fold a signed 32-bit integer into seed."""
    return _combine(seed, _contribution(ElementKind.INT, value))


def hash_long(seed: int, value: Any) -> int:
    """Fold a signed 64-bit integer into seed, XOR-ing its two halves."""
    return _combine(seed, _contribution(ElementKind.LONG, value))


def hash_float(seed: int, value: Any) -> int:
    """Fold a single precision float into seed using its bit pattern."""
    return _combine(seed, _contribution(ElementKind.FLOAT, value))


def hash_double(seed: int, value: Any) -> int:
    """Fold a double precision float into seed using its folded bit pattern."""
    return _combine(seed, _contribution(ElementKind.DOUBLE, value))


_PRIMITIVE_HASHERS: Final = {
    ElementKind.BOOLEAN: hash_boolean,
    ElementKind.BYTE: hash_byte,
    ElementKind.CHAR: hash_char,
    ElementKind.SHORT: hash_short,
    ElementKind.INT: hash_int,
    ElementKind.LONG: hash_long,
    ElementKind.FLOAT: hash_float,
    ElementKind.DOUBLE: hash_double,
}


def hash_array(seed: int, array: Any) -> int:
    """Fold an array into seed.

    Every element is folded into an accumulator starting at MULTI_VALUE,
    using the helper matching the array's element kind (object arrays
    dispatch per element through hash_value). The accumulator is then
    folded into seed as an int.

    Args:
        seed: The running hash value.
        array: A recognized array (see array_kind_of) or None.

    Returns:
        The combined hash value. A None array contributes 0.

    Raises:
        TypeError: If array is neither None nor a recognized array.
    """
    if array is None:
        return hash_int(seed, 0)
    kind = array_kind_of(array)
    if kind is None:
        raise TypeError(
            f"Expected an array, got {type(array).__name__}: {array!r}")
    element_hasher = _PRIMITIVE_HASHERS.get(kind, hash_value)
    accumulator = MULTI_VALUE
    for element in array:
        accumulator = element_hasher(accumulator, element)
    return hash_int(seed, accumulator)


def hash_value(seed: int, value: Any) -> int:
    """Fold any value into seed, choosing the helper by runtime type.

    Primitive scalars use the helper of their kind, arrays use hash_array,
    None contributes 0 and every other object contributes its own hash()
    truncated to 32 bits.

    Args:
        seed: The running hash value.
        value: The value to fold in.

    Returns:
        The combined hash value.

    Raises:
        TypeError: If value is unhashable or an unsupported array.
    """
    if value is None:
        return hash_int(seed, 0)
    kind = primitive_kind_of(value)
    if kind is not None:
        return _PRIMITIVE_HASHERS[kind](seed, value)
    if array_kind_of(value) is not None:
        return hash_array(seed, value)
    return hash_int(seed, to_int32(hash(value)))
