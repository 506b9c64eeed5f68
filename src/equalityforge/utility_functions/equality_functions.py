"""Null-safe equality helpers for primitive values, objects and arrays.

Floating point values are compared through their canonical bit patterns
rather than numerically: two NaNs are equal, while 0.0 and -0.0 are not.
This keeps equality consistent with the hash helpers, which hash those
same bit patterns.

Example:
    >>> def __eq__(self, other):
    ...     if self is other:
    ...         return True
    ...     if isinstance(other, MyClass):
    ...         return (equal(self.field1, other.field1)
    ...                 and equal(self.field2, other.field2))
    ...     return False
"""
from __future__ import annotations

from typing import Any, Final

from .primitive_kinds import (
    ElementKind,
    array_kind_of,
    canonical_bits,
    primitive_kind_of,
)

__all__ = [
    'equal',
    'equal_array',
    'equal_boolean',
    'equal_byte',
    'equal_char',
    'equal_double',
    'equal_float',
    'equal_int',
    'equal_long',
    'equal_short',
]


def _same_bits(kind: ElementKind, value1: Any, value2: Any) -> bool:
    return canonical_bits(kind, value1) == canonical_bits(kind, value2)


def equal_boolean(value1: Any, value2: Any) -> bool:
    """Compare two values as booleans."""
    return _same_bits(ElementKind.BOOLEAN, value1, value2)


def equal_byte(value1: Any, value2: Any) -> bool:
    """Compare two values as signed 8-bit integers."""
    return _same_bits(ElementKind.BYTE, value1, value2)


def equal_char(value1: Any, value2: Any) -> bool:
    """Compare two values as UTF-16 code units."""
    return _same_bits(ElementKind.CHAR, value1, value2)


def equal_short(value1: Any, value2: Any) -> bool:
    """Compare two values as signed 16-bit integers."""
    return _same_bits(ElementKind.SHORT, value1, value2)


def equal_int(value1: Any, value2: Any) -> bool:
    """Compare two values as signed 32-bit integers."""
    return _same_bits(ElementKind.INT, value1, value2)


def equal_long(value1: Any, value2: Any) -> bool:
    """Compare two values as signed 64-bit integers."""
    return _same_bits(ElementKind.LONG, value1, value2)


def equal_float(value1: Any, value2: Any) -> bool:
    """Compare two values by their single precision bit patterns.

    Returns:
        True if both values have the same canonical float32 bits; any two
        NaNs are equal, 0.0 and -0.0 are not.
    """
    return _same_bits(ElementKind.FLOAT, value1, value2)


def equal_double(value1: Any, value2: Any) -> bool:
    """Compare two values by their double precision bit patterns.

    Returns:
        True if both values have the same canonical float64 bits; any two
        NaNs are equal, 0.0 and -0.0 are not.
    """
    return _same_bits(ElementKind.DOUBLE, value1, value2)


_PRIMITIVE_COMPARATORS: Final = {
    ElementKind.BOOLEAN: equal_boolean,
    ElementKind.BYTE: equal_byte,
    ElementKind.CHAR: equal_char,
    ElementKind.SHORT: equal_short,
    ElementKind.INT: equal_int,
    ElementKind.LONG: equal_long,
    ElementKind.FLOAT: equal_float,
    ElementKind.DOUBLE: equal_double,
}


def equal_array(array1: Any, array2: Any) -> bool:
    """Compare two arrays element by element.

    Args:
        array1: A recognized array (see array_kind_of) or None.
        array2: A recognized array or None.

    Returns:
        True if both are None or the same object, or if both arrays have
        the same element kind and length and every pair of elements is
        equal. False otherwise.

    Raises:
        TypeError: If an argument is neither None nor a recognized array.
    """
    if array1 is array2:
        return True
    if array1 is None or array2 is None:
        return False

    kind1 = array_kind_of(array1)
    kind2 = array_kind_of(array2)
    for array, kind in ((array1, kind1), (array2, kind2)):
        if kind is None:
            raise TypeError(
                f"Expected an array, got {type(array).__name__}: {array!r}")
    if kind1 is not kind2:
        return False
    if len(array1) != len(array2):
        return False

    comparator = _PRIMITIVE_COMPARATORS.get(kind1, equal)
    return all(comparator(element1, element2)
               for element1, element2 in zip(array1, array2))


def equal(value1: Any, value2: Any) -> bool:
    """Compare any two values, choosing the comparison by runtime type.

    Identical objects are equal and None equals only None. Arrays are
    compared with equal_array. Primitive scalars are equal only to
    primitives of the same kind with the same canonical bits, so an int
    never equals a float or a bool. Everything else falls back to ==.

    Args:
        value1: First value.
        value2: Second value.

    Returns:
        True if the values are equal under the rules above.

    Raises:
        TypeError: If either value is an unsupported array.
    """
    if value1 is value2:
        return True
    if value1 is None or value2 is None:
        return False

    if array_kind_of(value1) is not None:
        if array_kind_of(value2) is None:
            return False
        return equal_array(value1, value2)
    if array_kind_of(value2) is not None:
        return False

    kind1 = primitive_kind_of(value1)
    kind2 = primitive_kind_of(value2)
    if kind1 is not None or kind2 is not None:
        if kind1 is not kind2:
            return False
        return _PRIMITIVE_COMPARATORS[kind1](value1, value2)

    return bool(value1 == value2)
