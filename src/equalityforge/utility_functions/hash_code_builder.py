"""Fluent, immutable builder for multi-field hash codes.

A chain starts with hash_of() and grows with and_(); code() returns the
combined hash:

    >>> class MyClass:
    ...     def __hash__(self):
    ...         return (hash_of(self.field1)
    ...                 .and_(self.field2)
    ...                 .and_(self.field3)
    ...                 .code())

The result is identical to folding the same values by hand with
hash_value(), starting from MULTI_VALUE for two or more values and from
SINGLE_VALUE for a single one.
"""
from __future__ import annotations

from typing import Any

from .hash_functions import MULTI_VALUE, SINGLE_VALUE, hash_value

__all__ = ['HashCodeBuilder', 'hash_of']


class HashCodeBuilder:
    """One link of an immutable hash-code chain.

    Each link holds the seed carried over from the previous links and the
    value it contributes. Links are never modified: and_() returns a new
    link.

    Note:
        Create chains with hash_of() rather than by calling this class.
    """
    __slots__ = ('_seed', '_value', '_starts_chain')

    def __init__(self, seed: int, value: Any, *, starts_chain: bool = False):
        self._seed = seed
        self._value = value
        self._starts_chain = starts_chain

    def and_(self, value: Any) -> HashCodeBuilder:
        """Add one more contribution to the hash code.

        The first link of a chain was created with the single-value seed;
        once a second value arrives, its value is refolded with the
        multi-value seed so that the chain matches a manual fold.

        Args:
            value: The value to contribute (primitive, array, None or any
                hashable object).

        Returns:
            A new link carrying the combined hash of this chain.
        """
        if self._starts_chain:
            seed = hash_value(MULTI_VALUE, self._value)
        else:
            seed = self.code()
        return HashCodeBuilder(seed, value)

    def code(self) -> int:
        """Return the hash code computed by this chain."""
        return hash_value(self._seed, self._value)

    def __hash__(self) -> int:
        return self.code()

    def __int__(self) -> int:
        return self.code()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code()})"


def hash_of(value: Any) -> HashCodeBuilder:
    """Start a hash-code chain with its first contribution.

    Args:
        value: The first value to contribute.

    Returns:
        The first link of a new chain; call code() for a single-value hash
        or and_() to add more values.
    """
    return HashCodeBuilder(SINGLE_VALUE, value, starts_chain=True)
