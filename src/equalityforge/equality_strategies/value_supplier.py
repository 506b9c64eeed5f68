"""Capability for objects that define equality through explicit values."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

__all__ = ['ValueSupplier']


class ValueSupplier(ABC):
    """Base class for objects whose identity is an ordered list of values.

    Implement get_values() to opt into value-based equality without
    reflection over instance fields. Two suppliers are equal under the
    value-based strategy when their value lists are equal element by
    element, in order.

    Example:
        >>> class Point(ValueSupplier):
        ...     def __init__(self, x, y):
        ...         self.x = x
        ...         self.y = y
        ...         self._equality = value_based(self)
        ...
        ...     def get_values(self):
        ...         return (self.x, self.y)
    """

    @abstractmethod
    def get_values(self) -> Sequence[Any]:
        """Return the values that define this object's identity.

        Returns:
            The significant values, in a stable order. Values may be
            primitives, arrays, None or any hashable object.
        """
        raise NotImplementedError
