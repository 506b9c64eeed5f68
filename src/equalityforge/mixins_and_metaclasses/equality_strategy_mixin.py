"""Mixin that delegates __eq__ and __hash__ to an equality strategy.

Provides the EqualityStrategyMixin class, which builds one equality strategy
per instance right after initialization and forwards the instance's
equality comparisons and hashing to it.
"""
from __future__ import annotations

from typing import Any, Self

from ..equality_strategies.equality_strategy import (
    EqualityStrategy,
    _declared_field_names,
    field_based,
)
from .guarded_init_metaclass import GuardedInitMeta

__all__ = ['EqualityStrategyMixin']


class EqualityStrategyMixin(metaclass=GuardedInitMeta):
    """Base mixin for objects whose equality is defined by a strategy.

    The strategy is created once per instance by create_equality_strategy(),
    which runs after __init__ has returned, so a field-based strategy sees
    every field the constructor assigned. By default the instance fields
    define equality:

        >>> class Point(EqualityStrategyMixin):
        ...     def __init__(self, x, y):
        ...         super().__init__()
        ...         self.x = x
        ...         self.y = y
        >>> Point(1, 2) == Point(1, 2)
        True

    Override create_equality_strategy() to pick another strategy, for
    example value_based(self) for a ValueSupplier, reference_based(self) for
    identity semantics, or any strategy's cached() form for objects that
    never change after initialization.

    Note:
        Subclasses that define __post_init__ must call
        super().__post_init__().
    """

    def __init__(self, *args, **kwargs):
        """Initialize the mixin."""
        super().__init__(*args, **kwargs)

    def __post_init__(self) -> None:
        """Create the equality strategy once initialization has finished."""
        self._equality_strategy = self.create_equality_strategy()

    def create_equality_strategy(self) -> EqualityStrategy:
        """Create the strategy that defines this object's equality.

        Called exactly once, after __init__ completes. The default compares
        and hashes all instance fields.

        Returns:
            The equality strategy for this instance.
        """
        return field_based(self, exclude=('_init_finished',))

    @property
    def equality_strategy(self) -> EqualityStrategy:
        """The strategy this object's __eq__ and __hash__ delegate to.

        Raises:
            RuntimeError: If accessed before initialization completes.
        """
        if not self._init_finished:
            raise RuntimeError(
                f"Cannot use equality strategy of uninitialized "
                f"{type(self).__name__} object")
        strategy = getattr(self, '_equality_strategy', None)
        if strategy is None:
            raise RuntimeError(
                f"{type(self).__name__} has no equality strategy; "
                "a __post_init__ override must call super().__post_init__()")
        return strategy

    def __eq__(self, other: Any) -> bool:
        """Check equality through the equality strategy.

        Args:
            other: Object to compare against.

        Returns:
            True if the strategy considers other equal to this object.
        """
        return self.equality_strategy.equals(other)

    def __ne__(self, other: Any) -> bool:
        """Check inequality through the equality strategy."""
        return not self.__eq__(other)

    def __hash__(self) -> int:
        """Return the hash code computed by the equality strategy.

        Raises:
            RuntimeError: If initialization is incomplete.
        """
        return self.equality_strategy.hash_code()

    def __copy__(self) -> Self:
        """Return a shallow copy with its own equality strategy.

        The instance state is copied as is, except for the strategy, which
        is rebuilt for the copy so that it describes the copy rather than
        the original.
        """
        cls = type(self)
        clone = cls.__new__(cls)
        for name in _declared_field_names(self):
            if name != '_equality_strategy':
                object.__setattr__(clone, name, getattr(self, name))
        clone._equality_strategy = clone.create_equality_strategy()
        return clone
