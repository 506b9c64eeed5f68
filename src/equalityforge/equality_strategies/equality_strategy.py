"""Interchangeable strategies for implementing __eq__ and __hash__.

A class picks one strategy for itself, keeps it for its whole lifetime
and forwards its own equality and hashing to it:

    >>> class MyClass:
    ...     def __init__(self, field1, field2):
    ...         self.field1 = field1
    ...         self.field2 = field2
    ...         self._equality = field_based(self)
    ...
    ...     def __eq__(self, other):
    ...         return self._equality.equals(other)
    ...
    ...     def __hash__(self):
    ...         return self._equality.hash_code()

Three strategies are available:
- reference_based: equal only to the very same object, identity hash.
- field_based: compares and hashes the instance fields of the target.
- value_based: compares and hashes the values of a ValueSupplier.

Any strategy can be wrapped with cached() to memoize its hash code, which
also lets equals() reject unequal objects by hash before comparing them.

Note:
    Strategies are not thread-safe. A cached strategy shared between
    threads may compute its hash code more than once; the result is the
    same each time.
"""
from __future__ import annotations

import dataclasses
import inspect
import logging
import re
import types
import typing
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Final

from ..utility_functions.equality_functions import equal_array
from ..utility_functions.hash_functions import SINGLE_VALUE, hash_array
from ..utility_functions.primitive_kinds import to_int32
from .value_supplier import ValueSupplier

__all__ = [
    'CachedStrategy',
    'EqualityStrategy',
    'FieldBased',
    'ReferenceBased',
    'ValueBased',
    'field_based',
    'reference_based',
    'value_based',
]

_logger = logging.getLogger(__name__)

_NON_FIELD_SLOTS: Final[frozenset[str]] = frozenset({'__dict__', '__weakref__'})


def _describe(obj: Any) -> str:
    """Describe obj without calling its __repr__, which may use a strategy."""
    return f"<{type(obj).__qualname__} object at {id(obj):#x}>"


class EqualityStrategy(ABC):
    """Base class for equality strategies.

    A strategy wraps exactly one target object and decides whether other
    objects are equal to it and what its hash code is. The target is fixed
    at construction and can never be None.

    Note:
        Strategies intentionally keep the default object __eq__ and
        __hash__: equals() compares the target with an arbitrary object,
        not one strategy with another.
    """

    def __init__(self, target: Any):
        """Initialize the strategy.

        Args:
            target: The object whose equality this strategy defines.

        Raises:
            ValueError: If target is None.
        """
        if target is None:
            raise ValueError(
                f"{type(self).__name__} target must not be None")
        self._target = target

    @property
    def target(self) -> Any:
        """The object whose equality this strategy defines."""
        return self._target

    @abstractmethod
    def equals(self, other: Any) -> bool:
        """Check whether other is equal to the target.

        Args:
            other: Any object, including None.

        Returns:
            True if other is equal to the target under this strategy.
        """
        raise NotImplementedError

    @abstractmethod
    def hash_code(self) -> int:
        """Return the target's hash code under this strategy.

        Returns:
            A signed 32-bit integer. Objects that are equal under this
            strategy have the same hash code.
        """
        raise NotImplementedError

    def cached(self) -> EqualityStrategy:
        """Return a strategy that memoizes this strategy's hash code.

        Returns:
            A CachedStrategy wrapping this strategy, or this strategy
            itself if it is already cached.
        """
        return CachedStrategy(self)

    def uncached(self) -> EqualityStrategy:
        """Return the strategy without hash-code memoization.

        Returns:
            The wrapped strategy for a cached strategy, otherwise this
            strategy itself.
        """
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(target={_describe(self._target)})"


class ReferenceBased(EqualityStrategy):
    """Identity semantics: the target equals only itself."""

    def equals(self, other: Any) -> bool:
        return other is self._target

    def hash_code(self) -> int:
        # Bypasses any __hash__ override of the target.
        return to_int32(object.__hash__(self._target))


def _slot_attribute_name(klass: type, slot: str) -> str:
    """Return the attribute name of a slot, applying private name mangling."""
    if slot.startswith('__') and not slot.endswith('__'):
        return f"_{klass.__name__.lstrip('_')}{slot}"
    return slot


def _declared_field_names(target: Any) -> list[str]:
    """List the instance fields of target in declaration order.

    Dataclass instances use their comparable dataclass fields. Other
    objects use the slots declared along the MRO (base classes first) that
    currently hold a value, followed by the keys of the instance __dict__.
    Class attributes are never instance fields.
    """
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        return [f.name for f in dataclasses.fields(target) if f.compare]

    names: list[str] = []
    for klass in reversed(type(target).__mro__):
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in _NON_FIELD_SLOTS:
                continue
            name = _slot_attribute_name(klass, slot)
            if name not in names and hasattr(target, name):
                names.append(name)

    instance_dict = getattr(target, '__dict__', None)
    if instance_dict is not None:
        names.extend(name for name in instance_dict if name not in names)
    return names


_UNION_STRING = re.compile(r'^(?:typing\.)?(?:Optional|Union)\[(.*)\]$')


def _strategy_class_names() -> set[str]:
    """Names of EqualityStrategy and all of its currently defined subclasses."""
    names: set[str] = set()
    pending = [EqualityStrategy]
    while pending:
        klass = pending.pop()
        names.add(klass.__name__)
        pending.extend(klass.__subclasses__())
    return names


def _is_strategy_annotation(annotation: Any) -> bool:
    """Check whether an annotation declares an EqualityStrategy type.

    Optional and union annotations qualify when one of their members does.
    Annotations left as strings (unresolvable forward references) are
    matched by class name.
    """
    if isinstance(annotation, str):
        text = annotation.strip()
        match = _UNION_STRING.match(text)
        if match:
            text = match.group(1).replace(',', '|')
        strategy_names = _strategy_class_names()
        return any(part.strip().rsplit('.', 1)[-1] in strategy_names
                   for part in text.split('|'))
    if isinstance(annotation, types.UnionType) or typing.get_origin(annotation) is typing.Union:
        return any(_is_strategy_annotation(arg) for arg in typing.get_args(annotation))
    return (isinstance(annotation, type)
            and not isinstance(annotation, types.GenericAlias)
            and issubclass(annotation, EqualityStrategy))


def _class_annotations(klass: type) -> dict[str, Any]:
    """Annotations of klass, with string annotations resolved when possible."""
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return inspect.get_annotations(klass)


def _strategy_annotated_names(cls: type) -> set[str]:
    """Names annotated with an EqualityStrategy type anywhere in the MRO."""
    names: set[str] = set()
    for klass in cls.__mro__:
        for name, annotation in _class_annotations(klass).items():
            if _is_strategy_annotation(annotation):
                names.add(name)
    return names


class FieldBased(EqualityStrategy):
    """Compares and hashes the target's instance fields.

    The set of fields is captured once, when the strategy is created, and
    the same fields are used by both equals() and hash_code(). Their values
    are read at call time, so later changes to the target are observed.

    Fields holding an EqualityStrategy (or annotated with one) are skipped,
    so an object may keep its own strategy as a field without recursing
    into it.
    """

    def __init__(self, target: Any, *, exclude: Iterable[str] = ()):
        """Initialize the strategy and capture the target's fields.

        Args:
            target: The object whose equality this strategy defines.
            exclude: Additional field names to leave out.

        Raises:
            ValueError: If target is None.
        """
        super().__init__(target)
        excluded = set(exclude) | _strategy_annotated_names(type(target))
        field_names = []
        for name in _declared_field_names(target):
            if name in excluded:
                continue
            if isinstance(getattr(target, name), EqualityStrategy):
                excluded.add(name)
                continue
            field_names.append(name)
        self._field_names = tuple(field_names)
        _logger.debug("Captured fields %s of %s (excluded: %s)",
                      self._field_names, type(target).__qualname__,
                      sorted(excluded))

    @property
    def field_names(self) -> tuple[str, ...]:
        """Names of the fields used for equality and hashing, in order."""
        return self._field_names

    def _field_values(self, obj: Any) -> tuple[Any, ...]:
        """Read the captured fields from obj.

        Raises:
            RuntimeError: If a captured field cannot be read.
        """
        try:
            return tuple(getattr(obj, name) for name in self._field_names)
        except AttributeError as e:
            raise RuntimeError(
                f"Cannot read fields {self._field_names} of "
                f"{_describe(obj)}: {e}") from e

    def equals(self, other: Any) -> bool:
        """Compare the captured fields of the target and other.

        Other does not need to share the target's type, only its fields;
        an object lacking any of them is not equal.
        """
        if other is self._target:
            return True
        if other is None:
            return False
        if not all(hasattr(other, name) for name in self._field_names):
            return False
        return equal_array(self._field_values(self._target),
                           self._field_values(other))

    def hash_code(self) -> int:
        return hash_array(SINGLE_VALUE, self._field_values(self._target))


class ValueBased(EqualityStrategy):
    """Compares and hashes the values returned by a ValueSupplier."""

    def __init__(self, supplier: ValueSupplier):
        """Initialize the strategy.

        Args:
            supplier: The object whose values define its equality.

        Raises:
            ValueError: If supplier is None.
            TypeError: If supplier is not a ValueSupplier.
        """
        super().__init__(supplier)
        if not isinstance(supplier, ValueSupplier):
            raise TypeError(
                f"supplier must be a ValueSupplier, "
                f"got {type(supplier).__name__} instead")

    def equals(self, other: Any) -> bool:
        if other is self._target:
            return True
        if isinstance(other, ValueSupplier):
            return equal_array(tuple(self._target.get_values()),
                               tuple(other.get_values()))
        return False

    def hash_code(self) -> int:
        return hash_array(SINGLE_VALUE, tuple(self._target.get_values()))


class CachedStrategy(EqualityStrategy):
    """Decorator that memoizes the hash code of another strategy.

    The wrapped strategy computes the hash code at most once, on the first
    call to hash_code(); later calls return the memoized value even if the
    target has changed since. Use it only for targets whose significant
    state never changes.

    equals() first compares hash codes, rejecting unequal objects cheaply,
    and then delegates to the wrapped strategy.
    """

    def __init__(self, strategy: EqualityStrategy):
        """Initialize the decorator.

        Args:
            strategy: The strategy to memoize.

        Raises:
            ValueError: If strategy is None.
            TypeError: If strategy is not an EqualityStrategy.
        """
        super().__init__(strategy)
        if not isinstance(strategy, EqualityStrategy):
            raise TypeError(
                f"strategy must be an EqualityStrategy, "
                f"got {type(strategy).__name__} instead")
        self._hash_code: int | None = None

    @property
    def is_computed(self) -> bool:
        """Whether the hash code has been computed and memoized."""
        return self._hash_code is not None

    def equals(self, other: Any) -> bool:
        if other is None or type(other).__hash__ is None:
            return False
        try:
            other_hash = hash(other)
        except TypeError:
            # Hashable type holding unhashable contents, e.g. (1, [2]).
            return False
        # hash() maps a hash code of -1 to -2; compare both sides the same way.
        if hash(self.hash_code()) != other_hash:
            return False
        return self._target.equals(other)

    def hash_code(self) -> int:
        if self._hash_code is None:
            self._hash_code = self._target.hash_code()
            _logger.debug("Memoized hash code %d for %r",
                          self._hash_code, self._target)
        return self._hash_code

    def cached(self) -> EqualityStrategy:
        return self

    def uncached(self) -> EqualityStrategy:
        return self._target

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target!r})"


def reference_based(target: Any) -> EqualityStrategy:
    """Create an identity strategy for target.

    Raises:
        ValueError: If target is None.
    """
    return ReferenceBased(target)


def field_based(target: Any, *, exclude: Iterable[str] = ()) -> EqualityStrategy:
    """Create a strategy comparing and hashing the instance fields of target.

    Create it once the target's fields have all been assigned: fields
    added later are not taken into account.

    Args:
        target: The object whose equality the strategy defines.
        exclude: Field names to leave out.

    Returns:
        A FieldBased strategy.

    Raises:
        ValueError: If target is None.
    """
    return FieldBased(target, exclude=exclude)


def value_based(supplier: ValueSupplier) -> EqualityStrategy:
    """Create a strategy comparing and hashing the values of supplier.

    Raises:
        ValueError: If supplier is None.
        TypeError: If supplier is not a ValueSupplier.
    """
    return ValueBased(supplier)
