"""Tools for implementing equality and hashing on Python classes.

This package provides interchangeable equality strategies that classes can
delegate their __eq__ and __hash__ to, a mixin that wires the delegation up
automatically, and the low-level helpers the strategies are built on:
31-based hash combination and bit-exact equality over fixed-width
primitives, numpy arrays and object sequences.

Public API:
- EqualityStrategy: Base class of all equality strategies.
- reference_based, ReferenceBased: Strategy with identity semantics.
- field_based, FieldBased: Strategy comparing and hashing an object's instance fields.
- value_based, ValueBased: Strategy comparing and hashing the values of a ValueSupplier.
- CachedStrategy: Decorator memoizing another strategy's hash code (see cached()).
- ValueSupplier: Base class for objects that expose their significant values.
- EqualityStrategyMixin: Forwards __eq__ and __hash__ to a per-instance strategy.
- GuardedInitMeta: Metaclass for strict initialization control and a post-init hook.
- hash_of: Start a fluent hash-code chain; extend it with and_() and finish with code().
- HashCodeBuilder: One immutable link of a hash_of() chain.
- hash_value: Fold any value into a running hash seed.
- hash_array: Fold an array into a running hash seed.
- hash_boolean, hash_byte, hash_char, hash_short, hash_int, hash_long,
  hash_float, hash_double: Fold a primitive of a given width into a seed.
- equal: Null-safe, array-aware, bit-exact equality for any two values.
- equal_array: Element-by-element equality for arrays.
- equal_boolean, equal_byte, equal_char, equal_short, equal_int, equal_long,
  equal_float, equal_double: Equality for primitives of a given width.
- SINGLE_VALUE, MULTI_VALUE: Seeds for single- and multi-value hash codes.
- PRIME: Multiplier used to combine a seed with each contribution.
- ElementKind: Primitive kinds recognized by the helpers.
"""

from ._version_info import __version__
from .equality_strategies import (
    CachedStrategy,
    EqualityStrategy,
    FieldBased,
    ReferenceBased,
    ValueBased,
    ValueSupplier,
    field_based,
    reference_based,
    value_based,
)
from .mixins_and_metaclasses import EqualityStrategyMixin, GuardedInitMeta
from .utility_functions import (
    MULTI_VALUE,
    PRIME,
    SINGLE_VALUE,
    ElementKind,
    HashCodeBuilder,
    equal,
    equal_array,
    equal_boolean,
    equal_byte,
    equal_char,
    equal_double,
    equal_float,
    equal_int,
    equal_long,
    equal_short,
    hash_array,
    hash_boolean,
    hash_byte,
    hash_char,
    hash_double,
    hash_float,
    hash_int,
    hash_long,
    hash_of,
    hash_short,
    hash_value,
)

__all__ = [
    'CachedStrategy',
    'ElementKind',
    'EqualityStrategy',
    'EqualityStrategyMixin',
    'FieldBased',
    'GuardedInitMeta',
    'HashCodeBuilder',
    'MULTI_VALUE',
    'PRIME',
    'ReferenceBased',
    'SINGLE_VALUE',
    'ValueBased',
    'ValueSupplier',
    '__version__',
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
    'field_based',
    'hash_array',
    'hash_boolean',
    'hash_byte',
    'hash_char',
    'hash_double',
    'hash_float',
    'hash_int',
    'hash_long',
    'hash_of',
    'hash_short',
    'hash_value',
    'reference_based',
    'value_based',
]
