"""Equality strategies for equalityforge.

This package provides the strategy objects that classes delegate their
__eq__ and __hash__ to:
- Reference-based (identity) equality
- Field-based equality over instance fields
- Value-based equality over the values of a ValueSupplier
- Hash-code memoization for any of the above
"""

from .equality_strategy import *
from .value_supplier import *
