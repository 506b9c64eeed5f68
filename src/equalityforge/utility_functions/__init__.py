"""Utilities for equalityforge.

This package provides the low-level helpers the equality strategies are
built on, including:
- Primitive kind classification and bit-level conversions
- Hash combination for primitives, objects and arrays
- Null-safe equality for primitives, objects and arrays
- A fluent builder for multi-field hash codes
"""

from .equality_functions import *
from .hash_code_builder import *
from .hash_functions import *
from .primitive_kinds import *
