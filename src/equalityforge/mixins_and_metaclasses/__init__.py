"""Mixins and metaclasses for equalityforge.

This package provides:
- GuardedInitMeta: metaclass enforcing an initialization contract with a
  post-initialization hook.
- EqualityStrategyMixin: forwards __eq__ and __hash__ to an equality
  strategy built after initialization.
"""

from .equality_strategy_mixin import *
from .guarded_init_metaclass import *
