"""Metaclass that tracks initialization and runs a post-init hook.

GuardedInitMeta marks every instance with _init_finished: False while
__init__ (including every subclass __init__) runs, True afterwards. Once
the flag is set, the instance's __post_init__ is invoked. Equality
strategies that capture an object's fields are built from that hook,
when the object is complete and before anyone can hash it.
"""
from abc import ABCMeta
from dataclasses import is_dataclass
from typing import Any, Type, TypeVar

__all__ = ['GuardedInitMeta']

T = TypeVar('T')


def _slot_names(klass: type) -> tuple[str, ...]:
    """Return the __slots__ declared directly on klass, as a tuple."""
    slots = klass.__dict__.get('__slots__', ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _has_slots_without_dict(cls: type) -> bool:
    """Check whether instances of cls lack a __dict__ because of __slots__.

    Args:
        cls: The class to check.

    Returns:
        True if some class in the MRO declares __slots__ and none of them
        provides a __dict__.
    """
    declares_slots = False
    for klass in cls.__mro__:
        if klass is object:
            continue
        if '__slots__' not in klass.__dict__:
            return False
        slots = _slot_names(klass)
        if '__dict__' in slots:
            return False
        declares_slots = declares_slots or bool(slots)
    return declares_slots


def _declares_slot(cls: type, slot_name: str) -> bool:
    """Check if any class in the MRO declares slot_name in __slots__."""
    return any(slot_name in _slot_names(klass) for klass in cls.__mro__)


def _validate_init_finished_slot(cls: type) -> None:
    """Require slotted classes to declare the _init_finished flag.

    Raises:
        TypeError: If cls uses __slots__ without __dict__ and does not
            declare _init_finished.
    """
    if _has_slots_without_dict(cls) and not _declares_slot(cls, "_init_finished"):
        raise TypeError(
            f"Class {cls.__name__} uses __slots__ without __dict__ and must "
            "declare '_init_finished' in __slots__.")


class GuardedInitMeta(ABCMeta):
    """Metaclass tracking initialization and calling __post_init__.

    Instances are created as usual, except that:
    - _init_finished is False before __init__ runs
    - _init_finished becomes True once the outermost __init__ returns
    - __post_init__, when defined, is called right after that

    Note:
        Dataclasses are rejected: they call __post_init__ from their own
        generated __init__, which would run the hook too early.
    """

    def __init__(cls, name, bases, dct):
        """Validate the new class.

        Raises:
            TypeError: If the class is a dataclass, inherits from more than
                one guarded class, or is slotted without _init_finished.
        """
        super().__init__(name, bases, dct)
        _raise_if_dataclass(cls)
        _validate_init_finished_slot(cls)

        guarded_bases = [base for base in bases if isinstance(base, GuardedInitMeta)]
        if len(guarded_bases) > 1:
            raise TypeError(f"Class {name} has {len(guarded_bases)} GuardedInitMeta "
                            "bases, but only 1 is allowed.")

    def __call__(cls: Type[T], *args: Any, **kwargs: Any) -> T:
        """Create an instance, then mark it initialized and run its hook.

        Raises:
            RuntimeError: If __init__ sets _init_finished to True itself.
            TypeError: If the class is a dataclass or __post_init__ is not
                callable.
        """
        _raise_if_dataclass(cls)

        instance = cls.__new__(cls, *args, **kwargs)
        if not isinstance(instance, cls):
            return instance

        instance._init_finished = False
        instance.__init__(*args, **kwargs)
        if instance._init_finished:
            raise RuntimeError(
                f"{cls.__name__}.__init__ must not set _init_finished to True")
        instance._init_finished = True

        _invoke_post_init_hook(instance)
        return instance


def _invoke_post_init_hook(instance: Any) -> None:
    """Call instance.__post_init__ if the class defines one.

    Raises:
        TypeError: If __post_init__ is not callable.
    """
    post_init = getattr(instance, "__post_init__", None)
    if post_init is None:
        return
    if not callable(post_init):
        raise TypeError(f"__post_init__ must be callable, got {post_init!r}")
    try:
        post_init()
    except Exception as e:
        _re_raise_with_context("__post_init__", e)


def _re_raise_with_context(hook_name: str, exc: Exception) -> None:
    """Re-raise exc as the same type, prefixed with the hook name.

    Args:
        hook_name: Name of the hook that failed.
        exc: The exception raised by the hook.

    Raises:
        RuntimeError: If exc's type cannot be built from a single message.
        Exception: A new exception of exc's type, chained to exc.
    """
    try:
        new_exc = type(exc)(f"Error in {hook_name}: {exc}")
    except Exception:
        raise RuntimeError(
            f"Error in {hook_name} (original error: {type(exc).__name__}: {exc})"
        ) from exc
    raise new_exc from exc


def _raise_if_dataclass(cls: Type) -> None:
    """Reject dataclasses.

    Raises:
        TypeError: If cls is a dataclass.
    """
    if is_dataclass(cls):
        raise TypeError(
            f"GuardedInitMeta cannot be used with dataclass {cls.__name__}: "
            "dataclasses call __post_init__ from their own __init__.")
