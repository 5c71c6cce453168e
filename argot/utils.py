"""
Argot utilities shared by the matcher, the registry and the fault layer.

- Unset: the "argument not given" sentinel, for parameters where None is a
  meaningful value. Resolve it with coalesce(value, default).
- rename: give generated callables a readable __name__ for tracebacks.
- mirror: read-only property returning a copy of a private container.
- stringify: the string used in place of a non-string name.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> stringify(["a", 1])
    '["a", 1]'
"""
import builtins
import functools
import json
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """type of the Unset sentinel: a falsy singleton that cannot be subclassed."""

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")


def coalesce(object, default=None, /):
    """`default` when `object` is Unset, else `object` (None, 0 and "" are kept)."""
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) sets __name__ and __qualname__ and returns the callable.
    rename(name) returns a decorator doing the same.
    """
    if len(parameters) == 1:
        name, = parameters
        if not isinstance(name, str):
            raise TypeError("rename() name must be a string")
        return functools.partial(_rename, name=name)
    if len(parameters) == 2:
        return _rename(*parameters)
    raise TypeError(f"rename() takes 1 or 2 arguments ({len(parameters)} given)")


def _rename(callable, name):
    if not builtins.callable(callable):
        raise TypeError("rename() target must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string")
    try:
        callable.__name__ = callable.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError(f"cannot rename {callable!r}") from None
    return callable


def _copy(object):
    match object:
        case str() | bytes() | bytearray():
            return object
        case Mapping():
            return {key: _copy(value) for key, value in object.items()}
        case Set():
            return {_copy(value) for value in object}
        case Sequence():
            return [_copy(value) for value in object]
    return object


def mirror(name, /):
    """
    property exposing a copy of `self._<name>`.

    nested lists, dicts and sets are copied too, so callers can mutate the result freely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _copy(getattr(self, f"_{name}"))

    return property(getter)


def stringify(object, /):
    """
    JSON text of `object`; values JSON cannot encode fall back to their repr.

    containers JSON rejects as a whole (non-string keys, cycles) give repr(object).
    """
    try:
        return json.dumps(object, default=repr, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(object)


Unset = UnsetType()


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "stringify",
    "UnsetType",
    "Unset",
)
