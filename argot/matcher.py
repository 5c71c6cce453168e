"""
Argot structural type matcher.

A TypeMatcher answers one question: does every value satisfy the type spec at
the same position?

    >>> matcher = TypeMatcher()
    >>> matcher.match(["build", print], ["string", "function"])
    True
    >>> matcher.match([None], ["string|none"])
    True
    >>> matcher.match([3], [[str, "boolean"]])
    False

Type specs
- primitive category tags: "string", "number", "boolean", "none", "bytes",
  "function", "object" (see category()).
- class references: any class (or a PEP 604 union like int | str), checked with isinstance.
- custom handler names: predicates registered on the matcher ("array" and
  "string[]" are always present).
- "a|b" strings: union of the above string forms, tried left to right.
- lists/tuples: union of any of the above, tried left to right.
The first satisfied branch wins. Within a string branch a custom handler shadows the
primitive category of the same name.

Protection levels
- none:     malformed input to the matcher is coerced silently.
- boundary: malformed input is reported as a warning and coerced (default).
- sandbox:  like boundary, and the handler table is frozen (registrations warn and are dropped).
- hardened: malformed input raises, and registrations raise.
Entering sandbox or hardened freezes the handler table for good; lowering the level
afterwards does not unfreeze it. Once hardened has been entered, every later
registration raises, whatever the current level.
"""
import numbers
import threading
import types
from collections.abc import Mapping
from enum import StrEnum

from .faults import *
from .native import load_accelerator, get_native_info
from .utils import Unset, coalesce, mirror, stringify


class ProtectionLevel(StrEnum):
    NONE = "none"
    BOUNDARY = "boundary"
    SANDBOX = "sandbox"
    HARDENED = "hardened"


def category(value, /):
    """
    primitive category of a value.

    None -> "none", bool -> "boolean", numbers -> "number", str -> "string",
    bytes/bytearray -> "bytes", other callables -> "function", anything else -> "object".
    """
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    if callable(value):
        return "function"
    return "object"


def _is_array(value):
    return isinstance(value, (list, tuple))


def _is_string_array(value):
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def _never(value):
    return False


class TypeMatcher:
    """
    structural type matcher with a per-instance protection level.

    parameters
    - protection_level: ProtectionLevel | str, default "boundary".
    - warner: argot.warner.Warner receiving validation warnings; without one they
      go through the warnings module.
    - handlers: extra custom handlers installed before the table can be frozen.
    """
    handlers = mirror("handlers")

    def __init__(self, protection_level=ProtectionLevel.BOUNDARY, /, *, warner=Unset, handlers=Unset):
        self._lock = threading.RLock()
        self._handlers = {"array": _is_array, "string[]": _is_string_array}
        self._level = ProtectionLevel.BOUNDARY
        self._frozen_by = None
        self._warner = warner
        if handlers is not Unset:
            if not isinstance(handlers, Mapping):
                raise TypeError("handlers must be a mapping of names to predicates")
            for name, predicate in handlers.items():
                if not isinstance(name, str) or not callable(predicate):
                    raise TypeError("handlers must map string names to callable predicates")
                self._handlers[name] = predicate
        self.protection_level = protection_level

    @property
    def protection_level(self):
        return self._level

    @protection_level.setter
    def protection_level(self, level):
        level = ProtectionLevel(level)
        with self._lock:
            self._level = level
            if level is ProtectionLevel.HARDENED or (level is ProtectionLevel.SANDBOX and self._frozen_by is None):
                self._frozen_by = level

    @property
    def frozen(self):
        return self._frozen_by is not None

    @property
    def warner(self):
        return coalesce(self._warner)

    def report(self, fault, /):
        """
        route a validation warning according to the protection level.

        none drops it, boundary/sandbox hand it to the warner, hardened raises the
        ProtectionError built from it. when this returns, the caller applies its fallback.
        """
        match self._level:
            case ProtectionLevel.NONE:
                return
            case ProtectionLevel.HARDENED:
                raise fault.__escalate__()
        trigger(fault, warner=self.warner)

    def match(self, values, specs, /):
        values = self._sequence(values, "values")
        specs = self._sequence(specs, "specs")
        if len(values) < len(specs):
            return False
        for value, spec in zip(values, specs):
            if not self._satisfies(value, spec):
                return False
        return True

    def _sequence(self, object, label):
        if isinstance(object, (list, tuple)):
            return object
        self.report(MalformedSpecWarning(
            f"match() {label} must be a list or a tuple, not {type(object).__name__}",
            hint=f"the {label} are wrapped into a single-item list",
        ))
        return [object]

    def _satisfies(self, value, spec):
        for branch in spec if isinstance(spec, (list, tuple)) else (spec,):
            if isinstance(branch, str):
                for tag in branch.split("|"):
                    if (tag := tag.strip()) and self._satisfies_tag(value, tag):
                        return True
            elif isinstance(branch, (type, types.UnionType)):
                if isinstance(value, branch):
                    return True
            else:
                self.report(MalformedSpecWarning(
                    f"type spec {branch!r} is neither a string, a class nor a list",
                    hint="the branch never matches",
                ))
        return False

    def _satisfies_tag(self, value, tag):
        if (handler := self._handlers.get(tag)) is not None:
            return bool(handler(value))
        return category(value) == tag

    def register(self, name, predicate, /):
        """
        add a named custom handler usable in type specs.

        invalid input (non-string name, non-callable predicate)
        - hardened: raises InvalidHandlerError.
        - sandbox:  warns and registers nothing.
        - boundary: warns, then registers stringify(name) with an always-false predicate
                    in place of whatever was invalid.
        - none:     same fallback as boundary, silently.

        frozen table: hardened raises FrozenRegistryError, none drops silently,
        any other level warns and drops.

        a table frozen by hardened keeps behaving as hardened after the level is lowered.
        """
        with self._lock:
            level = ProtectionLevel.HARDENED if self._frozen_by is ProtectionLevel.HARDENED else self._level
            if not isinstance(name, str) or not callable(predicate):
                message = (
                    "register() expects a string name and a callable predicate, "
                    f"got {type(name).__name__} and {type(predicate).__name__}"
                )
                match level:
                    case ProtectionLevel.HARDENED:
                        raise InvalidHandlerError(message, hint="pass a string name and a one-argument predicate")
                    case ProtectionLevel.SANDBOX:
                        return trigger(RejectedHandlerWarning(message, hint="the handler was not registered"), warner=self.warner)
                    case ProtectionLevel.BOUNDARY:
                        trigger(RejectedHandlerWarning(
                            message, hint="using the stringified name and an always-false predicate as fallback"
                        ), warner=self.warner)
                name = name if isinstance(name, str) else stringify(name)
                predicate = predicate if callable(predicate) else _never
            if self._frozen_by is not None:
                message = f"custom handler {name!r} cannot be registered, the handler table is frozen"
                match level:
                    case ProtectionLevel.HARDENED:
                        raise FrozenRegistryError(message, hint="register handlers before raising the protection level")
                    case ProtectionLevel.NONE:
                        return
                return trigger(FrozenHandlersWarning(message, hint="the handler was not registered"), warner=self.warner)
            self._handlers[name] = predicate


_accelerator = load_accelerator("matcher")
if _accelerator is not None and hasattr(_accelerator, "TypeMatcher"):
    TypeMatcher = _accelerator.TypeMatcher  # NOQA: F-811

native_info = get_native_info(_accelerator)


__all__ = (
    "ProtectionLevel",
    "TypeMatcher",
    "category",
    "native_info",
)
