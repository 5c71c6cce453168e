"""
internal helpers shared by the registry nodes (CLI, Command, Option).

intent
- one implementation of the name rules and of the subscription rules, so the
  three node types cannot drift apart.
- not part of the public API.

name rules (resolve_name)
- a non-string name is a validation failure: reported through the matcher and
  replaced by stringify(name).
- whitespace inside a name is a validation failure: reported and stripped.
- a name that is still empty is a wiring mistake: EmptyNameError is raised.

subscription rules (subscribe)
- the event must be a string and the callback a function; anything else raises
  InvalidSubscriptionError.
- the event must be one of EVENTS (case-insensitive); anything else is reported
  as UnknownEventWarning and nothing is registered.
"""
from .faults import *
from .utils import Unset, rename, stringify

EVENTS = ("command",)


def resolve_name(matcher, name, /, *, source, kind):
    if not matcher.match([name], ["string"]):
        matcher.report(InvalidArgumentWarning(
            f"{source}.{kind}() expects a string name, got {type(name).__name__}",
            hint="using the stringified argument as fallback",
            source=source,
        ))
        name = stringify(name)
    if any(char.isspace() for char in name):
        matcher.report(WhitespaceNameWarning(
            f"{kind} name {name!r} contains whitespace",
            hint="whitespace is stripped from the name",
            source=source,
        ))
        name = "".join(name.split())
    if not name:
        trigger(EmptyNameError(f"{kind} name must not be empty", hint=f"give the {kind} a name", source=source))
    return name


def subscribe(matcher, lock, subscribers, event, callback=Unset, /, *, source):
    """
    append `callback` to `subscribers` for `event`, following the subscription rules.

    returns the callback, or a decorator when the callback is omitted.
    """
    if callback is Unset:
        @rename("on")
        def decorator(callback, /):
            return subscribe(matcher, lock, subscribers, event, callback, source=source)
        return decorator

    if not matcher.match([event, callback], ["string", "function"]):
        trigger(InvalidSubscriptionError(
            f"invalid arguments in {source}.on()",
            hint="the first argument must be a string, and the second argument must be a function",
            source=source,
        ))
    if event.lower() not in EVENTS:
        matcher.report(UnknownEventWarning(
            f"invalid event {event!r} in {source}.on()",
            hint=f"valid events are: {', '.join(EVENTS)}",
            source=source,
        ))
        return callback
    with lock:
        subscribers.append(callback)
    return callback


def upsert(nodes, node, /):
    """replace the first node named like `node` in place, or append it; returns `node`."""
    for index, existing in enumerate(nodes):
        if existing.name == node.name:
            nodes[index] = node
            break
    else:
        nodes.append(node)
    return node


__all__ = (
    "EVENTS",
    "resolve_name",
    "subscribe",
    "upsert",
)
