"""
Argot faults: the errors and warnings argot reports, and how they look.

Two families
- errors (CommandException subclasses) are wiring mistakes made by the program
  using argot: a bad process handle, a bad on() call, an empty name, a handler
  registered into a frozen table under "hardened". They always raise.
- warnings (CommandWarning subclasses) are bad runtime values: non-string
  names, names with whitespace, unknown events, malformed type specs. The
  matcher routes them according to its protection level: dropped, collected
  by a Warner, or escalated to ProtectionError.

Every fault carries a message and read-only options (hint, source, ...) and
renders itself through rich:

    [ CLI — 11101 | Unknown Command ]
    unknown command 'biuld'
     → did you mean 'build'?

The host program may define, in __main__:
- __prog__:   the name shown in the header (default: the fault's source).
- __codes__:  FaultCode -> label, replacing the numeric code in the header.
- __docs__:   FaultCode -> one line of documentation, printed under the hint.
- __styles__: style name -> rich style, overriding the palettes below.

Library code never raises or warns directly: it builds the fault and hands it
to trigger(fault, **options).
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text


def _host(name, default):
    return getattr(__import__("__main__"), name, default)


class FaultCode(IntEnum):
    """
    stable numeric identifiers of every fault.

    1xxxx errors / 2xxxx warnings; the next digit pair is the area
    (11 routing, 12 registry, 13 matcher, 14 utilities).
    """
    # --- routing errors ---
    UNKNOWN_COMMAND      = 11101

    # --- registry errors ---
    INVALID_PROCESS      = 11201
    INVALID_SUBSCRIPTION = 11202
    EMPTY_NAME           = 11203

    # --- matcher errors ---
    INVALID_HANDLER      = 11301
    FROZEN_REGISTRY      = 11302
    PROTECTION_VIOLATION = 11303

    # --- registry warnings ---
    INVALID_ARGUMENT     = 12201
    WHITESPACE_NAME      = 12202
    UNKNOWN_EVENT        = 12203

    # --- matcher warnings ---
    REJECTED_HANDLER     = 12301
    FROZEN_HANDLERS      = 12302
    MALFORMED_SPEC       = 12303

    # --- utilities warnings ---
    INVALID_TAG          = 12401
    UNKNOWN_TAG          = 12402

    def normalize(self):
        """the label of this code in __main__.__codes__, or its number as a string."""
        return str(_host("__codes__", {}).get(self, self.value))


class _Fault:
    """
    message + options shared by errors and warnings.

    options
    - code / title: override the class defaults shown in the header.
    - hint: one actionable sentence rendered under the message.
    - source: header label when __main__ defines no __prog__.
    - colorful / fancy: render with colors (default) / inside a panel.
    """
    kind = "fault"
    palette = {}

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)
        self.code = options.get("code", type(self).code)
        self.title = options.get("title", type(self).title)

    def __replace__(self, *positional, **overrides):
        assert not positional, "__replace__() takes keyword arguments only"
        return type(self)(self.message, **self.options | overrides)

    def __rich__(self):
        styles = defaultdict(str, self.palette | _host("__styles__", {}))
        colorful = self.options.get("colorful", True)

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        header = Text.assemble(
            "[ ",
            text(_host("__prog__", self.options.get("source", "argot")), "prog-name"),
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.title.title(), f"{self.kind}-title"),
            " ]",
        )
        body = [text(self.message, f"{self.kind}-message")]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        if docs := getdoc(self.code):
            body.append(text(docs, "docs"))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")
        return Group(header, *body)


class CommandException(_Fault, Exception):
    """base class of every error argot raises."""
    code = FaultCode.PROTECTION_VIOLATION
    title = "error"
    kind = "error"
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
        "docs": "underline #00E5FF dim",
    }

    def __trigger__(self):
        raise self from None


class UnknownCommandError(CommandException):
    code = FaultCode.UNKNOWN_COMMAND
    title = "unknown command"


class InvalidProcessError(CommandException):
    code = FaultCode.INVALID_PROCESS
    title = "invalid process"


class InvalidSubscriptionError(CommandException):
    code = FaultCode.INVALID_SUBSCRIPTION
    title = "invalid subscription"


class EmptyNameError(CommandException):
    code = FaultCode.EMPTY_NAME
    title = "empty name"


class InvalidHandlerError(CommandException):
    code = FaultCode.INVALID_HANDLER
    title = "invalid handler"


class FrozenRegistryError(CommandException):
    code = FaultCode.FROZEN_REGISTRY
    title = "frozen registry"


class ProtectionError(CommandException):
    """raised in place of a warning when the protection level is "hardened"."""
    code = FaultCode.PROTECTION_VIOLATION
    title = "protection violation"


class CommandWarning(_Fault, Warning):
    """
    base class of every recoverable validation failure.

    extra options
    - warner: the argot.warner.Warner receiving the warning on trigger; without
      one the warning goes through the warnings module.
    - instantly: ask the warner to print it right away.
    """
    code = FaultCode.INVALID_ARGUMENT
    title = "warning"
    kind = "warning"
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
        "docs": "underline #00E5FF dim",
    }

    def __trigger__(self):
        warner = self.options.get("warner")
        if warner is None:
            return warnings.warn(self, stacklevel=3)
        warner.warn(self, instantly=self.options.get("instantly", False))

    def __escalate__(self):
        """the ProtectionError raised in place of this warning under "hardened"."""
        options = {
            key: value for key, value in self.options.items()
            if key not in ("warner", "instantly", "code", "title")
        }
        return ProtectionError(self.message, **options, warning=self)


class InvalidArgumentWarning(CommandWarning):
    code = FaultCode.INVALID_ARGUMENT
    title = "invalid argument"


class WhitespaceNameWarning(CommandWarning):
    code = FaultCode.WHITESPACE_NAME
    title = "whitespace in name"


class UnknownEventWarning(CommandWarning):
    code = FaultCode.UNKNOWN_EVENT
    title = "unknown event"


class RejectedHandlerWarning(CommandWarning):
    code = FaultCode.REJECTED_HANDLER
    title = "rejected handler"


class FrozenHandlersWarning(CommandWarning):
    code = FaultCode.FROZEN_HANDLERS
    title = "frozen handlers"


class MalformedSpecWarning(CommandWarning):
    code = FaultCode.MALFORMED_SPEC
    title = "malformed type spec"


class InvalidTagWarning(CommandWarning):
    code = FaultCode.INVALID_TAG
    title = "invalid tag"


class UnknownTagWarning(CommandWarning):
    code = FaultCode.UNKNOWN_TAG
    title = "unknown tag"


def trigger(fault, /, **options):
    """
    merge `options` into `fault` (through copy.replace) and surface it.

    errors raise; warnings go to options["warner"], or to the warnings module.
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must implement __trigger__ and __replace__")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """documentation line registered for `code` in __main__.__docs__, or None."""
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a FaultCode")
    return _host("__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "InvalidProcessError",
    "InvalidSubscriptionError",
    "EmptyNameError",
    "InvalidHandlerError",
    "FrozenRegistryError",
    "ProtectionError",
    "CommandWarning",
    "InvalidArgumentWarning",
    "WhitespaceNameWarning",
    "UnknownEventWarning",
    "RejectedHandlerWarning",
    "FrozenHandlersWarning",
    "MalformedSpecWarning",
    "InvalidTagWarning",
    "UnknownTagWarning",
    "trigger",
    "getdoc",
)
