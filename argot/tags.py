"""
Argot tags: tag-prefixed console output for command-line tools.

    >>> utilities = Utilities()
    >>> utilities.error("cannot open", "config.toml")
    [ERROR]: cannot open config.toml
    >>> utilities.add_tag("debug", {"padding_left": 1, "padding_right": 1}).set_tag_style("debug", "dim")
    >>> utilities.log("debug", "cache hit")
    [ DEBUG ]: cache hit

Tags
- a tag is a name mapped to a config:
  • tag: the label printed between brackets (default: the name, upper-cased).
  • inner_style: style the label only (True) or the whole "[LABEL]" (False).
  • padding_left / padding_right: spaces around the label inside the brackets.
  • style: a rich style (string or rich.style.Style).
- "error", "warning" and "info" are defined on construction.

Every config is checked by the "utilities tag config" handler of the instance's
TypeMatcher, and bad arguments are reported through that matcher, so the
protection level decides whether they are dropped, collected or raised.
"""
from collections.abc import Mapping

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

from .faults import InvalidArgumentWarning, InvalidTagWarning, UnknownTagWarning
from .matcher import ProtectionLevel, TypeMatcher
from .utils import Unset, mirror, stringify

TAG_CONFIG = "utilities tag config"
RICH_STYLE = "rich style"

_KEYS = frozenset(("tag", "inner_style", "padding_left", "padding_right", "style"))


def _is_style(value):
    if isinstance(value, Style):
        return True
    if not isinstance(value, str):
        return False
    try:
        Style.parse(value)
    except StyleSyntaxError:
        return False
    return True


def _is_padding(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_tag_config(config):
    return (
        isinstance(config, Mapping) and
        set(config) <= _KEYS and
        isinstance(config.get("tag"), str) and
        isinstance(config.get("inner_style"), bool) and
        _is_padding(config.get("padding_left")) and
        _is_padding(config.get("padding_right")) and
        _is_style(config.get("style"))
    )


class Utilities:
    """
    tag-prefixed printer.

    parameters
    - console: rich Console receiving the output (stdout by default).
    - warner: argot.warner.Warner collecting the warnings of bad calls.
    - protection_level: level of the instance's TypeMatcher, default "boundary".
    """
    tags = mirror("tags")

    def __init__(self, /, *, console=Unset, warner=Unset, protection_level=ProtectionLevel.BOUNDARY):
        self._console = Console() if console is Unset else console
        self._matcher = TypeMatcher(warner=warner)
        self._matcher.register(TAG_CONFIG, _is_tag_config)
        self._matcher.register(RICH_STYLE, _is_style)
        self._matcher.protection_level = protection_level
        self._tags = {}

        self.add_tag("error", {"tag": "ERROR"})
        self.add_tag("warning", {"tag": "WARNING", "inner_style": True})
        self.add_tag("info", {"tag": "INFO", "inner_style": True})
        self.set_tag_style("error", "bold red")
        self.set_tag_style("warning", "bold orange1")
        self.set_tag_style("info", "blue")

    @property
    def console(self):
        return self._console

    @property
    def matcher(self):
        return self._matcher

    def _report(self, warning):
        self._matcher.report(warning.__replace__(source="Utilities"))

    def add_tag(self, name, config=Unset, /):
        """
        define (or redefine) the tag `name`; missing config keys take their defaults.

        returns self.
        """
        config = {} if config is Unset else config
        if not self._matcher.match([name, config], ["string", Mapping]):
            self._report(InvalidArgumentWarning(
                "add_tag() expects a string name and a mapping config",
                hint="using the stringified name and an empty config as fallback",
            ))
            name = name if isinstance(name, str) else stringify(name)
            config = {}

        config = {
            "tag": name.upper(),
            "inner_style": False,
            "padding_left": 0,
            "padding_right": 0,
            "style": "",
        } | dict(config)
        if not self._matcher.match([config], [TAG_CONFIG]):
            self._report(InvalidTagWarning(
                f"invalid config for tag {name!r}",
                hint=(
                    "expected tag (str), inner_style (bool), padding_left and padding_right "
                    "(int >= 0) and style (rich style)"
                ),
            ))
            return self

        self._tags[name] = config
        return self

    def set_tag_style(self, name, style, /):
        """set the rich style of the tag `name`; returns self."""
        if not self._matcher.match([name, style], ["string", RICH_STYLE]):
            self._report(InvalidArgumentWarning(
                "set_tag_style() expects a tag name and a rich style",
                hint="using the stringified name and no style as fallback",
            ))
            name = name if isinstance(name, str) else stringify(name)
            style = style if _is_style(style) else ""

        if name not in self._tags:
            self._report(UnknownTagWarning(
                f"tag {name!r} does not exist",
                hint=f"defined tags: {', '.join(self._tags)}",
            ))
            return self

        self._tags[name]["style"] = style
        return self

    def log(self, name, /, *messages):
        """
        print `messages` after the label of the tag `name`; returns self.

        an unknown tag is reported and the messages are printed without a label.
        """
        if not self._matcher.match([name], ["string"]):
            self._report(InvalidArgumentWarning(
                "log() expects a string tag name",
                hint="using the stringified name as fallback",
            ))
            name = stringify(name)
        messages = messages or ("",)

        if (tag := self._tags.get(name)) is None:
            self._report(UnknownTagWarning(
                f"tag {name!r} does not exist",
                hint=f"defined tags: {', '.join(self._tags)}",
            ))
            self._console.print(*messages, markup=False, highlight=False)
            return self

        label = " " * tag["padding_left"] + tag["tag"] + " " * tag["padding_right"]
        if tag["inner_style"]:
            prefix = Text.assemble("[", (label, tag["style"]), "]:")
        else:
            prefix = Text.assemble((f"[{label}]", tag["style"]), ":")
        self._console.print(prefix, *messages, markup=False, highlight=False)
        return self

    def error(self, *messages):
        return self.log("error", *messages)

    def warning(self, *messages):
        return self.log("warning", *messages)

    def info(self, *messages):
        return self.log("info", *messages)

    def __repr__(self):
        return f"Utilities(tags={list(self._tags)!r})"


__all__ = (
    "Utilities",
)
