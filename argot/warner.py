"""
Argot warner: collects validation warnings and reports them.

Levels
- silent:  collect only; nothing is printed.
- summary: print one "N warnings collected" line when flushed (default).
- full:    print every collected warning when flushed.

Any level prints a warning immediately when it is warned with instantly=True.

Warnings are CommandWarning instances (see argot.faults) and are rendered with
rich on stderr, through their own __rich__ hook.

Example
    >>> warner = Warner("silent")
    >>> warner.warn(InvalidArgumentWarning("bad name"))
    >>> warner.count()
    1
    >>> warner.flush()
    1
"""
import threading
from enum import StrEnum

from rich.console import Console

from .faults import CommandWarning
from .utils import Unset, mirror


class WarningLevel(StrEnum):
    SILENT = "silent"
    SUMMARY = "summary"
    FULL = "full"


class Warner:
    """
    warning collector for one CLI (or one matcher).

    parameters
    - level: WarningLevel | str, default "summary".
    - max_warnings: how many warnings are kept for flush(); later ones are still
      passed to on_warn and may still print instantly. Zero or less keeps none.
    - on_warn: called with every warning as it arrives.
    - on_summary: called with (count, warnings) when a summary is flushed.
    - console: rich Console used for output (stderr by default).
    - source: label passed to warnings that do not carry one.
    """
    warnings = mirror("warnings")

    def __init__(
            self,
            level=WarningLevel.SUMMARY,
            /,
            *,
            max_warnings=20,
            on_warn=Unset,
            on_summary=Unset,
            console=Unset,
            source=Unset,
    ):
        if not isinstance(max_warnings, int) or isinstance(max_warnings, bool):
            raise TypeError("max_warnings must be an integer")
        if on_warn is not Unset and not callable(on_warn):
            raise TypeError("on_warn must be callable")
        if on_summary is not Unset and not callable(on_summary):
            raise TypeError("on_summary must be callable")
        self._level = WarningLevel(level)
        self._max_warnings = max_warnings
        self._on_warn = on_warn
        self._on_summary = on_summary
        self._console = Console(stderr=True) if console is Unset else console
        self._source = source
        self._warnings = []
        self._lock = threading.Lock()

    @property
    def level(self):
        return self._level

    @level.setter
    def level(self, level):
        self._level = WarningLevel(level)

    def set_level(self, level, /):
        self.level = level

    @property
    def console(self):
        return self._console

    def count(self):
        return len(self._warnings)

    def clear(self):
        with self._lock:
            self._warnings.clear()

    def warn(self, warning, /, *, instantly=False):
        """
        record a warning.

        non-CommandWarning objects are ignored; the on_warn hook runs for every
        accepted warning, even past max_warnings.
        """
        if not isinstance(warning, CommandWarning):
            return
        if self._source is not Unset and "source" not in warning.options:
            warning = warning.__replace__(source=self._source)
        with self._lock:
            if len(self._warnings) < self._max_warnings:
                self._warnings.append(warning)
        if self._on_warn:
            self._on_warn(warning)
        if instantly:
            self._console.print(warning)

    def flush(self):
        """
        report the collected warnings according to the level, then forget them.

        returns the number of warnings that were flushed.
        """
        with self._lock:
            collected, self._warnings = self._warnings, []
        match self._level:
            case WarningLevel.FULL:
                for warning in collected:
                    self._console.print(warning)
            case WarningLevel.SUMMARY if collected:
                if self._on_summary:
                    self._on_summary(len(collected), list(collected))
                noun = "warning" if len(collected) == 1 else "warnings"
                self._console.print(f"{len(collected)} {noun} collected", style="yellow", highlight=False)
        return len(collected)


__all__ = (
    "WarningLevel",
    "Warner",
)
