"""
Argot command layer: declare commands and options, parse argv, dispatch events.

What this module provides
- Host: the running interpreter seen as a process handle (pid, getcwd, exit, argv).
- CLI: the registry. Owns the commands, the CLI-level subscribers, a TypeMatcher
  guarding every entry point and a Warner collecting validation warnings.
- Command: a named node of the CLI, owning its options and its own subscribers.
- invoke(cli, prompt): run a CLI against a prompt instead of the host argv.

Quick start
    from argot import CLI

    cli = CLI()
    build = cli.command("build")
    build.option("--force")

    @build.on("command")
    def on_build(event):
        print(event["command_args"], event["options"])

    if __name__ == "__main__":
        cli.run()

    $ python tool.py build now --force yes
    ('now',) (ParsedOption(name='--force', arguments=('yes',)),)

Dispatch
- run() tokenizes argv[2:] (interpreter and script are skipped).
- an empty argv or an unknown command is a silent no-op (strict=True raises instead).
- otherwise every CLI-level subscriber is called with
  {"command_name", "command_args", "options"}, then every subscriber of the matched
  command with {"command_args", "options"}; both lists are snapshotted before the
  first call, so subscribers registered during dispatch only see the next run.
- collected warnings are flushed once dispatch is over.
- the CLI never exits the process; exit codes belong to the embedding program.

Names
- command and option names must be strings without whitespace: non-strings are
  stringified and whitespace is stripped, both with a warning (see ProtectionLevel).
- registering a name twice replaces the previous node in place.
"""
import numbers
import os
import shlex
import sys
import threading
from collections.abc import Iterable
from types import MappingProxyType

from .arguments import Option
from .faults import *
from .internals import resolve_name, subscribe, upsert
from .matcher import TypeMatcher
from .parsing import tokenize
from .utils import Unset
from .warner import Warner


class Host:
    """
    the running interpreter as a process handle.

    argv defaults to [sys.executable, *sys.argv], so that, as in any host argv,
    the first two entries are the program and the script.
    """

    def __init__(self, argv=Unset, /):
        self.pid = os.getpid()
        self.argv = [sys.executable, *sys.argv] if argv is Unset else list(argv)

    def getcwd(self):
        return os.getcwd()

    def exit(self, code=0, /):
        sys.exit(code)

    def __repr__(self):
        return f"Host(pid={self.pid!r})"


def _is_host_process(object):
    pid = getattr(object, "pid", None)
    return (
        isinstance(pid, numbers.Real) and
        not isinstance(pid, bool) and
        callable(getattr(object, "getcwd", None)) and
        callable(getattr(object, "exit", None))
    )


class Command:
    """
    a command of a CLI, created through CLI.command().

    a command owns an ordered list of options (unique by name) and an ordered
    list of subscribers called when the command matches.
    """

    def __init__(self, name, parent, /):
        self._name = name
        self._parent = parent
        self._options = []
        self._subscribers = []

    @property
    def name(self):
        return self._name

    @property
    def parent(self):
        return self._parent

    @property
    def matcher(self):
        return self._parent.matcher

    @property
    def lock(self):
        return self._parent.lock

    @property
    def options(self):
        return tuple(self._options)

    def option(self, name, /):
        """
        create an option on this command and return it.

        an existing option with the same name is replaced in place by the new one.
        """
        name = resolve_name(self.matcher, name, source="Command", kind="option")
        with self.lock:
            return upsert(self._options, Option(name, self))

    def on(self, event, callback=Unset, /):
        """
        subscribe `callback` to `event` (only "command", case-insensitive).

        the callback receives a read-only mapping with "command_args" and "options".
        without a callback, returns a decorator.
        """
        return subscribe(self.matcher, self.lock, self._subscribers, event, callback, source="Command")

    def command(self, name, /):
        """register a sibling command on the owning CLI."""
        return self._parent.command(name)

    def metadata(self):
        """
        fresh description of the command; mutating it never affects the command.

        the command's onCmdFunctions list is exposed under the "subscribers" key.
        """
        with self.lock:
            return {
                "name": self._name,
                "options": [option.metadata() for option in self._options],
                "subscribers": list(self._subscribers),
            }

    def __repr__(self):
        return f"Command({self._name!r})"


class CLI:
    """
    the command registry of one program.

    parameters
    - process: host process handle, defaults to Host(). it must expose a numeric
      pid, a callable getcwd and a callable exit, otherwise InvalidProcessError is raised.
    - warning_level: "silent" | "summary" | "full" (see argot.warner).
    - protection_level: "none" | "boundary" | "sandbox" | "hardened" (see argot.matcher).
    - strict: raise UnknownCommandError instead of ignoring unknown commands.
    - console: rich Console used by the warner.
    """

    def __init__(
            self,
            process=Unset,
            /,
            *,
            warning_level="summary",
            protection_level="boundary",
            strict=False,
            console=Unset,
    ):
        if not isinstance(strict, bool):
            raise TypeError("strict must be a boolean")
        self._lock = threading.RLock()
        self._warner = Warner(warning_level, console=console)
        self._matcher = TypeMatcher(
            protection_level,
            warner=self._warner,
            handlers={"host process": _is_host_process},
        )
        process = Host() if process is Unset else process
        if not self._matcher.match([process], ["host process"]):
            trigger(InvalidProcessError(
                "invalid first argument",
                hint="pass a process handle with a numeric pid, a callable getcwd and a callable exit (see argot.Host)",
                source="CLI",
            ))
        self._process = process
        self._strict = strict
        self._commands = []
        self._subscribers = []

    @property
    def process(self):
        return self._process

    @property
    def matcher(self):
        return self._matcher

    @property
    def warner(self):
        return self._warner

    @property
    def lock(self):
        return self._lock

    @property
    def strict(self):
        return self._strict

    @property
    def protection_level(self):
        return self._matcher.protection_level

    @protection_level.setter
    def protection_level(self, level):
        self._matcher.protection_level = level

    @property
    def commands(self):
        return tuple(self._commands)

    def command(self, name, /):
        """
        create a command and return it.

        an existing command with the same name is replaced in place by the new one.
        """
        name = resolve_name(self._matcher, name, source="CLI", kind="command")
        with self._lock:
            return upsert(self._commands, Command(name, self))

    def on(self, event, callback=Unset, /):
        """
        subscribe `callback` to `event` (only "command", case-insensitive).

        the callback runs on every successful parse, whatever the command, and
        receives a read-only mapping with "command_name", "command_args" and "options".
        without a callback, returns a decorator.
        """
        return subscribe(self._matcher, self._lock, self._subscribers, event, callback, source="CLI")

    def metadata(self):
        with self._lock:
            return {
                "commands": [command.metadata() for command in self._commands],
                "subscribers": list(self._subscribers),
            }

    def parse(self, tokens, /):
        """tokenize `tokens` (argv without program and script) against the registered commands."""
        with self._lock:
            names = [command.name for command in self._commands]
        return tokenize(tokens, names, strict=self._strict)

    def run(self):
        """parse the host argv and dispatch; returns the ParseResult."""
        return self._dispatch(list(self._process.argv)[2:])

    def _dispatch(self, tokens):
        result = self.parse(tokens)
        if not result.matched:
            return result

        with self._lock:
            subscribers = list(self._subscribers)
            command = next(command for command in self._commands if command.name == result.command_name)
            metadata = command.metadata()

        event = MappingProxyType({
            "command_name": result.command_name,
            "command_args": result.command_args,
            "options": result.options,
        })
        for subscriber in subscribers:
            subscriber(event)

        event = MappingProxyType({
            "command_args": result.command_args,
            "options": result.options,
        })
        for subscriber in metadata["subscribers"]:
            subscriber(event)

        self._warner.flush()
        return result

    def __invoke__(self, prompt=Unset):
        """
        run against `prompt` instead of the host argv.

        - Unset: the host argv (same as run()).
        - str: shell-like string, split with shlex.split.
        - Iterable[str]: pre-tokenized sequence.
        """
        if prompt is Unset:
            return self.run()
        if isinstance(prompt, str):
            return self._dispatch(shlex.split(prompt))
        if isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("__invoke__() argument must be a string or an iterable of strings")
            return self._dispatch(tokens)
        raise TypeError("__invoke__() argument must be a string or an iterable of strings")

    def __repr__(self):
        return f"CLI(commands={[command.name for command in self._commands]!r})"


def invoke(object, prompt=Unset, /):
    """
    run a CLI (or anything implementing __invoke__) against `prompt`.

    returns whatever __invoke__ returns (a ParseResult for a CLI).
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)
    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method")


__all__ = (
    "Host",
    "Command",
    "CLI",
    "invoke",
)
