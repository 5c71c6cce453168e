"""
Argot options: the leaves of the command tree.

An Option is identified by its name and belongs to exactly one Command. It carries
no parsing logic: the tokenizer reports every "--" token it sees, whether an
Option with that name is registered or not.

Options are created through their command, never directly:

    >>> build = cli.command("build")
    >>> force = build.option("--force")
    >>> force.metadata()
    {'name': '--force', 'subscribers': []}

Registering the same name again on the same command replaces the Option
(subscribers of the old instance are dropped).

Subscribers attached with Option.on() are stored and exposed through metadata(),
but dispatch never reaches them: CLI.run() only calls CLI and Command subscribers.
"""
from .internals import subscribe
from .utils import Unset


class Option:
    def __init__(self, name, parent, /):
        if not parent.matcher.match([name], ["string"]):
            raise TypeError("Option() name must be a string")
        self._name = name
        self._parent = parent
        self._subscribers = []

    @property
    def name(self):
        return self._name

    @property
    def parent(self):
        """the Command owning this option."""
        return self._parent

    def metadata(self):
        """fresh description of the option; subscribers sit under "subscribers", as in Command.metadata()."""
        return {"name": self._name, "subscribers": list(self._subscribers)}

    def on(self, event, callback=Unset, /):
        """
        store a subscriber for `event` (only "command" is valid).

        the subscriber is kept in metadata() but is not called by CLI.run().
        """
        return subscribe(self._parent.matcher, self._parent.lock, self._subscribers, event, callback, source="Option")

    def option(self, name, /):
        """register a sibling option on the same command."""
        return self._parent.option(name)

    def command(self, name, /):
        """register a command on the owning CLI."""
        return self._parent.command(name)

    def __repr__(self):
        return f"Option({self._name!r})"


__all__ = (
    "Option",
)
