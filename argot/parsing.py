"""
Argot tokenizer: turns a raw token list into a ParseResult.

Grammar (no clustering, no --name=value, no value coercion)

    tokens   := COMMAND argument* option*
    option   := "--"NAME argument*
    argument := any token not starting with "--"

- The first token names the command; it must be one of the known commands.
- Tokens after it, up to the first "--" token, are the command arguments.
- Every "--" token opens an option named by the full token (prefix included);
  the tokens after it, up to the next "--" token, are that option's arguments.
- Options keep input order and may repeat.

An empty token list or an unknown command gives UNMATCHED. That path is silent
unless strict=True, which raises UnknownCommandError instead.

    >>> tokenize(["deploy", "staging", "--region", "us", "east"], {"deploy"})
    ParseResult(command_name='deploy', command_args=('staging',), options=(ParsedOption(name='--region', arguments=('us', 'east')),), matched=True)
"""
import difflib
from typing import NamedTuple

from .faults import UnknownCommandError, trigger

PREFIX = "--"


class ParsedOption(NamedTuple):
    name: str
    arguments: tuple[str, ...]


class ParseResult(NamedTuple):
    command_name: str
    command_args: tuple[str, ...]
    options: tuple[ParsedOption, ...]
    matched: bool


UNMATCHED = ParseResult("", (), (), False)


def tokenize(tokens, commands, /, *, strict=False):
    """
    parse `tokens` against the collection of known command names `commands`.

    pure: neither argument is modified and nothing is reported unless strict is set.
    """
    tokens = tuple(tokens)
    if not tokens:
        if strict:
            trigger(UnknownCommandError("no command was given", hint="pass a command name first"))
        return UNMATCHED

    name, *rest = tokens
    if name not in commands:
        if strict:
            suggestions = difflib.get_close_matches(name, list(commands), n=1)
            hint = f"did you mean {suggestions[0]!r}?" if suggestions else "register the command before running"
            trigger(UnknownCommandError(f"unknown command {name!r}", hint=hint, input=name))
        return UNMATCHED

    index = 0
    while index < len(rest) and not rest[index].startswith(PREFIX):
        index += 1
    arguments, region = tuple(rest[:index]), rest[index:]

    options = []
    for position, token in enumerate(region):
        if not token.startswith(PREFIX):
            continue
        values = []
        for value in region[position + 1:]:
            if value.startswith(PREFIX):
                break
            values.append(value)
        options.append(ParsedOption(token, tuple(values)))

    return ParseResult(name, arguments, tuple(options), True)


__all__ = (
    "ParsedOption",
    "ParseResult",
    "UNMATCHED",
    "tokenize",
)
