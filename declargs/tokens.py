"""
declargs tokenizer: raw argument vector → RawInput.

Rules
- Tokens are read left to right.
- A token starting with '-' (or the bare word "help") opens a flag. Help requests
  ("help", "-help", "--help", "-h") are skipped wherever they appear, so asking for
  help never trips over a malformed flag.
- Any other flag consumes the next token as its value, unconditionally: there is
  no presence-only shorthand, and "-count -1" reads -1 as the value of count.
- Everything else is positional. The first positional is the binary name, the
  second the command name, the rest are the command's arguments.

Quick example
    >>> tokenize(["tool", "fetch", "-retries", "3", "https://example.org"])
    RawInput(binary='tool', command='fetch', arguments=('https://example.org',), flags=(FlagToken(name='retries', value='3'),))
"""
from typing import NamedTuple

from .faults import MissingFlagValueError, FaultCode, getdoc

PREFIX = "-"
HELP = "help"


class FlagToken(NamedTuple):
    name: str
    value: str


class RawInput(NamedTuple):
    binary: str | None
    command: str | None
    arguments: tuple[str, ...]
    flags: tuple[FlagToken, ...]


def _is_help(token, name):
    return name in (HELP, PREFIX + HELP) or token == PREFIX + "h"


def tokenize(argv, /):
    """
    Split an argument vector (element 0 being the program's own name) into a RawInput.

    Raises
    - MissingFlagValueError: a flag is the last token and has no value to consume.
    """
    positionals = []
    flags = []

    index = 0
    while index < len(argv):
        token = argv[index]
        if token.startswith(PREFIX) or token == HELP:
            name = token.removeprefix(PREFIX)
            if not _is_help(token, name):
                if index + 1 >= len(argv):
                    raise MissingFlagValueError(
                        'missing value for flag "%s"' % name,
                        title="missing flag value",
                        code=FaultCode.MISSING_FLAG_VALUE,
                        input=name,
                        index=index,
                        hint="pass a value right after %s (for example: %s <value>)" % (token, token),
                        docs=getdoc(FaultCode.MISSING_FLAG_VALUE),
                    )
                flags.append(FlagToken(name, argv[index + 1]))
                index += 1
        else:
            positionals.append(token)
        index += 1

    binary = command = None
    arguments = ()
    if len(positionals) >= 1:
        binary = positionals[0]
        if len(positionals) > 1:
            command = positionals[1]
            arguments = tuple(positionals[2:])

    return RawInput(binary, command, arguments, tuple(flags))


__all__ = (
    "FlagToken",
    "RawInput",
    "tokenize",
    "PREFIX",
)
