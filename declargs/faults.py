"""
declargs faults (template errors and user faults) and rendering.

Scope
- TemplateError: malformed command templates. These are defects of the program
  declaring the commands, not of the person typing them; they are raised on the
  spot and never turned into a recoverable fault.
- FaultCode: canonical, stable numeric identifiers for all user-facing faults.
  Codes are grouped by domain to keep copy consistent and make logs/searches predictable.
- CommandException: base type for user faults; carries a message, the help text
  relevant to the failure and extra options, and knows how to render itself.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Text form
- str(fault) is the help text followed by the one-line report, which is what a
  caller gets when it simply prints the exception.

Integration
- parse() raises faults directly; run() catches them and calls trigger(fault, shell=True),
  which renders the fault via rich on stderr and exits with status 1.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class TemplateError(TypeError):
    """
    a command template is malformed (missing header, wrong segment count, clashing names).
    """


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • MISSING_COMMAND, UNKNOWN_COMMAND
    - flags (1111x)
      • MISSING_FLAG_VALUE, UNKNOWN_FLAG, UNCASTABLE_FLAG, UNCASTABLE_DEFAULT
    - positionals (1112x)
      • TOO_MANY_ARGUMENTS, MISSING_ARGUMENT, UNCASTABLE_ARGUMENT
    """
    # --- routing errors (11xxx) ---
    MISSING_COMMAND     = 11100
    UNKNOWN_COMMAND     = 11101

    # --- flag errors (11xxx) ---
    MISSING_FLAG_VALUE  = 11111
    UNKNOWN_FLAG        = 11112
    UNCASTABLE_FLAG     = 11113
    UNCASTABLE_DEFAULT  = 11114

    # --- positional errors (11xxx) ---
    TOO_MANY_ARGUMENTS  = 11121
    MISSING_ARGUMENT    = 11122
    UNCASTABLE_ARGUMENT = 11123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def usage(self):
        return self.options.get("usage", "")

    def __str__(self):
        if self.message is Unset:
            return self.usage
        if not self.usage:
            return self.message
        return "%s\n%s\n" % (self.usage, self.message)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "usage": "#9CA3AF",  # muted gray help table
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("program") or "declargs"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code else "?", styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        renders = []
        if self.usage.strip():
            renders.append(text(self.usage.strip("\n"), styler("usage")))
        if self.message:
            renders.append(text(self.message, styler("error-message")))
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("docs")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingCommandError(CommandException): ...
class UnknownCommandError(CommandException): ...
class MissingFlagValueError(CommandException): ...
class UnknownFlagError(CommandException): ...
class UncastableFlagError(CommandException): ...
class UncastableDefaultError(CommandException): ...
class TooManyArgumentsError(CommandException): ...
class MissingArgumentError(CommandException): ...
class UncastableArgumentError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, program, and any context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "TemplateError",
    "CommandException",
    "MissingCommandError",
    "UnknownCommandError",
    "MissingFlagValueError",
    "UnknownFlagError",
    "UncastableFlagError",
    "UncastableDefaultError",
    "TooManyArgumentsError",
    "MissingArgumentError",
    "UncastableArgumentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
