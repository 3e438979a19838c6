r"""
declargs schema derivation: command templates → immutable command schemas.

Templates
- A command template is a plain class (an instance works too; its class is used)
  whose annotated attributes are the fields of the command. Field metadata is a
  single pipe-delimited tag carried in typing.Annotated:

    class Fetch:
        __command__: Annotated[str, "fetch|Download a remote resource"]
        retries: Annotated[int | None, "3|How many times to retry"]
        timeout: Annotated[timedelta | None, "Give up after this long"]
        url: Annotated[str, "Where to download from"]

Roles (decided per field)
- header:   the reserved __command__ field; tag is "name|usage".
- option:   any field typed as an optional wrapper (T | None); tag is "[default|]usage".
            Users type it as -<kebab-case field name> (retries → -retries).
- argument: every other field, positional in declaration order; tag is "usage".

Overrides
- Option names are derived with kebabize(): a hyphen before every internal
  uppercase letter, underscores folded into hyphens, leading/trailing
  underscores dropped, then lowercased (FlagInt, flag_int → flag-int).
- Name("...") in the Annotated metadata replaces the derived option name or the
  displayed argument name.

Errors
- Every malformed template raises TemplateError immediately. These describe
  mistakes in the program's declarations, never in user input.
"""
import re
import typing
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, NamedTuple

from .faults import TemplateError
from .kinds import unwrap
from .utils import kebabize

HEADER = "__command__"
SEPARATOR = "|"
# option names swallowed by the tokenizer as help requests
RESERVED = frozenset(("help", "-help", "h"))


class Name(NamedTuple):
    """
    Annotated marker overriding the derived name of an option or an argument.

        verbose: Annotated[bool | None, "false|Talk more", Name("v")]
    """
    value: str


class ArgumentDef(NamedTuple):
    field: str
    name: str
    usage: str
    kind: Any


class OptionDef(NamedTuple):
    field: str
    usage: str
    kind: Any
    default: str | None = None


class CommandSchema(NamedTuple):
    template: type
    name: str
    usage: str
    arguments: tuple[ArgumentDef, ...]
    options: Mapping[str, OptionDef]


def _split_annotated(hint):
    """
    Return (kind, tag, override) from a possibly Annotated type hint.

    The tag is the first string in the Annotated metadata ("" when there is none);
    the override is the first Name marker (None when there is none).
    """
    if typing.get_origin(hint) is not Annotated:
        return hint, "", None
    kind, *metadata = typing.get_args(hint)
    tag = next((item for item in metadata if isinstance(item, str)), "")
    override = next((item.value for item in metadata if isinstance(item, Name)), None)
    return kind, tag, override


def _derive(template):
    """
    Build the CommandSchema of a single template.
    """
    cls = template if isinstance(template, type) else type(template)
    label = getattr(cls, "__qualname__", repr(cls))

    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as error:
        raise TemplateError(f"{label}: command template annotations cannot be resolved") from error

    name = usage = None
    arguments = []
    options = {}

    def _resolve_option(kind, parts, override):
        match parts:
            case [default, text]:
                option = OptionDef(field, text, kind, default)
            case [text]:
                option = OptionDef(field, text, kind)
            case _:
                raise TemplateError(f"{label}: flag missing usage (field {field!r})")

        key = override if override is not None else kebabize(field)
        if not isinstance(key, str) or not re.fullmatch(r"[^\W_][\w-]*", key):
            raise TemplateError(f"{label}: flag name {key!r} is not a valid option name (field {field!r})")
        if key in RESERVED:
            raise TemplateError(f"{label}: flag name {key!r} is reserved for help (field {field!r})")
        if key in options:
            raise TemplateError(f"{label}: flag name {key!r} is already in use (field {field!r})")
        options[key] = option

    def _resolve_argument(kind, parts, override):
        if len(parts) != 1:
            raise TemplateError(f"{label}: argument lacks exactly one field (field {field!r})")
        display = override if override is not None else field.lower()
        if not isinstance(display, str) or not display.strip():
            raise TemplateError(f"{label}: argument name must be a non-empty string (field {field!r})")
        arguments.append(ArgumentDef(field, display, parts[0], kind))

    for field, hint in hints.items():
        kind, tag, override = _split_annotated(hint)
        if ClassVar in (typing.get_origin(hint), typing.get_origin(kind)):
            continue
        parts = tag.split(SEPARATOR)

        if field == HEADER:
            if len(parts) != 2:
                raise TemplateError(f"{label}: command missing usage")
            name, usage = parts
            continue

        if unwrap(kind)[1]:
            _resolve_option(kind, parts, override)
        else:
            _resolve_argument(kind, parts, override)

    if name is None or usage is None:
        raise TemplateError(f"{label}: command missing name/usage")

    return CommandSchema(cls, name, usage, tuple(arguments), MappingProxyType(options))


def derive(commands, /):
    """
    Derive one CommandSchema per command template, preserving order.

    Parameters
    - commands: Iterable of template classes (or instances of them).

    Returns
    - tuple[CommandSchema, ...]

    Raises
    - TemplateError: commands is not an iterable of templates, or any template is malformed.
    """
    if isinstance(commands, str | bytes) or not isinstance(commands, Iterable):
        raise TemplateError("derive() argument must be an iterable of command templates")
    return tuple(map(_derive, commands))


__all__ = (
    # Markers and records
    "Name",
    "ArgumentDef",
    "OptionDef",
    "CommandSchema",

    # Functions
    "derive",

    # Constants
    "HEADER",
    "SEPARATOR",
)
