"""
declargs parser: match tokenized input against command schemas and build the result.

What this module provides
- parse(commands, argv): derive schemas, tokenize argv, select the command, check
  arity, apply option defaults, convert every token and return a fresh instance
  of the selected template.
- usage(commands): the command overview, with no parsing performed.
- run(commands, argv): parse, but render any user fault with rich on stderr and
  exit with status 1 instead of raising.

Quick start
    from typing import Annotated
    from declargs import run

    class Greet:
        __command__: Annotated[str, "greet|Say hello"]
        times: Annotated[int | None, "1|How many times"]
        name: Annotated[str, "Who to greet"]

    if __name__ == "__main__":
        greet = run([Greet])          # e.g. `prog greet -times 2 world`
        print(("hello %s\\n" % greet.name) * greet.times, end="")

Failure contract
- Malformed templates raise TemplateError (never caught here).
- Bad user input raises a CommandException subclass whose str() is the relevant
  help text (overview or command details) plus a one-line report. Nothing is
  returned on failure; the instance is only handed out once fully populated.
"""
import os.path
import sys

from .faults import *
from .kinds import convert, zero
from .rendering import render_overview, render_details
from .schema import derive
from .tokens import tokenize
from .utils import Unset, coalesce


def _allocate(schema):
    """
    Create a blank instance of the template, bypassing its __init__.

    Positional fields start at their kind's zero value and option fields at None.
    object.__setattr__ is used so frozen or slotted templates can be filled too.
    """
    instance = object.__new__(schema.template)
    for argument in schema.arguments:
        object.__setattr__(instance, argument.field, zero(argument.kind))
    for option in schema.options.values():
        object.__setattr__(instance, option.field, None)
    return instance


def _assign(instance, field, kind, text):
    """
    Convert text per kind and store it on the instance (TypeError/ValueError on failure).
    """
    object.__setattr__(instance, field, convert(kind, text))


def _select(schemas, input):
    """
    Return the schema named by the input (first match wins), or raise the routing fault.
    """
    if input.command is None:
        raise MissingCommandError(
            title="no command given",
            code=FaultCode.MISSING_COMMAND,
            usage=render_overview(schemas),
            program=input.binary,
            hint="pick one of the commands listed above",
            docs=getdoc(FaultCode.MISSING_COMMAND),
        )

    for schema in schemas:
        if schema.name == input.command:
            return schema

    raise UnknownCommandError(
        'unrecognized command "%s"' % input.command,
        title="unknown command",
        code=FaultCode.UNKNOWN_COMMAND,
        usage=render_overview(schemas),
        program=input.binary,
        input=input.command,
        hint="pick one of the commands listed above",
        docs=getdoc(FaultCode.UNKNOWN_COMMAND),
    )


def _check_arity(schema, input, details):
    """
    Reject too many or too few positional arguments.

    A missing argument after the first one is reported by name; when the very
    first argument is missing only the command's usage is shown.
    """
    if len(input.arguments) > len(schema.arguments):
        raise TooManyArgumentsError(
            "too many arguments given",
            title="too many arguments",
            code=FaultCode.TOO_MANY_ARGUMENTS,
            usage=details,
            program=input.binary,
            leftover=input.arguments[len(schema.arguments):],
            hint="remove the extra arguments",
            docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
        )

    for index, argument in enumerate(schema.arguments):
        if index < len(input.arguments):
            continue
        options = dict(
            title="missing argument",
            code=FaultCode.MISSING_ARGUMENT,
            usage=details,
            program=input.binary,
            argument=argument,
            index=index,
            docs=getdoc(FaultCode.MISSING_ARGUMENT),
        )
        # TODO: decide whether a missing first argument should be reported by name as well
        if index > 0:
            raise MissingArgumentError(
                "[fail] missing argument <%s>" % argument.name,
                hint="pass <%s> (%s)" % (argument.name, argument.usage) if argument.usage else "pass <%s>" % argument.name,
                **options,
            )
        # nothing but the usage names the argument here, the hint included
        raise MissingArgumentError(hint="pass the arguments listed above", **options)


def parse(commands, argv, /):
    """
    Parse an argument vector against a set of command templates.

    Parameters
    - commands: Iterable of command template classes (or instances of them).
    - argv: Sequence[str] including the program's own name as the first element.

    Returns
    - a new instance of the matched template with every argument set, every
      defaulted option set, and every supplied option overriding its default.

    Raises
    - TemplateError: a template is malformed.
    - CommandException: the input does not fit the templates (see declargs.faults).
    """
    schemas = derive(commands)

    try:
        input = tokenize(argv)
    except MissingFlagValueError as fault:
        raise fault.__replace__(usage=render_overview(schemas), program=argv[0] if argv else None) from None

    schema = _select(schemas, input)
    details = render_details(schema)
    _check_arity(schema, input, details)

    instance = _allocate(schema)

    for argument, value in zip(schema.arguments, input.arguments):
        try:
            _assign(instance, argument.field, argument.kind, value)
        except (TypeError, ValueError) as error:
            raise UncastableArgumentError(
                'unable to set argument field "%s" to "%s"' % (argument.field, value),
                title="invalid argument value",
                code=FaultCode.UNCASTABLE_ARGUMENT,
                usage=details,
                program=input.binary,
                argument=argument,
                input=value,
                hint=str(error),
                docs=getdoc(FaultCode.UNCASTABLE_ARGUMENT),
            ) from error

    # defaults first, so user-supplied values always win regardless of order
    for name, option in schema.options.items():
        if option.default is None:
            continue
        try:
            _assign(instance, option.field, option.kind, option.default)
        except (TypeError, ValueError) as error:
            raise UncastableDefaultError(
                'unable to set default flag field "%s" to "%s"' % (option.field, option.default),
                title="invalid flag default",
                code=FaultCode.UNCASTABLE_DEFAULT,
                usage=details,
                program=input.binary,
                argument=option,
                input=name,
                hint=str(error),
                docs=getdoc(FaultCode.UNCASTABLE_DEFAULT),
            ) from error

    for flag in input.flags:
        try:
            option = schema.options[flag.name]
        except KeyError:
            raise UnknownFlagError(
                'unrecognized flag "%s"' % flag.name,
                title="unknown flag",
                code=FaultCode.UNKNOWN_FLAG,
                usage=details,
                program=input.binary,
                input=flag.name,
                hint="use one of the flags listed above",
                docs=getdoc(FaultCode.UNKNOWN_FLAG),
            ) from None
        try:
            _assign(instance, option.field, option.kind, flag.value)
        except (TypeError, ValueError) as error:
            raise UncastableFlagError(
                'unable to set flag field "%s" to "%s"' % (option.field, flag.value),
                title="invalid flag value",
                code=FaultCode.UNCASTABLE_FLAG,
                usage=details,
                program=input.binary,
                argument=option,
                input=flag.name,
                hint=str(error),
                docs=getdoc(FaultCode.UNCASTABLE_FLAG),
            ) from error

    return instance


def usage(commands, /):
    """
    Return the command overview for a set of templates, without parsing anything.
    """
    return render_overview(derive(commands))


def run(commands, argv=Unset, /, *, fancy=False, colorful=True):
    """
    Parse argv (sys.argv by default) and return the populated command.

    On a user fault the fault is rendered with rich on stderr (styled per
    __styles__ in __main__ when colorful, inside a panel when fancy) and the
    process exits with status 1. Template errors are not intercepted.
    """
    argv = list(coalesce(argv, sys.argv))
    try:
        return parse(commands, argv)
    except CommandException as fault:
        trigger(
            fault,
            shell=True,
            fancy=fancy,
            colorful=colorful,
            program=os.path.basename(fault.options.get("program") or (argv[0] if argv else "")),
        )


__all__ = (
    "parse",
    "usage",
    "run",
)
