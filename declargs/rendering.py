"""
declargs help rendering: aligned plain-text tables for diagnostics.

Two views
- render_overview(schemas): one row per command (name, usage).
- render_details(schema): a synthesized invocation line followed by one row per
  positional argument and one row per option, each with its kind and, for
  options, its default.

Layout
- keys are right-aligned four spaces past the longest key, joined to the usage
  by a dotted leader; usages are padded four spaces past the longest usage; kinds
  are padded to the longest kind so defaults line up.
- widths are measured on the rows being rendered, every call.

Example (details)

    usage: fetch <url> [-retries] [-timeout]

             <url>.......Where to download from     str
        [-retries].......How many times to retry    int       (default: "3")
        [-timeout].......Give up after this long    duration
"""
from typing import NamedTuple

from .kinds import describe

INDENT = 4
GUTTER = 4
LEADER = "......."


class Row(NamedTuple):
    key: str
    value: str
    kind: str | None = None
    default: str | None = None


def tabulate(rows, /):
    """
    Format rows into aligned lines; the table always ends with a blank line.
    """
    longest_key = max((len(row.key) for row in rows), default=0)
    longest_value = max((len(row.value) for row in rows), default=0)
    longest_kind = max((len(row.kind) for row in rows if row.kind is not None), default=0)

    lines = []
    for row in rows:
        line = " " * (INDENT + longest_key - len(row.key)) + row.key + LEADER
        line += row.value.ljust(longest_value + GUTTER)
        if row.kind is not None:
            line += row.kind.ljust(longest_kind)
            if row.default is not None:
                line += '  (default: "%s")' % row.default
        lines.append(line.rstrip() + "\n")

    return "".join(lines) + "\n"


def render_overview(schemas, /):
    """
    Command list: one row per command, in declaration order.
    """
    return "\n" + tabulate([Row(schema.name, schema.usage) for schema in schemas])


def render_details(schema, /):
    """
    One command's usage line and its argument/option table.
    """
    rows = []
    invocation = ["usage:", schema.name]

    for argument in schema.arguments:
        key = "<%s>" % argument.name
        rows.append(Row(key, argument.usage, describe(argument.kind)))
        invocation.append(key)

    for name, option in schema.options.items():
        key = "[-%s]" % name
        rows.append(Row(key, option.usage, describe(option.kind), option.default))
        invocation.append(key)

    return "\n" + " ".join(invocation) + "\n\n" + tabulate(rows)


__all__ = (
    "Row",
    "tabulate",
    "render_overview",
    "render_details",
)
