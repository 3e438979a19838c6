"""
declargs utilities (internal helpers, carefully exposed)

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- kebabize(name)
  • Turn a field identifier into the option name users type ("flagInt", "flag_int" → "flag-int").

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> kebabize("FlagInt")
    'flag-int'
"""
import functools
import re
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations and isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.
    """
    return object if object is not Unset else default


@functools.cache
def kebabize(name, /):
    """
    Derive a kebab-case option name from a field identifier.

    A hyphen is inserted before every internal uppercase letter, underscores
    become hyphens, and the result is lowercased. Leading/trailing underscores
    are dropped so private-looking fields still produce clean names.

    Examples
    - kebabize("FlagInt")    -> "flag-int"
    - kebabize("flag_int")   -> "flag-int"
    - kebabize("dryRun")     -> "dry-run"
    - kebabize("verbose")    -> "verbose"
    """
    if not isinstance(name, str):
        raise TypeError("kebabize() argument must be a string")
    name = name.strip("_")
    return re.sub(r"[-_]+", "-", re.sub(r"(?<!^)(?=[A-Z])", r"-", name)).lower()


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "kebabize",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
