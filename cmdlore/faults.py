"""
cmdlore faults (warnings and errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the
  catalog can report. Codes are grouped by domain so logs and searches stay
  predictable.
- CatalogWarning / CatalogException: base types carrying message + options
  that render themselves through rich.
- trigger(): the single entry point that surfaces a fault.

Policy
- Parsing never aborts. Malformed or partial script text is recovered locally
  and reported as a CatalogWarning; the caller still gets a best-effort result.
- Faults that the caller must act on (missing required values) are returned
  as data by the synthesis layer, and raised as CatalogException only when the
  caller asks for it (see synthesis.require).

Integration
- Outside shell mode, warnings go through the warnings module and exceptions
  are raised.
- In shell mode (the host sets __shell__ = True in __main__), both are printed
  on a rich stderr console and exceptions exit with status 1.
"""
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the catalog (stable identifiers).

    grouping (by high-level domain)
    - structural (211xx)
      • UNBALANCED_PARAMETER_BLOCK
    - naming (212xx)
      • NO_COMMAND_NAME
    - typing (213xx)
      • AMBIGUOUS_TYPE
    - invocation (214xx)
      • MISSING_REQUIRED_VALUE

    normalize() lets the host remap numeric ids to its own labels through a
    __codes__ mapping in __main__.
    """
    # --- structural warnings (211xx) ---
    UNBALANCED_PARAMETER_BLOCK = 21101

    # --- naming warnings (212xx) ---
    NO_COMMAND_NAME            = 21201

    # --- typing warnings (213xx) ---
    AMBIGUOUS_TYPE             = 21301

    # --- invocation errors (214xx) ---
    MISSING_REQUIRED_VALUE     = 21401

    def normalize(self):
        """
        return a host-normalized string for this code.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _shell():
    return bool(getattr(__import__("__main__"), "__shell__", False))


def _render(fault, palette):
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    prog = getattr(main, "__prog__", "cmdlore")

    header = Text.assemble(
        "[ ",
        Text(prog, styles["prog-name"]),
        " — ",
        Text(fault.options["code"].normalize(), styles["code"]),
        " | ",
        Text(fault.options["title"].title(), styles["title"]),
        " ]"
    )
    message = Text(str(fault.message), styles["message"])
    if not (hint := fault.options.get("hint")):
        return Group(header, message)
    return Group(header, message, Text.assemble(Text(" → ", styles["hint-arrow"]), Text(hint, styles["hint"])))


class CatalogException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        })

    def __trigger__(self):
        if not _shell():
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingValueError(CatalogException):
    @property
    def missing(self):
        """Names of the required parameters that lack a value."""
        return tuple(self.options.get("missing", ()))


class CatalogWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        })

    def __trigger__(self):
        if not _shell():
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class StructuralParseWarning(CatalogWarning): ...
class NoCommandNameWarning(CatalogWarning): ...
class AmbiguousTypeWarning(CatalogWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given options.

    contract
    - fault must provide __trigger__ and __replace__ (see the base classes).
    - options are merged into the fault before it is triggered.

    typical options
    - title, code, hint, and any context worth keeping on the fault
      (path, name, declared type, missing names).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    return fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "CatalogException",
    "MissingValueError",
    "CatalogWarning",
    "StructuralParseWarning",
    "NoCommandNameWarning",
    "AmbiguousTypeWarning",
    "trigger",
)
