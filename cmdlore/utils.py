"""
cmdlore utilities (small shared helpers)

Scope
- Sentinels, naming and read-only exposure helpers shared by the records,
  configuration, and fault layers.
- Path helpers used wherever a logical script path or base path is compared.

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided”, distinct from None and falsey.

- coalesce(value, default=None)
  • Replace Unset with a default; every other value (None, "", 0) is kept.

- rename(callable, name) / @rename("name")
  • Give generated callables a stable __name__/__qualname__.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers
    come back as fresh copies so callers cannot mutate record state.

- slashed(path) / basename(path)
  • Forward-slash normalization and last-segment lookup for logical paths.

Quick examples
    >>> coalesce(Unset, "General")
    'General'
    >>> slashed("\\\\functions\\\\net\\\\")
    'functions/net'
    >>> basename("functions/net/Test-Ping.ps1")
    'Test-Ping.ps1'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for values that were not provided.

    Characteristics
    - Boolean-false, but never equal to None, 0 or "".
    - Printable as "Unset".
    - Sealed and process-wide singleton.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when the sentinel appears on the right.
        """
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

    Falsey values like None, 0, "" or () are returned unchanged; only Unset is
    replaced.

    Examples
    - coalesce("Get-Thing", "x") -> "Get-Thing"
    - coalesce(Unset, "x")       -> "x"
    - coalesce("", "x")          -> ""
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name)           -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(object):
    """
    Return a shallow-detached copy of containers, leaving other values as-is.

    - Sequence (non-string) → tuple
    - Mapping               → dict copy
    - Set                   → frozenset
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return dict(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return coalesce(object)


def mirror(name, /):
    """
    Define a read-only property mirroring the backing attribute "_{name}".

    Example
    - Given self._parameters, declare parameters = mirror("parameters").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def slashed(path, /):
    """
    Normalize a logical path: backslashes become slashes, a leading "./" and
    surrounding slashes are dropped.
    """
    if not isinstance(path, str):
        raise TypeError("slashed() argument must be a string")
    path = path.replace("\\", "/").strip("/")
    path = re.sub(r"^\.(/|$)", "", path)
    return path.strip("/")


def basename(path, /):
    """
    Return the last segment of a logical path ("" for an empty path).
    """
    return path.replace("\\", "/").rstrip("/").rpartition("/")[2]


Unset = UnsetType()
"""
Singleton for “not provided”; materialize with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "slashed",
    "basename",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
