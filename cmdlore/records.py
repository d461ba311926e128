"""
cmdlore records: the fixed-field values produced by the parsers.

Overview
- ParameterType: the closed semantic set of declared parameter types
  (String, Switch, Boolean, Int32, Object). Declared types outside the set are
  carried as plain strings; ParameterType members are strings too, so both
  compare naturally against text.
- ParameterDeclaration: one formal parameter (name, required, type, position).
- HelpBlock: the parsed documentation comment (synopsis, description,
  examples, parameter-name hints). Transient: only lives during a parse.
- CommandRecord: one classified command, the unit handed to consumers.

Representation
- RecordType (metaclass) exposes every name in __introspectable__ as a
  read-only property backed by a private field, and provides stable
  __repr__/__rich_repr__ plus field-wise equality.
- Records are sanitized on construction: wrong types raise TypeError, empty
  names raise ValueError. Once built they do not change.

Ordering
- CommandRecord sorts its parameters by position at construction (stable), so
  non-positional entries (position -1) come first and equal positions keep
  their encounter order.
"""
import functools
import operator
import re
from enum import StrEnum

from .utils import *


class ParameterType(StrEnum):
    STRING = "String"
    SWITCH = "Switch"
    BOOLEAN = "Boolean"
    INT32 = "Int32"
    OBJECT = "Object"


class RecordType(type):
    """
    Metaclass that turns record classes into read-only, introspectable values.

    Responsibilities
    - Expose each name in __introspectable__ through mirror(name).
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for use in messages.
    - Provide __repr__, __rich_repr__, __eq__ and __hash__ driven by the
      introspectable fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash((type(self).__name__, *(value for _, value in self.__rich_repr__())))
        self.__hash__ = __hash__

        return self


def _sanitize_text(cls, metadata, *names, required=False):
    """
    Internal: validate string fields in place.

    - Each named field must be a string.
    - required fields are trimmed and must not be empty afterwards.
    """
    for name in names:
        if not isinstance(object := metadata[name], str):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        if required and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = object


def _sanitize_strings(cls, metadata, name):
    """
    Internal: validate that metadata[name] is an iterable of strings and
    freeze it into a tuple.
    """
    if isinstance(object := metadata[name], str):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")
    try:
        object = tuple(object)
    except TypeError:
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings") from None
    if not all(isinstance(item, str) for item in object):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable of strings")
    metadata[name] = object


class ParameterDeclaration(metaclass=RecordType):
    """
    One formal parameter of a command.

    Fields
    - name: non-empty, case preserved (identity is case-insensitive, see key).
    - required: whether the parameter is mandatory.
    - type: a ParameterType member, or the raw declared type text when it
      matches none of them.
    - position: -1 for named-only parameters; 0 and above order positional
      placement. Equal positions are allowed.
    """

    __introspectable__ = (
        "name",
        "required",
        "type",
        "position",
    )

    def __init__(self, name, /, required=False, type=ParameterType.OBJECT, position=-1):
        metadata = {
            "name": name,
            "type": type,
        }
        _sanitize_text(ParameterDeclaration, metadata, "name", "type", required=True)
        if not isinstance(required, bool):
            raise TypeError(f"{ParameterDeclaration.__typename__} 'required' must be a boolean")
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeError(f"{ParameterDeclaration.__typename__} 'position' must be an integer")

        self._name = metadata["name"]
        self._required = required
        self._type = _canonical(metadata["type"])
        self._position = position

    @property
    def key(self):
        """Case-insensitive identity of the parameter."""
        return self._name.lower()

    @property
    def positional(self):
        return self._position >= 0


def _canonical(type, /):
    # Members of the closed set are kept as enum members, everything else as text.
    try:
        return ParameterType(type)
    except ValueError:
        return type


class HelpBlock(metaclass=RecordType):
    """
    Parsed documentation comment.

    Fields
    - synopsis / description: trimmed section text ("" when absent).
    - examples: one string per example section, in order.
    - hints: parameter names mentioned by .PARAMETER headers, used only to
      discover parameters the declaration block missed.
    """

    __introspectable__ = (
        "synopsis",
        "description",
        "examples",
        "hints",
    )

    def __init__(self, synopsis="", description="", examples=(), hints=()):
        metadata = {
            "synopsis": synopsis,
            "description": description,
            "examples": examples,
            "hints": hints,
        }
        _sanitize_text(HelpBlock, metadata, "synopsis", "description")
        _sanitize_strings(HelpBlock, metadata, "examples")
        _sanitize_strings(HelpBlock, metadata, "hints")

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


class CommandRecord(metaclass=RecordType):
    """
    One classified command, as handed to consumers.

    Fields
    - name: the command name (function name, or the script's file name).
    - category: classification label (see categories.derive_category).
    - synopsis / description / examples: from the help block.
    - parameters: ParameterDeclaration tuple sorted by position (stable).
    - invocation: bare token that starts a synthesized command line
      (defaults to name).
    - path: logical source path of the script.
    """

    __introspectable__ = (
        "name",
        "category",
        "synopsis",
        "description",
        "examples",
        "parameters",
        "invocation",
        "path",
    )

    def __init__(
            self,
            name,
            /,
            category="General",
            synopsis="",
            description="",
            examples=(),
            parameters=(),
            invocation=Unset,
            path="",
    ):
        metadata = {
            "name": name,
            "category": category,
            "synopsis": synopsis,
            "description": description,
            "examples": examples,
            "parameters": parameters,
            "invocation": coalesce(invocation, name),
            "path": path,
        }
        _sanitize_text(CommandRecord, metadata, "name", "category", "invocation", required=True)
        _sanitize_text(CommandRecord, metadata, "synopsis", "description", "path")
        _sanitize_strings(CommandRecord, metadata, "examples")

        parameters = tuple(metadata["parameters"])
        if not all(isinstance(parameter, ParameterDeclaration) for parameter in parameters):
            raise TypeError(f"{CommandRecord.__typename__} 'parameters' must contain parameter declarations")
        keys = [parameter.key for parameter in parameters]
        if len(set(keys)) != len(keys):
            raise ValueError(f"{CommandRecord.__typename__} 'parameters' names must be unique (case-insensitive)")
        metadata["parameters"] = tuple(sorted(parameters, key=operator.attrgetter("position")))

        for name, object in metadata.items():
            setattr(self, "_" + name, object)


__all__ = (
    "ParameterType",
    "ParameterDeclaration",
    "HelpBlock",
    "CommandRecord",
)
