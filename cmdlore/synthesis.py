"""
cmdlore synthesis: build a runnable invocation from user-supplied values.

Values
- The caller supplies a mapping of parameter name → value. Switch and Boolean
  parameters take booleans; every other parameter takes text.

Placement
- A Switch with a truthy value becomes a bare "-Name" flag, always named.
- Any other parameter with a non-blank value is rendered as a value token:
  numeric types (int, double, float, decimal) verbatim, everything else
  single-quoted with embedded quotes doubled. Python booleans are written as
  "true" or "false" first, so a Boolean parameter yields 'true'.
- Parameters with position >= 0 are emitted as bare value tokens, ordered by
  position; the rest are emitted as "-Name value" in parameter order.
- Line layout: invocation token, positional tokens, named tokens.

Example
    >>> record = CommandRecord("Get-Thing", parameters=[
    ...     ParameterDeclaration("Name", type="Int32", position=1),
    ...     ParameterDeclaration("Verbose", type="Switch"),
    ...     ParameterDeclaration("Path", type="Int32", position=0),
    ... ])
    >>> synthesize_invocation(record, {"Name": "1", "Path": "2", "Verbose": True})
    'Get-Thing 2 1 -Verbose'
"""
import re

from .faults import *
from .records import *

_SWITCH = re.compile(r"switch", re.IGNORECASE)
_FLAGGED = re.compile(r"switch|boolean", re.IGNORECASE)
_NUMERIC = re.compile(r"int|double|float|decimal", re.IGNORECASE)


def quote(value, /):
    """
    Single-quote a value, doubling embedded single quotes.

    Example
    - quote("it's") -> "'it''s'"
    """
    return "'%s'" % str(value).replace("'", "''")


def _present(parameter, value):
    if _SWITCH.search(parameter.type):
        return bool(value)
    return value is not None and str(value).strip() != ""


def _render(parameter, value):
    if isinstance(value, bool):
        value = str(value).lower()
    if _NUMERIC.search(parameter.type):
        return str(value)
    return quote(value)


def synthesize_invocation(record, values, /):
    """
    Return the command line for record given the name → value mapping.

    Parameters without a value are left out; see the module docstring for
    quoting and placement.
    """
    positional = []
    named = []
    for parameter in record.parameters:
        value = values.get(parameter.name)
        if not _present(parameter, value):
            continue
        if _SWITCH.search(parameter.type):
            named.append("-" + parameter.name)
        elif parameter.positional:
            positional.append((parameter.position, _render(parameter, value)))
        else:
            named.append("-%s %s" % (parameter.name, _render(parameter, value)))

    positional.sort(key=lambda entry: entry[0])
    return " ".join([record.invocation, *(text for _, text in positional), *named])


def missing_required(record, values, /):
    """
    Return the indices (into record.parameters) of required parameters that
    lack a value, in parameter order.

    Switch and Boolean parameters are missing when falsy; the others when
    absent or blank after trimming.
    """
    missing = []
    for index, parameter in enumerate(record.parameters):
        if not parameter.required:
            continue
        value = values.get(parameter.name)
        if _FLAGGED.search(parameter.type):
            if not value:
                missing.append(index)
        elif value is None or str(value).strip() == "":
            missing.append(index)
    return missing


def require(record, values, /):
    """
    Return the invocation for record, or trigger a MissingValueError naming
    every required parameter without a value.
    """
    if indices := missing_required(record, values):
        names = [record.parameters[index].name for index in indices]
        return trigger(MissingValueError(
            "%s is missing required %s %s" % (
                record.name,
                "parameter" if len(names) == 1 else "parameters",
                ", ".join(map(repr, names)),
            ),
            title="missing required value",
            code=FaultCode.MISSING_REQUIRED_VALUE,
            hint="supply a value for %s" % " and ".join("-" + name for name in names),
            missing=names,
        ))
    return synthesize_invocation(record, values)


__all__ = (
    "quote",
    "synthesize_invocation",
    "missing_required",
    "require",
)
