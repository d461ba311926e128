"""
cmdlore parsing: script text → help block, parameters, command record.

Pipeline (per script file)
1. parse_help_block(text)       → HelpBlock (first <# ... #> block only)
2. parse_parameter_block(text)  → tuple[ParameterDeclaration, ...]
3. reconcile_parameters(...)    → one de-duplicated list ordered by position
4. derive_category(...)         → category label (see categories)
5. parse_command(...)           → CommandRecord, or None without a name

Guarantees
- Nothing here raises on malformed script text. Structural problems are
  reported through faults.trigger() as warnings and the parse falls back to
  empty defaults (no parameters, no examples, empty synopsis).
- Only enough of the scripting language is understood to locate the
  documentation block and the parameter list; no expression is evaluated.

Help block layout
- Section headers are lines whose trimmed text starts with ".Word". The header
  name is upper-cased and the following lines accumulate until the next header.
- SYNOPSIS and DESCRIPTION are joined and trimmed; every ".EXAMPLE*" header
  starts its own example block.
- ".PARAMETER <Name>" headers feed the parameter-name hints; prose words that
  commonly follow the header (none, no, parameters, true, false, n/a, na) are
  not names.
"""
import re

from .categories import derive_category
from .faults import *
from .records import *
from .scanning import *
from .utils import basename

_HELP_BLOCK = re.compile(r"<#(.*?)#>", re.DOTALL)
_SECTION_HEADER = re.compile(r"^\.(\w+)")
_PARAMETER_HEADER = re.compile(r"^[ \t]*\.PARAMETER[ \t]+([^\r\n]+)", re.IGNORECASE | re.MULTILINE)
_JUNK_HINT = re.compile(r"(none|no|parameters?|true|false|n/a|na)", re.IGNORECASE)

_PARAMETER_OPENER = re.compile(r"\bparam\s*\(", re.IGNORECASE)
_VARIABLE = re.compile(r"\$([A-Za-z_]\w*)\b")
_SPECIAL_VARIABLE = re.compile(r"(true|false|null|env|_|psitem)", re.IGNORECASE)
_PARAMETER_ATTRIBUTE = re.compile(r"parameter\s*\(", re.IGNORECASE)
_OTHER_ATTRIBUTE = re.compile(r"[A-Za-z_][\w.]*\s*\(")
_MANDATORY_ASSIGNMENT = re.compile(r"mandatory\s*=\s*\$?(true|false)", re.IGNORECASE)
_MANDATORY_WORD = re.compile(r"\bmandatory\b", re.IGNORECASE)
_POSITION_ASSIGNMENT = re.compile(r"position\s*=\s*(-?\d+)", re.IGNORECASE)

# Ordered: the first matching substring decides.
_TYPE_FAMILIES = (
    (re.compile(r"switch", re.IGNORECASE), ParameterType.SWITCH),
    (re.compile(r"bool", re.IGNORECASE), ParameterType.BOOLEAN),
    (re.compile(r"int(16|32|64)?", re.IGNORECASE), ParameterType.INT32),
    (re.compile(r"string", re.IGNORECASE), ParameterType.STRING),
)

_FUNCTION_NAME = re.compile(r"\bfunction\s+([A-Za-z0-9_-]+)\b", re.IGNORECASE)
_LINE_REACH = 2000


def parse_help_block(text: str, /) -> HelpBlock:
    """
    Extract the first documentation block and split it into sections.

    Returns an empty HelpBlock when no "<#" ... "#>" pair exists.
    """
    if not (match := _HELP_BLOCK.search(text)):
        return HelpBlock()
    body = match[1]

    hints = {}
    for header in _PARAMETER_HEADER.finditer(body):
        if not (words := header[1].split()):
            continue
        if _JUNK_HINT.fullmatch(hint := words[0]):
            continue
        hints.setdefault(hint.lower(), hint)

    sections = {}
    examples = []
    current = None
    for line in body.splitlines():
        if head := _SECTION_HEADER.match(line.strip()):
            name = head[1].upper()
            if name.startswith("EXAMPLE"):
                examples.append(current := [])
            else:
                current = sections.setdefault(name, [])
            continue
        if current is not None:
            current.append(line.rstrip())

    return HelpBlock(
        synopsis="\n".join(sections.get("SYNOPSIS", ())).strip(),
        description="\n".join(sections.get("DESCRIPTION", ())).strip(),
        examples=[example for lines in examples if (example := "\n".join(lines).strip())],
        hints=hints.values(),
    )


def normalize_type(declared: str, /) -> str:
    """
    Fold declared type text onto the closed ParameterType set.

    Substring matching, first family wins: switch → Switch, bool → Boolean,
    int/int16/int32/int64 → Int32, string → String. Unmatched non-empty text
    is passed through unchanged; empty text becomes Object.
    """
    for pattern, family in _TYPE_FAMILIES:
        if pattern.search(declared):
            return family
    if not (declared := declared.strip()):
        return ParameterType.OBJECT
    trigger(AmbiguousTypeWarning(
        "declared type %r is outside the known types and is kept as written" % declared,
        title="ambiguous declared type",
        code=FaultCode.AMBIGUOUS_TYPE,
        hint="synthesized values for this parameter are quoted as text",
        declared=declared,
    ))
    return declared


def _parse_entry(chunk):
    """
    Turn one top-level parameter entry into a ParameterDeclaration, or None
    when the entry binds no ordinary variable.
    """
    for variable in _VARIABLE.finditer(chunk):
        if not _SPECIAL_VARIABLE.fullmatch(variable[1]):
            break
    else:
        return None

    required = False
    position = -1
    declared = ""
    for group in bracket_groups(chunk[:variable.start()]):
        group = group.strip()
        if _PARAMETER_ATTRIBUTE.match(group):
            body = group[group.find("(") + 1:group.rfind(")")]
            if mandatory := _MANDATORY_ASSIGNMENT.search(body):
                required = mandatory[1].lower() == "true"
            elif _MANDATORY_WORD.search(body):
                required = True
            if assignment := _POSITION_ASSIGNMENT.search(body):
                position = int(assignment[1])
        elif not _OTHER_ATTRIBUTE.match(group):
            # The last plain group wins: "[object][string]$x" is a string.
            declared = group

    return ParameterDeclaration(
        variable[1],
        required=required,
        type=normalize_type(declared),
        position=position,
    )


def parse_parameter_block(text: str, /) -> tuple[ParameterDeclaration, ...]:
    """
    Parse the first "param(...)" list into declarations, in encounter order.

    An absent list yields (). An unbalanced list yields () and a
    StructuralParseWarning. Entries without an ordinary variable reference are
    skipped. Duplicate names are kept here; reconcile_parameters() removes them.
    """
    if not (opener := _PARAMETER_OPENER.search(text)):
        return ()

    start = opener.end() - 1
    if (end := find_balanced_close(text, start)) < 0:
        trigger(StructuralParseWarning(
            "parameter list opened at offset %d is never closed" % start,
            title="unbalanced parameter list",
            code=FaultCode.UNBALANCED_PARAMETER_BLOCK,
            hint="check the script for an unterminated string or a missing ')'",
            offset=start,
        ))
        return ()

    declarations = []
    for chunk in split_top_level(text[start + 1:end], ","):
        if (declaration := _parse_entry(chunk)) is not None:
            declarations.append(declaration)
    return tuple(declarations)


def reconcile_parameters(declarations, hints, text: str, /) -> tuple[ParameterDeclaration, ...]:
    """
    Merge parameter-block declarations with help-block name hints.

    - Declarations are keyed by lower-cased name; a later duplicate replaces
      the earlier one but keeps its slot.
    - A hint with no declaration is added as an optional String parameter
      (position -1) only if the text references "$<hint>" somewhere; otherwise
      it was prose and is dropped.
    - The result is sorted by position; ties keep insertion order.
    """
    merged = {}
    for declaration in declarations:
        merged[declaration.key] = declaration

    for hint in hints:
        if (key := hint.lower()) in merged:
            continue
        if re.search(r"\$%s\b" % re.escape(hint), text, re.IGNORECASE):
            merged[key] = ParameterDeclaration(hint, required=False, type=ParameterType.STRING, position=-1)

    return tuple(sorted(merged.values(), key=lambda declaration: declaration.position))


def derive_command_name(text: str, fallback: str = "", /) -> str:
    """
    Return the command name defined by the script.

    The first "function <Name>" lying within 2000 characters of the start of
    its line wins, wherever that line is; otherwise the fallback (typically
    the file name) is used with a trailing ".ps1" removed. Returns "" when
    neither yields a name.
    """
    for match in _FUNCTION_NAME.finditer(text):
        start = max(text.rfind("\n", 0, match.start()), text.rfind("\r", 0, match.start())) + 1
        if match.start() - start <= _LINE_REACH:
            return match[1]
    return re.sub(r"\.ps1$", "", fallback.strip(), flags=re.IGNORECASE)


def parse_command(config, text: str, path: str, /) -> CommandRecord | None:
    """
    Parse one script into a CommandRecord.

    Returns None (after a NoCommandNameWarning) only when no name can be
    derived from the text nor from the file name; every other problem yields a
    best-effort record.
    """
    if not (name := derive_command_name(text, basename(path))):
        trigger(NoCommandNameWarning(
            "no command name found for %r" % path,
            title="unnamed script",
            code=FaultCode.NO_COMMAND_NAME,
            hint="define a function or give the script a file name",
            path=path,
        ))
        return None

    help = parse_help_block(text)
    return CommandRecord(
        name,
        category=derive_category(config, path, text),
        synopsis=help.synopsis,
        description=help.description,
        examples=help.examples,
        parameters=reconcile_parameters(parse_parameter_block(text), help.hints, text),
        invocation=name,
        path=path,
    )


__all__ = (
    "parse_help_block",
    "normalize_type",
    "parse_parameter_block",
    "reconcile_parameters",
    "derive_command_name",
    "parse_command",
)
