"""
cmdlore scanner primitives: delimiter balance and quote state.

Both parsers need to walk loosely formatted script text without being fooled
by delimiters that live inside string literals, so the walk is an explicit
finite-state machine instead of a grammar:

- parens:   nesting depth of "(" ... ")"
- brackets: nesting depth of "[" ... "]"
- quote:    the quote character of the literal currently open, or None

Literal rules
- "'" or '"' opens a literal when no literal is open; the matching character
  closes it.
- A doubled quote ('' inside '...', "" inside "...") is an escape and keeps
  the literal open.
- A backtick escapes the next character inside double-quoted literals only;
  single-quoted literals are verbatim.
- Delimiters inside a literal never change the depths.

Public API
- Scanner: the state machine itself (step-wise).
- find_balanced_close(text, index): index of the ")" closing text[index].
- split_top_level(text, separator=","): split only at depth zero.
- bracket_groups(text): inner text of each top-level "[...]" group.
"""
from typing import Iterator

QUOTES = ("'", '"')


class Scanner:
    """
    Finite-state tracker for paren depth, bracket depth and the open quote.

    step() consumes one transition starting at text[index] and returns how
    many characters were consumed (1, or 2 for an escape sequence). Closing
    delimiters never drive a depth below zero.
    """
    __slots__ = ("parens", "brackets", "quote")

    def __init__(self):
        self.parens = 0
        self.brackets = 0
        self.quote = None

    @property
    def toplevel(self) -> bool:
        return not (self.parens or self.brackets or self.quote)

    def step(self, text: str, index: int) -> int:
        char = text[index]
        follower = text[index + 1] if index + 1 < len(text) else ""

        if self.quote:
            if char == "`" and self.quote == '"' and follower:
                return 2
            if char == self.quote:
                if follower == self.quote:
                    return 2
                self.quote = None
            return 1

        match char:
            case "'" | '"':
                self.quote = char
            case "(":
                self.parens += 1
            case ")":
                self.parens = max(0, self.parens - 1)
            case "[":
                self.brackets += 1
            case "]":
                self.brackets = max(0, self.brackets - 1)
        return 1


def find_balanced_close(text: str, index: int, /) -> int:
    """
    Return the index of the ")" that closes the "(" at text[index].

    Returns -1 when text[index] is not "(" or when the text ends before the
    depth returns to zero (the caller treats that as a structural failure).

    Example
    - find_balanced_close("param($a = (1, ')'))", 5) -> 19
    """
    if not 0 <= index < len(text) or text[index] != "(":
        return -1

    scanner = Scanner()
    cursor = index
    while cursor < len(text):
        closing = scanner.quote is None and text[cursor] == ")"
        width = scanner.step(text, cursor)
        if closing and scanner.parens == 0:
            return cursor
        cursor += width
    return -1


def split_top_level(text: str, separator: str = ",", /) -> list[str]:
    """
    Split text on separator where no paren, bracket or literal is open.

    Segments are trimmed; empty and whitespace-only segments are dropped.
    Separators inside "[...]", "(...)" or quotes stay in their segment.

    Examples
    - split_top_level("$Path = 'a,b', $Count") -> ["$Path = 'a,b'", "$Count"]
    - split_top_level("[ValidateSet('x','y')]$Mode, $Force")
      -> ["[ValidateSet('x','y')]$Mode", "$Force"]
    """
    if len(separator) != 1:
        raise ValueError("split_top_level() separator must be a single character")

    segments = []
    scanner = Scanner()
    start = cursor = 0
    while cursor < len(text):
        if text[cursor] == separator and scanner.toplevel:
            segments.append(text[start:cursor])
            start = cursor = cursor + 1
            continue
        cursor += scanner.step(text, cursor)
    segments.append(text[start:])
    return [segment.strip() for segment in segments if segment.strip()]


def bracket_groups(text: str, /) -> Iterator[str]:
    """
    Yield the inner text of each top-level "[...]" group, in order.

    Nested brackets and quoted "]" stay inside their group, so "[string[]]"
    yields "string[]". An unterminated trailing group is ignored.
    """
    scanner = Scanner()
    start = None
    cursor = 0
    while cursor < len(text):
        char = text[cursor]
        literal = scanner.quote is not None
        width = scanner.step(text, cursor)
        if not literal and scanner.parens == 0:
            if char == "[" and scanner.brackets == 1:
                start = cursor + 1
            elif char == "]" and scanner.brackets == 0 and start is not None:
                yield text[start:cursor]
                start = None
        cursor += width


__all__ = (
    "Scanner",
    "find_balanced_close",
    "split_top_level",
    "bracket_groups",
)
