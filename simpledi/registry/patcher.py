"""Bracket-scanning text patcher for aggregator files.

Aggregator files (``CoreModule.ts``, ``UseCaseModule.ts``, ``main.routes.ts``,
``schema.ts``) are patched as plain text: no parser, no AST.  The patcher
only understands three things:

* the last ``import `` statement, after which a new import is inserted;
* a named array literal such as ``imports: [ ... ]``, located by substring
  (or a whitespace-tolerant regex) and closed by bracket-depth scanning;
* a literal anchor such as ``export { mainRoutes }``, before which a new
  statement is inserted.

The depth scan does not know about strings or comments: a ``]`` inside a
string literal within the array will be taken as a closing bracket.

Callers depend on the ``TextPatcher`` protocol rather than on
``BracketScanningPatcher`` so that a syntax-aware implementation can be
swapped in later.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

IMPORT_TOKEN = "import "

ImportTerminator = Literal["line", "statement"]
ArrayStyle = Literal["multiline", "inline"]
MatchPolicy = Literal["substring", "word"]

BRACKET_PAIRS: dict[str, str] = {"[": "]", "(": ")", "{": "}"}


class ArrayEditStatus(str, Enum):
    """What happened when inserting into an array literal."""

    INSERTED = "inserted"
    PRESENT = "present"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ArrayEdit:
    """Result of :meth:`TextPatcher.insert_array_element`."""

    text: str
    status: ArrayEditStatus


class TextPatcher(Protocol):
    """Text-level operations the registrar needs from a patcher."""

    def contains_reference(
        self, text: str, reference: str, policy: MatchPolicy = "substring"
    ) -> bool: ...

    def insert_import(
        self, text: str, import_line: str, terminator: ImportTerminator = "line"
    ) -> str: ...

    def insert_array_element(
        self,
        text: str,
        marker: str,
        element: str,
        style: ArrayStyle = "multiline",
        indent: str = "    ",
    ) -> ArrayEdit: ...

    def insert_before_anchor(self, text: str, statement: str, anchor: str) -> str: ...

    def append_statement(self, text: str, statement: str) -> str: ...


# ---------------------------------------------------------------------------
# Scanning helpers
# ---------------------------------------------------------------------------


def marker_pattern(marker: str) -> re.Pattern[str]:
    """Build a regex matching *marker* with any whitespace between its tokens.

    ``"imports: ["`` -> ``imports\\s*:\\s*\\[``
    """
    tokens = re.findall(r"\w+|[^\w\s]", marker)
    if not tokens:
        raise ValueError("Array marker must not be empty")
    return re.compile(r"\s*".join(re.escape(token) for token in tokens))


def locate_array_start(text: str, marker: str) -> int | None:
    """Return the index just past the marker's opening bracket, or ``None``.

    The literal marker is tried first; the whitespace-tolerant pattern is the
    fallback.
    """
    index = text.find(marker)
    if index != -1:
        return index + len(marker)
    match = marker_pattern(marker).search(text)
    if match:
        return match.end()
    return None


def find_closing_bracket(
    text: str, start: int, open_char: str = "[", close_char: str = "]"
) -> int | None:
    """Find the bracket closing the one opened just before *start*.

    Depth starts at 1, goes up on every *open_char* and down on every
    *close_char*; the index where it reaches zero is returned.  ``None``
    means the literal is unbalanced.
    """
    depth = 1
    for index in range(start, len(text)):
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
    return None


def mentions_identifier(text: str, token: str) -> bool:
    """Tell whether *token* occurs in *text* not glued to identifier characters."""
    pattern = rf"(?<![\w$]){re.escape(token)}(?![\w$])"
    return re.search(pattern, text) is not None


def array_insertion(
    content: str, element: str, style: ArrayStyle = "multiline", indent: str = "    "
) -> str:
    """Compute the text to splice in before the closing bracket.

    A ``", "`` separator is needed only when the existing content is
    non-empty and does not already end with a comma.
    """
    trimmed = content.strip()
    separator = ", " if trimmed and not trimmed.endswith(",") else ""
    if style == "inline":
        return f"{separator}{element}"
    return f"{separator}\n{indent}{element},"


def _opening_bracket(marker: str) -> tuple[str, str]:
    stripped = marker.rstrip()
    if not stripped or stripped[-1] not in BRACKET_PAIRS:
        raise ValueError(f"Array marker must end with an opening bracket: {marker!r}")
    return stripped[-1], BRACKET_PAIRS[stripped[-1]]


# ---------------------------------------------------------------------------
# Default implementation
# ---------------------------------------------------------------------------


class BracketScanningPatcher:
    """``TextPatcher`` built on substring search and bracket-depth scanning."""

    def contains_reference(
        self, text: str, reference: str, policy: MatchPolicy = "substring"
    ) -> bool:
        """Tell whether *reference* already appears in *text*.

        ``"substring"`` matches anywhere, including comments and longer
        identifiers.  ``"word"`` requires the reference not to be glued to
        other identifier characters.
        """
        if policy == "word":
            return mentions_identifier(text, reference)
        return reference in text

    def insert_import(
        self, text: str, import_line: str, terminator: ImportTerminator = "line"
    ) -> str:
        """Insert *import_line* after the last import, or at the top of the file.

        With ``terminator="line"`` the new import goes after the line holding
        the last ``import `` token.  With ``"statement"`` it goes after the
        first ``;`` following that token, so multi-line imports are kept
        whole.
        """
        index = text.rfind(IMPORT_TOKEN)
        if index == -1:
            return f"{import_line}\n{text}"

        if terminator == "statement":
            end = text.find(";", index)
            if end != -1:
                return text[: end + 1] + "\n" + import_line + text[end + 1 :]

        newline = text.find("\n", index)
        if newline == -1:
            return f"{text}\n{import_line}\n"
        return text[: newline + 1] + import_line + "\n" + text[newline + 1 :]

    def insert_array_element(
        self,
        text: str,
        marker: str,
        element: str,
        style: ArrayStyle = "multiline",
        indent: str = "    ",
    ) -> ArrayEdit:
        """Append *element* to the array literal opened by *marker*."""
        open_char, close_char = _opening_bracket(marker)
        start = locate_array_start(text, marker)
        if start is None:
            return ArrayEdit(text, ArrayEditStatus.NOT_FOUND)

        end = find_closing_bracket(text, start, open_char, close_char)
        if end is None:
            return ArrayEdit(text, ArrayEditStatus.MALFORMED)

        content = text[start:end]
        if mentions_identifier(content, element):
            return ArrayEdit(text, ArrayEditStatus.PRESENT)

        insertion = array_insertion(content, element, style, indent)
        return ArrayEdit(text[:end] + insertion + text[end:], ArrayEditStatus.INSERTED)

    def insert_before_anchor(self, text: str, statement: str, anchor: str) -> str:
        """Insert *statement* before the first *anchor*, else before the last line."""
        index = text.find(anchor)
        if index != -1:
            return text[:index] + statement + "\n\n" + text[index:]
        lines = text.split("\n")
        lines.insert(len(lines) - 1, statement)
        return "\n".join(lines)

    def append_statement(self, text: str, statement: str) -> str:
        """Append *statement* on its own line at the end of the file."""
        return f"{text}\n{statement}\n"
