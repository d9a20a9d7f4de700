"""Auto-registration of generated artifacts in aggregator files.

A ``RegistrationEdit`` describes what a new artifact needs in an existing
aggregator: an import line, an element in an array literal, or a statement
before an anchor.  ``Registrar`` applies it to the file on disk:

1. missing file            -> ``AGGREGATOR_MISSING`` (nothing written)
   undecodable file        -> ``UNREADABLE_AGGREGATOR`` (nothing written)
2. reference already there -> ``ALREADY_REGISTERED`` (nothing written)
3. insert the import line
4. insert the array element, or the anchored / appended statement
5. write back only if the text changed

Every outcome is a value, never an exception: registration is a
convenience on top of generation, and a failure here must not undo or
abort the files that were already written.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .patcher import (
    ArrayEditStatus,
    ArrayStyle,
    BracketScanningPatcher,
    ImportTerminator,
    MatchPolicy,
    TextPatcher,
)


class RegistrationOutcome(str, Enum):
    """Terminal state of one registration attempt."""

    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"
    AGGREGATOR_MISSING = "aggregator_missing"
    MALFORMED_ARRAY_LITERAL = "malformed_array_literal"
    ARRAY_LITERAL_NOT_FOUND = "array_literal_not_found"
    UNREADABLE_AGGREGATOR = "unreadable_aggregator"

    @property
    def is_registered(self) -> bool:
        return self is RegistrationOutcome.REGISTERED


class RegistrationEdit(BaseModel):
    """The patch one artifact needs in one aggregator file."""

    model_config = ConfigDict(frozen=True)

    reference: str = Field(..., description="Identifier whose presence means 'already registered'")
    import_line: str | None = Field(default=None)
    import_terminator: ImportTerminator = Field(default="line")
    array_marker: str | None = Field(default=None, description="e.g. 'imports: ['")
    array_element: str | None = Field(
        default=None, description="Element to add to the array; defaults to the reference"
    )
    array_style: ArrayStyle = Field(default="multiline")
    statement: str | None = Field(default=None, description="Statement for anchor/append insertion")
    anchor: str | None = Field(default=None, description="Literal to insert the statement before")

    @property
    def element(self) -> str:
        return self.array_element or self.reference


class RegistrationResult(BaseModel):
    """What happened to one aggregator file."""

    path: Path
    outcome: RegistrationOutcome
    changed: bool = False
    message: str = ""


class Registrar:
    """Applies ``RegistrationEdit`` objects to aggregator files.

    Args:
        patcher: Text patcher implementation (bracket scanning by default).
        match_policy: How the idempotence check matches the reference.
        indent: Indentation used for multi-line array insertions.
    """

    def __init__(
        self,
        patcher: TextPatcher | None = None,
        *,
        match_policy: MatchPolicy = "substring",
        indent: str = "    ",
    ) -> None:
        self.patcher: TextPatcher = patcher or BracketScanningPatcher()
        self.match_policy = match_policy
        self.indent = indent

    # -- Pure text transformation ------------------------------------------

    def apply(self, text: str, edit: RegistrationEdit) -> tuple[str, RegistrationOutcome]:
        """Apply *edit* to *text* and return the new text and the outcome.

        A malformed or missing array literal keeps the import insertion:
        the partially patched text is returned together with the soft
        failure outcome.
        """
        if self.patcher.contains_reference(text, edit.reference, self.match_policy):
            return text, RegistrationOutcome.ALREADY_REGISTERED

        patched = text
        if edit.import_line:
            patched = self.patcher.insert_import(patched, edit.import_line, edit.import_terminator)

        if edit.array_marker:
            array_edit = self.patcher.insert_array_element(
                patched, edit.array_marker, edit.element, edit.array_style, self.indent
            )
            if array_edit.status is ArrayEditStatus.MALFORMED:
                return patched, RegistrationOutcome.MALFORMED_ARRAY_LITERAL
            if array_edit.status is ArrayEditStatus.NOT_FOUND:
                return patched, RegistrationOutcome.ARRAY_LITERAL_NOT_FOUND
            patched = array_edit.text
        elif edit.statement and edit.statement not in patched:
            if edit.anchor:
                patched = self.patcher.insert_before_anchor(patched, edit.statement, edit.anchor)
            else:
                patched = self.patcher.append_statement(patched, edit.statement)

        return patched, RegistrationOutcome.REGISTERED

    # -- File level ----------------------------------------------------------

    async def register(self, path: str | Path, edit: RegistrationEdit) -> RegistrationResult:
        """Register *edit* in the aggregator file at *path*."""
        aggregator = Path(path)
        if not await asyncio.to_thread(aggregator.is_file):
            return RegistrationResult(
                path=aggregator,
                outcome=RegistrationOutcome.AGGREGATOR_MISSING,
                message=f"{aggregator.name} not found",
            )

        try:
            text = await asyncio.to_thread(_read_text, aggregator)
        except UnicodeDecodeError as exc:
            return RegistrationResult(
                path=aggregator,
                outcome=RegistrationOutcome.UNREADABLE_AGGREGATOR,
                message=f"Could not read {aggregator.name} as UTF-8: {exc.reason} at byte {exc.start}",
            )

        patched, outcome = self.apply(text, edit)

        changed = patched != text
        if changed:
            await asyncio.to_thread(_write_text, aggregator, patched)

        return RegistrationResult(
            path=aggregator,
            outcome=outcome,
            changed=changed,
            message=_describe(aggregator, edit, outcome),
        )


async def register_reference(
    aggregator_path: str | Path,
    import_line: str | None,
    reference_identifier: str,
    array_literal_marker: str | None = None,
    export_anchor_marker: str | None = None,
    *,
    statement: str | None = None,
    registrar: Registrar | None = None,
) -> RegistrationResult:
    """Register *reference_identifier* in one aggregator file.

    Convenience wrapper around :meth:`Registrar.register` for callers that
    do not build a ``RegistrationEdit`` themselves.
    """
    edit = RegistrationEdit(
        reference=reference_identifier,
        import_line=import_line,
        array_marker=array_literal_marker,
        statement=statement,
        anchor=export_anchor_marker,
    )
    return await (registrar or Registrar()).register(aggregator_path, edit)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _describe(path: Path, edit: RegistrationEdit, outcome: RegistrationOutcome) -> str:
    if outcome is RegistrationOutcome.ALREADY_REGISTERED:
        return f"{edit.reference} is already registered in {path.name}"
    if outcome is RegistrationOutcome.MALFORMED_ARRAY_LITERAL:
        return f"Could not find closing bracket for '{edit.array_marker}' in {path.name}"
    if outcome is RegistrationOutcome.ARRAY_LITERAL_NOT_FOUND:
        return f"Could not find '{edit.array_marker}' array in {path.name}"
    return f"Updated {path.name}"


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _write_text(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
