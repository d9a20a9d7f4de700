"""Exceptions raised by simpledi.

Fatal errors are exceptions and abort the command.  Registration problems
are not exceptions: they are reported as ``RegistrationOutcome`` values by
``simpledi.registry`` and degrade to console warnings.
"""

from __future__ import annotations

from pathlib import Path


class SimpleDIError(Exception):
    """Base class for every error that ends a simpledi command."""


class InvalidArgument(SimpleDIError):
    """A required name or argument is missing or malformed."""


class DirectoryExists(SimpleDIError):
    """The directory of a new artifact is already present on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory {self.path} already exists")


class UnsupportedArtifactKind(SimpleDIError):
    """The template renderer was asked for an artifact family it does not know."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Unsupported artifact kind: {kind!r}")
