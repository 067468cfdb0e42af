"""Exceptions raised while compiling and writing theme sections."""

from __future__ import annotations

from pathlib import Path


class SectionError(RuntimeError):
    """Base class for section build failures."""


class SectionReadError(SectionError):
    """Raised when a section's source files vanish or cannot be read.

    The error is scoped to one section; the builder records it and moves on
    to sibling sections.
    """

    def __init__(self, name: str, path: Path, reason: str) -> None:
        self.name = name
        self.path = path
        self.reason = reason
        super().__init__(f"Section '{name}': cannot read '{path}': {reason}")


class SectionWriteError(SectionError):
    """Raised when a compiled section cannot be written to its destination.

    Scoped to one section like :class:`SectionReadError`; the previous output,
    if any, is left untouched.
    """

    def __init__(self, name: str, path: Path, reason: str) -> None:
        self.name = name
        self.path = path
        self.reason = reason
        super().__init__(f"Section '{name}': cannot write '{path}': {reason}")


class OutputDirectoryError(SectionError):
    """Raised when an output is written before its parent directory exists."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Destination directory '{path.parent}' is missing; "
            f"cannot write '{path.name}'."
        )


__all__ = [
    "OutputDirectoryError",
    "SectionError",
    "SectionReadError",
    "SectionWriteError",
]
