"""Shared dataclasses used by the section compilation pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from .._constants import (
    SCHEMA_FILENAME,
    SCRIPT_FILENAME,
    STYLE_FILENAME,
    TEMPLATE_FILENAME,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


class SectionRole(enum.IntEnum):
    """Role of a file inside a multi-file section.

    The integer value is the slot the role occupies in compiled output, so
    sorting by role gives the style, template, script, schema order.
    """

    STYLE = 0
    TEMPLATE = 1
    SCRIPT = 2
    SCHEMA = 3

    @classmethod
    def from_filename(cls, filename: str) -> SectionRole | None:
        """Return the role for an exact filename match, else ``None``."""
        return _ROLE_FILENAMES.get(filename)


_ROLE_FILENAMES: dict[str, SectionRole] = {
    STYLE_FILENAME: SectionRole.STYLE,
    TEMPLATE_FILENAME: SectionRole.TEMPLATE,
    SCRIPT_FILENAME: SectionRole.SCRIPT,
    SCHEMA_FILENAME: SectionRole.SCHEMA,
}


@dc.dataclass(frozen=True, slots=True)
class SectionFile:
    """One role-tagged file read from a section folder."""

    role: SectionRole
    content: str


@dc.dataclass(frozen=True, slots=True)
class Section:
    """A section resolved from disk for a single build pass.

    Attributes
    ----------
    name : str
        Folder name (multi-file) or filename (single-file).
    source : Path
        Path of the folder or file the section was read from.
    files : tuple[SectionFile, ...]
        Role files for a multi-file section, in whatever order they were
        listed. Empty for single-file sections.
    raw : bytes or None
        Verbatim bytes of a single-file section; ``None`` for folders.
    """

    name: str
    source: Path
    files: tuple[SectionFile, ...] = ()
    raw: bytes | None = None

    @property
    def is_single_file(self) -> bool:
        return self.raw is not None


@dc.dataclass(frozen=True, slots=True)
class CompiledSection:
    """Compiled output ready to be written to ``destination``."""

    name: str
    destination: Path
    content: bytes


__all__ = ["CompiledSection", "Section", "SectionFile", "SectionRole"]
