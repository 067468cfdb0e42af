"""Read a section's sources from disk into a :class:`Section`."""

from __future__ import annotations

import typing as typ

from ..errors import SectionReadError
from .models import Section, SectionFile, SectionRole

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..config import BuildConfig


def load_section(name: str, config: BuildConfig) -> Section | None:
    """Resolve section ``name`` against the live sections directory.

    Parameters
    ----------
    name : str
        Entry name directly under ``config.sections_dir``.
    config : BuildConfig
        Layout providing the sections directory.

    Returns
    -------
    Section or None
        The loaded section, or ``None`` when nothing named ``name`` exists any
        more. Removal of stale outputs is handled elsewhere.

    Raises
    ------
    SectionReadError
        If a file disappears or cannot be read after the section was found.
    """
    source = config.sections_dir / name
    if source.is_dir():
        return Section(name=name, source=source, files=_read_role_files(name, source))
    if not source.exists():
        return None
    return Section(name=name, source=source, raw=_read_bytes(name, source))


def _read_role_files(name: str, folder: Path) -> tuple[SectionFile, ...]:
    try:
        entries = sorted(folder.iterdir())
    except OSError as exc:
        raise SectionReadError(name, folder, exc.strerror or str(exc)) from exc

    files: list[SectionFile] = []
    for entry in entries:
        role = SectionRole.from_filename(entry.name)
        if role is None:
            continue
        content = _read_bytes(name, entry).decode("utf-8", errors="replace")
        files.append(SectionFile(role=role, content=content))
    return tuple(files)


def _read_bytes(name: str, path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SectionReadError(name, path, exc.strerror or str(exc)) from exc


__all__ = ["load_section"]
