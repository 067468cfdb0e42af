"""Map source section paths to section names and compiled output paths.

Every helper here is pure: paths are split into segments and inspected by
position, never checked against the filesystem. That matters because the
same rules are applied to paths that have already been deleted.

A section lives one or two segments below the sections root::

    src/sections/footer.liquid          -> "footer.liquid" (single-file)
    src/sections/hero/template.liquid   -> "hero"          (multi-file)
    src/sections                        -> None
    src/sections/hero/assets/icon.svg   -> None

Examples
--------
>>> from pathlib import PurePosixPath
>>> section_name_from_path(PurePosixPath("src/sections/hero/style.liquid"))
'hero'
>>> section_name_from_path(PurePosixPath("src/sections/footer.liquid"))
'footer.liquid'
>>> section_name_from_path(PurePosixPath("src/sections")) is None
True
>>> output_name("hero")
'hero.liquid'
>>> output_name("footer.liquid")
'footer.liquid'
"""

from __future__ import annotations

import typing as typ
from pathlib import Path, PurePath

from ._constants import OUTPUT_SUFFIX, SECTIONS_ROOT_DEPTH

if typ.TYPE_CHECKING:
    from .config import BuildConfig


def section_name_from_path(
    path: PurePath, root_depth: int = SECTIONS_ROOT_DEPTH
) -> str | None:
    """Return the section addressed by ``path`` or ``None``.

    Parameters
    ----------
    path : PurePath
        Source path whose first ``root_depth`` segments name the sections
        root (``src/sections`` in the default layout).
    root_depth : int, optional
        Number of segments making up the sections root.

    Returns
    -------
    str or None
        The folder name for a file inside a section folder, the entry name
        for an entry directly under the root, and ``None`` for any other
        depth.
    """
    parts = path.parts
    match len(parts) - root_depth:
        case 2:
            return parts[-2]
        case 1:
            return parts[-1]
        case _:
            return None


def section_name_under(path: PurePath, sections_root: PurePath) -> str | None:
    """Return the section addressed by ``path`` relative to ``sections_root``.

    Paths outside ``sections_root`` are not sections.
    """
    try:
        relative = path.relative_to(sections_root)
    except ValueError:
        return None
    return section_name_from_path(relative, root_depth=0)


def output_name(name: str, suffix: str = OUTPUT_SUFFIX) -> str:
    """Return the compiled filename for section ``name``.

    The suffix is appended only when the name does not already carry it, so
    writes and removals agree on a single ``<section>.liquid`` file.
    """
    if name.endswith(suffix):
        return name
    return f"{name}{suffix}"


def destination_for(name: str, config: BuildConfig) -> Path:
    """Return the compiled output path for section ``name``."""
    return config.dist_sections_dir / output_name(name, config.output_suffix)


def to_destination_path(source_path: PurePath, config: BuildConfig) -> Path | None:
    """Map a removed source path to the compiled file it produced.

    Removed files are never re-read, so the mapping goes through the section
    name alone. Returns ``None`` when ``source_path`` is not at section depth.
    """
    name = section_name_under(source_path, config.sections_dir)
    if name is None:
        return None
    return destination_for(name, config)


__all__ = [
    "destination_for",
    "output_name",
    "section_name_from_path",
    "section_name_under",
    "to_destination_path",
]
