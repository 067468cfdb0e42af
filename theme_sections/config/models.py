"""Typed dataclasses describing the theme source and destination layout."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import (
    DEFAULT_DEBOUNCE,
    DEFAULT_DIST_ROOT,
    DEFAULT_SRC_ROOT,
    OUTPUT_SUFFIX,
    SECTIONS_DIRNAME,
)


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class BuildConfig:
    """Source and destination directories used by a section build.

    Attributes
    ----------
    src_root : Path
        Root of the theme sources.
    sections_dir : Path
        Directory holding one entry per section, either a file or a folder of
        role files.
    dist_root : Path
        Root of the compiled theme.
    dist_sections_dir : Path
        Directory receiving one compiled file per section.
    debounce : float
        Seconds of filesystem quiet the watcher waits for before dispatching
        a batch.
    output_suffix : str
        Suffix carried by every compiled section file.
    """

    src_root: Path = Path(DEFAULT_SRC_ROOT)
    sections_dir: Path = Path(DEFAULT_SRC_ROOT) / SECTIONS_DIRNAME
    dist_root: Path = Path(DEFAULT_DIST_ROOT)
    dist_sections_dir: Path = Path(DEFAULT_DIST_ROOT) / SECTIONS_DIRNAME
    debounce: float = DEFAULT_DEBOUNCE
    output_suffix: str = OUTPUT_SUFFIX

    @classmethod
    def from_roots(
        cls,
        src_root: Path,
        dist_root: Path,
        *,
        debounce: float = DEFAULT_DEBOUNCE,
    ) -> BuildConfig:
        """Build a config whose section directories sit under the two roots."""
        return cls(
            src_root=src_root,
            sections_dir=src_root / SECTIONS_DIRNAME,
            dist_root=dist_root,
            dist_sections_dir=dist_root / SECTIONS_DIRNAME,
            debounce=debounce,
        )


__all__ = ["BuildConfig", "BuildConfigError"]
