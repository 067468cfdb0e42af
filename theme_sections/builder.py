"""Build orchestration for compiled theme sections.

This module turns the sections directory into flattened files under the
destination sections directory. :class:`SectionBuilder` exposes three entry
points that the CLI and the watcher share:

- ``full_build`` compiles every entry under the sections directory;
- ``incremental_build`` recompiles only the sections implicated by a list of
  changed source paths;
- ``remove_outputs`` deletes the compiled files of removed sections.

Each call returns a :class:`BuildReport`. A section whose sources vanish
mid-read, or whose output cannot be written, is recorded as failed without
touching its previous output, and the rest of the batch carries on. A missing destination directory is a broken
precondition and propagates immediately as :class:`OutputDirectoryError`.

Example
-------
>>> from pathlib import Path
>>> from theme_sections.builder import SectionBuilder
>>> from theme_sections.config import BuildConfig
>>> report = SectionBuilder(BuildConfig()).full_build()  # doctest: +SKIP
>>> report.written  # doctest: +SKIP
[PosixPath('dist/sections/hero.liquid')]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import os
import tempfile
import typing as typ
from pathlib import Path

from .compiler import CompiledSection, compile_section, load_section
from .errors import (
    OutputDirectoryError,
    SectionReadError,
    SectionWriteError,
)
from .paths import section_name_under, to_destination_path

if typ.TYPE_CHECKING:
    from .config import BuildConfig

logger = logging.getLogger(__name__)

OUTPUT_FILE_MODE = 0o644


@dc.dataclass(slots=True)
class BuildReport:
    """Outcome of one builder call."""

    written: list[Path] = dc.field(default_factory=list)
    removed: list[Path] = dc.field(default_factory=list)
    failed: dict[str, str] = dc.field(default_factory=dict)
    skipped: list[str] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if needed; an existing directory is fine."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_output(compiled: CompiledSection) -> Path:
    """Write ``compiled`` over any previous output, returning its path.

    The content goes to a temporary file beside the destination which is then
    renamed into place, so readers only ever see a complete output.

    Raises
    ------
    OutputDirectoryError
        If the destination directory has not been created.
    SectionWriteError
        If the output cannot be written or replaced for any other reason.
    """
    destination = compiled.destination
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
        )
    except FileNotFoundError as exc:
        raise OutputDirectoryError(destination) from exc
    except OSError as exc:
        raise SectionWriteError(
            compiled.name, destination, exc.strerror or str(exc)
        ) from exc

    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(compiled.content)
        os.chmod(tmp, OUTPUT_FILE_MODE)
        os.replace(tmp, destination)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise SectionWriteError(
            compiled.name, destination, exc.strerror or str(exc)
        ) from exc
    return destination


class SectionBuilder:
    """Compile, write, and remove section outputs for one layout."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.sections_root = config.sections_dir.absolute()
        self._removal_layout = dc.replace(config, sections_dir=self.sections_root)

    def full_build(self) -> BuildReport:
        """Compile every entry directly under the sections directory.

        A missing sections directory means there is nothing to build and
        returns an empty report without creating any destination folders.
        """
        report = BuildReport()
        if not self.config.sections_dir.is_dir():
            logger.info("No sections directory at %s; skipping", self.config.sections_dir)
            return report
        names = sorted(entry.name for entry in self.config.sections_dir.iterdir())
        self._build_sections(names, report)
        return report

    def incremental_build(self, changed_paths: cabc.Iterable[Path]) -> BuildReport:
        """Recompile the distinct sections implicated by ``changed_paths``.

        Paths that do not sit at section depth are ignored. Sections that no
        longer exist on disk are reported as skipped; their outputs are left
        for :meth:`remove_outputs`.
        """
        report = BuildReport()
        names = self._implicated_sections(changed_paths)
        if names:
            self._build_sections(names, report)
        return report

    def remove_outputs(self, removed_paths: cabc.Iterable[Path]) -> BuildReport:
        """Delete the compiled files produced by ``removed_paths``.

        Absent outputs count as already removed. An output that cannot be
        deleted is recorded as failed under its filename.
        """
        report = BuildReport()
        targets: list[Path] = []
        for path in removed_paths:
            target = to_destination_path(Path(path).absolute(), self._removal_layout)
            if target is not None and target not in targets:
                targets.append(target)
        for target in targets:
            try:
                target.unlink(missing_ok=True)
            except OSError as exc:
                logger.error("Failed to remove %s", target, exc_info=exc)
                report.failed[target.name] = exc.strerror or str(exc)
                continue
            logger.debug("Removed %s", target)
            report.removed.append(target)
        return report

    def _implicated_sections(self, paths: cabc.Iterable[Path]) -> list[str]:
        names: list[str] = []
        for path in paths:
            name = section_name_under(Path(path).absolute(), self.sections_root)
            if name is not None and name not in names:
                names.append(name)
        return names

    def _build_sections(self, names: cabc.Iterable[str], report: BuildReport) -> None:
        ensure_directory(self.config.dist_root)
        ensure_directory(self.config.dist_sections_dir)
        for name in names:
            try:
                section = load_section(name, self.config)
                if section is None:
                    report.skipped.append(name)
                    continue
                written = write_output(compile_section(section, self.config))
            except (SectionReadError, SectionWriteError) as exc:
                logger.error("Failed to build section %s", name, exc_info=exc)
                report.failed[name] = exc.reason
                continue
            logger.debug("Wrote %s", written)
            report.written.append(written)


__all__ = ["BuildReport", "SectionBuilder", "ensure_directory", "write_output"]
