"""Cyclopts CLI entrypoint for compiling theme sections.

The ``sections`` console script defined here runs a one-off build of every
section (``sections build``) or keeps ``dist/sections`` in sync with the
source folders while they are edited (``sections watch``). Both commands read
the layout from ``config/sections.yaml`` when it exists and fall back to the
``src``/``dist`` defaults otherwise.

Examples
--------
Build all sections with the default layout:

>>> from theme_sections.cli import main
>>> main()  # doctest: +SKIP

Watch a custom source tree, building once before watching:

>>> from theme_sections.cli import app
>>> app.run(["watch", "--src", "theme/src", "--build-first"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import BuildReport, SectionBuilder
from .config import BuildConfig, load_build_config
from .watch import SectionWatcher

DEFAULT_CONFIG = Path("config/sections.yaml")
LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"

app = App(name="sections", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config(
    config: Path | None, src: Path | None, dist: Path | None
) -> BuildConfig:
    """Load the layout file (if any) and apply root overrides."""
    if config is not None:
        base = load_build_config(config)
    elif DEFAULT_CONFIG.exists():
        base = load_build_config(DEFAULT_CONFIG)
    else:
        base = BuildConfig()
    if src is None and dist is None:
        return base
    return BuildConfig.from_roots(
        src or base.src_root, dist or base.dist_root, debounce=base.debounce
    )


def print_report(report: BuildReport) -> None:
    """Print one line per written, removed, or failed section."""
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    for path in report.removed:
        print(f"removed {_format_path(path)}")
    for name, reason in sorted(report.failed.items()):
        print(f"failed {name}: {reason}")


ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Path to the layout config", env_var="INPUT_CONFIG")
]
SrcOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the source root (sections live in <src>/sections)"),
]
DistOption = typ.Annotated[
    Path | None,
    Parameter(help="Override the output root (sections land in <dist>/sections)"),
]


@app.command(help="Concatenate every section into a single file under dist.")
def build(
    *,
    config: ConfigOption = None,
    src: SrcOption = None,
    dist: DistOption = None,
) -> None:
    """Compile every section once.

    Parameters
    ----------
    config : Path or None, optional
        Layout file; defaults to ``config/sections.yaml`` when present.
    src : Path or None, optional
        Source root override.
    dist : Path or None, optional
        Output root override.

    Raises
    ------
    SystemExit
        With status 1 when any section failed to build.
    """
    builder = SectionBuilder(_resolve_config(config, src, dist))
    report = builder.full_build()
    print_report(report)
    if not report.ok:
        raise SystemExit(1)


@app.command(help="Rebuild or remove compiled sections as sources change.")
def watch(
    *,
    config: ConfigOption = None,
    src: SrcOption = None,
    dist: DistOption = None,
    build_first: typ.Annotated[
        bool, Parameter(help="Run a full build before watching")
    ] = False,
) -> None:
    """Watch the sections directory until interrupted."""
    layout = _resolve_config(config, src, dist)
    builder = SectionBuilder(layout)
    if build_first:
        print_report(builder.full_build())
    SectionWatcher(layout, builder=builder, on_report=print_report).run()


def main() -> None:
    """Configure logging and invoke the Cyclopts application.

    The log level is read from ``INPUT_LOG_LEVEL`` and defaults to ``INFO``.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    level = os.environ.get("INPUT_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
