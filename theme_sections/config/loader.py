"""Load the section build layout from YAML into a :class:`BuildConfig`."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import (
    DEFAULT_DEBOUNCE,
    DEFAULT_DIST_ROOT,
    DEFAULT_SRC_ROOT,
    SECTIONS_DIRNAME,
)
from .models import BuildConfig, BuildConfigError


def load_build_config(path: Path) -> BuildConfig:
    """Load the YAML configuration describing source and destination folders.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML layout file (for example,
        ``config/sections.yaml``). Relative directories inside the file are
        resolved against the file's own directory.

    Returns
    -------
    BuildConfig
        Parsed layout with defaults applied for any omitted keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    BuildConfigError
        If a ``src``/``dist``/``watch`` block is not a mapping or the debounce
        value is not a non-negative number.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_build_config(Path("config/sections.yaml"))  # doctest: +SKIP
    >>> config.dist_sections_dir  # doctest: +SKIP
    PosixPath('config/dist/sections')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)

    base_dir = path.parent
    src_root, sections_dir = _resolve_tree(
        loaded.get("src"), "src", DEFAULT_SRC_ROOT, base_dir
    )
    dist_root, dist_sections_dir = _resolve_tree(
        loaded.get("dist"), "dist", DEFAULT_DIST_ROOT, base_dir
    )
    debounce = _parse_debounce(_block(loaded.get("watch"), "watch").get("debounce"))

    return BuildConfig(
        src_root=src_root,
        sections_dir=sections_dir,
        dist_root=dist_root,
        dist_sections_dir=dist_sections_dir,
        debounce=debounce,
    )


def _block(payload: object, key: str) -> typ.Mapping[str, typ.Any]:
    match payload:
        case None:
            return {}
        case dict():
            return payload
        case _:
            msg = f"'{key}' must be a mapping."
            raise BuildConfigError(msg)


def _resolve_tree(
    payload: object, key: str, default_root: str, base_dir: Path
) -> tuple[Path, Path]:
    """Return the ``(root, sections)`` pair for a ``src`` or ``dist`` block."""
    block = _block(payload, key)
    root = base_dir / Path(str(block.get("root") or default_root))
    sections = block.get("sections")
    if sections:
        return root, base_dir / Path(str(sections))
    return root, root / SECTIONS_DIRNAME


def _parse_debounce(value: object) -> float:
    if value is None:
        return DEFAULT_DEBOUNCE
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"'watch.debounce' must be a number of seconds, got {value!r}."
        raise BuildConfigError(msg)
    if value < 0:
        msg = f"'watch.debounce' must not be negative, got {value!r}."
        raise BuildConfigError(msg)
    return float(value)


__all__ = ["load_build_config"]
