"""Load and validate the section build layout.

This subpackage parses the project's ``sections.yaml`` file and produces the
frozen :class:`BuildConfig` dataclass that the builder and watcher consume.
The primary entry point is :func:`load_build_config`, which applies defaults
for omitted keys and resolves relative directories against the config file.

Examples
--------
>>> from pathlib import Path
>>> from theme_sections.config import BuildConfig, load_build_config
>>> BuildConfig().dist_sections_dir
PosixPath('dist/sections')
>>> load_build_config(Path("config/sections.yaml"))  # doctest: +SKIP
BuildConfig(src_root=PosixPath('config/src'), ...)
"""

from .loader import load_build_config
from .models import BuildConfig, BuildConfigError

__all__ = ["BuildConfig", "BuildConfigError", "load_build_config"]
