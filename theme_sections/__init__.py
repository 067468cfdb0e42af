"""Build-time concatenation of theme section sources.

This package flattens each folder under ``src/sections`` (``style.liquid``,
``template.liquid``, ``javascript.js``, ``schema.json``) into one
``dist/sections/<name>.liquid`` file and keeps those outputs current while
the sources are edited.

Exports
-------
- ``app``: Cyclopts application exposing the ``build`` and ``watch`` commands.
- ``main``: Convenience function that configures logging and runs the app.

Examples
--------
>>> from theme_sections import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
