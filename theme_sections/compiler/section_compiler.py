"""Concatenate a section's role files into one compiled output.

Role files are placed into a fixed four-slot buffer (style, template, script,
schema) so output order never depends on directory listing order. Style and
script files that hold nothing but whitespace, comments, or an empty
``<style>`` wrapper are dropped; schema always emits its wrapper tags.

Example
-------
>>> from pathlib import Path
>>> from theme_sections.compiler.models import Section, SectionFile, SectionRole
>>> section = Section(
...     name="banner",
...     source=Path("src/sections/banner"),
...     files=(SectionFile(SectionRole.SCHEMA, "{}\\n"),),
... )
>>> concat_content(section.files)
'{% schema %}\\n{}\\n{% endschema %}\\n'
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

from .._constants import SCHEMA_TEMPLATE, SCRIPT_TEMPLATE
from ..paths import destination_for
from .models import CompiledSection, Section, SectionFile, SectionRole

if typ.TYPE_CHECKING:
    from ..config import BuildConfig

# Leading whitespace, an optional <style> tag, any run of /* */ comments and an
# optional closing tag. Only the first match is stripped.
COMMENT_WRAPPER_PATTERN = re.compile(
    r"\s*(?:<style>)?\s*(?:/\*.*?\*/\s*)*(?:</style>)?", re.DOTALL
)


def is_blank_asset(text: str) -> bool:
    """Return ``True`` when ``text`` has no content beyond comments/wrappers."""
    remainder = COMMENT_WRAPPER_PATTERN.sub("", text, count=1)
    return not remainder.strip()


def _render_slot(section_file: SectionFile) -> str | None:
    content = section_file.content
    match section_file.role:
        case SectionRole.STYLE:
            return None if is_blank_asset(content) else content
        case SectionRole.TEMPLATE:
            return content
        case SectionRole.SCRIPT:
            if is_blank_asset(content):
                return None
            return SCRIPT_TEMPLATE.format(content=content)
        case SectionRole.SCHEMA:
            return SCHEMA_TEMPLATE.format(content=content)


def concat_content(files: cabc.Iterable[SectionFile]) -> str:
    """Join role files in slot order, skipping empty slots.

    Parameters
    ----------
    files : Iterable[SectionFile]
        Role files in any order. When a role appears twice the last one wins.

    Returns
    -------
    str
        Non-empty slots joined with a single newline.
    """
    slots: list[str | None] = [None] * len(SectionRole)
    for section_file in files:
        slots[section_file.role] = _render_slot(section_file)
    return "\n".join(slot for slot in slots if slot)


def compile_section(section: Section, config: BuildConfig) -> CompiledSection:
    """Compile ``section`` into the file written under the dist sections dir.

    Single-file sections are copied byte for byte. Folder sections are
    concatenated with :func:`concat_content` and encoded as UTF-8.
    """
    if section.raw is not None:
        content = section.raw
    else:
        content = concat_content(section.files).encode("utf-8")
    return CompiledSection(
        name=section.name,
        destination=destination_for(section.name, config),
        content=content,
    )


__all__ = [
    "COMMENT_WRAPPER_PATTERN",
    "compile_section",
    "concat_content",
    "is_blank_asset",
]
