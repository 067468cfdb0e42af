"""Utilities for reading and concatenating theme section sources."""

from .loader import load_section
from .models import CompiledSection, Section, SectionFile, SectionRole
from .section_compiler import compile_section, concat_content, is_blank_asset

__all__ = [
    "CompiledSection",
    "Section",
    "SectionFile",
    "SectionRole",
    "compile_section",
    "concat_content",
    "is_blank_asset",
    "load_section",
]
