"""Unit tests for the section path mapping helpers.

These cover the pure, segment-count based rules that decide which section a
source path belongs to and where its compiled output lives. None of the
helpers touch the filesystem, so the same answers hold for deleted paths.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from theme_sections.config import BuildConfig
from theme_sections.paths import (
    output_name,
    section_name_from_path,
    section_name_under,
    to_destination_path,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("src/sections/hero/style.liquid", "hero"),
        ("src/sections/footer.liquid", "footer.liquid"),
        ("src/sections/hero", "hero"),
        ("src/sections", None),
        ("src/sections/hero/assets/icon.svg", None),
        ("src", None),
    ],
)
def test_section_name_from_path_uses_segment_count(
    path: str, expected: str | None
) -> None:
    """Four segments name the folder, three the entry, anything else is None."""
    actual = section_name_from_path(PurePosixPath(path))
    assert actual == expected, f"expected {expected!r} for {path!r}, got {actual!r}"


def test_section_name_from_path_respects_root_depth() -> None:
    """A custom root depth shifts which segments count as section entries."""
    path = PurePosixPath("theme/src/sections/hero/template.liquid")
    assert section_name_from_path(path, root_depth=3) == "hero", (
        "expected folder name when the root is three segments deep"
    )
    assert section_name_from_path(path) is None, (
        "expected None when the default two-segment root does not fit"
    )


def test_section_name_under_rejects_paths_outside_root(tmp_path: Path) -> None:
    """Paths that are not below the sections root are not sections."""
    root = tmp_path / "src" / "sections"
    assert section_name_under(root / "hero" / "schema.json", root) == "hero"
    assert section_name_under(tmp_path / "src" / "layout" / "theme.liquid", root) is None, (
        "expected None for a sibling directory of the sections root"
    )


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("hero", "hero.liquid"),
        ("footer.liquid", "footer.liquid"),
        ("notes.txt", "notes.txt.liquid"),
    ],
)
def test_output_name_carries_exactly_one_suffix(name: str, expected: str) -> None:
    """Output names never gain a second ``.liquid`` suffix."""
    assert output_name(name) == expected, (
        f"expected {expected!r} for section {name!r}, got {output_name(name)!r}"
    )


def test_to_destination_path_maps_removed_folder(tmp_path: Path) -> None:
    """A removed section folder maps to its flattened output."""
    config = BuildConfig.from_roots(tmp_path / "src", tmp_path / "dist")
    removed = tmp_path / "src" / "sections" / "hero"
    assert to_destination_path(removed, config) == (
        tmp_path / "dist" / "sections" / "hero.liquid"
    ), "expected a single .liquid suffix for the removed folder"


def test_to_destination_path_maps_removed_single_file(tmp_path: Path) -> None:
    """A removed single-file section keeps its own name in dist."""
    config = BuildConfig.from_roots(tmp_path / "src", tmp_path / "dist")
    removed = tmp_path / "src" / "sections" / "footer.liquid"
    actual = to_destination_path(removed, config)
    assert actual == tmp_path / "dist" / "sections" / "footer.liquid", (
        f"expected footer.liquid without a doubled suffix, got {actual}"
    )


def test_to_destination_path_ignores_non_section_depth(tmp_path: Path) -> None:
    """The sections root itself has no compiled output."""
    config = BuildConfig.from_roots(tmp_path / "src", tmp_path / "dist")
    assert to_destination_path(config.sections_dir, config) is None
