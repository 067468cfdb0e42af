"""Unit tests for the section build orchestrator.

The builder is exercised against real temporary directories: full builds,
incremental rebuilds keyed by changed paths, idempotent removal, and the
per-section isolation of read failures.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

import theme_sections.builder as builder_module
from theme_sections.builder import SectionBuilder, ensure_directory, write_output
from theme_sections.compiler import CompiledSection
from theme_sections.config import BuildConfig
from theme_sections.errors import (
    OutputDirectoryError,
    SectionReadError,
    SectionWriteError,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture
def config(tmp_path: Path) -> BuildConfig:
    layout = BuildConfig.from_roots(tmp_path / "src", tmp_path / "dist")
    layout.sections_dir.mkdir(parents=True)
    return layout


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _hero(config: BuildConfig) -> Path:
    folder = config.sections_dir / "hero"
    _write(folder / "style.liquid", "/* c */\n<style>.a{color:red}</style>")
    _write(folder / "template.liquid", "<div>{{ title }}</div>")
    return folder


def test_full_build_writes_every_section(config: BuildConfig) -> None:
    _hero(config)
    _write(config.sections_dir / "banner" / "schema.json", "{}\n")
    _write(config.sections_dir / "footer.liquid", "<footer></footer>\n")

    report = SectionBuilder(config).full_build()

    dist = config.dist_sections_dir
    assert report.ok, f"expected no failures, got {report.failed}"
    assert sorted(path.name for path in report.written) == [
        "banner.liquid",
        "footer.liquid",
        "hero.liquid",
    ]
    assert (dist / "hero.liquid").read_text(encoding="utf-8") == (
        "/* c */\n<style>.a{color:red}</style>\n<div>{{ title }}</div>"
    )
    assert (dist / "banner.liquid").read_text(encoding="utf-8") == (
        "{% schema %}\n{}\n{% endschema %}\n"
    )
    assert (dist / "footer.liquid").read_text(encoding="utf-8") == "<footer></footer>\n"


def test_full_build_is_idempotent(config: BuildConfig) -> None:
    """Re-running a build with unchanged sources produces identical bytes."""
    _hero(config)
    builder = SectionBuilder(config)
    builder.full_build()
    first = (config.dist_sections_dir / "hero.liquid").read_bytes()
    builder.full_build()
    second = (config.dist_sections_dir / "hero.liquid").read_bytes()
    assert first == second, "expected byte-identical output across builds"


def test_full_build_skips_missing_sections_dir(tmp_path: Path) -> None:
    """No sections directory means nothing to do and no dist folders."""
    config = BuildConfig.from_roots(tmp_path / "src", tmp_path / "dist")
    report = SectionBuilder(config).full_build()
    assert report.written == [] and report.ok
    assert not config.dist_root.exists(), "expected dist to stay uncreated"


def test_full_build_overwrites_previous_output(config: BuildConfig) -> None:
    _hero(config)
    stale = _write(config.dist_sections_dir / "hero.liquid", "stale")
    SectionBuilder(config).full_build()
    assert stale.read_text(encoding="utf-8") != "stale"


def test_incremental_build_rebuilds_implicated_sections_once(
    config: BuildConfig, mocker: MockerFixture
) -> None:
    folder = _hero(config)
    _write(config.sections_dir / "footer.liquid", "<footer></footer>")
    builder = SectionBuilder(config)
    compile_spy = mocker.spy(builder_module, "compile_section")

    report = builder.incremental_build(
        [
            folder / "style.liquid",
            folder / "template.liquid",
            config.sections_dir,
            folder / "assets" / "icon.svg",
        ]
    )

    assert [path.name for path in report.written] == ["hero.liquid"], (
        f"expected only hero to rebuild, got {report.written}"
    )
    assert compile_spy.call_count == 1, "expected a single compile for hero"
    assert not (config.dist_sections_dir / "footer.liquid").exists()


def test_incremental_build_skips_vanished_sections(config: BuildConfig) -> None:
    report = SectionBuilder(config).incremental_build(
        [config.sections_dir / "ghost" / "template.liquid"]
    )
    assert report.written == []
    assert report.skipped == ["ghost"]


def test_incremental_build_accepts_relative_paths(
    config: BuildConfig, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Relative event paths resolve against the working directory."""
    _hero(config)
    monkeypatch.chdir(tmp_path)
    relative = BuildConfig.from_roots(
        config.src_root.relative_to(tmp_path), config.dist_root.relative_to(tmp_path)
    )
    report = SectionBuilder(relative).incremental_build(
        [config.sections_dir / "hero" / "style.liquid"]
    )
    assert [path.name for path in report.written] == ["hero.liquid"]


def test_read_failure_is_isolated_per_section(
    config: BuildConfig, mocker: MockerFixture, caplog: pytest.LogCaptureFixture
) -> None:
    """One failing section is reported while its siblings still build."""
    _hero(config)
    _write(config.sections_dir / "banner" / "schema.json", "{}\n")
    real_load = builder_module.load_section

    def flaky_load(name: str, layout: BuildConfig):
        if name == "hero":
            raise SectionReadError(name, layout.sections_dir / name, "vanished")
        return real_load(name, layout)

    mocker.patch("theme_sections.builder.load_section", side_effect=flaky_load)
    with caplog.at_level(logging.ERROR, logger="theme_sections.builder"):
        report = SectionBuilder(config).full_build()

    assert report.failed == {"hero": "vanished"}
    assert [path.name for path in report.written] == ["banner.liquid"]
    assert not (config.dist_sections_dir / "hero.liquid").exists(), (
        "expected no partial output for the failed section"
    )
    assert "Failed to build section hero" in caplog.text


def test_remove_outputs_is_idempotent(config: BuildConfig) -> None:
    target = _write(config.dist_sections_dir / "hero.liquid", "old")
    removed = config.sections_dir / "hero"
    builder = SectionBuilder(config)

    first = builder.remove_outputs([removed, removed / "style.liquid"])
    second = builder.remove_outputs([removed])

    assert not target.exists()
    assert first.removed == [target], "expected one delete for both paths"
    assert second.removed == [target], "expected absent outputs to count as removed"


def test_remove_outputs_never_doubles_suffix(config: BuildConfig) -> None:
    target = _write(config.dist_sections_dir / "footer.liquid", "old")
    SectionBuilder(config).remove_outputs([config.sections_dir / "footer.liquid"])
    assert not target.exists(), "expected footer.liquid itself to be deleted"


def test_remove_outputs_ignores_non_section_paths(config: BuildConfig) -> None:
    report = SectionBuilder(config).remove_outputs(
        [config.src_root / "layout" / "theme.liquid", config.sections_dir]
    )
    assert report.removed == []


def test_write_output_requires_destination_dir(tmp_path: Path) -> None:
    compiled = CompiledSection(
        name="hero", destination=tmp_path / "missing" / "hero.liquid", content=b"x"
    )
    with pytest.raises(OutputDirectoryError):
        write_output(compiled)


def test_ensure_directory_tolerates_existing(tmp_path: Path) -> None:
    target = tmp_path / "dist" / "sections"
    assert ensure_directory(target) == target
    assert ensure_directory(target).is_dir()


def test_blocked_output_is_isolated_per_section(config: BuildConfig) -> None:
    """A section whose output cannot be written does not stop its siblings."""
    for name in ("aaa", "zzz"):
        _write(config.sections_dir / name / "template.liquid", f"<p>{name}</p>")
    (config.dist_sections_dir / "aaa.liquid").mkdir(parents=True)

    report = SectionBuilder(config).full_build()

    assert list(report.failed) == ["aaa"], f"expected aaa to fail, got {report.failed}"
    assert [path.name for path in report.written] == ["zzz.liquid"]
    assert (config.dist_sections_dir / "zzz.liquid").read_text(encoding="utf-8") == (
        "<p>zzz</p>"
    )
    assert (config.dist_sections_dir / "aaa.liquid").is_dir(), (
        "expected the blocking directory to be left alone"
    )


def test_write_output_leaves_no_temporary_files(tmp_path: Path) -> None:
    compiled = CompiledSection(
        name="hero", destination=tmp_path / "hero.liquid", content=b"<div></div>"
    )
    write_output(compiled)
    assert [path.name for path in tmp_path.iterdir()] == ["hero.liquid"]
    assert compiled.destination.read_bytes() == b"<div></div>"


def test_failed_write_keeps_previous_output(
    tmp_path: Path, mocker: MockerFixture
) -> None:
    """An interrupted write never replaces the existing output."""
    destination = tmp_path / "hero.liquid"
    destination.write_bytes(b"previous")
    mocker.patch(
        "theme_sections.builder.os.replace", side_effect=OSError(28, "No space left")
    )
    compiled = CompiledSection(name="hero", destination=destination, content=b"new")

    with pytest.raises(SectionWriteError) as excinfo:
        write_output(compiled)

    assert excinfo.value.name == "hero"
    assert destination.read_bytes() == b"previous"
    assert [path.name for path in tmp_path.iterdir()] == ["hero.liquid"], (
        "expected the temporary file to be cleaned up"
    )


def test_remove_outputs_records_undeletable_target(config: BuildConfig) -> None:
    """A target that cannot be unlinked is reported while others are removed."""
    (config.dist_sections_dir / "hero.liquid").mkdir(parents=True)
    banner = _write(config.dist_sections_dir / "banner.liquid", "old")

    report = SectionBuilder(config).remove_outputs(
        [config.sections_dir / "hero", config.sections_dir / "banner"]
    )

    assert list(report.failed) == ["hero.liquid"]
    assert report.removed == [banner]
    assert not banner.exists()
