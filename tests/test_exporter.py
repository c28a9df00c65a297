# -*- coding: utf-8 -*-
"""
Tests for the export driver
"""

import subprocess
from pathlib import Path

import pytest

from mobile_asset_export.core import log
from mobile_asset_export.export.catalog import CATALOG, IOS_PRESETS, Platform, find_preset
from mobile_asset_export.export.document import Artboard, open_document
from mobile_asset_export.export.errors import ExportFilesystemError, RenderError
from mobile_asset_export.export.exporter import run_export
from mobile_asset_export.export.rasterizer import EXPORT_OPTIONS, InkscapeRasterizer
from mobile_asset_export.export.selection import SelectionSet

from tests.conftest import FAKE_PNG, FakeRasterizer


def _files(root: Path):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


def _dirs(root: Path):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir())


class TestRunExport:
    def test_empty_selection_writes_nothing(self, two_page_svg, out_dir, fake_rasterizer):
        report = run_export(SelectionSet(), open_document(two_page_svg), out_dir, fake_rasterizer)
        assert report.files == []
        assert report.directories_created == []
        assert list(out_dir.iterdir()) == []
        assert fake_rasterizer.calls == []

    def test_all_presets_two_artboards(self, two_page_svg, out_dir, fake_rasterizer):
        """Test 8 presets x 2 artboards -> 16 files in 6 directories"""
        report = run_export(
            SelectionSet.of(CATALOG), open_document(two_page_svg), out_dir, fake_rasterizer
        )
        assert len(report.files) == 16
        assert len(report.directories_created) == 6
        assert _dirs(out_dir) == [
            "drawable-hdpi",
            "drawable-mdpi",
            "drawable-xhdpi",
            "drawable-xxhdpi",
            "drawable-xxxhdpi",
            "iOS",
        ]
        assert _files(out_dir / "iOS") == [
            "App Icon!.png",
            "App Icon!@2x.png",
            "App Icon!@3x.png",
            "ic-back.png",
            "ic-back@2x.png",
            "ic-back@3x.png",
        ]
        assert _files(out_dir / "drawable-mdpi") == ["app_icon_.png", "ic_back.png"]
        assert (out_dir / "drawable-xhdpi" / "app_icon_.png").read_bytes() == FAKE_PNG

    def test_ios_directory_created_once(self, two_page_svg, out_dir, fake_rasterizer, monkeypatch):
        created = []
        original_mkdir = Path.mkdir

        def counting_mkdir(self, *args, **kwargs):
            created.append(self.name)
            return original_mkdir(self, *args, **kwargs)

        monkeypatch.setattr(Path, "mkdir", counting_mkdir)
        run_export(SelectionSet.of(CATALOG), open_document(two_page_svg), out_dir, fake_rasterizer)
        assert created.count("iOS") == 1
        assert len(created) == 6

    def test_existing_directory_is_reused(self, two_page_svg, out_dir, fake_rasterizer):
        (out_dir / "iOS").mkdir()
        report = run_export(
            SelectionSet.of(IOS_PRESETS), open_document(two_page_svg), out_dir, fake_rasterizer
        )
        assert report.directories_created == []
        assert len(report.files) == 6

    def test_scale_factor_and_options_passed(self, two_page_svg, out_dir, fake_rasterizer):
        selection = SelectionSet.of([find_preset(Platform.ANDROID, "xxxhdpi")])
        run_export(selection, open_document(two_page_svg), out_dir, fake_rasterizer)
        assert fake_rasterizer.calls == [
            ("ic-back", 200, EXPORT_OPTIONS),
            ("App Icon!", 200, EXPORT_OPTIONS),
        ]

    def test_artboards_visited_highest_index_first(self, two_page_svg, out_dir, fake_rasterizer):
        doc = open_document(two_page_svg)
        selection = SelectionSet.of([find_preset(Platform.IOS, "2x"), find_preset(Platform.ANDROID, "mdpi")])
        report = run_export(selection, doc, out_dir, fake_rasterizer)
        assert [p.name for p in report.files] == [
            "ic-back@2x.png",
            "App Icon!@2x.png",
            "ic_back.png",
            "app_icon_.png",
        ]
        # The last artboard exported stays active
        assert doc.active_index == 0

    def test_every_artboard_exported_regardless_of_active(self, two_page_svg, out_dir, fake_rasterizer):
        doc = open_document(two_page_svg)
        doc.set_active_artboard(1)
        report = run_export(
            SelectionSet.of([find_preset(Platform.ANDROID, "hdpi")]), doc, out_dir, fake_rasterizer
        )
        assert len(report.files) == 2

    def test_artboards_are_activated_before_render(self, two_page_svg, out_dir, monkeypatch):
        activated = []
        original = Artboard.activate

        def recording_activate(self):
            activated.append(self.name)
            original(self)

        monkeypatch.setattr(Artboard, "activate", recording_activate)
        rasterizer = FakeRasterizer()
        run_export(
            SelectionSet.of([find_preset(Platform.ANDROID, "xhdpi")]),
            open_document(two_page_svg),
            out_dir,
            rasterizer,
        )
        assert activated == ["ic-back", "App Icon!"]
        assert [call[0] for call in rasterizer.calls] == activated

    def test_plain_document(self, plain_svg, out_dir, fake_rasterizer):
        report = run_export(
            SelectionSet.of([find_preset(Platform.IOS, "3x")]),
            open_document(plain_svg),
            out_dir,
            fake_rasterizer,
        )
        assert report.files == [out_dir / "iOS" / "logo@3x.png"]

    def test_base_folder_created_when_missing(self, two_page_svg, tmp_path, fake_rasterizer):
        base = tmp_path / "new" / "assets"
        run_export(
            SelectionSet.of([find_preset(Platform.ANDROID, "mdpi")]),
            open_document(two_page_svg),
            base,
            fake_rasterizer,
        )
        assert (base / "drawable-mdpi" / "ic_back.png").is_file()


class TestDryRun:
    def test_no_side_effects(self, two_page_svg, out_dir, fake_rasterizer):
        report = run_export(
            SelectionSet.of(CATALOG), open_document(two_page_svg), out_dir, fake_rasterizer, dry_run=True
        )
        assert report.dry_run is True
        assert len(report.targets) == 16
        assert report.files == []
        assert fake_rasterizer.calls == []
        assert list(out_dir.iterdir()) == []


class TestFailures:
    def test_render_error_aborts_and_keeps_written_files(self, two_page_svg, out_dir):
        rasterizer = FakeRasterizer(fail_on="App Icon!", error=RenderError(message="corrupt"))
        selection = SelectionSet.of([find_preset(Platform.ANDROID, "mdpi"), find_preset(Platform.IOS, "2x")])
        with pytest.raises(RenderError) as exc_info:
            run_export(selection, open_document(two_page_svg), out_dir, rasterizer)
        err = exc_info.value
        assert err.platform == "android"
        assert err.preset == "mdpi"
        assert err.artboard == "App Icon!"
        # ic-back was exported first and is left in place; iOS never started
        assert _files(out_dir) == ["drawable-mdpi/ic_back.png"]

    def test_unexpected_rasterizer_exception_becomes_render_error(self, two_page_svg, out_dir):
        rasterizer = FakeRasterizer(fail_on="ic-back", error=RuntimeError("driver crashed"))
        with pytest.raises(RenderError) as exc_info:
            run_export(
                SelectionSet.of([find_preset(Platform.IOS, "3x")]),
                open_document(two_page_svg),
                out_dir,
                rasterizer,
            )
        assert exc_info.value.details == "driver crashed"
        assert exc_info.value.path.endswith("ic-back@3x.png")

    def test_unexpected_exception_logged_when_verbose(self, two_page_svg, out_dir, capsys):
        log.set_verbose(True)
        rasterizer = FakeRasterizer(fail_on="ic-back", error=RuntimeError("driver crashed"))
        with pytest.raises(RenderError):
            run_export(
                SelectionSet.of([find_preset(Platform.IOS, "3x")]),
                open_document(two_page_svg),
                out_dir,
                rasterizer,
            )
        assert "DEBUG: Rasterizer raised on 'ic-back': driver crashed" in capsys.readouterr().err

    def test_backend_error_names_destination_and_source(self, two_page_svg, out_dir):
        def failing_runner(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, "", "no such page")

        with pytest.raises(RenderError) as exc_info:
            run_export(
                SelectionSet.of([find_preset(Platform.IOS, "2x")]),
                open_document(two_page_svg),
                out_dir,
                InkscapeRasterizer(runner=failing_runner),
            )
        err = exc_info.value
        assert err.path == str(out_dir / "iOS" / "ic-back@2x.png")
        assert err.source == str(two_page_svg)
        assert err.platform == "ios"
        assert err.preset == "@2x"
        assert err.details == "no such page"
        assert "ic-back@2x.png" in str(err)

    def test_directory_creation_failure(self, two_page_svg, out_dir, fake_rasterizer):
        # A plain file where the directory should go
        (out_dir / "iOS").write_text("not a directory")
        with pytest.raises(ExportFilesystemError) as exc_info:
            run_export(
                SelectionSet.of([find_preset(Platform.IOS, "2x")]),
                open_document(two_page_svg),
                out_dir,
                fake_rasterizer,
            )
        assert exc_info.value.code == "FILESYSTEM"
        assert exc_info.value.path == str(out_dir / "iOS")
        assert fake_rasterizer.calls == []

    def test_write_failure(self, tmp_path, out_dir, fake_rasterizer):
        path = tmp_path / "slash.svg"
        path.write_text(
            '<svg xmlns="http://www.w3.org/2000/svg" '
            'xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd" '
            'xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape" viewBox="0 0 10 10">'
            '<sodipodi:namedview><inkscape:page inkscape:label="a/b" width="10" height="10"/>'
            "</sodipodi:namedview></svg>",
            encoding="utf-8",
        )
        # iOS names are not sanitized, so the slash points into a missing directory
        with pytest.raises(ExportFilesystemError) as exc_info:
            run_export(
                SelectionSet.of([find_preset(Platform.IOS, "2x")]),
                open_document(path),
                out_dir,
                fake_rasterizer,
            )
        assert exc_info.value.artboard == "a/b"
        assert exc_info.value.message == "Could not write image"
