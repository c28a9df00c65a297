# -*- coding: utf-8 -*-
"""
Export driver.

For each selected preset: ensure its directory exists, then activate every
artboard of the document in turn and write the rendered PNG.

Constraints:
- Directories are created at most once per run, keyed by resolved path
  (the three iOS presets share one directory)
- The first failure aborts the run; files already written are kept
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set

from mobile_asset_export.core import log
from mobile_asset_export.export.errors import (
    AssetExportError,
    ExportFilesystemError,
    RenderError,
)
from mobile_asset_export.export.mapper import ExportTarget, build_path, preset_directory
from mobile_asset_export.export.rasterizer import EXPORT_OPTIONS, Rasterizer
from mobile_asset_export.export.selection import SelectionSet


@dataclass
class ExportReport:
    files: List[Path] = field(default_factory=list)
    directories_created: List[Path] = field(default_factory=list)
    targets: List[ExportTarget] = field(default_factory=list)
    dry_run: bool = False


class _DirectoryEnsurer:
    """Creates each resolved directory once per run."""

    def __init__(self, dry_run: bool = False):
        self._seen: Set[Path] = set()
        self._dry_run = dry_run
        self.created: List[Path] = []

    def ensure(self, directory: Path, preset) -> None:
        key = directory.resolve()
        if key in self._seen:
            return
        self._seen.add(key)
        if self._dry_run:
            return
        if directory.is_dir():
            log.debug(f"Directory exists: {directory}")
            return
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportFilesystemError(
                message="Could not create output directory",
                details=str(e),
                platform=preset.platform.value,
                preset=preset.name,
                path=str(directory),
            ) from e
        self.created.append(directory)
        log.debug(f"Created directory: {directory}")


def _write_png(target: ExportTarget, data: bytes, preset, artboard_name: str) -> None:
    try:
        with open(target.file_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ExportFilesystemError(
            message="Could not write image",
            details=str(e),
            platform=preset.platform.value,
            preset=preset.name,
            artboard=artboard_name,
            path=str(target.file_path),
        ) from e


def run_export(
    selection: SelectionSet,
    document,
    base_folder,
    rasterizer: Rasterizer,
    dry_run: bool = False,
) -> ExportReport:
    """
    Export every artboard of document for every preset in selection.

    Args:
        selection: Presets to export, in export order
        document: SvgDocument (or any object with active_artboard and
            iter_artboards_for_export, whose artboards have activate())
        base_folder: Destination folder
        rasterizer: Backend that renders the active artboard
        dry_run: Compute targets only; no directories, no rendering

    Returns:
        ExportReport listing written files and created directories

    Raises:
        ExportFilesystemError: directory creation or file write failed
        RenderError: the rasterizer failed
    """
    base = Path(base_folder)
    report = ExportReport(dry_run=dry_run)
    directories = _DirectoryEnsurer(dry_run=dry_run)

    for preset in selection:
        directory = preset_directory(base, preset)
        directories.ensure(directory, preset)

        for artboard in document.iter_artboards_for_export():
            artboard.activate()
            active = document.active_artboard
            target = build_path(base, preset, active.name)
            report.targets.append(target)
            if dry_run:
                continue

            try:
                data = rasterizer.render(active, target.scale_factor, EXPORT_OPTIONS)
            except AssetExportError as e:
                # Fill in the context the backend doesn't know about
                if e.platform is None:
                    e.platform = preset.platform.value
                if e.preset is None:
                    e.preset = preset.name
                if e.artboard is None:
                    e.artboard = active.name
                e.path = str(target.file_path)
                raise
            except Exception as e:
                log.debug_safe(f"Rasterizer raised on '{active.name}'", e)
                raise RenderError(
                    message="Rasterizer failed",
                    details=str(e),
                    platform=preset.platform.value,
                    preset=preset.name,
                    artboard=active.name,
                    path=str(target.file_path),
                ) from e

            _write_png(target, data, preset, active.name)
            report.files.append(target.file_path)
            log.debug(
                f"Exported '{active.name}' at {target.scale_factor}% -> {target.file_path}"
            )

    report.directories_created = list(directories.created)
    if not dry_run:
        log.info(
            f"Exported {len(report.files)} file(s) into "
            f"{len(report.directories_created)} new director(ies) under {base}"
        )
    return report
