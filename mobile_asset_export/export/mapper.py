# -*- coding: utf-8 -*-
"""
Path mapper for exported assets.

Directory convention:
  Android: <base>/drawable-<density>/<sanitized_name>.png
  iOS:     <base>/iOS/<artboard name><suffix>.png

No I/O happens here; directories are created by the exporter.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from mobile_asset_export.export.catalog import Platform, ScalePreset

_INVALID_RESOURCE_CHARS = re.compile(r"[^A-Za-z0-9_.]")

IOS_DIRECTORY = "iOS"


@dataclass(frozen=True)
class ExportTarget:
    directory: Path
    file_path: Path
    scale_factor: int
    platform: Platform


def sanitize(name: str) -> str:
    """
    Turn an artboard name into a valid Android resource file name.

    Lower-cases, then replaces everything except ASCII letters, digits,
    underscore and dot with an underscore.

    Example:
      "App Icon!" -> "app_icon_"
    """
    return _INVALID_RESOURCE_CHARS.sub("_", name.lower())


def preset_directory(base_folder, preset: ScalePreset) -> Path:
    """Return the output directory for a preset under base_folder."""
    base = Path(base_folder)
    if preset.platform is Platform.ANDROID:
        return base / f"drawable-{preset.name}"
    return base / IOS_DIRECTORY


def build_path(base_folder, preset: ScalePreset, artboard_name: str) -> ExportTarget:
    """
    Map (preset, artboard) to its output location.

    Android names are sanitized; iOS names are used verbatim with the
    preset suffix appended.
    """
    directory = preset_directory(base_folder, preset)
    if preset.platform is Platform.ANDROID:
        filename = f"{sanitize(artboard_name)}.png"
    else:
        filename = f"{artboard_name}{preset.name}.png"
    return ExportTarget(
        directory=directory,
        file_path=directory / filename,
        scale_factor=preset.scale_factor,
        platform=preset.platform,
    )
