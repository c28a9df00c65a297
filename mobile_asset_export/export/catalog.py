# -*- coding: utf-8 -*-
"""
Scale preset catalog.

Android density buckets scale from the xhdpi baseline, iOS suffixes from the
@2x baseline. Both baselines render at 100%.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from mobile_asset_export.export.errors import UnknownPresetError


class Platform(str, Enum):
    ANDROID = "android"
    IOS = "ios"

    @property
    def display_name(self) -> str:
        return "Android" if self is Platform.ANDROID else "iOS"


@dataclass(frozen=True)
class ScalePreset:
    """
    One export size.

    Attributes:
        name: Density bucket (Android) or filename suffix (iOS, may be empty)
        scale_factor: Percent of the 100% baseline render
        platform: Platform the preset belongs to
    """

    name: str
    scale_factor: int
    platform: Platform

    @property
    def flag(self) -> str:
        """Spelling used on the command line (mdpi..xxxhdpi, 1x/2x/3x)."""
        if self.platform is Platform.IOS:
            return (self.name or "@1x").lstrip("@")
        return self.name

    @property
    def label(self) -> str:
        """Checkbox text in the selection dialog."""
        if self.platform is Platform.IOS and not self.name:
            return "@1x"
        return self.name


ANDROID_PRESETS: Tuple[ScalePreset, ...] = (
    ScalePreset("mdpi", 50, Platform.ANDROID),
    ScalePreset("hdpi", 75, Platform.ANDROID),
    ScalePreset("xhdpi", 100, Platform.ANDROID),
    ScalePreset("xxhdpi", 150, Platform.ANDROID),
    ScalePreset("xxxhdpi", 200, Platform.ANDROID),
)

IOS_PRESETS: Tuple[ScalePreset, ...] = (
    ScalePreset("", 50, Platform.IOS),
    ScalePreset("@2x", 100, Platform.IOS),
    ScalePreset("@3x", 150, Platform.IOS),
)

CATALOG: Tuple[ScalePreset, ...] = ANDROID_PRESETS + IOS_PRESETS


def presets_for(platform: Platform) -> Tuple[ScalePreset, ...]:
    return ANDROID_PRESETS if platform is Platform.ANDROID else IOS_PRESETS


def find_preset(platform: Platform, key: str) -> ScalePreset:
    """
    Look up a preset by flag (``xhdpi``, ``2x``), raw name (``@2x``, ``""``)
    or label (``@1x``).

    Raises:
        UnknownPresetError: if nothing in the platform's catalog matches
    """
    wanted = (key or "").strip().lower()
    for preset in presets_for(platform):
        if wanted in (preset.flag, preset.name.lower(), preset.label.lower()):
            return preset
    choices = ", ".join(p.flag for p in presets_for(platform))
    raise UnknownPresetError(
        message=f"Unknown {platform.display_name} preset '{key}' (choose from: {choices}, all)",
        platform=platform.value,
        preset=key,
    )


def parse_preset_list(platform: Platform, value: str) -> List[ScalePreset]:
    """
    Parse a comma separated flag list such as ``mdpi,xhdpi``.

    ``all`` selects every preset of the platform. Duplicates are dropped,
    first occurrence wins.
    """
    result: List[ScalePreset] = []
    for item in (value or "").split(","):
        item = item.strip()
        if not item:
            continue
        if item.lower() == "all":
            candidates = list(presets_for(platform))
        else:
            candidates = [find_preset(platform, item)]
        for preset in candidates:
            if preset not in result:
                result.append(preset)
    return result
