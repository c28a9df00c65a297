# -*- coding: utf-8 -*-
"""
Selection state for the export dialog.

SelectionSet is an immutable, insertion-ordered mapping of preset name to
preset. Every checkbox event produces a new value; the final value is handed
to the exporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from mobile_asset_export.export.catalog import ScalePreset


@dataclass(frozen=True)
class SelectionSet:
    presets: Tuple[ScalePreset, ...] = ()

    @classmethod
    def of(cls, presets: Iterable[ScalePreset]) -> SelectionSet:
        selection = cls()
        for preset in presets:
            selection = selection.with_preset(preset)
        return selection

    def with_preset(self, preset: ScalePreset) -> SelectionSet:
        """Add (or replace in place) the preset keyed by its name."""
        items = list(self.presets)
        for i, existing in enumerate(items):
            if existing.name == preset.name:
                items[i] = preset
                return SelectionSet(tuple(items))
        items.append(preset)
        return SelectionSet(tuple(items))

    def without_preset(self, preset: ScalePreset) -> SelectionSet:
        return SelectionSet(tuple(p for p in self.presets if p.name != preset.name))

    def toggle(self, preset: ScalePreset, checked: bool) -> SelectionSet:
        """Reducer for a checkbox event."""
        if checked:
            return self.with_preset(preset)
        return self.without_preset(preset)

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.presets)

    def __contains__(self, preset) -> bool:
        name = preset.name if isinstance(preset, ScalePreset) else preset
        return any(p.name == name for p in self.presets)

    def __iter__(self) -> Iterator[ScalePreset]:
        return iter(self.presets)

    def __len__(self) -> int:
        return len(self.presets)

    def __bool__(self) -> bool:
        return bool(self.presets)
