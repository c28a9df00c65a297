# -*- coding: utf-8 -*-
"""Mobile Asset Export Services / Composition Root

Minimal dependency container to centralize object creation.

Design goals:
- No UI/Qt or cairosvg imports at module import time.
- Support injection of a rasterizer factory for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from mobile_asset_export.core.config_manager import ExportConfig


@dataclass
class ServiceContainer:
    """Small container for shared service construction."""

    config: ExportConfig = field(default_factory=ExportConfig)
    rasterizer_factory: Optional[Callable[[], object]] = None
    ui_factory: Optional[Callable[[], object]] = None

    def rasterizer(self):
        if self.rasterizer_factory is not None:
            return self.rasterizer_factory()

        from mobile_asset_export.export.rasterizer import create_rasterizer

        return create_rasterizer(self.config.backend, self.config.inkscape_path)

    def ui(self):
        """Return the interactive front end (selection dialog, pickers).

        NOTE: Imports Qt only when called.
        """
        if self.ui_factory is not None:
            return self.ui_factory()

        from mobile_asset_export.ui import selection_dialog

        return selection_dialog
