# -*- coding: utf-8 -*-
"""
Mobile Asset Export package root

Exports the artboards of an SVG document as Android density buckets and
iOS @1x/@2x/@3x PNG assets.
"""

__version__ = "1.0.0"
__title__ = "MobileAssetExport"
__license__ = "Apache-2.0"

# Import core modules to ensure they're available
from . import core

# UI is imported only when needed (PySide6 is optional for flag-driven runs)
__all__ = ["core"]
