# -*- coding: utf-8 -*-
"""
Export Error Handling

Structured errors for an export run. Every error is terminal for the run;
the context fields say which platform, preset, artboard and path were being
processed when it happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class AssetExportError(Exception):
    """
    Base error for the exporter.

    Attributes:
        message: User-friendly message
        code: Error classification (MISSING_PRECONDITION, FILESYSTEM, RENDER,
            DOCUMENT, UNKNOWN_PRESET)
        details: Technical details (underlying OS or subprocess error)
        platform: Platform value of the preset being exported, if any
        preset: Preset name being exported, if any
        artboard: Artboard name being exported, if any
        path: Filesystem path involved, if any (the destination file once
            the exporter has seen the error)
        source: Source document being rendered, if any
    """

    message: str
    code: str = "UNKNOWN"
    details: str = ""
    platform: Optional[str] = None
    preset: Optional[str] = None
    artboard: Optional[str] = None
    path: Optional[str] = None
    source: Optional[str] = None

    def context(self) -> Dict[str, str]:
        """Return the non-empty context fields."""
        ctx = {}
        if self.platform is not None:
            ctx["platform"] = self.platform
        if self.preset is not None:
            ctx["preset"] = self.preset
        if self.artboard is not None:
            ctx["artboard"] = self.artboard
        if self.path is not None:
            ctx["path"] = self.path
        if self.source is not None:
            ctx["source"] = self.source
        return ctx

    def __str__(self) -> str:
        ctx = self.context()
        if not ctx:
            return self.message
        parts = ", ".join(f"{k}={v!r}" for k, v in ctx.items())
        return f"{self.message} ({parts})"


@dataclass
class MissingPreconditionError(AssetExportError):
    """No destination folder or no source document was given."""

    code: str = "MISSING_PRECONDITION"


@dataclass
class ExportFilesystemError(AssetExportError):
    """Directory creation or file write failed."""

    code: str = "FILESYSTEM"


@dataclass
class RenderError(AssetExportError):
    """The rasterizer rejected or failed an export call."""

    code: str = "RENDER"


@dataclass
class DocumentError(AssetExportError):
    """The source document could not be read or has no usable geometry."""

    code: str = "DOCUMENT"


@dataclass
class UnknownPresetError(AssetExportError):
    """A preset flag did not match any catalog entry."""

    code: str = "UNKNOWN_PRESET"
