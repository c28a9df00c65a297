# -*- coding: utf-8 -*-
"""
SVG source document and its artboards.

Artboards are the Inkscape pages declared in ``sodipodi:namedview``. A file
without pages has a single artboard covering its viewBox (or width/height),
named after the file stem.

Only one artboard is active at a time; rasterizers always render the active
one, so the exporter activates each artboard before exporting it.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from mobile_asset_export.core import log
from mobile_asset_export.export.errors import DocumentError

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
SODIPODI_NS = "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
INKSCAPE_NS = "http://www.inkscape.org/namespaces/inkscape"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)
ET.register_namespace("sodipodi", SODIPODI_NS)
ET.register_namespace("inkscape", INKSCAPE_NS)

# CSS pixels per unit, at 96 dpi
_UNIT_TO_PX = {
    "": 1.0,
    "px": 1.0,
    "pt": 96.0 / 72.0,
    "pc": 16.0,
    "mm": 96.0 / 25.4,
    "cm": 96.0 / 2.54,
    "in": 96.0,
}

_LENGTH_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*([a-z]*)\s*$")


def parse_length(value: Optional[str]) -> Optional[float]:
    """Parse an SVG length ("120", "32px", "10mm") into pixels."""
    if value is None:
        return None
    m = _LENGTH_RE.match(value)
    if not m:
        return None
    unit = m.group(2)
    if unit not in _UNIT_TO_PX:
        return None
    return float(m.group(1)) * _UNIT_TO_PX[unit]


def parse_view_box(value: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    if not value:
        return None
    parts = [p for p in re.split(r"[\s,]+", value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError:
        return None
    if w <= 0 or h <= 0:
        return None
    return (x, y, w, h)


@dataclass(frozen=True)
class Artboard:
    """A named, independently exportable region of a document."""

    index: int
    name: str
    x: float
    y: float
    width: float
    height: float
    # False for the implicit whole-document artboard
    is_page: bool = True
    document: "SvgDocument" = field(repr=False, compare=False, default=None)

    @property
    def view_box(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def activate(self) -> None:
        """Make this the document's active artboard."""
        self.document.set_active_artboard(self.index)


class SvgDocument:
    """
    Parsed SVG document with an active-artboard pointer.

    Use SvgDocument.open() to load a file.
    """

    def __init__(self, path: Path, tree: ET.ElementTree):
        self.path = Path(path)
        self.tree = tree
        self._artboards: List[Artboard] = []
        self._active_index = 0

    @classmethod
    def open(cls, path) -> SvgDocument:
        """
        Load an SVG file.

        Raises:
            DocumentError: if the file is missing, is not XML, is not an SVG
                or has no usable size
        """
        path = Path(path)
        if not path.is_file():
            raise DocumentError(
                message="Source document not found", path=str(path)
            )
        try:
            tree = ET.parse(str(path))
        except ET.ParseError as e:
            raise DocumentError(
                message="Source document is not valid XML",
                details=str(e),
                path=str(path),
            ) from e
        except OSError as e:
            raise DocumentError(
                message="Source document could not be read",
                details=str(e),
                path=str(path),
            ) from e

        if tree.getroot().tag != f"{{{SVG_NS}}}svg":
            raise DocumentError(
                message="Source document is not an SVG file", path=str(path)
            )

        doc = cls(path, tree)
        doc._artboards = doc._read_artboards()
        doc._active_index = 0
        log.debug(f"Opened {path} with {len(doc._artboards)} artboard(s)")
        return doc

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    @property
    def name(self) -> str:
        return self.path.stem

    @property
    def artboards(self) -> Tuple[Artboard, ...]:
        return tuple(self._artboards)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_artboard(self) -> Artboard:
        return self._artboards[self._active_index]

    def set_active_artboard(self, index: int) -> None:
        if not 0 <= index < len(self._artboards):
            raise IndexError(
                f"Artboard index {index} out of range (0..{len(self._artboards) - 1})"
            )
        self._active_index = index

    def iter_artboards_for_export(self) -> Iterator[Artboard]:
        """Yield artboards from the highest index down to 0."""
        for i in range(len(self._artboards) - 1, -1, -1):
            yield self._artboards[i]

    def document_box(self) -> Tuple[float, float, float, float]:
        """Document area in user units (viewBox, else width/height)."""
        root = self.root
        box = parse_view_box(root.get("viewBox"))
        if box:
            return box
        width = parse_length(root.get("width"))
        height = parse_length(root.get("height"))
        if width and height and width > 0 and height > 0:
            return (0.0, 0.0, width, height)
        raise DocumentError(
            message="Source document has no viewBox or width/height",
            path=str(self.path),
        )

    def pixels_per_user_unit(self) -> float:
        """
        CSS pixels per user unit, from the root width against the viewBox.

        1.0 when there is no viewBox or no absolute width
        (e.g. ``width="210mm" viewBox="0 0 210 297"`` gives 96/25.4).
        """
        box = parse_view_box(self.root.get("viewBox"))
        width = parse_length(self.root.get("width"))
        if not box or not width or width <= 0:
            return 1.0
        return width / box[2]

    def _read_artboards(self) -> List[Artboard]:
        artboards: List[Artboard] = []
        namedview = self.root.find(f"{{{SODIPODI_NS}}}namedview")
        pages = []
        if namedview is not None:
            pages = namedview.findall(f"{{{INKSCAPE_NS}}}page")

        for i, page in enumerate(pages):
            x = parse_length(page.get("x")) or 0.0
            y = parse_length(page.get("y")) or 0.0
            width = parse_length(page.get("width"))
            height = parse_length(page.get("height"))
            if not width or not height or width <= 0 or height <= 0:
                raise DocumentError(
                    message=f"Page {i + 1} has no usable width/height",
                    path=str(self.path),
                )
            name = (
                page.get(f"{{{INKSCAPE_NS}}}label")
                or page.get("id")
                or f"Page {i + 1}"
            )
            artboards.append(
                Artboard(
                    index=i,
                    name=name,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                    document=self,
                )
            )

        if not artboards:
            x, y, width, height = self.document_box()
            artboards.append(
                Artboard(
                    index=0,
                    name=self.name,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                    is_page=False,
                    document=self,
                )
            )
        return artboards


def open_document(path) -> SvgDocument:
    return SvgDocument.open(path)
