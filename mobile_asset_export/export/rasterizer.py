# -*- coding: utf-8 -*-
"""
Rasterizer backends.

A rasterizer renders one artboard to PNG bytes at a scale factor given in
percent (100 = one user unit per pixel, whatever the document's physical
width/height). Two backends ship:

- CairoRasterizer: in-process rendering through cairosvg
- InkscapeRasterizer: the ``inkscape`` command line (1.2+, for --export-page)

Both raise RenderError on failure.
"""

from __future__ import annotations

import copy
import subprocess
import tempfile
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Protocol, runtime_checkable

from mobile_asset_export.core import log
from mobile_asset_export.export.document import Artboard
from mobile_asset_export.export.errors import RenderError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@dataclass(frozen=True)
class RenderOptions:
    """Fixed rendering options for an exported asset."""

    format: str = "png24"
    transparency: bool = True
    clip_to_artboard: bool = True
    antialiasing: bool = True


EXPORT_OPTIONS = RenderOptions()


@runtime_checkable
class Rasterizer(Protocol):
    def render(
        self, artboard: Artboard, scale_factor: int, options: RenderOptions
    ) -> bytes: ...


def _check_request(artboard: Artboard, scale_factor: int, options: RenderOptions):
    if options.format != "png24":
        raise RenderError(
            message=f"Unsupported export format '{options.format}'",
            artboard=artboard.name,
        )
    if scale_factor <= 0:
        raise RenderError(
            message=f"Unsupported scale factor {scale_factor}%",
            artboard=artboard.name,
        )


def _fmt(value: float) -> str:
    return f"{value:g}"


class CairoRasterizer:
    """Render artboards in-process with cairosvg."""

    def render(
        self, artboard: Artboard, scale_factor: int, options: RenderOptions
    ) -> bytes:
        _check_request(artboard, scale_factor, options)
        document = artboard.document
        try:
            import cairosvg
        except (ImportError, OSError) as e:
            # OSError: cairocffi cannot find the cairo shared library
            raise RenderError(
                message="cairosvg is not available; try --backend inkscape",
                details=str(e),
                artboard=artboard.name,
            ) from e

        svg = self.prepare_svg(artboard, options)
        try:
            data = cairosvg.svg2png(
                bytestring=svg,
                url=document.path.resolve().as_uri(),
                scale=scale_factor / 100.0,
                background_color=None if options.transparency else "white",
            )
        except Exception as e:
            raise RenderError(
                message="cairosvg failed to render artboard",
                details=str(e),
                artboard=artboard.name,
                source=str(document.path),
            ) from e
        if not data or not data.startswith(PNG_SIGNATURE):
            raise RenderError(
                message="cairosvg returned no PNG data",
                artboard=artboard.name,
                source=str(document.path),
            )
        return data

    def prepare_svg(self, artboard: Artboard, options: RenderOptions) -> bytes:
        """
        Return the document re-framed on the artboard.

        The root viewBox is set to the artboard (or to the whole document
        when clipping is off) and width/height to the same size in pixels.
        """
        document = artboard.document
        root = copy.deepcopy(document.root)
        if options.clip_to_artboard:
            x, y, w, h = artboard.view_box
        else:
            x, y, w, h = document.document_box()
        root.set("viewBox", f"{_fmt(x)} {_fmt(y)} {_fmt(w)} {_fmt(h)}")
        root.set("width", _fmt(w))
        root.set("height", _fmt(h))
        if not options.antialiasing:
            root.set("shape-rendering", "crispEdges")
        return ET.tostring(root, encoding="utf-8")


class InkscapeRasterizer:
    """Render artboards by running the Inkscape command line."""

    def __init__(
        self,
        executable: str = "inkscape",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.executable = executable
        self._runner = runner

    def command(
        self,
        artboard: Artboard,
        scale_factor: int,
        options: RenderOptions,
        output_path: Path,
    ) -> List[str]:
        document = artboard.document
        # Inkscape sizes by physical length at 96 dpi; undo the document's
        # user-unit scale so 100% is one user unit per pixel
        dpi = 96.0 * scale_factor / 100.0 / document.pixels_per_user_unit()
        cmd = [
            self.executable,
            str(document.path),
            "--export-type=png",
            f"--export-filename={output_path}",
            f"--export-dpi={_fmt(dpi)}",
        ]
        if not options.clip_to_artboard:
            cmd.append("--export-area-drawing")
        elif artboard.is_page:
            cmd.append(f"--export-page={artboard.index + 1}")
        else:
            cmd.append("--export-area-page")

        if options.transparency:
            cmd.append("--export-background-opacity=0")
            cmd.append("--export-png-color-mode=RGBA_8")
        else:
            cmd.append("--export-background=#ffffff")
            cmd.append("--export-background-opacity=1")
            cmd.append("--export-png-color-mode=RGB_8")

        cmd.append(f"--export-png-antialias={2 if options.antialiasing else 0}")
        return cmd

    def render(
        self, artboard: Artboard, scale_factor: int, options: RenderOptions
    ) -> bytes:
        _check_request(artboard, scale_factor, options)
        with tempfile.TemporaryDirectory(prefix="mobile-asset-export-") as tmp:
            output_path = Path(tmp) / "artboard.png"
            cmd = self.command(artboard, scale_factor, options, output_path)
            log.debug(f"Running: {' '.join(cmd)}")
            try:
                proc = self._runner(cmd, capture_output=True, text=True, check=False)
            except FileNotFoundError as e:
                raise RenderError(
                    message=f"Inkscape executable not found: {self.executable}",
                    details=str(e),
                    artboard=artboard.name,
                ) from e

            if proc.returncode != 0:
                raise RenderError(
                    message=f"Inkscape exited with status {proc.returncode}",
                    details=(proc.stderr or "").strip(),
                    artboard=artboard.name,
                    source=str(artboard.document.path),
                )
            if not output_path.is_file():
                raise RenderError(
                    message="Inkscape did not produce an image",
                    details=(proc.stderr or "").strip(),
                    artboard=artboard.name,
                    source=str(artboard.document.path),
                )
            return output_path.read_bytes()


def create_rasterizer(backend: str, inkscape_path: str = "inkscape") -> Rasterizer:
    if backend == "inkscape":
        return InkscapeRasterizer(executable=inkscape_path)
    if backend == "cairo":
        return CairoRasterizer()
    raise ValueError(f"Unknown rasterizer backend: {backend}")
