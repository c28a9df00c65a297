# -*- coding: utf-8 -*-
"""
Mobile Asset Export Package: export pipeline modules

Modules:
- catalog: Fixed Android/iOS scale presets
- mapper: Sanitize artboard names and map presets to output paths
- selection: Immutable preset selection (dialog reducer)
- document: SVG document and artboard model
- rasterizer: cairosvg / Inkscape rendering backends
- exporter: Directory creation and per-artboard export loop
- errors: Structured exporter errors
"""
