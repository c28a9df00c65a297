#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point.

Without --android/--ios the Qt selection dialog is shown (and missing
document/destination are asked for with file dialogs). With preset flags the
run is non-interactive.

Exit status: 0 on success or cancel, 1 on a fatal error, 2 on usage errors.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from mobile_asset_export import __version__
from mobile_asset_export.core import log
from mobile_asset_export.core.config_manager import BACKENDS, load_config
from mobile_asset_export.core.result import Result
from mobile_asset_export.core.services import ServiceContainer
from mobile_asset_export.export.catalog import Platform, ScalePreset, parse_preset_list
from mobile_asset_export.export.document import open_document
from mobile_asset_export.export.errors import AssetExportError, MissingPreconditionError
from mobile_asset_export.export.exporter import ExportReport, run_export
from mobile_asset_export.export.selection import SelectionSet

description = "Export SVG artboards as Android drawables and iOS @1x/@2x/@3x PNG assets."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mobile-asset-export",
        description=description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("document", nargs="?", help="The source SVG document")
    parser.add_argument("-o", "--output", metavar="DIR", help="Destination folder")
    parser.add_argument(
        "--android",
        metavar="LIST",
        help="Android densities, e.g. mdpi,hdpi,xhdpi,xxhdpi,xxxhdpi or all",
    )
    parser.add_argument(
        "--ios", metavar="LIST", help="iOS scales, e.g. 1x,2x,3x or all"
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        help="Rasterizer backend (default from config, else cairo)",
    )
    parser.add_argument(
        "--inkscape", metavar="PATH", help="Inkscape executable for the inkscape backend"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the files that would be written and exit",
    )
    parser.add_argument(
        "--list-artboards",
        action="store_true",
        help="Print the document's artboards and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _flag_presets(args) -> List[ScalePreset]:
    presets: List[ScalePreset] = []
    if args.android is not None:
        presets.extend(parse_preset_list(Platform.ANDROID, args.android))
    if args.ios is not None:
        presets.extend(parse_preset_list(Platform.IOS, args.ios))
    return presets


def _print_listing(document) -> None:
    for artboard in document.artboards:
        print(f"{artboard.index}\t{artboard.name}")


def _print_targets(report: ExportReport) -> None:
    for target in report.targets:
        print(f"{target.scale_factor}%\t{target.file_path}")


def run(args, services: ServiceContainer) -> Result[Optional[ExportReport]]:
    """Execute one invocation; errors come back as a failed Result."""
    interactive = args.android is None and args.ios is None and not args.list_artboards
    try:
        flag_presets = _flag_presets(args)

        destination = args.output
        document_path = args.document
        if interactive:
            try:
                ui = services.ui()
            except ImportError as e:
                return Result.failure(
                    "UI_UNAVAILABLE",
                    "The interactive dialog needs PySide6; pass --android/--ios instead",
                    details=str(e),
                )
            if not destination:
                destination = ui.choose_destination_folder()
            if destination and not document_path:
                document_path = ui.choose_source_document()

        if not destination and not args.list_artboards:
            raise MissingPreconditionError(message="No destination folder selected")
        if not document_path:
            raise MissingPreconditionError(message="No source document selected")
        document = open_document(document_path)

        if args.list_artboards:
            _print_listing(document)
            return Result.success(None)

        if interactive:
            selection = ui.run_selection_dialog()
            if selection is None:
                return Result.success(None)
        else:
            selection = SelectionSet.of(flag_presets)

        if not selection:
            log.warning("No export sizes selected; nothing to do")

        report = run_export(
            selection,
            document,
            Path(destination),
            services.rasterizer(),
            dry_run=args.dry_run,
        )
        if args.dry_run:
            _print_targets(report)
        return Result.success(report)

    except AssetExportError as e:
        return Result.from_exception(e)


def main(argv: Optional[List[str]] = None, services: Optional[ServiceContainer] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config).with_overrides(
        backend=args.backend, inkscape_path=args.inkscape, verbose=args.verbose
    )
    log.set_verbose(config.verbose)

    if services is None:
        services = ServiceContainer(config=config)
    else:
        services.config = config

    result = run(args, services)
    if not result.ok:
        log.error(result.error.message)
        if result.error.details:
            log.debug(result.error.details)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
