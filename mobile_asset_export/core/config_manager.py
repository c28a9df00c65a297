"""
Configuration Manager - Core Module

Optional JSON configuration for the exporter: which rasterizer backend to
use, where the Inkscape executable lives and whether to print debug output.
Nothing is written back; the preset selection is never persisted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from . import log


BACKENDS = ("cairo", "inkscape")


@dataclass
class ExportConfig:
    """
    Settings for an export run.

    Defaults are used for every key the configuration file leaves out.
    """

    backend: str = "cairo"
    inkscape_path: str = "inkscape"
    verbose: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ExportConfig:
        """
        Create ExportConfig from dictionary.

        Unknown keys are ignored; an unknown backend falls back to the default.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        config = cls(**values)

        config.backend = str(config.backend).strip().lower()
        if config.backend not in BACKENDS:
            log.warning(
                f"Unknown backend '{config.backend}' in config, using 'cairo'"
            )
            config.backend = "cairo"
        config.inkscape_path = str(config.inkscape_path or "inkscape")
        config.verbose = bool(config.verbose)
        return config

    def with_overrides(
        self,
        backend: Optional[str] = None,
        inkscape_path: Optional[str] = None,
        verbose: Optional[bool] = None,
    ) -> ExportConfig:
        """Return a copy with command line values applied on top."""
        data = self.to_dict()
        if backend:
            data["backend"] = backend
        if inkscape_path:
            data["inkscape_path"] = inkscape_path
        if verbose:
            data["verbose"] = True
        return ExportConfig.from_dict(data)


def load_config(config_file: Optional[Path | str]) -> ExportConfig:
    """
    Load configuration from a JSON file, or use defaults.

    Args:
        config_file: Path to the JSON file, or None for defaults

    Returns:
        ExportConfig object with loaded or default configuration

    Example:
        >>> config = load_config(Path("export.json"))
        >>> print(config.backend)
        'cairo'
    """
    if not config_file:
        return ExportConfig()

    config_file = Path(config_file)
    if not config_file.exists():
        log.debug(f"No config file found at {config_file}, using defaults")
        return ExportConfig()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            log.error(f"Config file {config_file} must contain a JSON object")
            return ExportConfig()

        config = ExportConfig.from_dict(data)
        log.debug(f"Loaded config from {config_file}")
        return config

    except json.JSONDecodeError as e:
        log.error_safe("Invalid JSON in config file", e)
        log.info("Using default configuration")
        return ExportConfig()
    except (OSError, TypeError) as e:
        log.error_safe("Failed to load config", e)
        return ExportConfig()
