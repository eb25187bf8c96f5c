#!/usr/bin/env python3
"""
Runtime configuration for the title cleaner.

Configuration is merged from three sources with precedence:
1. Built-in defaults (lowest priority)
2. A JSON runtime config file (runtime_config.json)
3. Explicit overrides passed by the caller (highest priority)

Sections:
- formats: default format string per file kind (media, tv, movie)
- directories: output directory name per file kind
- lookup: enabled, confirm, api_key, base_url
- processing: media_type (auto, tv, movie), output_root
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .media_file import MediaFile
from .metadata_lookup import TVDB_BASE_URL, EpisodeLookup
from .movie_file import MovieFile
from .tv_file import TvFile

logger = logging.getLogger(__name__)

RUNTIME_CONFIG_NAME = "runtime_config.json"
API_KEY_ENV = "TVDB_API_KEY"

DEFAULT_CONFIG: Dict[str, Any] = {
    "formats": {
        "media": MediaFile.default_format(),
        "tv": TvFile.default_format(),
        "movie": MovieFile.default_format(),
    },
    "directories": {
        "media": MediaFile.type_directory(),
        "tv": TvFile.type_directory(),
        "movie": MovieFile.type_directory(),
    },
    "lookup": {
        "enabled": False,
        "confirm": False,
        "api_key": None,
        "base_url": TVDB_BASE_URL,
    },
    "processing": {
        "media_type": "auto",
        "output_root": "",
    },
}

KINDS = {
    "media": MediaFile,
    "tv": TvFile,
    "movie": MovieFile,
}


def merge_config(base: Dict[str, Any], *sources: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Merge config sources section by section; later sources win."""
    merged = copy.deepcopy(base)
    for source in sources:
        for section, values in (source or {}).items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section] = {**merged[section], **values}
            else:
                merged[section] = values
    return merged


def runtime_config_candidates(directory: Optional[Union[str, Path]] = None) -> List[Path]:
    root = Path(directory) if directory else Path.cwd()
    return [root / RUNTIME_CONFIG_NAME, root / "config" / RUNTIME_CONFIG_NAME]


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read one JSON config file.

    Returns:
        Parsed config, or {} if the file is missing or unreadable
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not an object", path)
        return {}
    return data


@dataclass
class CleanerConfig:
    """Merged configuration sections."""

    formats: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CONFIG["formats"]))
    directories: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CONFIG["directories"]))
    lookup: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_CONFIG["lookup"]))
    processing: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_CONFIG["processing"]))

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None,
             overrides: Optional[Dict[str, Any]] = None) -> "CleanerConfig":
        """
        Load configuration.

        Args:
            config_path: Runtime config file. When omitted, runtime_config.json
                is looked up in the working directory and its config/ folder.
            overrides: Sections that take precedence over the file
        """
        file_config: Dict[str, Any] = {}
        candidates = [Path(config_path)] if config_path else runtime_config_candidates()
        for candidate in candidates:
            file_config = read_config_file(candidate)
            if file_config:
                logger.info("Loaded runtime config from %s", candidate)
                break

        merged = merge_config(DEFAULT_CONFIG, file_config, overrides)
        return cls(
            formats=merged["formats"],
            directories=merged["directories"],
            lookup=merged["lookup"],
            processing=merged["processing"],
        )

    @property
    def lookup_enabled(self) -> bool:
        return bool(self.lookup.get("enabled"))

    @property
    def confirm(self) -> bool:
        return bool(self.lookup.get("confirm"))

    @property
    def api_key(self) -> Optional[str]:
        return self.lookup.get("api_key") or os.getenv(API_KEY_ENV) or None

    @property
    def base_url(self) -> str:
        return self.lookup.get("base_url") or TVDB_BASE_URL

    @property
    def media_type(self) -> str:
        return self.processing.get("media_type") or "auto"

    @property
    def output_root(self) -> str:
        return self.processing.get("output_root") or ""

    def apply(self, lookup: Optional[EpisodeLookup] = None) -> None:
        """Push formats, directories and the lookup switch onto the file kinds."""
        for kind, media_class in KINDS.items():
            if self.formats.get(kind):
                media_class.set_default_format(self.formats[kind])
            if self.directories.get(kind):
                media_class.set_type_directory(self.directories[kind])

        TvFile.configure_lookup(lookup, enabled=self.lookup_enabled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "formats": dict(self.formats),
            "directories": dict(self.directories),
            "lookup": dict(self.lookup),
            "processing": dict(self.processing),
        }
