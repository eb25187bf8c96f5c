#!/usr/bin/env python3
"""
Loads the JSON rule tables that drive junk detection and trimming.

Tables are read once and kept per name; batch workers running in threads
share the same parsed copy.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DICTIONARY_DIR = Path(__file__).resolve().parent / "dictionaries"


class DictionaryLoader:
    """Reads rule tables from the bundled dictionaries folder or a given path."""

    DEFAULT_DICTIONARY = "junk-dictionary.json"

    _cache: Dict[str, Any] = {}
    _lock = threading.Lock()

    @staticmethod
    def get_dictionary_path(dictionary_name: str = DEFAULT_DICTIONARY) -> Path:
        """Resolve a table name; absolute paths point at user supplied tables."""
        path = Path(dictionary_name)
        return path if path.is_absolute() else DICTIONARY_DIR / dictionary_name

    @classmethod
    def load_dictionary(cls, dictionary_name: str = DEFAULT_DICTIONARY,
                        use_cache: bool = True) -> Optional[Any]:
        """
        Parse a rule table.

        Args:
            dictionary_name: Bundled table name or absolute path
            use_cache: Reuse (and store) the parsed table

        Returns:
            The parsed JSON, or None when the file is missing or unreadable
        """
        if use_cache:
            with cls._lock:
                if dictionary_name in cls._cache:
                    return cls._cache[dictionary_name]

        path = cls.get_dictionary_path(dictionary_name)
        try:
            with path.open(encoding='utf-8') as handle:
                table = json.load(handle)
        except FileNotFoundError:
            logger.debug("No rule table at %s", path)
            return None
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable rule table %s: %s", path, e)
            return None

        if use_cache:
            with cls._lock:
                table = cls._cache.setdefault(dictionary_name, table)
        return table

    @classmethod
    def get_section(cls, section_name: str, dictionary_name: str = DEFAULT_DICTIONARY,
                    use_cache: bool = True) -> Any:
        """Return one top-level key of a table, or None."""
        table = cls.load_dictionary(dictionary_name, use_cache)
        if isinstance(table, dict):
            return table.get(section_name)
        return None

    @classmethod
    def clear_cache(cls, dictionary_name: Optional[str] = None) -> None:
        """Forget one parsed table, or all of them."""
        with cls._lock:
            if dictionary_name is None:
                cls._cache.clear()
            else:
                cls._cache.pop(dictionary_name, None)
