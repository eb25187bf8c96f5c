#!/usr/bin/env python3
"""
Path parser module to keep directory handling separate from name parsing.

Splits a raw file path into:
- location (directory part, possibly empty)
- original name (no directory, no extension)
- extension (text after the last dot)
- folder (last component of the location)
"""

from dataclasses import dataclass
from typing import Union
from pathlib import PurePath

from .errors import MalformedNameError

PATH_SEPARATORS = ("/", "\\")


@dataclass
class PathParseResult:
    """Structured result of splitting a raw path."""
    raw: str
    location: str
    original_name: str
    extension: str

    @property
    def folder(self) -> str:
        """Name of the directory holding the file, or '' at the root."""
        return folder_of(self.location)


def last_separator(text: str) -> int:
    """Index of the rightmost path separator, -1 if none."""
    return max(text.rfind(sep) for sep in PATH_SEPARATORS)


def folder_of(location: str) -> str:
    """Return the last component of a location string."""
    if not location or not location.strip():
        return ""
    sep = last_separator(location)
    if sep == -1:
        return location
    return location[sep + 1:]


class PathParser:
    """Splits a path into location, name and extension."""

    def parse(self, filepath: Union[str, PurePath]) -> PathParseResult:
        """
        Split a raw path.

        Args:
            filepath: File path or bare file name

        Returns:
            PathParseResult

        Raises:
            MalformedNameError: If the file name has no '.' extension separator
        """
        raw = str(filepath)

        sep = last_separator(raw)
        if sep != -1:
            location = raw[:sep]
            remainder = raw[sep + 1:]
        else:
            location = ""
            remainder = raw

        dot = remainder.rfind(".")
        if dot == -1:
            raise MalformedNameError(f"No extension found in file name: {raw!r}")

        return PathParseResult(
            raw=raw,
            location=location,
            original_name=remainder[:dot],
            extension=remainder[dot + 1:],
        )
