#!/usr/bin/env python3
"""
Exception types raised by the title cleaner.

Only construction-time problems with a name and unterminated template
brackets are fatal. Heuristic misses never raise.
"""


class TitleCleanerError(Exception):
    """Base exception for title cleaner errors."""

    pass


class MalformedNameError(TitleCleanerError):
    """Raised when a raw name has no extractable extension."""

    pass


class ConflictingSeasonError(TitleCleanerError):
    """Raised when one name asserts two different season numbers."""

    pass


class TemplateSyntaxError(TitleCleanerError, ValueError):
    """Raised when a format string contains an unterminated bracket group."""

    pass


class MetadataLookupError(TitleCleanerError):
    """Raised by lookup adapters when a remote request fails."""

    pass
