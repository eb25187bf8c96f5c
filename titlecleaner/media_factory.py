#!/usr/bin/env python3
"""
Media factory: builds the right file kind for a raw path.

Media types:
- "tv": always a TvFile
- "movie": always a MovieFile
- "auto" (or None): a TvFile when it passes its validity check, else a
  MovieFile
"""

import logging
from typing import Dict, Optional, Type, Union
from pathlib import PurePath

from .media_file import MediaFile
from .movie_file import MovieFile
from .tv_file import TvFile

logger = logging.getLogger(__name__)

AUTO = "auto"

MEDIA_TYPES: Dict[str, Type[MediaFile]] = {
    TvFile.KIND: TvFile,
    MovieFile.KIND: MovieFile,
}


def resolve_media_type(media_type: Optional[str]) -> Optional[Type[MediaFile]]:
    """
    Map a media type name to a file kind, None meaning auto-detect.

    Raises:
        ValueError: If the name is not a known media type
    """
    if media_type is None:
        return None
    key = media_type.strip().lower()
    if key in ("", AUTO):
        return None
    if key not in MEDIA_TYPES:
        raise ValueError(f"Unknown media type: {media_type!r} (expected one of {sorted(MEDIA_TYPES)} or 'auto')")
    return MEDIA_TYPES[key]


def create_media_file(filepath: Union[str, PurePath], media_type: Optional[str] = None) -> MediaFile:
    """
    Build a media file for filepath.

    Raises:
        MalformedNameError: If the name has no extension
        ConflictingSeasonError: If a TV name holds two different seasons
        ValueError: If media_type is unknown
    """
    kind = resolve_media_type(media_type)
    if kind is not None:
        return kind(filepath)

    tv_file = TvFile(filepath)
    if tv_file.is_valid():
        return tv_file

    logger.debug("%r does not look like a TV episode, treating as a movie", str(filepath))
    return MovieFile(filepath)
