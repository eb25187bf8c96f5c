#!/usr/bin/env python3
"""
TV episode files.

Adds series name, episode title, season and episode numbers on top of the
base fields. The season falls back to the enclosing folder name
("Season 2", "Series 2") when the file name holds none, and the title
falls back to a metadata lookup when the name holds none and lookups are
switched on.
"""

import logging
import re
from typing import List, Optional, Union
from pathlib import PurePath

from .episode_extractor import UNKNOWN_NAME, EpisodeExtractor
from .metadata_lookup import EpisodeLookup
from .media_file import MediaFile
from .template_renderer import DirectiveTable, TemplateRenderer, is_blank
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

FOLDER_SEASON_PATTERN = re.compile(r'(?:season|series).([1-9][0-9]*)', re.IGNORECASE)
SPECIALS_PATTERN = re.compile(r'specials', re.IGNORECASE)
VALID_TV_PATTERN = re.compile(
    r"[a-zA-Z0-9 ]*[ ]?[a-zA-Z0-9]+ - \[[0-9]{2}x[0-9]{2}(-[0-9]{2})?\]( - [a-zA-Z0-9&' -]*)?( \([0-9]+\))?"
)
CLEANED_FORMAT = "N - [Sxe]"
TITLE_SUFFIX = " - T"


def season_from_folder(folder: str) -> int:
    """Season number implied by a folder name, 0 if none (or Specials)."""
    if not folder or SPECIALS_PATTERN.search(folder):
        return 0
    match = FOLDER_SEASON_PATTERN.search(folder)
    return int(match.group(1)) if match else 0


def cleaned_format(title: str) -> str:
    """The cleaned name format, with the title part only for a non-blank title."""
    return CLEANED_FORMAT if is_blank(title) else CLEANED_FORMAT + TITLE_SUFFIX


class TvFile(MediaFile):
    """Type to store TV files."""

    KIND = "tv"

    _default_format = "C?( (P)).E"
    _type_directory = "TV"

    _shared_extractor: Optional[EpisodeExtractor] = None

    _lookup: Optional[EpisodeLookup] = None
    _lookup_enabled = False

    def __init__(self, filepath: Union[str, PurePath],
                 tokenizer: Optional[Tokenizer] = None,
                 renderer: Optional[TemplateRenderer] = None,
                 extractor: Optional[EpisodeExtractor] = None):
        """
        Raises:
            MalformedNameError: If the name has no extension
            ConflictingSeasonError: If the name holds two different seasons
        """
        super().__init__(filepath, tokenizer=tokenizer, renderer=renderer)

        extraction = (extractor or TvFile.shared_extractor()).process(self.sectors)
        self.sectors = extraction.sectors
        self.series_name = extraction.name
        self.raw_title = extraction.title
        self.episodes: List[int] = extraction.episodes
        self.block_start = extraction.block_start
        self.block_end = extraction.block_end

        self._season = extraction.season
        self._folder_season: Optional[int] = None
        self._looked_up_title: Optional[str] = None

    @staticmethod
    def shared_extractor() -> EpisodeExtractor:
        if TvFile._shared_extractor is None:
            TvFile._shared_extractor = EpisodeExtractor()
        return TvFile._shared_extractor

    # ------------------------------------------------------------------
    # Metadata lookup configuration
    # ------------------------------------------------------------------

    @classmethod
    def configure_lookup(cls, lookup: Optional[EpisodeLookup], enabled: bool = True) -> None:
        """Install the lookup used for missing titles, and switch it on or off."""
        cls._lookup = lookup
        cls._lookup_enabled = enabled and lookup is not None

    @classmethod
    def lookup_enabled(cls) -> bool:
        return cls._lookup_enabled

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def season(self) -> int:
        """Season from the name, else from the folder name (computed once)."""
        if self._season:
            return self._season
        if self._folder_season is None:
            self._folder_season = season_from_folder(self.folder)
        return self._folder_season

    @property
    def title(self) -> str:
        """Episode title from the name, or from the metadata lookup (asked once)."""
        if not is_blank(self.raw_title) or not self._should_lookup():
            return self.raw_title
        if self._looked_up_title is None:
            found = TvFile._lookup.title_for(self.series_name, self.season, self.episodes)
            self._looked_up_title = found or ""
        return self._looked_up_title or self.raw_title

    def _should_lookup(self) -> bool:
        return (
            TvFile._lookup_enabled
            and TvFile._lookup is not None
            and self.series_name != UNKNOWN_NAME
            and bool(self.episodes)
        )

    @property
    def episode_text(self) -> str:
        return "-".join(f"{episode:02d}" for episode in self.episodes)

    @property
    def cleaned(self) -> str:
        return self.render(cleaned_format(self.title))

    def is_valid(self) -> bool:
        """Structural check on the cleaned name, using only the parsed title."""
        return bool(VALID_TV_PATTERN.search(self.render(cleaned_format(self.raw_title))))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def directive_chain(self) -> List[DirectiveTable]:
        return [self.tv_directives()] + super().directive_chain()

    def tv_directives(self) -> DirectiveTable:
        """
        T:  Title of the episode
        N:  Name of the series
        S:  Season number, two digits
        e:  Episode numbers, two digits each, joined by '-'
        """
        return {
            'T': lambda: self.title,
            'N': lambda: self.series_name,
            'S': lambda: f"{self.season:02d}",
            'e': lambda: self.episode_text,
        }
