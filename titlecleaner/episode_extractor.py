#!/usr/bin/env python3
"""
Episode extractor module for TV file names.

Works on the refined sector list produced by the tokenizer and pulls out:
- Season: S01, "Season 1", or the leading digits of a bare "101"
- Episodes: E01, E01-02, E01E02, "Episode 1", "1x01", "1x01-02",
  a leading "01" or the trailing digits of a bare "101"
- Series name and episode title, split around the sectors used as
  season/episode evidence (the block span)

Rules run per sector in a fixed order. The NxM rule rewrites its sector
to the SxE form and the same index is scanned again.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .errors import ConflictingSeasonError
from .trimmer import Trimmer

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

SEASON_BLOCK = re.compile(r'(?<![A-Za-z])[Ss](\d{1,2})(?!\d)')
EPISODE_BLOCK = re.compile(r'(?<![A-Za-z])[Ee](\d{1,2})(?:-(\d{1,2}))?(?!\d)')
CROSS_BLOCK = re.compile(r'(?<!\d)(\d{1,2})[xX](\d{1,2}(?:-\d{1,2})?)(?!\d)')
SEASON_WORD = re.compile(r'^season$', re.IGNORECASE)
EPISODE_WORD = re.compile(r'^episode$', re.IGNORECASE)
SHORT_NUMBER = re.compile(r'^\d{1,2}$')
LEADING_NUMBER = re.compile(r'(?<!\d)(\d{1,2})(?!\d)')
BARE_NUMBER = re.compile(r'^\d{1,3}$')


@dataclass
class EpisodeExtraction:
    """Everything the episode rules learned from one sector list."""
    sectors: List[str]
    season: int = 0
    episodes: List[int] = field(default_factory=list)
    name: str = ""
    title: str = ""
    block_start: Optional[int] = None
    block_end: Optional[int] = None

    def extend_block(self, start: int, end: Optional[int] = None) -> None:
        end = start if end is None else end
        self.block_start = start if self.block_start is None else min(self.block_start, start)
        self.block_end = end if self.block_end is None else max(self.block_end, end)

    def assign_season(self, season: int) -> None:
        if self.season != 0 and season != self.season:
            raise ConflictingSeasonError(
                f"Can't have an episode with multiple seasons ({self.season} and {season})."
            )
        self.season = season


# A sector rule returns the next index to scan when it consumed the sector,
# or None to let the following rules look at it.
SectorRule = Callable[[EpisodeExtraction, int], Optional[int]]


class EpisodeExtractor:
    """Extracts season, episodes, series name and title from sectors."""

    def __init__(self, trimmer: Optional[Trimmer] = None):
        self.trimmer = trimmer or Trimmer()
        self.sector_rules: List[SectorRule] = [
            self._season_block,
            self._episode_block,
            self._cross_block,
            self._season_word,
            self._episode_word,
        ]

    def process(self, sectors: Sequence[str]) -> EpisodeExtraction:
        """
        Run all episode heuristics over a sector list.

        Args:
            sectors: Refined sectors; copied, the copy may be rewritten

        Returns:
            EpisodeExtraction

        Raises:
            ConflictingSeasonError: If two different seasons are found
        """
        result = EpisodeExtraction(sectors=list(sectors))

        index = 0
        while index < len(result.sectors):
            next_index = index + 1
            for rule in self.sector_rules:
                consumed = rule(result, index)
                if consumed is not None:
                    next_index = consumed
                    break
            index = next_index

        if not result.episodes:
            self._leading_number(result)
        if not result.episodes:
            self._bare_number(result)

        self._split_name_and_title(result)
        logger.debug(
            "Episode rules on %s: season=%s episodes=%s block=[%s, %s]",
            result.sectors, result.season, result.episodes, result.block_start, result.block_end,
        )
        return result

    # ------------------------------------------------------------------
    # Per-sector rules
    # ------------------------------------------------------------------

    def _season_block(self, result: EpisodeExtraction, index: int) -> Optional[int]:
        """S01 -> season 1. Falls through so E01 in the same sector is seen."""
        matches = SEASON_BLOCK.findall(result.sectors[index])
        if len(matches) > 1:
            raise ConflictingSeasonError(
                f"Can't have an episode with multiple seasons: {result.sectors[index]!r}"
            )
        if matches:
            result.assign_season(int(matches[0]))
            result.extend_block(index)
        return None

    def _episode_block(self, result: EpisodeExtraction, index: int) -> Optional[int]:
        """E01, E01-02 and E01E02 -> one or more episode numbers."""
        matches = EPISODE_BLOCK.findall(result.sectors[index])
        if not matches:
            return None
        for first, second in matches:
            result.episodes.append(int(first))
            if second:
                result.episodes.append(int(second))
        result.extend_block(index)
        return index + 1

    def _cross_block(self, result: EpisodeExtraction, index: int) -> Optional[int]:
        """1x01(-02) is rewritten to S1E01(-02) and scanned again."""
        matches = CROSS_BLOCK.findall(result.sectors[index])
        if len(matches) > 1:
            raise ConflictingSeasonError(
                f"Can't have an episode with multiple seasons: {result.sectors[index]!r}"
            )
        if not matches:
            return None
        season, episodes = matches[0]
        result.sectors[index] = f"S{season}E{episodes}"
        return index

    def _season_word(self, result: EpisodeExtraction, index: int) -> Optional[int]:
        """"Season" followed by a short number."""
        if not self._word_then_number(result.sectors, index, SEASON_WORD):
            return None
        result.assign_season(int(result.sectors[index + 1]))
        result.extend_block(index, index + 1)
        return index + 2

    def _episode_word(self, result: EpisodeExtraction, index: int) -> Optional[int]:
        """"Episode" followed by a short number replaces earlier episodes."""
        if not self._word_then_number(result.sectors, index, EPISODE_WORD):
            return None
        result.episodes = [int(result.sectors[index + 1])]
        result.extend_block(index, index + 1)
        return index + 2

    @staticmethod
    def _word_then_number(sectors: Sequence[str], index: int, word: re.Pattern) -> bool:
        return (
            index + 1 < len(sectors)
            and bool(word.match(sectors[index]))
            and bool(SHORT_NUMBER.match(sectors[index + 1]))
        )

    # ------------------------------------------------------------------
    # Fallbacks when no episode was found
    # ------------------------------------------------------------------

    def _leading_number(self, result: EpisodeExtraction) -> None:
        """"01 Pilot": a short number in the first sector is the episode."""
        if not result.sectors:
            return
        match = LEADING_NUMBER.search(result.sectors[0])
        if not match:
            return
        result.episodes.append(int(match.group(1)))
        result.block_start = 0
        result.extend_block(0)

    def _bare_number(self, result: EpisodeExtraction) -> None:
        """
        "Show 101": a lone 1-3 digit sector holds season and episode.

        Fires when exactly one bare number exists, or when a second one is
        the final sector. Anything more ambiguous is left alone. A single
        digit marks the block but is too short to hold an episode.
        """
        candidates = [i for i, s in enumerate(result.sectors) if BARE_NUMBER.match(s)]
        last = len(result.sectors) - 1
        if not candidates or len(candidates) > 2:
            return
        if len(candidates) == 2 and candidates[1] != last:
            return

        index = candidates[0]
        digits = result.sectors[index]
        if len(digits) >= 3:
            result.assign_season(int(digits[:-2]))
        if len(digits) >= 2:
            result.episodes.append(int(digits[-2:]))
        result.extend_block(index)

    # ------------------------------------------------------------------
    # Name / title partition
    # ------------------------------------------------------------------

    def _split_name_and_title(self, result: EpisodeExtraction) -> None:
        """
        Sectors before the block are the name, sectors after it the title.

        When the block sits at the very front, the sectors after it are
        taken as the name; a single " - " in them splits off the title,
        otherwise they become the title of an "Unknown" series.
        """
        sectors = result.sectors

        if result.block_start is None:
            result.name = self.trimmer.trim(" ".join(sectors))
            result.title = ""
            return

        if result.block_start > 0:
            result.name = self.trimmer.trim(" ".join(sectors[:result.block_start]))
            result.title = self.trimmer.trim(" ".join(sectors[result.block_end + 1:]))
            return

        candidate = self.trimmer.trim(" ".join(sectors[result.block_end + 1:]))
        halves = candidate.split('-')
        if len(halves) == 2 and halves[0].endswith(' ') and halves[1].startswith(' '):
            result.name = self.trimmer.trim(halves[0])
            result.title = self.trimmer.trim(halves[1])
        else:
            result.name = UNKNOWN_NAME
            result.title = candidate
