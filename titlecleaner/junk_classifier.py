#!/usr/bin/env python3
"""
Junk classifier for release-style name sectors.

Decides, one sector at a time, whether a sector starts the trailing run of
junk (quality, source, codec and release tags) and whether it is a year.
The tag vocabulary is a rule table loaded from the junk dictionary; callers
may pass their own rules instead.

The classifier never edits the sector list. It only lowers
JunkState.remove_start and records year/quality findings. The last year
seen wins, but every year sector is reported so the tokenizer can drop
them all.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .dictionary_loader import DictionaryLoader
from .quality import MediaFileQuality

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r'^\(?((?:19|20)\d{2})\)?$')

DEFAULT_RESOLUTION_MARKERS = {
    "480": "SD", "576": "SD", "720": "HD720", "1080": "HD1080", "2160": "UHD",
}
DEFAULT_SOURCE_MARKERS = ["hdtv", "webrip", "web-dl", "bluray", "brrip", "bdrip", "dvdrip", "hdrip"]
DEFAULT_CODEC_MARKERS = ["x264", "x265", "h264", "h265", "hevc", "xvid", "divx", "aac", "ac3", "dts"]
DEFAULT_RELEASE_MARKERS = ["proper", "repack"]


@dataclass
class JunkRule:
    """One entry of the junk rule table."""
    name: str
    pattern: re.Pattern
    semantic_role: str  # "resolution", "source", "codec", "release", "pattern"
    quality: Optional[MediaFileQuality] = None


@dataclass
class JunkState:
    """Running findings of a classification pass over one sector list."""
    remove_start: Optional[int] = None
    year: int = -1
    year_indices: List[int] = field(default_factory=list)
    quality: Optional[MediaFileQuality] = None

    def mark_junk(self, index: int) -> None:
        if self.remove_start is None or index < self.remove_start:
            self.remove_start = index


def marker_pattern(marker: str) -> re.Pattern:
    """Match a tag at the start of a sector when not followed by a letter."""
    return re.compile(rf'^{re.escape(marker)}(?![a-z])', re.IGNORECASE)


class JunkClassifier:
    """Classifies sectors against a junk rule table."""

    def __init__(self, rules: Optional[Iterable[JunkRule]] = None,
                 dictionary_name: str = DictionaryLoader.DEFAULT_DICTIONARY):
        self.rules: List[JunkRule] = list(rules) if rules is not None else self._default_rules(dictionary_name)

    def classify(self, sectors: Sequence[str], index: int, state: JunkState) -> Optional[JunkRule]:
        """
        Classify the sector at index, updating state.

        The first sector is never junk and never a year, so a name always
        keeps at least one sector.

        Returns:
            The matching junk rule, or None
        """
        if index <= 0 or index >= len(sectors):
            return None

        sector = sectors[index]

        year_match = YEAR_PATTERN.match(sector)
        if year_match:
            state.year = int(year_match.group(1))
            state.year_indices.append(index)
            return None

        for rule in self.rules:
            if rule.pattern.search(sector):
                state.mark_junk(index)
                if rule.quality is not None and state.quality is None:
                    state.quality = rule.quality
                logger.debug("Sector %r at %s matched junk rule %s", sector, index, rule.name)
                return rule

        return None

    def _default_rules(self, dictionary_name: str) -> List[JunkRule]:
        """Build the rule table from the dictionary, with built-in fallbacks.

        Processing order:
        1. Resolution markers (carry a quality)
        2. Source markers
        3. Codec markers
        4. Release markers
        5. Free-form regex patterns
        """
        config = DictionaryLoader.load_dictionary(dictionary_name) or {}
        rules: List[JunkRule] = []

        resolutions: Dict[str, str] = config.get('resolution_markers') or DEFAULT_RESOLUTION_MARKERS
        for lines, quality_name in resolutions.items():
            rules.append(JunkRule(
                name=f"resolution_{lines}",
                pattern=re.compile(rf'^{re.escape(lines)}[pi]$', re.IGNORECASE),
                semantic_role="resolution",
                quality=MediaFileQuality.from_name(quality_name),
            ))

        sections = (
            ("source", config.get('source_markers') or DEFAULT_SOURCE_MARKERS),
            ("codec", config.get('codec_markers') or DEFAULT_CODEC_MARKERS),
            ("release", config.get('release_markers') or DEFAULT_RELEASE_MARKERS),
        )
        for role, markers in sections:
            for marker in markers:
                rules.append(JunkRule(
                    name=f"{role}_{marker}",
                    pattern=marker_pattern(marker),
                    semantic_role=role,
                ))

        for idx, expression in enumerate(config.get('junk_patterns') or []):
            try:
                pattern = re.compile(expression, re.IGNORECASE)
            except re.error as exc:
                logger.warning("Skipping invalid junk pattern %r: %s", expression, exc)
                continue
            rules.append(JunkRule(name=f"pattern_{idx}", pattern=pattern, semantic_role="pattern"))

        return rules
