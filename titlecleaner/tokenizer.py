#!/usr/bin/env python3
"""
Tokenizer module for turning a raw media file name into sectors.

A sector is one delimiter-separated piece of the name. After the raw split
a single left-to-right refinement pass edits the list in place:
- splits "100-Special" style digit/letter boundaries
- drops empty sectors
- capitalizes the first letter of every sector
- merges runs of lone capital letters ("A M" -> "AM")
- consumes part/disc markers ("Part Two", "CD2")
- asks the junk classifier for trailing junk and years
Finally everything from the first junk sector onwards is discarded,
together with any year sectors, and lone capitals left adjacent by that
are merged.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union
from pathlib import PurePath

from .junk_classifier import JunkClassifier, JunkState
from .path_parser import PathParser, folder_of
from .quality import MediaFileQuality
from .sequence_extractor import SequenceExtractor

logger = logging.getLogger(__name__)

DELIMITER_PATTERN = re.compile(r'[,._ ]')
NUMBER_LETTER_BOUNDARY = re.compile(r'[0-9]+-[a-zA-Z]+')
SINGLE_CAPITAL = re.compile(r'^[A-Z]$')


@dataclass
class SectorRefinement:
    """Sectors and scalar fields produced by one refinement pass."""
    sectors: List[str]
    year: int = -1
    part: int = 0
    quality: Optional[MediaFileQuality] = None


@dataclass
class TokenizationResult:
    """Result of tokenizing a raw file name."""
    raw: str
    location: str
    extension: str
    original_name: str
    sectors: List[str] = field(default_factory=list)
    year: int = -1
    part: int = 0
    quality: Optional[MediaFileQuality] = None

    @property
    def folder(self) -> str:
        return folder_of(self.location)

    def to_json(self) -> str:
        """Convert result to JSON format."""
        return json.dumps({
            "raw": self.raw,
            "location": self.location,
            "extension": self.extension,
            "original_name": self.original_name,
            "sectors": self.sectors,
            "year": self.year,
            "part": self.part,
            "quality": self.quality.value if self.quality else None,
        })


def split_sectors(name: str) -> List[str]:
    """Split a name on the delimiter set, dropping empty fragments."""
    return [s for s in DELIMITER_PATTERN.split(name) if s]


def capitalize_first(sector: str) -> str:
    return sector[:1].upper() + sector[1:]


def split_number_letter_boundary(sectors: List[str], index: int) -> int:
    """
    Split "100-Special" into "100" and "Special" at the hyphen.

    Sectors whose remainder after the hyphen holds another hyphen
    ("100-year-old") are left intact.

    Returns:
        Number of sectors inserted (0 or 1)
    """
    match = NUMBER_LETTER_BOUNDARY.search(sectors[index])
    if not match:
        return 0
    sector = sectors[index]
    hyphen = match.start() + match.group().index('-')
    tail = sector[hyphen + 1:]
    if '-' in tail:
        return 0
    sectors[index] = sector[:hyphen]
    sectors.insert(index + 1, tail)
    return 1


def merge_single_capital(sectors: List[str], index: int, last_was_single: bool) -> Tuple[int, bool]:
    """
    Merge a lone capital letter into a preceding lone capital.

    Returns:
        (index of the sector now holding the letter, whether it was a lone capital)
    """
    if not SINGLE_CAPITAL.match(sectors[index]):
        return index, False
    if last_was_single and index > 0:
        sectors[index - 1] += sectors[index]
        del sectors[index]
        return index - 1, True
    return index, True


def drop_junk(sectors: List[str], state: JunkState) -> List[str]:
    """Cut everything from remove_start onwards and drop year sectors."""
    remove_start = len(sectors) if state.remove_start is None else state.remove_start
    years = set(state.year_indices)
    return [s for i, s in enumerate(sectors[:remove_start]) if i not in years]


def merge_capital_runs(sectors: List[str]) -> List[str]:
    """Merge lone capitals left next to each other once years are dropped."""
    merged = list(sectors)
    index = 0
    last_was_single = False
    while index < len(merged):
        index, last_was_single = merge_single_capital(merged, index, last_was_single)
        index += 1
    return merged


class Tokenizer:
    """Tokenizer producing a refined sector list from a raw file name."""

    def __init__(self, junk_classifier: Optional[JunkClassifier] = None,
                 sequence_extractor: Optional[SequenceExtractor] = None):
        self.path_parser = PathParser()
        self.junk_classifier = junk_classifier or JunkClassifier()
        self.sequence_extractor = sequence_extractor or SequenceExtractor()

    def tokenize(self, filepath: Union[str, PurePath]) -> TokenizationResult:
        """
        Tokenize a raw file path.

        Args:
            filepath: Path or bare file name, including the extension

        Returns:
            TokenizationResult

        Raises:
            MalformedNameError: If the name has no extension
        """
        path_result = self.path_parser.parse(filepath)
        refinement = self.refine(split_sectors(path_result.original_name))

        result = TokenizationResult(
            raw=path_result.raw,
            location=path_result.location,
            extension=path_result.extension,
            original_name=path_result.original_name,
            sectors=refinement.sectors,
            year=refinement.year,
            part=refinement.part,
            quality=refinement.quality,
        )
        logger.debug("Tokenized %r into %s", result.raw, result.sectors)
        return result

    def refine(self, sectors: Sequence[str]) -> SectorRefinement:
        """
        Run the refinement pass over a sector list.

        The input is copied. Re-running refine on its own output leaves
        capitalization and merged capitals unchanged.
        """
        sectors = list(sectors)
        state = JunkState()
        part = 0
        last_was_single = False

        index = 0
        while index < len(sectors):
            split_number_letter_boundary(sectors, index)
            if not sectors[index]:
                del sectors[index]
                continue

            sectors[index] = capitalize_first(sectors[index])

            index, last_was_single = merge_single_capital(sectors, index, last_was_single)

            match = self.sequence_extractor.extract_part(sectors, index)
            if match and match.part is not None:
                part = match.part
                # the marker is gone; re-examine whatever now sits at index
                continue

            self.junk_classifier.classify(sectors, index, state)
            index += 1

        return SectorRefinement(
            sectors=merge_capital_runs(drop_junk(sectors, state)),
            year=state.year,
            part=part,
            quality=state.quality,
        )
