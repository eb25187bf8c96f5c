#!/usr/bin/env python3
"""
Sequence extractor module for part and disc markers.

Recognizes:
- part, cd, disk with trailing digits: "Part2", "CD1", "disk3"
- the same words followed by a separate number sector: "Part 2",
  "Part Two", "CD II"
Number words run from zero to ten; roman numerals from I to X.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

PART_MARKER_PATTERN = re.compile(r'^(part|cd|disk)(\d+)?$', re.IGNORECASE)
TRAILING_DIGITS_PATTERN = re.compile(r'\d+$')
DIGITS_PATTERN = re.compile(r'^\d+$')

NUMBER_WORDS = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
}

ROMAN_NUMERALS = {
    "i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5,
    "vi": 6, "vii": 7, "viii": 8, "ix": 9, "x": 10,
}


def from_number_word(sectors: List[str], index: int, roman: bool = False) -> bool:
    """
    Replace a spelled-out number (or roman numeral) in place with its digits.

    Args:
        sectors: Sector list to edit
        index: Index of the sector to convert
        roman: Also convert roman numerals

    Returns:
        True if the sector was converted
    """
    word = sectors[index].lower()
    number = NUMBER_WORDS.get(word)
    if number is None and roman:
        number = ROMAN_NUMERALS.get(word)
    if number is None:
        return False
    sectors[index] = str(number)
    return True


@dataclass
class PartMatch:
    """Outcome of part detection at one index."""
    part: Optional[int]
    removed: int  # sectors deleted from the list, starting at the marker index


class SequenceExtractor:
    """Detects part/disc markers and consumes them from a sector list."""

    def extract_part(self, sectors: List[str], index: int) -> Optional[PartMatch]:
        """
        Detect a part marker at index.

        A marker without digits consumes the following sector. A number
        word, roman numeral or digit run there becomes the part number;
        any other word is dropped and no part is recorded. The marker
        itself is removed only when a number was found.

        Returns:
            PartMatch when sectors[index] is a part marker, else None
        """
        marker = PART_MARKER_PATTERN.match(sectors[index])
        if not marker:
            return None

        digits = TRAILING_DIGITS_PATTERN.search(sectors[index])
        value: Optional[str] = digits.group() if digits else None
        removed = 0

        if value is None and index + 1 < len(sectors):
            from_number_word(sectors, index + 1, roman=True)
            lookahead = DIGITS_PATTERN.match(sectors[index + 1])
            if lookahead:
                value = lookahead.group()
            del sectors[index + 1]
            removed += 1

        if value is None:
            return PartMatch(part=None, removed=removed)

        del sectors[index]
        return PartMatch(part=int(value), removed=removed + 1)
