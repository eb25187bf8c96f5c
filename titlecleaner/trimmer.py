#!/usr/bin/env python3
"""
Strips separator debris (" ", "-", "." by default) from both ends of
series names, episode titles and movie names.
"""

from typing import Iterable, List, Optional, Sequence

from .dictionary_loader import DictionaryLoader

DEFAULT_TRIMMING_STRINGS = (" ", "-", ".")


def _strip_once(text: str, affixes: Sequence[str]) -> str:
    for affix in affixes:
        if text.startswith(affix):
            text = text[len(affix):]
    for affix in affixes:
        if text.endswith(affix):
            text = text[:-len(affix)]
    return text


class Trimmer:
    """Repeatedly removes configured affixes until the string is stable."""

    def __init__(self, trimming_strings: Optional[Sequence[str]] = None):
        """
        Args:
            trimming_strings: Affixes to strip. Defaults to the rule table's
                'trimming_strings' section, then to space, dash and dot.
        """
        if trimming_strings is None:
            trimming_strings = (DictionaryLoader.get_section('trimming_strings')
                                or DEFAULT_TRIMMING_STRINGS)
        self.trimming_strings = [s for s in trimming_strings if s]

    def trim(self, text: str) -> str:
        """
        Strip affixes from both ends.

        >>> Trimmer().trim(" - . Pilot . - ")
        'Pilot'
        """
        previous = None
        while text and text != previous:
            previous = text
            text = _strip_once(text, self.trimming_strings)
        return text

    def trim_all(self, strings: Iterable[str]) -> List[str]:
        return [self.trim(s) for s in strings]
