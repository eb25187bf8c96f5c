#!/usr/bin/env python3
"""Movie files: every surviving sector is part of the movie name."""

import re
from typing import List, Optional, Union
from pathlib import PurePath

from .media_file import MediaFile
from .template_renderer import DirectiveTable, TemplateRenderer
from .tokenizer import Tokenizer
from .trimmer import Trimmer

VALID_MOVIE_PATTERN = re.compile(r"^[^\[\]]*[a-zA-Z0-9][^\[\]]*?( \([0-9]{4}\))?$")
CLEANED_FORMAT = "N?( (Y))"


class MovieFile(MediaFile):
    """Type to store movie files."""

    KIND = "movie"

    _default_format = "C?( (P)).E"
    _type_directory = "Movies"

    def __init__(self, filepath: Union[str, PurePath],
                 tokenizer: Optional[Tokenizer] = None,
                 renderer: Optional[TemplateRenderer] = None,
                 trimmer: Optional[Trimmer] = None):
        super().__init__(filepath, tokenizer=tokenizer, renderer=renderer)
        self.name = (trimmer or Trimmer()).trim(" ".join(self.sectors))

    @property
    def cleaned(self) -> str:
        return self.render(CLEANED_FORMAT)

    def is_valid(self) -> bool:
        return bool(self.name) and bool(VALID_MOVIE_PATTERN.match(self.cleaned))

    def directive_chain(self) -> List[DirectiveTable]:
        return [{'N': lambda: self.name}] + super().directive_chain()
