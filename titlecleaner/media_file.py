#!/usr/bin/env python3
"""
Base class for all media file kinds.

A MediaFile is built in one pass from a raw path: the tokenizer splits off
location and extension, refines the name into sectors and pulls out year,
part and quality. Subclasses read (and may further rewrite) the sectors in
their own constructors.

Each kind keeps its own default format string and output directory name.
"""

import logging
from typing import List, Optional, Union
from pathlib import PurePath

from .path_parser import folder_of
from .quality import MediaFileQuality
from .template_renderer import DirectiveTable, RenderSource, TemplateRenderer
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class MediaFile(RenderSource):
    """Superclass of all media files."""

    KIND = "media"

    _default_format = "C?( (P)).E"
    _type_directory = "Media"

    _shared_tokenizer: Optional[Tokenizer] = None
    _shared_renderer: Optional[TemplateRenderer] = None

    def __init__(self, filepath: Union[str, PurePath],
                 tokenizer: Optional[Tokenizer] = None,
                 renderer: Optional[TemplateRenderer] = None):
        """
        Args:
            filepath: Path or bare file name, including the extension
            tokenizer: Tokenizer to use instead of the shared one
            renderer: Template renderer to use instead of the shared one

        Raises:
            MalformedNameError: If the name has no extension
        """
        result = (tokenizer or MediaFile.shared_tokenizer()).tokenize(filepath)
        self.renderer = renderer or MediaFile.shared_renderer()

        self.raw = result.raw
        self.location = result.location
        self.extension = result.extension
        self.original_name = result.original_name
        self.sectors: List[str] = result.sectors
        self.year = result.year
        self.part = result.part
        self.quality: Optional[MediaFileQuality] = result.quality

    # ------------------------------------------------------------------
    # Shared collaborators and per-kind configuration
    # ------------------------------------------------------------------

    @staticmethod
    def shared_tokenizer() -> Tokenizer:
        if MediaFile._shared_tokenizer is None:
            MediaFile._shared_tokenizer = Tokenizer()
        return MediaFile._shared_tokenizer

    @staticmethod
    def shared_renderer() -> TemplateRenderer:
        if MediaFile._shared_renderer is None:
            MediaFile._shared_renderer = TemplateRenderer()
        return MediaFile._shared_renderer

    @classmethod
    def default_format(cls) -> str:
        """Format string used by str() and output_name for this kind."""
        return cls._default_format

    @classmethod
    def set_default_format(cls, value: str) -> None:
        cls._default_format = value

    @classmethod
    def type_directory(cls) -> str:
        """Directory name files of this kind are stored under when moved."""
        return cls._type_directory

    @classmethod
    def set_type_directory(cls, value: str) -> None:
        cls._type_directory = value

    # ------------------------------------------------------------------
    # Derived fields
    # ------------------------------------------------------------------

    @property
    def folder(self) -> str:
        """Name of the directory the file is stored in, '' if none."""
        return folder_of(self.location)

    @property
    def output_directory(self) -> str:
        return self.type_directory()

    @property
    def output_name(self) -> str:
        return self.render()

    @property
    def year_text(self) -> str:
        return "" if self.year <= 0 else str(self.year)

    @property
    def part_text(self) -> str:
        return "" if self.part == 0 else str(self.part)

    @property
    def cleaned(self) -> str:
        """Default cleaned name of this file, without extension."""
        raise NotImplementedError

    def is_valid(self) -> bool:
        """Whether the file looks like a file of this kind."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def directive_chain(self) -> List[DirectiveTable]:
        return [self.base_directives()]

    def base_directives(self) -> DirectiveTable:
        """
        L:  Location
        O:  Original file name
        C:  Cleaned file name
        E:  File extension
        Y:  Year (empty when unknown)
        P:  Part of file (empty when not split)
        """
        return {
            'L': lambda: self.location,
            'O': lambda: self.original_name,
            'C': lambda: self.cleaned,
            'E': lambda: self.extension,
            'Y': lambda: self.year_text,
            'P': lambda: self.part_text,
        }

    def render(self, template: Optional[str] = None) -> str:
        """Render a format string (the kind's default when omitted)."""
        return self.renderer.render(self.default_format() if template is None else template, self)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.raw!r})"
