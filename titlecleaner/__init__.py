"""
Title cleaner package.

This package contains the processing modules:
- path_parser: Location / name / extension split
- tokenizer: Sector splitting and refinement
- junk_classifier: Junk tag and year detection (rule table)
- sequence_extractor: Part and disc markers
- episode_extractor: Season, episode, series name and title heuristics
- template_renderer: Format string interpreter
- media_file, tv_file, movie_file: File kinds
- metadata_lookup: Remote episode title lookup
- media_factory: File kind selection
- config: Runtime configuration
- batch_processor: Batch cleaning with skip-and-report
- expectation_checker: Known input / expected name checks
- report_writer: Excel reports
"""

from .errors import (
    TitleCleanerError,
    MalformedNameError,
    ConflictingSeasonError,
    TemplateSyntaxError,
    MetadataLookupError,
)
from .cache import BracketCache, SelectionCache
from .path_parser import PathParser, PathParseResult
from .tokenizer import Tokenizer, TokenizationResult
from .junk_classifier import JunkClassifier, JunkRule
from .sequence_extractor import SequenceExtractor
from .episode_extractor import EpisodeExtractor, EpisodeExtraction
from .template_renderer import TemplateRenderer
from .quality import MediaFileQuality
from .media_file import MediaFile
from .tv_file import TvFile
from .movie_file import MovieFile
from .metadata_lookup import EpisodeLookup, MetadataLookupAdapter, SeriesCandidate, TvdbClient
from .media_factory import create_media_file
from .config import CleanerConfig
from .batch_processor import BatchProcessor, BatchResult
from .expectation_checker import ExpectationChecker, ExpectationReport

__all__ = [
    'TitleCleanerError',
    'MalformedNameError',
    'ConflictingSeasonError',
    'TemplateSyntaxError',
    'MetadataLookupError',
    'BracketCache',
    'SelectionCache',
    'PathParser',
    'PathParseResult',
    'Tokenizer',
    'TokenizationResult',
    'JunkClassifier',
    'JunkRule',
    'SequenceExtractor',
    'EpisodeExtractor',
    'EpisodeExtraction',
    'TemplateRenderer',
    'MediaFileQuality',
    'MediaFile',
    'TvFile',
    'MovieFile',
    'EpisodeLookup',
    'MetadataLookupAdapter',
    'SeriesCandidate',
    'TvdbClient',
    'create_media_file',
    'CleanerConfig',
    'BatchProcessor',
    'BatchResult',
    'ExpectationChecker',
    'ExpectationReport',
]
