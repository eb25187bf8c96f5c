#!/usr/bin/env python3
"""
Title cleaner - media file name parsing and canonical renaming.

Library entry point wiring configuration, metadata lookup, file kind
selection, batch processing and reports together.

Usage:
    from title_cleaner import TitleCleaner
    cleaner = TitleCleaner()
    cleaner.clean("Show.Name.S02E05.720p.HDTV.x264.mkv")
    # 'Show Name - [02x05].mkv'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from titlecleaner import (
    BatchProcessor,
    BatchResult,
    CleanerConfig,
    EpisodeLookup,
    ExpectationChecker,
    ExpectationReport,
    MediaFile,
    MetadataLookupAdapter,
    MetadataLookupError,
    TvdbClient,
    create_media_file,
)
from titlecleaner.metadata_lookup import SeriesChooser
from titlecleaner.report_writer import batch_sheet, expectation_sheet, write_report

logger = logging.getLogger(__name__)


class TitleCleaner:
    """Cleans media file names according to a runtime configuration."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None,
                 overrides: Optional[Dict[str, Any]] = None,
                 adapter: Optional[MetadataLookupAdapter] = None,
                 choose_series: Optional[SeriesChooser] = None):
        """
        Initialize the cleaner and apply its configuration to the file kinds.

        Args:
            config_path: Runtime config file (runtime_config.json by default)
            overrides: Config sections taking precedence over the file
            adapter: Metadata adapter; a TvdbClient is built when lookups are
                enabled and none is given
            choose_series: Callback picking a series among several candidates
        """
        self.config = CleanerConfig.load(config_path, overrides)
        self.lookup = self._build_lookup(adapter, choose_series)
        self.config.apply(self.lookup)

    def _build_lookup(self, adapter: Optional[MetadataLookupAdapter],
                      choose_series: Optional[SeriesChooser]) -> Optional[EpisodeLookup]:
        if not self.config.lookup_enabled:
            return None
        if adapter is None:
            try:
                adapter = TvdbClient(api_key=self.config.api_key, base_url=self.config.base_url)
            except MetadataLookupError as exc:
                logger.warning("Episode lookups disabled: %s", exc)
                return None
        return EpisodeLookup(adapter, choose_series=choose_series, confirm=self.config.confirm)

    def parse(self, filepath: Union[str, Path], media_type: Optional[str] = None) -> MediaFile:
        """Build the media file for one path (configured media type by default)."""
        return create_media_file(filepath, media_type or self.config.media_type)

    def clean(self, filepath: Union[str, Path], template: Optional[str] = None) -> str:
        """Render the cleaned name of one path."""
        return self.parse(filepath).render(template)

    def process(self, paths: Sequence[Union[str, Path]], parallel: bool = False) -> BatchResult:
        """Plan output names and locations for many paths."""
        processor = BatchProcessor(media_type=self.config.media_type, output_root=self.config.output_root)
        if parallel:
            return processor.process_parallel(paths)
        return processor.process(paths)

    def check_expectations(self, filepath: Union[str, Path], template: Optional[str] = None) -> ExpectationReport:
        """Run a CSV/.xlsx file of input,expected pairs."""
        checker = ExpectationChecker(media_type=self.config.media_type, template=template)
        return checker.check_file(filepath)

    def write_batch_report(self, result: BatchResult, output_path: Union[str, Path]) -> Path:
        path = write_report(output_path, [batch_sheet(result)])
        logger.info("Wrote batch report to %s", path)
        return path

    def write_expectation_report(self, report: ExpectationReport, output_path: Union[str, Path]) -> Path:
        path = write_report(output_path, [expectation_sheet(report)])
        logger.info("Wrote expectation report to %s", path)
        return path
