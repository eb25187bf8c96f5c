#!/usr/bin/env python3
"""
Batch processor for cleaning many file names at once.

Each path is turned into a media file and its planned output location is
computed as output_root / type directory / rendered name. Nothing is moved
or copied. A file that fails with a fatal parse error is skipped and
reported; it never aborts the run.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .errors import ConflictingSeasonError, MalformedNameError, TemplateSyntaxError
from .media_factory import create_media_file
from .media_file import MediaFile

FATAL_ERRORS = (MalformedNameError, ConflictingSeasonError, TemplateSyntaxError)

MediaFactory = Callable[[Union[str, PurePath], Optional[str]], MediaFile]
PathInput = Union[str, PurePath]


@dataclass
class BatchEntry:
    """Outcome for one input path."""
    path: str
    kind: Optional[str] = None
    output_name: Optional[str] = None
    output_path: Optional[str] = None
    media_file: Optional[MediaFile] = None
    error: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class BatchResult:
    total_files: int
    parsed_files: int
    skipped_files: int
    entries: List[BatchEntry] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    processing_time: float = 0.0
    files_per_second: float = 0.0


class BatchProcessor:
    def __init__(
        self,
        media_type: Optional[str] = None,
        output_root: Union[str, Path] = "",
        factory: Optional[MediaFactory] = None,
        batch_size: int = 50,
        max_workers: int = 4,
    ) -> None:
        self.media_type = media_type
        self.output_root = str(output_root or "")
        self.factory = factory or create_media_file
        self.batch_size = batch_size
        self.max_workers = max_workers

        self.logger = logging.getLogger(__name__)

    def process(
        self,
        paths: Sequence[PathInput],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> BatchResult:
        start_time = time.time()
        total_files = len(paths)
        entries: List[BatchEntry] = []

        self.logger.info("Starting batch processing of %s files", total_files)

        for i in range(0, total_files, self.batch_size):
            batch = list(paths[i : i + self.batch_size])
            self.logger.info("Processing batch %s (%s files)", i // self.batch_size + 1, len(batch))

            entries.extend(self.process_one(path) for path in batch)
            if progress_callback:
                progress_callback(len(entries), total_files)

        return self._summarize(entries, start_time)

    def process_parallel(
        self,
        paths: Sequence[PathInput],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> BatchResult:
        """Like process, spread over a thread pool. Entry order follows input order."""
        start_time = time.time()
        total_files = len(paths)

        self.logger.info("Starting parallel processing of %s files with %s workers", total_files, self.max_workers)

        entries: List[BatchEntry] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for entry in executor.map(self.process_one, paths):
                entries.append(entry)
                if progress_callback:
                    progress_callback(len(entries), total_files)

        return self._summarize(entries, start_time)

    def process_one(self, path: PathInput) -> BatchEntry:
        """Parse one path; fatal parse errors become a skipped entry."""
        entry = BatchEntry(path=str(path))
        try:
            media_file = self.factory(path, self.media_type)
            entry.media_file = media_file
            entry.kind = media_file.KIND
            entry.output_name = media_file.output_name
            entry.output_path = self.plan_output_path(media_file, entry.output_name)
        except FATAL_ERRORS as exc:
            entry.error = f"{type(exc).__name__}: {exc}"
            self.logger.warning("Skipping %r: %s", entry.path, entry.error)
        return entry

    def plan_output_path(self, media_file: MediaFile, output_name: Optional[str] = None) -> str:
        """output_root / type directory / rendered name, as a string."""
        parts = [p for p in (self.output_root, media_file.output_directory) if p]
        return str(PurePath(*parts, output_name or media_file.output_name))

    def _summarize(self, entries: List[BatchEntry], start_time: float) -> BatchResult:
        skipped = [entry for entry in entries if entry.skipped]
        errors = [{"path": entry.path, "error": entry.error, "type": "parse"} for entry in skipped]

        processing_time = time.time() - start_time
        total_files = len(entries)
        files_per_second = (total_files / processing_time) if processing_time > 0 else 0.0

        self.logger.info("Processed %s files (%s skipped)", total_files, len(skipped))

        return BatchResult(
            total_files=total_files,
            parsed_files=total_files - len(skipped),
            skipped_files=len(skipped),
            entries=entries,
            errors=errors,
            processing_time=processing_time,
            files_per_second=files_per_second,
        )
