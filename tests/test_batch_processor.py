#!/usr/bin/env python3
"""
Tests for BatchProcessor planning and skip-and-report behaviour.
"""

from __future__ import annotations

from pathlib import PurePath
from unittest.mock import Mock

from titlecleaner import BatchProcessor, MalformedNameError


def test_batch_processor_plans_output_paths():
    processor = BatchProcessor(output_root="library", batch_size=10)

    result = processor.process(["/in/Show.Name.S02E05.720p.mkv", "/in/Heat.1995.1080p.mkv"])

    assert result.total_files == 2
    assert result.parsed_files == 2
    assert result.skipped_files == 0

    tv, movie = result.entries
    assert tv.kind == "tv"
    assert tv.output_name == "Show Name - [02x05].mkv"
    assert tv.output_path == str(PurePath("library", "TV", "Show Name - [02x05].mkv"))
    assert movie.kind == "movie"
    assert movie.output_path == str(PurePath("library", "Movies", "Heat (1995).mkv"))


def test_batch_processor_skips_and_reports_fatal_errors():
    processor = BatchProcessor(batch_size=2)

    result = processor.process(["Show.S01E01.mkv", "no_extension", "Show.S01.S02E01.mkv"])

    assert result.total_files == 3
    assert result.parsed_files == 1
    assert result.skipped_files == 2
    assert [error["path"] for error in result.errors] == ["no_extension", "Show.S01.S02E01.mkv"]
    assert result.errors[0]["error"].startswith("MalformedNameError")
    assert result.errors[1]["error"].startswith("ConflictingSeasonError")
    assert result.entries[1].skipped
    assert result.entries[1].output_path is None


def test_batch_processor_without_output_root():
    processor = BatchProcessor()

    entry = processor.process_one("Heat.mkv")

    assert entry.output_path == str(PurePath("Movies", "Heat.mkv"))


def test_batch_processor_forced_media_type():
    processor = BatchProcessor(media_type="movie")

    entry = processor.process_one("Show.Name.S02E05.mkv")

    assert entry.kind == "movie"
    assert entry.output_name == "Show Name S02E05.mkv"


def test_batch_processor_reports_progress_per_batch():
    processor = BatchProcessor(batch_size=2)
    progress = Mock()

    processor.process(["a.mkv", "b.mkv", "c.mkv"], progress_callback=progress)

    assert [call.args for call in progress.call_args_list] == [(2, 3), (3, 3)]


def test_batch_processor_uses_injected_factory():
    factory = Mock(side_effect=MalformedNameError("bad"))
    processor = BatchProcessor(media_type="tv", factory=factory)

    result = processor.process(["x"])

    factory.assert_called_once_with("x", "tv")
    assert result.skipped_files == 1


def test_parallel_processing_keeps_input_order():
    processor = BatchProcessor(max_workers=3)
    paths = [f"Show.S01E{n:02d}.mkv" for n in range(1, 10)] + ["broken"]

    result = processor.process_parallel(paths)

    assert [entry.path for entry in result.entries] == paths
    assert result.entries[4].output_name == "Show - [01x05].mkv"
    assert result.skipped_files == 1
