#!/usr/bin/env python3
"""
Tests for the TitleCleaner entry point.
"""

import json
from unittest.mock import Mock

import pytest
from openpyxl import load_workbook

from title_cleaner import TitleCleaner
from titlecleaner import MetadataLookupAdapter, SeriesCandidate, TvFile
from titlecleaner.metadata_lookup import EpisodeInfo


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "runtime_config.json"


def test_clean_with_defaults(config_path):
    cleaner = TitleCleaner(config_path)

    assert cleaner.lookup is None
    assert cleaner.clean("Show.Name.S02E05.720p.HDTV.x264.mkv") == "Show Name - [02x05].mkv"
    assert cleaner.clean("Heat.1995.1080p.mkv") == "Heat (1995).mkv"
    assert cleaner.clean("Heat.1995.mkv", template="N") == "Heat"


def test_config_file_drives_formats_and_type(config_path):
    config_path.write_text(json.dumps({
        "formats": {"tv": "N Sxe.E"},
        "processing": {"media_type": "tv"},
    }), encoding="utf-8")

    cleaner = TitleCleaner(config_path)

    assert isinstance(cleaner.parse("Heat.1995.mkv"), TvFile)
    assert cleaner.clean("Show.S03E04.mkv") == "Show 03x04.mkv"


def test_lookup_uses_given_adapter(config_path):
    adapter = Mock(spec=MetadataLookupAdapter)
    adapter.search.return_value = [SeriesCandidate(id=1, display_name="Show")]
    adapter.lookup_episode.return_value = EpisodeInfo(title="Pilot", season=1, episode=1)

    cleaner = TitleCleaner(config_path, overrides={"lookup": {"enabled": True}}, adapter=adapter)

    assert cleaner.clean("Show.S01E01.mkv") == "Show - [01x01] - Pilot.mkv"


def test_lookup_disabled_without_api_key(config_path, monkeypatch):
    monkeypatch.delenv("TVDB_API_KEY", raising=False)

    cleaner = TitleCleaner(config_path, overrides={"lookup": {"enabled": True}})

    assert cleaner.lookup is None
    assert not TvFile.lookup_enabled()


def test_process_and_report(config_path, tmp_path):
    cleaner = TitleCleaner(config_path, overrides={"processing": {"output_root": "out"}})

    result = cleaner.process(["Show.S01E01.mkv", "broken"], parallel=True)
    report_path = cleaner.write_batch_report(result, tmp_path / "batch.xlsx")

    assert result.parsed_files == 1
    assert result.skipped_files == 1
    wb = load_workbook(report_path)
    try:
        assert wb["Batch Results"].max_row == 3
    finally:
        wb.close()


def test_expectations_and_report(config_path, tmp_path):
    tests_file = tmp_path / "tests.csv"
    tests_file.write_text("Show.S01E01.mkv,Show - [01x01].mkv\n", encoding="utf-8")
    cleaner = TitleCleaner(config_path)

    report = cleaner.check_expectations(tests_file)
    report_path = cleaner.write_expectation_report(report, tmp_path / "expectations.xlsx")

    assert report.passed == 1
    assert report_path.exists()
