#!/usr/bin/env python3
"""
Tests for the season/episode heuristics on refined sectors.
"""

import pytest

from titlecleaner import ConflictingSeasonError, EpisodeExtractor
from titlecleaner.episode_extractor import UNKNOWN_NAME, EpisodeExtraction


@pytest.fixture
def extractor():
    return EpisodeExtractor()


def test_season_and_episode_block(extractor):
    result = extractor.process(["Show", "Name", "S02E05"])

    assert result.season == 2
    assert result.episodes == [5]
    assert result.name == "Show Name"
    assert result.title == ""
    assert (result.block_start, result.block_end) == (2, 2)


def test_title_follows_the_block(extractor):
    result = extractor.process(["Show", "S01E02", "The", "Title"])

    assert result.name == "Show"
    assert result.title == "The Title"


def test_multi_episode_forms(extractor):
    assert extractor.process(["Show", "S01E01E02"]).episodes == [1, 2]
    assert extractor.process(["Show", "S01E01-02"]).episodes == [1, 2]


def test_separate_season_and_episode_sectors(extractor):
    result = extractor.process(["Show", "S03", "E07", "Title"])

    assert result.season == 3
    assert result.episodes == [7]
    assert result.name == "Show"
    assert result.title == "Title"


def test_cross_block_is_rewritten(extractor):
    result = extractor.process(["Show", "2x05-06"])

    assert result.season == 2
    assert result.episodes == [5, 6]
    assert result.sectors == ["Show", "S2E05-06"]
    assert result.name == "Show"


def test_season_and_episode_words(extractor):
    result = extractor.process(["Show", "Season", "2", "Episode", "3", "The", "Title"])

    assert result.season == 2
    assert result.episodes == [3]
    assert result.name == "Show"
    assert result.title == "The Title"


def test_episode_word_replaces_earlier_episodes(extractor):
    result = extractor.process(["Show", "E01E02", "Episode", "5"])

    assert result.episodes == [5]


def test_conflicting_seasons_raise(extractor):
    with pytest.raises(ConflictingSeasonError):
        extractor.process(["Show", "S01", "S02E01"])


def test_two_seasons_in_one_sector_raise(extractor):
    with pytest.raises(ConflictingSeasonError):
        extractor.process(["Show", "S01S02"])


def test_same_season_twice_is_allowed(extractor):
    result = extractor.process(["Show", "Season", "1", "S01E04"])

    assert result.season == 1
    assert result.episodes == [4]


def test_leading_number_is_the_episode(extractor):
    result = extractor.process(["01", "Pilot"])

    assert result.episodes == [1]
    assert result.name == UNKNOWN_NAME
    assert result.title == "Pilot"


def test_leading_block_with_dash_splits_name_and_title(extractor):
    result = extractor.process(["S01E01", "Show", "-", "Pilot"])

    assert result.name == "Show"
    assert result.title == "Pilot"


def test_bare_three_digit_number(extractor):
    result = extractor.process(["Show", "101"])

    assert result.season == 1
    assert result.episodes == [1]
    assert result.name == "Show"


def test_bare_number_with_trailing_number(extractor):
    result = extractor.process(["Show", "212", "Title", "7"])

    assert result.season == 2
    assert result.episodes == [12]
    assert result.title == "Title 7"


def test_single_digit_bare_number_holds_no_episode(extractor):
    result = extractor.process(["Show", "5", "Title"])

    assert result.episodes == []
    assert result.season == 0
    assert result.name == "Show"
    assert result.title == "Title"


def test_ambiguous_bare_numbers_do_nothing(extractor):
    result = extractor.process(["Show", "12", "Something", "34", "End"])

    assert result.episodes == []
    assert result.season == 0
    assert result.name == "Show 12 Something 34 End"
    assert result.title == ""


def test_words_with_s_and_e_are_not_blocks(extractor):
    result = extractor.process(["Show", "Seasons", "Cases", "Se7en"])

    assert result.season == 0
    assert result.episodes == []


def test_input_list_is_not_modified(extractor):
    sectors = ["Show", "1x02"]

    extractor.process(sectors)

    assert sectors == ["Show", "1x02"]


def test_extend_block_keeps_widest_span():
    result = EpisodeExtraction(sectors=["a", "b", "c", "d"])
    result.extend_block(2)
    result.extend_block(1, 3)
    result.extend_block(2)

    assert (result.block_start, result.block_end) == (1, 3)
