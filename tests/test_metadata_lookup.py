#!/usr/bin/env python3
"""
Tests for the TVDB client and the episode lookup selection policy.
"""

from __future__ import annotations

import threading
import time
from unittest.mock import Mock, patch

import pytest
import requests

from titlecleaner import EpisodeLookup, MetadataLookupAdapter, MetadataLookupError, SelectionCache, SeriesCandidate, TvdbClient
from titlecleaner.metadata_lookup import EpisodeInfo


def _response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    response.content = b""
    return response


LOGIN = _response(payload={"status": "success", "data": {"token": "abc"}})


# ----------------------------------------------------------------------
# TvdbClient
# ----------------------------------------------------------------------

def test_client_requires_api_key(monkeypatch):
    monkeypatch.delenv("TVDB_API_KEY", raising=False)

    with pytest.raises(MetadataLookupError):
        TvdbClient()


def test_client_reads_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("TVDB_API_KEY", "env-key")

    assert TvdbClient().api_key == "env-key"


def test_search_logs_in_once_and_parses_candidates():
    client = TvdbClient(api_key="key")
    client.max_retries = 1

    search = _response(payload={"data": [
        {"tvdb_id": "81189", "name": "Breaking Bad", "year": "2008"},
        {"id": "series-12345", "name": "Breaking Bad (Mini)"},
        {"name": "No id"},
    ]})

    with patch("titlecleaner.metadata_lookup.requests.post", return_value=LOGIN) as post, \
            patch("titlecleaner.metadata_lookup.requests.get", return_value=search) as get:
        candidates = client.search("Breaking Bad")
        client.search("Breaking Bad")

    assert post.call_count == 1
    assert get.call_count == 2
    assert [c.id for c in candidates] == [81189, 12345]
    assert candidates[0].display_name == "Breaking Bad"
    assert candidates[0].year == "2008"

    _args, kwargs = get.call_args
    assert kwargs["params"] == {"query": "Breaking Bad", "type": "series"}
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_lookup_episode_matches_season_and_number():
    client = TvdbClient(api_key="key")
    client.max_retries = 1
    client.token = "abc"

    episodes = _response(payload={"data": {"episodes": [
        {"seasonNumber": 1, "number": 2, "name": "Cat's in the Bag..."},
        {"seasonNumber": 1, "number": 1, "name": "Pilot"},
    ]}})

    with patch("titlecleaner.metadata_lookup.requests.get", return_value=episodes) as get:
        info = client.lookup_episode(81189, 1, 1)

    assert info == EpisodeInfo(title="Pilot", season=1, episode=1)
    assert get.call_args[0][0].endswith("/series/81189/episodes/default/eng")


def test_lookup_episode_not_found_returns_none():
    client = TvdbClient(api_key="key")
    client.max_retries = 1
    client.token = "abc"

    with patch("titlecleaner.metadata_lookup.requests.get", return_value=_response(404)):
        assert client.lookup_episode(1, 1, 1) is None


def test_request_retries_then_raises():
    client = TvdbClient(api_key="key")
    client.max_retries = 3
    client.retry_delay = 0
    client.token = "abc"

    with patch("titlecleaner.metadata_lookup.requests.get", return_value=_response(500)) as get, \
            patch("titlecleaner.metadata_lookup.time.sleep") as sleep:
        with pytest.raises(MetadataLookupError):
            client.search("Show")

    assert get.call_count == 3
    assert sleep.call_count == 2


def test_request_wraps_connection_errors():
    client = TvdbClient(api_key="key")
    client.max_retries = 1
    client.token = "abc"

    with patch("titlecleaner.metadata_lookup.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(MetadataLookupError):
            client.search("Show")


def test_login_without_token_raises():
    client = TvdbClient(api_key="key")
    client.max_retries = 1

    with patch("titlecleaner.metadata_lookup.requests.post", return_value=_response(payload={"data": {}})):
        with pytest.raises(MetadataLookupError):
            client.login()


# ----------------------------------------------------------------------
# EpisodeLookup
# ----------------------------------------------------------------------

@pytest.fixture
def adapter():
    adapter = Mock(spec=MetadataLookupAdapter)
    adapter.lookup_episode.side_effect = lambda series_id, season, episode: EpisodeInfo(
        title=f"Title {series_id}", season=season, episode=episode
    )
    return adapter


def test_single_candidate_is_used_directly(adapter):
    adapter.search.return_value = [SeriesCandidate(id=5, display_name="Show")]
    chooser = Mock()
    lookup = EpisodeLookup(adapter, choose_series=chooser, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [2, 3]) == "Title 5"
    adapter.lookup_episode.assert_called_once_with(5, 1, 2)
    chooser.assert_not_called()


def test_several_candidates_ask_the_chooser_once_per_name(adapter):
    candidates = [SeriesCandidate(id=5, display_name="Show"), SeriesCandidate(id=7, display_name="Show (2010)")]
    adapter.search.return_value = candidates
    chooser = Mock(return_value=7)
    lookup = EpisodeLookup(adapter, choose_series=chooser, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [1]) == "Title 7"
    assert lookup.title_for("  show ", 1, [2]) == "Title 7"
    chooser.assert_called_once_with(candidates)


def test_parallel_lookups_ask_the_chooser_once(adapter):
    adapter.search.return_value = [SeriesCandidate(id=5, display_name="A"), SeriesCandidate(id=6, display_name="B")]
    calls = []

    def chooser(candidates):
        calls.append(candidates)
        time.sleep(0.05)
        return 6

    lookup = EpisodeLookup(adapter, choose_series=chooser, selection_cache=SelectionCache())
    barrier = threading.Barrier(6)
    titles = []

    def worker():
        barrier.wait()
        titles.append(lookup.title_for("Show", 1, [1]))

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert titles == ["Title 6"] * 6


def test_confirm_asks_even_for_one_candidate(adapter):
    adapter.search.return_value = [SeriesCandidate(id=5, display_name="Show")]
    chooser = Mock(return_value=5)
    lookup = EpisodeLookup(adapter, choose_series=chooser, confirm=True, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [1]) == "Title 5"
    chooser.assert_called_once()


def test_chooser_declining_is_remembered(adapter):
    adapter.search.return_value = [SeriesCandidate(id=5, display_name="A"), SeriesCandidate(id=6, display_name="B")]
    chooser = Mock(return_value=0)
    lookup = EpisodeLookup(adapter, choose_series=chooser, selection_cache=SelectionCache())

    assert lookup.find_episode("Show", 1, [1]) is None
    assert lookup.find_episode("Show", 1, [1]) is None
    chooser.assert_called_once()
    adapter.lookup_episode.assert_not_called()


def test_no_chooser_means_no_title(adapter):
    adapter.search.return_value = [SeriesCandidate(id=5, display_name="A"), SeriesCandidate(id=6, display_name="B")]
    lookup = EpisodeLookup(adapter, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [1]) is None


def test_no_candidates_means_no_title(adapter):
    adapter.search.return_value = []
    lookup = EpisodeLookup(adapter, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [1]) is None
    adapter.lookup_episode.assert_not_called()


def test_unknown_or_empty_input_skips_search(adapter):
    lookup = EpisodeLookup(adapter, selection_cache=SelectionCache())

    assert lookup.find_episode("Unknown", 1, [1]) is None
    assert lookup.find_episode("", 1, [1]) is None
    assert lookup.find_episode("Show", 1, []) is None
    adapter.search.assert_not_called()


def test_adapter_failures_become_no_title(adapter):
    adapter.search.side_effect = MetadataLookupError("boom")
    lookup = EpisodeLookup(adapter, selection_cache=SelectionCache())

    assert lookup.title_for("Show", 1, [1]) is None

    adapter.search.side_effect = requests.Timeout("slow")

    assert lookup.title_for("Show", 1, [1]) is None
