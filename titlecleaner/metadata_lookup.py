#!/usr/bin/env python3
"""
Episode title lookup against a remote metadata service.

This module provides:
- the adapter contract the rest of the cleaner talks to (search a series,
  look up one episode)
- TvdbClient, an adapter for TheTVDB v4 REST API
- EpisodeLookup, the selection policy on top of an adapter: pick a series
  automatically when the search is unambiguous, otherwise ask a callback
  once per series name and remember the answer

Lookups are slow and can fail. Failures are logged and reported as "no
title"; they never abort parsing.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from .cache import SelectionCache, default_selection_cache
from .errors import MetadataLookupError

logger = logging.getLogger(__name__)

NO_SERIES = 0
UNKNOWN_SERIES_NAME = "Unknown"
TVDB_BASE_URL = "https://api4.thetvdb.com/v4"


@dataclass
class SeriesCandidate:
    """One search hit."""

    id: int
    display_name: str
    year: Optional[str] = None


@dataclass
class EpisodeInfo:
    """An episode as reported by the metadata service."""

    title: str
    season: int
    episode: int


SeriesChooser = Callable[[List[SeriesCandidate]], int]


class MetadataLookupAdapter:
    """Contract for metadata services. Implementations raise MetadataLookupError on failure."""

    def search(self, series_name: str) -> List[SeriesCandidate]:
        raise NotImplementedError

    def lookup_episode(self, series_id: int, season: int, episode: int) -> Optional[EpisodeInfo]:
        raise NotImplementedError


class TvdbClient(MetadataLookupAdapter):
    """
    Client for TheTVDB v4 API.

    Logs in lazily with the API key and reuses the bearer token. Requests
    are retried with exponential backoff before giving up.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: str = TVDB_BASE_URL,
                 language: str = "eng"):
        self.api_key = api_key or os.getenv("TVDB_API_KEY", "")
        if not self.api_key:
            raise MetadataLookupError("TVDB API key is required. Set TVDB_API_KEY environment variable.")

        self.base_url = base_url.rstrip("/")
        self.language = language
        self.token: Optional[str] = None

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self.max_retries = 3
        self.retry_delay = 1.0
        self.timeout = 30

    def login(self) -> str:
        data = self._request("post", "login", json_data={"apikey": self.api_key}, authenticate=False)
        token = (data.get("data") or {}).get("token")
        if not token:
            raise MetadataLookupError("TVDB login returned no token")
        self.token = token
        return token

    def search(self, series_name: str) -> List[SeriesCandidate]:
        logger.info("Searching TVDB for series: %r", series_name)
        data = self._request("get", "search", params={"query": series_name, "type": "series"})
        candidates: List[SeriesCandidate] = []
        for item in data.get("data") or []:
            raw_id = item.get("tvdb_id") or item.get("id")
            try:
                series_id = int(str(raw_id).rsplit("-", 1)[-1])
            except (TypeError, ValueError):
                continue
            candidates.append(SeriesCandidate(
                id=series_id,
                display_name=item.get("name") or "",
                year=item.get("year"),
            ))
        logger.info("TVDB returned %s series for %r", len(candidates), series_name)
        return candidates

    def lookup_episode(self, series_id: int, season: int, episode: int) -> Optional[EpisodeInfo]:
        logger.debug("Looking up series %s S%02dE%02d", series_id, season, episode)
        data = self._request(
            "get",
            f"series/{series_id}/episodes/default/{self.language}",
            params={"season": season, "episodeNumber": episode, "page": 0},
        )
        episodes = (data.get("data") or {}).get("episodes") or []
        for item in episodes:
            if item.get("seasonNumber") == season and item.get("number") == episode and item.get("name"):
                return EpisodeInfo(title=item["name"], season=season, episode=episode)
        return None

    def _request(self, method: str, endpoint: str, params: Optional[Dict[str, Any]] = None,
                 json_data: Optional[Dict[str, Any]] = None, authenticate: bool = True) -> Dict[str, Any]:
        if authenticate and not self.token:
            self.login()

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = dict(self.headers)
        if authenticate:
            headers["Authorization"] = f"Bearer {self.token}"

        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                if method == "post":
                    response = requests.post(url, json=json_data, headers=headers, timeout=self.timeout)
                else:
                    response = requests.get(url, params=params, headers=headers, timeout=self.timeout)

                if response.status_code == 404:
                    return {}
                if response.status_code != 200:
                    raise MetadataLookupError(f"HTTP {response.status_code}: {response.content!r}")

                return response.json() or {}
            except (requests.RequestException, ValueError, MetadataLookupError) as exc:
                last_error = exc
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_delay * (2**attempt))
                    continue
                raise MetadataLookupError(f"TVDB request failed after retries: {last_error}") from last_error

        raise MetadataLookupError("Unreachable: retry loop should have returned or raised")


class EpisodeLookup:
    """Selection policy for turning a parsed episode into a remote title."""

    def __init__(self, adapter: MetadataLookupAdapter,
                 choose_series: Optional[SeriesChooser] = None,
                 confirm: bool = False,
                 selection_cache: Optional[SelectionCache] = None):
        self.adapter = adapter
        self.choose_series = choose_series
        self.confirm = confirm
        self.selection_cache = selection_cache if selection_cache is not None else default_selection_cache

    def find_episode(self, series_name: str, season: int, episodes: Sequence[int]) -> Optional[EpisodeInfo]:
        """
        Find the first listed episode of a series.

        A single search hit is used directly unless confirmation is on.
        Several hits (or one hit with confirmation on) go to choose_series,
        whose answer is cached per series name; 0 means "none of these".
        """
        if not episodes or not series_name or series_name == UNKNOWN_SERIES_NAME:
            return None

        try:
            candidates = self.adapter.search(series_name)

            if len(candidates) == 1 and not self.confirm:
                return self.adapter.lookup_episode(candidates[0].id, season, episodes[0])
            if not candidates:
                return None

            key = SelectionCache.normalize(series_name)
            series_id = self.selection_cache.get_or_compute(key, lambda: self._choose(candidates))
            if series_id == NO_SERIES:
                return None
            return self.adapter.lookup_episode(series_id, season, episodes[0])
        except (MetadataLookupError, requests.RequestException) as exc:
            logger.warning("Episode lookup failed for %r: %s", series_name, exc)
            return None

    def title_for(self, series_name: str, season: int, episodes: Sequence[int]) -> Optional[str]:
        episode = self.find_episode(series_name, season, episodes)
        return episode.title if episode else None

    def _choose(self, candidates: List[SeriesCandidate]) -> int:
        if self.choose_series is None:
            logger.warning("No series chooser configured; skipping %s candidates", len(candidates))
            return NO_SERIES
        return int(self.choose_series(candidates) or NO_SERIES)
