#!/usr/bin/env python3
"""
Tests for movie files.
"""

import pytest

from titlecleaner import MalformedNameError, MediaFileQuality, MovieFile


def test_movie_with_year_and_junk():
    movie = MovieFile("/films/Heat.1995.1080p.BluRay.x264.mkv")

    assert movie.name == "Heat"
    assert movie.year == 1995
    assert movie.quality == MediaFileQuality.HD1080
    assert movie.cleaned == "Heat (1995)"
    assert str(movie) == "Heat (1995).mkv"
    assert movie.is_valid()


def test_movie_without_year_drops_the_group():
    movie = MovieFile("the.big.lebowski.avi")

    assert movie.year == -1
    assert movie.year_text == ""
    assert movie.cleaned == "The Big Lebowski"
    assert movie.output_name == "The Big Lebowski.avi"


def test_movie_part_renders_in_default_format():
    movie = MovieFile("Kill.Bill.2003.Part.One.mkv")

    assert movie.part == 1
    assert movie.render() == "Kill Bill (2003) (1).mkv"


def test_movie_output_directory():
    assert MovieFile("Heat.mkv").output_directory == "Movies"


def test_empty_movie_name_is_not_valid():
    movie = MovieFile(".mkv")

    assert movie.name == ""
    assert not movie.is_valid()


def test_movie_requires_extension():
    with pytest.raises(MalformedNameError):
        MovieFile("Heat 1995")


def test_repr_names_the_kind():
    assert repr(MovieFile("Heat.mkv")) == "MovieFile('Heat.mkv')"
