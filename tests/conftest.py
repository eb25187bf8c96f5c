#!/usr/bin/env python3
"""
Shared fixtures.

File kinds keep their format strings, output directories and lookup switch
at class level; every test gets them back the way it found them.
"""

import pytest

from titlecleaner.media_file import MediaFile
from titlecleaner.movie_file import MovieFile
from titlecleaner.tv_file import TvFile


@pytest.fixture(autouse=True)
def restore_media_kinds():
    kinds = (MediaFile, TvFile, MovieFile)
    saved = {kind: (kind.default_format(), kind.type_directory()) for kind in kinds}
    saved_lookup = (TvFile._lookup, TvFile._lookup_enabled)
    yield
    for kind, (fmt, directory) in saved.items():
        kind.set_default_format(fmt)
        kind.set_type_directory(directory)
    TvFile._lookup, TvFile._lookup_enabled = saved_lookup
