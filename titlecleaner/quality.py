#!/usr/bin/env python3
"""Quality levels a junk tag can reveal."""

from enum import Enum
from typing import Optional


class MediaFileQuality(Enum):
    SD = "SD"
    HD720 = "720p"
    HD1080 = "1080p"
    UHD = "2160p"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional['MediaFileQuality']:
        """Look up a member by name, returning None for unknown names."""
        if not name:
            return None
        return cls.__members__.get(str(name).upper())
