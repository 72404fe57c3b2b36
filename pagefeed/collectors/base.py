"""
FeedItem / Channel dataclasses and BaseCollector ABC.
Every collector returns one Channel from its collect() method.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass

from pagefeed.profiles import SourceProfile


@dataclass(frozen=True)
class FeedItem:
    title:       str
    link:        str
    guid:        str           # dedup identity — the canonical link / share URL
    description: str = ""
    pub_date:    str = ""      # RFC 1123, empty when the source had no usable date
    thumbnail:   str = ""


@dataclass(frozen=True)
class Channel:
    title:       str
    link:        str
    description: str
    items:       tuple[FeedItem, ...] = ()
    skipped:     int = 0       # raw entries dropped for missing required fields


class BaseCollector(ABC):
    def __init__(self, profile: SourceProfile):
        self.profile = profile

    @abstractmethod
    async def collect(self) -> Channel:
        """Fetch the source and build its Channel. Fatal problems raise PageFeedError."""
        ...
