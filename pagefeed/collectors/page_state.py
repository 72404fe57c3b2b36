"""
Page-state collector — turns one SourceProfile into one Channel.

    fetch → locate script → parse JSON → containers/collections
          → normalize each entry → drop repeated guids → Channel

build_channel() is the synchronous core and does no I/O, so the same markup
always yields the same Channel. collect() adds the single awaited fetch.
Fatal errors (FetchFailed, PayloadNotFound, MalformedPayload) propagate;
entries missing a required field are logged and counted, not fatal.
"""
from typing import Awaitable, Callable

from loguru import logger

from pagefeed.collectors.base import BaseCollector, Channel, FeedItem
from pagefeed.collectors.fetcher import fetch_page
from pagefeed.exceptions import ItemSkipped
from pagefeed.extract.dedup import Deduplicator
from pagefeed.extract.locator import locate_payload
from pagefeed.extract.navigator import channel_metadata, iter_raw_entries
from pagefeed.extract.normalizer import normalize_entry
from pagefeed.extract.tree import parse_payload
from pagefeed.profiles import SourceProfile

Fetcher = Callable[[str], Awaitable[str]]


class PageStateCollector(BaseCollector):
    """One instance per profile run. Fetches the page and builds its Channel."""

    def __init__(self, profile: SourceProfile, fetcher: Fetcher | None = None):
        super().__init__(profile)
        self.fetcher = fetcher or fetch_page

    async def collect(self) -> Channel:
        html    = await self.fetcher(self.profile.url)
        channel = build_channel(html, self.profile)
        logger.info(
            f"[PageState] {self.profile.name}: {len(channel.items)} items"
            + (f", {channel.skipped} skipped" if channel.skipped else "")
        )
        return channel


def build_channel(html: str, profile: SourceProfile) -> Channel:
    payload = locate_payload(html, profile.locator)
    tree    = parse_payload(payload)

    title, link, description = channel_metadata(tree, profile.channel)
    if not title:
        logger.warning(f"[PageState] {profile.name}: channel title missing at {profile.channel.title!r}")

    dedup   = Deduplicator()
    items:  list[FeedItem] = []
    skipped = 0
    dupes   = 0

    for entry in iter_raw_entries(tree, profile):
        try:
            item = normalize_entry(entry, profile.base_url)
        except ItemSkipped as exc:
            skipped += 1
            logger.debug(f"[PageState] {profile.name}: skipped entry from {entry.spec.path}: {exc}")
            continue

        if not dedup.accept(item):
            dupes += 1
            continue
        items.append(item)

    if dupes:
        logger.debug(f"[PageState] {profile.name}: dropped {dupes} duplicate guids")

    return Channel(
        title       = title,
        link        = link,
        description = description,
        items       = tuple(items),
        skipped     = skipped,
    )
