"""Run-scoped guid set. Create one per run; never share between runs."""
from pagefeed.collectors.base import FeedItem


class Deduplicator:
    def __init__(self):
        self._seen: set[str] = set()

    def accept(self, item: FeedItem) -> bool:
        """True (and remember the guid) the first time a guid is seen, False after."""
        if item.guid in self._seen:
            return False
        self._seen.add(item.guid)
        return True

    def __contains__(self, guid: str) -> bool:
        return guid in self._seen

    def __len__(self) -> int:
        return len(self._seen)
