"""
RawEntry → FeedItem.

Required: title, link and the guid source (the mapped guid path, or the
link itself when none is mapped). Anything missing raises ItemSkipped.

Dates are never invented: an absent or unparseable timestamp leaves
pub_date empty instead of falling back to "now".
"""
import html
from datetime import datetime
from email.utils import format_datetime

from pagefeed.collectors.base import FeedItem
from pagefeed.exceptions import ItemSkipped
from pagefeed.extract.navigator import RawEntry
from pagefeed.extract.tree import MISSING, read_str, read_timestamp


def normalize_entry(entry: RawEntry, base_url: str = "") -> FeedItem:
    fields = entry.spec.fields

    title = _text(entry.data, fields.get("title", ""))
    if not title:
        raise ItemSkipped("title", fields.get("title", ""))

    link = resolve_url(_raw(entry.data, fields.get("link", "")), base_url)
    if not link:
        raise ItemSkipped("link", fields.get("link", ""))

    guid_path = fields.get("guid")
    if guid_path:
        guid = resolve_url(_raw(entry.data, guid_path), base_url)
        if not guid:
            raise ItemSkipped("guid", guid_path)
    else:
        guid = link

    thumbnail = resolve_url(_raw(entry.data, fields.get("thumbnail", "")), base_url)

    return FeedItem(
        title       = title,
        link        = link,
        guid        = guid,
        description = _text(entry.data, fields.get("description", "")),
        pub_date    = _pub_date(entry.data, fields.get("published", "")),
        thumbnail   = thumbnail or resolve_url(entry.thumbnail, base_url),
    )


def resolve_url(href: str, base_url: str) -> str:
    """Absolute URL for `href`; site-relative paths are joined onto base_url."""
    href = href.strip()
    if not href:
        return ""
    if href.startswith("//"):
        scheme = base_url.split(":", 1)[0] if "://" in base_url else "https"
        return f"{scheme}:{href}"
    if href.startswith("/") and base_url:
        return f"{base_url.rstrip('/')}{href}"
    return href


def format_rfc1123(dt: datetime) -> str:
    """'Mon, 02 Jan 2006 15:04:05 GMT' — dt must be aware and in UTC."""
    return format_datetime(dt, usegmt=True)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _raw(data: dict, path: str) -> str:
    if not path:
        return ""
    value = read_str(data, path)
    return "" if value is MISSING else value


def _text(data: dict, path: str) -> str:
    return html.unescape(_raw(data, path)).strip()


def _pub_date(data: dict, path: str) -> str:
    if not path:
        return ""
    ts = read_timestamp(data, path)
    return "" if ts is MISSING else format_rfc1123(ts)
