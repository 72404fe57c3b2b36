"""
Find the page-state <script> inside fetched markup.

Two strategies, picked per profile:
  marker-scan — every <script> in document order whose text contains the
                marker; the last hit wins unless the profile says 'first'
                (pages often emit a small bootstrap script before the full state)
  id-exact    — the <script> carrying a fixed id, e.g. __NEXT_DATA__
"""
from bs4 import BeautifulSoup
from loguru import logger

from pagefeed.exceptions import PayloadNotFound
from pagefeed.profiles import LocatorRule


def locate_payload(html: str, rule: LocatorRule) -> str:
    """Return the text of the matching script element. Raises PayloadNotFound."""
    soup = BeautifulSoup(html, "html.parser")

    if rule.strategy == "id-exact":
        return _by_id(soup, rule.element_id)
    return _by_marker(soup, rule.marker, rule.match)


def _by_id(soup: BeautifulSoup, element_id: str) -> str:
    script = soup.find("script", id=element_id)
    text = _script_text(script) if script else ""
    if not text.strip():
        raise PayloadNotFound(f"no <script id=\"{element_id}\"> with content")
    logger.debug(f"[Locator] #{element_id}: {len(text)} chars")
    return text


def _by_marker(soup: BeautifulSoup, marker: str, match: str) -> str:
    hits = [
        text for text in (_script_text(s) for s in soup.find_all("script"))
        if marker in text
    ]
    if not hits:
        raise PayloadNotFound(f"no <script> contains marker {marker!r}")

    text = hits[0] if match == "first" else hits[-1]
    logger.debug(
        f"[Locator] marker {marker!r}: {len(hits)} matching scripts, "
        f"took {match} ({len(text)} chars)"
    )
    return text


def _script_text(script) -> str:
    # html.parser keeps script bodies as a single string child
    return script.string or ""
