"""
RSS 2.0 writer — Channel → bytes.

Thumbnails go out as <media:thumbnail url="…"/> (Media RSS), which is where
feed readers (and feedparser's media_thumbnail) look for item artwork.
Empty pub_date means no <pubDate> element at all.
"""
import re
from xml.etree import ElementTree as ET

from pagefeed.collectors.base import Channel, FeedItem

MEDIA_NS = "http://search.yahoo.com/mrss/"

ET.register_namespace("media", MEDIA_NS)

# not allowed anywhere in an XML 1.0 document
_XML_INVALID = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def render_rss(channel: Channel) -> bytes:
    rss = ET.Element("rss", version="2.0")
    chan = ET.SubElement(rss, "channel")
    _text(chan, "title", channel.title)
    _text(chan, "link", channel.link)
    _text(chan, "description", channel.description)

    for item in channel.items:
        _item(chan, item)

    ET.indent(rss, space="  ")
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)


def _item(parent: ET.Element, item: FeedItem) -> None:
    node = ET.SubElement(parent, "item")
    _text(node, "title", item.title)
    _text(node, "link", item.link)
    _text(node, "description", item.description)
    if item.pub_date:
        _text(node, "pubDate", item.pub_date)

    guid = _text(node, "guid", item.guid)
    guid.set("isPermaLink", "true" if item.guid.startswith(("http://", "https://")) else "false")

    if item.thumbnail:
        ET.SubElement(node, f"{{{MEDIA_NS}}}thumbnail", url=_XML_INVALID.sub("", item.thumbnail))


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = _XML_INVALID.sub("", value)
    return el
