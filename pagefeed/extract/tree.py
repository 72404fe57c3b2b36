"""
Generic JSON tree + typed path reads.

Page-state payloads are huge and drift constantly, so nothing here models
their shape. A path is a dot-separated string ("props.pageProps.items.0.title");
integer segments index into arrays. Every reader returns MISSING instead of
raising when a segment is absent, the node has the wrong type, or an index
is out of range.
"""
import json
import re
from datetime import datetime, timezone
from typing import Any

from pagefeed.exceptions import MalformedPayload

_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2}\.)(\d+)")


class _Missing:
    """Sentinel for a path that could not be read. Falsy, compares by identity."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def parse_payload(text: str) -> Any:
    """Deserialize payload text. Raises MalformedPayload on invalid JSON."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedPayload(f"payload is not valid JSON: {exc}") from exc


def split_path(path: str) -> list[str]:
    return [seg for seg in path.split(".") if seg] if path else []


def read(tree: Any, path: str) -> Any:
    """Walk `path` from `tree` and return the raw node, or MISSING."""
    node = tree
    for seg in split_path(path):
        if isinstance(node, dict):
            if seg not in node:
                return MISSING
            node = node[seg]
        elif isinstance(node, list):
            try:
                idx = int(seg)
            except ValueError:
                return MISSING
            if idx < 0 or idx >= len(node):
                return MISSING
            node = node[idx]
        else:
            return MISSING
    # JSON null is as good as absent
    return MISSING if node is None else node


# ── Typed readers ──────────────────────────────────────────────────────────────

def read_str(tree: Any, path: str) -> str | _Missing:
    value = read(tree, path)
    return value if isinstance(value, str) else MISSING


def read_bool(tree: Any, path: str) -> bool | _Missing:
    value = read(tree, path)
    return value if isinstance(value, bool) else MISSING


def read_number(tree: Any, path: str) -> int | float | _Missing:
    value = read(tree, path)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return MISSING
    return value


def read_tree(tree: Any, path: str) -> dict | _Missing:
    value = read(tree, path)
    return value if isinstance(value, dict) else MISSING


def read_list(tree: Any, path: str) -> list[dict] | _Missing:
    """Array of subtrees. Non-object members are dropped, not fatal."""
    value = read(tree, path)
    if not isinstance(value, list):
        return MISSING
    return [v for v in value if isinstance(v, dict)]


def read_timestamp(tree: Any, path: str) -> datetime | _Missing:
    """ISO 8601 timestamp as an aware UTC datetime. Naive values are taken as UTC."""
    value = read_str(tree, path)
    if value is MISSING:
        return MISSING
    return parse_timestamp(value)


def parse_timestamp(value: str) -> datetime | _Missing:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    text = _FRACTION.sub(lambda m: m[1] + m[2][:6].ljust(6, "0"), text, count=1)
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return MISSING
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
