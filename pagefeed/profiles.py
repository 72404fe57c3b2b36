"""
SourceProfile — per-origin configuration loaded from config/sources.yaml.

A profile says where the page lives, how to find its page-state script, and
which JSON paths become channel metadata and feed items. Everything
site-specific lives here; the pipeline itself never names a site.
"""
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from loguru import logger

from pagefeed.exceptions import ProfileError

LOCATOR_STRATEGIES = ("marker-scan", "id-exact")
MATCH_POLICIES     = ("last", "first")
COLLECTION_KINDS   = ("single", "list")
ITEM_FIELDS        = ("title", "link", "description", "published", "thumbnail", "guid")
REQUIRED_FIELDS    = ("title", "link")


@dataclass(frozen=True)
class LocatorRule:
    strategy:   str               # 'marker-scan' | 'id-exact'
    marker:     str = ""          # substring a script must contain (marker-scan)
    element_id: str = ""          # script id attribute (id-exact)
    match:      str = "last"      # which marker-scan hit wins: 'last' | 'first'


@dataclass(frozen=True)
class ChannelPaths:
    title:       str = ""
    link:        str = ""
    description: str = ""


@dataclass(frozen=True)
class CollectionSpec:
    """One item-producing path inside a container."""
    path:              str
    kind:              str                        # 'single' | 'list'
    fields:            Mapping[str, str]          # item field → path inside the entry
    inherit_thumbnail: str = ""                   # path inside the container


@dataclass(frozen=True)
class SourceProfile:
    name:        str
    url:         str
    base_url:    str
    locator:     LocatorRule
    channel:     ChannelPaths
    collections: tuple[CollectionSpec, ...]
    container_path:  str = ""                     # '' → the whole tree is the only container
    container_where: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


# ── Loading ────────────────────────────────────────────────────────────────────

def load_profiles(path: Path) -> dict[str, SourceProfile]:
    """Parse a YAML profile file. Returns profiles keyed by name, in file order."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ProfileError(f"cannot read profiles from {path}: {exc}") from exc

    sources = (data or {}).get("sources") or []
    if not isinstance(sources, list):
        raise ProfileError(f"{path}: 'sources' must be a list")

    profiles: dict[str, SourceProfile] = {}
    for raw in sources:
        profile = parse_profile(raw)
        if profile.name in profiles:
            raise ProfileError(f"duplicate profile name '{profile.name}'")
        profiles[profile.name] = profile

    logger.debug(f"[Profiles] loaded {len(profiles)} profiles from {path}")
    return profiles


def get_profile(profiles: Mapping[str, SourceProfile], name: str) -> SourceProfile:
    try:
        return profiles[name]
    except KeyError:
        known = ", ".join(sorted(profiles)) or "none"
        raise ProfileError(f"unknown profile '{name}' (known: {known})") from None


def parse_profile(raw: Any) -> SourceProfile:
    if not isinstance(raw, dict):
        raise ProfileError(f"profile entry must be a mapping, got {type(raw).__name__}")

    name = _required_str(raw, "name", "profile")
    url  = _required_str(raw, "url", name)

    containers = raw.get("containers") or {}
    if not isinstance(containers, dict):
        raise ProfileError(f"[{name}] 'containers' must be a mapping")
    where = containers.get("where") or {}
    if not isinstance(where, dict):
        raise ProfileError(f"[{name}] 'containers.where' must be a mapping")

    raw_collections = raw.get("collections")
    if not isinstance(raw_collections, list) or not raw_collections:
        raise ProfileError(f"[{name}] at least one collection is required")

    return SourceProfile(
        name            = name,
        url             = url,
        base_url        = str(raw.get("base_url") or "").rstrip("/"),
        locator         = _parse_locator(raw.get("locator"), name),
        channel         = _parse_channel(raw.get("channel"), name),
        collections     = tuple(_parse_collection(c, name) for c in raw_collections),
        container_path  = str(containers.get("path") or ""),
        container_where = MappingProxyType(dict(where)),
    )


def _parse_locator(raw: Any, name: str) -> LocatorRule:
    if not isinstance(raw, dict):
        raise ProfileError(f"[{name}] 'locator' must be a mapping")

    strategy = raw.get("strategy")
    if strategy not in LOCATOR_STRATEGIES:
        raise ProfileError(f"[{name}] locator strategy must be one of {LOCATOR_STRATEGIES}")

    match = raw.get("match", "last")
    if match not in MATCH_POLICIES:
        raise ProfileError(f"[{name}] locator match must be one of {MATCH_POLICIES}")

    rule = LocatorRule(
        strategy   = strategy,
        marker     = str(raw.get("marker") or ""),
        element_id = str(raw.get("id") or ""),
        match      = match,
    )
    if strategy == "marker-scan" and not rule.marker:
        raise ProfileError(f"[{name}] marker-scan locator needs a 'marker'")
    if strategy == "id-exact" and not rule.element_id:
        raise ProfileError(f"[{name}] id-exact locator needs an 'id'")
    return rule


def _parse_channel(raw: Any, name: str) -> ChannelPaths:
    if raw is None:
        return ChannelPaths()
    if not isinstance(raw, dict):
        raise ProfileError(f"[{name}] 'channel' must be a mapping")
    return ChannelPaths(
        title       = str(raw.get("title") or ""),
        link        = str(raw.get("link") or ""),
        description = str(raw.get("description") or ""),
    )


def _parse_collection(raw: Any, name: str) -> CollectionSpec:
    if not isinstance(raw, dict):
        raise ProfileError(f"[{name}] collection entries must be mappings")

    path = _required_str(raw, "path", name)
    kind = raw.get("kind", "list")
    if kind not in COLLECTION_KINDS:
        raise ProfileError(f"[{name}] collection kind must be one of {COLLECTION_KINDS}")

    fields = raw.get("fields")
    if not isinstance(fields, dict):
        raise ProfileError(f"[{name}] collection '{path}' needs a 'fields' mapping")
    unknown = set(fields) - set(ITEM_FIELDS)
    if unknown:
        raise ProfileError(f"[{name}] unknown item fields: {', '.join(sorted(unknown))}")
    for required in REQUIRED_FIELDS:
        if not fields.get(required):
            raise ProfileError(f"[{name}] collection '{path}' must map '{required}'")

    return CollectionSpec(
        path              = path,
        kind              = kind,
        fields            = MappingProxyType({k: str(v) for k, v in fields.items() if v}),
        inherit_thumbnail = str(raw.get("inherit_thumbnail") or ""),
    )


def _required_str(raw: dict, key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ProfileError(f"[{where}] '{key}' is required")
    return value.strip()
