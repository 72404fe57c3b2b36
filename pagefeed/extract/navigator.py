"""
Pull channel metadata and raw entries out of a parsed page-state tree.

Containers come from the profile's container path (filtered by `where`);
each configured collection is read from every container in order, so a
"featured" single entry followed by a "related" list stays in page order.
"""
from dataclasses import dataclass
from typing import Any, Iterator

from loguru import logger

from pagefeed.extract.tree import MISSING, read, read_list, read_str, read_tree
from pagefeed.profiles import ChannelPaths, CollectionSpec, SourceProfile


@dataclass(frozen=True)
class RawEntry:
    data:       dict
    spec:       CollectionSpec
    thumbnail:  str = ""           # inherited from the container, if the profile says so


def channel_metadata(tree: Any, paths: ChannelPaths) -> tuple[str, str, str]:
    """(title, link, description); absent paths become empty strings."""
    return tuple(_str_or_empty(tree, p) for p in (paths.title, paths.link, paths.description))


def iter_containers(tree: Any, profile: SourceProfile) -> Iterator[dict]:
    if not profile.container_path:
        if isinstance(tree, dict):
            yield tree
        return

    containers = read_list(tree, profile.container_path)
    if containers is MISSING:
        logger.debug(f"[Navigator] {profile.name}: no containers at {profile.container_path}")
        return

    for container in containers:
        if all(read(container, path) == want for path, want in profile.container_where.items()):
            yield container


def iter_raw_entries(tree: Any, profile: SourceProfile) -> Iterator[RawEntry]:
    for container in iter_containers(tree, profile):
        for spec in profile.collections:
            inherited = _str_or_empty(container, spec.inherit_thumbnail)
            for data in _read_collection(container, spec):
                yield RawEntry(data=data, spec=spec, thumbnail=inherited)


def _read_collection(container: dict, spec: CollectionSpec) -> list[dict]:
    if spec.kind == "single":
        entry = read_tree(container, spec.path)
        return [] if entry is MISSING else [entry]
    entries = read_list(container, spec.path)
    return [] if entries is MISSING else entries


def _str_or_empty(tree: Any, path: str) -> str:
    if not path:
        return ""
    value = read_str(tree, path)
    return "" if value is MISSING else value.strip()
