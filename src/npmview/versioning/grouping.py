"""Group published versions into release lines for the version selector."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from ..constants import Constants
from .models import ReleaseLineGroup, VersionListing, VersionRecord
from .packument import record_from_detail
from .semver import parse_version, version_sort_key

logger = logging.getLogger(__name__)


def group_key(version: str) -> str:
    """Release line of a version: major for 1.x+, ``0.<minor>`` for 0.x.

    Pre-1.0 packages treat minor bumps as breaking, so each 0.x minor is its
    own line. Unparseable versions share the ``unknown`` line.
    """
    parsed = parse_version(version)
    if parsed is None:
        return Constants.UNKNOWN_RELEASE_LINE
    if parsed.major == 0:
        return f"0.{parsed.minor}"
    return str(parsed.major)


def build_tag_index(
    dist_tags: Optional[Mapping[str, Any]],
    known_versions: Iterable[str],
) -> Dict[str, List[str]]:
    """Reverse-index dist-tags: version -> tag names.

    ``latest`` comes first, the rest alphabetically. Tags pointing at a
    version not in ``known_versions`` are dropped.
    """
    if not dist_tags:
        return {}
    known = set(known_versions)
    index: Dict[str, List[str]] = {}
    for tag, version in dist_tags.items():
        if not isinstance(version, str) or version not in known:
            if is_debug_enabled(logger):
                logger.debug(
                    "Dropping dist-tag for unknown version",
                    extra=extra_context(
                        event="decision",
                        component="grouping",
                        action="build_tag_index",
                        outcome="dropped",
                        tag=tag,
                    ),
                )
            continue
        index.setdefault(version, []).append(str(tag))
    for tags in index.values():
        tags.sort(key=lambda t: (t != Constants.LATEST_TAG, t))
    return index


def _coerce_records(versions: Any) -> List[VersionRecord]:
    """Accept VersionRecords, version strings, or a registry ``versions`` map."""
    if isinstance(versions, Mapping):
        return [record_from_detail(v, detail) for v, detail in versions.items() if isinstance(v, str)]
    records = []
    for item in versions or ():
        if isinstance(item, VersionRecord):
            records.append(item)
        elif isinstance(item, str):
            records.append(VersionRecord(version=item))
        elif isinstance(item, Mapping):
            record = VersionRecord.from_mapping(item)
            if record is not None:
                records.append(record)
    return records


def group_versions(
    versions: Any,
    dist_tags: Optional[Mapping[str, Any]] = None,
    full_history_loaded: bool = False,
) -> List[ReleaseLineGroup]:
    """Partition versions into release lines.

    Members are sorted newest first, and groups are ordered by their newest
    member so the line holding the overall newest version leads. Duplicate
    version strings are collapsed onto their first occurrence.
    """
    records = []
    seen = set()
    for record in _coerce_records(versions):
        if record.version in seen:
            continue
        seen.add(record.version)
        records.append(record)

    buckets: Dict[str, List[VersionRecord]] = {}
    for record in records:
        buckets.setdefault(group_key(record.version), []).append(record)

    tag_index = build_tag_index(dist_tags, seen)

    groups = []
    for key, members in buckets.items():
        members = sorted(members, key=lambda r: version_sort_key(r.version), reverse=True)
        groups.append(
            ReleaseLineGroup(
                key=key,
                versions=members,
                tags={r.version: list(tag_index[r.version]) for r in members if r.version in tag_index},
                full_history_loaded=full_history_loaded,
            )
        )
    groups.sort(key=lambda g: version_sort_key(g.versions[0].version), reverse=True)
    return groups


def build_listing(
    versions: Any,
    dist_tags: Optional[Mapping[str, Any]] = None,
    time: Optional[Mapping[str, Any]] = None,
    full_history_loaded: bool = False,
) -> VersionListing:
    """Group versions and attach the reverse tag index.

    ``versions`` may be a registry ``versions`` map, in which case publish
    times are taken from the optional registry ``time`` map and provenance
    from each version's detail.
    """
    records = _coerce_records(versions)
    if time:
        records = [
            r if r.time is not None else VersionRecord(
                version=r.version,
                time=time.get(r.version) if isinstance(time.get(r.version), str) else None,
                has_provenance=r.has_provenance,
            )
            for r in records
        ]
    groups = group_versions(records, dist_tags, full_history_loaded=full_history_loaded)
    known = {r.version for g in groups for r in g.versions}
    latest = (dist_tags or {}).get(Constants.LATEST_TAG)
    return VersionListing(
        groups=groups,
        tag_index=build_tag_index(dist_tags, known),
        total_count=len(known),
        latest_version=latest if latest in known else None,
    )
