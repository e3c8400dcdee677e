"""Helpers over the registry package document ("packument")."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..constants import Constants
from .models import VersionRecord
from .semver import version_sort_key


def _has_provenance(detail: Any) -> bool:
    if not isinstance(detail, Mapping):
        return False
    dist = detail.get("dist")
    if not isinstance(dist, Mapping):
        return False
    attestations = dist.get("attestations")
    return isinstance(attestations, Mapping) and bool(attestations.get("provenance"))


def record_from_detail(version: str, detail: Any, published: Optional[str] = None) -> VersionRecord:
    """Record for one entry of a ``versions`` map.

    The detail is either a registry manifest (provenance under
    ``dist.attestations``) or an already enriched ``{version, time,
    hasProvenance}`` item. An explicit ``published`` time wins over one in
    the detail.
    """
    provenance = _has_provenance(detail)
    if isinstance(detail, Mapping):
        enriched = VersionRecord.from_mapping({**detail, "version": version})
        if enriched is not None:
            provenance = provenance or enriched.has_provenance
            if published is None:
                published = enriched.time
    return VersionRecord(
        version=version,
        time=published if isinstance(published, str) else None,
        has_provenance=provenance,
    )


def records_from_packument(doc: Mapping[str, Any]) -> List[VersionRecord]:
    """Build VersionRecords from a registry document, newest first.

    Publish times come from the top-level ``time`` map; provenance from
    ``versions[v].dist.attestations.provenance``.
    """
    versions = doc.get("versions") if isinstance(doc, Mapping) else None
    if not isinstance(versions, Mapping):
        return []
    times = doc.get("time")
    if not isinstance(times, Mapping):
        times = {}
    records = []
    for version, detail in versions.items():
        if not isinstance(version, str):
            continue
        published = times.get(version)
        records.append(record_from_detail(version, detail, published if isinstance(published, str) else None))
    records.sort(key=lambda r: version_sort_key(r.version), reverse=True)
    return records


def dist_tags_of(doc: Mapping[str, Any]) -> Mapping[str, str]:
    tags = doc.get("dist-tags") if isinstance(doc, Mapping) else None
    if not isinstance(tags, Mapping):
        return {}
    return {str(k): v for k, v in tags.items() if isinstance(v, str)}


def latest_version(dist_tags: Optional[Mapping[str, Any]]) -> Optional[str]:
    latest = (dist_tags or {}).get(Constants.LATEST_TAG)
    return latest if isinstance(latest, str) and latest else None


def is_latest(version: Optional[str], dist_tags: Optional[Mapping[str, Any]]) -> bool:
    return version is not None and version == latest_version(dist_tags)


def resolve_display_version(
    requested: Optional[str],
    dist_tags: Optional[Mapping[str, Any]],
) -> Optional[str]:
    """Version to display: the explicit request, else the ``latest`` tag.

    A request naming a dist-tag resolves to the version it points at.
    """
    if requested:
        tagged = (dist_tags or {}).get(requested)
        if isinstance(tagged, str) and tagged:
            return tagged
        return requested
    return latest_version(dist_tags)


def build_version_url(pattern: str, version: str) -> str:
    """Fill a route pattern such as ``/package/foo/v/{version}``."""
    return pattern.replace(Constants.VERSION_URL_PLACEHOLDER, version)
