"""Data models for version history presentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class VersionRecord:
    """A single published version as shown in the version selector."""
    version: str
    time: Optional[str] = None
    has_provenance: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["VersionRecord"]:
        """Build a record from a history item.

        Accepts the camelCase shape returned by the history endpoint
        (``hasProvenance``) as well as snake_case keys. Returns None when the
        item carries no usable version string.
        """
        version = data.get("version")
        if not isinstance(version, str) or not version.strip():
            return None
        time = data.get("time")
        provenance = data.get("hasProvenance", data.get("has_provenance", False))
        return cls(
            version=version.strip(),
            time=time if isinstance(time, str) else None,
            has_provenance=bool(provenance),
        )


@dataclass
class ReleaseLineGroup:
    """Versions sharing a release line, newest first.

    ``key`` is the major version for 1.x and later, ``0.<minor>`` for 0.x.
    ``tags`` maps each member version that carries dist-tags to those tags.
    """
    key: str
    versions: List[VersionRecord] = field(default_factory=list)
    tags: Dict[str, List[str]] = field(default_factory=dict)
    full_history_loaded: bool = False

    @property
    def count(self) -> int:
        return len(self.versions)

    @property
    def latest(self) -> Optional[VersionRecord]:
        return self.versions[0] if self.versions else None

    def version_strings(self) -> List[str]:
        return [record.version for record in self.versions]


@dataclass
class VersionListing:
    """Everything the version selector needs for one package."""
    groups: List[ReleaseLineGroup]
    tag_index: Dict[str, List[str]]
    total_count: int
    latest_version: Optional[str] = None

    @property
    def show_view_all(self) -> bool:
        """A "view all versions" affordance only makes sense past one version."""
        return self.total_count > 1

    def group(self, key: str) -> Optional[ReleaseLineGroup]:
        for grp in self.groups:
            if grp.key == key:
                return grp
        return None
