"""Version history ordering, grouping and lazy loading."""

from .grouping import build_listing, build_tag_index, group_key, group_versions
from .history import VersionHistoryLoader, VersionIndex
from .models import ReleaseLineGroup, VersionListing, VersionRecord
from .semver import compare_versions, parse_version, sort_versions_desc, version_sort_key

__all__ = [
    "build_listing",
    "build_tag_index",
    "group_key",
    "group_versions",
    "VersionHistoryLoader",
    "VersionIndex",
    "ReleaseLineGroup",
    "VersionListing",
    "VersionRecord",
    "compare_versions",
    "parse_version",
    "sort_versions_desc",
    "version_sort_key",
]
