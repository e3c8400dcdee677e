"""Semantic version ordering that tolerates dirty registry data.

Versions are parsed with ``semantic_version``: strictly first, then via
``Version.coerce`` for near-miss strings (``1.0``, ``v2.1.3``). Anything that
still fails to parse ranks below every parseable version, and unparseable
versions order among themselves by plain string comparison. Build metadata is
ignored for ordering.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple, Union

import semantic_version

from ..common.logging_utils import extra_context, is_debug_enabled

logger = logging.getLogger(__name__)

SortKey = Tuple[Union[int, str, tuple], ...]


def parse_version(version: str) -> Optional[semantic_version.Version]:
    """Parse a version string, returning None when it cannot be understood."""
    if not isinstance(version, str):
        return None
    text = version.strip()
    if not text:
        return None
    try:
        return semantic_version.Version(text)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(text.lstrip("vV="))
    except ValueError:
        if is_debug_enabled(logger):
            logger.debug(
                "Unparseable version",
                extra=extra_context(
                    event="parse",
                    component="semver",
                    action="parse_version",
                    outcome="unparseable",
                    version=text,
                ),
            )
        return None


def _prerelease_key(prerelease: Iterable[str]) -> tuple:
    # Numeric identifiers sort numerically and below alphanumeric ones.
    key = []
    for ident in prerelease:
        if ident.isdigit():
            key.append((0, int(ident)))
        else:
            key.append((1, ident))
    return tuple(key)


def version_sort_key(version: str) -> SortKey:
    """Ascending sort key implementing semver precedence."""
    parsed = parse_version(version)
    if parsed is None:
        return (0, str(version))
    if parsed.prerelease:
        return (1, parsed.major, parsed.minor, parsed.patch, 0, _prerelease_key(parsed.prerelease))
    return (1, parsed.major, parsed.minor, parsed.patch, 1, ())


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` is lower than, equal to or higher than ``b``."""
    key_a = version_sort_key(a)
    key_b = version_sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def sort_versions_desc(versions: Iterable[str]) -> List[str]:
    """Sort newest first; equal-precedence versions keep their input order."""
    items = list(versions)
    keys = {v: version_sort_key(v) for v in items}
    # sorted() with reverse=True stays stable for ties.
    return sorted(items, key=keys.__getitem__, reverse=True)
