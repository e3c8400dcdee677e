"""Lazy full version history for the version selector.

The registry document only embeds an abbreviated ``versions`` map, so
expanding a release line triggers one extra fetch of the complete history.
``VersionHistoryLoader`` memoizes that fetch per package name with a
single-flight discipline: concurrent callers share the in-flight task, only
successful results are cached, and failures surface as an empty list.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

from ..common.logging_utils import Timer, extra_context, is_debug_enabled
from .grouping import build_listing
from .models import ReleaseLineGroup, VersionListing, VersionRecord

logger = logging.getLogger(__name__)

HistoryFetcher = Callable[[str], Awaitable[Iterable[Any]]]


class VersionHistoryLoader:
    """Memoized, single-flight loader of full version histories."""

    def __init__(self, fetcher: HistoryFetcher):
        """Initialize the loader.

        Args:
            fetcher: Async callable returning ``{version, time, hasProvenance}``
                items (or VersionRecords) for a package name.
        """
        self._fetcher = fetcher
        self._results: Dict[str, List[VersionRecord]] = {}
        self._inflight: Dict[str, "asyncio.Future[List[VersionRecord]]"] = {}

    def is_loaded(self, package_name: str) -> bool:
        return package_name in self._results

    def cached(self, package_name: str) -> Optional[List[VersionRecord]]:
        result = self._results.get(package_name)
        return list(result) if result is not None else None

    async def load(self, package_name: str) -> List[VersionRecord]:
        """Return the full history, fetching it at most once at a time.

        Never raises for fetch failures; those yield an empty list and leave
        the cache untouched so a later call may retry.
        """
        cached = self._results.get(package_name)
        if cached is not None:
            return list(cached)

        task = self._inflight.get(package_name)
        if task is None:
            task = asyncio.ensure_future(self._fetch(package_name))
            self._inflight[package_name] = task
        elif is_debug_enabled(logger):
            logger.debug(
                "Joining in-flight history fetch",
                extra=extra_context(
                    event="cache_hit",
                    component="history",
                    action="load",
                    outcome="inflight",
                    package=package_name,
                ),
            )
        # A cancelled waiter must not cancel the fetch other waiters share.
        return list(await asyncio.shield(task))

    async def _fetch(self, package_name: str) -> List[VersionRecord]:
        try:
            with Timer() as timer:
                raw = await self._fetcher(package_name)
            records = _to_records(raw)
            self._results[package_name] = records
            logger.debug(
                "Loaded full version history",
                extra=extra_context(
                    event="history_fetch",
                    component="history",
                    action="load",
                    outcome="success",
                    package=package_name,
                    count=len(records),
                    duration_ms=timer.duration_ms(),
                ),
            )
            return records
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to load versions",
                exc_info=True,
                extra=extra_context(
                    event="history_fetch",
                    component="history",
                    action="load",
                    outcome="exception",
                    package=package_name,
                ),
            )
            return []
        finally:
            self._inflight.pop(package_name, None)


def _to_records(raw: Optional[Iterable[Any]]) -> List[VersionRecord]:
    records = []
    for item in raw or ():
        if isinstance(item, VersionRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            record = VersionRecord.from_mapping(item)
            if record is not None:
                records.append(record)
        elif isinstance(item, str):
            records.append(VersionRecord(version=item))
    return records


def _merge_records(full: List[VersionRecord], abbreviated: List[VersionRecord]) -> List[VersionRecord]:
    """Full history wins; abbreviated-only versions fill the gaps.

    A missing publish time is taken from the abbreviated record, and
    provenance known from either side is kept.
    """
    by_version = {r.version: r for r in abbreviated}
    merged = []
    seen = set()
    for record in full:
        if record.version in seen:
            continue
        seen.add(record.version)
        known = by_version.get(record.version)
        if known is not None:
            record = VersionRecord(
                record.version,
                record.time if record.time is not None else known.time,
                record.has_provenance or known.has_provenance,
            )
        merged.append(record)
    merged.extend(r for r in abbreviated if r.version not in seen)
    return merged


class VersionIndex:
    """Release-line view of one package, upgradable to its full history."""

    def __init__(
        self,
        package_name: str,
        versions: Any,
        dist_tags: Optional[Mapping[str, Any]] = None,
        loader: Optional[VersionHistoryLoader] = None,
        time: Optional[Mapping[str, Any]] = None,
    ):
        self.package_name = package_name
        self._dist_tags = dict(dist_tags or {})
        self._loader = loader
        self._listing = build_listing(versions, self._dist_tags, time=time)
        self._full_listing: Optional[VersionListing] = None

    @property
    def full_history_loaded(self) -> bool:
        return self._full_listing is not None

    def listing(self) -> VersionListing:
        """The best listing available without doing any I/O."""
        return self._full_listing or self._listing

    async def load_full_history(self) -> VersionListing:
        """Merge the full history into the listing; falls back to the abbreviated one."""
        if self._full_listing is not None:
            return self._full_listing
        if self._loader is None:
            return self._listing
        records = await self._loader.load(self.package_name)
        if not records:
            return self._listing
        abbreviated = [r for g in self._listing.groups for r in g.versions]
        self._full_listing = build_listing(
            _merge_records(records, abbreviated),
            self._dist_tags,
            full_history_loaded=True,
        )
        return self._full_listing

    async def expand(self, key: str) -> Optional[ReleaseLineGroup]:
        """Return the release line ``key`` with every known member."""
        listing = await self.load_full_history()
        return listing.group(key)

    async def all_groups(self) -> List[ReleaseLineGroup]:
        """Every release line, from the full history when it can be loaded."""
        listing = await self.load_full_history()
        return list(listing.groups)
