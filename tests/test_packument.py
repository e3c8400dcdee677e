"""Tests for registry package document helpers."""

from npmview.versioning.packument import (
    build_version_url,
    dist_tags_of,
    is_latest,
    latest_version,
    record_from_detail,
    records_from_packument,
    resolve_display_version,
)


PACKUMENT = {
    "name": "left-pad",
    "dist-tags": {"latest": "1.3.0", "next": "2.0.0-rc.1", "broken": 5},
    "versions": {
        "1.0.0": {"dist": {}},
        "1.3.0": {"dist": {"attestations": {"provenance": {"predicateType": "https://slsa.dev/provenance/v1"}}}},
        "2.0.0-rc.1": {},
    },
    "time": {
        "created": "2014-03-14T00:00:00.000Z",
        "1.0.0": "2014-03-14T00:00:00.000Z",
        "1.3.0": "2016-03-23T00:00:00.000Z",
    },
}


def test_records_newest_first_with_provenance_and_time():
    records = records_from_packument(PACKUMENT)

    assert [r.version for r in records] == ["2.0.0-rc.1", "1.3.0", "1.0.0"]
    assert records[1].has_provenance is True
    assert records[1].time == "2016-03-23T00:00:00.000Z"
    assert records[0].has_provenance is False
    assert records[0].time is None


def test_records_from_document_without_versions():
    assert records_from_packument({"name": "x"}) == []
    assert records_from_packument({"versions": []}) == []


def test_record_from_detail():
    attested = {"dist": {"attestations": {"provenance": {"predicateType": "x"}}}}
    assert record_from_detail("1.0.0", attested).has_provenance is True
    assert record_from_detail("1.0.0", {"hasProvenance": True}).has_provenance is True
    assert record_from_detail("1.0.0", None).has_provenance is False

    record = record_from_detail("1.0.0", {"time": "a", "version": "9.9.9"}, published="b")
    assert record.version == "1.0.0"
    assert record.time == "b"
    assert record_from_detail("1.0.0", {"time": "a"}).time == "a"


def test_dist_tags_drop_non_string_values():
    assert dist_tags_of(PACKUMENT) == {"latest": "1.3.0", "next": "2.0.0-rc.1"}
    assert dist_tags_of({}) == {}


def test_latest_helpers():
    tags = dist_tags_of(PACKUMENT)
    assert latest_version(tags) == "1.3.0"
    assert latest_version(None) is None
    assert is_latest("1.3.0", tags) is True
    assert is_latest("1.0.0", tags) is False
    assert is_latest(None, tags) is False


class TestResolveDisplayVersion:
    """Which version a package page shows."""

    def test_defaults_to_latest(self):
        assert resolve_display_version(None, {"latest": "1.3.0"}) == "1.3.0"

    def test_explicit_version_wins(self):
        assert resolve_display_version("1.0.0", {"latest": "1.3.0"}) == "1.0.0"

    def test_tag_name_resolves_to_version(self):
        assert resolve_display_version("next", {"latest": "1.3.0", "next": "2.0.0-rc.1"}) == "2.0.0-rc.1"

    def test_nothing_known(self):
        assert resolve_display_version(None, {}) is None


def test_build_version_url():
    assert build_version_url("/package/left-pad/v/{version}", "1.3.0") == "/package/left-pad/v/1.3.0"
