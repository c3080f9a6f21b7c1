from __future__ import annotations

import pytest

from deploy_triggers.core.model import (
    Action,
    DependencySet,
    DerivedResource,
    DuplicateResourceError,
    Evaluation,
    Fingerprint,
    Resource,
    ResourceCatalog,
    ResourceRef,
    TimestampSource,
    UuidSource,
)


def test_fingerprint_parse_round_trip():
    fp = Fingerprint("sha256", "0123456789abcdef" * 4)
    assert Fingerprint.parse(str(fp)) == fp


@pytest.mark.parametrize("text", ["abc", "md5:" + "0" * 32, "sha256:" + "0" * 63, "sha1:" + "Z" * 40])
def test_fingerprint_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        Fingerprint.parse(text)


def test_dependency_set_is_ordered_and_immutable():
    ds = DependencySet.of("r1", "m1", "i1")
    changed = ds.replace(2, "i2")

    assert list(ds) == ["r1", "m1", "i1"]
    assert list(changed) == ["r1", "m1", "i2"]
    assert len(ds) == 3
    assert ds != changed


def test_catalog_rejects_duplicates():
    catalog = ResourceCatalog.from_resources([Resource("a.b", {"id": "1"})])
    with pytest.raises(DuplicateResourceError):
        catalog.add(Resource("a.b"))
    assert catalog.get("a.b").attribute("id") == "1"


def test_resource_and_derived_require_ids():
    with pytest.raises(ValueError):
        Resource("")
    with pytest.raises(ValueError):
        DerivedResource(id=" ")


def test_volatile_sources(fake_clock):
    assert TimestampSource().resolve(fake_clock) == "2026-01-16T12:00:00+00:00"
    assert UuidSource().resolve(fake_clock) != UuidSource().resolve(fake_clock)
    assert TimestampSource() == TimestampSource()
    assert TimestampSource() != UuidSource()


def test_resource_ref_str():
    assert str(ResourceRef("a.b", "id")) == "a.b.id"
    assert str(ResourceRef("a.b")) == "a.b"


def test_evaluation_to_dict():
    fp = Fingerprint("sha1", "a" * 40)
    ev = Evaluation(resource_id="dep", action=Action.CREATE, fingerprint=fp)

    assert ev.recreate is True
    assert ev.to_dict() == {
        "resource_id": "dep",
        "action": "create",
        "fingerprint": str(fp),
        "previous": None,
        "hazards": [],
    }
