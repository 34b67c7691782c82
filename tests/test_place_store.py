import json
import os
import stat
import threading

import pytest

from localguide.core.errors import DuplicateId, NotFound, PersistenceFailure, ValidationError
from localguide.services import json_storage


def test_create_then_get_applies_defaults(place_store, sample_place) -> None:
    place_store.create(sample_place)

    stored = place_store.get("p1")
    assert stored["name"] == "Test"
    assert stored["category"] == "gyoza"
    assert stored["lat"] == 36.55
    assert stored["lng"] == 139.90
    assert stored["status"] == "available"
    assert stored["rating"] == 0
    assert stored["review_count"] == 0
    assert stored["twitter_account"] == ""
    assert stored["popular_menus"] == []
    assert stored["google_maps_url"] == "https://maps.google.com/?q=36.55,139.9"


def test_create_keeps_payload_values_over_defaults(place_store, sample_place) -> None:
    place = place_store.create({**sample_place, "status": "closed", "specialty": "焼き餃子"})

    assert place["status"] == "closed"
    assert place["specialty"] == "焼き餃子"


def test_duplicate_id_is_rejected(place_store, sample_place) -> None:
    place_store.create(sample_place)

    with pytest.raises(DuplicateId):
        place_store.create({**sample_place, "name": "Other"})
    assert len(place_store.list()) == 1


@pytest.mark.parametrize("field", ["id", "name", "category", "lat", "lng"])
def test_missing_required_field_is_rejected(place_store, sample_place, field) -> None:
    payload = {k: v for k, v in sample_place.items() if k != field}

    with pytest.raises(ValidationError):
        place_store.create(payload)
    assert place_store.list() == []


def test_zero_coordinates_are_valid(place_store) -> None:
    place = place_store.create({"id": "equator", "name": "Null Island", "category": "misc", "lat": 0, "lng": 0})
    assert place["lat"] == 0.0


def test_non_numeric_coordinates_are_rejected(place_store, sample_place) -> None:
    with pytest.raises(ValidationError):
        place_store.create({**sample_place, "lat": "north"})


def test_numeric_id_is_stored_as_string(place_store, sample_place) -> None:
    place_store.create({**sample_place, "id": 42})
    assert place_store.get("42")["id"] == "42"


def test_update_merges_and_pins_id(place_store, sample_place) -> None:
    place_store.create(sample_place)

    updated = place_store.update("p1", {"id": "hijacked", "status": "busy"})

    assert updated["id"] == "p1"
    assert updated["status"] == "busy"
    assert updated["name"] == "Test"
    assert place_store.get("p1")["status"] == "busy"
    with pytest.raises(NotFound):
        place_store.get("hijacked")


def test_update_unknown_place(place_store) -> None:
    with pytest.raises(NotFound):
        place_store.update("missing", {"status": "busy"})


def test_delete_removes_exactly_one(place_store, sample_place) -> None:
    place_store.create(sample_place)
    place_store.create({**sample_place, "id": "p2"})

    place_store.delete("p1")

    with pytest.raises(NotFound):
        place_store.get("p1")
    assert [p["id"] for p in place_store.list()] == ["p2"]


def test_delete_unknown_place_leaves_file_untouched(place_store, sample_place) -> None:
    place_store.create(sample_place)
    before = place_store.path.read_bytes()

    with pytest.raises(NotFound):
        place_store.delete("missing")
    assert place_store.path.read_bytes() == before


def test_list_filters_by_category(place_store, sample_place) -> None:
    place_store.create(sample_place)
    place_store.create({**sample_place, "id": "bar1", "category": "cocktail"})

    assert [p["id"] for p in place_store.list(category="cocktail")] == ["bar1"]
    assert len(place_store.list(category="all")) == 2
    assert len(place_store.list()) == 2


def test_list_with_observer_adds_distance(place_store, sample_place) -> None:
    place_store.create(sample_place)

    plain = place_store.list()[0]
    annotated = place_store.list(lat=36.55, lng=139.90)[0]

    assert "distance" not in plain
    assert annotated["distance"] == "0m"
    assert annotated["walk_time"] == "0分"


@pytest.mark.parametrize("bad_lat", [None, "abc", ""])
def test_list_with_observer_skips_place_with_bad_coordinates(place_store, sample_place, bad_lat) -> None:
    place_store.create(sample_place)
    place_store.create({**sample_place, "id": "p2"})
    place_store.update("p2", {"lat": bad_lat})

    by_id = {p["id"]: p for p in place_store.list(lat=36.55, lng=139.90)}

    assert by_id["p1"]["distance"] == "0m"
    assert "distance" not in by_id["p2"]
    assert "walk_time" not in by_id["p2"]


def test_list_on_missing_file_is_empty(place_store) -> None:
    assert place_store.list() == []


def test_ensure_file_creates_empty_array(place_store) -> None:
    place_store.ensure_file()
    assert json.loads(place_store.path.read_text(encoding="utf-8")) == []


def test_malformed_file_is_a_persistence_failure(place_store) -> None:
    place_store.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceFailure):
        place_store.list()


def test_failed_write_keeps_previous_collection(place_store, sample_place, monkeypatch) -> None:
    place_store.create(sample_place)
    before = place_store.path.read_bytes()

    def broken_replace(_src, _dst):
        raise OSError("disk full")

    monkeypatch.setattr(json_storage.os, "replace", broken_replace)

    with pytest.raises(PersistenceFailure):
        place_store.create({**sample_place, "id": "p2"})

    assert place_store.path.read_bytes() == before
    assert list(place_store.path.parent.glob(".tmp_*")) == []


def test_concurrent_writers_do_not_lose_updates(place_store, sample_place) -> None:
    place_store.create(sample_place)
    errors = []

    def add(i: int) -> None:
        try:
            place_store.create({**sample_place, "id": f"c{i}"})
            place_store.update("p1", {f"field_{i}": i})
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=add, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(place_store.list()) == 21
    merged = place_store.get("p1")
    assert all(merged[f"field_{i}"] == i for i in range(20))


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_written_file_is_world_readable(place_store, sample_place) -> None:
    place_store.create(sample_place)

    assert stat.S_IMODE(place_store.path.stat().st_mode) & 0o044 == 0o044


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_rewrite_keeps_existing_file_mode(place_store, sample_place) -> None:
    place_store.create(sample_place)
    os.chmod(place_store.path, 0o640)

    place_store.update("p1", {"status": "busy"})

    assert stat.S_IMODE(place_store.path.stat().st_mode) == 0o640
