from __future__ import annotations

from garden.repositories.memory import InMemoryMeasurementRepository

KEY = "2015-09-01T16:00:00.000Z"


def test_put_then_get_round_trips(repo: InMemoryMeasurementRepository) -> None:
    repo.put(KEY, {"temperature": 27.1, "dewPoint": 16.9})
    record = repo.get(KEY)
    assert record is not None
    assert record.timestamp == KEY
    assert record.readings == {"temperature": 27.1, "dewPoint": 16.9}
    assert record.to_dict() == {"timestamp": KEY, "temperature": 27.1, "dewPoint": 16.9}


def test_put_replaces_all_fields(repo: InMemoryMeasurementRepository) -> None:
    repo.put(KEY, {"temperature": 27.1, "dewPoint": 16.9})
    repo.put(KEY, {"precipitation": 0.5})
    assert repo.get(KEY).readings == {"precipitation": 0.5}


def test_merge_update_preserves_unspecified_fields(repo: InMemoryMeasurementRepository) -> None:
    repo.put(KEY, {"a": 0.0, "b": 2.0})
    merged = repo.merge_update(KEY, {"a": 1.0})
    assert merged.readings == {"a": 1.0, "b": 2.0}
    assert repo.get(KEY).readings == {"a": 1.0, "b": 2.0}


def test_merge_update_on_missing_key_acts_like_put(repo: InMemoryMeasurementRepository) -> None:
    repo.merge_update(KEY, {"a": 1.0})
    assert repo.get(KEY).readings == {"a": 1.0}


def test_stored_readings_are_not_aliased(repo: InMemoryMeasurementRepository) -> None:
    readings = {"a": 1.0}
    repo.put(KEY, readings)
    readings["a"] = 99.0
    assert repo.get(KEY).readings == {"a": 1.0}


def test_get_missing_returns_none(repo: InMemoryMeasurementRepository) -> None:
    assert repo.get(KEY) is None


def test_get_by_date_prefix_returns_same_day_in_insertion_order(
    seeded_repo: InMemoryMeasurementRepository,
) -> None:
    seeded_repo.put("2015-09-02T00:00:00.000Z", {"temperature": 20.0})
    day = seeded_repo.get_by_date_prefix("2015-09-01")
    assert [r.timestamp for r in day] == [
        "2015-09-01T16:00:00.000Z",
        "2015-09-01T16:10:00.000Z",
        "2015-09-01T16:20:00.000Z",
        "2015-09-01T16:30:00.000Z",
        "2015-09-01T16:40:00.000Z",
        "2015-09-01T17:00:00.000Z",
    ]
    assert seeded_repo.get_by_date_prefix("2015-09-03") == []


def test_delete_is_idempotent(repo: InMemoryMeasurementRepository) -> None:
    repo.put(KEY, {"a": 1.0})
    repo.delete(KEY)
    repo.delete(KEY)
    repo.delete("2000-01-01T00:00:00.000Z")
    assert repo.get(KEY) is None
    assert repo.keys() == []
    assert repo.count() == 0


def test_keys_is_a_snapshot(seeded_repo: InMemoryMeasurementRepository) -> None:
    keys = seeded_repo.keys()
    for key in keys:
        seeded_repo.delete(key)
    assert len(keys) == 6
    assert seeded_repo.count() == 0
