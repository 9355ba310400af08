"""Tests for the JSON snapshot store."""

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from nutrition_ledger.adapters.json_snapshot_store import JsonSnapshotStore
from nutrition_ledger.domain.foods import CustomFood
from nutrition_ledger.domain.logs import DayLog, MealType, food_log_from_food
from nutrition_ledger.domain.models import ActivityLevel, Sex, User
from nutrition_ledger.domain.snapshot import LedgerState
from nutrition_ledger.services.data_manager import SnapshotError
from nutrition_ledger.services.goals import build_goal
from tests.conftest import make_food


def _sample_state() -> LedgerState:
    food = make_food("x", "Bagel", calories=250.0)
    custom = CustomFood(id="c1", user_id="a@example.com", name="Bagel half")
    custom.add_ingredient(food, 50.0)
    day_log = DayLog(id="d1", user_id="a@example.com", date=date(2024, 2, 3))
    day_log.add_food_log(
        food_log_from_food(
            food, MealType.BREAKFAST, 1.5, datetime(2024, 2, 3, 8, 15), "toasted"
        )
    )
    user = User(
        id="a@example.com",
        name="Alex",
        age=31,
        sex=Sex.FEMALE,
        height_in=65.0,
        weight_lb=150.0,
        activity_level=ActivityLevel.LIGHT,
    )
    return LedgerState(
        active_user_id="a@example.com",
        goals=[build_goal(1900, 140.0, 190.0, 60.0, start=date(2024, 2, 1))],
        foods=[food, custom.to_mirror_food()],
        custom_foods=[custom],
        day_logs=[day_log],
        users={"a@example.com": user},
        password_salts={"a@example.com": "00ff"},
        password_hashes={"a@example.com": "abcd"},
    )


def test_load_missing_file_returns_none(tmp_path: Path) -> None:
    store = JsonSnapshotStore(tmp_path / "nested" / "ledger.json")

    assert store.load() is None
    assert (tmp_path / "nested").is_dir()


def test_save_then_load_restores_state(tmp_path: Path) -> None:
    store = JsonSnapshotStore(tmp_path / "ledger.json")
    state = _sample_state()

    store.save(state)
    loaded = store.load()

    assert loaded is not None
    assert loaded.active_user_id == "a@example.com"
    assert loaded.foods == state.foods
    assert loaded.custom_foods == state.custom_foods
    assert loaded.users["a@example.com"].sex == Sex.FEMALE
    assert loaded.users["a@example.com"].activity_level == ActivityLevel.LIGHT
    assert loaded.goals[0].end_date == date(2024, 3, 2)
    restored_log = loaded.day_logs[0]
    assert restored_log.food_logs == state.day_logs[0].food_logs
    assert restored_log.total_calories == 375
    assert loaded.password_salts == {"a@example.com": "00ff"}
    assert list(tmp_path.iterdir()) == [tmp_path / "ledger.json"]


def test_saved_document_is_versioned_and_tagged(tmp_path: Path) -> None:
    path = tmp_path / "ledger.json"
    JsonSnapshotStore(path).save(_sample_state())

    document = json.loads(path.read_text(encoding="utf-8"))

    assert document["version"] == 1
    assert list(document)[:9] == [
        "version",
        "active_user_id",
        "goals",
        "foods",
        "custom_foods",
        "day_logs",
        "users",
        "password_salts",
        "password_hashes",
    ]
    assert document["day_logs"][0]["kind"] == "day_log"
    assert document["day_logs"][0]["food_logs"][0]["kind"] == "food_log"


def test_load_recomputes_stale_day_totals(tmp_path: Path) -> None:
    path = tmp_path / "ledger.json"
    JsonSnapshotStore(path).save(_sample_state())
    document = json.loads(path.read_text(encoding="utf-8"))
    document["day_logs"][0]["total_calories"] = 9999
    path.write_text(json.dumps(document), encoding="utf-8")

    loaded = JsonSnapshotStore(path).load()

    assert loaded is not None
    assert loaded.day_logs[0].total_calories == 375


def test_corrupt_file_raises_snapshot_error(tmp_path: Path) -> None:
    path = tmp_path / "ledger.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotError):
        JsonSnapshotStore(path).load()


def test_version_mismatch_raises_snapshot_error(tmp_path: Path) -> None:
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps({"version": 99}), encoding="utf-8")

    with pytest.raises(SnapshotError):
        JsonSnapshotStore(path).load()


def test_failed_save_keeps_previous_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "ledger.json"
    store = JsonSnapshotStore(path)
    store.save(LedgerState(active_user_id="before"))

    def broken_replace(src: str, dst: Path) -> None:
        raise OSError("rename failed")

    monkeypatch.setattr("os.replace", broken_replace)

    with pytest.raises(OSError):
        store.save(_sample_state())

    assert json.loads(path.read_text(encoding="utf-8"))["active_user_id"] == "before"
    assert list(tmp_path.iterdir()) == [path]


def test_invalid_utf8_raises_snapshot_error(tmp_path: Path) -> None:
    path = tmp_path / "ledger.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(SnapshotError):
        JsonSnapshotStore(path).load()


def test_unusable_data_dir_raises_snapshot_error(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"
    data_dir.write_text("not a directory", encoding="utf-8")

    with pytest.raises(SnapshotError):
        JsonSnapshotStore(data_dir / "ledger.json").load()
