"""Shared test fixtures."""

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nutrition_ledger.config import Settings
from nutrition_ledger.domain.foods import Food
from nutrition_ledger.domain.snapshot import LedgerState
from nutrition_ledger.services.data_manager import DataManager, SnapshotError


@dataclass
class InMemorySnapshotStore:
    """In-memory snapshot repository for tests."""

    state: LedgerState | None = None
    saves: int = 0

    def load(self) -> LedgerState | None:
        return copy.deepcopy(self.state)

    def save(self, state: LedgerState) -> None:
        self.state = copy.deepcopy(state)
        self.saves += 1


@dataclass
class FailingSnapshotStore:
    """Repository whose reads and writes always fail."""

    errors: list[str] = field(default_factory=list)

    def load(self) -> LedgerState | None:
        self.errors.append("load")
        raise SnapshotError("corrupt snapshot")

    def save(self, state: LedgerState) -> None:
        self.errors.append("save")
        raise OSError("disk full")


def make_food(  # noqa: PLR0913
    food_id: str,
    name: str,
    serving_size: float = 100.0,
    calories: float = 200.0,
    protein_g: float = 10.0,
    carbs_g: float = 20.0,
    fat_g: float = 5.0,
    brand: str = "Generic",
    category: str = "Test",
) -> Food:
    return Food(
        id=food_id,
        name=name,
        brand=brand,
        category=category,
        serving_size=serving_size,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", log_level="DEBUG", _env_file=None)


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def manager(snapshot_store: InMemorySnapshotStore) -> DataManager:
    data_manager = DataManager(repository=snapshot_store)
    data_manager.load_all()
    return data_manager


@pytest.fixture
def signed_in(manager: DataManager) -> DataManager:
    assert manager.register("Alex", "alex@example.com", "secret")
    return manager


@pytest.fixture
def oats() -> Food:
    return make_food("oats", "Rolled Oats", 100.0, 389.0, 16.9, 66.3, 6.9)


@pytest.fixture
def milk() -> Food:
    return make_food("milk", "Whole Milk", 100.0, 61.0, 3.2, 4.8, 3.3)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("nutrition_ledger")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
