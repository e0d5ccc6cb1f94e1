"""Pytest configuration for integration tests."""

import random

import pytest

from fitquest.db import Database, init_db, seed_exercises, seed_items
from fitquest.services.characters import CharacterService
from fitquest.services.quests import QuestService
from fitquest.services.shop import ShopService
from fitquest.services.social import SocialService
from fitquest.services.workouts import WorkoutService


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


class Game:
    """Every service wired to one database, as the CLI wires them."""

    def __init__(self, database: Database, rng: random.Random):
        self.database = database
        self.characters = CharacterService(database, rng=rng)
        self.quests = QuestService(database, rng=rng)
        self.workouts = WorkoutService(database, quests=self.quests)
        self.shop = ShopService(database, rng=rng)
        self.social = SocialService(database)


@pytest.fixture
async def game(tmp_path):
    """A freshly initialized game on disk."""
    db_path = tmp_path / "fitquest.db"
    await init_db(db_path)
    await seed_items(db_path)
    await seed_exercises(db_path)
    return Game(Database(db_path), random.Random(7))
