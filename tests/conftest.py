"""Pytest configuration and fixtures."""

import random
import tempfile
from pathlib import Path

import pytest

from fitquest.db import (
    CharacterRepository,
    Database,
    ItemRepository,
    init_db,
    seed_exercises,
    seed_items,
)
from fitquest.models.exercises import COMMON_EXERCISES
from fitquest.models.items import ItemCategory, ItemRarity
from fitquest.services.characters import CharacterService


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def catalog():
    """Built-in exercise library keyed by id."""
    return {exercise.id: exercise for exercise in COMMON_EXERCISES}


@pytest.fixture
async def database(temp_db_path):
    """Initialized database with the item catalog and exercise library."""
    await init_db(temp_db_path)
    await seed_items(temp_db_path)
    await seed_exercises(temp_db_path)
    return Database(temp_db_path, timeout=5.0, max_retries=3)


@pytest.fixture
def character_service(database, rng):
    return CharacterService(database, rng=rng)


@pytest.fixture
def make_character(character_service):
    """Factory creating characters with unique usernames."""
    counter = {"n": 0}

    async def _make(username: str | None = None, class_name: str = "Warrior", **changes):
        counter["n"] += 1
        character = await character_service.create_character(
            username or f"hero{counter['n']}", class_name
        )
        if changes:
            character = await _update(character_service.database, character.id, **changes)
        return character

    return _make


async def _update(database: Database, character_id: int, **changes):
    async def work(db):
        repo = CharacterRepository(db)
        character = await repo.require(character_id)
        for name, value in changes.items():
            setattr(character, name, value)
        await repo.update(character)
        return character

    return await database.run_in_transaction(work)


@pytest.fixture
def update_character(database):
    """Overwrite fields of a stored character, bypassing the services."""

    async def _apply(character_id: int, **changes):
        return await _update(database, character_id, **changes)

    return _apply


@pytest.fixture
def load_character(database):
    async def _load(character_id: int):
        async with database.connect() as db:
            return await CharacterRepository(db).require(character_id)

    return _load


@pytest.fixture
def find_item(database):
    """Look up a seeded item by rarity and, optionally, category."""

    async def _find(rarity: ItemRarity, category: ItemCategory | None = None):
        async with database.connect() as db:
            items = await ItemRepository(db).list_by_rarity(rarity, category)
        assert items, f"no {rarity.value} item seeded"
        return items[0]

    return _find
