"""Exercise library loader from JSON."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..config import settings
from ..db.engine import get_db_path
from ..db.repositories import ExerciseRepository
from ..models.exercises import Exercise, ExerciseCategory, Muscle

logger = logging.getLogger(__name__)


def get_exercises_json_path(data_dir: Path | None = None) -> Path:
    """Get the path to the exercise library JSON file."""
    return (data_dir or settings.data_dir) / "exercises.json"


def _enum_value(raw: str) -> str:
    # free-exercise-db spells values with spaces ("lower back", "olympic weightlifting")
    return raw.strip().lower().replace(" ", "_")


def parse_exercise(data: dict) -> Exercise:
    """Build an Exercise from one free-exercise-db style record.

    Raises:
        KeyError: if a required field is missing
        ValueError: if the category or a muscle is not recognised
    """
    return Exercise(
        id=data["id"],
        name=data["name"],
        category=ExerciseCategory(_enum_value(data["category"])),
        primary_muscles=[Muscle(_enum_value(m)) for m in data.get("primaryMuscles", [])],
        secondary_muscles=[Muscle(_enum_value(m)) for m in data.get("secondaryMuscles", [])],
    )


def load_exercise_library(json_path: Path | None = None) -> list[Exercise]:
    """Load exercises from the library JSON file.

    The file is either a list of exercise records or an object with an
    "exercises" list. Returns an empty list if the file does not exist.
    """
    json_path = json_path or get_exercises_json_path()
    if not json_path.exists():
        return []

    with open(json_path) as f:
        data = json.load(f)

    records = data.get("exercises", []) if isinstance(data, dict) else data

    exercises = []
    for record in records:
        try:
            exercises.append(parse_exercise(record))
        except (ValueError, KeyError) as e:
            logger.warning(
                "Skipping invalid exercise %s: %s", record.get("id", "unknown"), e
            )
    return exercises


async def seed_exercises_from_json(
    db_path: Path | None = None, json_path: Path | None = None
) -> int:
    """Seed the exercise table from the JSON library.

    Falls back to the built-in COMMON_EXERCISES when no JSON file is present.

    Returns:
        Number of exercises written
    """
    if db_path is None:
        db_path = get_db_path()

    exercises = load_exercise_library(json_path)
    if not exercises:
        from ..models.exercises import COMMON_EXERCISES

        exercises = COMMON_EXERCISES

    async with aiosqlite.connect(db_path) as db:
        repo = ExerciseRepository(db)
        for exercise in exercises:
            await repo.create(exercise)
        await db.commit()

    logger.info("Seeded %d exercises", len(exercises))
    return len(exercises)
