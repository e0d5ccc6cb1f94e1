"""Workout logging: history, rewards and quest progress in one step."""

import logging
from dataclasses import dataclass, field

import aiosqlite

from ..db.engine import Database
from ..db.repositories import CharacterRepository, ExerciseRepository, WorkoutRepository
from ..exceptions import ExerciseNotFoundError, InvalidWorkoutError
from ..models.workout import Workout
from .progression import credit_experience
from .quests import QuestProgress, QuestService

logger = logging.getLogger(__name__)


@dataclass
class WorkoutResult:
    """Everything a logged workout changed."""

    workout: Workout
    experience_gained: int
    coins_earned: int
    levels_gained: int
    quest_progress: list[QuestProgress] = field(default_factory=list)

    @property
    def quests_completed(self) -> list[QuestProgress]:
        return [p for p in self.quest_progress if p.completed]


def validate_workout(workout: Workout) -> None:
    """Reject malformed workouts before anything is written."""
    if not workout.name.strip():
        raise InvalidWorkoutError("name is required")
    if not workout.exercises:
        raise InvalidWorkoutError("at least one exercise is required")
    if workout.duration < 0:
        raise InvalidWorkoutError("duration cannot be negative")
    if workout.points < 0:
        raise InvalidWorkoutError("points cannot be negative")
    if workout.coins < 0:
        raise InvalidWorkoutError("coins cannot be negative")
    for exercise in workout.exercises:
        if min(exercise.sets, exercise.reps) < 0 or min(exercise.weight, exercise.distance) < 0:
            raise InvalidWorkoutError(f"negative values for {exercise.exercise_id}")


class WorkoutService:
    """Records workouts and pays out what they earn."""

    def __init__(self, database: Database, quests: QuestService | None = None):
        self.database = database
        self.quests = quests or QuestService(database)

    async def log_workout(self, character_id: int, workout: Workout) -> WorkoutResult:
        """Log a workout for a character.

        In one transaction: stores the workout in the history, deposits its
        points as experience and its coins, then advances the character's
        matching quests (which may pay out further rewards).

        Raises:
            InvalidWorkoutError: the workout is malformed
            CharacterNotFoundError: the character does not exist
            ExerciseNotFoundError: an exercise is not in the library
        """
        validate_workout(workout)

        async def work(db: aiosqlite.Connection) -> WorkoutResult:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            start_level = character.level

            catalog = await ExerciseRepository(db).get_many(workout.exercise_ids)
            missing = [eid for eid in workout.exercise_ids if eid not in catalog]
            if missing:
                raise ExerciseNotFoundError(missing)

            workout.character_id = character_id
            workout.id = await WorkoutRepository(db).create(workout)

            credit_experience(character, workout.points)
            character.coins += workout.coins
            await characters.update(character)

            progress = await self.quests.advance_on_workout(character_id, workout, db=db)
            final = await characters.require(character_id)
            return WorkoutResult(
                workout=workout,
                experience_gained=workout.points
                + sum(p.experience_awarded for p in progress),
                coins_earned=workout.coins + sum(p.coins_awarded for p in progress),
                levels_gained=final.level - start_level,
                quest_progress=progress,
            )

        result = await self.database.run_in_transaction(work)
        logger.info(
            "Character %s logged workout %s (+%d xp, +%d coins, %d quest(s) advanced)",
            character_id,
            workout.name,
            result.experience_gained,
            result.coins_earned,
            len(result.quest_progress),
        )
        return result

    async def history(self, character_id: int, limit: int = 20) -> list[Workout]:
        """Most recent workouts of a character."""
        async with self.database.connect() as db:
            await CharacterRepository(db).require(character_id)
            return await WorkoutRepository(db).list_for_character(character_id, limit)
