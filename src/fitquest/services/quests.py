"""Quest generation, matching and progress tracking."""

import logging
import string
from dataclasses import dataclass

import aiosqlite

from ..db.engine import Database
from ..db.repositories import CharacterRepository, ExerciseRepository, QuestRepository
from ..exceptions import ExerciseNotFoundError
from ..models.exercises import Exercise, ExerciseCategory, Muscle
from ..models.quest import (
    DIFFICULTY_PROFILES,
    DURATION_STEP,
    Quest,
    QuestDifficulty,
    QuestStatus,
    Requirement,
)
from ..models.workout import Workout
from ..utils.random_source import RandomSource, default_random
from .progression import credit_experience

logger = logging.getLogger(__name__)

QUEST_NAME_LENGTH = 12
QUEST_NAME_ALPHABET = string.ascii_letters + string.digits


def generate(difficulty: QuestDifficulty, rng: RandomSource) -> Quest:
    """Roll a new quest of the given difficulty.

    The requirement kinds are drawn without replacement, so a Hard quest
    always carries all three.
    """
    profile = DIFFICULTY_PROFILES[difficulty]
    quest = Quest(
        name="".join(rng.choice(QUEST_NAME_ALPHABET) for _ in range(QUEST_NAME_LENGTH)),
        difficulty=difficulty,
        workouts_needed=rng.randint(*profile.workouts_needed),
    )

    for requirement in rng.sample(list(Requirement), profile.requirement_count):
        if requirement == Requirement.DURATION:
            quest.min_duration = rng.randint(*profile.duration_steps) * DURATION_STEP
        elif requirement == Requirement.CATEGORY:
            quest.exercise_category = rng.choice(list(ExerciseCategory))
        elif requirement == Requirement.MUSCLE:
            quest.exercise_muscle = rng.choice(list(Muscle))

    return quest


def matches(quest: Quest, workout: Workout, catalog: dict[str, Exercise]) -> bool:
    """Whether a workout satisfies every active requirement of a quest.

    A quest without requirements matches any workout. Category and muscle
    requirements look each exercise up in `catalog`; an exercise missing from
    it raises ExerciseNotFoundError instead of counting as a miss.
    """
    if quest.min_duration is not None and workout.duration < quest.min_duration:
        return False

    if quest.exercise_category is None and quest.exercise_muscle is None:
        return True

    missing = [eid for eid in workout.exercise_ids if eid not in catalog]
    if missing:
        raise ExerciseNotFoundError(missing)
    exercises = [catalog[eid] for eid in workout.exercise_ids]

    if quest.exercise_category is not None and not any(
        e.category == quest.exercise_category for e in exercises
    ):
        return False

    if quest.exercise_muscle is not None and not any(
        e.targets(quest.exercise_muscle) for e in exercises
    ):
        return False

    return True


@dataclass
class QuestProgress:
    """One quest advanced by a workout."""

    quest: Quest
    completed: bool
    experience_awarded: int = 0
    coins_awarded: int = 0


class QuestService:
    """Creates quests and advances them as workouts come in."""

    def __init__(self, database: Database, rng: RandomSource | None = None):
        self.database = database
        self.rng = rng or default_random()

    async def create_quest(self, character_id: int, difficulty: QuestDifficulty) -> Quest:
        """Generate a quest and assign it to a character."""
        quest = generate(difficulty, self.rng)
        quest.character_id = character_id

        async def work(db: aiosqlite.Connection) -> Quest:
            await CharacterRepository(db).require(character_id)
            quest.id = await QuestRepository(db).create(quest)
            return quest

        quest = await self.database.run_in_transaction(work)
        logger.info(
            "Created %s quest %s for character %s (%s)",
            difficulty.value,
            quest.name,
            character_id,
            quest.get_requirements_display(),
        )
        return quest

    async def list_quests(
        self, character_id: int, status: QuestStatus | None = None
    ) -> list[Quest]:
        async with self.database.connect() as db:
            await CharacterRepository(db).require(character_id)
            return await QuestRepository(db).list_for_character(character_id, status)

    async def advance_on_workout(
        self,
        character_id: int,
        workout: Workout,
        db: aiosqlite.Connection | None = None,
    ) -> list[QuestProgress]:
        """Count a workout toward every matching incomplete quest.

        Quests that reach their target flip to complete and pay out their
        experience and coin rewards in the same transaction.

        Args:
            character_id: Owner of the quests
            workout: The workout just performed
            db: Connection of an open transaction to join. When omitted, a
                new transaction is started.

        Returns:
            Progress for each quest the workout advanced
        """
        if db is None:
            return await self.database.run_in_transaction(
                lambda conn: self._advance(conn, character_id, workout)
            )
        return await self._advance(db, character_id, workout)

    async def _advance(
        self, db: aiosqlite.Connection, character_id: int, workout: Workout
    ) -> list[QuestProgress]:
        characters = CharacterRepository(db)
        quests = QuestRepository(db)

        character = await characters.require(character_id)
        open_quests = await quests.list_for_character(character_id, QuestStatus.INCOMPLETE)
        if not open_quests:
            return []

        catalog = await ExerciseRepository(db).get_many(workout.exercise_ids)

        progress = []
        for quest in open_quests:
            if not matches(quest, workout, catalog):
                continue

            completed = quest.record_workout()
            await quests.update_progress(quest)
            entry = QuestProgress(quest=quest, completed=completed)
            if completed:
                credit_experience(character, quest.experience_reward)
                character.coins += quest.coin_reward
                entry.experience_awarded = quest.experience_reward
                entry.coins_awarded = quest.coin_reward
                logger.info(
                    "Character %s completed quest %s (+%d xp, +%d coins)",
                    character_id,
                    quest.name,
                    quest.experience_reward,
                    quest.coin_reward,
                )
            progress.append(entry)

        if any(p.completed for p in progress):
            await characters.update(character)
        return progress
