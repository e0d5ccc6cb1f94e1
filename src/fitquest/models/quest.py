"""Quest model and difficulty tables."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .exercises import ExerciseCategory, Muscle


class QuestDifficulty(str, Enum):
    """Quest difficulty tiers."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestStatus(str, Enum):
    """Quest lifecycle. Incomplete -> Complete only."""

    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


class Requirement(str, Enum):
    """Kinds of predicate a quest can place on a workout."""

    DURATION = "duration"
    CATEGORY = "category"
    MUSCLE = "muscle"


@dataclass(frozen=True)
class DifficultyProfile:
    """Generation parameters and rewards for one difficulty."""

    workouts_needed: tuple[int, int]  # inclusive range
    requirement_count: int
    duration_steps: tuple[int, int]  # inclusive range, in DURATION_STEP units
    experience_reward: int
    coin_reward: int


# Minutes per duration step
DURATION_STEP = 5

DIFFICULTY_PROFILES: dict[QuestDifficulty, DifficultyProfile] = {
    QuestDifficulty.EASY: DifficultyProfile(
        workouts_needed=(1, 1),
        requirement_count=1,
        duration_steps=(1, 6),
        experience_reward=500,
        coin_reward=250,
    ),
    QuestDifficulty.MEDIUM: DifficultyProfile(
        workouts_needed=(3, 5),
        requirement_count=2,
        duration_steps=(9, 12),
        experience_reward=2_500,
        coin_reward=500,
    ),
    QuestDifficulty.HARD: DifficultyProfile(
        workouts_needed=(10, 15),
        requirement_count=3,
        duration_steps=(16, 24),
        experience_reward=10_000,
        coin_reward=2_000,
    ),
}


@dataclass
class Quest:
    """A workout objective belonging to one character.

    Requirement fields left as None are inactive. A quest with no active
    requirement accepts any workout.
    """

    name: str
    difficulty: QuestDifficulty
    workouts_needed: int
    workouts_completed: int = 0
    status: QuestStatus = QuestStatus.INCOMPLETE
    min_duration: int | None = None
    exercise_category: ExerciseCategory | None = None
    exercise_muscle: Muscle | None = None
    character_id: int | None = None
    id: int | None = None
    created_at: datetime | None = None

    @property
    def is_complete(self) -> bool:
        return self.status == QuestStatus.COMPLETE

    @property
    def experience_reward(self) -> int:
        return DIFFICULTY_PROFILES[self.difficulty].experience_reward

    @property
    def coin_reward(self) -> int:
        return DIFFICULTY_PROFILES[self.difficulty].coin_reward

    @property
    def requirements(self) -> list[Requirement]:
        """Active requirement kinds."""
        active = []
        if self.min_duration is not None:
            active.append(Requirement.DURATION)
        if self.exercise_category is not None:
            active.append(Requirement.CATEGORY)
        if self.exercise_muscle is not None:
            active.append(Requirement.MUSCLE)
        return active

    def record_workout(self) -> bool:
        """Count one matching workout.

        Returns:
            True if this workout completed the quest
        """
        if self.is_complete:
            raise ValueError(f"Quest {self.name} is already complete")
        self.workouts_completed += 1
        if self.workouts_completed >= self.workouts_needed:
            self.workouts_completed = self.workouts_needed
            self.status = QuestStatus.COMPLETE
            return True
        return False

    def get_requirements_display(self) -> str:
        """Human-readable requirement summary."""
        parts = []
        if self.min_duration is not None:
            parts.append(f"{self.min_duration}+ min")
        if self.exercise_category is not None:
            parts.append(f"any {self.exercise_category.value} exercise")
        if self.exercise_muscle is not None:
            parts.append(f"works {self.exercise_muscle.value}")
        return ", ".join(parts) if parts else "any workout"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "difficulty": self.difficulty.value,
            "status": self.status.value,
            "workouts_needed": self.workouts_needed,
            "workouts_completed": self.workouts_completed,
            "min_duration": self.min_duration,
            "exercise_category": self.exercise_category.value if self.exercise_category else None,
            "exercise_muscle": self.exercise_muscle.value if self.exercise_muscle else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        character_id: int | None = None,
        created_at: datetime | None = None,
    ) -> "Quest":
        """Create from dictionary."""
        category = data.get("exercise_category")
        muscle = data.get("exercise_muscle")
        return cls(
            id=id,
            character_id=character_id,
            name=data["name"],
            difficulty=QuestDifficulty(data["difficulty"]),
            status=QuestStatus(data.get("status", "incomplete")),
            workouts_needed=data["workouts_needed"],
            workouts_completed=data.get("workouts_completed", 0),
            min_duration=data.get("min_duration"),
            exercise_category=ExerciseCategory(category) if category else None,
            exercise_muscle=Muscle(muscle) if muscle else None,
            created_at=created_at,
        )
