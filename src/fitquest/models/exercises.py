"""Exercise definitions and metadata."""

from dataclasses import dataclass, field
from enum import Enum


class ExerciseCategory(str, Enum):
    """Exercise categories used by the library and quest requirements."""

    POWERLIFTING = "powerlifting"
    STRENGTH = "strength"
    STRETCHING = "stretching"
    CARDIO = "cardio"
    OLYMPIC_WEIGHTLIFTING = "olympic_weightlifting"
    STRONGMAN = "strongman"
    PLYOMETRICS = "plyometrics"


class Muscle(str, Enum):
    """Muscles an exercise can target."""

    ABDOMINALS = "abdominals"
    ABDUCTORS = "abductors"
    ADDUCTORS = "adductors"
    BICEPS = "biceps"
    CALVES = "calves"
    CHEST = "chest"
    FOREARMS = "forearms"
    GLUTES = "glutes"
    HAMSTRINGS = "hamstrings"
    LATS = "lats"
    LOWER_BACK = "lower_back"
    MIDDLE_BACK = "middle_back"
    NECK = "neck"
    QUADRICEPS = "quadriceps"
    SHOULDERS = "shoulders"
    TRAPS = "traps"
    TRICEPS = "triceps"


@dataclass
class Exercise:
    """Represents a library exercise with metadata."""

    id: str
    name: str
    category: ExerciseCategory
    primary_muscles: list[Muscle]
    secondary_muscles: list[Muscle] = field(default_factory=list)

    def targets(self, muscle: Muscle) -> bool:
        """Whether the exercise works the muscle as a primary or secondary mover."""
        return muscle in self.primary_muscles or muscle in self.secondary_muscles

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "primary_muscles": [m.value for m in self.primary_muscles],
            "secondary_muscles": [m.value for m in self.secondary_muscles],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            category=ExerciseCategory(data["category"]),
            primary_muscles=[Muscle(m) for m in data["primary_muscles"]],
            secondary_muscles=[Muscle(m) for m in data.get("secondary_muscles", [])],
        )


# Built-in library, used when no exercises JSON is present in the data directory.
# Ids follow the free-exercise-db naming scheme.
COMMON_EXERCISES: list[Exercise] = [
    Exercise(
        id="Barbell_Bench_Press_-_Medium_Grip",
        name="Barbell Bench Press - Medium Grip",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.CHEST],
        secondary_muscles=[Muscle.SHOULDERS, Muscle.TRICEPS],
    ),
    Exercise(
        id="Pushups",
        name="Pushups",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.CHEST],
        secondary_muscles=[Muscle.SHOULDERS, Muscle.TRICEPS],
    ),
    Exercise(
        id="Standing_Military_Press",
        name="Standing Military Press",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.SHOULDERS],
        secondary_muscles=[Muscle.TRICEPS],
    ),
    Exercise(
        id="Pullups",
        name="Pullups",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.LATS],
        secondary_muscles=[Muscle.BICEPS, Muscle.MIDDLE_BACK],
    ),
    Exercise(
        id="Bent_Over_Barbell_Row",
        name="Bent Over Barbell Row",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.MIDDLE_BACK],
        secondary_muscles=[Muscle.BICEPS, Muscle.LATS, Muscle.SHOULDERS],
    ),
    Exercise(
        id="Barbell_Curl",
        name="Barbell Curl",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.BICEPS],
        secondary_muscles=[Muscle.FOREARMS],
    ),
    Exercise(
        id="Triceps_Pushdown",
        name="Triceps Pushdown",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.TRICEPS],
    ),
    Exercise(
        id="Barbell_Squat",
        name="Barbell Squat",
        category=ExerciseCategory.POWERLIFTING,
        primary_muscles=[Muscle.QUADRICEPS],
        secondary_muscles=[Muscle.CALVES, Muscle.GLUTES, Muscle.HAMSTRINGS, Muscle.LOWER_BACK],
    ),
    Exercise(
        id="Barbell_Deadlift",
        name="Barbell Deadlift",
        category=ExerciseCategory.POWERLIFTING,
        primary_muscles=[Muscle.LOWER_BACK],
        secondary_muscles=[
            Muscle.CALVES,
            Muscle.FOREARMS,
            Muscle.GLUTES,
            Muscle.HAMSTRINGS,
            Muscle.LATS,
            Muscle.MIDDLE_BACK,
            Muscle.QUADRICEPS,
            Muscle.TRAPS,
        ],
    ),
    Exercise(
        id="Romanian_Deadlift",
        name="Romanian Deadlift",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.HAMSTRINGS],
        secondary_muscles=[Muscle.GLUTES, Muscle.LOWER_BACK],
    ),
    Exercise(
        id="Standing_Calf_Raises",
        name="Standing Calf Raises",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.CALVES],
    ),
    Exercise(
        id="Barbell_Shrug",
        name="Barbell Shrug",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.TRAPS],
    ),
    Exercise(
        id="Crunches",
        name="Crunches",
        category=ExerciseCategory.STRENGTH,
        primary_muscles=[Muscle.ABDOMINALS],
    ),
    Exercise(
        id="Power_Clean",
        name="Power Clean",
        category=ExerciseCategory.OLYMPIC_WEIGHTLIFTING,
        primary_muscles=[Muscle.HAMSTRINGS],
        secondary_muscles=[Muscle.CALVES, Muscle.GLUTES, Muscle.QUADRICEPS, Muscle.TRAPS],
    ),
    Exercise(
        id="Snatch",
        name="Snatch",
        category=ExerciseCategory.OLYMPIC_WEIGHTLIFTING,
        primary_muscles=[Muscle.QUADRICEPS],
        secondary_muscles=[Muscle.GLUTES, Muscle.HAMSTRINGS, Muscle.SHOULDERS, Muscle.TRAPS],
    ),
    Exercise(
        id="Farmers_Walk",
        name="Farmer's Walk",
        category=ExerciseCategory.STRONGMAN,
        primary_muscles=[Muscle.FOREARMS],
        secondary_muscles=[Muscle.ABDOMINALS, Muscle.TRAPS],
    ),
    Exercise(
        id="Tire_Flip",
        name="Tire Flip",
        category=ExerciseCategory.STRONGMAN,
        primary_muscles=[Muscle.QUADRICEPS],
        secondary_muscles=[Muscle.GLUTES, Muscle.HAMSTRINGS, Muscle.SHOULDERS],
    ),
    Exercise(
        id="Box_Jump_Multiple_Response",
        name="Box Jump (Multiple Response)",
        category=ExerciseCategory.PLYOMETRICS,
        primary_muscles=[Muscle.HAMSTRINGS],
        secondary_muscles=[Muscle.CALVES, Muscle.GLUTES, Muscle.QUADRICEPS],
    ),
    Exercise(
        id="Running_Treadmill",
        name="Running, Treadmill",
        category=ExerciseCategory.CARDIO,
        primary_muscles=[Muscle.QUADRICEPS],
        secondary_muscles=[Muscle.CALVES, Muscle.GLUTES, Muscle.HAMSTRINGS],
    ),
    Exercise(
        id="Rowing_Stationary",
        name="Rowing, Stationary",
        category=ExerciseCategory.CARDIO,
        primary_muscles=[Muscle.QUADRICEPS],
        secondary_muscles=[Muscle.BICEPS, Muscle.CALVES, Muscle.HAMSTRINGS, Muscle.MIDDLE_BACK],
    ),
    Exercise(
        id="Hamstring_Stretch",
        name="Hamstring Stretch",
        category=ExerciseCategory.STRETCHING,
        primary_muscles=[Muscle.HAMSTRINGS],
    ),
    Exercise(
        id="Adductor",
        name="Adductor",
        category=ExerciseCategory.STRETCHING,
        primary_muscles=[Muscle.ADDUCTORS],
    ),
    Exercise(
        id="Side_Lying_Groin_Stretch",
        name="Side Lying Groin Stretch",
        category=ExerciseCategory.STRETCHING,
        primary_muscles=[Muscle.ABDUCTORS],
        secondary_muscles=[Muscle.ADDUCTORS],
    ),
    Exercise(
        id="Neck_Bridge_Prone",
        name="Neck Bridge Prone",
        category=ExerciseCategory.STRETCHING,
        primary_muscles=[Muscle.NECK],
    ),
]
