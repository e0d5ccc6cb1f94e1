"""Logged workout model."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass
class WorkoutExercise:
    """One exercise performed during a workout."""

    exercise_id: str
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    distance: float = 0.0

    def to_dict(self) -> dict:
        return {
            "exercise_id": self.exercise_id,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "distance": self.distance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutExercise":
        return cls(
            exercise_id=data["exercise_id"],
            sets=data.get("sets", 0),
            reps=data.get("reps", 0),
            weight=data.get("weight", 0.0),
            distance=data.get("distance", 0.0),
        )


@dataclass
class Workout:
    """A completed workout submitted by a character.

    `points` is the experience the workout earns and `coins` the currency.
    """

    name: str
    exercises: list[WorkoutExercise]
    duration: int  # minutes
    points: int = 0
    coins: int = 0
    performed_on: date = field(default_factory=date.today)
    character_id: int | None = None
    id: int | None = None
    recorded_at: datetime | None = None

    @property
    def exercise_ids(self) -> list[str]:
        return [e.exercise_id for e in self.exercises]

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "name": self.name,
            "exercises": [e.to_dict() for e in self.exercises],
            "duration": self.duration,
            "points": self.points,
            "coins": self.coins,
            "performed_on": self.performed_on.isoformat(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        character_id: int | None = None,
        recorded_at: datetime | None = None,
    ) -> "Workout":
        """Create from dictionary."""
        performed_on = data.get("performed_on")
        return cls(
            id=id,
            character_id=character_id,
            name=data["name"],
            exercises=[WorkoutExercise.from_dict(e) for e in data.get("exercises", [])],
            duration=data["duration"],
            points=data.get("points", 0),
            coins=data.get("coins", 0),
            performed_on=date.fromisoformat(performed_on) if performed_on else date.today(),
            recorded_at=recorded_at,
        )
