"""Data models for fitquest."""

from .character import (
    CLASS_BASE_STATS,
    Character,
    CharacterClass,
    Equipped,
    Inventory,
    StatName,
    Stats,
)
from .exercises import Exercise, ExerciseCategory, Muscle
from .items import Item, ItemCategory, ItemRarity
from .quest import Quest, QuestDifficulty, QuestStatus, Requirement
from .social import FriendRequest, LeaderboardEntry
from .workout import Workout, WorkoutExercise

__all__ = [
    "CLASS_BASE_STATS",
    "Character",
    "CharacterClass",
    "Equipped",
    "Exercise",
    "ExerciseCategory",
    "FriendRequest",
    "Inventory",
    "Item",
    "ItemCategory",
    "ItemRarity",
    "LeaderboardEntry",
    "Muscle",
    "Quest",
    "QuestDifficulty",
    "QuestStatus",
    "Requirement",
    "StatName",
    "Stats",
    "Workout",
    "WorkoutExercise",
]
