"""Database layer for fitquest."""

from .engine import Database, get_db_path, init_db, seed_exercises, seed_items
from .repositories import (
    CharacterRepository,
    ExerciseRepository,
    FriendRequestRepository,
    ItemRepository,
    QuestRepository,
    ShopRepository,
    WorkoutRepository,
)

__all__ = [
    "CharacterRepository",
    "Database",
    "ExerciseRepository",
    "FriendRequestRepository",
    "get_db_path",
    "init_db",
    "ItemRepository",
    "QuestRepository",
    "seed_exercises",
    "seed_items",
    "ShopRepository",
    "WorkoutRepository",
]
