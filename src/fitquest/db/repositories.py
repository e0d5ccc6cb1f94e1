"""Data access layer for fitquest.

Repositories wrap a single open connection so several of them can share one
transaction (see Database.run_in_transaction).
"""

import json
from datetime import datetime

import aiosqlite

from ..exceptions import CharacterNotFoundError
from ..models.character import Character
from ..models.exercises import Exercise
from ..models.items import Item, ItemCategory, ItemRarity
from ..models.quest import Quest, QuestStatus
from ..models.social import FriendRequest
from ..models.workout import Workout


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class CharacterRepository:
    """Repository for characters."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def create(self, character: Character) -> int:
        """Create a new character."""
        data = character.to_dict()
        cursor = await self.db.execute(
            """
            INSERT INTO characters
            (username, class, stats, level, experience_leftover, pending_stat_points,
             coins, streak, equipped, inventory, friends)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                data["username"],
                data["class"]["name"],
                json.dumps(data["class"]["stats"]),
                data["level"],
                data["experience_leftover"],
                data["pending_stat_points"],
                data["coins"],
                data["streak"],
                json.dumps(data["equipped"]),
                json.dumps(data["inventory"]),
                json.dumps(data["friends"]),
            ),
        )
        return cursor.lastrowid

    async def get(self, character_id: int) -> Character | None:
        """Get a character by ID."""
        cursor = await self.db.execute(
            "SELECT * FROM characters WHERE id = ?", (character_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_character(row)

    async def require(self, character_id: int) -> Character:
        """Get a character by ID or raise CharacterNotFoundError."""
        character = await self.get(character_id)
        if character is None:
            raise CharacterNotFoundError(character_id)
        return character

    async def get_by_username(self, username: str) -> Character | None:
        cursor = await self.db.execute(
            "SELECT * FROM characters WHERE username = ?", (username,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_character(row)

    async def get_many(self, character_ids: list[int]) -> list[Character]:
        """Get characters by ID, in the order given. Missing IDs are skipped."""
        if not character_ids:
            return []
        placeholders = ", ".join("?" for _ in character_ids)
        cursor = await self.db.execute(
            f"SELECT * FROM characters WHERE id IN ({placeholders})",
            tuple(character_ids),
        )
        rows = await cursor.fetchall()
        by_id = {row["id"]: self._row_to_character(row) for row in rows}
        return [by_id[cid] for cid in character_ids if cid in by_id]

    async def update(self, character: Character) -> None:
        """Write back all mutable fields of a character."""
        if character.id is None:
            raise ValueError("Character must have an ID to update")

        data = character.to_dict()
        await self.db.execute(
            """
            UPDATE characters SET
                class = ?, stats = ?, level = ?, experience_leftover = ?,
                pending_stat_points = ?, coins = ?, streak = ?, equipped = ?,
                inventory = ?, friends = ?
            WHERE id = ?
            """,
            (
                data["class"]["name"],
                json.dumps(data["class"]["stats"]),
                data["level"],
                data["experience_leftover"],
                data["pending_stat_points"],
                data["coins"],
                data["streak"],
                json.dumps(data["equipped"]),
                json.dumps(data["inventory"]),
                json.dumps(data["friends"]),
                character.id,
            ),
        )

    async def top_by_level(self, limit: int) -> list[Character]:
        """Characters ranked by level, then leftover experience, then age."""
        cursor = await self.db.execute(
            """
            SELECT * FROM characters
            ORDER BY level DESC, experience_leftover DESC, id ASC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_character(row) for row in rows]

    def _row_to_character(self, row: aiosqlite.Row) -> Character:
        """Convert a database row to a Character."""
        data = {
            "username": row["username"],
            "class": {"name": row["class"], "stats": json.loads(row["stats"])},
            "level": row["level"],
            "experience_leftover": row["experience_leftover"],
            "pending_stat_points": row["pending_stat_points"],
            "coins": row["coins"],
            "streak": row["streak"],
            "equipped": json.loads(row["equipped"]),
            "inventory": json.loads(row["inventory"]),
            "friends": json.loads(row["friends"]),
        }
        return Character.from_dict(
            data, id=row["id"], created_at=_parse_timestamp(row["created_at"])
        )


class QuestRepository:
    """Repository for quests."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def create(self, quest: Quest) -> int:
        """Create a new quest for quest.character_id."""
        if quest.character_id is None:
            raise ValueError("Quest must belong to a character")

        data = quest.to_dict()
        cursor = await self.db.execute(
            """
            INSERT INTO quests
            (character_id, name, difficulty, status, workouts_needed, workouts_completed,
             min_duration, exercise_category, exercise_muscle)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                quest.character_id,
                data["name"],
                data["difficulty"],
                data["status"],
                data["workouts_needed"],
                data["workouts_completed"],
                data["min_duration"],
                data["exercise_category"],
                data["exercise_muscle"],
            ),
        )
        return cursor.lastrowid

    async def list_for_character(
        self, character_id: int, status: QuestStatus | None = None
    ) -> list[Quest]:
        """List a character's quests, oldest first."""
        if status is None:
            cursor = await self.db.execute(
                "SELECT * FROM quests WHERE character_id = ? ORDER BY id",
                (character_id,),
            )
        else:
            cursor = await self.db.execute(
                "SELECT * FROM quests WHERE character_id = ? AND status = ? ORDER BY id",
                (character_id, status.value),
            )
        rows = await cursor.fetchall()
        return [self._row_to_quest(row) for row in rows]

    async def update_progress(self, quest: Quest) -> None:
        """Persist the progress counter and status of a quest."""
        if quest.id is None:
            raise ValueError("Quest must have an ID to update")

        await self.db.execute(
            "UPDATE quests SET workouts_completed = ?, status = ? WHERE id = ?",
            (quest.workouts_completed, quest.status.value, quest.id),
        )

    def _row_to_quest(self, row: aiosqlite.Row) -> Quest:
        """Convert a database row to a Quest."""
        return Quest.from_dict(
            dict(row),
            id=row["id"],
            character_id=row["character_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class ItemRepository:
    """Repository for the item catalog."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def get(self, item_id: int) -> Item | None:
        """Get an item by ID."""
        cursor = await self.db.execute("SELECT * FROM items WHERE id = ?", (item_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    async def list_all(self) -> list[Item]:
        cursor = await self.db.execute("SELECT * FROM items ORDER BY id")
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def list_by_rarity(
        self, rarity: ItemRarity, category: ItemCategory | None = None
    ) -> list[Item]:
        """List items of one rarity, optionally limited to one category."""
        if category is None:
            cursor = await self.db.execute(
                "SELECT * FROM items WHERE rarity = ? ORDER BY id", (rarity.value,)
            )
        else:
            cursor = await self.db.execute(
                "SELECT * FROM items WHERE rarity = ? AND category = ? ORDER BY id",
                (rarity.value, category.value),
            )
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def list_sellable_ids(self) -> list[int]:
        """IDs of every item that may appear in the shop."""
        cursor = await self.db.execute(
            "SELECT id FROM items WHERE rarity != ? ORDER BY id",
            (ItemRarity.DEFAULT.value,),
        )
        rows = await cursor.fetchall()
        return [row["id"] for row in rows]

    def _row_to_item(self, row: aiosqlite.Row) -> Item:
        return Item.from_dict(dict(row), id=row["id"])


class ShopRepository:
    """Repository for the shared shop offering."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def list_items(self) -> list[Item]:
        """Items currently on offer, newest listing first."""
        cursor = await self.db.execute(
            """
            SELECT i.* FROM shop s
            JOIN items i ON i.id = s.item_id
            ORDER BY s.added_at DESC, s.id
            """
        )
        rows = await cursor.fetchall()
        return [Item.from_dict(dict(row), id=row["id"]) for row in rows]

    async def contains(self, item_id: int) -> bool:
        cursor = await self.db.execute(
            "SELECT 1 FROM shop WHERE item_id = ?", (item_id,)
        )
        return await cursor.fetchone() is not None

    async def replace_all(self, item_ids: list[int]) -> None:
        """Swap the whole offering for `item_ids`."""
        await self.db.execute("DELETE FROM shop")
        await self.db.executemany(
            "INSERT INTO shop (item_id) VALUES (?)",
            [(item_id,) for item_id in item_ids],
        )


class FriendRequestRepository:
    """Repository for pending friend requests."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def create(self, sender_id: int, recipient_id: int) -> int:
        cursor = await self.db.execute(
            "INSERT INTO friend_requests (sender_id, recipient_id) VALUES (?, ?)",
            (sender_id, recipient_id),
        )
        return cursor.lastrowid

    async def get(self, request_id: int) -> FriendRequest | None:
        cursor = await self.db.execute(
            "SELECT * FROM friend_requests WHERE id = ?", (request_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_request(row)

    async def find_between(self, a: int, b: int) -> FriendRequest | None:
        """A pending request between a and b in either direction."""
        cursor = await self.db.execute(
            """
            SELECT * FROM friend_requests
            WHERE (sender_id = ? AND recipient_id = ?)
               OR (sender_id = ? AND recipient_id = ?)
            LIMIT 1
            """,
            (a, b, b, a),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_request(row)

    async def list_for_recipient(self, recipient_id: int) -> list[FriendRequest]:
        cursor = await self.db.execute(
            "SELECT * FROM friend_requests WHERE recipient_id = ? ORDER BY id",
            (recipient_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_request(row) for row in rows]

    async def delete(self, request_id: int) -> bool:
        """Delete a request. Returns False if it was already gone."""
        cursor = await self.db.execute(
            "DELETE FROM friend_requests WHERE id = ?", (request_id,)
        )
        return cursor.rowcount > 0

    def _row_to_request(self, row: aiosqlite.Row) -> FriendRequest:
        return FriendRequest(
            id=row["id"],
            sender_id=row["sender_id"],
            recipient_id=row["recipient_id"],
            created_at=_parse_timestamp(row["created_at"]),
        )


class ExerciseRepository:
    """Repository for the exercise library."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def create(self, exercise: Exercise) -> None:
        data = exercise.to_dict()
        await self.db.execute(
            """
            INSERT OR REPLACE INTO exercises
            (id, name, category, primary_muscles, secondary_muscles)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                data["id"],
                data["name"],
                data["category"],
                json.dumps(data["primary_muscles"]),
                json.dumps(data["secondary_muscles"]),
            ),
        )

    async def get_many(self, exercise_ids: list[str]) -> dict[str, Exercise]:
        """Look up exercises by ID. Unknown IDs are absent from the result."""
        unique_ids = list(dict.fromkeys(exercise_ids))
        if not unique_ids:
            return {}
        placeholders = ", ".join("?" for _ in unique_ids)
        cursor = await self.db.execute(
            f"SELECT * FROM exercises WHERE id IN ({placeholders})",
            tuple(unique_ids),
        )
        rows = await cursor.fetchall()
        return {row["id"]: self._row_to_exercise(row) for row in rows}

    async def list_all(self) -> list[Exercise]:
        cursor = await self.db.execute("SELECT * FROM exercises ORDER BY name")
        rows = await cursor.fetchall()
        return [self._row_to_exercise(row) for row in rows]

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        return Exercise.from_dict(
            {
                "id": row["id"],
                "name": row["name"],
                "category": row["category"],
                "primary_muscles": json.loads(row["primary_muscles"]),
                "secondary_muscles": json.loads(row["secondary_muscles"]),
            }
        )


class WorkoutRepository:
    """Repository for workout history."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def create(self, workout: Workout) -> int:
        if workout.character_id is None:
            raise ValueError("Workout must belong to a character")

        data = workout.to_dict()
        cursor = await self.db.execute(
            """
            INSERT INTO workout_history
            (character_id, name, exercises, duration, points, coins, performed_on)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                workout.character_id,
                data["name"],
                json.dumps(data["exercises"]),
                data["duration"],
                data["points"],
                data["coins"],
                data["performed_on"],
            ),
        )
        return cursor.lastrowid

    async def list_for_character(self, character_id: int, limit: int = 20) -> list[Workout]:
        """Most recent workouts first."""
        cursor = await self.db.execute(
            """
            SELECT * FROM workout_history
            WHERE character_id = ?
            ORDER BY performed_on DESC, id DESC
            LIMIT ?
            """,
            (character_id, limit),
        )
        rows = await cursor.fetchall()
        return [self._row_to_workout(row) for row in rows]

    def _row_to_workout(self, row: aiosqlite.Row) -> Workout:
        data = {
            "name": row["name"],
            "exercises": json.loads(row["exercises"]),
            "duration": row["duration"],
            "points": row["points"],
            "coins": row["coins"],
            "performed_on": row["performed_on"],
        }
        return Workout.from_dict(
            data,
            id=row["id"],
            character_id=row["character_id"],
            recorded_at=_parse_timestamp(row["recorded_at"]),
        )
