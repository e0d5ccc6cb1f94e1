"""Database engine setup, initialization and transactions."""

import asyncio
import json
import logging
import sqlite3
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypeVar

import aiosqlite

from ..config import settings
from ..exceptions import StoreConflictError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Seconds to wait before retry n is n * RETRY_BACKOFF
RETRY_BACKOFF = 0.05


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fitquest.db"


def _is_lock_error(error: sqlite3.OperationalError) -> bool:
    message = str(error).lower()
    return "locked" in message or "busy" in message


class Database:
    """Connection factory and transaction runner for one SQLite file.

    Writes go through run_in_transaction, which takes SQLite's write lock up
    front (BEGIN IMMEDIATE) so read-check-write sequences on the same rows
    never interleave.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        self.db_path = db_path or get_db_path()
        self.timeout = settings.db_timeout if timeout is None else timeout
        self.max_retries = settings.max_retries if max_retries is None else max_retries

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection in autocommit mode with Row results."""
        async with aiosqlite.connect(
            self.db_path, timeout=self.timeout, isolation_level=None
        ) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection whose reads all see one committed state.

        A deferred transaction pins the snapshot at the first read; writers
        committing afterwards are not visible until the block exits.
        """
        async with self.connect() as db:
            await db.execute("BEGIN")
            try:
                yield db
            finally:
                await db.rollback()

    async def run_in_transaction(
        self, work: Callable[[aiosqlite.Connection], Awaitable[T]]
    ) -> T:
        """Run `work` inside one transaction and return its result.

        Commits when `work` returns and rolls back when it raises. Engine
        errors propagate unchanged after the rollback. Lock timeouts are
        retried up to max_retries times, then raised as StoreConflictError.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._run_once(work)
            except sqlite3.OperationalError as e:
                if not _is_lock_error(e):
                    raise StoreError(f"Database error: {e}") from e
                if attempt > self.max_retries:
                    raise StoreConflictError(attempt) from e
                logger.warning(
                    "Transaction hit a lock timeout (attempt %d of %d), retrying",
                    attempt,
                    self.max_retries + 1,
                )
                await asyncio.sleep(RETRY_BACKOFF * attempt)
            except sqlite3.Error as e:
                raise StoreError(f"Database error: {e}") from e

    async def _run_once(self, work: Callable[[aiosqlite.Connection], Awaitable[T]]) -> T:
        async with self.connect() as db:
            await db.execute("BEGIN IMMEDIATE")
            try:
                result = await work(db)
            except BaseException:
                await db.rollback()
                raise
            await db.commit()
            return result


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Readers see the last committed snapshot while a writer holds the lock
        await db.execute("PRAGMA journal_mode = WAL")

        # Characters: composite values are JSON columns
        await db.execute("""
            CREATE TABLE IF NOT EXISTS characters (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                class TEXT NOT NULL,
                stats TEXT NOT NULL,
                level INTEGER NOT NULL DEFAULT 1 CHECK (level >= 1),
                experience_leftover INTEGER NOT NULL DEFAULT 0 CHECK (experience_leftover >= 0),
                pending_stat_points INTEGER NOT NULL DEFAULT 0 CHECK (pending_stat_points >= 0),
                coins INTEGER NOT NULL DEFAULT 0 CHECK (coins >= 0),
                streak INTEGER NOT NULL DEFAULT 0,
                equipped TEXT NOT NULL,
                inventory TEXT NOT NULL,
                friends TEXT NOT NULL DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS quests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                character_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                difficulty TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'incomplete',
                workouts_needed INTEGER NOT NULL,
                workouts_completed INTEGER NOT NULL DEFAULT 0,
                min_duration INTEGER,
                exercise_category TEXT,
                exercise_muscle TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                CHECK (workouts_completed >= 0 AND workouts_completed <= workouts_needed),
                FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS items (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT UNIQUE NOT NULL,
                category TEXT NOT NULL,
                rarity TEXT NOT NULL,
                path TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS shop (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                item_id INTEGER NOT NULL UNIQUE,
                added_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (item_id) REFERENCES items(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS friend_requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                sender_id INTEGER NOT NULL,
                recipient_id INTEGER NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (sender_id) REFERENCES characters(id) ON DELETE CASCADE,
                FOREIGN KEY (recipient_id) REFERENCES characters(id) ON DELETE CASCADE
            )
        """)

        # Exercise library (catalog collaborator for quest matching)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                category TEXT NOT NULL,
                primary_muscles TEXT NOT NULL,
                secondary_muscles TEXT NOT NULL DEFAULT '[]'
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                character_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                exercises TEXT NOT NULL,
                duration INTEGER NOT NULL,
                points INTEGER NOT NULL DEFAULT 0,
                coins INTEGER NOT NULL DEFAULT 0,
                performed_on TEXT NOT NULL,
                recorded_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (character_id) REFERENCES characters(id) ON DELETE CASCADE
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_quests_character
            ON quests(character_id, status)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_characters_ranking
            ON characters(level DESC, experience_leftover DESC, id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_friend_requests_pair
            ON friend_requests(sender_id, recipient_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_friend_requests_recipient
            ON friend_requests(recipient_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_history_character
            ON workout_history(character_id, performed_on)
        """)

        await db.commit()


async def seed_exercises(db_path: Path | None = None) -> int:
    """Seed the database with the built-in exercise library."""
    from ..models.exercises import COMMON_EXERCISES

    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        count = 0
        for exercise in COMMON_EXERCISES:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises
                (id, name, category, primary_muscles, secondary_muscles)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    exercise.id,
                    exercise.name,
                    exercise.category.value,
                    json.dumps([m.value for m in exercise.primary_muscles]),
                    json.dumps([m.value for m in exercise.secondary_muscles]),
                ),
            )
            count += cursor.rowcount

        await db.commit()
        return count


async def seed_items(db_path: Path | None = None) -> int:
    """Seed the item catalog with the built-in cosmetics."""
    from ..models.items import COMMON_ITEMS

    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        count = 0
        for item in COMMON_ITEMS:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO items (name, category, rarity, path)
                VALUES (?, ?, ?, ?)
                """,
                (item.name, item.category.value, item.rarity.value, item.path),
            )
            count += cursor.rowcount

        await db.commit()
        return count
