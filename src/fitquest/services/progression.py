"""Experience, leveling and stat point math."""

import logging
import math
from dataclasses import dataclass, replace

import aiosqlite

from ..db.engine import Database
from ..db.repositories import CharacterRepository
from ..exceptions import InsufficientPointsError, InvalidAmountError, UnknownStatError
from ..models.character import Character, StatName, Stats

logger = logging.getLogger(__name__)

BASE_EXPERIENCE = 200
EXPERIENCE_GROWTH = 1.07


def experience_required(level: int) -> int:
    """Experience needed to advance from `level` to `level + 1`."""
    return math.floor(BASE_EXPERIENCE * EXPERIENCE_GROWTH**level)


@dataclass(frozen=True)
class ExperienceResult:
    """Outcome of applying gained experience to a character's progression."""

    level: int
    leftover: int
    pending_stat_points: int
    levels_gained: int


def apply_experience(level: int, leftover: int, pending: int, gained: int) -> ExperienceResult:
    """Fold `gained` experience into a progression state.

    Each level crossed consumes that level's requirement and grants one
    pending stat point. The returned leftover is always below the requirement
    of the returned level.

    Args:
        level: Current level
        leftover: Experience carried within the current level
        pending: Unallocated stat points
        gained: Experience to add, must be >= 0

    Returns:
        The new level, leftover, pending points and number of levels gained
    """
    if gained < 0:
        raise InvalidAmountError(gained, what="experience")

    total = leftover + gained
    new_level = level
    while total >= experience_required(new_level):
        total -= experience_required(new_level)
        new_level += 1

    levels_gained = new_level - level
    return ExperienceResult(
        level=new_level,
        leftover=total,
        pending_stat_points=pending + levels_gained,
        levels_gained=levels_gained,
    )


def allocate_stat_point(
    stat_name: str,
    amount: int,
    pending_points: int,
    current_stats: Stats,
) -> tuple[Stats, int]:
    """Spend pending points on one stat.

    Returns:
        Tuple of (new stats, remaining pending points)
    """
    if amount <= 0:
        raise InvalidAmountError(amount)
    if amount > pending_points:
        raise InsufficientPointsError(amount, pending_points)
    try:
        stat = StatName(stat_name.lower())
    except ValueError:
        raise UnknownStatError(stat_name) from None

    return current_stats.increase(stat, amount), pending_points - amount


def credit_experience(character: Character, amount: int) -> int:
    """Apply experience to a loaded character in place. Returns levels gained."""
    result = apply_experience(
        character.level,
        character.experience_leftover,
        character.pending_stat_points,
        amount,
    )
    character.level = result.level
    character.experience_leftover = result.leftover
    character.pending_stat_points = result.pending_stat_points
    if result.levels_gained:
        logger.info(
            "Character %s reached level %d (+%d)",
            character.id,
            character.level,
            result.levels_gained,
        )
    return result.levels_gained


class ProgressionService:
    """Persists experience deposits and stat allocations."""

    def __init__(self, database: Database):
        self.database = database

    async def deposit_experience(self, character_id: int, amount: int) -> Character:
        """Add experience to a character and level it up as far as it goes."""
        if amount < 0:
            raise InvalidAmountError(amount, what="experience")

        async def work(db: aiosqlite.Connection) -> Character:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            credit_experience(character, amount)
            await characters.update(character)
            return character

        return await self.database.run_in_transaction(work)

    async def allocate(self, character_id: int, stat_name: str, amount: int) -> Character:
        """Move `amount` pending points into `stat_name`."""

        async def work(db: aiosqlite.Connection) -> Character:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            stats, remaining = allocate_stat_point(
                stat_name,
                amount,
                character.pending_stat_points,
                character.character_class.stats,
            )
            character.character_class = replace(character.character_class, stats=stats)
            character.pending_stat_points = remaining
            await characters.update(character)
            return character

        character = await self.database.run_in_transaction(work)
        logger.info("Character %s allocated %d point(s) to %s", character_id, amount, stat_name)
        return character
