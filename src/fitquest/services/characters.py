"""Character onboarding, lookup and equipment."""

import logging

import aiosqlite

from ..db.engine import Database
from ..db.repositories import CharacterRepository, ItemRepository
from ..exceptions import (
    ItemNotFoundError,
    ItemNotOwnedError,
    NotFoundError,
    UnknownClassError,
    UsernameTakenError,
    ValidationError,
)
from ..models.character import (
    CLASS_BASE_STATS,
    REQUIRED_SLOTS,
    SLOT_FOR_CATEGORY,
    Character,
    CharacterClass,
    Equipped,
    Inventory,
)
from ..models.items import ItemCategory, ItemRarity
from ..utils.random_source import RandomSource, default_random
from .progression import experience_required

logger = logging.getLogger(__name__)


def resolve_class(class_name: str) -> CharacterClass:
    """Look up a class by name, ignoring case."""
    for name, stats in CLASS_BASE_STATS.items():
        if name.lower() == class_name.strip().lower():
            return CharacterClass(name=name, stats=stats)
    raise UnknownClassError(class_name)


def character_summary(character: Character) -> dict:
    """Character state plus the experience needed for the next level."""
    return {
        "id": character.id,
        **character.to_dict(),
        "experience_needed": experience_required(character.level),
    }


class CharacterService:
    """Creates characters and manages what they wear."""

    def __init__(self, database: Database, rng: RandomSource | None = None):
        self.database = database
        self.rng = rng or default_random()

    async def create_character(self, username: str, class_name: str) -> Character:
        """Create a level 1 character wearing random starter gear.

        Every required slot gets a random default-rarity item of its
        category, which is also added to the inventory.

        Raises:
            ValidationError: the username is blank
            UnknownClassError: the class does not exist
            UsernameTakenError: another character has the username
        """
        username = username.strip()
        if not username:
            raise ValidationError("Username cannot be empty")
        character_class = resolve_class(class_name)

        async def work(db: aiosqlite.Connection) -> Character:
            characters = CharacterRepository(db)
            if await characters.get_by_username(username) is not None:
                raise UsernameTakenError(username)

            items = ItemRepository(db)
            inventory = Inventory()
            starter: dict[str, int] = {}
            for category in REQUIRED_SLOTS:
                defaults = await items.list_by_rarity(ItemRarity.DEFAULT, category)
                if not defaults:
                    raise NotFoundError(f"No default {category.value} items in the catalog")
                item = self.rng.choice(defaults)
                starter[SLOT_FOR_CATEGORY[category]] = item.id
                inventory.add(category, item.id)

            character = Character(
                username=username,
                character_class=character_class,
                equipped=Equipped(**starter),
                inventory=inventory,
            )
            character.id = await characters.create(character)
            return character

        character = await self.database.run_in_transaction(work)
        logger.info(
            "Created character %s (%s) with id %s",
            character.username,
            character.character_class.name,
            character.id,
        )
        return character

    async def get_character(self, character_id: int) -> Character:
        async with self.database.connect() as db:
            return await CharacterRepository(db).require(character_id)

    async def equip(self, character_id: int, item_id: int) -> Character:
        """Wear an owned item in its category's slot."""

        async def work(db: aiosqlite.Connection) -> Character:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            item = await ItemRepository(db).get(item_id)
            if item is None:
                raise ItemNotFoundError(item_id)
            if not character.inventory.owns(item.category, item_id):
                raise ItemNotOwnedError(item_id)

            character.equipped.set_slot(item.category, item_id)
            await characters.update(character)
            return character

        character = await self.database.run_in_transaction(work)
        logger.info("Character %s equipped item %s", character_id, item_id)
        return character

    async def unequip(self, character_id: int, slot: ItemCategory) -> Character:
        """Empty an optional slot (pet or weapon)."""
        if slot in REQUIRED_SLOTS:
            raise ValidationError(f"The {slot.value} slot cannot be empty")

        async def work(db: aiosqlite.Connection) -> Character:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)
            character.equipped.set_slot(slot, None)
            await characters.update(character)
            return character

        return await self.database.run_in_transaction(work)
