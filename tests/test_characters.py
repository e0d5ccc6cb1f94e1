"""Tests for onboarding and equipment."""

import pytest

from fitquest.db import ItemRepository
from fitquest.exceptions import (
    ItemNotFoundError,
    ItemNotOwnedError,
    UnknownClassError,
    UsernameTakenError,
    ValidationError,
)
from fitquest.models.character import CLASS_BASE_STATS, REQUIRED_SLOTS
from fitquest.models.items import ItemCategory, ItemRarity
from fitquest.services.characters import character_summary, resolve_class


class TestResolveClass:
    """Tests for class lookup."""

    def test_case_insensitive(self):
        """Test class names ignore case and whitespace."""
        resolved = resolve_class("  gladiator ")
        assert resolved.name == "Gladiator"
        assert resolved.stats == CLASS_BASE_STATS["Gladiator"]

    def test_unknown(self):
        """Test unknown classes are rejected."""
        with pytest.raises(UnknownClassError):
            resolve_class("Bard")


class TestCreateCharacter:
    """Tests for onboarding."""

    async def test_starts_fresh(self, character_service):
        """Test a new character is level 1 with no coins or experience."""
        hero = await character_service.create_character("ada", "Monk")

        assert hero.id is not None
        assert hero.level == 1
        assert hero.experience_leftover == 0
        assert hero.coins == 0
        assert hero.pending_stat_points == 0
        assert hero.character_class.stats == CLASS_BASE_STATS["Monk"]

    async def test_starter_gear_equipped_and_owned(self, character_service, database):
        """Test each required slot holds an owned default item."""
        hero = await character_service.create_character("ada", "Wizard")
        stored = await character_service.get_character(hero.id)

        async with database.connect() as db:
            items = {i.id: i for i in await ItemRepository(db).list_all()}

        for category in REQUIRED_SLOTS:
            item_id = stored.equipped.slot(category)
            assert items[item_id].category == category
            assert items[item_id].rarity == ItemRarity.DEFAULT
            assert stored.inventory.items[category] == [item_id]
        assert stored.equipped.pet is None
        assert stored.equipped.weapon is None
        assert stored.inventory.count() == len(REQUIRED_SLOTS)

    async def test_username_taken(self, character_service):
        """Test usernames are unique."""
        await character_service.create_character("ada", "Monk")
        with pytest.raises(UsernameTakenError):
            await character_service.create_character("ada", "Warrior")

    async def test_blank_username(self, character_service):
        """Test a blank username is rejected."""
        with pytest.raises(ValidationError):
            await character_service.create_character("   ", "Monk")

    async def test_summary_includes_experience_needed(self, character_service):
        """Test the display summary carries the next level requirement."""
        hero = await character_service.create_character("ada", "Monk")
        summary = character_summary(hero)

        assert summary["id"] == hero.id
        assert summary["experience_needed"] == 214
        assert summary["class"]["name"] == "Monk"


class TestEquipment:
    """Tests for equip and unequip."""

    async def test_equip_owned_item(
        self, character_service, make_character, update_character, find_item
    ):
        """Test equipping an owned item fills its slot."""
        hero = await make_character()
        pet = await find_item(ItemRarity.COMMON, ItemCategory.PET)
        hero.inventory.add(ItemCategory.PET, pet.id)
        await update_character(hero.id, inventory=hero.inventory)

        updated = await character_service.equip(hero.id, pet.id)

        assert updated.equipped.pet == pet.id

    async def test_equip_requires_ownership(self, character_service, make_character, find_item):
        """Test items must be owned to be worn."""
        hero = await make_character()
        helm = await find_item(ItemRarity.RARE, ItemCategory.HEAD_ACCESSORY)

        with pytest.raises(ItemNotOwnedError):
            await character_service.equip(hero.id, helm.id)

    async def test_equip_unknown_item(self, character_service, make_character):
        """Test equipping an item that does not exist."""
        hero = await make_character()
        with pytest.raises(ItemNotFoundError):
            await character_service.equip(hero.id, 9999)

    async def test_swap_default_items(
        self, character_service, database, make_character, update_character
    ):
        """Test a required slot can switch between owned items."""
        hero = await make_character()
        current = hero.equipped.body

        async with database.connect() as db:
            bodies = await ItemRepository(db).list_by_rarity(ItemRarity.DEFAULT, ItemCategory.BODY)
        other = next(i.id for i in bodies if i.id != current)
        hero.inventory.add(ItemCategory.BODY, other)
        await update_character(hero.id, inventory=hero.inventory)

        updated = await character_service.equip(hero.id, other)
        assert updated.equipped.body == other

    async def test_unequip_optional_slot(self, character_service, make_character, update_character):
        """Test the weapon slot can be emptied."""
        hero = await make_character()
        hero.equipped.weapon = 1
        await update_character(hero.id, equipped=hero.equipped)

        updated = await character_service.unequip(hero.id, ItemCategory.WEAPON)
        assert updated.equipped.weapon is None

    async def test_unequip_required_slot(self, character_service, make_character):
        """Test required slots cannot be emptied."""
        hero = await make_character()
        with pytest.raises(ValidationError):
            await character_service.unequip(hero.id, ItemCategory.HEAD)
