"""Tests for data models."""

from datetime import date

import pytest

from fitquest.models.character import (
    CLASS_BASE_STATS,
    Character,
    CharacterClass,
    Equipped,
    Inventory,
    StatName,
    Stats,
)
from fitquest.models.exercises import COMMON_EXERCISES, ExerciseCategory, Muscle
from fitquest.models.items import COMMON_ITEMS, Item, ItemCategory, ItemRarity
from fitquest.models.quest import Quest, QuestDifficulty, QuestStatus, Requirement
from fitquest.models.workout import Workout, WorkoutExercise


def _equipped() -> Equipped:
    return Equipped(arms=1, background=2, body=3, head=4, head_accessory=5)


class TestStats:
    """Tests for the stat triple."""

    def test_increase_returns_copy(self):
        """Test increase leaves the original untouched."""
        stats = Stats(strength=1, endurance=2, flexibility=3)
        bumped = stats.increase(StatName.ENDURANCE, 2)

        assert bumped == Stats(strength=1, endurance=4, flexibility=3)
        assert stats.endurance == 2

    def test_class_base_stats(self):
        """Test every class starts with four stat points."""
        assert set(CLASS_BASE_STATS) == {"Assassin", "Gladiator", "Monk", "Warrior", "Wizard"}
        for stats in CLASS_BASE_STATS.values():
            assert stats.strength + stats.endurance + stats.flexibility == 4


class TestEquipped:
    """Tests for equip slots."""

    def test_slot_lookup_by_category(self):
        """Test category to slot mapping, including the plural arms slot."""
        equipped = _equipped()
        assert equipped.slot(ItemCategory.ARM) == 1
        assert equipped.slot(ItemCategory.HEAD_ACCESSORY) == 5
        assert equipped.slot(ItemCategory.PET) is None

    def test_required_slot_cannot_be_cleared(self):
        """Test clearing a required slot is rejected."""
        equipped = _equipped()
        with pytest.raises(ValueError):
            equipped.set_slot(ItemCategory.BODY, None)

    def test_optional_slot_can_be_cleared(self):
        """Test pet and weapon slots may be emptied."""
        equipped = _equipped()
        equipped.set_slot(ItemCategory.WEAPON, 9)
        equipped.set_slot(ItemCategory.WEAPON, None)
        assert equipped.weapon is None


class TestInventory:
    """Tests for the inventory."""

    def test_add_is_duplicate_free(self):
        """Test adding an owned item is a no-op."""
        inventory = Inventory()
        assert inventory.add(ItemCategory.PET, 7) is True
        assert inventory.add(ItemCategory.PET, 7) is False
        assert inventory.items[ItemCategory.PET] == [7]

    def test_ownership_is_per_category(self):
        """Test owns checks only the given category."""
        inventory = Inventory()
        inventory.add(ItemCategory.HEAD, 3)
        assert inventory.owns(ItemCategory.HEAD, 3)
        assert not inventory.owns(ItemCategory.BODY, 3)

    def test_dict_keys_cover_all_categories(self):
        """Test serialization keeps empty categories."""
        data = Inventory().to_dict()
        assert set(data) == {c.value for c in ItemCategory}


class TestCharacter:
    """Tests for the Character model."""

    def _character(self) -> Character:
        return Character(
            username="ada",
            character_class=CharacterClass("Monk", CLASS_BASE_STATS["Monk"]),
            equipped=_equipped(),
            coins=40,
            friends=[2],
        )

    def test_new_character_starts_at_level_one(self):
        """Test defaults for a fresh character."""
        character = self._character()
        assert character.level == 1
        assert character.experience_leftover == 0
        assert character.pending_stat_points == 0

    def test_friend_helpers(self):
        """Test add and remove friend never duplicate."""
        character = self._character()
        assert character.add_friend(2) is False
        assert character.add_friend(3) is True
        assert character.friends == [2, 3]
        assert character.remove_friend(2) is True
        assert character.remove_friend(2) is False

    def test_dict_round_trip(self):
        """Test serialization preserves composite fields."""
        original = self._character()
        original.inventory.add(ItemCategory.ARM, 1)

        restored = Character.from_dict(original.to_dict(), id=5)

        assert restored.id == 5
        assert restored.character_class == original.character_class
        assert restored.equipped == original.equipped
        assert restored.inventory.owns(ItemCategory.ARM, 1)
        assert restored.friends == [2]


class TestQuest:
    """Tests for the Quest model."""

    def test_requirements_lists_active_predicates(self):
        """Test only set predicates are active."""
        quest = Quest(
            name="abc",
            difficulty=QuestDifficulty.MEDIUM,
            workouts_needed=3,
            min_duration=45,
            exercise_muscle=Muscle.CHEST,
        )
        assert quest.requirements == [Requirement.DURATION, Requirement.MUSCLE]
        assert quest.get_requirements_display() == "45+ min, works chest"

    def test_record_workout_completes_at_target(self):
        """Test the quest flips to complete on the last workout."""
        quest = Quest(name="abc", difficulty=QuestDifficulty.MEDIUM, workouts_needed=2)

        assert quest.record_workout() is False
        assert quest.status == QuestStatus.INCOMPLETE
        assert quest.record_workout() is True
        assert quest.status == QuestStatus.COMPLETE
        assert quest.workouts_completed == 2

    def test_complete_quest_cannot_progress(self):
        """Test completion is one way."""
        quest = Quest(name="abc", difficulty=QuestDifficulty.EASY, workouts_needed=1)
        quest.record_workout()
        with pytest.raises(ValueError):
            quest.record_workout()

    def test_rewards_follow_difficulty(self):
        """Test reward lookup per difficulty."""
        hard = Quest(name="h", difficulty=QuestDifficulty.HARD, workouts_needed=10)
        assert hard.experience_reward == 10_000
        assert hard.coin_reward == 2_000

    def test_from_dict(self):
        """Test deserialization of stored values."""
        quest = Quest.from_dict(
            {
                "name": "q",
                "difficulty": "hard",
                "status": "complete",
                "workouts_needed": 10,
                "workouts_completed": 10,
                "exercise_category": "olympic_weightlifting",
            },
            id=3,
            character_id=1,
        )
        assert quest.is_complete
        assert quest.exercise_category == ExerciseCategory.OLYMPIC_WEIGHTLIFTING
        assert quest.min_duration is None


class TestWorkout:
    """Tests for the Workout model."""

    def test_from_dict_defaults(self):
        """Test optional exercise fields default to zero."""
        workout = Workout.from_dict(
            {
                "name": "Morning run",
                "exercises": [{"exercise_id": "Running_Treadmill", "distance": 5.0}],
                "duration": 30,
                "performed_on": "2024-03-01",
            }
        )
        assert workout.exercise_ids == ["Running_Treadmill"]
        assert workout.exercises[0].sets == 0
        assert workout.performed_on == date(2024, 3, 1)

    def test_to_dict(self):
        """Test serialization."""
        workout = Workout(
            name="Push",
            exercises=[WorkoutExercise("Pushups", sets=3, reps=15)],
            duration=20,
            points=50,
        )
        data = workout.to_dict()
        assert data["exercises"][0]["reps"] == 15
        assert data["points"] == 50


class TestCatalogs:
    """Tests for built-in catalogs."""

    def test_exercise_ids_unique(self):
        """Test exercise ids are unique."""
        ids = [e.id for e in COMMON_EXERCISES]
        assert len(ids) == len(set(ids))

    def test_every_category_has_an_exercise(self):
        """Test category quests are always satisfiable."""
        assert {e.category for e in COMMON_EXERCISES} == set(ExerciseCategory)

    def test_required_slots_have_default_items(self):
        """Test onboarding can always fill the required slots."""
        defaults = {i.category for i in COMMON_ITEMS if i.rarity == ItemRarity.DEFAULT}
        assert defaults == {
            ItemCategory.ARM,
            ItemCategory.BACKGROUND,
            ItemCategory.BODY,
            ItemCategory.HEAD,
            ItemCategory.HEAD_ACCESSORY,
        }

    def test_item_from_dict(self):
        """Test item deserialization."""
        item = Item.from_dict(
            {"name": "Cape", "category": "body", "rarity": "epic", "path": "body/cape.png"},
            id=4,
        )
        assert item.id == 4
        assert item.rarity == ItemRarity.EPIC
