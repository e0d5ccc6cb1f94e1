"""Character state model."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from .items import ItemCategory


class StatName(str, Enum):
    """Allocatable character stats."""

    STRENGTH = "strength"
    ENDURANCE = "endurance"
    FLEXIBILITY = "flexibility"


@dataclass(frozen=True)
class Stats:
    """Stat triple carried by a character's class."""

    strength: int = 0
    endurance: int = 0
    flexibility: int = 0

    def increase(self, stat: StatName, amount: int) -> "Stats":
        """Return a copy with `amount` added to `stat`."""
        return replace(self, **{stat.value: getattr(self, stat.value) + amount})

    def to_dict(self) -> dict:
        return {
            "strength": self.strength,
            "endurance": self.endurance,
            "flexibility": self.flexibility,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Stats":
        return cls(
            strength=data.get("strength", 0),
            endurance=data.get("endurance", 0),
            flexibility=data.get("flexibility", 0),
        )


@dataclass(frozen=True)
class CharacterClass:
    """A class name plus the character's current stats."""

    name: str
    stats: Stats

    def to_dict(self) -> dict:
        return {"name": self.name, "stats": self.stats.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "CharacterClass":
        return cls(name=data["name"], stats=Stats.from_dict(data["stats"]))


# Starting stats per class, chosen at onboarding
CLASS_BASE_STATS: dict[str, Stats] = {
    "Assassin": Stats(strength=1, endurance=1, flexibility=2),
    "Gladiator": Stats(strength=0, endurance=4, flexibility=0),
    "Monk": Stats(strength=0, endurance=2, flexibility=2),
    "Warrior": Stats(strength=2, endurance=2, flexibility=0),
    "Wizard": Stats(strength=1, endurance=2, flexibility=1),
}

# Equip slot attribute for each item category
SLOT_FOR_CATEGORY: dict[ItemCategory, str] = {
    ItemCategory.ARM: "arms",
    ItemCategory.BACKGROUND: "background",
    ItemCategory.BODY: "body",
    ItemCategory.HEAD: "head",
    ItemCategory.HEAD_ACCESSORY: "head_accessory",
    ItemCategory.PET: "pet",
    ItemCategory.WEAPON: "weapon",
}

# Slots that must always hold an item
REQUIRED_SLOTS: tuple[ItemCategory, ...] = (
    ItemCategory.ARM,
    ItemCategory.BACKGROUND,
    ItemCategory.BODY,
    ItemCategory.HEAD,
    ItemCategory.HEAD_ACCESSORY,
)


@dataclass
class Equipped:
    """Currently worn item per slot."""

    arms: int
    background: int
    body: int
    head: int
    head_accessory: int
    pet: int | None = None
    weapon: int | None = None

    def slot(self, category: ItemCategory) -> int | None:
        return getattr(self, SLOT_FOR_CATEGORY[category])

    def set_slot(self, category: ItemCategory, item_id: int | None) -> None:
        if item_id is None and category in REQUIRED_SLOTS:
            raise ValueError(f"Slot {category.value} cannot be empty")
        setattr(self, SLOT_FOR_CATEGORY[category], item_id)

    def to_dict(self) -> dict:
        return {slot: getattr(self, slot) for slot in SLOT_FOR_CATEGORY.values()}

    @classmethod
    def from_dict(cls, data: dict) -> "Equipped":
        return cls(**{slot: data.get(slot) for slot in SLOT_FOR_CATEGORY.values()})


@dataclass
class Inventory:
    """Owned item ids, one duplicate-free list per category."""

    items: dict[ItemCategory, list[int]] = field(
        default_factory=lambda: {category: [] for category in ItemCategory}
    )

    def owns(self, category: ItemCategory, item_id: int) -> bool:
        return item_id in self.items.get(category, [])

    def add(self, category: ItemCategory, item_id: int) -> bool:
        """Add an item. Returns False if it was already owned."""
        owned = self.items.setdefault(category, [])
        if item_id in owned:
            return False
        owned.append(item_id)
        return True

    def count(self) -> int:
        return sum(len(ids) for ids in self.items.values())

    def to_dict(self) -> dict:
        return {category.value: list(self.items.get(category, [])) for category in ItemCategory}

    @classmethod
    def from_dict(cls, data: dict) -> "Inventory":
        return cls(
            items={category: list(data.get(category.value, [])) for category in ItemCategory}
        )


@dataclass
class Character:
    """A user's game character.

    Holds the full mutable game state: progression, currency, cosmetics and
    the friend list. Composite values are stored as JSON alongside the row.
    """

    username: str
    character_class: CharacterClass
    equipped: Equipped
    inventory: Inventory = field(default_factory=Inventory)
    level: int = 1
    experience_leftover: int = 0
    pending_stat_points: int = 0
    coins: int = 0
    streak: int = 0
    friends: list[int] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None

    def is_friend(self, other_id: int) -> bool:
        return other_id in self.friends

    def add_friend(self, other_id: int) -> bool:
        """Add a friend if not already present. Returns True if added."""
        if other_id in self.friends:
            return False
        self.friends.append(other_id)
        return True

    def remove_friend(self, other_id: int) -> bool:
        """Remove a friend if present. Returns True if removed."""
        if other_id not in self.friends:
            return False
        self.friends.remove(other_id)
        return True

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "username": self.username,
            "class": self.character_class.to_dict(),
            "level": self.level,
            "experience_leftover": self.experience_leftover,
            "pending_stat_points": self.pending_stat_points,
            "coins": self.coins,
            "streak": self.streak,
            "equipped": self.equipped.to_dict(),
            "inventory": self.inventory.to_dict(),
            "friends": list(self.friends),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict,
        id: int | None = None,
        created_at: datetime | None = None,
    ) -> "Character":
        """Create from dictionary."""
        return cls(
            id=id,
            username=data["username"],
            character_class=CharacterClass.from_dict(data["class"]),
            level=data.get("level", 1),
            experience_leftover=data.get("experience_leftover", 0),
            pending_stat_points=data.get("pending_stat_points", 0),
            coins=data.get("coins", 0),
            streak=data.get("streak", 0),
            equipped=Equipped.from_dict(data["equipped"]),
            inventory=Inventory.from_dict(data.get("inventory", {})),
            friends=list(data.get("friends", [])),
            created_at=created_at,
        )
