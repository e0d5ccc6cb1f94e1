"""Cosmetic item catalog definitions."""

from dataclasses import dataclass
from enum import Enum


class ItemCategory(str, Enum):
    """Item categories. Each maps to one equip slot and one inventory list."""

    ARM = "arm"
    BACKGROUND = "background"
    BODY = "body"
    HEAD = "head"
    HEAD_ACCESSORY = "head_accessory"
    PET = "pet"
    WEAPON = "weapon"


class ItemRarity(str, Enum):
    """Item tiers. Default items are starter gear and never sold."""

    DEFAULT = "default"
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


# Shop price per rarity
RARITY_PRICES: dict[ItemRarity, int] = {
    ItemRarity.DEFAULT: 0,
    ItemRarity.COMMON: 100,
    ItemRarity.UNCOMMON: 250,
    ItemRarity.RARE: 500,
    ItemRarity.EPIC: 1000,
    ItemRarity.LEGENDARY: 2500,
}

# Price charged for a rarity missing from RARITY_PRICES
FALLBACK_PRICE = 100


@dataclass(frozen=True)
class Item:
    """A catalog item. Immutable once created."""

    name: str
    category: ItemCategory
    rarity: ItemRarity
    path: str
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "rarity": self.rarity.value,
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "Item":
        """Create from dictionary."""
        return cls(
            id=id if id is not None else data.get("id"),
            name=data["name"],
            category=ItemCategory(data["category"]),
            rarity=ItemRarity(data["rarity"]),
            path=data["path"],
        )


def _items(category: ItemCategory, entries: list[tuple[str, ItemRarity]]) -> list[Item]:
    folder = category.value
    return [
        Item(
            name=name,
            category=category,
            rarity=rarity,
            path=f"{folder}/{name.lower().replace(' ', '_')}.png",
        )
        for name, rarity in entries
    ]


# Built-in catalog seeded by `fitquest init`
COMMON_ITEMS: list[Item] = [
    *_items(ItemCategory.ARM, [
        ("Bare Arms", ItemRarity.DEFAULT),
        ("Wrapped Arms", ItemRarity.DEFAULT),
        ("Leather Bracers", ItemRarity.COMMON),
        ("Iron Gauntlets", ItemRarity.RARE),
        ("Dragonscale Vambraces", ItemRarity.LEGENDARY),
    ]),
    *_items(ItemCategory.BACKGROUND, [
        ("Village Green", ItemRarity.DEFAULT),
        ("Dusty Gym", ItemRarity.DEFAULT),
        ("Mountain Pass", ItemRarity.UNCOMMON),
        ("Colosseum", ItemRarity.EPIC),
    ]),
    *_items(ItemCategory.BODY, [
        ("Plain Tunic", ItemRarity.DEFAULT),
        ("Training Vest", ItemRarity.DEFAULT),
        ("Chainmail Shirt", ItemRarity.UNCOMMON),
        ("Monk Robe", ItemRarity.RARE),
        ("Golden Breastplate", ItemRarity.LEGENDARY),
    ]),
    *_items(ItemCategory.HEAD, [
        ("Short Hair", ItemRarity.DEFAULT),
        ("Long Hair", ItemRarity.DEFAULT),
        ("Mohawk", ItemRarity.COMMON),
        ("Braided Hair", ItemRarity.UNCOMMON),
    ]),
    *_items(ItemCategory.HEAD_ACCESSORY, [
        ("Sweatband", ItemRarity.DEFAULT),
        ("Bandana", ItemRarity.DEFAULT),
        ("Iron Helm", ItemRarity.RARE),
        ("Wizard Hat", ItemRarity.EPIC),
    ]),
    *_items(ItemCategory.PET, [
        ("Pocket Frog", ItemRarity.COMMON),
        ("Loyal Hound", ItemRarity.RARE),
        ("Baby Dragon", ItemRarity.LEGENDARY),
    ]),
    *_items(ItemCategory.WEAPON, [
        ("Wooden Club", ItemRarity.COMMON),
        ("Kettlebell Flail", ItemRarity.UNCOMMON),
        ("Steel Sword", ItemRarity.RARE),
        ("Barbell of Legends", ItemRarity.LEGENDARY),
    ]),
]
