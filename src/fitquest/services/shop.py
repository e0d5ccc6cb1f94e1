"""Rotating item shop and coin purchases."""

import logging
from dataclasses import dataclass

import aiosqlite

from ..config import settings
from ..db.engine import Database
from ..db.repositories import CharacterRepository, ItemRepository, ShopRepository
from ..exceptions import (
    InsufficientFundsError,
    ItemAlreadyOwnedError,
    ItemNotFoundError,
    ItemNotInShopError,
)
from ..models.items import FALLBACK_PRICE, RARITY_PRICES, Item, ItemRarity
from ..utils.random_source import RandomSource, default_random

logger = logging.getLogger(__name__)


def price_of(rarity: ItemRarity | str) -> int:
    """Coin price for an item rarity. Unknown rarities cost FALLBACK_PRICE."""
    try:
        rarity = ItemRarity(rarity)
    except ValueError:
        return FALLBACK_PRICE
    return RARITY_PRICES.get(rarity, FALLBACK_PRICE)


@dataclass
class ShopItem:
    """An item on offer with its price."""

    item: Item
    price: int

    def to_dict(self) -> dict:
        return {**self.item.to_dict(), "price": self.price}


@dataclass
class Purchase:
    """Receipt for a completed purchase."""

    character_id: int
    item: Item
    price: int
    coins_remaining: int


class ShopService:
    """Stocks the shared shop and sells its items for coins."""

    def __init__(
        self,
        database: Database,
        rng: RandomSource | None = None,
        shop_size: int | None = None,
    ):
        self.database = database
        self.rng = rng or default_random()
        self.shop_size = settings.shop_size if shop_size is None else shop_size

    async def refresh(self) -> list[int]:
        """Replace the whole offering with a fresh random selection.

        Default-rarity items are never stocked. The old listing is removed and
        the new one written in one transaction, so readers see either the old
        or the new offering.

        Returns:
            IDs of the items now on offer
        """

        async def work(db: aiosqlite.Connection) -> list[int]:
            candidates = await ItemRepository(db).list_sellable_ids()
            chosen = self.rng.sample(candidates, min(self.shop_size, len(candidates)))
            await ShopRepository(db).replace_all(chosen)
            return chosen

        chosen = await self.database.run_in_transaction(work)
        logger.info("Shop refreshed with %d item(s)", len(chosen))
        return chosen

    async def list_items(self) -> list[ShopItem]:
        """Items currently on offer, with prices."""
        async with self.database.connect() as db:
            items = await ShopRepository(db).list_items()
        return [ShopItem(item=item, price=price_of(item.rarity)) for item in items]

    async def buy(self, character_id: int, item_id: int) -> Purchase:
        """Buy an item from the shop.

        Checks, in order: the item is on offer, the character can afford it,
        the character does not already own it. Any failure leaves coins and
        inventory untouched.
        """

        async def work(db: aiosqlite.Connection) -> Purchase:
            characters = CharacterRepository(db)
            character = await characters.require(character_id)

            if not await ShopRepository(db).contains(item_id):
                raise ItemNotInShopError(item_id)
            item = await ItemRepository(db).get(item_id)
            if item is None:
                raise ItemNotFoundError(item_id)

            price = price_of(item.rarity)
            if character.coins < price:
                raise InsufficientFundsError(price, character.coins)
            if character.inventory.owns(item.category, item_id):
                raise ItemAlreadyOwnedError(item_id)

            character.coins -= price
            character.inventory.add(item.category, item_id)
            await characters.update(character)
            return Purchase(
                character_id=character_id,
                item=item,
                price=price,
                coins_remaining=character.coins,
            )

        purchase = await self.database.run_in_transaction(work)
        logger.info(
            "Character %s bought %s for %d coins",
            character_id,
            purchase.item.name,
            purchase.price,
        )
        return purchase
