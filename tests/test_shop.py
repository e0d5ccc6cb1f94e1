"""Tests for shop pricing, stocking and purchases."""

import asyncio
import random

import pytest

from fitquest.db import ShopRepository
from fitquest.exceptions import (
    CharacterNotFoundError,
    InsufficientFundsError,
    ItemAlreadyOwnedError,
    ItemNotInShopError,
)
from fitquest.models.items import ItemCategory, ItemRarity
from fitquest.services.shop import ShopService, price_of


async def _stock(database, *item_ids: int) -> None:
    async def work(db):
        await ShopRepository(db).replace_all(list(item_ids))

    await database.run_in_transaction(work)


class TestPricing:
    """Tests for rarity prices."""

    @pytest.mark.parametrize(
        "rarity,price",
        [
            (ItemRarity.DEFAULT, 0),
            (ItemRarity.COMMON, 100),
            (ItemRarity.UNCOMMON, 250),
            (ItemRarity.RARE, 500),
            (ItemRarity.EPIC, 1000),
            (ItemRarity.LEGENDARY, 2500),
        ],
    )
    def test_price_table(self, rarity, price):
        """Test the fixed price per rarity."""
        assert price_of(rarity) == price

    def test_unknown_rarity_falls_back(self):
        """Test an unmapped rarity costs 100."""
        assert price_of("mythic") == 100

    def test_rarity_value_accepted(self):
        """Test plain strings are resolved to rarities."""
        assert price_of("epic") == 1000


class TestRefresh:
    """Tests for restocking the shop."""

    async def test_refresh_stocks_distinct_sellable_items(self, database, rng):
        """Test a refresh lists ten distinct non-default items."""
        service = ShopService(database, rng=rng, shop_size=10)

        chosen = await service.refresh()
        listed = await service.list_items()

        assert len(chosen) == 10
        assert len(set(chosen)) == 10
        assert {entry.item.id for entry in listed} == set(chosen)
        assert all(entry.item.rarity != ItemRarity.DEFAULT for entry in listed)
        assert all(entry.price == price_of(entry.item.rarity) for entry in listed)

    async def test_refresh_replaces_previous_listing(self, database):
        """Test the old listing is gone after a refresh."""
        service = ShopService(database, rng=random.Random(1), shop_size=3)
        await service.refresh()
        service.rng = random.Random(2)

        second = await service.refresh()
        listed = await service.list_items()

        assert sorted(entry.item.id for entry in listed) == sorted(second)

    async def test_small_catalog_lists_everything(self, database, rng):
        """Test a shop larger than the catalog lists every sellable item once."""
        service = ShopService(database, rng=rng, shop_size=100)

        chosen = await service.refresh()

        assert len(chosen) == 19
        assert len(set(chosen)) == 19

    async def test_reader_never_sees_partial_refresh(self, database):
        """Test concurrent readers see either the old or the new listing."""
        service = ShopService(database, rng=random.Random(5), shop_size=10)
        before = set(await service.refresh())

        results = await asyncio.gather(
            service.refresh(),
            *[service.list_items() for _ in range(15)],
        )
        after = set(results[0])

        for listing in results[1:]:
            seen = {entry.item.id for entry in listing}
            assert seen in (before, after)

    async def test_concurrent_refreshes_leave_one_listing(self, database):
        """Test overlapping refreshes never mix their selections."""
        services = [ShopService(database, rng=random.Random(s), shop_size=10) for s in range(3)]

        results = await asyncio.gather(*[s.refresh() for s in services])
        listed = {entry.item.id for entry in await services[0].list_items()}

        assert listed in [set(r) for r in results]


class TestBuy:
    """Tests for purchases."""

    async def test_buy_debits_and_adds(self, database, make_character, load_character, find_item):
        """Test a purchase moves coins into the inventory."""
        item = await find_item(ItemRarity.UNCOMMON)
        await _stock(database, item.id)
        hero = await make_character(coins=300)

        purchase = await ShopService(database).buy(hero.id, item.id)

        assert purchase.price == 250
        assert purchase.coins_remaining == 50
        stored = await load_character(hero.id)
        assert stored.coins == 50
        assert stored.inventory.owns(item.category, item.id)

    async def test_insufficient_funds_changes_nothing(
        self, database, make_character, load_character, find_item
    ):
        """Test 100 coins cannot buy a 250 coin item, and nothing is debited."""
        item = await find_item(ItemRarity.UNCOMMON)
        await _stock(database, item.id)
        hero = await make_character(coins=100)

        with pytest.raises(InsufficientFundsError) as exc_info:
            await ShopService(database).buy(hero.id, item.id)

        assert exc_info.value.required == 250
        stored = await load_character(hero.id)
        assert stored.coins == 100
        assert not stored.inventory.owns(item.category, item.id)
        assert stored.inventory.count() == hero.inventory.count()

    async def test_item_must_be_listed(self, database, make_character, find_item):
        """Test unlisted items cannot be bought, even with no coins."""
        listed = await find_item(ItemRarity.COMMON, ItemCategory.PET)
        unlisted = await find_item(ItemRarity.LEGENDARY)
        await _stock(database, listed.id)
        hero = await make_character(coins=0)

        with pytest.raises(ItemNotInShopError):
            await ShopService(database).buy(hero.id, unlisted.id)

    async def test_already_owned(self, database, make_character, load_character, find_item):
        """Test buying an owned item fails without a second debit."""
        item = await find_item(ItemRarity.COMMON, ItemCategory.WEAPON)
        await _stock(database, item.id)
        hero = await make_character(coins=500)
        service = ShopService(database)

        await service.buy(hero.id, item.id)
        with pytest.raises(ItemAlreadyOwnedError):
            await service.buy(hero.id, item.id)

        stored = await load_character(hero.id)
        assert stored.coins == 400
        assert stored.inventory.items[ItemCategory.WEAPON] == [item.id]

    async def test_funds_checked_before_ownership(
        self, database, make_character, update_character, find_item
    ):
        """Test a broke owner gets InsufficientFunds rather than AlreadyOwned."""
        item = await find_item(ItemRarity.RARE, ItemCategory.PET)
        await _stock(database, item.id)
        hero = await make_character(coins=600)
        await ShopService(database).buy(hero.id, item.id)
        await update_character(hero.id, coins=0)

        with pytest.raises(InsufficientFundsError):
            await ShopService(database).buy(hero.id, item.id)

    async def test_unknown_character(self, database, find_item):
        """Test buying for a missing character."""
        item = await find_item(ItemRarity.COMMON)
        await _stock(database, item.id)

        with pytest.raises(CharacterNotFoundError):
            await ShopService(database).buy(12345, item.id)

    async def test_concurrent_purchases_serialize(
        self, database, make_character, load_character, find_item
    ):
        """Test two racing purchases cannot both spend the same balance."""
        legendary = await find_item(ItemRarity.LEGENDARY)
        epic = await find_item(ItemRarity.EPIC)
        await _stock(database, legendary.id, epic.id)
        hero = await make_character(coins=3000)
        service = ShopService(database)

        results = await asyncio.gather(
            service.buy(hero.id, legendary.id),
            service.buy(hero.id, epic.id),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientFundsError)

        stored = await load_character(hero.id)
        assert stored.coins == 3000 - successes[0].price
        assert stored.coins >= 0
        owned = [
            item_id
            for item_id in (legendary.id, epic.id)
            if item_id in sum(stored.inventory.items.values(), [])
        ]
        assert owned == [successes[0].item.id]
