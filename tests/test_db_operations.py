"""Tests for database CRUD operations."""

from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.operations import (
    card_to_model,
    create_card,
    delete_card,
    get_card,
    list_cards,
    set_card_images,
    update_card,
)
from cardbinder.models.card import CardFields
from cardbinder.models.db import CardDB


class TestCardOperations:
    async def test_create_card(self, session: AsyncSession) -> None:
        """Can create a card with legacy fields synced."""
        fields = CardFields(
            player_name="Mike Trout",
            card_set="Topps",
            year=2011,
            image_urls=["a.jpg", "b.jpg"],
        )

        card = await create_card(session, "user-1", fields)

        assert card.card_id
        assert card.user_id == "user-1"
        assert card.name == "2011 Topps Mike Trout"
        assert card.image_url == "a.jpg"
        assert card.created_at is not None

    async def test_get_card(self, session: AsyncSession) -> None:
        created = await create_card(session, "user-1", CardFields(player_name="Mike Trout"))
        await session.commit()

        card = await get_card(session, "user-1", created.card_id)

        assert card is not None
        assert card.player_name == "Mike Trout"

    async def test_get_card_other_owner(self, session: AsyncSession) -> None:
        """Cards are invisible to other owners."""
        created = await create_card(session, "user-1", CardFields(player_name="Mike Trout"))
        await session.commit()

        assert await get_card(session, "user-2", created.card_id) is None

    async def test_list_cards_newest_first(self, session: AsyncSession) -> None:
        first = await create_card(session, "user-1", CardFields(player_name="First"))
        second = await create_card(session, "user-1", CardFields(player_name="Second"))
        third = await create_card(session, "user-1", CardFields(player_name="Third"))
        await create_card(session, "user-2", CardFields(player_name="Other"))
        await session.commit()

        cards = await list_cards(session, "user-1")

        assert [c.card_id for c in cards] == [third.card_id, second.card_id, first.card_id]

    async def test_list_cards_orders_by_created_at(self, session: AsyncSession) -> None:
        now = datetime.now(UTC)
        old = CardDB(user_id="user-1", player_name="Old", created_at=now - timedelta(days=2))
        new = CardDB(user_id="user-1", player_name="New", created_at=now)
        session.add_all([new, old])
        await session.commit()

        cards = await list_cards(session, "user-1")

        assert [c.player_name for c in cards] == ["New", "Old"]

    async def test_list_cards_empty(self, session: AsyncSession) -> None:
        assert await list_cards(session, "nobody") == []

    async def test_update_card(self, session: AsyncSession) -> None:
        created = await create_card(session, "user-1", CardFields(player_name="Mike Trout"))
        await session.commit()

        updated = await update_card(
            session,
            "user-1",
            created.card_id,
            CardFields(player_name="Mike Trout", card_set="Bowman", year=2009),
        )
        await session.commit()

        assert updated is not None
        assert updated.card_set == "Bowman"
        assert updated.name == "2009 Bowman Mike Trout"

    async def test_update_card_not_found(self, session: AsyncSession) -> None:
        assert await update_card(session, "user-1", "missing", CardFields()) is None

    async def test_set_card_images(self, session: AsyncSession) -> None:
        card = await create_card(session, "user-1", CardFields(image_urls=["a.jpg"]))

        card = await set_card_images(session, card, ["b.jpg", "c.jpg"])

        assert card.image_urls == ["b.jpg", "c.jpg"]
        assert card.image_url == "b.jpg"

        card = await set_card_images(session, card, [])
        assert card.image_url is None

    async def test_delete_card(self, session: AsyncSession) -> None:
        created = await create_card(session, "user-1", CardFields(player_name="Mike Trout"))
        await session.commit()

        deleted = await delete_card(session, "user-1", created.card_id)
        await session.commit()

        assert deleted is True
        assert await get_card(session, "user-1", created.card_id) is None

    async def test_delete_card_other_owner(self, session: AsyncSession) -> None:
        created = await create_card(session, "user-1", CardFields(player_name="Mike Trout"))
        await session.commit()

        assert await delete_card(session, "user-2", created.card_id) is False
        assert await get_card(session, "user-1", created.card_id) is not None

    async def test_card_to_model(self, session: AsyncSession) -> None:
        created = await create_card(
            session,
            "user-1",
            CardFields(
                player_name="Ronald Acuna",
                card_set="Bowman",
                year=2018,
                price=45.0,
                custom_attributes={"Serial": "10/50"},
            ),
        )
        await session.commit()

        model = card_to_model(created)

        assert model.id == created.card_id
        assert model.user_id == "user-1"
        assert model.year == 2018
        assert model.price == 45.0
        assert model.custom_attributes == {"Serial": "10/50"}
        assert model.name == "2018 Bowman Ronald Acuna"

    async def test_card_to_model_null_columns(self, session: AsyncSession) -> None:
        """Rows written by older clients with NULL text columns read as empty strings."""
        row = CardDB(user_id="user-1", name="1989 Upper Deck Griffey", image_url="legacy.jpg")
        session.add(row)
        await session.flush()
        row.player_name = None  # type: ignore[assignment]
        row.image_urls = None  # type: ignore[assignment]

        model = card_to_model(row)

        assert model.player_name == ""
        assert model.image_urls == []
        assert model.name == "1989 Upper Deck Griffey"
