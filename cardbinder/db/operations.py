"""
Database CRUD operations.

Provides async functions for reading and writing an owner's cards. Every
query is scoped by owner id, so a card id belonging to another owner reads
as missing.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.models.card import Card, CardFields
from cardbinder.models.db import CardDB


async def list_cards(session: AsyncSession, user_id: str) -> list[CardDB]:
    """Get all of an owner's cards, newest first."""
    result = await session.execute(
        select(CardDB)
        .where(CardDB.user_id == user_id)
        .order_by(CardDB.created_at.desc(), CardDB.id.desc())
    )
    return list(result.scalars().all())


async def get_card(session: AsyncSession, user_id: str, card_id: str) -> CardDB | None:
    """
    Get one card by its public id.

    Returns None if the card does not exist or belongs to another owner.
    """
    result = await session.execute(
        select(CardDB).where(CardDB.card_id == card_id, CardDB.user_id == user_id)
    )
    return result.scalar_one_or_none()


def _apply_fields(card: CardDB, fields: CardFields) -> None:
    card.player_name = fields.player_name
    card.card_set = fields.card_set
    card.card_type = fields.card_type
    card.year = fields.year
    card.price = fields.price
    card.grading_company = fields.grading_company
    card.grade_value = fields.grade_value
    card.condition = fields.condition
    card.notes = fields.notes
    card.image_urls = list(fields.image_urls)
    card.custom_attributes = dict(fields.custom_attributes)

    # Keep legacy readers working
    card.name = fields.legacy_name()
    card.image_url = fields.legacy_image_url()


async def create_card(session: AsyncSession, user_id: str, fields: CardFields) -> CardDB:
    """Create a new card for an owner."""
    card = CardDB(user_id=user_id)
    _apply_fields(card, fields)
    session.add(card)
    await session.flush()
    return card


async def update_card(
    session: AsyncSession,
    user_id: str,
    card_id: str,
    fields: CardFields,
) -> CardDB | None:
    """
    Replace a card's editable fields.

    Returns None if the card does not exist for this owner.
    """
    card = await get_card(session, user_id, card_id)
    if card is None:
        return None

    _apply_fields(card, fields)
    await session.flush()
    return card


async def set_card_images(session: AsyncSession, card: CardDB, image_urls: list[str]) -> CardDB:
    """Replace a card's image list and resync the legacy single image."""
    card.image_urls = list(image_urls)
    card.image_url = image_urls[0] if image_urls else None
    await session.flush()
    return card


async def delete_card(session: AsyncSession, user_id: str, card_id: str) -> bool:
    """
    Delete a card.

    Returns True if deleted, False if not found.
    """
    card = await get_card(session, user_id, card_id)
    if card is None:
        return False

    await session.delete(card)
    await session.flush()
    return True


def card_to_model(card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    return Card(
        id=card.card_id,
        user_id=card.user_id,
        player_name=card.player_name or "",
        card_set=card.card_set or "",
        card_type=card.card_type or "",
        year=card.year,
        price=card.price,
        grading_company=card.grading_company or "",
        grade_value=card.grade_value or "",
        condition=card.condition or "",
        notes=card.notes or "",
        image_urls=list(card.image_urls or []),
        custom_attributes={str(k): str(v) for k, v in (card.custom_attributes or {}).items()},
        created_at=card.created_at,
        name=card.name,
        set_name=card.set_name,
        image_url=card.image_url,
    )
