"""
Record store access for the dashboard.

fetch_records is the single read path the filtering core depends on: it
returns an owner's cards newest first or raises RecordFetchError.
load_records is the dashboard's tolerant wrapper: a failed fetch yields an
empty record set plus a message, so faceting and querying proceed exactly
as for an empty collection.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.operations import card_to_model, list_cards
from cardbinder.models.card import Card
from cardbinder.models.failure import RecordFetchError

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "We couldn't load your collection. Please try again."


async def fetch_records(session: AsyncSession, user_id: str) -> list[Card]:
    """
    Fetch all cards for an owner, newest created first.

    Raises:
        RecordFetchError: If the store cannot be read
    """
    try:
        rows = await list_cards(session, user_id)
    except SQLAlchemyError as e:
        raise RecordFetchError(f"Failed to fetch cards for {user_id}") from e

    return [card_to_model(row) for row in rows]


async def load_records(session: AsyncSession, user_id: str) -> tuple[list[Card], str | None]:
    """
    Fetch an owner's cards for display.

    Returns:
        Tuple of (records, load_error). On failure records is empty and
        load_error carries a user-facing message.
    """
    try:
        return await fetch_records(session, user_id), None
    except RecordFetchError:
        logger.warning("Error fetching cards for user %s", user_id, exc_info=True)
        await session.rollback()
        return [], LOAD_ERROR_MESSAGE
