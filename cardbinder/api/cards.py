"""
Card API endpoints.

Provides CRUD operations and image management for individual cards.
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db import (
    card_to_model,
    create_card,
    delete_card,
    get_card,
    set_card_images,
    update_card,
)
from cardbinder.db.database import get_session
from cardbinder.models.card import (
    CONDITIONS,
    DEFAULT_CARD_TYPE,
    DEFAULT_CONDITION,
    DEFAULT_GRADING_COMPANY,
    GRADING_COMPANIES,
    Card,
    CardFields,
    resolve_badge,
    resolve_images,
    resolve_subtitle,
    resolve_title,
)
from cardbinder.models.failure import CardNotFoundError, FailureKind, KnownError
from cardbinder.services.card_form import build_card_fields
from cardbinder.services.image_store import ImageStore, get_image_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


class CustomAttribute(BaseModel):
    """One row of the free-form attribute editor."""

    key: str
    value: str = ""


class CardRequest(BaseModel):
    """Request model for creating or updating a card."""

    player_name: str = ""
    card_set: str = ""
    card_type: str | None = Field(default=None, description=f"Defaults to {DEFAULT_CARD_TYPE!r}")
    year: int | str | None = Field(
        default=None,
        description="Card year; text is read up to the first non-digit",
        examples=["2011"],
    )
    price: float | str | None = Field(default=None, examples=["12.50"])
    grading_company: str | None = Field(
        default=None,
        description=f"One of {GRADING_COMPANIES}; defaults to {DEFAULT_GRADING_COMPANY!r}",
    )
    grade_value: str = ""
    condition: str | None = Field(
        default=None,
        description=f"One of {CONDITIONS}; defaults to {DEFAULT_CONDITION!r}",
    )
    notes: str = ""
    image_urls: list[str] = Field(
        default_factory=list,
        description="Ordered image URLs; the first is the cover image",
    )
    custom_attributes: list[CustomAttribute] = Field(
        default_factory=list,
        description="Ordered key/value rows; rows with a blank key are dropped",
    )


class CardResponse(BaseModel):
    """Response model for a single card."""

    id: str
    user_id: str
    player_name: str
    card_set: str
    card_type: str
    year: int | None = None
    price: float | None = None
    grading_company: str
    grade_value: str
    condition: str
    notes: str
    image_urls: list[str] = Field(default_factory=list)
    custom_attributes: dict[str, str] = Field(default_factory=dict)
    created_at: datetime | None = None
    title: str = Field(default="", description="Display title with legacy fallback")
    subtitle: str = Field(default="", description="Set name with legacy fallback")
    badge: str = Field(default="", description="Grade for graded cards, else condition")


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    card_id: str
    deleted: bool
    message: str = ""


class FormOptionsResponse(BaseModel):
    """Choices and defaults for the card editor."""

    conditions: list[str]
    grading_companies: list[str]
    default_card_type: str
    default_grading_company: str
    default_condition: str


def _to_response(card: Card) -> CardResponse:
    return CardResponse(
        id=card.id,
        user_id=card.user_id,
        player_name=card.player_name,
        card_set=card.card_set,
        card_type=card.card_type,
        year=card.year,
        price=card.price,
        grading_company=card.grading_company,
        grade_value=card.grade_value,
        condition=card.condition,
        notes=card.notes,
        image_urls=resolve_images(card),
        custom_attributes=card.custom_attributes,
        created_at=card.created_at,
        title=resolve_title(card),
        subtitle=resolve_subtitle(card),
        badge=resolve_badge(card),
    )


def _fields_from_request(request: CardRequest) -> CardFields:
    return build_card_fields(
        player_name=request.player_name,
        card_set=request.card_set,
        card_type=request.card_type,
        year=request.year,
        price=request.price,
        grading_company=request.grading_company,
        grade_value=request.grade_value,
        condition=request.condition,
        notes=request.notes,
        image_urls=request.image_urls,
        custom_attributes=[(row.key, row.value) for row in request.custom_attributes],
    )


@router.get("/options", response_model=FormOptionsResponse)
async def get_form_options() -> FormOptionsResponse:
    """Get the condition and grading company choices for the card editor."""
    return FormOptionsResponse(
        conditions=CONDITIONS,
        grading_companies=GRADING_COMPANIES,
        default_card_type=DEFAULT_CARD_TYPE,
        default_grading_company=DEFAULT_GRADING_COMPANY,
        default_condition=DEFAULT_CONDITION,
    )


@router.get("/{user_id}/{card_id}", response_model=CardResponse)
async def get_user_card(
    user_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Get one card with display fields resolved.

    Legacy single-image and name fields are folded into image_urls and
    title when the current fields are empty.
    """
    db_card = await get_card(session, user_id, card_id)
    if db_card is None:
        raise CardNotFoundError(card_id)

    return _to_response(card_to_model(db_card))


@router.post("/{user_id}", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_user_card(
    user_id: str,
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Add a card to a user's collection."""
    db_card = await create_card(session, user_id, _fields_from_request(request))
    logger.info("Created card %s for user %s", db_card.card_id, user_id)

    return _to_response(card_to_model(db_card))


@router.put("/{user_id}/{card_id}", response_model=CardResponse)
async def update_user_card(
    user_id: str,
    card_id: str,
    request: CardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Update a card.

    Replaces every editable field, including the image list and custom
    attributes, with the submitted values.
    """
    db_card = await update_card(session, user_id, card_id, _fields_from_request(request))
    if db_card is None:
        raise CardNotFoundError(card_id)

    logger.info("Updated card %s for user %s", card_id, user_id)
    return _to_response(card_to_model(db_card))


@router.delete("/{user_id}/{card_id}", response_model=DeleteResponse)
async def delete_user_card(
    user_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """Delete a card. Irreversible; stored image files are left in place."""
    deleted = await delete_card(session, user_id, card_id)

    if deleted:
        logger.info("Deleted card %s for user %s", card_id, user_id)
        message = "The card has been removed from your collection."
    else:
        message = "No card found to delete."

    return DeleteResponse(card_id=card_id, deleted=deleted, message=message)


@router.post("/{user_id}/{card_id}/images", response_model=CardResponse)
async def upload_card_images(
    user_id: str,
    card_id: str,
    files: Annotated[list[UploadFile], File(description="One or more card photos")],
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[ImageStore, Depends(get_image_store)],
) -> CardResponse:
    """
    Upload photos for a card.

    New images are appended after the existing ones, in upload order. The
    batch is stored only if every file is accepted.
    """
    db_card = await get_card(session, user_id, card_id)
    if db_card is None:
        raise CardNotFoundError(card_id)

    # One byte past the limit is enough to reject an oversized file
    batch = [(upload.filename, await upload.read(store.max_bytes + 1)) for upload in files]
    uploaded = store.save_all(user_id, batch)

    images = resolve_images(card_to_model(db_card)) + uploaded
    try:
        db_card = await set_card_images(session, db_card, images)
    except SQLAlchemyError:
        for url in uploaded:
            store.delete(user_id, url)
        raise

    return _to_response(card_to_model(db_card))


@router.delete("/{user_id}/{card_id}/images/{index}", response_model=CardResponse)
async def remove_card_image(
    user_id: str,
    card_id: str,
    index: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Remove the image at ``index`` from a card's image list."""
    db_card = await get_card(session, user_id, card_id)
    if db_card is None:
        raise CardNotFoundError(card_id)

    images = resolve_images(card_to_model(db_card))
    if not 0 <= index < len(images):
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message="Image not found.",
            detail=f"Card has {len(images)} images, index {index} requested",
            status_code=404,
        )

    del images[index]
    db_card = await set_card_images(session, db_card, images)

    return _to_response(card_to_model(db_card))
