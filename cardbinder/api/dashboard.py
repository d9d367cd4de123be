"""
Collection dashboard endpoint.

Returns the visible cards for a search term and facet selections, together
with the facets derived from the whole collection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardbinder.db.database import get_session
from cardbinder.filtering import FACET_KEYS, FacetGroup, FilterState
from cardbinder.services.dashboard import CardSummary, DashboardView, build_dashboard
from cardbinder.services.record_store import load_records

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

FacetSelection = Annotated[list[str] | None, Query()]


class CardSummaryResponse(BaseModel):
    """A card tile in the collection grid."""

    id: str
    title: str
    subtitle: str
    image: str | None = None
    badge: str = ""
    price: float | None = None


class FacetOptionResponse(BaseModel):
    """One selectable facet value."""

    value: str = Field(..., description="Normalized (lower-case) value used for filtering")
    label: str = Field(..., description="Value as first written in the collection")
    count: int


class FacetGroupResponse(BaseModel):
    """A filterable attribute with its options."""

    key: str
    label: str
    options: list[FacetOptionResponse] = Field(default_factory=list)


class FilterChip(BaseModel):
    """An active facet selection."""

    key: str
    value: str


class DashboardResponse(BaseModel):
    """Response model for the collection dashboard."""

    user_id: str
    search: str = ""
    cards: list[CardSummaryResponse] = Field(default_factory=list)
    facets: list[FacetGroupResponse] = Field(default_factory=list)
    filters: dict[str, list[str]] = Field(default_factory=dict)
    chips: list[FilterChip] = Field(default_factory=list)
    active_count: int = 0
    total_cards: int = 0
    visible_cards: int = 0
    empty_message: str | None = Field(
        default=None,
        description="Message to show when no cards are visible",
    )
    load_error: str | None = Field(
        default=None,
        description="Set when the collection could not be loaded",
    )


def _facet_group_response(group: FacetGroup) -> FacetGroupResponse:
    return FacetGroupResponse(
        key=group.key,
        label=group.label,
        options=[
            FacetOptionResponse(value=option.value, label=option.label, count=option.count)
            for option in group.options
        ],
    )


def _card_summary_response(card: CardSummary) -> CardSummaryResponse:
    return CardSummaryResponse(
        id=card.id,
        title=card.title,
        subtitle=card.subtitle,
        image=card.image,
        badge=card.badge,
        price=card.price,
    )


def _to_response(user_id: str, view: DashboardView) -> DashboardResponse:
    return DashboardResponse(
        user_id=user_id,
        search=view.search,
        cards=[_card_summary_response(card) for card in view.cards],
        facets=[_facet_group_response(group) for group in view.facets],
        filters=view.filters,
        chips=[FilterChip(key=key, value=value) for key, value in view.chips],
        active_count=view.active_count,
        total_cards=view.total_cards,
        visible_cards=view.visible_cards,
        empty_message=view.empty_message,
        load_error=view.load_error,
    )


@router.get("/{user_id}", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    q: Annotated[str, Query(description="Free-text search")] = "",
    player_name: FacetSelection = None,
    year: FacetSelection = None,
    card_set: FacetSelection = None,
    card_type: FacetSelection = None,
    grading_company: FacetSelection = None,
    condition: FacetSelection = None,
) -> DashboardResponse:
    """
    Get a user's collection dashboard.

    Facet parameters may repeat (``?card_set=topps&card_set=bowman``);
    values within one facet are OR'ed and facets are AND'ed. Facets are
    always computed from the full collection, not the filtered view.

    A collection that fails to load is reported through ``load_error`` and
    otherwise behaves as an empty collection.
    """
    state = FilterState.from_params(
        {
            "player_name": player_name,
            "year": year,
            "card_set": card_set,
            "card_type": card_type,
            "grading_company": grading_company,
            "condition": condition,
        },
        allowed_keys=FACET_KEYS,
    )

    records, load_error = await load_records(session, user_id)
    view = build_dashboard(records, search=q, state=state, load_error=load_error)

    return _to_response(user_id, view)
