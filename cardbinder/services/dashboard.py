"""
Collection dashboard view model.

Runs the filtering core over one snapshot of an owner's cards and packages
everything a renderer needs: card tiles, facet groups, active filter chips
and the message to show when nothing is visible.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from cardbinder.filtering import (
    FACET_KEYS,
    FacetGroup,
    FilterState,
    extract_facets,
    query_records,
)
from cardbinder.models.card import (
    Card,
    resolve_badge,
    resolve_images,
    resolve_subtitle,
    resolve_title,
)

EMPTY_COLLECTION_MESSAGE = "Your collection is empty. Start adding cards!"
NO_SEARCH_MATCH_MESSAGE = "No cards match your search."
NO_FILTER_MATCH_MESSAGE = "No cards match the selected filters."


@dataclass
class CardSummary:
    """A card as shown in the collection grid."""

    id: str
    title: str
    subtitle: str
    image: str | None
    badge: str
    price: float | None


@dataclass
class DashboardView:
    """Everything the collection page renders for one request."""

    cards: list[CardSummary] = field(default_factory=list)
    facets: list[FacetGroup] = field(default_factory=list)
    chips: list[tuple[str, str]] = field(default_factory=list)
    filters: dict[str, list[str]] = field(default_factory=dict)
    active_count: int = 0
    total_cards: int = 0
    visible_cards: int = 0
    search: str = ""
    empty_message: str | None = None
    load_error: str | None = None


def summarize_card(card: Card) -> CardSummary:
    images = resolve_images(card)
    return CardSummary(
        id=card.id,
        title=resolve_title(card),
        subtitle=resolve_subtitle(card),
        image=images[0] if images else None,
        badge=resolve_badge(card),
        price=card.price,
    )


def _empty_message(
    total: int,
    visible: int,
    search: str,
    load_error: str | None,
) -> str | None:
    if load_error:
        return load_error
    if total == 0:
        return EMPTY_COLLECTION_MESSAGE
    if visible > 0:
        return None
    if search:
        return NO_SEARCH_MATCH_MESSAGE
    return NO_FILTER_MATCH_MESSAGE


def build_dashboard(
    records: Sequence[Card],
    search: str = "",
    state: FilterState | None = None,
    load_error: str | None = None,
) -> DashboardView:
    """
    Build the dashboard for a record snapshot.

    ``records`` must already be newest first; visible cards keep that order.
    A failed load is passed as an empty ``records`` plus ``load_error``.
    """
    if state is None:
        state = FilterState()

    visible = query_records(records, search, state)

    return DashboardView(
        cards=[summarize_card(card) for card in visible],
        facets=extract_facets(records),
        chips=state.chips(FACET_KEYS),
        filters=state.to_dict(),
        active_count=state.active_count(),
        total_cards=len(records),
        visible_cards=len(visible),
        search=search,
        empty_message=_empty_message(len(records), len(visible), search, load_error),
        load_error=load_error,
    )
