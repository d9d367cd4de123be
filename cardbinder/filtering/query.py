"""
Query engine for the collection dashboard.

Combines free-text search with facet selections to produce the visible
cards. Text search runs first; a card that fails it is excluded without
evaluating facets. Output preserves input order (newest first, as the
record store returns it).

INVARIANTS:
- Output is a subsequence of the input
- Pure and total: no I/O, an empty result is a normal outcome
"""

from collections.abc import Sequence

from cardbinder.filtering.facets import facet_value
from cardbinder.filtering.filter_state import FilterState
from cardbinder.models.card import Card

# Text fields searched by substring; year is matched separately
SEARCHABLE_FIELDS: tuple[str, ...] = (
    "player_name",
    "card_set",
    "card_type",
    "notes",
    "grading_company",
    "name",
)


def matches_search(card: Card, search: str) -> bool:
    """
    Check a card against a free-text term.

    Case-insensitive substring match over the searchable text fields, or a
    substring of the year. An empty term matches every card.
    """
    if not search:
        return True

    term = search.lower()
    for field_name in SEARCHABLE_FIELDS:
        value = getattr(card, field_name, None)
        if value and term in str(value).lower():
            return True

    return card.year is not None and term in str(card.year)


def matches_filters(card: Card, state: FilterState) -> bool:
    """
    Check a card against facet selections.

    The card must match at least one selected value in every constrained
    group. Absent fields compare as the empty string.
    """
    for key, selected in state.selections.items():
        if facet_value(card, key).lower() not in selected:
            return False
    return True


def query_records(
    records: Sequence[Card],
    search: str = "",
    state: FilterState | None = None,
) -> list[Card]:
    """Return the cards visible for a search term and filter state, in input order."""
    if state is None:
        state = FilterState()

    return [
        card for card in records if matches_search(card, search) and matches_filters(card, state)
    ]
