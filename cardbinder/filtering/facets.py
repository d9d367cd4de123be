"""
Facet extraction for the collection dashboard.

Derives, from an owner's record set, the distinct values and their counts
for each filterable attribute. Values are lower-cased before counting so
that "Topps" and "TOPPS" land in one bucket; each option keeps the first
spelling seen as its display label.

INVARIANTS:
- Pure function of the record set (same cards -> same facets)
- A group with no observed values is omitted
- Sum of option counts == number of records with a non-empty value
"""

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

from cardbinder.models.card import Card

# (key, label) in display order
FACET_FIELDS: tuple[tuple[str, str], ...] = (
    ("player_name", "Player"),
    ("year", "Year"),
    ("card_set", "Set"),
    ("card_type", "Card Type"),
    ("grading_company", "Grading Company"),
    ("condition", "Condition"),
)

FACET_KEYS: tuple[str, ...] = tuple(key for key, _ in FACET_FIELDS)

# Facets whose options sort newest-first by numeric value
_NUMERIC_DESCENDING = frozenset({"year"})


@dataclass(frozen=True)
class FacetOption:
    """One distinct normalized value of a facet and how many cards carry it."""

    value: str
    count: int
    label: str


@dataclass(frozen=True)
class FacetGroup:
    """A filterable attribute and its observed value distribution."""

    key: str
    label: str
    options: tuple[FacetOption, ...]

    def pairs(self) -> list[tuple[str, int]]:
        """Options as (value, count) pairs."""
        return [(option.value, option.count) for option in self.options]


def facet_value(card: Card, key: str) -> str:
    """
    Raw string value of a card for a facet key.

    Missing or null fields read as the empty string. Never raises.
    """
    value = getattr(card, key, None)
    if value is None:
        return ""
    return str(value)


def extract_facets(records: Sequence[Card]) -> list[FacetGroup]:
    """
    Build facet groups for a record set.

    Results are memoized on the facet-relevant content of the records, so
    calling this again with an unchanged collection does not recount.
    """
    signature = tuple(tuple(facet_value(card, key) for key in FACET_KEYS) for card in records)
    return list(_extract_from_signature(signature))


@lru_cache(maxsize=32)
def _extract_from_signature(signature: tuple[tuple[str, ...], ...]) -> tuple[FacetGroup, ...]:
    groups: list[FacetGroup] = []

    for index, (key, label) in enumerate(FACET_FIELDS):
        counts: dict[str, int] = {}
        labels: dict[str, str] = {}

        for row in signature:
            raw = row[index]
            if not raw:
                continue
            normalized = raw.lower()
            counts[normalized] = counts.get(normalized, 0) + 1
            labels.setdefault(normalized, raw)

        if not counts:
            continue

        if key in _NUMERIC_DESCENDING:
            ordered = sorted(counts, key=_numeric_descending_key)
        else:
            ordered = sorted(counts)

        options = tuple(
            FacetOption(value=value, count=counts[value], label=labels[value]) for value in ordered
        )
        groups.append(FacetGroup(key=key, label=label, options=options))

    return tuple(groups)


def _numeric_descending_key(value: str) -> tuple[int, int, str]:
    """Sort numbers high-to-low; anything non-numeric goes last, alphabetically."""
    try:
        return (0, -int(value), value)
    except ValueError:
        return (1, 0, value)


def clear_facet_cache() -> None:
    """Drop memoized facet results (for testing)."""
    _extract_from_signature.cache_clear()
