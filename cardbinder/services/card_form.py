"""
Card form handling.

Turns loosely-typed form input into CardFields. Numeric fields are read
leniently: the leading number of the submitted text is used, and anything
unparseable (or zero) is stored as absent.
"""

import re
from collections.abc import Iterable

from cardbinder.models.card import (
    DEFAULT_CARD_TYPE,
    DEFAULT_CONDITION,
    DEFAULT_GRADING_COMPANY,
    CardFields,
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_year(value: str | int | None) -> int | None:
    """
    Parse a year from form input.

    "2011" -> 2011, "2011-12" -> 2011, "" / "abc" / "0" -> None.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value or None

    match = _LEADING_INT.match(value)
    if not match:
        return None
    return int(match.group(1)) or None


def parse_price(value: str | float | None) -> float | None:
    """
    Parse a price from form input.

    "12.50" -> 12.5, "$3" -> None, "0" -> None.
    """
    if value is None:
        return None
    if isinstance(value, int | float):
        return float(value) or None

    match = _LEADING_FLOAT.match(value)
    if not match:
        return None
    return float(match.group(1)) or None


def build_custom_attributes(rows: Iterable[tuple[str, str]]) -> dict[str, str]:
    """
    Collapse ordered (key, value) rows into an attribute mapping.

    Keys are trimmed and rows with blank keys dropped; a later row with
    the same key replaces an earlier one.
    """
    attributes: dict[str, str] = {}
    for key, value in rows:
        key = key.strip()
        if key:
            attributes[key] = value
    return attributes


def build_card_fields(
    *,
    player_name: str = "",
    card_set: str = "",
    card_type: str | None = None,
    year: str | int | None = None,
    price: str | float | None = None,
    grading_company: str | None = None,
    grade_value: str = "",
    condition: str | None = None,
    notes: str = "",
    image_urls: Iterable[str] = (),
    custom_attributes: Iterable[tuple[str, str]] = (),
) -> CardFields:
    """Build CardFields from raw form values, applying defaults."""
    return CardFields(
        player_name=player_name,
        card_set=card_set,
        card_type=card_type or DEFAULT_CARD_TYPE,
        year=parse_year(year),
        price=parse_price(price),
        grading_company=grading_company or DEFAULT_GRADING_COMPANY,
        grade_value=grade_value,
        condition=condition or DEFAULT_CONDITION,
        notes=notes,
        image_urls=[url for url in image_urls if url],
        custom_attributes=build_custom_attributes(custom_attributes),
    )
