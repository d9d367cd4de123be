"""
Card record model.

A Card is one catalogued trading card owned by a single user. Records written
before multi-image support carry the legacy ``name``, ``set_name`` and
``image_url`` fields; the ``resolve_*`` helpers below are the only place that
decides when those legacy fields are consulted.
"""

from dataclasses import dataclass, field
from datetime import datetime

CONDITIONS = [
    "Mint",
    "Near Mint",
    "Excellent",
    "Good",
    "Light Played",
    "Played",
    "Poor",
    "Ungraded",
]
GRADING_COMPANIES = ["Raw", "PSA", "BGS", "SGC", "CGC", "Other"]

DEFAULT_CARD_TYPE = "Base"
DEFAULT_GRADING_COMPANY = "Raw"
DEFAULT_CONDITION = "Near Mint"

# Grading company value meaning "not professionally graded"
UNGRADED_COMPANY = "Raw"


@dataclass
class Card:
    """A single catalogued card."""

    id: str
    user_id: str
    player_name: str = ""
    card_set: str = ""
    card_type: str = ""
    year: int | None = None
    price: float | None = None
    grading_company: str = ""
    grade_value: str = ""
    condition: str = ""
    notes: str = ""
    image_urls: list[str] = field(default_factory=list)
    custom_attributes: dict[str, str] = field(default_factory=dict)
    created_at: datetime | None = None

    # Legacy fields, read only as fallbacks
    name: str | None = None
    set_name: str | None = None
    image_url: str | None = None


@dataclass
class CardFields:
    """Validated, user-editable fields of a card, as submitted by a form."""

    player_name: str = ""
    card_set: str = ""
    card_type: str = DEFAULT_CARD_TYPE
    year: int | None = None
    price: float | None = None
    grading_company: str = DEFAULT_GRADING_COMPANY
    grade_value: str = ""
    condition: str = DEFAULT_CONDITION
    notes: str = ""
    image_urls: list[str] = field(default_factory=list)
    custom_attributes: dict[str, str] = field(default_factory=dict)

    def legacy_name(self) -> str:
        """Single-line name written to the legacy ``name`` field."""
        year = str(self.year) if self.year is not None else ""
        return f"{year} {self.card_set} {self.player_name}".strip()

    def legacy_image_url(self) -> str | None:
        return self.image_urls[0] if self.image_urls else None


def resolve_title(card: Card) -> str:
    """
    Display title for a card.

    "<year> <player>" when a player name is set, otherwise the legacy name.
    """
    if card.player_name:
        year = str(card.year) if card.year else ""
        return f"{year} {card.player_name}".strip()
    return card.name or ""


def resolve_subtitle(card: Card) -> str:
    """Set name, falling back to the legacy set_name."""
    return card.card_set or card.set_name or ""


def resolve_images(card: Card) -> list[str]:
    """
    Ordered image URLs for a card.

    Uses image_urls when non-empty, otherwise wraps the legacy single
    image_url. Returns a new list.
    """
    if card.image_urls:
        return list(card.image_urls)
    if card.image_url:
        return [card.image_url]
    return []


def resolve_badge(card: Card) -> str:
    """Grade label for graded cards ("PSA 10"), condition for raw ones."""
    if card.grading_company and card.grading_company != UNGRADED_COMPANY:
        return f"{card.grading_company} {card.grade_value}".strip()
    return card.condition


def next_image_index(current: int, count: int) -> int:
    """Advance a gallery position, wrapping to the first image."""
    if count <= 0:
        return 0
    return 0 if current >= count - 1 else current + 1


def prev_image_index(current: int, count: int) -> int:
    """Step a gallery position back, wrapping to the last image."""
    if count <= 0:
        return 0
    return count - 1 if current <= 0 else current - 1
