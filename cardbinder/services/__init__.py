"""
CardBinder services.

Business logic for card forms, image storage and the collection dashboard.
"""

from cardbinder.services.card_form import (
    build_card_fields,
    build_custom_attributes,
    parse_price,
    parse_year,
)
from cardbinder.services.dashboard import (
    CardSummary,
    DashboardView,
    build_dashboard,
    summarize_card,
)
from cardbinder.services.image_store import ImageStore, get_image_store
from cardbinder.services.record_store import fetch_records, load_records

__all__ = [
    "CardSummary",
    "DashboardView",
    "ImageStore",
    "build_card_fields",
    "build_custom_attributes",
    "build_dashboard",
    "fetch_records",
    "get_image_store",
    "load_records",
    "parse_price",
    "parse_year",
    "summarize_card",
]
