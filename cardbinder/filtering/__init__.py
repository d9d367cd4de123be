"""
Client-side style filtering for the collection dashboard.

Facet extraction, facet selections and the combined search/facet query all
operate on an in-memory record set and never touch the store.
"""

from cardbinder.filtering.facets import (
    FACET_FIELDS,
    FACET_KEYS,
    FacetGroup,
    FacetOption,
    clear_facet_cache,
    extract_facets,
    facet_value,
)
from cardbinder.filtering.filter_state import FilterState
from cardbinder.filtering.query import (
    SEARCHABLE_FIELDS,
    matches_filters,
    matches_search,
    query_records,
)

__all__ = [
    "FACET_FIELDS",
    "FACET_KEYS",
    "FacetGroup",
    "FacetOption",
    "FilterState",
    "SEARCHABLE_FIELDS",
    "clear_facet_cache",
    "extract_facets",
    "facet_value",
    "matches_filters",
    "matches_search",
    "query_records",
]
