"""
Filter state transition endpoints.

Stateless: the client sends its current selections and receives the next
state. Lets thin clients share the exact toggle/remove/clear semantics of
the dashboard without reimplementing them.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from cardbinder.filtering import FACET_KEYS, FilterState
from cardbinder.models.failure import FailureKind, KnownError

router = APIRouter(prefix="/filters", tags=["filters"])


class FilterStateRequest(BaseModel):
    """Current facet selections."""

    filters: dict[str, list[str]] = Field(
        default_factory=dict,
        examples=[{"card_set": ["topps", "bowman"], "year": ["2018"]}],
    )


class FilterChangeRequest(FilterStateRequest):
    """A single selection change applied to the current state."""

    key: str = Field(..., examples=["card_set"])
    value: str = Field(..., examples=["bowman"])


class FilterStateResponse(BaseModel):
    """Facet selections after a change."""

    filters: dict[str, list[str]] = Field(default_factory=dict)
    active_count: int = 0


def _current_state(request: FilterStateRequest) -> FilterState:
    return FilterState.from_params(request.filters, allowed_keys=FACET_KEYS)


def _check_key(key: str) -> None:
    if key not in FACET_KEYS:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message=f"Unknown filter '{key}'.",
            detail=f"Filterable keys: {', '.join(FACET_KEYS)}",
            status_code=400,
        )


def _to_response(state: FilterState) -> FilterStateResponse:
    return FilterStateResponse(filters=state.to_dict(), active_count=state.active_count())


@router.post("/toggle", response_model=FilterStateResponse)
async def toggle_filter(request: FilterChangeRequest) -> FilterStateResponse:
    """Select a facet value, or deselect it if it is already selected."""
    _check_key(request.key)
    state = _current_state(request).toggle(request.key, request.value.lower())
    return _to_response(state)


@router.post("/remove", response_model=FilterStateResponse)
async def remove_filter(request: FilterChangeRequest) -> FilterStateResponse:
    """Deselect a facet value (used by chip close buttons)."""
    _check_key(request.key)
    state = _current_state(request).remove(request.key, request.value.lower())
    return _to_response(state)


@router.post("/clear", response_model=FilterStateResponse)
async def clear_filters(request: FilterStateRequest) -> FilterStateResponse:
    """Drop every selection."""
    return _to_response(_current_state(request).clear_all())
