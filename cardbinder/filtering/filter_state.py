"""
Filter state for the collection dashboard.

A FilterState maps a facet key to the set of selected normalized values.
Selections within one key are OR'ed; keys are AND'ed by the query engine.
Every operation returns a new state, so callers hold the state explicitly
and pass it to the query engine.

INVARIANT: no key is ever mapped to an empty set. Removing the last value
of a key removes the key (absence means "unconstrained").
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class FilterState:
    """Immutable facet selections."""

    selections: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cleaned = {key: frozenset(values) for key, values in self.selections.items() if values}
        object.__setattr__(self, "selections", MappingProxyType(cleaned))

    def __hash__(self) -> int:
        return hash(frozenset(self.selections.items()))

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Iterable[str] | None],
        allowed_keys: Iterable[str] | None = None,
    ) -> "FilterState":
        """
        Build a state from request parameters.

        Values are lower-cased to match facet option values; blank values
        are dropped, and keys outside ``allowed_keys`` (when given) ignored.
        """
        allowed = set(allowed_keys) if allowed_keys is not None else None
        selections: dict[str, frozenset[str]] = {}
        for key, values in params.items():
            if allowed is not None and key not in allowed:
                continue
            normalized = frozenset(value.lower() for value in values or () if value)
            if normalized:
                selections[key] = normalized
        return cls(selections)

    def is_selected(self, key: str, value: str) -> bool:
        return value in self.selections.get(key, frozenset())

    def toggle(self, key: str, value: str) -> "FilterState":
        """Select ``value`` under ``key``, or deselect it if already selected."""
        if self.is_selected(key, value):
            return self.remove(key, value)

        selections = dict(self.selections)
        selections[key] = self.selections.get(key, frozenset()) | {value}
        return FilterState(selections)

    def remove(self, key: str, value: str) -> "FilterState":
        """Deselect ``value`` under ``key``. No-op if it is not selected."""
        if not self.is_selected(key, value):
            return self

        selections = dict(self.selections)
        remaining = selections[key] - {value}
        if remaining:
            selections[key] = remaining
        else:
            del selections[key]
        return FilterState(selections)

    def clear_all(self) -> "FilterState":
        return FilterState()

    def active_count(self) -> int:
        """Total number of selected values across all keys."""
        return sum(len(values) for values in self.selections.values())

    def chips(self, key_order: Iterable[str] | None = None) -> list[tuple[str, str]]:
        """
        Active (key, value) pairs for chip display.

        Keys follow ``key_order`` when given (unlisted keys last), values are
        sorted within a key.
        """
        order = list(key_order) if key_order is not None else []
        rank = {key: position for position, key in enumerate(order)}
        keys = sorted(self.selections, key=lambda k: (rank.get(k, len(rank)), k))
        return [(key, value) for key in keys for value in sorted(self.selections[key])]

    def to_dict(self) -> dict[str, list[str]]:
        """Plain mapping with sorted value lists, for JSON responses."""
        return {key: sorted(values) for key, values in self.selections.items()}
