"""Per-relation-type weights applied when typed relations are aggregated."""

from collections.abc import Mapping
from types import MappingProxyType

from ..errors import InvalidArgument
from .genealogists import RelationType


class Weights:
    """Read-only lookup from relation type to weight, with a default weight."""

    def __init__(self, weights: Mapping[str, float], default_weight: float):
        entries: dict[RelationType, float] = {}
        for relation_type, weight in weights.items():
            if relation_type is None or weight is None:
                raise InvalidArgument("Neither relation type nor weight can be None.")
            try:
                entries[RelationType(relation_type)] = float(weight)
            except (TypeError, ValueError) as exc:
                raise InvalidArgument(f"Weight of '{relation_type}' is no number: {weight!r}") from exc
        if default_weight is None:
            raise InvalidArgument("The default weight can't be None.")

        self._weights = MappingProxyType(entries)
        self._default_weight = float(default_weight)

    @classmethod
    def all_equal(cls) -> "Weights":
        return cls({}, 1.0)

    @property
    def default_weight(self) -> float:
        return self._default_weight

    def weight_of(self, relation_type: str) -> float:
        return self._weights.get(relation_type, self._default_weight)

    def __repr__(self) -> str:
        entries = ", ".join(f"{t}={w}" for t, w in sorted(self._weights.items()))
        return f"Weights({entries}; default={self._default_weight})"
