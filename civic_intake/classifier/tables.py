"""Static lookup tables and vocabularies for priority scoring."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from civic_intake.exceptions import TableError
from civic_intake.schema import IncidentType, ZoneTier

DEFAULT_TYPE_WEIGHT = 0.3
DEFAULT_HISTORY_COUNT = 1

# Canonical token -> weight in [0, 1]
DEFAULT_WEIGHTS: dict[str, float] = {
    # Incident types
    "pothole": 0.7,
    "streetlight": 0.8,
    "waste": 0.4,
    "traffic-signal": 0.9,  # road safety
    "water": 0.8,  # essential service
    "tree": 0.9,  # immediate danger
    "vandalism": 0.5,
    "noise": 0.3,
    "fire": 1.0,
    # Urgency keywords
    "emergency": 0.9,
    "danger": 0.8,
    "urgent": 0.7,
    "fallen": 0.6,
    "broken": 0.5,
    # Zones
    "center": 0.9,
    "residential-north": 0.5,
    "residential-south": 0.5,
    "residential-east": 0.5,
    "residential-west": 0.5,
    "industrial": 0.7,
    "commercial": 0.8,
    "university": 0.6,
    "hospital": 0.9,
    "park": 0.4,
}

# Historical complaint count per zone
DEFAULT_ZONE_HISTORY: dict[str, int] = {
    "center": 12,
    "residential-north": 4,
    "residential-south": 3,
    "residential-east": 5,
    "residential-west": 4,
    "industrial": 8,
    "commercial": 10,
    "university": 6,
    "hospital": 2,
    "park": 3,
}

# Form values used by the Spanish intake page
TYPE_ALIASES: dict[str, IncidentType] = {
    "baches": IncidentType.POTHOLE,
    "alumbrado": IncidentType.STREETLIGHT,
    "residuos": IncidentType.WASTE,
    "semaforos": IncidentType.TRAFFIC_SIGNAL,
    "semáforos": IncidentType.TRAFFIC_SIGNAL,
    "agua": IncidentType.WATER,
    "arboles": IncidentType.TREE,
    "árboles": IncidentType.TREE,
    "vandalismo": IncidentType.VANDALISM,
    "ruido": IncidentType.NOISE,
    "incendio": IncidentType.FIRE,
}

# Bag-of-words vocabulary, in encoding order, with the spellings that count as a hit
URGENCY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "emergency": ("emergency", "emergencia"),
    "danger": ("danger", "peligro"),
    "urgent": ("urgent", "urgente"),
    "fallen": ("fallen", "caido", "caído"),
    "broken": ("broken", "roto"),
}

# Checked in order; locations matching neither fall into ZoneTier.LOW
ZONE_TIER_KEYWORDS: dict[ZoneTier, tuple[str, ...]] = {
    ZoneTier.CRITICAL: ("center", "centro", "hospital", "commercial", "comercial"),
    ZoneTier.MEDIUM: ("industrial", "university", "universitaria", "universidad"),
}

Weight = Annotated[float, Field(ge=0.0, le=1.0)]

WEIGHTS_SCHEMA = TypeAdapter(dict[str, Weight])
HISTORY_SCHEMA = TypeAdapter(dict[str, int])


class TablesFile(BaseModel):
    """Shape of a JSON tables override file."""

    model_config = ConfigDict(extra="forbid")

    weights: dict[str, Weight] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    zone_history: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_ZONE_HISTORY))


class WeightTable:
    """Read-only token -> weight mapping with defaulting lookups."""

    def __init__(self, weights: Mapping[str, float]):
        try:
            checked = WEIGHTS_SCHEMA.validate_python(weights)
        except ValidationError as e:
            raise TableError(f"Invalid weight table: {e}") from e
        self._weights = MappingProxyType(checked)

    def get(self, token: str, default: float = 0.0) -> float:
        return self._weights.get(token, default)

    def type_weight(self, incident_type: Optional[IncidentType]) -> float:
        """Weight of an incident type, DEFAULT_TYPE_WEIGHT when unknown."""
        if incident_type is None:
            return DEFAULT_TYPE_WEIGHT
        return self._weights.get(incident_type.value, DEFAULT_TYPE_WEIGHT)

    def __contains__(self, token: object) -> bool:
        return token in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def as_dict(self) -> dict[str, float]:
        return dict(self._weights)


class ZoneHistoryTable:
    """Read-only historical complaint counts used for the history feature.

    The maximum count is the normalisation denominator, so an empty table or
    one whose largest count is not positive is rejected at construction.
    """

    def __init__(self, counts: Mapping[str, int]):
        try:
            counts = HISTORY_SCHEMA.validate_python(counts)
        except ValidationError as e:
            raise TableError(f"Invalid zone history table: {e}") from e
        if not counts:
            raise TableError("Zone history table must not be empty")
        max_count = max(counts.values())
        if max_count <= 0:
            raise TableError(f"Zone history maximum must be positive, got {max_count}")
        self._counts = MappingProxyType(dict(counts))
        self._max_count = max_count

    @property
    def max_count(self) -> int:
        return self._max_count

    def count_for(self, key: str) -> int:
        return self._counts.get(key, DEFAULT_HISTORY_COUNT)

    def normalized(self, key: str) -> float:
        """Count for ``key`` divided by the table maximum."""
        return self.count_for(key) / self._max_count

    def __len__(self) -> int:
        return len(self._counts)

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)


@dataclass(frozen=True)
class ScoringTables:
    """The static tables one scorer reads from."""

    weights: WeightTable = field(default_factory=lambda: WeightTable(DEFAULT_WEIGHTS))
    history: ZoneHistoryTable = field(
        default_factory=lambda: ZoneHistoryTable(DEFAULT_ZONE_HISTORY)
    )


def default_tables() -> ScoringTables:
    """Tables shipped with the intake page."""
    return ScoringTables()


def load_tables(path: Path) -> ScoringTables:
    """Load tables from a JSON file with optional ``weights`` and ``zone_history`` objects.

    Sections missing from the file keep their defaults. Any malformed content
    raises TableError.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TableError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise TableError(f"Expected a JSON object in {path}")

    try:
        parsed = TablesFile.model_validate(data)
    except ValidationError as e:
        raise TableError(f"Invalid scoring tables in {path}: {e}") from e

    return ScoringTables(
        weights=WeightTable(parsed.weights),
        history=ZoneHistoryTable(parsed.zone_history),
    )


def resolve_incident_type(value: str) -> Optional[IncidentType]:
    """Map a form value to an IncidentType, or None when unrecognised."""
    key = value.strip().lower()
    try:
        return IncidentType(key)
    except ValueError:
        return TYPE_ALIASES.get(key)
