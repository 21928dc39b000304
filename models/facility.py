"""Facility reference data and nearest-facility match models."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .constants import COMMUTER_STATION_TYPE


@dataclass(frozen=True)
class Facility:
    """A transit station or store used as a proximity reference point."""

    name: str
    type: str
    lat: float
    lng: float

    @property
    def is_commuter(self) -> bool:
        """Whether this is a commuter rail station."""
        return self.type.lower() == COMMUTER_STATION_TYPE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Facility":
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            lat=float(data["lat"]),
            lng=float(data["lng"]),
        )


@dataclass
class FacilityMatch:
    """
    Nearest facility resolved for a property.

    distance is in kilometers (one decimal) and duration in whole minutes
    once a routed lookup has succeeded.
    """

    name: str
    type: str
    lat: float
    lng: float
    distance: float
    duration: Optional[int] = None
    mode: Optional[str] = None

    @classmethod
    def from_facility(
        cls, facility: Facility, distance: float
    ) -> "FacilityMatch":
        """Create an unrouted match carrying the straight-line distance."""
        return cls(
            name=facility.name,
            type=facility.type,
            lat=facility.lat,
            lng=facility.lng,
            distance=distance,
        )

    @property
    def is_commuter(self) -> bool:
        return self.type.lower() == COMMUTER_STATION_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FacilityMatch":
        """Create instance from dictionary."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered_data)


def load_facilities(path: Union[str, Path]) -> List[Facility]:
    """
    Load a facility reference list from a YAML file.

    The file holds a list of mappings with name, type, lat and lng keys.
    """
    with open(path, "r", encoding="utf-8") as f:
        entries = yaml.safe_load(f) or []

    return [Facility.from_dict(entry) for entry in entries]
