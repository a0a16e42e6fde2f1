"""Pydantic models for geocoded locations."""

import uuid
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Coordinates are compared at roughly 10 m precision.
COORDINATE_PRECISION = 4


class LocationCandidate(BaseModel):
    """A place returned by the geocoding endpoint."""

    model_config = ConfigDict(frozen=True)

    # Only used to tell list rows apart; never persisted or compared.
    id: uuid.UUID = Field(default_factory=uuid.uuid4, exclude=True)
    name: str
    local_names: Optional[Dict[str, str]] = None
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    country: str
    state: Optional[str] = None

    @property
    def key(self) -> Tuple[str, str, Optional[str], float, float]:
        """Structural identity of the place."""
        return (
            self.name,
            self.country,
            self.state,
            round(self.lat, COORDINATE_PRECISION),
            round(self.lon, COORDINATE_PRECISION),
        )

    @property
    def display_name(self) -> str:
        parts = [self.name]
        if self.state:
            parts.append(self.state)
        parts.append(self.country)
        return ", ".join(parts)

    def localized_name(self, language: str) -> str:
        """Name in the given language code, falling back to the default name."""
        if self.local_names and language in self.local_names:
            return self.local_names[language]
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocationCandidate):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


# A favorite is just a candidate the user decided to keep.
FavoriteLocation = LocationCandidate
