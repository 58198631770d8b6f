"""Bounding-box geometry over microdegree coordinates.

Coordinates are signed integers holding degrees x 1e6. All containment tests
are inclusive on every edge.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from herbtrace.exceptions import InvalidCoordinates

MICRODEGREES_PER_DEGREE = 1_000_000


def to_microdegrees(degrees: float) -> int:
    """Convert float degrees to microdegrees, rounding half away from zero."""
    scaled = Decimal(str(degrees)) * MICRODEGREES_PER_DEGREE
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_microdegrees(value: int) -> float:
    return value / MICRODEGREES_PER_DEGREE


def check_box(min_latitude: int, max_latitude: int, min_longitude: int, max_longitude: int) -> None:
    """Raise InvalidCoordinates unless min < max on both axes."""
    if min_latitude >= max_latitude or min_longitude >= max_longitude:
        raise InvalidCoordinates(
            f"Bounding box must satisfy minLat < maxLat and minLon < maxLon, got "
            f"lat [{min_latitude}, {max_latitude}] lon [{min_longitude}, {max_longitude}]"
        )


@dataclass(frozen=True)
class GeoBox:
    """Immutable snapshot of one zone's box and state."""

    zone_id: int
    min_latitude: int
    max_latitude: int
    min_longitude: int
    max_longitude: int
    is_active: bool = True

    def contains(self, latitude: int, longitude: int) -> bool:
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


def first_matching_zone(zones: Iterable[GeoBox], latitude: int, longitude: int) -> int:
    """Lowest id of an active zone containing the point, or 0 if none does.

    Zones may arrive in any order; the lowest id always wins so overlapping
    zones resolve the same way regardless of how the snapshot was built.
    """
    best = 0
    for zone in zones:
        if not zone.is_active or not zone.contains(latitude, longitude):
            continue
        if best == 0 or zone.zone_id < best:
            best = zone.zone_id
    return best
