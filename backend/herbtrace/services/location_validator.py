"""Point-in-zone validation over the registry's current zones."""

import logging
from typing import NamedTuple

from herbtrace.services.geometry import first_matching_zone
from herbtrace.services.zone_registry import ZoneRegistry

logger = logging.getLogger(__name__)


class ValidationResult(NamedTuple):
    matched: bool
    zone_id: int


class LocationValidator:
    """Stateless check of a point against every active zone.

    The first (lowest id) active zone whose box contains the point wins.
    """

    def __init__(self, registry: ZoneRegistry):
        self._registry = registry

    async def validate(self, latitude: int, longitude: int) -> ValidationResult:
        zones = await self._registry.snapshot()
        zone_id = first_matching_zone(zones, latitude, longitude)
        if zone_id == 0:
            logger.debug(f"Point ({latitude}, {longitude}) matched no active zone")
            return ValidationResult(False, 0)
        return ValidationResult(True, zone_id)
