"""Zone registry API routes."""

from fastapi import APIRouter, Depends, Path, Query

from herbtrace.dependencies import LedgerServices, get_caller, get_services
from herbtrace.schemas.geofence import (
    MAX_INTEGER,
    Zone,
    ZoneActiveUpdate,
    ZoneCoordinatesUpdate,
    ZoneCount,
    ZoneCreate,
    ZoneCreated,
)

router = APIRouter(prefix="/api/zones", tags=["zones"])


@router.post("", response_model=ZoneCreated, status_code=201)
async def register_zone(
    body: ZoneCreate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> ZoneCreated:
    """Register a new active zone (authority only)."""
    zone_id = await services.zones.register_zone(
        caller,
        body.name,
        body.min_latitude,
        body.max_latitude,
        body.min_longitude,
        body.max_longitude,
    )
    return ZoneCreated(zone_id=zone_id)


@router.get("", response_model=list[Zone])
async def list_zones(
    active_only: bool = Query(False, description="Only return active zones"),
    services: LedgerServices = Depends(get_services),
) -> list[Zone]:
    return await services.zones.list_zones(active_only=active_only)


@router.get("/count", response_model=ZoneCount)
async def zone_count(services: LedgerServices = Depends(get_services)) -> ZoneCount:
    return ZoneCount(count=await services.zones.zone_count())


@router.get("/{zone_id}", response_model=Zone)
async def get_zone(
    zone_id: int = Path(..., le=MAX_INTEGER),
    strict: bool = Query(False, description="Return 404 instead of the empty zone"),
    services: LedgerServices = Depends(get_services),
) -> Zone:
    """Get a zone by id. Unknown ids return an empty zone (exists=false) unless strict."""
    if strict:
        return await services.zones.require_zone(zone_id)
    return await services.zones.get_zone(zone_id)


@router.patch("/{zone_id}/active", response_model=Zone)
async def set_zone_active(
    body: ZoneActiveUpdate,
    zone_id: int = Path(..., le=MAX_INTEGER),
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> Zone:
    """Activate or deactivate a zone (authority only)."""
    await services.zones.set_zone_active(caller, zone_id, body.is_active)
    return await services.zones.get_zone(zone_id)


@router.put("/{zone_id}/coordinates", response_model=Zone)
async def update_zone_coordinates(
    body: ZoneCoordinatesUpdate,
    zone_id: int = Path(..., le=MAX_INTEGER),
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> Zone:
    """Replace a zone's bounding box (authority only)."""
    await services.zones.update_zone_coordinates(
        caller,
        zone_id,
        body.min_latitude,
        body.max_latitude,
        body.min_longitude,
        body.max_longitude,
    )
    return await services.zones.get_zone(zone_id)
