"""Authority and location validation API routes."""

from fastapi import APIRouter, Depends, Query

from herbtrace.dependencies import LedgerServices, get_caller, get_services
from herbtrace.schemas.geofence import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    AuthorityResponse,
    AuthorityTransfer,
    LocationValidation,
)

router = APIRouter(prefix="/api", tags=["geofence"])


@router.get("/authority", response_model=AuthorityResponse)
async def get_authority(services: LedgerServices = Depends(get_services)) -> AuthorityResponse:
    return AuthorityResponse(authority=await services.zones.authority())


@router.post("/authority/transfer", response_model=AuthorityResponse)
async def transfer_authority(
    body: AuthorityTransfer,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> AuthorityResponse:
    """Hand zone administration to a new identity (current authority only)."""
    await services.zones.transfer_authority(caller, body.new_authority)
    return AuthorityResponse(authority=await services.zones.authority())


@router.get("/validate", response_model=LocationValidation)
async def validate_location(
    lat: int = Query(
        ..., ge=-MAX_LATITUDE, le=MAX_LATITUDE, description="Latitude in microdegrees"
    ),
    lon: int = Query(
        ..., ge=-MAX_LONGITUDE, le=MAX_LONGITUDE, description="Longitude in microdegrees"
    ),
    services: LedgerServices = Depends(get_services),
) -> LocationValidation:
    """Check a point against all active zones; first (lowest id) match wins."""
    matched, zone_id = await services.validator.validate(lat, lon)
    return LocationValidation(matched=matched, zone_id=zone_id)
