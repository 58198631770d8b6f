"""Herb record API routes."""

from fastapi import APIRouter, Depends, Path, Query

from herbtrace.dependencies import LedgerServices, get_caller, get_services
from herbtrace.schemas.geofence import (
    MAX_INTEGER,
    HerbRecord,
    HerbRecordCreate,
    HerbRecordCreated,
    RecordCount,
)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

router = APIRouter(prefix="/api/herbs", tags=["herbs"])


@router.post("", response_model=HerbRecordCreated, status_code=201)
async def submit_herb_record(
    body: HerbRecordCreate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> HerbRecordCreated:
    """Submit a herb record; rejected unless the location is inside an active zone."""
    record_id = await services.herbs.submit_herb_record(
        caller,
        body.latitude,
        body.longitude,
        body.herb_name,
        body.scientific_name,
        body.quantity,
        body.image_hash,
    )
    return HerbRecordCreated(record_id=record_id)


@router.get("", response_model=list[HerbRecord])
async def list_herb_records(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    submitted_by: str | None = Query(None, description="Filter by submitter identity"),
    services: LedgerServices = Depends(get_services),
) -> list[HerbRecord]:
    return await services.herbs.list_records(offset=offset, limit=limit, submitted_by=submitted_by)


@router.get("/count", response_model=RecordCount)
async def record_count(services: LedgerServices = Depends(get_services)) -> RecordCount:
    return RecordCount(count=await services.herbs.record_count())


@router.get("/{record_id}", response_model=HerbRecord)
async def get_herb_record(
    record_id: int = Path(..., le=MAX_INTEGER),
    strict: bool = Query(False, description="Return 404 instead of the empty record"),
    services: LedgerServices = Depends(get_services),
) -> HerbRecord:
    if strict:
        return await services.herbs.require_record(record_id)
    return await services.herbs.get_record(record_id)
