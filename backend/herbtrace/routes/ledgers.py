"""Farmer, processing and lab ledger API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from herbtrace.dependencies import LedgerServices, get_caller, get_services
from herbtrace.schemas.ledgers import (
    BatchTrace,
    Farmer,
    FarmerCreate,
    KeyPage,
    LabResult,
    LabResultCreate,
    LedgerAccess,
    OwnershipTransfer,
    ProcessingCreate,
    ProcessingData,
    ProcessingUpdate,
    WriterRequest,
)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

router = APIRouter(prefix="/api", tags=["ledgers"])


# --- Access control ---


def _ledger_or_404(services: LedgerServices, ledger: str):
    target = services.ledger(ledger)
    if target is None:
        raise HTTPException(status_code=404, detail=f"Unknown ledger '{ledger}'")
    return target


@router.get("/ledgers/{ledger}/access", response_model=LedgerAccess)
async def get_ledger_access(
    ledger: str,
    services: LedgerServices = Depends(get_services),
) -> LedgerAccess:
    return await _ledger_or_404(services, ledger).access()


@router.post("/ledgers/{ledger}/writers", response_model=LedgerAccess)
async def authorize_writer(
    ledger: str,
    body: WriterRequest,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> LedgerAccess:
    """Authorize an identity to write to the ledger (owner only)."""
    target = _ledger_or_404(services, ledger)
    await target.authorize_writer(caller, body.identity)
    return await target.access()


@router.delete("/ledgers/{ledger}/writers/{identity}", response_model=LedgerAccess)
async def revoke_writer(
    ledger: str,
    identity: str,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> LedgerAccess:
    target = _ledger_or_404(services, ledger)
    await target.revoke_writer(caller, identity)
    return await target.access()


@router.post("/ledgers/{ledger}/owner", response_model=LedgerAccess)
async def transfer_ownership(
    ledger: str,
    body: OwnershipTransfer,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> LedgerAccess:
    target = _ledger_or_404(services, ledger)
    await target.transfer_ownership(caller, body.new_owner)
    return await target.access()


# --- Farmers ---


@router.post("/farmers", response_model=Farmer, status_code=201)
async def register_farmer(
    body: FarmerCreate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> Farmer:
    return await services.farmers.register_farmer(
        caller, body.farmer_id, body.name, body.location, body.contact
    )


@router.get("/farmers", response_model=KeyPage)
async def list_farmers(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    services: LedgerServices = Depends(get_services),
) -> KeyPage:
    return await services.farmers.list_farmers(offset, limit)


@router.get("/farmers/{farmer_id}", response_model=Farmer)
async def get_farmer(farmer_id: str, services: LedgerServices = Depends(get_services)) -> Farmer:
    return await services.farmers.get_farmer(farmer_id)


@router.get("/farmers/{farmer_id}/batches", response_model=list[str])
async def list_farmer_batches(
    farmer_id: str,
    services: LedgerServices = Depends(get_services),
) -> list[str]:
    """Batch ids processed for a farmer, in recording order."""
    return await services.processing.batches_for_farmer(farmer_id)


# --- Processing ---


@router.post("/processing", response_model=ProcessingData, status_code=201)
async def record_processing(
    body: ProcessingCreate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> ProcessingData:
    return await services.processing.record_processing(
        caller,
        body.batch_id,
        body.farmer_id,
        body.herb_name,
        body.process_type,
        body.input_quantity,
        body.output_quantity,
        body.notes,
    )


@router.get("/processing", response_model=KeyPage)
async def list_processing(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    services: LedgerServices = Depends(get_services),
) -> KeyPage:
    return await services.processing.list_batches(offset, limit)


@router.get("/processing/{batch_id}", response_model=ProcessingData)
async def get_processing(
    batch_id: str,
    services: LedgerServices = Depends(get_services),
) -> ProcessingData:
    return await services.processing.get_processing(batch_id)


@router.put("/processing/{batch_id}", response_model=ProcessingData)
async def update_processing(
    batch_id: str,
    body: ProcessingUpdate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> ProcessingData:
    return await services.processing.update_processing(
        caller,
        batch_id,
        body.process_type,
        body.input_quantity,
        body.output_quantity,
        body.notes,
    )


# --- Lab results ---


@router.post("/lab-results", response_model=LabResult, status_code=201)
async def record_lab_result(
    body: LabResultCreate,
    caller: str = Depends(get_caller),
    services: LedgerServices = Depends(get_services),
) -> LabResult:
    return await services.lab.record_lab_result(
        caller,
        body.test_id,
        body.batch_id,
        body.lab_name,
        body.moisture_percent,
        body.pesticide_ppm,
        body.heavy_metals_ppm,
        body.passed,
        body.report_hash,
    )


@router.get("/lab-results", response_model=KeyPage)
async def list_lab_results(
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    services: LedgerServices = Depends(get_services),
) -> KeyPage:
    return await services.lab.list_results(offset, limit)


@router.get("/lab-results/{test_id}", response_model=LabResult)
async def get_lab_result(test_id: str, services: LedgerServices = Depends(get_services)) -> LabResult:
    return await services.lab.get_lab_result(test_id)


# --- Traceability ---


@router.get("/trace/{batch_id}", response_model=BatchTrace)
async def trace_batch(batch_id: str, services: LedgerServices = Depends(get_services)) -> BatchTrace:
    """Processing data, farmer and lab results of a batch in one view."""
    return await services.trace.trace_batch(batch_id)
