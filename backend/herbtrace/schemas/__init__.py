"""Pydantic schemas for API request/response models."""

from herbtrace.schemas.events import LedgerEventOut, LedgerEventsResponse
from herbtrace.schemas.geofence import (
    AuthorityResponse,
    AuthorityTransfer,
    HerbRecord,
    HerbRecordCreate,
    HerbRecordCreated,
    LocationValidation,
    RecordCount,
    Zone,
    ZoneActiveUpdate,
    ZoneCoordinatesUpdate,
    ZoneCount,
    ZoneCreate,
    ZoneCreated,
)
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

__all__ = [
    # Geofence schemas
    "Zone",
    "ZoneCreate",
    "ZoneCreated",
    "ZoneCount",
    "ZoneActiveUpdate",
    "ZoneCoordinatesUpdate",
    "AuthorityResponse",
    "AuthorityTransfer",
    "LocationValidation",
    "HerbRecord",
    "HerbRecordCreate",
    "HerbRecordCreated",
    "RecordCount",
    # Ledger schemas
    "Farmer",
    "FarmerCreate",
    "ProcessingCreate",
    "ProcessingUpdate",
    "ProcessingData",
    "LabResult",
    "LabResultCreate",
    "BatchTrace",
    "KeyPage",
    "LedgerAccess",
    "OwnershipTransfer",
    "WriterRequest",
    # Event schemas
    "LedgerEventOut",
    "LedgerEventsResponse",
]
