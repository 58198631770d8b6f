"""Service layer modules."""

from herbtrace.services.farmer_ledger import FarmerLedger
from herbtrace.services.geometry import (
    GeoBox,
    first_matching_zone,
    from_microdegrees,
    to_microdegrees,
)
from herbtrace.services.herb_ledger import HerbRecordLedger
from herbtrace.services.lab_ledger import LabLedger
from herbtrace.services.location_validator import LocationValidator, ValidationResult
from herbtrace.services.processing_ledger import ProcessingLedger
from herbtrace.services.record_store import KeyedRecordStore
from herbtrace.services.traceability import TraceabilityView
from herbtrace.services.zone_registry import ZoneRegistry

__all__ = [
    # Geofencing core
    "ZoneRegistry",
    "LocationValidator",
    "ValidationResult",
    "HerbRecordLedger",
    "GeoBox",
    "first_matching_zone",
    "to_microdegrees",
    "from_microdegrees",
    # Collaborator ledgers
    "KeyedRecordStore",
    "FarmerLedger",
    "ProcessingLedger",
    "LabLedger",
    "TraceabilityView",
]
