"""SQLAlchemy models."""

from herbtrace.models.herb import HerbRecord
from herbtrace.models.ledger import AuthorizedWriter, LedgerOwner, StoreGroupMember, StoreRecord
from herbtrace.models.zone import GeoZone

__all__ = [
    "GeoZone",
    "HerbRecord",
    "LedgerOwner",
    "AuthorizedWriter",
    "StoreRecord",
    "StoreGroupMember",
]
