"""Wiring of service components for the API and scripts."""

from dataclasses import dataclass

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herbtrace.config import INITIAL_AUTHORITY
from herbtrace.database import async_session
from herbtrace.events import EventBus
from herbtrace.services import (
    FarmerLedger,
    HerbRecordLedger,
    LabLedger,
    LocationValidator,
    ProcessingLedger,
    TraceabilityView,
    ZoneRegistry,
)
from herbtrace.services._ownership import require_identity


@dataclass
class LedgerServices:
    """Every component, sharing one session factory and one event bus."""

    session_factory: async_sessionmaker[AsyncSession]
    events: EventBus
    zones: ZoneRegistry
    validator: LocationValidator
    herbs: HerbRecordLedger
    farmers: FarmerLedger
    processing: ProcessingLedger
    lab: LabLedger
    trace: TraceabilityView

    async def initialize(self, authority: str = INITIAL_AUTHORITY) -> None:
        """Record the initial authority/owner of every ledger that has none."""
        await self.zones.initialize(authority)
        await self.farmers.initialize(authority)
        await self.processing.initialize(authority)
        await self.lab.initialize(authority)

    def ledger(self, name: str) -> FarmerLedger | ProcessingLedger | LabLedger | None:
        return {
            self.farmers.ledger_name: self.farmers,
            self.processing.ledger_name: self.processing,
            self.lab.ledger_name: self.lab,
        }.get(name)


def build_services(
    session_factory: async_sessionmaker[AsyncSession],
    events: EventBus | None = None,
) -> LedgerServices:
    events = events or EventBus()
    zones = ZoneRegistry(session_factory, events)
    validator = LocationValidator(zones)
    farmers = FarmerLedger(session_factory, events)
    processing = ProcessingLedger(session_factory, events, farmers)
    lab = LabLedger(session_factory, events)
    return LedgerServices(
        session_factory=session_factory,
        events=events,
        zones=zones,
        validator=validator,
        herbs=HerbRecordLedger(session_factory, validator, events),
        farmers=farmers,
        processing=processing,
        lab=lab,
        trace=TraceabilityView(session_factory, farmers, processing, lab),
    )


_services: LedgerServices | None = None


def get_services() -> LedgerServices:
    """FastAPI dependency returning the process-wide service bundle."""
    global _services
    if _services is None:
        _services = build_services(async_session)
    return _services


def get_caller(
    x_caller_identity: str | None = Header(None, description="Identity of the calling party"),
) -> str:
    """Caller identity from the X-Caller-Identity header."""
    return require_identity(x_caller_identity)
