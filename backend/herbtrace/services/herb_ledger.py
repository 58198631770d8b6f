"""Herb record ledger: append-only store gated by location validation."""

import asyncio
import logging
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herbtrace.events import EventBus, HerbRecordAdded
from herbtrace.exceptions import EmptyHerbName, InvalidInput, LocationOutOfBounds, NotFound
from herbtrace.models import HerbRecord as HerbRecordRow
from herbtrace.schemas.geofence import HerbRecord
from herbtrace.services import _ownership
from herbtrace.services.location_validator import LocationValidator

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class HerbRecordLedger:
    """Stores herb submissions whose coordinates fall inside an active zone."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        validator: LocationValidator,
        events: EventBus,
    ):
        self._session_factory = session_factory
        self._validator = validator
        self._events = events
        self._lock = asyncio.Lock()

    async def submit_herb_record(
        self,
        caller: str,
        latitude: int,
        longitude: int,
        herb_name: str,
        scientific_name: str,
        quantity: int,
        image_hash: str,
    ) -> int:
        """Validate the location and append a new record. Returns its id.

        The matched zone id is only used for the gate; it is not stored.
        """
        submitted_by = _ownership.require_identity(caller)
        if not herb_name:
            raise EmptyHerbName("Herb name cannot be empty")
        if quantity < 0:
            raise InvalidInput("Quantity cannot be negative")

        async with self._lock:
            matched, zone_id = await self._validator.validate(latitude, longitude)
            if not matched:
                logger.warning(
                    f"Rejected {herb_name!r} from {submitted_by}: "
                    f"({latitude}, {longitude}) outside all active zones"
                )
                raise LocationOutOfBounds(
                    f"Location ({latitude}, {longitude}) is not inside any active zone"
                )

            async with self._session_factory() as session, session.begin():
                record_id = await _record_counter(session) + 1
                session.add(
                    HerbRecordRow(
                        id=record_id,
                        herb_name=herb_name,
                        scientific_name=scientific_name or "",
                        latitude=latitude,
                        longitude=longitude,
                        quantity=quantity,
                        submitted_by=submitted_by,
                        submitted_at=datetime.now(UTC).replace(tzinfo=None),
                        image_hash=image_hash or "",
                    )
                )

            logger.info(f"Herb record {record_id} '{herb_name}' accepted in zone {zone_id}")
            self._events.publish(
                HerbRecordAdded(
                    record_id=record_id,
                    herb_name=herb_name,
                    latitude=latitude,
                    longitude=longitude,
                    submitted_by=submitted_by,
                )
            )
            return record_id

    async def get_record(self, record_id: int) -> HerbRecord:
        """Record by id. Unknown ids yield the empty marker (id 0), not an error."""
        async with self._session_factory() as session:
            if record_id <= 0 or record_id > await _record_counter(session):
                return HerbRecord.empty()
            row = await session.get(HerbRecordRow, record_id)
        if row is None:
            return HerbRecord.empty()
        return HerbRecord.model_validate(row)

    async def require_record(self, record_id: int) -> HerbRecord:
        record = await self.get_record(record_id)
        if not record.exists:
            raise NotFound(f"Herb record {record_id} not found")
        return record

    async def list_records(
        self,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        submitted_by: str | None = None,
    ) -> list[HerbRecord]:
        query = select(HerbRecordRow).order_by(HerbRecordRow.id)
        if submitted_by:
            query = query.where(HerbRecordRow.submitted_by == submitted_by)
        query = query.offset(offset).limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return [HerbRecord.model_validate(r) for r in result.scalars().all()]

    async def record_count(self) -> int:
        async with self._session_factory() as session:
            return await _record_counter(session)


async def _record_counter(session: AsyncSession) -> int:
    result = await session.execute(select(func.max(HerbRecordRow.id)))
    return result.scalar_one_or_none() or 0
