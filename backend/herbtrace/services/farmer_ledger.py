"""Farmer registration ledger."""

import logging
from datetime import UTC, datetime

from herbtrace.events import FarmerRegistered
from herbtrace.exceptions import AlreadyExists, InvalidInput
from herbtrace.schemas.ledgers import Farmer, KeyPage
from herbtrace.services import _ownership
from herbtrace.services.owned_ledger import OwnedLedger
from herbtrace.services.record_store import KeyedRecordStore

logger = logging.getLogger(__name__)


class FarmerLedger(OwnedLedger):
    ledger_name = "farmers"

    def __init__(self, session_factory, events):
        super().__init__(session_factory, events)
        self.store = KeyedRecordStore("farmers")

    async def register_farmer(
        self,
        caller: str,
        farmer_id: str,
        name: str,
        location: str = "",
        contact: str = "",
    ) -> Farmer:
        if not farmer_id or not name:
            raise InvalidInput("Farmer id and name are required")

        async with self._lock:
            async with self._session_factory() as session, session.begin():
                registered_by = await _ownership.require_writer(session, self.ledger_name, caller)
                farmer = Farmer(
                    farmer_id=farmer_id,
                    name=name,
                    location=location,
                    contact=contact,
                    registered_by=registered_by,
                    registered_at=datetime.now(UTC).replace(tzinfo=None),
                )
                if not await self.store.insert_if_absent(
                    session, farmer_id, farmer.model_dump(mode="json")
                ):
                    raise AlreadyExists(f"Farmer '{farmer_id}' already registered")

            logger.info(f"Registered farmer {farmer_id}")
            self._events.publish(
                FarmerRegistered(farmer_id=farmer_id, farmer_name=name, registered_by=registered_by)
            )
            return farmer

    async def get_farmer(self, farmer_id: str) -> Farmer:
        async with self._session_factory() as session:
            return Farmer.model_validate(await self.store.get(session, farmer_id))

    async def farmer_count(self) -> int:
        async with self._session_factory() as session:
            return await self.store.count(session)

    async def farmer_at(self, index: int) -> str:
        async with self._session_factory() as session:
            return await self.store.key_at(session, index)

    async def list_farmers(self, offset: int = 0, limit: int = 100) -> KeyPage:
        async with self._session_factory() as session:
            return KeyPage(
                total_count=await self.store.count(session),
                keys=await self.store.keys(session, offset, limit),
            )
