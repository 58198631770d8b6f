"""Herb processing ledger: batches recorded by authorized processors."""

import logging
from datetime import UTC, datetime

from herbtrace.events import ProcessingRecorded
from herbtrace.exceptions import AlreadyExists, InvalidInput, NotFound, Unauthorized
from herbtrace.schemas.ledgers import KeyPage, ProcessingData
from herbtrace.services import _ownership
from herbtrace.services.farmer_ledger import FarmerLedger
from herbtrace.services.owned_ledger import OwnedLedger
from herbtrace.services.record_store import KeyedRecordStore

logger = logging.getLogger(__name__)


class ProcessingLedger(OwnedLedger):
    """Processing data keyed by batch id, grouped per farmer."""

    ledger_name = "processing"

    def __init__(self, session_factory, events, farmers: FarmerLedger):
        super().__init__(session_factory, events)
        self.store = KeyedRecordStore("processing")
        self._farmers = farmers

    async def record_processing(
        self,
        caller: str,
        batch_id: str,
        farmer_id: str,
        herb_name: str,
        process_type: str,
        input_quantity: int,
        output_quantity: int,
        notes: str = "",
    ) -> ProcessingData:
        if not batch_id or not herb_name or not process_type:
            raise InvalidInput("Batch id, herb name and process type are required")

        async with self._lock:
            async with self._session_factory() as session, session.begin():
                processor = await _ownership.require_writer(session, self.ledger_name, caller)
                if not await self._farmers.store.exists(session, farmer_id):
                    raise NotFound(f"Farmer '{farmer_id}' not found")

                data = ProcessingData(
                    batch_id=batch_id,
                    farmer_id=farmer_id,
                    herb_name=herb_name,
                    process_type=process_type,
                    input_quantity=input_quantity,
                    output_quantity=output_quantity,
                    notes=notes,
                    processor=processor,
                    recorded_at=datetime.now(UTC).replace(tzinfo=None),
                )
                if not await self.store.insert_if_absent(session, batch_id, data.model_dump(mode="json")):
                    raise AlreadyExists(f"Batch '{batch_id}' already recorded")
                await self.store.append_to_group(session, farmer_id, batch_id)

            logger.info(f"Recorded processing for batch {batch_id} by {processor}")
            self._events.publish(
                ProcessingRecorded(batch_id=batch_id, farmer_id=farmer_id, processor=processor)
            )
            return data

    async def update_processing(
        self,
        caller: str,
        batch_id: str,
        process_type: str,
        input_quantity: int,
        output_quantity: int,
        notes: str = "",
    ) -> ProcessingData:
        """Amend a batch. Only its original processor or the owner may do so."""
        if not process_type:
            raise InvalidInput("Process type is required")

        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_writer(session, self.ledger_name, caller)
                current = ProcessingData.model_validate(await self.store.get(session, batch_id))
                owner = await _ownership.get_owner(session, self.ledger_name)
                if caller.strip() not in (current.processor, owner):
                    raise Unauthorized(f"Only {current.processor} or the owner may update {batch_id}")

                data = current.model_copy(
                    update={
                        "process_type": process_type,
                        "input_quantity": input_quantity,
                        "output_quantity": output_quantity,
                        "notes": notes,
                        "updated_at": datetime.now(UTC).replace(tzinfo=None),
                    }
                )
                await self.store.replace(session, batch_id, data.model_dump(mode="json"))
                await self.store.append_to_group(session, data.farmer_id, batch_id)

            logger.info(f"Updated processing for batch {batch_id}")
            self._events.publish(
                ProcessingRecorded(
                    batch_id=batch_id,
                    farmer_id=data.farmer_id,
                    processor=caller.strip(),
                    updated=True,
                )
            )
            return data

    async def get_processing(self, batch_id: str) -> ProcessingData:
        async with self._session_factory() as session:
            return ProcessingData.model_validate(await self.store.get(session, batch_id))

    async def batches_for_farmer(self, farmer_id: str) -> list[str]:
        async with self._session_factory() as session:
            return await self.store.list_by_group(session, farmer_id)

    async def processing_count(self) -> int:
        async with self._session_factory() as session:
            return await self.store.count(session)

    async def batch_at(self, index: int) -> str:
        async with self._session_factory() as session:
            return await self.store.key_at(session, index)

    async def list_batches(self, offset: int = 0, limit: int = 100) -> KeyPage:
        async with self._session_factory() as session:
            return KeyPage(
                total_count=await self.store.count(session),
                keys=await self.store.keys(session, offset, limit),
            )
