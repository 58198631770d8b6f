"""Lab test results, grouped per processed batch."""

import logging
from datetime import UTC, datetime

from herbtrace.events import LabResultRecorded
from herbtrace.exceptions import AlreadyExists, InvalidInput
from herbtrace.schemas.ledgers import KeyPage, LabResult
from herbtrace.services import _ownership
from herbtrace.services.owned_ledger import OwnedLedger
from herbtrace.services.record_store import KeyedRecordStore

logger = logging.getLogger(__name__)


class LabLedger(OwnedLedger):
    ledger_name = "lab"

    def __init__(self, session_factory, events):
        super().__init__(session_factory, events)
        self.store = KeyedRecordStore("lab")

    async def record_lab_result(
        self,
        caller: str,
        test_id: str,
        batch_id: str,
        lab_name: str,
        moisture_percent: float,
        pesticide_ppm: float,
        heavy_metals_ppm: float,
        passed: bool,
        report_hash: str = "",
    ) -> LabResult:
        if not test_id or not batch_id:
            raise InvalidInput("Test id and batch id are required")

        async with self._lock:
            async with self._session_factory() as session, session.begin():
                lab = await _ownership.require_writer(session, self.ledger_name, caller)
                result = LabResult(
                    test_id=test_id,
                    batch_id=batch_id,
                    lab_name=lab_name,
                    moisture_percent=moisture_percent,
                    pesticide_ppm=pesticide_ppm,
                    heavy_metals_ppm=heavy_metals_ppm,
                    passed=passed,
                    report_hash=report_hash,
                    lab=lab,
                    tested_at=datetime.now(UTC).replace(tzinfo=None),
                )
                if not await self.store.insert_if_absent(session, test_id, result.model_dump(mode="json")):
                    raise AlreadyExists(f"Lab test '{test_id}' already recorded")
                await self.store.append_to_group(session, batch_id, test_id)

            logger.info(f"Lab result {test_id} for batch {batch_id}: passed={passed}")
            self._events.publish(
                LabResultRecorded(test_id=test_id, batch_id=batch_id, passed=passed, lab=lab)
            )
            return result

    async def get_lab_result(self, test_id: str) -> LabResult:
        async with self._session_factory() as session:
            return LabResult.model_validate(await self.store.get(session, test_id))

    async def results_for_batch(self, batch_id: str) -> list[LabResult]:
        async with self._session_factory() as session:
            test_ids = await self.store.list_by_group(session, batch_id)
            return [LabResult.model_validate(await self.store.get(session, t)) for t in test_ids]

    async def result_count(self) -> int:
        async with self._session_factory() as session:
            return await self.store.count(session)

    async def result_at(self, index: int) -> str:
        async with self._session_factory() as session:
            return await self.store.key_at(session, index)

    async def list_results(self, offset: int = 0, limit: int = 100) -> KeyPage:
        async with self._session_factory() as session:
            return KeyPage(
                total_count=await self.store.count(session),
                keys=await self.store.keys(session, offset, limit),
            )
