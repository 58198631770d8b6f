"""Read-only view joining processing, farmer and lab ledgers per batch."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herbtrace.schemas.ledgers import BatchTrace, Farmer, LabResult, ProcessingData
from herbtrace.services.farmer_ledger import FarmerLedger
from herbtrace.services.lab_ledger import LabLedger
from herbtrace.services.processing_ledger import ProcessingLedger


class TraceabilityView:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        farmers: FarmerLedger,
        processing: ProcessingLedger,
        lab: LabLedger,
    ):
        self._session_factory = session_factory
        self._farmers = farmers
        self._processing = processing
        self._lab = lab

    async def trace_batch(self, batch_id: str) -> BatchTrace:
        """Full provenance of a batch. Raises NotFound for unknown batches.

        quality_passed requires at least one lab result and all of them passing.
        """
        async with self._session_factory() as session:
            processing = ProcessingData.model_validate(
                await self._processing.store.get(session, batch_id)
            )

            farmer = None
            if await self._farmers.store.exists(session, processing.farmer_id):
                farmer = Farmer.model_validate(
                    await self._farmers.store.get(session, processing.farmer_id)
                )

            lab_results = [
                LabResult.model_validate(await self._lab.store.get(session, test_id))
                for test_id in await self._lab.store.list_by_group(session, batch_id)
            ]

        return BatchTrace(
            batch_id=batch_id,
            processing=processing,
            farmer=farmer,
            lab_results=lab_results,
            quality_passed=bool(lab_results) and all(r.passed for r in lab_results),
        )
