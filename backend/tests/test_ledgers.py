"""Tests for the farmer, processing and lab ledgers and the batch trace view."""

import pytest

from herbtrace.events import FarmerRegistered, ProcessingRecorded, WriterAuthorized
from herbtrace.exceptions import (
    AlreadyExists,
    IndexOutOfBounds,
    InvalidAddress,
    InvalidInput,
    NotFound,
    Unauthorized,
)

pytestmark = pytest.mark.asyncio

OWNER = "0xAuthority"
PROCESSOR = "0xProcessor"
OTHER_PROCESSOR = "0xOtherProcessor"
LAB = "0xLab"


@pytest.fixture
async def farmer(services):
    return await services.farmers.register_farmer(OWNER, "F-1", "Asha", "Dehradun", "asha@example.com")


@pytest.fixture
async def batch(services, farmer):
    await services.processing.authorize_writer(OWNER, PROCESSOR)
    return await services.processing.record_processing(
        PROCESSOR, "B-1", farmer.farmer_id, "Tulsi", "drying", 1000, 800
    )


class TestAccessControl:
    async def test_owner_is_initial_authority(self, services):
        assert await services.farmers.owner() == OWNER
        assert await services.processing.owner() == OWNER
        assert await services.lab.owner() == OWNER

    async def test_authorize_and_revoke_writer(self, services):
        assert await services.processing.authorize_writer(OWNER, PROCESSOR) is True
        assert await services.processing.authorize_writer(OWNER, PROCESSOR) is False
        assert await services.processing.is_authorized(PROCESSOR)
        assert (await services.processing.access()).writers == [PROCESSOR]

        assert await services.processing.revoke_writer(OWNER, PROCESSOR) is True
        assert not await services.processing.is_authorized(PROCESSOR)

    async def test_only_owner_authorizes(self, services):
        with pytest.raises(Unauthorized):
            await services.processing.authorize_writer(PROCESSOR, PROCESSOR)

    async def test_blank_writer_rejected(self, services):
        with pytest.raises(InvalidAddress):
            await services.lab.authorize_writer(OWNER, " ")

    async def test_authorization_is_per_ledger(self, services):
        await services.processing.authorize_writer(OWNER, PROCESSOR)
        assert not await services.lab.is_authorized(PROCESSOR)

    async def test_publishes_writer_authorized(self, services):
        await services.lab.authorize_writer(OWNER, LAB)
        event = services.events.history()[-1]
        assert isinstance(event, WriterAuthorized)
        assert (event.ledger, event.identity) == ("lab", LAB)

    async def test_transfer_ownership(self, services):
        await services.farmers.transfer_ownership(OWNER, "0xCooperative")
        assert await services.farmers.owner() == "0xCooperative"
        with pytest.raises(Unauthorized):
            await services.farmers.register_farmer(OWNER, "F-9", "Ravi")


class TestFarmerLedger:
    async def test_register_and_get(self, services, farmer):
        stored = await services.farmers.get_farmer("F-1")
        assert stored == farmer
        assert stored.registered_by == OWNER
        assert await services.farmers.farmer_count() == 1
        assert await services.farmers.farmer_at(0) == "F-1"
        with pytest.raises(IndexOutOfBounds):
            await services.farmers.farmer_at(1)

    async def test_duplicate_rejected(self, services, farmer):
        with pytest.raises(AlreadyExists):
            await services.farmers.register_farmer(OWNER, "F-1", "Someone else")

    async def test_unauthorized_registration(self, services):
        with pytest.raises(Unauthorized):
            await services.farmers.register_farmer("0xStranger", "F-2", "Ravi")
        assert await services.farmers.farmer_count() == 0

    async def test_empty_name_rejected(self, services):
        with pytest.raises(InvalidInput):
            await services.farmers.register_farmer(OWNER, "F-2", "")

    async def test_unknown_farmer(self, services):
        with pytest.raises(NotFound):
            await services.farmers.get_farmer("nobody")

    async def test_publishes_farmer_registered(self, services, farmer):
        event = services.events.history()[-1]
        assert isinstance(event, FarmerRegistered)
        assert event.farmer_id == "F-1"


class TestProcessingLedger:
    async def test_record_and_get(self, services, batch):
        stored = await services.processing.get_processing("B-1")
        assert stored.processor == PROCESSOR
        assert stored.output_quantity == 800
        assert stored.updated_at is None
        assert await services.processing.batches_for_farmer("F-1") == ["B-1"]

    async def test_batch_at_enumerates_in_recording_order(self, services, batch):
        await services.processing.record_processing(
            PROCESSOR, "B-2", "F-1", "Tulsi", "grinding", 800, 700
        )

        assert await services.processing.batch_at(0) == "B-1"
        assert await services.processing.batch_at(1) == "B-2"
        with pytest.raises(IndexOutOfBounds):
            await services.processing.batch_at(2)

    async def test_unknown_farmer_rejected(self, services):
        await services.processing.authorize_writer(OWNER, PROCESSOR)
        with pytest.raises(NotFound):
            await services.processing.record_processing(
                PROCESSOR, "B-1", "nobody", "Tulsi", "drying", 10, 8
            )
        assert await services.processing.processing_count() == 0

    async def test_unauthorized_processor_rejected(self, services, farmer):
        with pytest.raises(Unauthorized):
            await services.processing.record_processing(
                PROCESSOR, "B-1", "F-1", "Tulsi", "drying", 10, 8
            )

    async def test_duplicate_batch_rejected(self, services, batch):
        with pytest.raises(AlreadyExists):
            await services.processing.record_processing(
                PROCESSOR, "B-1", "F-1", "Tulsi", "grinding", 10, 8
            )
        assert await services.processing.batches_for_farmer("F-1") == ["B-1"]

    async def test_update_by_original_processor(self, services, batch):
        updated = await services.processing.update_processing(
            PROCESSOR, "B-1", "grinding", 800, 750, "second pass"
        )
        assert updated.process_type == "grinding"
        assert updated.updated_at is not None
        assert updated.recorded_at == batch.recorded_at
        # Update does not duplicate the farmer's batch list
        assert await services.processing.batches_for_farmer("F-1") == ["B-1"]

        event = services.events.history()[-1]
        assert isinstance(event, ProcessingRecorded)
        assert event.updated is True

    async def test_update_by_other_processor_rejected(self, services, batch):
        await services.processing.authorize_writer(OWNER, OTHER_PROCESSOR)
        with pytest.raises(Unauthorized):
            await services.processing.update_processing(OTHER_PROCESSOR, "B-1", "grinding", 1, 1)
        assert (await services.processing.get_processing("B-1")).process_type == "drying"

    async def test_update_by_owner_allowed(self, services, batch):
        updated = await services.processing.update_processing(OWNER, "B-1", "sieving", 800, 790)
        assert updated.process_type == "sieving"

    async def test_update_unknown_batch(self, services, batch):
        with pytest.raises(NotFound):
            await services.processing.update_processing(PROCESSOR, "B-404", "drying", 1, 1)


class TestLabAndTrace:
    async def _record(self, services, test_id, passed):
        return await services.lab.record_lab_result(
            LAB, test_id, "B-1", "Himalaya Labs", 8.5, 0.01, 0.2, passed, "bafyreport"
        )

    async def test_results_grouped_per_batch(self, services, batch):
        await services.lab.authorize_writer(OWNER, LAB)
        await self._record(services, "T-1", True)
        await self._record(services, "T-2", True)

        results = await services.lab.results_for_batch("B-1")
        assert [r.test_id for r in results] == ["T-1", "T-2"]
        assert results[0].lab == LAB
        assert await services.lab.result_count() == 2
        assert [await services.lab.result_at(i) for i in range(2)] == ["T-1", "T-2"]
        with pytest.raises(IndexOutOfBounds):
            await services.lab.result_at(2)

    async def test_duplicate_test_rejected(self, services, batch):
        await services.lab.authorize_writer(OWNER, LAB)
        await self._record(services, "T-1", True)
        with pytest.raises(AlreadyExists):
            await self._record(services, "T-1", False)

    async def test_trace_batch_all_passed(self, services, batch):
        await services.lab.authorize_writer(OWNER, LAB)
        await self._record(services, "T-1", True)

        trace = await services.trace.trace_batch("B-1")
        assert trace.processing.batch_id == "B-1"
        assert trace.farmer.name == "Asha"
        assert len(trace.lab_results) == 1
        assert trace.quality_passed is True

    async def test_trace_batch_with_failure(self, services, batch):
        await services.lab.authorize_writer(OWNER, LAB)
        await self._record(services, "T-1", True)
        await self._record(services, "T-2", False)

        assert (await services.trace.trace_batch("B-1")).quality_passed is False

    async def test_trace_batch_without_results_has_not_passed(self, services, batch):
        trace = await services.trace.trace_batch("B-1")
        assert trace.lab_results == []
        assert trace.quality_passed is False

    async def test_trace_unknown_batch(self, services):
        with pytest.raises(NotFound):
            await services.trace.trace_batch("B-404")
