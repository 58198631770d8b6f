"""Pydantic schemas for the farmer, processing and lab ledgers."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# --- Access Schemas ---


class WriterRequest(BaseModel):
    identity: str


class OwnershipTransfer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_owner: str = Field(alias="newOwner")


class LedgerAccess(BaseModel):
    """Owner and authorized writers of one ledger."""

    ledger: str
    owner: str
    writers: list[str]


class KeyPage(BaseModel):
    """A page of keys in insertion order."""

    total_count: int = Field(serialization_alias="totalCount")
    keys: list[str]


# --- Farmer Schemas ---


class FarmerCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    farmer_id: str = Field(alias="farmerId", min_length=1)
    name: str
    location: str = ""
    contact: str = ""


class Farmer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    farmer_id: str = Field(serialization_alias="farmerId")
    name: str
    location: str
    contact: str
    registered_by: str = Field(serialization_alias="registeredBy")
    registered_at: datetime = Field(serialization_alias="registeredAt")


# --- Processing Schemas ---


class ProcessingCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    batch_id: str = Field(alias="batchId", min_length=1)
    farmer_id: str = Field(alias="farmerId")
    herb_name: str = Field(alias="herbName")
    process_type: str = Field(alias="processType")  # drying, grinding, extraction...
    input_quantity: int = Field(alias="inputQuantity", ge=0)
    output_quantity: int = Field(alias="outputQuantity", ge=0)
    notes: str = ""


class ProcessingUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    process_type: str = Field(alias="processType")
    input_quantity: int = Field(alias="inputQuantity", ge=0)
    output_quantity: int = Field(alias="outputQuantity", ge=0)
    notes: str = ""


class ProcessingData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    batch_id: str = Field(serialization_alias="batchId")
    farmer_id: str = Field(serialization_alias="farmerId")
    herb_name: str = Field(serialization_alias="herbName")
    process_type: str = Field(serialization_alias="processType")
    input_quantity: int = Field(serialization_alias="inputQuantity")
    output_quantity: int = Field(serialization_alias="outputQuantity")
    notes: str
    processor: str
    recorded_at: datetime = Field(serialization_alias="recordedAt")
    updated_at: datetime | None = Field(default=None, serialization_alias="updatedAt")


# --- Lab Schemas ---


class LabResultCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_id: str = Field(alias="testId", min_length=1)
    batch_id: str = Field(alias="batchId")
    lab_name: str = Field(alias="labName")
    moisture_percent: float = Field(alias="moisturePercent", ge=0, le=100)
    pesticide_ppm: float = Field(alias="pesticidePpm", ge=0)
    heavy_metals_ppm: float = Field(alias="heavyMetalsPpm", ge=0)
    passed: bool
    report_hash: str = Field("", alias="reportHash")


class LabResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    test_id: str = Field(serialization_alias="testId")
    batch_id: str = Field(serialization_alias="batchId")
    lab_name: str = Field(serialization_alias="labName")
    moisture_percent: float = Field(serialization_alias="moisturePercent")
    pesticide_ppm: float = Field(serialization_alias="pesticidePpm")
    heavy_metals_ppm: float = Field(serialization_alias="heavyMetalsPpm")
    passed: bool
    report_hash: str = Field(serialization_alias="reportHash")
    lab: str
    tested_at: datetime = Field(serialization_alias="testedAt")


# --- Traceability Schemas ---


class BatchTrace(BaseModel):
    """Processing data of a batch joined with its farmer and lab results."""

    model_config = ConfigDict(populate_by_name=True)

    batch_id: str = Field(serialization_alias="batchId")
    processing: ProcessingData
    farmer: Farmer | None
    lab_results: list[LabResult] = Field(serialization_alias="labResults")
    quality_passed: bool = Field(serialization_alias="qualityPassed")
