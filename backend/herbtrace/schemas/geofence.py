"""Pydantic schemas for zones, location validation and herb records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Microdegree bounds of valid WGS84 coordinates
MAX_LATITUDE = 90_000_000
MAX_LONGITUDE = 180_000_000

# Largest id or quantity the SQLite INTEGER column can hold
MAX_INTEGER = 2**63 - 1

# --- Zone Schemas ---


class ZoneCreate(BaseModel):
    """Request to register a zone. Coordinates in microdegrees."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    min_latitude: int = Field(alias="minLatitude", ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    max_latitude: int = Field(alias="maxLatitude", ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    min_longitude: int = Field(alias="minLongitude", ge=-MAX_LONGITUDE, le=MAX_LONGITUDE)
    max_longitude: int = Field(alias="maxLongitude", ge=-MAX_LONGITUDE, le=MAX_LONGITUDE)


class ZoneCoordinatesUpdate(BaseModel):
    """Replacement bounding box for an existing zone."""

    model_config = ConfigDict(populate_by_name=True)

    min_latitude: int = Field(alias="minLatitude", ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    max_latitude: int = Field(alias="maxLatitude", ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    min_longitude: int = Field(alias="minLongitude", ge=-MAX_LONGITUDE, le=MAX_LONGITUDE)
    max_longitude: int = Field(alias="maxLongitude", ge=-MAX_LONGITUDE, le=MAX_LONGITUDE)


class ZoneActiveUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(alias="isActive")


class Zone(BaseModel):
    """A registered zone, or the empty marker (id 0) for unknown ids."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    min_latitude: int = Field(serialization_alias="minLatitude")
    max_latitude: int = Field(serialization_alias="maxLatitude")
    min_longitude: int = Field(serialization_alias="minLongitude")
    max_longitude: int = Field(serialization_alias="maxLongitude")
    is_active: bool = Field(serialization_alias="isActive")

    @computed_field
    @property
    def exists(self) -> bool:
        return self.id != 0

    @classmethod
    def empty(cls) -> "Zone":
        return cls(
            id=0,
            name="",
            min_latitude=0,
            max_latitude=0,
            min_longitude=0,
            max_longitude=0,
            is_active=False,
        )


class ZoneCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zone_id: int = Field(serialization_alias="zoneId")


class ZoneCount(BaseModel):
    count: int


# --- Authority Schemas ---


class AuthorityTransfer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_authority: str = Field(alias="newAuthority")


class AuthorityResponse(BaseModel):
    authority: str


# --- Validation Schemas ---


class LocationValidation(BaseModel):
    """Result of a point-in-zone check."""

    model_config = ConfigDict(populate_by_name=True)

    matched: bool
    zone_id: int = Field(serialization_alias="zoneId")


# --- Herb Record Schemas ---


class HerbRecordCreate(BaseModel):
    """Herb submission. Coordinates in microdegrees."""

    model_config = ConfigDict(populate_by_name=True)

    latitude: int = Field(ge=-MAX_LATITUDE, le=MAX_LATITUDE)
    longitude: int = Field(ge=-MAX_LONGITUDE, le=MAX_LONGITUDE)
    herb_name: str = Field(alias="herbName")
    scientific_name: str = Field("", alias="scientificName")
    quantity: int = Field(ge=0, le=MAX_INTEGER)
    image_hash: str = Field("", alias="imageHash")


class HerbRecord(BaseModel):
    """A stored herb record, or the empty marker (id 0) for unknown ids."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    herb_name: str = Field(serialization_alias="herbName")
    scientific_name: str = Field(serialization_alias="scientificName")
    latitude: int
    longitude: int
    quantity: int
    submitted_by: str = Field(serialization_alias="submittedBy")
    submitted_at: datetime | None = Field(serialization_alias="submittedAt")
    image_hash: str = Field(serialization_alias="imageHash")

    @computed_field
    @property
    def exists(self) -> bool:
        return self.id != 0

    @classmethod
    def empty(cls) -> "HerbRecord":
        return cls(
            id=0,
            herb_name="",
            scientific_name="",
            latitude=0,
            longitude=0,
            quantity=0,
            submitted_by="",
            submitted_at=None,
            image_hash="",
        )


class HerbRecordCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_id: int = Field(serialization_alias="recordId")


class RecordCount(BaseModel):
    count: int
