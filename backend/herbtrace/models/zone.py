"""Geographic zone model."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from herbtrace.database import Base


class GeoZone(Base):
    """Axis-aligned bounding box in microdegrees (degrees x 1e6)."""

    __tablename__ = "geo_zones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    min_latitude: Mapped[int] = mapped_column(Integer, nullable=False)
    max_latitude: Mapped[int] = mapped_column(Integer, nullable=False)
    min_longitude: Mapped[int] = mapped_column(Integer, nullable=False)
    max_longitude: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
