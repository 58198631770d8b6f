"""Herb submission record model."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from herbtrace.database import Base


class HerbRecord(Base):
    """Herb submission accepted inside an active zone. Never mutated."""

    __tablename__ = "herb_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    herb_name: Mapped[str] = mapped_column(String(200), nullable=False)
    scientific_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    latitude: Mapped[int] = mapped_column(Integer, nullable=False)
    longitude: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    submitted_by: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    submitted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    image_hash: Mapped[str] = mapped_column(String(200), nullable=False, default="")
