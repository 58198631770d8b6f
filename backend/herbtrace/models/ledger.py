"""Ownership and generic keyed-record models shared by the ledgers."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from herbtrace.database import Base


class LedgerOwner(Base):
    """Current owner (authority) identity of one ledger."""

    __tablename__ = "ledger_owners"

    ledger: Mapped[str] = mapped_column(String(50), primary_key=True)
    owner: Mapped[str] = mapped_column(String(100), nullable=False)


class AuthorizedWriter(Base):
    """Identity allowed to write to a ledger besides its owner."""

    __tablename__ = "authorized_writers"

    ledger: Mapped[str] = mapped_column(String(50), primary_key=True)
    identity: Mapped[str] = mapped_column(String(100), primary_key=True)


class StoreRecord(Base):
    """One value in a named keyed record store."""

    __tablename__ = "store_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store: Mapped[str] = mapped_column(String(50), nullable=False)
    key: Mapped[str] = mapped_column(String(100), nullable=False)
    # Insertion position within the store, starting at 0
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        UniqueConstraint("store", "key", name="uq_store_key"),
        Index("ix_store_position", "store", "position"),
    )


class StoreGroupMember(Base):
    """Ordered membership of a key in a group (e.g. batches of a farmer)."""

    __tablename__ = "store_group_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store: Mapped[str] = mapped_column(String(50), nullable=False)
    group_key: Mapped[str] = mapped_column(String(100), nullable=False)
    key: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("store", "group_key", "key", name="uq_group_member"),
        Index("ix_group_lookup", "store", "group_key", "id"),
    )
