"""Generic append-only keyed record store.

One logical store per name, all sharing the ``store_records`` table. Values
are JSON documents. Keys keep their insertion position for index-based
enumeration, and may be filed under ordered groups (e.g. batches per
farmer). Every method works inside the caller's session so a ledger can
combine several stores in one transaction.
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from herbtrace.exceptions import IndexOutOfBounds, NotFound
from herbtrace.models import StoreGroupMember, StoreRecord


class KeyedRecordStore:
    def __init__(self, name: str):
        self.name = name

    async def insert_if_absent(self, session: AsyncSession, key: str, value: dict[str, Any]) -> bool:
        """Insert value under key. Returns False, changing nothing, if key exists."""
        if await self.exists(session, key):
            return False
        session.add(
            StoreRecord(
                store=self.name,
                key=key,
                position=await self.count(session),
                value=value,
                created_at=datetime.now(UTC).replace(tzinfo=None),
            )
        )
        await session.flush()
        return True

    async def replace(self, session: AsyncSession, key: str, value: dict[str, Any]) -> None:
        """Overwrite the value of an existing key, keeping its position."""
        row = await self._row(session, key)
        if row is None:
            raise NotFound(f"{self.name}: key '{key}' not found")
        row.value = value
        await session.flush()

    async def get(self, session: AsyncSession, key: str) -> dict[str, Any]:
        row = await self._row(session, key)
        if row is None:
            raise NotFound(f"{self.name}: key '{key}' not found")
        return dict(row.value)

    async def exists(self, session: AsyncSession, key: str) -> bool:
        return await self._row(session, key) is not None

    async def count(self, session: AsyncSession) -> int:
        result = await session.execute(
            select(func.count()).select_from(StoreRecord).where(StoreRecord.store == self.name)
        )
        return result.scalar_one()

    async def key_at(self, session: AsyncSession, index: int) -> str:
        """Key inserted at position index (0-based)."""
        if index < 0 or index >= await self.count(session):
            raise IndexOutOfBounds(f"{self.name}: index {index} out of bounds")
        result = await session.execute(
            select(StoreRecord.key).where(
                StoreRecord.store == self.name,
                StoreRecord.position == index,
            )
        )
        return result.scalar_one()

    async def keys(self, session: AsyncSession, offset: int = 0, limit: int | None = None) -> list[str]:
        query = (
            select(StoreRecord.key)
            .where(StoreRecord.store == self.name)
            .order_by(StoreRecord.position)
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await session.execute(query)
        return list(result.scalars().all())

    async def append_to_group(self, session: AsyncSession, group_key: str, key: str) -> bool:
        """File key under group_key unless it is already there. Returns True if appended."""
        existing = await session.execute(
            select(StoreGroupMember.id).where(
                StoreGroupMember.store == self.name,
                StoreGroupMember.group_key == group_key,
                StoreGroupMember.key == key,
            )
        )
        if existing.first() is not None:
            return False
        session.add(StoreGroupMember(store=self.name, group_key=group_key, key=key))
        await session.flush()
        return True

    async def list_by_group(self, session: AsyncSession, group_key: str) -> list[str]:
        """Keys filed under group_key in insertion order."""
        result = await session.execute(
            select(StoreGroupMember.key)
            .where(
                StoreGroupMember.store == self.name,
                StoreGroupMember.group_key == group_key,
            )
            .order_by(StoreGroupMember.id)
        )
        return list(result.scalars().all())

    async def _row(self, session: AsyncSession, key: str) -> StoreRecord | None:
        result = await session.execute(
            select(StoreRecord).where(StoreRecord.store == self.name, StoreRecord.key == key)
        )
        return result.scalar_one_or_none()
