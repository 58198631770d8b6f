"""Zone registry: authority-gated set of geographic bounding boxes.

Zone ids are assigned sequentially from 1 and never reused; zones are never
deleted, only deactivated. Every mutation runs under the registry lock in a
single transaction and publishes its notification after commit.
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herbtrace.events import AuthorityTransferred, EventBus, ZoneRegistered, ZoneUpdated
from herbtrace.exceptions import InvalidZoneId, NotFound
from herbtrace.models import GeoZone
from herbtrace.schemas.geofence import Zone
from herbtrace.services import _ownership
from herbtrace.services.geometry import GeoBox, check_box

logger = logging.getLogger(__name__)

REGISTRY_LEDGER = "geofencing"


class ZoneRegistry:
    """Source of truth for geo zones. Only the authority may mutate."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], events: EventBus):
        self._session_factory = session_factory
        self._events = events
        self._lock = asyncio.Lock()

    async def initialize(self, authority: str) -> None:
        """Install the initial authority unless one is already recorded."""
        async with self._lock, self._session_factory() as session, session.begin():
            if await _ownership.ensure_owner(session, REGISTRY_LEDGER, authority):
                logger.info(f"Zone registry authority initialized to {authority}")

    async def authority(self) -> str:
        async with self._session_factory() as session:
            return await _ownership.get_owner(session, REGISTRY_LEDGER)

    async def register_zone(
        self,
        caller: str,
        name: str,
        min_latitude: int,
        max_latitude: int,
        min_longitude: int,
        max_longitude: int,
    ) -> int:
        """Store a new active zone and return its id."""
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_owner(session, REGISTRY_LEDGER, caller)
                check_box(min_latitude, max_latitude, min_longitude, max_longitude)

                zone_id = await _zone_counter(session) + 1
                session.add(
                    GeoZone(
                        id=zone_id,
                        name=name,
                        min_latitude=min_latitude,
                        max_latitude=max_latitude,
                        min_longitude=min_longitude,
                        max_longitude=max_longitude,
                        is_active=True,
                    )
                )

            logger.info(f"Registered zone {zone_id} '{name}'")
            self._events.publish(
                ZoneRegistered(
                    zone_id=zone_id,
                    min_latitude=min_latitude,
                    max_latitude=max_latitude,
                    min_longitude=min_longitude,
                    max_longitude=max_longitude,
                )
            )
            return zone_id

    async def set_zone_active(self, caller: str, zone_id: int, is_active: bool) -> None:
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_owner(session, REGISTRY_LEDGER, caller)
                zone = await _load_zone(session, zone_id)
                zone.is_active = is_active

            logger.info(f"Zone {zone_id} active={is_active}")
            self._events.publish(ZoneUpdated(zone_id=zone_id, is_active=is_active))

    async def update_zone_coordinates(
        self,
        caller: str,
        zone_id: int,
        min_latitude: int,
        max_latitude: int,
        min_longitude: int,
        max_longitude: int,
    ) -> None:
        """Replace a zone's bounding box in place. Leaves is_active untouched."""
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_owner(session, REGISTRY_LEDGER, caller)
                zone = await _load_zone(session, zone_id)
                check_box(min_latitude, max_latitude, min_longitude, max_longitude)

                zone.min_latitude = min_latitude
                zone.max_latitude = max_latitude
                zone.min_longitude = min_longitude
                zone.max_longitude = max_longitude
                is_active = zone.is_active

            logger.info(f"Updated coordinates of zone {zone_id}")
            self._events.publish(ZoneUpdated(zone_id=zone_id, is_active=is_active))

    async def transfer_authority(self, caller: str, new_authority: str) -> None:
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                old_authority = await _ownership.require_owner(session, REGISTRY_LEDGER, caller)
                new_authority = _ownership.require_identity(new_authority)
                await _ownership.set_owner(session, REGISTRY_LEDGER, new_authority)

            logger.info(f"Zone registry authority transferred {old_authority} -> {new_authority}")
            self._events.publish(
                AuthorityTransferred(
                    ledger=REGISTRY_LEDGER,
                    old_authority=old_authority,
                    new_authority=new_authority,
                )
            )

    async def get_zone(self, zone_id: int) -> Zone:
        """Zone by id. Unknown ids yield the empty marker (id 0), not an error."""
        async with self._session_factory() as session:
            if zone_id <= 0 or zone_id > await _zone_counter(session):
                return Zone.empty()
            zone = await session.get(GeoZone, zone_id)
        if zone is None:
            return Zone.empty()
        return Zone.model_validate(zone)

    async def require_zone(self, zone_id: int) -> Zone:
        """Zone by id, raising NotFound for unknown ids."""
        zone = await self.get_zone(zone_id)
        if not zone.exists:
            raise NotFound(f"Zone {zone_id} not found")
        return zone

    async def list_zones(self, active_only: bool = False) -> list[Zone]:
        query = select(GeoZone).order_by(GeoZone.id)
        if active_only:
            query = query.where(GeoZone.is_active.is_(True))
        async with self._session_factory() as session:
            result = await session.execute(query)
            return [Zone.model_validate(z) for z in result.scalars().all()]

    async def zone_count(self) -> int:
        async with self._session_factory() as session:
            return await _zone_counter(session)

    async def snapshot(self) -> list[GeoBox]:
        """Immutable view of every zone, ascending id, for validation."""
        async with self._session_factory() as session:
            result = await session.execute(select(GeoZone).order_by(GeoZone.id))
            return [
                GeoBox(
                    zone_id=z.id,
                    min_latitude=z.min_latitude,
                    max_latitude=z.max_latitude,
                    min_longitude=z.min_longitude,
                    max_longitude=z.max_longitude,
                    is_active=z.is_active,
                )
                for z in result.scalars().all()
            ]


async def _zone_counter(session: AsyncSession) -> int:
    # Zones are never deleted, so the highest id is the counter
    result = await session.execute(select(func.max(GeoZone.id)))
    return result.scalar_one_or_none() or 0


async def _load_zone(session: AsyncSession, zone_id: int) -> GeoZone:
    if zone_id <= 0 or zone_id > await _zone_counter(session):
        raise InvalidZoneId(f"Zone id {zone_id} is out of range")
    zone = await session.get(GeoZone, zone_id)
    if zone is None:
        raise InvalidZoneId(f"Zone id {zone_id} is out of range")
    return zone
