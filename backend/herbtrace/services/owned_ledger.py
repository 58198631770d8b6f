"""Base for ledgers written by an owner and the writers it authorizes."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herbtrace.events import AuthorityTransferred, EventBus, WriterAuthorized, WriterRevoked
from herbtrace.schemas.ledgers import LedgerAccess
from herbtrace.services import _ownership

logger = logging.getLogger(__name__)


class OwnedLedger:
    """Owner-gated access control over one named ledger.

    Subclasses set ``ledger_name`` and wrap their writes in ``self._lock``
    plus a single transaction, the same way the zone registry does.
    """

    ledger_name: str = ""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], events: EventBus):
        self._session_factory = session_factory
        self._events = events
        self._lock = asyncio.Lock()

    async def initialize(self, owner: str) -> None:
        async with self._lock, self._session_factory() as session, session.begin():
            if await _ownership.ensure_owner(session, self.ledger_name, owner):
                logger.info(f"{self.ledger_name} owner initialized to {owner}")

    async def owner(self) -> str:
        async with self._session_factory() as session:
            return await _ownership.get_owner(session, self.ledger_name)

    async def access(self) -> LedgerAccess:
        async with self._session_factory() as session:
            return LedgerAccess(
                ledger=self.ledger_name,
                owner=await _ownership.get_owner(session, self.ledger_name),
                writers=await _ownership.list_writers(session, self.ledger_name),
            )

    async def is_authorized(self, identity: str) -> bool:
        async with self._session_factory() as session:
            return await _ownership.is_writer(session, self.ledger_name, identity)

    async def authorize_writer(self, caller: str, identity: str) -> bool:
        """Allow identity to write. Returns False if it already could."""
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_owner(session, self.ledger_name, caller)
                identity = _ownership.require_identity(identity)
                added = await _ownership.add_writer(session, self.ledger_name, identity)

            if added:
                logger.info(f"{self.ledger_name}: authorized {identity}")
                self._events.publish(WriterAuthorized(ledger=self.ledger_name, identity=identity))
            return added

    async def revoke_writer(self, caller: str, identity: str) -> bool:
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                await _ownership.require_owner(session, self.ledger_name, caller)
                identity = _ownership.require_identity(identity)
                removed = await _ownership.remove_writer(session, self.ledger_name, identity)

            if removed:
                logger.info(f"{self.ledger_name}: revoked {identity}")
                self._events.publish(WriterRevoked(ledger=self.ledger_name, identity=identity))
            return removed

    async def transfer_ownership(self, caller: str, new_owner: str) -> None:
        async with self._lock:
            async with self._session_factory() as session, session.begin():
                old_owner = await _ownership.require_owner(session, self.ledger_name, caller)
                new_owner = _ownership.require_identity(new_owner)
                await _ownership.set_owner(session, self.ledger_name, new_owner)

            logger.info(f"{self.ledger_name} ownership transferred {old_owner} -> {new_owner}")
            self._events.publish(
                AuthorityTransferred(
                    ledger=self.ledger_name,
                    old_authority=old_owner,
                    new_authority=new_owner,
                )
            )
