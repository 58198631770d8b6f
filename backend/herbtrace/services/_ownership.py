"""Owner and writer bookkeeping shared by the authority-gated components."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from herbtrace.exceptions import InvalidAddress, NotFound, Unauthorized
from herbtrace.models import AuthorizedWriter, LedgerOwner

ZERO_ADDRESS = "0x" + "0" * 40


def require_identity(identity: str | None) -> str:
    """Return the normalized identity, or raise InvalidAddress if it is unusable."""
    if identity is None:
        raise InvalidAddress("Identity is required")
    identity = identity.strip()
    if not identity or identity.lower() == ZERO_ADDRESS:
        raise InvalidAddress("Identity must not be empty or the zero address")
    return identity


async def ensure_owner(session: AsyncSession, ledger: str, identity: str) -> bool:
    """Set the initial owner if the ledger has none. Returns True if inserted."""
    existing = await session.get(LedgerOwner, ledger)
    if existing is not None:
        return False
    session.add(LedgerOwner(ledger=ledger, owner=require_identity(identity)))
    return True


async def get_owner(session: AsyncSession, ledger: str) -> str:
    row = await session.get(LedgerOwner, ledger)
    if row is None:
        raise NotFound(f"Ledger '{ledger}' has not been initialized")
    return row.owner


async def require_owner(session: AsyncSession, ledger: str, caller: str | None) -> str:
    """Raise Unauthorized unless caller is the current owner. Returns the owner."""
    owner = await get_owner(session, ledger)
    if caller is None or caller.strip() != owner:
        raise Unauthorized(f"Caller is not the {ledger} authority")
    return owner


async def set_owner(session: AsyncSession, ledger: str, identity: str) -> None:
    row = await session.get(LedgerOwner, ledger)
    if row is None:
        raise NotFound(f"Ledger '{ledger}' has not been initialized")
    row.owner = identity


async def is_writer(session: AsyncSession, ledger: str, identity: str | None) -> bool:
    """True if identity is the owner or on the ledger's writer allow-list."""
    if not identity:
        return False
    identity = identity.strip()
    if identity == await get_owner(session, ledger):
        return True
    return await session.get(AuthorizedWriter, (ledger, identity)) is not None


async def require_writer(session: AsyncSession, ledger: str, caller: str | None) -> str:
    if not await is_writer(session, ledger, caller):
        raise Unauthorized(f"Caller is not authorized to write to {ledger}")
    return caller.strip()


async def add_writer(session: AsyncSession, ledger: str, identity: str) -> bool:
    if await session.get(AuthorizedWriter, (ledger, identity)) is not None:
        return False
    session.add(AuthorizedWriter(ledger=ledger, identity=identity))
    return True


async def remove_writer(session: AsyncSession, ledger: str, identity: str) -> bool:
    result = await session.execute(
        delete(AuthorizedWriter).where(
            AuthorizedWriter.ledger == ledger,
            AuthorizedWriter.identity == identity,
        )
    )
    return result.rowcount > 0


async def list_writers(session: AsyncSession, ledger: str) -> list[str]:
    result = await session.execute(
        select(AuthorizedWriter.identity)
        .where(AuthorizedWriter.ledger == ledger)
        .order_by(AuthorizedWriter.identity)
    )
    return list(result.scalars().all())
