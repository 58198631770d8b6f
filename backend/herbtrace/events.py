"""Notifications published after a state change commits.

Events are immutable facts. The bus delivers them synchronously to every
subscriber in registration order and keeps a bounded history for observers
that poll instead of subscribing.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime

from herbtrace.config import EVENT_HISTORY_SIZE

logger = logging.getLogger(__name__)


def _now() -> datetime:
    # Naive UTC, matching what SQLite stores
    return datetime.now(UTC).replace(tzinfo=None)


@dataclass(frozen=True)
class LedgerEvent:
    """Base for all notifications."""

    emitted_at: datetime = field(default_factory=_now, kw_only=True)

    @property
    def name(self) -> str:
        return type(self).__name__

    def payload(self) -> dict:
        data = asdict(self)
        data.pop("emitted_at")
        return data


# --- Geofencing core ---


@dataclass(frozen=True)
class ZoneRegistered(LedgerEvent):
    zone_id: int
    min_latitude: int
    max_latitude: int
    min_longitude: int
    max_longitude: int


@dataclass(frozen=True)
class ZoneUpdated(LedgerEvent):
    zone_id: int
    is_active: bool


@dataclass(frozen=True)
class HerbRecordAdded(LedgerEvent):
    record_id: int
    herb_name: str
    latitude: int
    longitude: int
    submitted_by: str


@dataclass(frozen=True)
class AuthorityTransferred(LedgerEvent):
    ledger: str
    old_authority: str
    new_authority: str


# --- Collaborator ledgers ---


@dataclass(frozen=True)
class WriterAuthorized(LedgerEvent):
    ledger: str
    identity: str


@dataclass(frozen=True)
class WriterRevoked(LedgerEvent):
    ledger: str
    identity: str


@dataclass(frozen=True)
class FarmerRegistered(LedgerEvent):
    farmer_id: str
    farmer_name: str
    registered_by: str


@dataclass(frozen=True)
class ProcessingRecorded(LedgerEvent):
    batch_id: str
    farmer_id: str
    processor: str
    updated: bool = False


@dataclass(frozen=True)
class LabResultRecorded(LedgerEvent):
    test_id: str
    batch_id: str
    passed: bool
    lab: str


Subscriber = Callable[[LedgerEvent], None]


class EventBus:
    """In-process publish/subscribe for ledger notifications."""

    def __init__(self, history_size: int = EVENT_HISTORY_SIZE):
        self._subscribers: list[Subscriber] = []
        self._history: deque[LedgerEvent] = deque(maxlen=history_size)

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, event: LedgerEvent) -> None:
        """Record the event and deliver it to every subscriber.

        A subscriber that raises is logged and delivery continues with the next.
        """
        self._history.append(event)
        logger.info(f"{event.name} {event.payload()}")
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed on {event.name}")

    def history(self, limit: int | None = None) -> list[LedgerEvent]:
        """Most recent events, oldest first."""
        events = list(self._history)
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events
