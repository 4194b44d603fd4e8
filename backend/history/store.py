from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone

from ..places.models import Candidate
from .models import HistoryRecord

logger = logging.getLogger(__name__)

RECENT_VISIT_LIMIT = 10


class HistoryRecordNotFound(KeyError):
    pass


class HistoryStore:
    """In-memory visit history, partitioned by session id.

    Records are kept in insertion order; "most recent" means last inserted.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_session: dict[str, list[HistoryRecord]] = {}
        self._by_id: dict[str, HistoryRecord] = {}

    def get_recently_visited_ids(
        self, session_id: str, limit: int = RECENT_VISIT_LIMIT
    ) -> frozenset[str]:
        """Place ids of the last ``limit`` visits, used as search exclusions.

        Only the most recent visits are excluded so a session never runs out
        of options.
        """
        with self._lock:
            records = self._by_session.get(session_id, [])
            recent = records[-limit:] if limit > 0 else []
            return frozenset(r.place_id for r in recent)

    def record_visit(self, session_id: str, candidate: Candidate) -> str:
        record = HistoryRecord(
            id=uuid.uuid4().hex,
            session_id=session_id,
            place_id=candidate.place_id,
            name=candidate.name,
            address=candidate.address,
            rating=candidate.rating,
            price_level=candidate.price_level,
            cuisine_type=", ".join(candidate.types) or None,
            latitude=candidate.location.lat,
            longitude=candidate.location.lng,
            visited_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._by_session.setdefault(session_id, []).append(record)
            self._by_id[record.id] = record
        logger.info("Recorded visit %s to %s", record.id, candidate.place_id)
        return record.id

    def _update(self, record_id: str, **changes) -> HistoryRecord:
        with self._lock:
            record = self._by_id.get(record_id)
            if record is None:
                raise HistoryRecordNotFound(record_id)
            updated = record.model_copy(update=changes)
            self._by_id[record_id] = updated
            records = self._by_session[record.session_id]
            records[records.index(record)] = updated
            return updated

    def record_rating(self, record_id: str, rating: int) -> HistoryRecord:
        if not 1 <= rating <= 5:
            raise ValueError("rating must be between 1 and 5")
        return self._update(record_id, user_rating=rating)

    def mark_revealed(self, record_id: str) -> HistoryRecord:
        return self._update(record_id, revealed=True)

    def get_record(self, record_id: str) -> HistoryRecord:
        with self._lock:
            record = self._by_id.get(record_id)
        if record is None:
            raise HistoryRecordNotFound(record_id)
        return record

    def get_history(self, session_id: str) -> list[HistoryRecord]:
        """All visits for the session, newest first."""
        with self._lock:
            return list(reversed(self._by_session.get(session_id, [])))

    def clear(self) -> None:
        with self._lock:
            self._by_session.clear()
            self._by_id.clear()
