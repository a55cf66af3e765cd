"""In-memory session store for calculated schedules.

Each browser session (cookie) or API client owns one Schedule. A new
calculation for the same session replaces the previous one wholesale; later
edits (deliverables, work plan) mutate the stored schedule in place so that
rendering and export see them.

Design:
  * Nothing is persisted; a restart forgets all sessions.
  * Access is guarded by a Lock because FastAPI runs sync handlers in a
    thread pool.
  * MAX_SESSIONS caps memory; the least recently written session is evicted.
"""
from __future__ import annotations
import logging
from collections import OrderedDict
from threading import Lock
from typing import Optional
from uuid import uuid4

from lumpsum.domain.Schedule import Schedule
from lumpsum.domain.MonthlyResult import MonthlyResult
from lumpsum.utilities.config import MAX_SESSIONS

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, max_sessions: int = MAX_SESSIONS):
        self._lock = Lock()
        self._schedules: "OrderedDict[str, Schedule]" = OrderedDict()
        self.max_sessions = max_sessions

    @staticmethod
    def new_session_id() -> str:
        return uuid4().hex

    def put(self, session_id: str, schedule: Schedule) -> None:
        """Store (or replace) the schedule of a session."""
        with self._lock:
            replaced = self._schedules.pop(session_id, None) is not None
            self._schedules[session_id] = schedule
            while len(self._schedules) > self.max_sessions:
                evicted, _ = self._schedules.popitem(last=False)
                logger.warning("Session store full, evicted session %s", evicted)
        logger.info("%s schedule for session %s", "Replaced" if replaced else "Stored", session_id)

    def get(self, session_id: str) -> Schedule:
        with self._lock:
            try:
                return self._schedules[session_id]
            except KeyError:
                raise KeyError(f"Unknown session: {session_id}") from None

    def find(self, session_id: Optional[str]) -> Optional[Schedule]:
        '''Like get() but returns None for a missing or unknown session.'''
        if not session_id:
            return None
        with self._lock:
            return self._schedules.get(session_id)

    def _month(self, session_id: str, index: int) -> MonthlyResult:
        return self.get(session_id).month_at(index)

    def update_deliverables(self, session_id: str, index: int, text: Optional[str]) -> MonthlyResult:
        result = self._month(session_id, index)
        with self._lock:
            result.set_deliverables(text)
        return result

    def update_work_plan(self, session_id: str, index: int, week_index: int,
                         activity, text: Optional[str]) -> MonthlyResult:
        result = self._month(session_id, index)
        with self._lock:
            result.set_work_plan_entry(week_index, activity, text)
        return result

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._schedules.pop(session_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._schedules.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._schedules)

    def __contains__(self, session_id) -> bool:
        with self._lock:
            return session_id in self._schedules


__all__ = ["SessionStore"]
