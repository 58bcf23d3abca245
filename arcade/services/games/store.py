"""Session stores.

The engine needs only ``get`` and ``put`` (full replace). Both stores
copy sessions on the way in and out so callers never share mutable state
with what is stored.
"""
from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from .errors import StoreConflict, StoreError
from .session import Session

logger = logging.getLogger(__name__)


class SessionStore(ABC):

    @abstractmethod
    def get(self, session_id: str) -> Optional[Session]:
        """Return a copy of the stored session, or None."""

    @abstractmethod
    def put(self, session: Session) -> None:
        """Replace the stored session and bump ``session.version``.

        Raises StoreConflict if the stored revision is not the one the
        session was read at.
        """


class MemorySessionStore(SessionStore):
    """Process-local store, used by tests and single-process dev servers."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, session_id):
        with self._lock:
            stored = self._sessions.get(session_id)
            return stored.copy() if stored else None

    def put(self, session):
        with self._lock:
            stored = self._sessions.get(session.session_id)
            current = stored.version if stored else 0
            if current != session.version:
                raise StoreConflict()
            session.version = current + 1
            self._sessions[session.session_id] = session.copy()

    def __len__(self):
        return len(self._sessions)


class SqlSessionStore(SessionStore):
    """Store backed by the ``game_session`` table through Flask-SQLAlchemy."""

    def __init__(self, db):
        self.db = db

    def get(self, session_id):
        from arcade.models import GameSessionRecord
        try:
            record = GameSessionRecord.query.filter_by(session_id=session_id).first()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            logger.exception(f"[store] get failed session={session_id}")
            raise StoreError() from exc
        return _to_session(record) if record else None

    def put(self, session):
        from arcade.models import GameSessionRecord
        try:
            record = GameSessionRecord.query.filter_by(session_id=session.session_id).first()
            if record is None:
                if session.version != 0:
                    raise StoreConflict()
                record = GameSessionRecord(session_id=session.session_id)
            elif record.version != session.version:
                raise StoreConflict()
            record.game = session.game
            record.user_id = session.user_id
            record.config = copy.deepcopy(session.config)
            record.content = copy.deepcopy(session.content)
            record.progress = copy.deepcopy(session.progress)
            record.completed = session.completed
            record.start_time = session.start_time
            record.end_time = session.end_time
            record.score = session.score
            self.db.session.add(record)
            self.db.session.commit()
        except StoreConflict:
            self.db.session.rollback()
            raise
        except StaleDataError as exc:
            self.db.session.rollback()
            raise StoreConflict() from exc
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            logger.exception(f"[store] put failed session={session.session_id}")
            raise StoreError() from exc
        session.version = record.version

    def purge_incomplete(self, older_than: float) -> int:
        """Delete unfinished sessions started before ``older_than`` (epoch seconds)."""
        from arcade.models import GameSessionRecord
        try:
            deleted = GameSessionRecord.query.filter(
                GameSessionRecord.completed.is_(False),
                GameSessionRecord.start_time < older_than,
            ).delete(synchronize_session=False)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise StoreError() from exc
        return deleted


def _to_session(record) -> Session:
    return Session(
        session_id=record.session_id,
        game=record.game,
        user_id=record.user_id,
        config=copy.deepcopy(record.config),
        content=copy.deepcopy(record.content),
        progress=copy.deepcopy(record.progress),
        completed=bool(record.completed),
        start_time=record.start_time,
        end_time=record.end_time,
        score=record.score or 0,
        version=record.version,
    )
