"""Game session engine: create, process, finalize and project sessions.

The engine owns the lifecycle shared by every game:

    [none] --create--> ACTIVE --process--> ACTIVE | COMPLETED
    ACTIVE --finalize--> COMPLETED
    COMPLETED --process--> SessionAlreadyCompleted
    COMPLETED --finalize--> COMPLETED (unchanged)

Game-specific rules live in :class:`~arcade.services.games.base.Game`
subclasses. ``process`` and ``finalize`` are serialized per session id.
"""
from __future__ import annotations

import logging
import random
import time
import uuid
from typing import Callable, Iterable, Optional

from .base import Game
from .errors import GameNotFound, SessionAlreadyCompleted, SessionNotFound
from .locks import SessionLocks
from .projection import project
from .session import Outcome, Result, Session
from .store import SessionStore

logger = logging.getLogger(__name__)


class GameEngine:

    def __init__(self, store: SessionStore, games: Iterable[Game],
                 clock: Callable[[], float] = time.time, locks: Optional[SessionLocks] = None):
        self.store = store
        self.games = {g.name: g for g in games}
        self.clock = clock
        self.locks = locks or SessionLocks()

    def game(self, name: str) -> Game:
        game = self.games.get(name)
        if game is None:
            raise GameNotFound(f"Unknown game '{name}'")
        return game

    def create(self, game_name: str, payload: Optional[dict] = None, user_id: Optional[int] = None) -> Session:
        game = self.game(game_name)
        config = game.parse_config(payload)
        rng = random.Random(config.get('seed'))
        content, progress = game.generate(config, rng)
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game.name,
            user_id=user_id,
            config=config,
            content=content,
            progress=progress,
            start_time=self.clock(),
        )
        self.store.put(session)
        logger.info(f"[engine] created game={game.name} session={session.session_id} user={user_id}")
        return session

    def get(self, session_id: str, game_name: Optional[str] = None) -> Session:
        session = self.store.get(session_id) if session_id else None
        if session is None or (game_name is not None and session.game != game_name):
            raise SessionNotFound(f"Session '{session_id}' not found")
        return session

    def process(self, session_id: str, payload: Optional[dict],
                game_name: Optional[str] = None) -> tuple[Outcome, Session]:
        with self.locks.hold(session_id):
            session = self.get(session_id, game_name)
            if session.completed:
                raise SessionAlreadyCompleted()
            game = self.game(session.game)
            action = game.parse_action(payload)

            now = self.clock()
            elapsed = max(0.0, now - session.start_time)
            time_limit = session.config.get('timeLimit')
            if time_limit and elapsed > time_limit:
                self._complete(game, session, now)
                self.store.put(session)
                logger.info(f"[engine] expired game={game.name} session={session_id} elapsed={elapsed:.1f}s")
                return Outcome(Result.NO_EFFECT, terminal=True,
                               details={'expired': True, 'message': 'Time limit exceeded'}), session

            working = session.copy()
            outcome = game.apply(working, action, elapsed)
            if outcome.terminal:
                self._complete(game, working, now)
            self.store.put(working)
            logger.info(
                f"[engine] processed game={game.name} session={session_id} "
                f"result={outcome.result.value} completed={working.completed}"
            )
            return outcome, working

    def finalize(self, session_id: str, game_name: Optional[str] = None) -> Session:
        with self.locks.hold(session_id):
            session = self.get(session_id, game_name)
            if session.completed:
                return session
            game = self.game(session.game)
            self._complete(game, session, self.clock())
            self.store.put(session)
            logger.info(f"[engine] finalized game={game.name} session={session_id} score={session.score}")
            return session

    def project(self, session: Session, include_answers: bool = False, authorized: bool = False) -> dict:
        game = self.game(session.game)
        reveal = include_answers and (session.completed or authorized)
        return project(session, game.secret_fields, include_answers=reveal, is_revealed=game.is_revealed)

    def _complete(self, game: Game, session: Session, now: float) -> None:
        elapsed = max(0.0, now - session.start_time)
        session.progress['timeElapsed'] = round(elapsed, 3)
        session.score = game.score(game.metrics(session, elapsed), session.config)
        session.end_time = now
        session.completed = True
