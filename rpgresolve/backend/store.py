"""In-process session storage for board and dice state."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import Any, Protocol
import uuid

from .dice import DEFAULT_MAX_EXPLOSION_DEPTH, configure_dice, roll_dice
from .engine import ActionResult, apply_board_action
from .models import DicePoolConfig, SessionRecord
from .rng import RandomSource, create_random_source
from .state import build_initial_board_state, build_initial_dice_state

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    def create_session(self) -> SessionRecord:
        """Create a session holding a fresh board and an empty dice pool."""

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return the session snapshot, or None for an unknown id."""

    def apply_board_action(self, session_id: str, action: dict[str, Any]) -> ActionResult | None:
        """Apply a board action and return the reducer result."""

    def configure_dice(self, session_id: str, config: DicePoolConfig) -> SessionRecord | None:
        """Replace the session's dice configuration."""

    def roll_dice(self, session_id: str) -> SessionRecord | None:
        """Roll the session's configured pool."""

    def delete_session(self, session_id: str) -> bool:
        """Drop a session; False when the id is unknown."""


@dataclass
class _Session:
    record: SessionRecord
    rng: RandomSource


@dataclass
class InMemorySessionStore:
    seed: int | None = None
    max_explosion_depth: int = DEFAULT_MAX_EXPLOSION_DEPTH
    _sessions: dict[str, _Session] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def create_session(self) -> SessionRecord:
        session_id = str(uuid.uuid4())
        record = SessionRecord(
            session_id=session_id,
            board=build_initial_board_state(),
            dice=build_initial_dice_state(),
        )
        with self._lock:
            self._sessions[session_id] = _Session(record=record, rng=create_random_source(self.seed))
        logger.info("Created session %s", session_id)
        return record

    def get_session(self, session_id: str) -> SessionRecord | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        return session.record

    def apply_board_action(self, session_id: str, action: dict[str, Any]) -> ActionResult | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            result = apply_board_action(state=session.record.board, action=action, rng=session.rng)
            session.record = SessionRecord(session_id=session_id, board=result.state, dice=session.record.dice)
        for event in result.engine_events:
            logger.debug("Session %s: %s", session_id, event)
        return result

    def configure_dice(self, session_id: str, config: DicePoolConfig) -> SessionRecord | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            dice = configure_dice(session.record.dice, config)
            session.record = SessionRecord(session_id=session_id, board=session.record.board, dice=dice)
            return session.record

    def roll_dice(self, session_id: str) -> SessionRecord | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            dice = roll_dice(session.record.dice, session.rng, max_depth=self.max_explosion_depth)
            session.record = SessionRecord(session_id=session_id, board=session.record.board, dice=dice)
            return session.record

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is None:
            return False
        logger.info("Deleted session %s", session_id)
        return True


def create_store(seed: int | None = None, max_explosion_depth: int = DEFAULT_MAX_EXPLOSION_DEPTH) -> SessionStore:
    return InMemorySessionStore(seed=seed, max_explosion_depth=max_explosion_depth)
