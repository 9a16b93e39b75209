"""
In-memory registry of planner sessions.

Sessions hold immutable PlannerState snapshots; an update swaps the stored
reference for the snapshot a reducer returned.
"""

import logging
from typing import Dict, Optional, Tuple
from uuid import uuid4

from .state import PlannerState, new_state

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self) -> None:
        self._sessions: Dict[str, PlannerState] = {}

    def create(self) -> Tuple[str, PlannerState]:
        session_id = str(uuid4())
        state = new_state()
        self._sessions[session_id] = state
        logger.info(f"Created planner session {session_id}")
        return session_id, state

    def get(self, session_id: str) -> Optional[PlannerState]:
        return self._sessions.get(session_id)

    def put(self, session_id: str, state: PlannerState) -> PlannerState:
        if session_id not in self._sessions:
            raise KeyError(session_id)
        self._sessions[session_id] = state
        return state

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
