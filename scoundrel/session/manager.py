"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller starts a session -> shuffled deck, initial state
2. During the game:
   - Actions are stamped with a sequence number and timestamp
   - The reducer produces the next state
   - Every changed state is kept in the session history
3. Game over -> the caller reads the score and ends the session

PERSISTENCE RULES:
- Sessions are in-memory only
- History makes undo and replay trivial, since states are immutable
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.state import GameState, DEFAULT_MAX_HEALTH
from ..engine_core.action import Action, ActionType, ActionResult
from ..engine_core.reducer import apply_action, reduce
from ..games.standard import setup_game
from .checksum import compute_checksum

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed, score available
    ABANDONED = "abandoned"  # Ended before game over


@dataclass
class Session:
    """
    A single play-through.

    history[0] is the initial state and history[-1] the current one.
    actions[i] is the action that turned history[i] into history[i + 1].
    """
    session_id: str
    created_at: float
    history: list[GameState]
    seed: int | None = None
    state: SessionState = SessionState.ACTIVE
    actions: list[Action] = field(default_factory=list)

    @property
    def game_state(self) -> GameState:
        return self.history[-1]

    @property
    def initial_state(self) -> GameState:
        return self.history[0]

    def is_active(self) -> bool:
        """Check if session is still being played."""
        return self.state == SessionState.ACTIVE

    def next_sequence(self) -> int:
        """Sequence number for the next action."""
        return self.initial_state.last_action_sequence + len(self.actions) + 1

    def dispatch(self, action: Action) -> ActionResult:
        """
        Apply an action to the current state.

        Drawing is only passed on to the reducer when the room allows it.
        Changed states get a fresh checksum and are appended to history.
        """
        stamped = action.stamped(
            timestamp=time.time() if action.timestamp is None else action.timestamp,
            sequence=self.next_sequence() if action.sequence is None else action.sequence,
        )

        current = self.game_state
        if stamped.action_type == ActionType.DRAW_ROOM and not current.can_draw_room:
            return ActionResult.unchanged(current)

        result = apply_action(current, stamped)
        if not result.success:
            logger.warning(
                "Session %s rejected invalid action %s: %s",
                self.session_id, stamped.action_type, result.error,
            )
            return result

        if result.changed:
            new_state = result.new_state._copy_with(
                state_checksum=compute_checksum(result.new_state),
            )
            result.new_state = new_state
            self.history.append(new_state)
            self.actions.append(stamped)

            if new_state.game_over:
                self.state = SessionState.GAME_OVER
                logger.info(
                    "Session %s finished with score %d", self.session_id, new_state.score
                )

        return result

    def undo(self) -> bool:
        """Step back to the previous state. Returns False when nothing to undo."""
        if len(self.history) <= 1:
            return False
        self.history.pop()
        self.actions.pop()
        if self.state == SessionState.GAME_OVER and not self.game_state.game_over:
            self.state = SessionState.ACTIVE
        return True

    def replay(self) -> GameState:
        """Re-apply every recorded action to the initial state."""
        return replay(self.initial_state, self.actions)


def replay(state: GameState, actions: list[Action]) -> GameState:
    """
    Apply actions in order.

    Checksums are not recomputed, so compare everything but state_checksum
    when checking a replay against a session history.
    """
    for action in actions:
        state = reduce(state, action)
    return state


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a freshly shuffled deck
    - Track active sessions
    - Clean up completed sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        max_health: int = DEFAULT_MAX_HEALTH,
    ) -> Session:
        """
        Create a new game session.

        Args:
            seed: Shuffle seed (random deck if None)
            max_health: Starting and maximum health

        Returns:
            New Session ready for the first draw
        """
        session_id = str(uuid.uuid4())
        state = setup_game(seed=seed, max_health=max_health)
        state = state._copy_with(state_checksum=compute_checksum(state))

        session = Session(
            session_id=session_id,
            created_at=time.time(),
            history=[state],
            seed=seed,
        )
        self._sessions[session_id] = session
        logger.info("Created session %s (seed=%s)", session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session does not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, session.state.value)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still being played."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def list_sessions(self) -> list[str]:
        """List IDs of all known sessions."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
