"""
Tests for sessions.

Tests:
- Action stamping and checksums
- Draw gating
- History, undo and replay
- Session manager lifecycle
"""

import time

import pytest

from ..engine_core.action import Action, ActionType
from ..engine_core.cards import Monster, Suit
from ..session import (
    SessionManager, SessionState, compute_checksum, replay, state_to_dict,
)


@pytest.fixture
def manager():
    return SessionManager()


@pytest.fixture
def session(manager):
    return manager.create_session(seed=42)


OGRE = Monster(Suit.CLUBS, "9", 9)


def finish(session):
    """Put a one-health player in front of a monster and fight it."""
    session.history[0] = session.initial_state._copy_with(health=1, room=(OGRE,))
    session.dispatch(Action.fight_monster(OGRE))


class TestSessionDispatch:
    """Tests for applying actions through a session."""

    def test_initial_state_has_checksum(self, session):
        state = session.game_state
        assert state.state_checksum == compute_checksum(state)
        assert len(state.dungeon) == 44

    def test_actions_are_stamped(self, session):
        before = time.time()
        session.dispatch(Action.draw_room())

        stamped = session.actions[-1]
        assert stamped.sequence == 1
        assert stamped.timestamp >= before

        session.dispatch(Action.avoid_room())
        assert session.actions[-1].sequence == 2

    def test_explicit_ordering_kept(self, session):
        session.dispatch(Action.draw_room().stamped(timestamp=5.0, sequence=99))
        assert session.actions[-1].timestamp == 5.0
        assert session.actions[-1].sequence == 99

    def test_changed_state_gets_checksum(self, session):
        result = session.dispatch(Action.draw_room())

        assert result.changed
        assert result.new_state is session.game_state
        assert session.game_state.state_checksum == compute_checksum(session.game_state)
        assert session.game_state.state_checksum != session.initial_state.state_checksum

    def test_draw_blocked_while_room_is_full(self, session):
        session.dispatch(Action.draw_room())
        state = session.game_state

        result = session.dispatch(Action.draw_room())

        assert result.success
        assert not result.changed
        assert session.game_state is state
        assert len(session.history) == 2

    def test_rule_rejection_leaves_history(self, session):
        session.dispatch(Action.draw_room())
        session.dispatch(Action.avoid_room())

        result = session.dispatch(Action.avoid_room())

        assert result.success and not result.changed
        assert len(session.history) == 3
        assert len(session.actions) == 2

    def test_invalid_action_leaves_history(self, session):
        session.dispatch(Action.draw_room())

        result = session.dispatch(Action(action_type=ActionType.FIGHT_MONSTER))

        assert not result.success
        assert result.error_code == "INVALID_ACTION"
        assert len(session.history) == 2

    def test_game_over_marks_session(self, session):
        finish(session)

        assert session.game_state.game_over
        assert session.game_state.health == -8
        assert session.state == SessionState.GAME_OVER
        assert not session.is_active()

    def test_finished_session_ignores_actions(self, session):
        finish(session)
        final = session.game_state

        result = session.dispatch(Action.draw_room())

        assert not result.changed
        assert session.game_state is final


class TestUndoAndReplay:
    """Tests for stepping through history."""

    def test_undo(self, session):
        session.dispatch(Action.draw_room())
        drawn = session.game_state
        session.dispatch(Action.avoid_room())

        assert session.undo()
        assert session.game_state is drawn
        assert len(session.actions) == 1

    def test_nothing_to_undo(self, session):
        assert not session.undo()
        assert len(session.history) == 1

    def test_undo_reopens_finished_game(self, session):
        finish(session)

        session.undo()

        assert session.state == SessionState.ACTIVE
        assert not session.game_state.game_over

    def test_replay_matches_history(self, session):
        session.dispatch(Action.draw_room())
        session.dispatch(Action.avoid_room())
        session.dispatch(Action.draw_room())
        room = session.game_state.room
        for card in room[:3]:
            if isinstance(card, Monster):
                session.dispatch(Action.fight_monster(card))
                break

        replayed = session.replay()

        assert state_to_dict(replayed) == state_to_dict(session.game_state)

    def test_module_replay(self, session):
        actions = [Action.draw_room(), Action.avoid_room()]
        for action in actions:
            session.dispatch(action)

        assert state_to_dict(replay(session.initial_state, actions)) == state_to_dict(
            session.game_state
        )


class TestChecksum:

    def test_ignores_ordering_metadata(self, session):
        state = session.game_state
        moved = state._copy_with(last_action_timestamp=1.0, last_action_sequence=50)
        assert compute_checksum(state) == compute_checksum(moved)

    def test_follows_content(self, session):
        state = session.game_state
        assert compute_checksum(state) != compute_checksum(state._copy_with(health=3))

    def test_suit_encoding_does_not_matter(self, session):
        state = session.game_state._copy_with(room=(Monster(Suit.SPADES, "4", 4),))
        glyph = state._copy_with(room=(Monster("♠", "4", 4),))
        assert compute_checksum(state) == compute_checksum(glyph)


class TestSessionManager:
    """Tests for the session manager."""

    def test_create_and_get(self, manager):
        session = manager.create_session(seed=1)
        assert manager.get_session(session.session_id) is session
        assert session.seed == 1
        assert session.is_active()

    def test_seed_gives_same_dungeon(self, manager):
        a = manager.create_session(seed=11)
        b = manager.create_session(seed=11)
        assert a.session_id != b.session_id
        assert a.game_state.dungeon == b.game_state.dungeon

    def test_max_health(self, manager):
        session = manager.create_session(max_health=12)
        assert session.game_state.health == 12

    def test_unknown_session(self, manager):
        assert manager.get_session("nope") is None
        assert not manager.end_session("nope")

    def test_end_session(self, manager):
        session = manager.create_session()

        assert manager.end_session(session.session_id)

        assert session.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None

    def test_listing(self, manager):
        active = manager.create_session(seed=3)
        finished = manager.create_session(seed=3)
        finish(finished)

        assert manager.list_active_sessions() == [active.session_id]
        assert set(manager.list_sessions()) == {active.session_id, finished.session_id}

    def test_cleanup_only_removes_old_finished(self, manager):
        old_finished = manager.create_session()
        old_finished.state = SessionState.GAME_OVER
        old_finished.created_at -= 7200
        old_active = manager.create_session()
        old_active.created_at -= 7200
        new_finished = manager.create_session()
        new_finished.state = SessionState.GAME_OVER

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert manager.get_session(old_finished.session_id) is None
        assert manager.get_session(old_active.session_id) is old_active
        assert manager.get_session(new_finished.session_id) is new_finished
