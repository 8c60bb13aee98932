"""
Tests for session management.

Tests:
- Session lifecycle
- Intent routing and state replacement
- Serialized transitions under concurrency
- Stale session cleanup
"""

import threading

import pytest

from ..engine_core.action import Action
from ..engine_core.state import Location
from ..session import SessionManager, SessionState


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionLifecycle:

    def test_create_session(self, manager):
        session = manager.create_session(player_name="Ada")

        assert session.session_id
        assert session.player_name == "Ada"
        assert session.is_active()
        assert session.game_state.all_at(Location.START)
        assert manager.get_session(session.session_id) is session

    def test_sessions_are_independent(self, manager):
        first = manager.create_session()
        second = manager.create_session()

        manager.dispatch(first.session_id, Action.select_actor("father"))

        assert first.game_state.get_actor("father").location == Location.FERRY
        assert second.game_state.get_actor("father").location == Location.START

    def test_end_session(self, manager):
        session = manager.create_session()

        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ENDED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_list_active_sessions(self, manager):
        ids = {manager.create_session().session_id for _ in range(3)}
        assert set(manager.list_active_sessions()) == ids

    def test_custom_new_game_used_for_reset(self, initial_state):
        """A session built from a custom factory resets to that factory's state."""
        def custom_start():
            return initial_state.with_message("custom start")

        manager = SessionManager(new_game=custom_start)
        session = manager.create_session()
        assert session.game_state.message == "custom start"

        manager.dispatch(session.session_id, Action.select_actor("police"))
        result = manager.dispatch(session.session_id, Action.reset())

        assert result.accepted
        assert session.game_state.message == "custom start"
        assert session.game_state.get_actor("police").location == Location.START

    def test_default_reset_greeting(self, manager):
        session = manager.create_session()
        manager.dispatch(session.session_id, Action.reset())
        assert session.game_state.message.startswith("Game reset!")


class TestDispatch:

    def test_dispatch_replaces_state(self, manager):
        session = manager.create_session()
        before = session.game_state

        result = manager.dispatch(session.session_id, Action.select_actor("police"))

        assert result.accepted
        assert session.game_state is result.new_state
        assert session.game_state is not before
        assert session.transitions == 1

    def test_dispatch_unknown_session(self, manager):
        assert manager.dispatch("missing", Action.sail()) is None

    def test_rejection_still_updates_message(self, manager):
        session = manager.create_session()
        result = manager.dispatch(session.session_id, Action.sail())

        assert result.rejected
        assert session.game_state.message == "Nobody on the ferry!"

    def test_concurrent_boarding_never_overfills(self, manager, check_invariants):
        session = manager.create_session()
        actor_ids = [a.actor_id for a in session.game_state.actors]
        barrier = threading.Barrier(len(actor_ids))

        def board(actor_id):
            barrier.wait()
            manager.dispatch(session.session_id, Action.select_actor(actor_id))

        threads = [threading.Thread(target=board, args=(i,)) for i in actor_ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(session.game_state.aboard) == 2
        assert session.transitions == len(actor_ids)
        check_invariants(session.game_state)


class TestCleanup:

    def test_cleanup_removes_idle_sessions(self, manager):
        idle = manager.create_session()
        fresh = manager.create_session()
        idle.last_active_at -= 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert manager.get_session(idle.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh
