"""Tests for the in-memory session history."""

from src.conversation.session_store import SessionStore
from src.schemas.conversation_schema import Speaker


class TestSessionStore:
    def test_recent_oldest_first(self):
        store = SessionStore()
        store.append("s1", Speaker.USER, "one")
        store.append("s1", Speaker.AGENT, "two")
        store.append("s1", Speaker.USER, "three")

        assert [t.text for t in store.recent("s1", 2)] == ["two", "three"]

    def test_unknown_session_is_empty(self):
        assert SessionStore().recent("missing", 5) == []

    def test_zero_limit(self):
        store = SessionStore()
        store.append("s1", Speaker.USER, "hi")
        assert store.recent("s1", 0) == []

    def test_max_turns_bounded(self):
        store = SessionStore(max_turns=3)
        for i in range(5):
            store.append("s1", Speaker.USER, str(i))
        assert [t.text for t in store.recent("s1", 10)] == ["2", "3", "4"]

    def test_action_recorded(self):
        store = SessionStore()
        turn = store.append("s1", Speaker.AGENT, "Booked.", action="confirm_appointment")
        assert turn.action == "confirm_appointment"

    def test_idle_sessions_evicted(self):
        store = SessionStore(idle_ttl_sec=0)
        store.append("old", Speaker.USER, "hi")
        store._sessions["old"].last_seen -= 10
        store.append("new", Speaker.USER, "hello")
        assert store.recent("old", 5) == []
        assert len(store) == 1

    def test_clear(self):
        store = SessionStore()
        store.append("s1", Speaker.USER, "hi")
        store.clear("s1")
        assert len(store) == 0
