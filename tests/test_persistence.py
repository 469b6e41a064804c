"""Tests for the JSON snapshot codec and the persistence gateways."""

import json

import pytest
from sqlalchemy.exc import OperationalError

from timerdeck.database.db import get_session
from timerdeck.database.gateway import (
    DEFAULT_STORAGE_KEY, MemoryPersistenceGateway, SqlPersistenceGateway,
)
from timerdeck.database.models import StoredBlob
from timerdeck.errors import PersistenceError
from timerdeck.state.actions import AddTimer, StartTimer
from timerdeck.state.models import AppState, HistoryEntry, TimerStatus
from timerdeck.state.store import TimerStore

from helpers import make_timer, state_with


def _sample_state():
    state = state_with(
        make_timer("a", status=TimerStatus.RUNNING, remaining=3, halfway_alert=True),
        make_timer("b", category="Gym", status=TimerStatus.COMPLETED),
    )
    entry = HistoryEntry(id="b", name="Tea", category="Gym", duration=5, completed_at=77)
    return AppState(timers=state.timers, history=(entry,), categories=state.categories)


# ═══════════════════════════════════════════════════════════════════════════
#  SNAPSHOT CODEC
# ═══════════════════════════════════════════════════════════════════════════


class TestSnapshotCodec:

    def test_json_round_trip(self):
        state = _sample_state()
        assert AppState.from_json(state.to_json()) == state

    def test_reads_document_with_millisecond_ids(self):
        doc = {
            "timers": [{
                "id": "1712345678901", "name": "Pasta", "duration": 600,
                "remainingTime": 0, "category": "Kitchen", "status": "completed",
                "createdAt": 1712345678901, "halfwayAlert": True,
                "halfwayAlertTriggered": True,
            }],
            "history": [{
                "id": "1712345678901", "name": "Pasta", "category": "Kitchen",
                "duration": 600, "completedAt": 1712346278901,
            }],
            "categories": ["Kitchen", "Kitchen"],
        }
        state = AppState.from_dict(doc)
        assert state.timers[0].status == TimerStatus.COMPLETED
        assert state.history[0].completed_at == 1712346278901
        assert state.categories == ("Kitchen",)

    @pytest.mark.parametrize("doc", [
        [],
        {"timers": [], "history": []},
        {"timers": [{"id": "x"}], "history": [], "categories": []},
        {"timers": [], "history": [], "categories": [1]},
    ])
    def test_rejects_malformed_documents(self, doc):
        with pytest.raises(PersistenceError):
            AppState.from_dict(doc)

    def test_rejects_unknown_status(self):
        doc = _sample_state().to_dict()
        doc["timers"][0]["status"] = "sleeping"
        with pytest.raises(PersistenceError):
            AppState.from_dict(doc)

    def test_rejects_bool_where_int_expected(self):
        doc = _sample_state().to_dict()
        doc["timers"][0]["duration"] = True
        with pytest.raises(PersistenceError):
            AppState.from_dict(doc)

    def test_rejects_inconsistent_timer(self):
        doc = _sample_state().to_dict()
        doc["timers"][0]["remainingTime"] = 0  # running with nothing left
        with pytest.raises(PersistenceError):
            AppState.from_dict(doc)

    def test_restores_missing_timer_categories(self):
        doc = _sample_state().to_dict()
        doc["categories"] = ["Gym"]
        assert AppState.from_dict(doc).categories == ("Gym", "Kitchen")

    def test_rejects_invalid_json(self):
        with pytest.raises(PersistenceError):
            AppState.from_json("{oops")


# ═══════════════════════════════════════════════════════════════════════════
#  GATEWAYS
# ═══════════════════════════════════════════════════════════════════════════


class TestMemoryGateway:

    def test_starts_empty(self):
        assert MemoryPersistenceGateway().load() is None

    def test_save_then_load(self):
        gw = MemoryPersistenceGateway()
        gw.save(_sample_state())
        assert AppState.from_json(gw.load()) == _sample_state()
        assert gw.save_count == 1


class TestSqlGateway:

    def test_missing_key_loads_none(self):
        assert SqlPersistenceGateway().load() is None

    def test_default_key(self):
        assert SqlPersistenceGateway().key == DEFAULT_STORAGE_KEY == "timerData"

    def test_save_then_load(self):
        gw = SqlPersistenceGateway()
        gw.save(_sample_state())
        assert AppState.from_json(gw.load()) == _sample_state()

    def test_save_overwrites_single_row(self):
        gw = SqlPersistenceGateway()
        gw.save(_sample_state())
        gw.save(AppState.empty())
        with get_session() as db:
            rows = db.query(StoredBlob).all()
            assert len(rows) == 1
            assert json.loads(rows[0].value)["timers"] == []

    def test_keys_are_independent(self):
        SqlPersistenceGateway("a").save(_sample_state())
        assert SqlPersistenceGateway("b").load() is None

    def test_database_errors_become_persistence_errors(self, monkeypatch):
        import timerdeck.database.gateway as gateway_mod

        def broken_session():
            raise OperationalError("SELECT", {}, Exception("locked"))

        monkeypatch.setattr(gateway_mod, "get_session", broken_session)
        gw = SqlPersistenceGateway()
        with pytest.raises(PersistenceError):
            gw.load()
        with pytest.raises(PersistenceError):
            gw.save(AppState.empty())

    def test_filesystem_errors_become_persistence_errors(self, monkeypatch):
        import timerdeck.database.gateway as gateway_mod

        def unwritable_session():
            raise PermissionError("read-only home")

        monkeypatch.setattr(gateway_mod, "get_session", unwritable_session)
        with pytest.raises(PersistenceError):
            SqlPersistenceGateway().load()

    def test_open_database_wraps_errors(self, monkeypatch):
        import timerdeck.database.gateway as gateway_mod

        def broken_init():
            raise OSError("no space left")

        monkeypatch.setattr(gateway_mod, "init_db", broken_init)
        with pytest.raises(PersistenceError):
            gateway_mod.open_database()

    def test_store_survives_restart(self, qapp):
        first = TimerStore(SqlPersistenceGateway())
        first.load()
        first.dispatch(AddTimer(make_timer()))
        first.dispatch(StartTimer("t1"))

        second = TimerStore(SqlPersistenceGateway())
        state = second.load()
        assert state == first.state
        assert state.timers[0].status == TimerStatus.RUNNING
