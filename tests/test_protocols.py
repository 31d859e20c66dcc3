import asyncio
from pathlib import Path

import pytest

from convsync.engine.protocols import ErrorSimulatingEngine, ExecutionEngine, MockEngine
from convsync.errors import EngineUnavailableError, StoreLoadError, StoreWriteError
from convsync.store.protocols import ErrorSimulatingStore, MemoryStore, SettingsStore


class TestMockEngine:
    def test_implements_protocol(self):
        assert isinstance(MockEngine(), ExecutionEngine)

    def test_set_limit_tracking(self):
        """Test that set_limit calls are tracked and applied."""
        engine = MockEngine(limit=2)

        asyncio.run(engine.set_limit(5))

        assert engine.set_calls == [5]
        assert asyncio.run(engine.get_current_limit()) == 5
        assert engine.get_calls == 1

    def test_reset_call_history(self):
        engine = MockEngine()
        asyncio.run(engine.set_limit(3))
        engine.reset_call_history()
        assert engine.set_calls == []
        assert engine.limit == 3


class TestErrorSimulatingEngine:
    def test_non_failing_methods(self):
        engine = ErrorSimulatingEngine(limit=2)
        asyncio.run(engine.set_limit(4))
        assert asyncio.run(engine.get_current_limit()) == 4

    @pytest.mark.parametrize("method", ["get_current_limit", "set_limit"])
    def test_failing_methods(self, method: str):
        engine = ErrorSimulatingEngine(limit=2, fail_on_methods=[method])
        call = engine.get_current_limit() if method == "get_current_limit" else engine.set_limit(4)

        with pytest.raises(EngineUnavailableError) as excinfo:
            asyncio.run(call)

        assert method in str(excinfo.value)
        assert engine.set_calls == []  # Call should not be recorded


class TestMemoryStore:
    def test_implements_protocol(self):
        assert isinstance(MemoryStore(), SettingsStore)

    def test_set_is_not_saved_until_save(self):
        store = MemoryStore({"a": 1})

        asyncio.run(store.set("a", 2))
        assert store.saved == {"a": 1}

        asyncio.run(store.save())
        assert store.saved == {"a": 2}
        assert store.save_calls == 1

    def test_loader_merges_defaults(self):
        load = MemoryStore.loader({"b": 5})
        store = asyncio.run(load(Path("memory"), {"a": 1, "b": 2}))
        assert store.data == {"a": 1, "b": 5}


class TestErrorSimulatingStore:
    @pytest.mark.parametrize(
        "method, error_type",
        [("get", StoreLoadError), ("set", StoreWriteError), ("save", StoreWriteError)],
    )
    def test_failing_methods(self, method: str, error_type: type[Exception]):
        store = ErrorSimulatingStore({"a": 1}, fail_on_methods=[method])
        calls = {"get": store.get("a"), "set": store.set("a", 2), "save": store.save()}

        with pytest.raises(error_type):
            asyncio.run(calls.pop(method))

        for leftover in calls.values():
            leftover.close()
