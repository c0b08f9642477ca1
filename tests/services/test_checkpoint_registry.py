"""Tests for the checkpointer registry."""

import asyncio
import pytest

from agent_runtime.errors import ConfigurationError, ResourceInitializationError
from agent_runtime.services.checkpoint_service import CheckpointerRegistry


class FakeCheckpointer:
    """Checkpointer stand-in recording its lifecycle."""

    instances = []

    def __init__(self, path, thread_id, init_delay=0.0, fail=False, close_delay=0.0):
        self.path = path
        self.thread_id = thread_id
        self.init_delay = init_delay
        self.fail = fail
        self.close_delay = close_delay
        self.initialize_calls = 0
        self.close_calls = 0
        FakeCheckpointer.instances.append(self)

    @property
    def is_initialized(self):
        return self.initialize_calls > 0 and not self.fail

    @property
    def is_closed(self):
        return self.close_calls > 0

    async def initialize(self):
        self.initialize_calls += 1
        await asyncio.sleep(self.init_delay)
        if self.fail:
            raise ResourceInitializationError("disk on fire", thread_id=self.thread_id)

    async def close(self):
        self.close_calls += 1
        await asyncio.sleep(self.close_delay)


@pytest.fixture(autouse=True)
def reset_instances():
    FakeCheckpointer.instances = []


def make_registry(runtime_config, **fake_kwargs):
    return CheckpointerRegistry(
        config=runtime_config,
        factory=lambda path, thread_id: FakeCheckpointer(path, thread_id, **fake_kwargs),
    )


@pytest.mark.asyncio
class TestCheckpointerRegistry:
    """Test suite for CheckpointerRegistry."""

    async def test_get_returns_initialized_handle(self, runtime_config):
        registry = make_registry(runtime_config)

        checkpointer = await registry.get("thread-1")

        assert checkpointer.is_initialized
        assert checkpointer.path == runtime_config.get_thread_checkpoint_path("thread-1")
        assert "thread-1" in registry
        assert len(registry) == 1

    async def test_same_instance_for_same_thread(self, runtime_config):
        """Test repeated sequential gets return one handle."""
        registry = make_registry(runtime_config)

        first = await registry.get("thread-1")
        second = await registry.get("thread-1")

        assert first is second
        assert first.initialize_calls == 1
        assert len(FakeCheckpointer.instances) == 1

    async def test_distinct_instances_per_thread(self, runtime_config):
        registry = make_registry(runtime_config)

        a = await registry.get("a")
        b = await registry.get("b")

        assert a is not b
        assert sorted(registry.thread_ids()) == ["a", "b"]

    async def test_empty_thread_id(self, runtime_config):
        registry = make_registry(runtime_config)

        with pytest.raises(ConfigurationError):
            await registry.get("")

        assert len(registry) == 0
        assert FakeCheckpointer.instances == []

    async def test_close_then_get_creates_fresh_handle(self, runtime_config):
        """Test a closed thread reopens with a new handle."""
        registry = make_registry(runtime_config)
        old = await registry.get("thread-1")

        await registry.close("thread-1")

        assert old.is_closed
        assert "thread-1" not in registry

        new = await registry.get("thread-1")
        assert new is not old
        assert new.is_initialized
        assert not new.is_closed

    async def test_close_absent_is_noop(self, runtime_config):
        registry = make_registry(runtime_config)
        await registry.close("missing")
        assert len(registry) == 0

    async def test_close_all(self, runtime_config):
        """Test close_all closes every handle and empties the registry."""
        registry = make_registry(runtime_config)
        handles = [await registry.get(f"thread-{i}") for i in range(3)]

        await registry.close_all()

        assert len(registry) == 0
        assert all(h.close_calls == 1 for h in handles)

    async def test_concurrent_first_access_shares_initialization(self, runtime_config):
        """Test concurrent first gets construct exactly one handle."""
        registry = make_registry(runtime_config, init_delay=0.05)

        results = await asyncio.gather(*(registry.get("thread-1") for _ in range(5)))

        assert len(FakeCheckpointer.instances) == 1
        assert all(r is results[0] for r in results)
        assert results[0].initialize_calls == 1

    async def test_pending_handle_not_observable(self, runtime_config):
        """Test a handle is only published after initialization completes."""
        registry = make_registry(runtime_config, init_delay=0.05)

        task = asyncio.ensure_future(registry.get("thread-1"))
        await asyncio.sleep(0.01)

        assert "thread-1" not in registry

        checkpointer = await task
        assert "thread-1" in registry
        assert checkpointer.is_initialized

    async def test_failed_initialization_publishes_nothing(self, runtime_config):
        """Test failures propagate and a later get retries cleanly."""
        registry = make_registry(runtime_config, fail=True)

        with pytest.raises(ResourceInitializationError):
            await registry.get("thread-1")

        assert "thread-1" not in registry

        registry._factory = lambda path, thread_id: FakeCheckpointer(path, thread_id)
        checkpointer = await registry.get("thread-1")
        assert checkpointer.is_initialized

    async def test_failed_initialization_reaches_all_waiters(self, runtime_config):
        registry = make_registry(runtime_config, init_delay=0.02, fail=True)

        results = await asyncio.gather(
            registry.get("thread-1"),
            registry.get("thread-1"),
            return_exceptions=True,
        )

        assert all(isinstance(r, ResourceInitializationError) for r in results)
        assert len(FakeCheckpointer.instances) == 1

    async def test_close_waits_for_inflight_open(self, runtime_config):
        """Test close during initialization still closes the handle."""
        registry = make_registry(runtime_config, init_delay=0.05)

        task = asyncio.ensure_future(registry.get("thread-1"))
        await asyncio.sleep(0)
        await registry.close("thread-1")

        checkpointer = await task
        assert checkpointer.is_closed
        assert "thread-1" not in registry

    async def test_get_during_close_reopens(self, runtime_config):
        """Test a get racing a close never returns the handle being closed."""
        registry = make_registry(runtime_config, close_delay=0.05)
        old = await registry.get("thread-1")

        closing = asyncio.ensure_future(registry.close("thread-1"))
        await asyncio.sleep(0.01)
        new = await registry.get("thread-1")
        await closing

        assert new is not old
        assert old.is_closed
        assert not new.is_closed
        assert registry.thread_ids() == ["thread-1"]

    async def test_concurrent_close_closes_once(self, runtime_config):
        registry = make_registry(runtime_config, close_delay=0.02)
        checkpointer = await registry.get("thread-1")

        await asyncio.gather(registry.close("thread-1"), registry.close("thread-1"))

        assert checkpointer.close_calls == 1
        assert "thread-1" not in registry

    async def test_async_context_manager(self, runtime_config):
        async with make_registry(runtime_config) as registry:
            checkpointer = await registry.get("thread-1")

        assert checkpointer.is_closed
        assert len(registry) == 0
