"""Integration tests for the call, handler, done and publish workflow."""

import asyncio

import pytest

from radflux import ActionRegistry, DispatcherSettings


class MockApiClient:
    """Mock API client for testing effectful handlers."""

    def __init__(self):
        self.requests = []

    async def fetch(self, item_id):
        """Mock fetch method."""
        self.requests.append(item_id)
        await asyncio.sleep(0)
        return {"id": item_id, "value": item_id * 2}


class TodoStore:
    """Minimal store subscribing to actions, the way a view layer would."""

    def __init__(self, actions):
        self.items = []
        self.handles = [
            actions.on("addTodo", self.on_add),
            actions.on("clearTodos", self.on_clear),
        ]

    def on_add(self, item):
        self.items.append(item)

    def on_clear(self, _):
        self.items = []


@pytest.fixture
def actions():
    """Provide a registry declared the way an application would."""
    return ActionRegistry(
        {"load": None, "addTodo": None, "clearTodos": None, "loaded": None},
        settings=DispatcherSettings(metrics_enabled=False, warn_unknown_actions=False),
    )


@pytest.fixture
def api_client():
    """Provide a mocked API client."""
    return MockApiClient()


class TestAsyncHandlers:
    """Test handlers that complete asynchronously."""

    @pytest.mark.asyncio
    async def test_coroutine_handler_awaited_by_caller(self, actions, api_client):
        """Test awaiting a coroutine handler through call."""
        record = []

        async def load(done, item_id):
            done(await api_client.fetch(item_id))

        actions.register_async("load", load)
        actions.on("load", record.append)

        pending = actions.call("load", 5)
        assert record == []

        await pending

        assert record == [{"id": 5, "value": 10}]
        assert api_client.requests == [5]

    @pytest.mark.asyncio
    async def test_handler_schedules_its_own_task(self, actions, api_client):
        """Test a synchronous handler that completes from a task it created."""
        record = []
        tasks = []

        def load(done, item_id):
            async def run():
                done(await api_client.fetch(item_id))

            tasks.append(asyncio.get_running_loop().create_task(run()))

        actions.register_async("load", load)
        actions.on("load", record.append)

        assert actions.call("load", 3) is None
        assert record == []

        await asyncio.gather(*tasks)

        assert record == [{"id": 3, "value": 6}]

    @pytest.mark.asyncio
    async def test_done_resolving_a_future(self, actions):
        """Test bridging a completion callback to a future."""
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        actions.register_async(
            "load", lambda done, payload: loop.call_soon(done, payload.upper())
        )
        actions.on("load", future.set_result)

        actions.call("load", "ready")

        assert await asyncio.wait_for(future, timeout=1) == "READY"


class TestStoreWorkflow:
    """Test a store driven by direct actions."""

    def test_store_receives_actions(self, actions):
        """Test the add and clear flow through a store."""
        store = TodoStore(actions)

        actions.call("addTodo", "write tests")
        actions.call("addTodo", "ship")
        assert store.items == ["write tests", "ship"]

        actions.call("clearTodos")
        assert store.items == []

    def test_store_detaches(self, actions):
        """Test that an unsubscribed store stops receiving actions."""
        store = TodoStore(actions)
        actions.unsubscribe("addTodo", store.handles[0])

        actions.call("addTodo", "ignored")

        assert store.items == []
        assert actions.subscriber_count("clearTodos") == 1

    def test_chained_actions(self, actions):
        """Test a subscriber that calls a follow-up action."""
        seen = []

        actions.register_async(
            "load", lambda done, item_id: done({"id": item_id})
        )
        actions.on("load", lambda result: actions.call("loaded", result["id"]))
        actions.on("loaded", seen.append)

        actions.call("load", 7)

        assert seen == [7]

    def test_unsubscribe_self_during_publish(self, actions):
        """Test a one-shot subscriber that removes itself."""
        seen = []

        def once(payload):
            seen.append(payload)
            actions.unsubscribe("addTodo", once)

        actions.on("addTodo", once)

        actions.call("addTodo", 1)
        actions.call("addTodo", 2)

        assert seen == [1]
