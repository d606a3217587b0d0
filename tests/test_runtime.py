import asyncio

import pytest

from ly_gherkin.errors import NoStepDefinitionError
from ly_gherkin.model import DataTable, DocString, Step, StepKeyword
from ly_gherkin.runtime import (
    Context,
    ContextManager,
    HookDefinition,
    HookRegistry,
    HookType,
    StepExecutor,
    StepRegistry,
)


def test_executor_extracts_typed_argument():
    """Test that `I have {int} items` receives the number 42."""
    registry = StepRegistry()
    received = []
    registry.define(
        StepKeyword.GIVEN, "I have {int} items", lambda context, count: received.append(count)
    )
    context = ContextManager().get_context()
    asyncio.run(StepExecutor(registry).execute(Step(StepKeyword.GIVEN, "I have 42 items"), context))
    assert received == [42]
    assert isinstance(received[0], int)


def test_executor_argument_order():
    """Test that groups come first, then the data table, then the doc string."""
    registry = StepRegistry()
    calls = []

    def handler(context, name, count, table, doc):
        calls.append((context, name, count, table, doc))

    registry.define(StepKeyword.WHEN, "{word} orders {int}", handler)
    table = DataTable(rows=(("item", "qty"), ("tea", "1")))
    doc = DocString(content="note\nline two")
    context = Context()
    step = Step(StepKeyword.WHEN, "ada orders 3", data_table=table, doc_string=doc)
    asyncio.run(StepExecutor(registry).execute(step, context))
    assert calls == [(context, "ada", 3, table, doc)]


def test_executor_awaits_async_handlers():
    """Test that coroutine handlers finish before execute() returns."""
    registry = StepRegistry()

    async def handler(context):
        await asyncio.sleep(0)
        context.done = True

    registry.define(StepKeyword.THEN, "it is done", handler)
    context = Context()
    asyncio.run(StepExecutor(registry).execute(Step(StepKeyword.THEN, "it is done"), context))
    assert context.done


def test_no_step_definition_is_fatal():
    """Test that an unmatched step raises and no handler runs."""
    registry = StepRegistry()
    called = []
    registry.define(StepKeyword.GIVEN, "something else", lambda context: called.append(True))
    with pytest.raises(NoStepDefinitionError) as excinfo:
        asyncio.run(
            StepExecutor(registry).execute(Step(StepKeyword.GIVEN, "an unknown step"), Context())
        )
    assert excinfo.value.keyword == "Given"
    assert excinfo.value.text == "an unknown step"
    assert "Given an unknown step" in str(excinfo.value)
    assert called == []


def test_handler_errors_propagate():
    registry = StepRegistry()

    def handler(context):
        raise ValueError("boom")

    registry.define(StepKeyword.GIVEN, "it fails", handler)
    with pytest.raises(ValueError, match="boom"):
        asyncio.run(StepExecutor(registry).execute(Step(StepKeyword.GIVEN, "it fails"), Context()))


def test_hooks_run_in_order_and_are_awaited():
    """Test that hooks of one type run sequentially in registration order."""
    registry = HookRegistry()
    events = []

    async def slow(context):
        await asyncio.sleep(0.01)
        events.append("slow")

    registry.register(HookDefinition(HookType.BEFORE, slow))
    registry.register(HookDefinition(HookType.AFTER, lambda context: events.append("after")))
    registry.register(HookDefinition(HookType.BEFORE, lambda context: events.append("fast")))
    asyncio.run(registry.execute_hooks(HookType.BEFORE, Context()))
    assert events == ["slow", "fast"]


def test_hooks_receive_context_and_clear():
    registry = HookRegistry()
    registry.register(HookDefinition(HookType.BEFORE_ALL, lambda context: context.set_up.append(1)))
    context = Context(set_up=[])
    asyncio.run(registry.execute_hooks(HookType.BEFORE_ALL, context))
    assert context.set_up == [1]
    registry.clear()
    assert registry.hooks(HookType.BEFORE_ALL) == []


def test_context_manager():
    """Test the key/value interface and in-place reset."""
    manager = ContextManager()
    context = manager.get_context()
    manager.set("total", 5)
    assert manager.get("total") == 5
    assert context.total == 5
    assert context["total"] == 5
    assert "total" in context
    manager.reset()
    assert manager.get_context() is context
    assert manager.get("total") is None
    assert "total" not in context


def test_contexts_are_isolated():
    """Test that two managers never share values."""
    first, second = ContextManager(), ContextManager()
    first.set("value", 1)
    assert second.get("value") is None
    assert first.get_context() is not second.get_context()


def test_context_missing_item():
    with pytest.raises(KeyError):
        Context()["missing"]
    with pytest.raises(KeyError):
        Context()["get"]


def test_context_keys_named_like_methods():
    """Test that stored values never replace the context's own behaviour."""
    manager = ContextManager()
    manager.set("get", 1)
    manager.set("clear", "x")
    assert manager.get("other") is None
    assert manager.get("get") == 1
    assert manager.get_context()["clear"] == "x"
    manager.reset()
    assert "get" not in manager.get_context()
    assert manager.get("clear", "gone") == "gone"
