import asyncio
import pytest
from typing import List
from unittest.mock import AsyncMock

from pydantic import BaseModel, Field

from chat_tools.core.tools import (
    InvocationState,
    ToolCallRequest,
    ToolDefinition,
    ToolExecutor,
    ToolFailure,
    ToolInvocationEvent,
    ToolRegistry,
    ToolSuccess,
)


class SampleArgs(BaseModel):
    required_value: int = Field(description="A number.")


class SampleSuccess(ToolSuccess):
    doubled: int


def make_registry(func: AsyncMock) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        ToolDefinition(
            name="sample", description="sample tool", func=func, args_model=SampleArgs, success_model=SampleSuccess
        )
    )
    return registry


async def collect(executor: ToolExecutor, calls: List[ToolCallRequest]) -> List[ToolInvocationEvent]:
    return [event async for event in executor.stream(calls)]


@pytest.mark.asyncio
async def test_runs_tool_with_validated_args() -> None:
    func = AsyncMock(return_value=SampleSuccess(doubled=4))
    executor = ToolExecutor(registry=make_registry(func))

    events = await collect(executor, [ToolCallRequest(name="sample", arguments='{"required_value": "2"}', call_id="c1")])

    assert [event.state for event in events] == [InvocationState.PENDING, InvocationState.RESULT]
    assert events[0].args == {"required_value": "2"}
    assert events[0].result is None
    func.assert_awaited_once_with(SampleArgs(required_value=2))
    assert events[1].result == SampleSuccess(doubled=4)
    assert events[1].call_id == "c1"


@pytest.mark.asyncio
async def test_pending_events_come_before_results() -> None:
    release = asyncio.Event()

    async def slow(args: SampleArgs) -> SampleSuccess:
        await release.wait()
        return SampleSuccess(doubled=args.required_value * 2)

    async def fast(args: SampleArgs) -> SampleSuccess:
        release.set()
        return SampleSuccess(doubled=args.required_value * 2)

    registry = ToolRegistry()
    registry.register(ToolDefinition(name="slow", description="slow", func=slow, args_model=SampleArgs))
    registry.register(ToolDefinition(name="fast", description="fast", func=fast, args_model=SampleArgs))
    executor = ToolExecutor(registry=registry)

    events = await collect(
        executor,
        [
            ToolCallRequest(name="slow", arguments={"required_value": 1}, call_id="slow_1"),
            ToolCallRequest(name="fast", arguments={"required_value": 2}, call_id="fast_1"),
        ],
    )

    assert [(e.call_id, e.state) for e in events[:2]] == [
        ("slow_1", InvocationState.PENDING),
        ("fast_1", InvocationState.PENDING),
    ]
    # The slow call can only finish after the fast one, so completion order differs from request order.
    assert [e.call_id for e in events[2:]] == ["fast_1", "slow_1"]
    assert all(e.state is InvocationState.RESULT for e in events[2:])


@pytest.mark.asyncio
async def test_run_returns_results_in_request_order() -> None:
    func = AsyncMock(side_effect=lambda args: SampleSuccess(doubled=args.required_value * 2))
    executor = ToolExecutor(registry=make_registry(func))

    results = await executor.run(
        [
            ToolCallRequest(name="sample", arguments={"required_value": 1}, call_id="a"),
            ToolCallRequest(name="sample", arguments={"required_value": 5}, call_id="b"),
        ]
    )

    assert [r.call_id for r in results] == ["a", "b"]
    assert [r.result for r in results] == [SampleSuccess(doubled=2), SampleSuccess(doubled=10)]


@pytest.mark.asyncio
async def test_invalid_arguments_never_reach_the_tool() -> None:
    func = AsyncMock()
    executor = ToolExecutor(registry=make_registry(func))

    [resolved] = await executor.run([ToolCallRequest(name="sample", arguments={"required_value": "abc"}, call_id="c1")])

    func.assert_not_awaited()
    assert isinstance(resolved.result, ToolFailure)
    assert resolved.result.error.startswith("Invalid arguments for tool 'sample'")


@pytest.mark.asyncio
async def test_unknown_tool() -> None:
    executor = ToolExecutor(registry=ToolRegistry())

    [resolved] = await executor.run([ToolCallRequest(name="missing", arguments={}, call_id="c1")])

    assert resolved.result == ToolFailure(error="Tool 'missing' not found in registry.")


@pytest.mark.asyncio
async def test_undecodable_arguments() -> None:
    func = AsyncMock()
    executor = ToolExecutor(registry=make_registry(func))

    events = await collect(executor, [ToolCallRequest(name="sample", arguments="{not json", call_id="c1")])

    assert events[0].args == {}
    assert isinstance(events[1].result, ToolFailure)
    assert events[1].result.error.startswith("Failed to parse arguments for tool 'sample'")
    func.assert_not_awaited()


@pytest.mark.asyncio
async def test_arguments_must_be_an_object() -> None:
    executor = ToolExecutor(registry=make_registry(AsyncMock()), argument_error_formatter=lambda name, err: f"bad: {err}")

    [resolved] = await executor.run([ToolCallRequest(name="sample", arguments="[1, 2]", call_id="c1")])

    assert resolved.result == ToolFailure(error="bad: Function arguments must decode to a JSON object.")


@pytest.mark.asyncio
async def test_no_calls_yield_nothing() -> None:
    executor = ToolExecutor(registry=ToolRegistry())

    assert await collect(executor, []) == []


@pytest.mark.asyncio
async def test_tool_exception_resolves_to_failure() -> None:
    async def broken(args: SampleArgs) -> SampleSuccess:
        raise RuntimeError("boom")

    registry = make_registry(AsyncMock(side_effect=lambda args: SampleSuccess(doubled=args.required_value * 2)))
    registry.register(ToolDefinition(name="broken", description="broken", func=broken, args_model=SampleArgs))
    executor = ToolExecutor(registry=registry)

    events = await collect(
        executor,
        [
            ToolCallRequest(name="broken", arguments={"required_value": 1}, call_id="b1"),
            ToolCallRequest(name="sample", arguments={"required_value": 3}, call_id="s1"),
        ],
    )

    assert [e.state for e in events[:2]] == [InvocationState.PENDING, InvocationState.PENDING]
    resolved = {e.call_id: e.result for e in events[2:]}
    assert resolved == {
        "b1": ToolFailure(error="Error executing 'broken': boom"),
        "s1": SampleSuccess(doubled=6),
    }
