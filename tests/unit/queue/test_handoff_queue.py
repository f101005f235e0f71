# -*- coding: utf-8 -*-
"""Unit tests for HandoffQueue."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import Mock

import pytest

from repl_queue.exceptions import (
    QueueClosedError,
    QueueConsumerBusyError,
    QueueDone,
    QueueEmpty,
)
from repl_queue.queue import QUEUE_DONE, HandoffQueue


async def _collect(queue: HandoffQueue[Any]) -> list[Any]:
    return [item async for item in queue]


async def _suspended_get(queue: HandoffQueue[Any]) -> asyncio.Task[Any]:
    """Start a get() and let it reach its suspension point."""
    task = asyncio.create_task(queue.get())
    await asyncio.sleep(0)
    assert not task.done()
    return task


# --- ordering ---


async def test_get_returns_pushed_values_in_fifo_order(queue: HandoffQueue[Any]) -> None:
    queue.push("v1", "v2").push("v3")

    assert [await queue.get() for _ in range(3)] == ["v1", "v2", "v3"]


async def test_unshift_inserts_before_buffered_values(queue: HandoffQueue[Any]) -> None:
    queue.push("a", "b")
    queue.unshift("c")

    assert [await queue.get() for _ in range(3)] == ["c", "a", "b"]


async def test_repeated_unshift_delivers_in_reverse_call_order(queue: HandoffQueue[Any]) -> None:
    queue.push("tail")
    queue.unshift("first")
    queue.unshift("second")

    assert [await queue.get() for _ in range(3)] == ["second", "first", "tail"]


async def test_unshift_with_several_values_matches_repeated_calls(queue: HandoffQueue[Any]) -> None:
    queue.unshift("x", "y")

    assert [await queue.get() for _ in range(2)] == ["y", "x"]


async def test_interleaved_producers_are_buffered_in_call_order(queue: HandoffQueue[Any]) -> None:
    def producer(value: str) -> None:
        queue.push(value)

    producer("a")
    producer("b")

    assert queue.size == 2
    assert await queue.get() == "a"
    assert await queue.get() == "b"
    assert queue.size == 0


# --- hand-off ---


async def test_push_hands_value_to_waiting_consumer_without_buffering(
    queue: HandoffQueue[Any],
) -> None:
    task = await _suspended_get(queue)

    queue.push("x")

    assert queue.size == 0
    assert await task == "x"


async def test_only_first_pushed_value_is_handed_off(queue: HandoffQueue[Any]) -> None:
    task = await _suspended_get(queue)

    queue.push("x", "y", "z")

    assert queue.size == 2
    assert await task == "x"
    assert await queue.get() == "y"
    assert await queue.get() == "z"


async def test_unshift_hands_value_to_waiting_consumer(queue: HandoffQueue[Any]) -> None:
    task = await _suspended_get(queue)

    queue.unshift("front")

    assert queue.size == 0
    assert await task == "front"


async def test_unshift_after_hand_off_is_delivered_after_handed_off_value(
    queue: HandoffQueue[Any],
) -> None:
    task = await _suspended_get(queue)

    queue.push("handed")
    queue.push("buffered")
    queue.unshift("front")

    assert await task == "handed"
    assert await queue.get() == "front"
    assert await queue.get() == "buffered"


async def test_get_does_not_suspend_when_items_are_buffered(queue: HandoffQueue[Any]) -> None:
    queue.push(1)

    coro = queue.get()
    with pytest.raises(StopIteration) as stop:
        coro.send(None)

    assert stop.value.value == 1


async def test_second_concurrent_consumer_is_rejected(queue: HandoffQueue[Any]) -> None:
    first = await _suspended_get(queue)

    with pytest.raises(QueueConsumerBusyError):
        await queue.get()

    queue.push("only")
    assert await first == "only"


async def test_cancelled_get_does_not_lose_later_values(queue: HandoffQueue[Any]) -> None:
    task = await _suspended_get(queue)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    queue.push("kept")

    assert queue.size == 1
    assert await queue.get() == "kept"


async def test_value_delivered_to_cancelled_consumer_is_requeued(
    queue: HandoffQueue[Any],
) -> None:
    task = await _suspended_get(queue)
    queue.push("in-flight", "next")
    task.cancel()  # cancelled after hand-off, before resuming
    with pytest.raises(asyncio.CancelledError):
        await task

    assert await queue.get() == "in-flight"
    assert await queue.get() == "next"


# --- termination ---


async def test_iteration_drains_buffered_items_after_close(queue: HandoffQueue[Any]) -> None:
    queue.push("a", "b")
    queue.close()

    assert await _collect(queue) == ["a", "b"]
    assert queue.size == 0


async def test_close_ends_waiting_iteration(queue: HandoffQueue[Any]) -> None:
    consumer = asyncio.create_task(_collect(queue))
    await asyncio.sleep(0)
    queue.push(1)
    await asyncio.sleep(0)
    queue.push(2)

    queue.close()

    assert await consumer == [1, 2]


async def test_termination_is_durable_across_repeated_advances(
    queue: HandoffQueue[Any],
) -> None:
    queue.close()
    items = queue.items()

    for _ in range(5):
        with pytest.raises(StopAsyncIteration):
            await anext(items)
    assert await _collect(queue) == []


async def test_get_raises_queue_done_after_close(queue: HandoffQueue[Any]) -> None:
    queue.push("last")
    queue.close()

    assert await queue.get() == "last"
    with pytest.raises(QueueDone):
        await queue.get()
    with pytest.raises(QueueDone):
        await queue.get()


async def test_close_wakes_suspended_get_with_queue_done(queue: HandoffQueue[Any]) -> None:
    task = await _suspended_get(queue)

    queue.close()

    with pytest.raises(QueueDone):
        await task


async def test_close_is_idempotent(queue: HandoffQueue[Any], logger: Mock) -> None:
    queue.close()
    queue.close()

    assert queue.closed
    assert await _collect(queue) == []
    assert [c.args[0] for c in logger.debug.call_args_list].count("queue_closed") == 1


def test_close_does_not_need_a_running_loop(queue: HandoffQueue[Any]) -> None:
    queue.push("x")
    queue.close()

    assert queue.closed
    assert queue.get_nowait() == "x"


# --- closed-queue writes ---


@pytest.mark.parametrize("operation", ["push", "unshift"])
async def test_writes_after_close_are_rejected(
    queue: HandoffQueue[Any],
    logger: Mock,
    operation: str,
) -> None:
    queue.push("kept")
    queue.close()

    with pytest.raises(QueueClosedError):
        getattr(queue, operation)("late")

    assert queue.size == 1
    assert queue.closed
    assert await _collect(queue) == ["kept"]
    logger.warning.assert_called_once_with("queue_push_rejected", queue_pending_items=1)


# --- boxing ---


@pytest.mark.parametrize("value", [None, QUEUE_DONE, (), 0, ""])
async def test_values_resembling_the_sentinel_are_delivered(
    queue: HandoffQueue[Any],
    value: Any,
) -> None:
    queue.push(value, "after")
    queue.close()

    assert await _collect(queue) == [value, "after"]


async def test_sentinel_like_value_handed_off_does_not_end_iteration(
    queue: HandoffQueue[Any],
) -> None:
    consumer = asyncio.create_task(_collect(queue))
    await asyncio.sleep(0)

    queue.push(QUEUE_DONE)
    await asyncio.sleep(0)
    queue.close()

    assert await consumer == [QUEUE_DONE]


# --- non-blocking and sizing ---


def test_get_nowait(queue: HandoffQueue[Any]) -> None:
    with pytest.raises(QueueEmpty):
        queue.get_nowait()

    queue.push(1)
    assert queue.get_nowait() == 1

    queue.close()
    with pytest.raises(QueueDone):
        queue.get_nowait()


def test_size_len_and_empty(queue: HandoffQueue[Any]) -> None:
    assert queue.empty()
    assert len(queue) == 0

    queue.push(1, 2)

    assert queue.size == 2
    assert queue.qsize() == 2
    assert len(queue) == 2
    assert not queue.empty()
    assert "open" in repr(queue)
