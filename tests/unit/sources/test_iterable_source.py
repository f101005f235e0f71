# -*- coding: utf-8 -*-
"""Unit tests for IterableSource."""

from __future__ import annotations

from repl_queue.sources import Chunk, IterableSource


async def test_emits_chunks_in_order_then_end() -> None:
    source = IterableSource(["a\n", b"b\n"])
    received: list[Chunk] = []
    events: list[str] = []
    source.on_data(received.append)
    source.on_end(lambda: events.append("end"))

    await source.start()
    assert source.feed_task is not None
    await source.feed_task

    assert received == ["a\n", b"b\n"]
    assert events == ["end"]
    assert source.ended


async def test_start_is_idempotent() -> None:
    source = IterableSource(["x"])
    received: list[Chunk] = []
    source.on_data(received.append)

    await source.start()
    task = source.feed_task
    await source.start()
    assert source.feed_task is task
    assert task is not None
    await task

    assert received == ["x"]


async def test_pause_stops_delivery_and_suppresses_end() -> None:
    source = IterableSource(["1", "2", "3"])
    received: list[Chunk] = []
    ended: list[bool] = []

    def on_data(chunk: Chunk) -> None:
        received.append(chunk)
        source.pause()

    source.on_data(on_data)
    source.on_end(lambda: ended.append(True))

    await source.start()
    assert source.feed_task is not None
    await source.feed_task

    assert received == ["1"]
    assert ended == []
    assert source.paused


async def test_end_can_be_disabled() -> None:
    source = IterableSource(["only"], end=False)
    ended: list[bool] = []
    source.on_end(lambda: ended.append(True))

    await source.start()
    assert source.feed_task is not None
    await source.feed_task

    assert ended == []
    assert not source.ended
