"""Tests for the asyncio reader-writer lock."""

import asyncio

import pytest

from core.rwlock import ReadWriteLock


async def settle(rounds: int = 5):
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_readers_share_the_lock():
    lock = ReadWriteLock()
    await lock.acquire_read()
    await lock.acquire_read()

    assert lock.readers == 2

    await lock.release_read()
    await lock.release_read()
    assert lock.readers == 0


@pytest.mark.asyncio
async def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    await lock.acquire_read()

    writer = asyncio.create_task(lock.acquire_write())
    await settle()
    assert not lock.writer_active
    assert not writer.done()

    await lock.release_read()
    await asyncio.wait_for(writer, timeout=1)
    assert lock.writer_active

    await lock.release_write()
    assert not lock.writer_active


@pytest.mark.asyncio
async def test_new_readers_queue_behind_waiting_writer():
    lock = ReadWriteLock()
    await lock.acquire_read()

    writer = asyncio.create_task(lock.acquire_write())
    await settle()
    late_reader = asyncio.create_task(lock.acquire_read())
    await settle()

    assert lock.readers == 1
    assert not late_reader.done()

    await lock.release_read()
    await asyncio.wait_for(writer, timeout=1)
    assert lock.writer_active
    assert not late_reader.done()

    await lock.release_write()
    await asyncio.wait_for(late_reader, timeout=1)
    assert lock.readers == 1
    await lock.release_read()


@pytest.mark.asyncio
async def test_cancelled_writer_releases_waiting_readers():
    lock = ReadWriteLock()
    await lock.acquire_read()

    writer = asyncio.create_task(lock.acquire_write())
    await settle()
    reader = asyncio.create_task(lock.acquire_read())
    await settle()
    assert not reader.done()

    writer.cancel()
    with pytest.raises(asyncio.CancelledError):
        await writer

    await asyncio.wait_for(reader, timeout=1)
    assert lock.readers == 2


@pytest.mark.asyncio
async def test_context_managers():
    lock = ReadWriteLock()
    async with lock.reader():
        assert lock.readers == 1
    async with lock.writer():
        assert lock.writer_active
    assert lock.readers == 0
    assert not lock.writer_active


@pytest.mark.asyncio
async def test_unbalanced_release_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        await lock.release_read()
    with pytest.raises(RuntimeError):
        await lock.release_write()


@pytest.fixture
def idle_lock():
    return ReadWriteLock()


@pytest.mark.asyncio
async def test_lock_built_outside_running_loop(idle_lock):
    await idle_lock.acquire_read()
    writer = asyncio.create_task(idle_lock.acquire_write())
    await settle()
    assert not writer.done()

    await idle_lock.release_read()
    await asyncio.wait_for(writer, timeout=1)
    assert idle_lock.writer_active
    await idle_lock.release_write()
