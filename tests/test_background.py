import asyncio
import logging

import pytest

from app.core.background import BackgroundTaskRunner, run_with_timeout


class TestBackgroundTaskRunner:
    @pytest.mark.asyncio
    async def test_spawn_does_not_wait(self):
        runner = BackgroundTaskRunner()
        gate = asyncio.Event()
        done = []

        async def job():
            await gate.wait()
            done.append(True)

        runner.spawn(job(), name="job")
        assert runner.pending == 1
        assert done == []

        gate.set()
        await runner.drain(timeout=1)
        assert done == [True]
        assert runner.pending == 0

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, caplog):
        runner = BackgroundTaskRunner()

        async def boom():
            raise RuntimeError("store exploded")

        with caplog.at_level(logging.ERROR):
            runner.spawn(boom(), name="boom")
            await runner.drain(timeout=1)

        assert runner.pending == 0
        assert "boom" in caplog.text
        assert "store exploded" in caplog.text

    @pytest.mark.asyncio
    async def test_drain_gives_up_after_timeout(self):
        runner = BackgroundTaskRunner()
        gate = asyncio.Event()

        runner.spawn(gate.wait(), name="stuck")
        left = await runner.drain(timeout=0.05)

        assert left == 1
        gate.set()
        await runner.drain(timeout=1)

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks_spawned_meanwhile(self):
        runner = BackgroundTaskRunner()
        done = []

        async def second():
            done.append("second")

        async def first():
            await asyncio.sleep(0)
            runner.spawn(second(), name="second")

        runner.spawn(first(), name="first")
        await runner.drain(timeout=1)

        assert done == ["second"]


class TestRunWithTimeout:
    @pytest.mark.asyncio
    async def test_returns_result_in_time(self):
        async def quick():
            return 7

        assert await run_with_timeout(quick(), 1) == 7

    @pytest.mark.asyncio
    async def test_timeout_does_not_cancel_the_call(self):
        gate = asyncio.Event()
        finished = []

        async def slow():
            await gate.wait()
            finished.append(True)

        with pytest.raises(asyncio.TimeoutError):
            await run_with_timeout(slow(), 0.02, label="slow")

        gate.set()
        for _ in range(10):
            await asyncio.sleep(0)

        assert finished == [True]

    @pytest.mark.asyncio
    async def test_errors_propagate_to_the_caller(self):
        async def broken():
            raise ValueError("bad")

        with pytest.raises(ValueError):
            await run_with_timeout(broken(), 1)
