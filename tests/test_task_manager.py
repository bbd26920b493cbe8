"""Tests for named background task tracking."""

from __future__ import annotations

import asyncio
import unittest

from mentor_chat.task_manager import TaskManager


class TaskManagerTests(unittest.IsolatedAsyncioTestCase):
    """Validate spawn, wait, and cancellation."""

    async def test_spawn_and_wait(self) -> None:
        manager = TaskManager()
        results: list[str] = []

        async def work() -> None:
            await asyncio.sleep(0)
            results.append("done")

        manager.spawn("job", work())
        self.assertTrue(manager.is_running("job"))
        await manager.wait("job")
        self.assertEqual(results, ["done"])
        await asyncio.sleep(0)
        self.assertFalse(manager.is_running("job"))

    async def test_wait_on_unknown_name_is_noop(self) -> None:
        await TaskManager().wait("missing")

    async def test_failed_task_is_logged(self) -> None:
        manager = TaskManager()

        async def boom() -> None:
            raise RuntimeError("broken")

        with self.assertLogs("mentor_chat.task_manager", level="WARNING") as logs:
            manager.spawn("job", boom())
            await manager.wait("job")
            await asyncio.sleep(0)
        self.assertTrue(any("task.exception" in line for line in logs.output))
        self.assertFalse(manager.is_running("job"))

    async def test_cancel_all(self) -> None:
        manager = TaskManager()
        started = asyncio.Event()

        async def forever() -> None:
            started.set()
            await asyncio.Event().wait()

        task = manager.spawn("job", forever())
        await started.wait()
        await manager.cancel_all()
        self.assertTrue(task.cancelled())
        self.assertFalse(manager.is_running("job"))


if __name__ == "__main__":
    unittest.main()
