from __future__ import annotations

import asyncio
import math

from reqctl import RequestController, VirtualTimerScheduler


def run_async(coro):
    return asyncio.run(coro)


def _recording_operation(calls: list, value="ok"):
    async def operation(arg=None):
        calls.append(arg)
        return value

    return operation


def test_debounce_collapses_rapid_triggers_into_last_call():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        calls: list = []
        controller = RequestController(
            _recording_operation(calls),
            {"manual": True, "debounce_interval_ms": 100},
            scheduler=scheduler,
        )

        for index in range(4):
            controller.replace_options(controller.options.with_changes(initial_data=index))
            assert controller.trigger() is None
            await scheduler.advance(30)

        controller.replace_options(controller.options.with_changes(initial_data="last"))
        controller.trigger()
        await scheduler.advance(99)
        assert calls == []

        await scheduler.advance(1)
        assert calls == ["last"]

        await scheduler.advance(500)
        assert calls == ["last"]

    run_async(scenario())


def test_throttle_limits_executions_per_interval():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        calls: list = []
        controller = RequestController(
            _recording_operation(calls),
            {"manual": True, "throttle_interval_ms": 100},
            scheduler=scheduler,
        )

        duration_ms = 250
        for _ in range(duration_ms // 10):
            controller.trigger()
            await scheduler.advance(10)

        assert len(calls) == 3
        assert len(calls) <= math.ceil(duration_ms / 100)

    run_async(scenario())


def test_throttle_returns_task_only_for_leading_call():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        controller = RequestController(
            _recording_operation([]),
            {"manual": True, "throttle_interval_ms": 100},
            scheduler=scheduler,
        )

        first = controller.trigger()
        second = controller.trigger()
        assert isinstance(first, asyncio.Task)
        assert second is None
        await first

    run_async(scenario())


def test_debounce_takes_precedence_over_throttle():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        calls: list = []
        controller = RequestController(
            _recording_operation(calls),
            {"manual": True, "debounce_interval_ms": 50, "throttle_interval_ms": 10},
            scheduler=scheduler,
        )

        assert controller.trigger() is None
        assert controller.trigger() is None
        await scheduler.advance(50)
        assert len(calls) == 1

    run_async(scenario())


def test_unsuppressed_triggers_run_concurrently_last_write_wins():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        calls: list = []

        async def operation(arg):
            calls.append(arg["value"])
            future = asyncio.get_running_loop().create_future()
            scheduler.schedule_once(lambda: future.set_result(arg["value"]), arg["delay"])
            return await future

        controller = RequestController(operation, {"manual": True}, scheduler=scheduler)

        controller.replace_options(
            controller.options.with_changes(initial_data={"value": "slow", "delay": 50})
        )
        slow = controller.trigger()
        controller.replace_options(
            controller.options.with_changes(initial_data={"value": "fast", "delay": 10})
        )
        fast = controller.trigger()
        assert slow is not fast
        assert controller.in_flight == 2

        await scheduler.advance(20)
        assert controller.data == "fast"
        assert controller.loading is False

        await scheduler.advance(40)
        assert calls == ["slow", "fast"]
        assert controller.data == "slow"
        assert controller.in_flight == 0

    run_async(scenario())


def test_changing_suppression_window_rebuilds_suppressor():
    async def scenario() -> None:
        scheduler = VirtualTimerScheduler()
        calls: list = []
        controller = RequestController(
            _recording_operation(calls),
            {"manual": True, "debounce_interval_ms": 100},
            scheduler=scheduler,
        )

        controller.trigger()
        controller.replace_options(
            controller.options.with_changes(debounce_interval_ms=None)
        )
        assert scheduler.pending_count == 0

        task = controller.trigger()
        assert task is not None
        await task
        await scheduler.advance(200)
        assert len(calls) == 1

    run_async(scenario())
