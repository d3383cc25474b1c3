from __future__ import annotations

import asyncio
import logging

import pytest

from reqctl import (
    ControllerSettings,
    OperationFailure,
    RequestController,
    VirtualTimerScheduler,
    describe_failure,
)


def run_async(coro):
    return asyncio.run(coro)


def _failing_operation(exc: BaseException):
    async def operation(arg=None):
        _ = arg
        raise exc

    return operation


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (RuntimeError("boom"), "boom"),
        (OperationFailure({"code": 500, "reason": "upstream"}), '{"code": 500, "reason": "upstream"}'),
        (OperationFailure(["a", 1]), '["a", 1]'),
        (ValueError("bad", 3), '["bad", 3]'),
        (OperationFailure(404), "404"),
        (KeyError("missing"), "missing"),
    ],
)
def test_describe_failure_stringifies_payload(exc, expected):
    assert describe_failure(exc) == expected


@pytest.mark.parametrize(
    "exc",
    [OperationFailure(), OperationFailure(0), OperationFailure(""), OperationFailure({})],
)
def test_describe_failure_ignores_falsy_operation_failure_payloads(exc):
    assert describe_failure(exc) is None


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (Exception(), "Exception"),
        (RuntimeError(), "RuntimeError"),
        (RuntimeError(""), "RuntimeError"),
        (ValueError({}), "ValueError"),
        (asyncio.TimeoutError(), "TimeoutError"),
    ],
)
def test_describe_failure_names_bare_exceptions(exc, expected):
    assert describe_failure(exc) == expected


def test_describe_failure_falls_back_to_str_for_unencodable_mapping():
    payload = {("tuple", "key"): 1}
    assert describe_failure(OperationFailure(payload)) == str(payload)


def test_failure_sets_error_string_and_clears_loading():
    async def scenario() -> None:
        controller = RequestController(
            _failing_operation(OperationFailure({"status": "denied"})),
            scheduler=VirtualTimerScheduler(),
        )
        await controller.start()

        assert controller.error == '{"status": "denied"}'
        assert controller.data is None
        assert controller.loading is False

    run_async(scenario())


def test_empty_failure_leaves_error_unset():
    async def scenario() -> None:
        controller = RequestController(
            _failing_operation(OperationFailure("")),
            scheduler=VirtualTimerScheduler(),
        )
        await controller.start()

        assert controller.error is None
        assert controller.loading is False

    run_async(scenario())


def test_operation_timeout_is_recorded_as_error():
    async def scenario() -> None:
        async def operation(arg=None):
            _ = arg
            await asyncio.wait_for(asyncio.sleep(1), timeout=0.001)

        controller = RequestController(operation, name="slow")
        await controller.start()

        assert controller.error == "TimeoutError"
        assert controller.data is None
        assert controller.loading is False
        await controller.aclose()

    run_async(scenario())


def test_repeated_equal_error_does_not_notify_again():
    async def scenario() -> None:
        async def operation(arg=None):
            _ = arg
            # A fresh, equal string on every call.
            raise RuntimeError("".join(["bo", "om"]))

        controller = RequestController(
            operation, {"manual": True}, scheduler=VirtualTimerScheduler()
        )
        controller.start()
        snapshots = []
        controller.subscribe(snapshots.append)

        await controller.trigger()
        assert [(s.loading, s.error) for s in snapshots] == [
            (True, None),
            (True, "boom"),
            (False, "boom"),
        ]

        snapshots.clear()
        await controller.trigger()
        assert [(s.loading, s.error) for s in snapshots] == [
            (True, "boom"),
            (False, "boom"),
        ]

    run_async(scenario())


def test_on_success_failure_is_recorded_as_error():
    async def scenario() -> None:
        async def operation(arg=None):
            _ = arg
            return "payload"

        def on_success(result) -> None:
            raise RuntimeError(f"could not handle {result}")

        controller = RequestController(
            operation, {"on_success": on_success}, scheduler=VirtualTimerScheduler()
        )
        await controller.start()

        assert controller.data == "payload"
        assert controller.error == "could not handle payload"
        assert controller.loading is False

    run_async(scenario())


def test_failures_are_logged_as_warnings(caplog):
    caplog.set_level(logging.WARNING, logger="reqctl.controller")

    async def scenario() -> None:
        controller = RequestController(
            _failing_operation(RuntimeError("boom")),
            scheduler=VirtualTimerScheduler(),
            name="profile",
        )
        await controller.start()

    run_async(scenario())
    assert any(
        record.levelno == logging.WARNING and "Request profile failed: boom" in record.getMessage()
        for record in caplog.records
    )


def test_failure_logging_can_be_disabled(caplog):
    caplog.set_level(logging.WARNING, logger="reqctl.controller")

    async def scenario() -> None:
        controller = RequestController(
            _failing_operation(RuntimeError("boom")),
            scheduler=VirtualTimerScheduler(),
            settings=ControllerSettings(log_failures=False),
        )
        await controller.start()
        assert controller.error == "boom"

    run_async(scenario())
    assert not [r for r in caplog.records if r.name == "reqctl.controller"]
