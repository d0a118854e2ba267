"""Tests for the print dispatcher."""

import sys
from pathlib import Path

import pytest

from printhelper.modules.dispatch.helper import find_print_helper, probe_print_helper
from printhelper.modules.dispatch.methods import (
    DEFAULT_METHODS,
    SYSTEM_DEFAULT_PRINTER,
    DeliveryMethod,
)
from printhelper.modules.dispatch.service import PrintDispatcher
from printhelper.shared.errors import DispatchError, HelperNotFoundError
from printhelper.shared.process import ProcessResult


def instant(methods):
    """Copies of the given methods without settle delays."""
    return [
        DeliveryMethod(
            name=m.name,
            args=m.args,
            timeout=m.timeout,
            settle_delay=0,
            verified=m.verified,
            targets_default=m.targets_default,
        )
        for m in methods
    ]


class ScriptedRunner:
    """Returns or raises scripted outcomes in call order."""

    def __init__(self, outcomes: list[object]) -> None:
        self.outcomes = outcomes
        self.calls: list[tuple[list[str], float]] = []

    async def __call__(self, argv: list[str], timeout: float) -> ProcessResult:
        self.calls.append((argv, timeout))
        outcome = self.outcomes[len(self.calls) - 1]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


OK = ProcessResult(0, "", "")
FAIL = ProcessResult(1, "", "printer not found")


@pytest.fixture
def helper(tmp_path: Path) -> str:
    path = tmp_path / "SumatraPDF.exe"
    path.write_bytes(b"")
    return str(path)


@pytest.fixture
def pdf(tmp_path: Path) -> Path:
    path = tmp_path / "print_job_1.pdf"
    path.write_bytes(b"%PDF-1.4")
    return path


class TestDefaultChain:
    def test_order_and_parameters(self) -> None:
        assert [m.name for m in DEFAULT_METHODS] == [
            "SumatraPDF Standard",
            "SumatraPDF Default Print",
            "SumatraPDF Simple Print",
            "SumatraPDF Print Dialog",
        ]
        assert [m.timeout for m in DEFAULT_METHODS] == [30, 25, 20, 15]
        assert [m.settle_delay for m in DEFAULT_METHODS] == [8, 6, 5, 0]
        assert [m.verified for m in DEFAULT_METHODS] == [True, True, True, False]

    def test_build_argv(self) -> None:
        argv = DEFAULT_METHODS[0].build_argv("sumatra.exe", "C:\\tmp\\a.pdf", "EPSON TM")
        assert argv == [
            "sumatra.exe", "-print-to", "EPSON TM", "C:\\tmp\\a.pdf", "-exit-when-done", "-silent",
        ]

    def test_default_method_has_no_printer_argument(self) -> None:
        argv = DEFAULT_METHODS[1].build_argv("sumatra.exe", "a.pdf", "EPSON TM")
        assert "EPSON TM" not in argv
        assert "-print-to-default" in argv


class TestHelperDiscovery:
    def test_first_existing_path(self, helper: str, tmp_path: Path) -> None:
        missing = str(tmp_path / "missing.exe")
        assert probe_print_helper([missing, helper]) == helper

    def test_missing_helper_raises(self, tmp_path: Path) -> None:
        missing = str(tmp_path / "missing.exe")
        with pytest.raises(HelperNotFoundError) as exc_info:
            find_print_helper([missing])
        assert exc_info.value.probed_paths == [missing]

    async def test_dispatch_fails_fast_without_helper(self, pdf: Path, tmp_path: Path) -> None:
        runner = ScriptedRunner([OK])
        dispatcher = PrintDispatcher(helper_paths=[str(tmp_path / "nope.exe")], runner=runner)

        with pytest.raises(HelperNotFoundError):
            await dispatcher.dispatch(pdf, "EPSON")
        assert runner.calls == []


class TestDispatch:
    async def test_first_method_success_short_circuits(self, helper: str, pdf: Path) -> None:
        runner = ScriptedRunner([OK, OK, OK, OK])
        dispatcher = PrintDispatcher(instant(DEFAULT_METHODS), [helper], runner)

        result = await dispatcher.dispatch(pdf, "EPSON TM", job_id="42")

        assert len(runner.calls) == 1
        assert result.method == "SumatraPDF Standard"
        assert result.printer == "EPSON TM"
        assert result.job_id == "42"
        assert result.verified is True
        assert runner.calls[0][1] == 30

    async def test_later_methods_not_invoked_after_success(self, helper: str, pdf: Path) -> None:
        runner = ScriptedRunner([FAIL, TimeoutError(), OK, OK])
        dispatcher = PrintDispatcher(instant(DEFAULT_METHODS), [helper], runner)

        result = await dispatcher.dispatch(pdf, "EPSON TM")

        assert len(runner.calls) == 3
        assert result.method == "SumatraPDF Simple Print"
        assert result.printer == "EPSON TM"

    async def test_default_method_reports_sentinel_printer(self, helper: str, pdf: Path) -> None:
        runner = ScriptedRunner([OSError("cannot launch"), OK])
        dispatcher = PrintDispatcher(instant(DEFAULT_METHODS), [helper], runner)

        result = await dispatcher.dispatch(pdf, "EPSON TM")

        assert result.method == "SumatraPDF Default Print"
        assert result.printer == SYSTEM_DEFAULT_PRINTER

    async def test_dialog_fallback_is_unverified(self, helper: str, pdf: Path) -> None:
        runner = ScriptedRunner([FAIL, FAIL, FAIL, OK])
        dispatcher = PrintDispatcher(instant(DEFAULT_METHODS), [helper], runner)

        result = await dispatcher.dispatch(pdf, "EPSON TM")

        assert result.method == "SumatraPDF Print Dialog"
        assert result.verified is False

    async def test_all_methods_fail(self, helper: str, pdf: Path) -> None:
        runner = ScriptedRunner([FAIL, FAIL, TimeoutError(), OSError("no such file")])
        dispatcher = PrintDispatcher(instant(DEFAULT_METHODS), [helper], runner)

        with pytest.raises(DispatchError) as exc_info:
            await dispatcher.dispatch(pdf, "EPSON TM", job_id="7")

        error = exc_info.value
        assert len(runner.calls) == 4
        assert len(error.attempts) == 4
        assert "SumatraPDF Print Dialog" in str(error)
        assert "no such file" in str(error)
        assert error.job_id == "7"

    async def test_settle_delay_applied_after_success(
        self, helper: str, pdf: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        slept: list[float] = []

        async def fake_sleep(seconds: float) -> None:
            slept.append(seconds)

        monkeypatch.setattr("printhelper.modules.dispatch.service.asyncio.sleep", fake_sleep)
        dispatcher = PrintDispatcher(DEFAULT_METHODS, [helper], ScriptedRunner([FAIL, OK]))

        await dispatcher.dispatch(pdf, "EPSON TM")

        assert slept == [6.0]


class TestRealProcesses:
    """Run the dispatcher against the Python interpreter as the helper binary."""

    async def test_exit_status_drives_outcome(self, pdf: Path) -> None:
        methods = [
            DeliveryMethod("fails", ("-c", "import sys; sys.exit(3)"), timeout=10),
            DeliveryMethod("works", ("-c", "import sys; sys.exit(0)", "{file}", "{printer}"), timeout=10),
        ]
        dispatcher = PrintDispatcher(methods, [sys.executable])

        result = await dispatcher.dispatch(pdf, "Any Printer")

        assert result.method == "works"

    async def test_timeout_falls_through(self, pdf: Path) -> None:
        methods = [
            DeliveryMethod("hangs", ("-c", "import time; time.sleep(30)"), timeout=0.5),
            DeliveryMethod("works", ("-c", "pass"), timeout=10),
        ]
        dispatcher = PrintDispatcher(methods, [sys.executable])

        result = await dispatcher.dispatch(pdf, "Any Printer")

        assert result.method == "works"

    async def test_exhaustion_reports_exit_status(self, pdf: Path) -> None:
        methods = [
            DeliveryMethod("only", ("-c", "import sys; sys.stderr.write('jam'); sys.exit(2)"), timeout=10),
        ]
        dispatcher = PrintDispatcher(methods, [sys.executable])

        with pytest.raises(DispatchError) as exc_info:
            await dispatcher.dispatch(pdf, "Any Printer")

        attempt = exc_info.value.attempts[0]
        assert attempt.returncode == 2
        assert attempt.details["stderr"] == "jam"
