"""Print dispatcher - try delivery methods in order until one succeeds."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from printhelper.config import get_settings
from printhelper.shared.errors import DeliveryAttemptError, DispatchError
from printhelper.shared.ids import timestamp_ms
from printhelper.shared.logging import get_logger
from printhelper.shared.process import ProcessResult, run_process

from .helper import find_print_helper
from .methods import DEFAULT_METHODS, DeliveryMethod
from .schemas import DeliveryResult

logger = get_logger(__name__)

ProcessRunner = Callable[[list[str], float], Awaitable[ProcessResult]]


class PrintDispatcher:
    """Runs the delivery-method chain against one file and printer."""

    def __init__(
        self,
        methods: Sequence[DeliveryMethod] = DEFAULT_METHODS,
        helper_paths: Sequence[str] | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.methods = tuple(methods)
        self.helper_paths = (
            list(helper_paths) if helper_paths is not None else get_settings().helper_paths
        )
        self._runner = runner or run_process

    async def _attempt(
        self,
        method: DeliveryMethod,
        helper_path: str,
        file_path: Path,
        printer: str,
    ) -> None:
        """Run one method; raises DeliveryAttemptError on any failure."""
        argv = method.build_argv(helper_path, str(file_path), printer)
        logger.info(f"{method.name} command: {argv}")

        try:
            result = await self._runner(argv, method.timeout)
        except TimeoutError as e:
            raise DeliveryAttemptError(
                method.name, f"timed out after {method.timeout:g}s"
            ) from e
        except OSError as e:
            raise DeliveryAttemptError(method.name, f"could not start helper: {e}") from e

        if result.stdout:
            logger.info(f"{method.name} stdout: {result.stdout}")
        if result.stderr:
            logger.warning(f"{method.name} stderr: {result.stderr}")

        if result.returncode != 0:
            raise DeliveryAttemptError(
                method.name,
                f"exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

    async def dispatch(
        self,
        file_path: Path,
        printer: str,
        job_id: str | None = None,
    ) -> DeliveryResult:
        """
        Print ``file_path`` on ``printer``.

        Methods run strictly in order; the first success ends the chain.

        Raises:
            HelperNotFoundError: no helper binary at any known path
            DispatchError: every method failed
        """
        job_id = job_id or str(timestamp_ms())
        helper_path = find_print_helper(self.helper_paths)
        logger.info(f"Starting SumatraPDF print: {file_path} -> {printer}")

        failures: list[DeliveryAttemptError] = []
        for method in self.methods:
            try:
                await self._attempt(method, helper_path, file_path, printer)
            except DeliveryAttemptError as e:
                logger.warning(f"{e.message}; trying next method")
                failures.append(e)
                continue

            logger.info(f"{method.name} succeeded")
            if method.settle_delay > 0:
                # The helper can exit before the spooler has consumed the file
                await asyncio.sleep(method.settle_delay)

            reported = method.reported_printer(printer)
            return DeliveryResult(
                method=method.name,
                printer=reported,
                job_id=job_id,
                verified=method.verified,
                message=f"PDF printed via {method.name}",
            )

        raise DispatchError(failures, job_id=job_id)
