"""
Job service - render the receipt, pick a printer, dispatch, clean up.

The rendered file belongs to this service from creation to deletion.
After a successful dispatch it is removed once the grace period has
passed (the helper may still hold it open); on any failure it is
removed straight away.
"""

import asyncio
from datetime import datetime
from pathlib import Path

from printhelper.config import Settings, get_settings
from printhelper.modules.devices.selector import select_target
from printhelper.modules.devices.service import DeviceDirectory
from printhelper.modules.dispatch.schemas import DeliveryResult
from printhelper.modules.dispatch.service import PrintDispatcher
from printhelper.modules.render.receipt import build_receipt_html
from printhelper.modules.render.service import RECEIPT_LAYOUT, RenderService
from printhelper.modules.render.types import RenderedDocument
from printhelper.shared.errors import CleanupError, NoPrinterAvailableError
from printhelper.shared.ids import timestamp_ms
from printhelper.shared.logging import get_logger

logger = get_logger(__name__)


class JobService:
    """Orchestrates Renderer -> DeviceDirectory -> select_target -> PrintDispatcher."""

    def __init__(
        self,
        settings: Settings | None = None,
        renderer: RenderService | None = None,
        directory: DeviceDirectory | None = None,
        dispatcher: PrintDispatcher | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.renderer = renderer or RenderService(self.settings.browser_args)
        self.directory = directory or DeviceDirectory(self.settings.device_query_timeout)
        self.dispatcher = dispatcher or PrintDispatcher(helper_paths=self.settings.helper_paths)
        self._pending: dict[Path, asyncio.Task[None]] = {}

    # -------------------------------------------------------------------------
    # File lifecycle
    # -------------------------------------------------------------------------

    def _allocate_path(self) -> tuple[int, Path]:
        """
        Reserve a unique scratch file name by creating the file exclusively.

        The .pdf name avoids odd file associations; the timestamp is bumped
        until a name is free, so concurrent jobs never share a file.
        """
        scratch = self.settings.get_scratch_dir()
        created_at = timestamp_ms()
        while True:
            path = scratch / f"print_job_{created_at}.pdf"
            try:
                with open(path, "xb"):
                    pass
            except FileExistsError:
                created_at += 1
                continue
            return created_at, path

    def _delete(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise CleanupError(str(path), e) from e
        logger.info(f"Deleted PDF file: {path}")

    def schedule_cleanup(self, path: Path, delay: float | None = None) -> asyncio.Task[None]:
        """Delete ``path`` after ``delay`` seconds without blocking the caller."""
        delay = self.settings.cleanup_delay_seconds if delay is None else delay
        previous = self._pending.pop(path, None)
        if previous is not None:
            previous.cancel()

        task = asyncio.get_running_loop().create_task(self._delete_later(path, delay))
        self._pending[path] = task
        logger.info(f"Scheduled deletion of {path.name} in {delay:g}s")
        return task

    async def _delete_later(self, path: Path, delay: float) -> None:
        try:
            await asyncio.sleep(delay)
            self._delete(path)
        except CleanupError as e:
            logger.warning(e.message)
        finally:
            if self._pending.get(path) is asyncio.current_task():
                del self._pending[path]

    def cleanup_now(self, path: Path) -> bool:
        """
        Best-effort immediate deletion.

        If the file is still locked a delayed retry is scheduled instead.
        """
        try:
            self._delete(path)
            return True
        except CleanupError as e:
            logger.warning(f"{e.message}; retrying later")
            self.schedule_cleanup(path)
            return False

    @property
    def pending_cleanups(self) -> list[Path]:
        return list(self._pending)

    async def shutdown(self) -> None:
        """Cancel pending timers and delete their files now."""
        pending = list(self._pending.items())
        self._pending.clear()
        for path, task in pending:
            task.cancel()
            try:
                self._delete(path)
            except CleanupError as e:
                logger.warning(e.message)
        if pending:
            await asyncio.gather(*(task for _, task in pending), return_exceptions=True)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def print_receipt(self) -> DeliveryResult:
        """
        Render the receipt to a file and deliver it to the selected printer.

        Raises:
            RenderError, NoPrinterAvailableError, HelperNotFoundError, DispatchError
        """
        created_at, pdf_path = self._allocate_path()
        job_id = str(created_at)
        logger.info(f"Printing receipt {job_id} via {pdf_path}")

        try:
            await self.renderer.render(
                build_receipt_html(job_id, datetime.now()),
                RECEIPT_LAYOUT,
                path=pdf_path,
                created_at=created_at,
            )

            devices = await self.directory.list_devices()
            printer = select_target(devices, self.settings.printer_keywords)
            if printer is None:
                raise NoPrinterAvailableError(job_id)
            logger.info(f"Target printer: {printer}")

            result = await self.dispatcher.dispatch(pdf_path, printer, job_id=job_id)
        except BaseException:
            logger.exception(f"Receipt print {job_id} failed")
            self.cleanup_now(pdf_path)
            raise

        self.schedule_cleanup(pdf_path)
        return result

    async def generate_document(self) -> RenderedDocument:
        """Render the receipt in memory only; no file is created."""
        created_at = timestamp_ms()
        receipt_no = str(created_at)
        return await self.renderer.render(
            build_receipt_html(receipt_no, datetime.now()),
            RECEIPT_LAYOUT,
            created_at=created_at,
        )


_job_service: JobService | None = None


def get_job_service() -> JobService:
    """Process-wide job service, so pending cleanups survive across requests."""
    global _job_service
    if _job_service is None:
        _job_service = JobService()
    return _job_service


def reset_job_service() -> None:
    global _job_service
    _job_service = None
