"""Status service - is this machine able to print right now?"""

import platform

from printhelper.config import Settings, get_settings
from printhelper.modules.devices.selector import select_target
from printhelper.modules.devices.service import DeviceDirectory
from printhelper.modules.dispatch.helper import probe_print_helper
from printhelper.shared.logging import get_logger
from printhelper.shared.process import run_process

from .schemas import HelperStatus, PrinterStatus, StatusResponse

logger = get_logger(__name__)

PDF_ASSOCIATION_QUERY = [
    "powershell",
    "-NoProfile",
    "-Command",
    "Get-ItemProperty 'Registry::HKEY_CLASSES_ROOT\\.pdf\\OpenWithProgids' | Select-Object -Property *",
]


class StatusService:
    """Collects helper, printer and file-association readiness."""

    def __init__(
        self,
        settings: Settings | None = None,
        directory: DeviceDirectory | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.directory = directory or DeviceDirectory(self.settings.device_query_timeout)

    async def check_pdf_association(self) -> str:
        """
        Report whether .pdf files open in OneNote, which hijacks the
        helper's open action. Only meaningful on Windows.
        """
        if platform.system().lower() != "windows":
            return "unknown"
        try:
            result = await run_process(PDF_ASSOCIATION_QUERY, self.settings.device_query_timeout)
        except (OSError, TimeoutError) as e:
            logger.warning(f"PDF association check failed: {e}")
            return "unknown"
        if result.returncode != 0:
            return "unknown"
        return "onenote" if "OneNote" in result.stdout else "normal"

    async def get_status(self) -> StatusResponse:
        helper_path = probe_print_helper(self.settings.helper_paths)
        devices = await self.directory.list_devices()
        target = select_target(devices, self.settings.printer_keywords)

        return StatusResponse(
            printing_enabled=self.settings.printing_enabled,
            helper=HelperStatus(available=helper_path is not None, path=helper_path),
            printers=PrinterStatus(
                count=len(devices),
                available=bool(devices),
                target=target,
                error=self.directory.last_error,
            ),
            pdf_association=await self.check_pdf_association(),
            ready=helper_path is not None and bool(devices),
        )
