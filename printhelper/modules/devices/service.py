"""
Device directory - enumerate installed printers with one OS query.

Windows is queried through PowerShell's Get-Printer (JSON output),
everything else through CUPS ``lpstat``.
"""

import json
import platform
from collections.abc import Awaitable, Callable

from printhelper.config import get_settings
from printhelper.shared.logging import get_logger
from printhelper.shared.process import ProcessResult, run_process

from .schemas import Device

logger = get_logger(__name__)

WINDOWS_QUERY = [
    "powershell",
    "-NoProfile",
    "-Command",
    "Get-Printer | Select-Object Name, Default | ConvertTo-Json",
]
CUPS_QUERY = ["lpstat", "-p", "-d"]

QueryRunner = Callable[[list[str], float], Awaitable[ProcessResult]]


def parse_printer_json(text: str) -> list[Device]:
    """
    Parse ConvertTo-Json output.

    A single printer is serialized as a bare object rather than a
    one-element array; both shapes yield a list.
    """
    text = text.strip()
    if not text:
        return []

    data = json.loads(text)
    items = data if isinstance(data, list) else [data]

    devices = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get("Name")
        if not name:
            continue
        is_default = item.get("Default", item.get("IsDefault", False))
        devices.append(Device(name=str(name), is_default=is_default is True))
    return devices


def parse_lpstat(text: str) -> list[Device]:
    """Parse ``lpstat -p -d`` output."""
    names: list[str] = []
    default_name = None

    for line in text.splitlines():
        line = line.strip()
        # sample: "printer HP_LaserJet is idle.  enabled since ..."
        if line.startswith("printer "):
            parts = line.split()
            if len(parts) > 1:
                names.append(parts[1])
        # sample: "system default destination: HP_LaserJet"
        elif line.startswith("system default destination:"):
            default_name = line.split(":", 1)[1].strip() or None

    return [Device(name=name, is_default=(name == default_name)) for name in names]


class DeviceDirectory:
    """Lists available printers. Never raises; failures yield an empty list."""

    def __init__(
        self,
        timeout: float | None = None,
        system: str | None = None,
        runner: QueryRunner | None = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else get_settings().device_query_timeout
        self.system = (system or platform.system()).lower()
        self._runner = runner or run_process
        self.last_error: str | None = None

    @property
    def query(self) -> list[str]:
        return WINDOWS_QUERY if self.system == "windows" else CUPS_QUERY

    def _parse(self, stdout: str) -> list[Device]:
        if self.system == "windows":
            return parse_printer_json(stdout)
        return parse_lpstat(stdout)

    async def list_devices(self) -> list[Device]:
        """Enumerate printers in OS-reported order."""
        logger.info("Checking printers...")
        try:
            result = await self._runner(self.query, self.timeout)
            if result.returncode != 0:
                raise RuntimeError(
                    f"{self.query[0]} exited with {result.returncode}: {result.stderr}"
                )
            devices = self._parse(result.stdout)
        except Exception as e:
            self.last_error = str(e) or type(e).__name__
            logger.error(f"Could not list printers: {self.last_error}")
            return []

        self.last_error = None
        logger.info(f"Found printers: {[d.name for d in devices]}")
        return devices
