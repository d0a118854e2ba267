"""
Delivery methods for the SumatraPDF print helper, in the order they are tried.

Argument templates use ``{printer}`` and ``{file}`` placeholders and are
expanded into an argv list, never a shell string.
"""

from dataclasses import dataclass

# Reported as the printer when the helper picked the OS default itself
SYSTEM_DEFAULT_PRINTER = "<system default>"


@dataclass(frozen=True)
class DeliveryMethod:
    """One way of invoking the print helper."""

    name: str
    args: tuple[str, ...]
    timeout: float
    settle_delay: float = 0.0
    # False when success only means a dialog/process opened
    verified: bool = True
    targets_default: bool = False

    def build_argv(self, helper_path: str, file_path: str, printer: str) -> list[str]:
        return [helper_path] + [
            arg.format(printer=printer, file=file_path) for arg in self.args
        ]

    def reported_printer(self, printer: str) -> str:
        return SYSTEM_DEFAULT_PRINTER if self.targets_default else printer


DEFAULT_METHODS: tuple[DeliveryMethod, ...] = (
    DeliveryMethod(
        name="SumatraPDF Standard",
        args=("-print-to", "{printer}", "{file}", "-exit-when-done", "-silent"),
        timeout=30.0,
        settle_delay=8.0,
    ),
    DeliveryMethod(
        name="SumatraPDF Default Print",
        args=("-print-to-default", "{file}", "-exit-when-done", "-silent"),
        timeout=25.0,
        settle_delay=6.0,
        targets_default=True,
    ),
    DeliveryMethod(
        name="SumatraPDF Simple Print",
        args=("{file}", "-print"),
        timeout=20.0,
        settle_delay=5.0,
    ),
    DeliveryMethod(
        name="SumatraPDF Print Dialog",
        args=("{file}", "-print-dialog"),
        timeout=15.0,
        verified=False,
    ),
)
