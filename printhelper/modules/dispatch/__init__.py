"""Dispatch module - deliver a rendered PDF through the print helper."""

from .helper import find_print_helper
from .methods import DEFAULT_METHODS, SYSTEM_DEFAULT_PRINTER, DeliveryMethod
from .schemas import DeliveryResult
from .service import PrintDispatcher

__all__ = [
    "find_print_helper",
    "DEFAULT_METHODS",
    "SYSTEM_DEFAULT_PRINTER",
    "DeliveryMethod",
    "DeliveryResult",
    "PrintDispatcher",
]
