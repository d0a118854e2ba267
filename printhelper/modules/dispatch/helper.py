"""Locate the print helper binary."""

import os
from collections.abc import Sequence

from printhelper.shared.errors import HelperNotFoundError
from printhelper.shared.logging import get_logger

logger = get_logger(__name__)


def probe_print_helper(paths: Sequence[str]) -> str | None:
    """Return the first existing helper path, or None."""
    for path in paths:
        if os.path.isfile(path):
            logger.info(f"Found SumatraPDF: {path}")
            return path
    logger.warning("SumatraPDF not found")
    return None


def find_print_helper(paths: Sequence[str]) -> str:
    """Like probe_print_helper() but raises HelperNotFoundError."""
    path = probe_print_helper(paths)
    if path is None:
        raise HelperNotFoundError(list(paths))
    return path
