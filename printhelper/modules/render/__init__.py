"""Render module - HTML to PDF rendering using Playwright."""

from .router import router
from .schemas import Margins, PageLayout, RenderPdfRequest
from .service import RECEIPT_LAYOUT, RenderService
from .types import RenderedDocument

__all__ = [
    "router",
    "Margins",
    "PageLayout",
    "RenderPdfRequest",
    "RECEIPT_LAYOUT",
    "RenderService",
    "RenderedDocument",
]
