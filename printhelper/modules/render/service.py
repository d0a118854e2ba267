"""Render service - HTML to PDF using Playwright."""

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from pathlib import Path

from playwright.async_api import Browser, Page, async_playwright

from printhelper.config import get_settings
from printhelper.shared.errors import RenderError
from printhelper.shared.ids import timestamp_ms
from printhelper.shared.logging import get_logger

from .schemas import Margins, PageLayout
from .types import RenderedDocument

logger = get_logger(__name__)


# Narrow thermal-receipt page
RECEIPT_LAYOUT = PageLayout(
    format=None,
    width="80mm",
    height="200mm",
    margin=Margins.uniform("5mm"),
    print_background=True,
)

# Viewport sizes in pixels at 96 DPI
PAGE_VIEWPORTS = {
    "Letter": (816, 1056),
    "Legal": (816, 1344),
    "Tabloid": (1056, 1632),
    "A3": (1123, 1587),
    "A4": (794, 1123),
    "A5": (559, 794),
}

_PX_PER_UNIT = {
    "px": 1.0,
    "in": 96.0,
    "cm": 96.0 / 2.54,
    "mm": 96.0 / 25.4,
}


def css_length_to_px(value: str | float) -> int | None:
    """Convert a CSS length like '80mm' to whole pixels; None if unparseable."""
    if isinstance(value, (int, float)):
        return round(value)
    value = value.strip().lower()
    for unit, factor in _PX_PER_UNIT.items():
        if value.endswith(unit):
            try:
                return round(float(value[: -len(unit)]) * factor)
            except ValueError:
                return None
    try:
        return round(float(value))
    except ValueError:
        return None


def viewport_for(layout: PageLayout) -> dict[str, int] | None:
    """Viewport matching the page box, so layout-dependent CSS behaves."""
    if layout.width and layout.height:
        width = css_length_to_px(layout.width)
        height = css_length_to_px(layout.height)
        if width and height:
            return {"width": width, "height": height}
        return None
    size = PAGE_VIEWPORTS.get(layout.paper_format() or "")
    if size is None:
        return None
    width, height = size
    if layout.landscape:
        width, height = height, width
    return {"width": width, "height": height}


class RenderService:
    """Service for rendering HTML to PDF using Playwright."""

    def __init__(self, browser_args: list[str] | None = None) -> None:
        if browser_args is None:
            browser_args = get_settings().browser_args
        self.browser_args = browser_args

    @asynccontextmanager
    async def _open_page(self, job_id: str | None = None) -> AsyncIterator[Page]:
        """
        Launch an isolated browser and yield a fresh page.

        The browser and the Playwright driver are torn down on every exit
        path, including failures while launching.
        """
        async with AsyncExitStack() as stack:
            try:
                playwright = await stack.enter_async_context(async_playwright())
                browser = await playwright.chromium.launch(
                    headless=True, args=self.browser_args
                )
            except Exception as e:
                raise RenderError("launch", e, job_id) from e

            stack.push_async_callback(self._close_browser, browser)

            try:
                page = await browser.new_page()
            except Exception as e:
                raise RenderError("launch", e, job_id) from e

            yield page

    @staticmethod
    async def _close_browser(browser: Browser) -> None:
        try:
            await browser.close()
        except Exception as e:
            logger.warning(f"Browser close failed: {e}")

    async def _render(
        self,
        html: str,
        layout: PageLayout,
        path: Path | None,
        job_id: str | None,
    ) -> bytes:
        pdf_options = layout.to_pdf_options()
        if path is not None:
            pdf_options["path"] = str(path)

        async with self._open_page(job_id) as page:
            try:
                viewport = viewport_for(layout)
                if viewport:
                    await page.set_viewport_size(viewport)
                # Static markup: parsed DOM is enough, no network wait
                await page.set_content(html, wait_until="domcontentloaded")
            except Exception as e:
                raise RenderError("load", e, job_id) from e

            try:
                return await page.pdf(**pdf_options)
            except Exception as e:
                raise RenderError("serialize", e, job_id) from e

    async def render(
        self,
        html: str,
        layout: PageLayout,
        path: Path | None = None,
        created_at: int | None = None,
    ) -> RenderedDocument:
        """
        Render HTML content to a PDF document.

        Args:
            html: HTML content to render
            layout: Page layout options
            path: Write the PDF to this file instead of keeping it in memory
            created_at: Millisecond timestamp identifying the document

        Returns:
            RenderedDocument holding either the bytes or the file path

        Raises:
            RenderError: engine launch, content load or serialization failed
        """
        created_at = created_at if created_at is not None else timestamp_ms()
        job_id = str(created_at)

        logger.info(
            f"Rendering PDF {job_id} "
            f"({'file ' + str(path) if path else 'in memory'}): "
            f"{layout.paper_format() or f'{layout.width} x {layout.height}'}"
        )
        pdf_bytes = await self._render(html, layout, path, job_id)

        if path is not None:
            logger.info(f"Generated PDF file: {path}")
            return RenderedDocument(created_at=created_at, path=path)

        logger.info(f"Generated PDF: {len(pdf_bytes)} bytes")
        return RenderedDocument(created_at=created_at, content=pdf_bytes)

    async def html_to_pdf(self, html: str, layout: PageLayout | None = None) -> bytes:
        """Render HTML to PDF bytes without touching the filesystem."""
        document = await self.render(html, layout or PageLayout())
        return document.content or b""
