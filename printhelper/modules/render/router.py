"""Render module routes."""

from fastapi import APIRouter, Depends, Response

from printhelper.shared.errors import ValidationError
from printhelper.shared.ids import timestamp_ms
from printhelper.shared.logging import get_logger

from .schemas import PageLayout, RenderPdfRequest
from .service import RenderService

logger = get_logger(__name__)
router = APIRouter(prefix="/render", tags=["render"])


def get_render_service() -> RenderService:
    """Dependency injection for service."""
    return RenderService()


@router.post("/pdf")
async def render_pdf(
    request: RenderPdfRequest,
    service: RenderService = Depends(get_render_service),
) -> Response:
    """
    Render caller-supplied HTML to PDF using Playwright.

    Returns the PDF as binary content with appropriate headers.
    """
    if not request.html.strip():
        raise ValidationError("HTML content is required")

    layout = PageLayout.from_options(request.options)
    pdf_bytes = await service.html_to_pdf(request.html, layout)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="custom_{timestamp_ms()}.pdf"',
            "Content-Length": str(len(pdf_bytes)),
        },
    )
