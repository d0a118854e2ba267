"""Jobs module routes."""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from printhelper.shared.errors import PrintHelperError
from printhelper.shared.logging import get_logger
from printhelper.shared.time import utcnow_iso

from .schemas import PrintResponse
from .service import JobService, get_job_service

logger = get_logger(__name__)
router = APIRouter(tags=["print"])


def _failure(message: str, exc: Exception) -> JSONResponse:
    if isinstance(exc, PrintHelperError):
        status, job_id = exc.http_status, exc.job_id
    else:
        status, job_id = 500, None
    body = PrintResponse(success=False, message=message, job_id=job_id, error=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


@router.post("/print", response_model=PrintResponse, response_model_exclude_none=True)
async def print_receipt(
    service: JobService = Depends(get_job_service),
) -> PrintResponse | JSONResponse:
    """Render the receipt and send it to the selected printer."""
    logger.info("Receipt print request received")

    if not service.settings.printing_enabled:
        try:
            document = await service.generate_document()
        except Exception as e:
            logger.error(f"PDF generation failed: {e}")
            return _failure("PDF generation failed", e)
        return PrintResponse(
            success=True,
            message="PDF generated",
            job_id=document.job_id,
            timestamp=utcnow_iso(),
            note="Printing is disabled; the PDF was generated but not sent to a printer",
        )

    try:
        result = await service.print_receipt()
    except Exception as e:
        logger.error(f"Print failed: {e}")
        return _failure("Receipt printing failed", e)

    return PrintResponse(
        success=True,
        message="Receipt printed",
        job_id=result.job_id,
        printer=result.printer,
        method=result.method,
        verified=result.verified,
        timestamp=utcnow_iso(),
    )


@router.post("/download")
async def download_receipt(
    service: JobService = Depends(get_job_service),
) -> Response:
    """Render the receipt and return the PDF bytes; nothing is written to disk."""
    try:
        document = await service.generate_document()
    except Exception as e:
        logger.error(f"PDF download failed: {e}")
        return _failure("PDF download failed", e)

    content = document.content or b""
    return Response(
        content=content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "Content-Length": str(len(content)),
        },
    )
