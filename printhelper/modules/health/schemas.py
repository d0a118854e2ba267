"""Health module schemas."""

from pydantic import BaseModel


class HelperStatus(BaseModel):
    available: bool
    path: str | None = None


class PrinterStatus(BaseModel):
    count: int
    available: bool
    target: str | None = None
    error: str | None = None


class StatusResponse(BaseModel):
    """Readiness report."""

    success: bool = True
    status: str = "running"
    printing_enabled: bool
    helper: HelperStatus
    printers: PrinterStatus
    pdf_association: str
    ready: bool
