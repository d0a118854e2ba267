"""Jobs module schemas."""

from pydantic import BaseModel


class PrintResponse(BaseModel):
    """Response for a receipt print request."""

    success: bool
    message: str
    job_id: str | None = None
    printer: str | None = None
    method: str | None = None
    verified: bool | None = None
    timestamp: str | None = None
    note: str | None = None
    error: str | None = None
