"""Dispatch module schemas."""

from pydantic import BaseModel


class DeliveryResult(BaseModel):
    """Outcome of a successful dispatch."""

    success: bool = True
    method: str
    printer: str
    job_id: str
    verified: bool
    message: str = ""
