"""
Error hierarchy for PrintHelper.

    PrintHelperError (base)
    ├── ValidationError         - bad caller input
    ├── RenderError             - engine launch / content load / serialization
    ├── NoPrinterAvailableError - device directory came back empty
    ├── HelperNotFoundError     - print helper binary not installed
    ├── DeliveryAttemptError    - one delivery method failed
    ├── DispatchError           - every delivery method failed
    └── CleanupError            - rendered file could not be deleted (logged only)
"""

from typing import Any


class PrintHelperError(Exception):
    """Base exception carrying a stable code and HTTP status."""

    code = "INTERNAL_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        http_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if http_status:
            self.http_status = http_status
        self.details = details or {}

    @property
    def job_id(self) -> str | None:
        return self.details.get("job_id")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PrintHelperError):
    code = "VALIDATION_ERROR"
    http_status = 400


class RenderError(PrintHelperError):
    """Rendering engine failed at one of its stages."""

    code = "RENDER_FAILED"
    http_status = 500

    def __init__(self, stage: str, cause: BaseException, job_id: str | None = None) -> None:
        details: dict[str, Any] = {"stage": stage, "cause": str(cause)}
        if job_id:
            details["job_id"] = job_id
        super().__init__(f"PDF rendering failed during {stage}: {cause}", details=details)
        self.stage = stage
        self.cause = cause


class NoPrinterAvailableError(PrintHelperError):
    code = "NO_PRINTER"
    http_status = 503

    def __init__(self, job_id: str | None = None) -> None:
        details = {"job_id": job_id} if job_id else {}
        super().__init__("No printer available", details=details)


class HelperNotFoundError(PrintHelperError):
    """None of the known print helper install paths exist."""

    code = "HELPER_NOT_FOUND"
    http_status = 503

    def __init__(self, probed_paths: list[str]) -> None:
        super().__init__(
            "Print helper not found. Install SumatraPDF: https://www.sumatrapdfreader.org/",
            details={"probed_paths": probed_paths},
        )
        self.probed_paths = probed_paths


class DeliveryAttemptError(PrintHelperError):
    """A single delivery method failed (exit status, timeout or launch error)."""

    code = "DELIVERY_ATTEMPT_FAILED"
    http_status = 502

    def __init__(
        self,
        method: str,
        reason: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(
            f"{method}: {reason}",
            details={"method": method, "returncode": returncode, "stderr": stderr},
        )
        self.method = method
        self.reason = reason
        self.returncode = returncode


class DispatchError(PrintHelperError):
    """Every delivery method in the chain failed."""

    code = "DISPATCH_FAILED"
    http_status = 502

    def __init__(self, attempts: list[DeliveryAttemptError], job_id: str | None = None) -> None:
        last = attempts[-1].message if attempts else "no delivery methods configured"
        details: dict[str, Any] = {
            "attempts": [a.message for a in attempts],
        }
        if job_id:
            details["job_id"] = job_id
        super().__init__(f"All print methods failed; last error: {last}", details=details)
        self.attempts = attempts


class CleanupError(PrintHelperError):
    """Rendered file could not be removed. Never propagated."""

    code = "CLEANUP_FAILED"

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"Could not delete {path}: {cause}", details={"path": path})
        self.cause = cause
