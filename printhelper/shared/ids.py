"""Identifier helpers."""

import time
import uuid


def generate_request_id() -> str:
    """Random request id for log correlation."""
    return f"req_{uuid.uuid4().hex[:16]}"


def timestamp_ms() -> int:
    """Current wall-clock time in milliseconds; doubles as a job id."""
    return time.time_ns() // 1_000_000
