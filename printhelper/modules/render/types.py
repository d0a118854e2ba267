"""Render module internal types."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RenderedDocument:
    """
    Output of one render call.

    Exactly one of ``content`` (ephemeral, in-memory) or ``path``
    (named file on scratch storage) is set. ``created_at`` is a
    millisecond timestamp used as the job id and in file names.
    """

    created_at: int
    content: bytes | None = None
    path: Path | None = None

    @property
    def job_id(self) -> str:
        return str(self.created_at)

    @property
    def is_ephemeral(self) -> bool:
        return self.path is None

    @property
    def filename(self) -> str:
        if self.path is not None:
            return self.path.name
        return f"receipt_{self.created_at}.pdf"
