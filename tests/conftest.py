"""Shared fixtures and fakes for the PrintHelper test suite."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from printhelper.app import build_app
from printhelper.config import Settings, init_settings, reset_settings
from printhelper.modules.devices.router import get_directory
from printhelper.modules.devices.schemas import Device
from printhelper.modules.dispatch.schemas import DeliveryResult
from printhelper.modules.health.router import get_status_service
from printhelper.modules.health.service import StatusService
from printhelper.modules.jobs.service import JobService, get_job_service, reset_job_service
from printhelper.modules.render.router import get_render_service
from printhelper.modules.render.schemas import PageLayout
from printhelper.modules.render.types import RenderedDocument
from printhelper.shared.errors import DispatchError, PrintHelperError

FAKE_PDF = b"%PDF-1.4\n% fake receipt\n%%EOF\n"


class FakeRenderer:
    """Stands in for RenderService; writes a tiny PDF when given a path."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, PageLayout, Path | None]] = []

    async def render(self, html, layout, path=None, created_at=None) -> RenderedDocument:
        self.calls.append((html, layout, path))
        if self.error:
            raise self.error
        created_at = created_at or 1700000000000
        if path is not None:
            path.write_bytes(FAKE_PDF)
            return RenderedDocument(created_at=created_at, path=path)
        return RenderedDocument(created_at=created_at, content=FAKE_PDF)

    async def html_to_pdf(self, html, layout=None) -> bytes:
        document = await self.render(html, layout or PageLayout())
        return document.content or b""


class FakeDirectory:
    def __init__(self, devices: list[Device] | None = None, error: str | None = None) -> None:
        self.devices = devices or []
        self.last_error = error
        self.calls = 0

    async def list_devices(self) -> list[Device]:
        self.calls += 1
        return list(self.devices)


class FakeDispatcher:
    """Records dispatch calls; fails with ``error`` when set."""

    def __init__(self, error: PrintHelperError | None = None) -> None:
        self.error = error
        self.calls: list[tuple[Path, str, str | None]] = []
        self.file_existed: list[bool] = []

    async def dispatch(self, file_path, printer, job_id=None) -> DeliveryResult:
        self.calls.append((file_path, printer, job_id))
        self.file_existed.append(Path(file_path).exists())
        if self.error:
            if isinstance(self.error, DispatchError) and job_id:
                self.error.details["job_id"] = job_id
            raise self.error
        return DeliveryResult(
            method="SumatraPDF Standard",
            printer=printer,
            job_id=job_id or "0",
            verified=True,
        )


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Scratch directory for rendered files."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def settings(temp_dir: Path) -> Iterator[Settings]:
    test_settings = Settings(
        scratch_dir=temp_dir,
        helper_paths=[],
        printer_keywords=["epson", "kasa"],
        cleanup_delay_seconds=0.2,
        device_query_timeout=5.0,
    )
    init_settings(test_settings)
    yield test_settings
    reset_settings()
    reset_job_service()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def fake_directory() -> FakeDirectory:
    return FakeDirectory([Device(name="Office-Epson-1"), Device(name="HP", is_default=True)])


@pytest.fixture
def fake_dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def job_service(settings, fake_renderer, fake_directory, fake_dispatcher) -> JobService:
    return JobService(
        settings=settings,
        renderer=fake_renderer,
        directory=fake_directory,
        dispatcher=fake_dispatcher,
    )


@pytest.fixture
def client(settings, job_service, fake_renderer, fake_directory) -> Iterator[TestClient]:
    """TestClient with the OS- and browser-facing services replaced by fakes."""
    app = build_app(settings)
    app.dependency_overrides[get_job_service] = lambda: job_service
    app.dependency_overrides[get_directory] = lambda: fake_directory
    app.dependency_overrides[get_render_service] = lambda: fake_renderer
    app.dependency_overrides[get_status_service] = lambda: StatusService(
        settings=settings, directory=fake_directory
    )
    with TestClient(app) as test_client:
        yield test_client
