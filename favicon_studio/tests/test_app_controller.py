"""Tests for AppController result routing (widgets are mocks, no Tk window)."""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from favicon_studio.config import Settings
from favicon_studio.controllers import app_controller
from favicon_studio.controllers.app_controller import GENERATION_FAILED, PACKAGING_FAILED, AppController
from favicon_studio.errors import PackagingFailure, UpstreamGenerationFailure
from favicon_studio.services.artifact_store import ArtifactSlot
from favicon_studio.services.package_service import PackageService
from favicon_studio.services.session import FaviconSession, GeneratedIcon


@pytest.fixture
def controller(tmp_path, monkeypatch):
    monkeypatch.setattr(app_controller.filedialog, "asksaveasfilename", MagicMock(return_value=""))
    return AppController(
        viewer=MagicMock(),
        sidebar=MagicMock(),
        bottom=MagicMock(),
        window=MagicMock(),
        settings=Settings(sizes=[16, 32], parallel_resize=False),
        generator=MagicMock(),
        session=FaviconSession(ArtifactSlot(directory=tmp_path)),
    )


def _deliver(ctrl: AppController) -> int:
    """Runs queued result callbacks the way `_drain_results` does on the Tk thread."""
    delivered = 0
    while not ctrl._results.empty():
        ctrl._results.get_nowait()()
        delivered += 1
    return delivered


def _icon(payload, source):
    return GeneratedIcon(payload=payload, source=source)


@pytest.mark.asyncio
async def test_generation_success_shows_image(controller, solid_png_b64):
    controller.generator.generate_icon = AsyncMock(return_value=solid_png_b64)
    request_id = controller.session.begin_generation()

    await controller._generate(request_id, "rocket")

    assert _deliver(controller) == 1
    assert controller.session.icon is not None
    assert controller.session.icon.source.width == 512
    controller.viewer.set_image.assert_called_once()
    controller.bottom.set_export_enabled.assert_called_with(True)


@pytest.mark.asyncio
async def test_upstream_failure_reported_as_generation_failed(controller):
    controller.generator.generate_icon = AsyncMock(side_effect=UpstreamGenerationFailure("no images"))
    request_id = controller.session.begin_generation()

    await controller._generate(request_id, "rocket")

    assert _deliver(controller) == 1
    controller.sidebar.set_status.assert_called_with(GENERATION_FAILED, error=True)
    controller.sidebar.set_busy.assert_called_with(False)


@pytest.mark.asyncio
async def test_unexpected_generator_error_still_reported(controller):
    controller.generator.generate_icon = AsyncMock(side_effect=RuntimeError("unexpected response shape"))
    request_id = controller.session.begin_generation()

    await controller._generate(request_id, "rocket")

    assert _deliver(controller) == 1
    controller.sidebar.set_status.assert_called_with(GENERATION_FAILED, error=True)
    controller.sidebar.set_busy.assert_called_with(False)
    assert controller.session.icon is None


@pytest.mark.asyncio
async def test_undecodable_payload_reported_as_generation_failed(controller):
    controller.generator.generate_icon = AsyncMock(return_value="not base64 !!!")
    request_id = controller.session.begin_generation()

    await controller._generate(request_id, "rocket")

    assert _deliver(controller) == 1
    controller.sidebar.set_status.assert_called_with(GENERATION_FAILED, error=True)


@pytest.mark.asyncio
async def test_stale_generation_result_dropped(controller, solid_png_b64):
    controller.generator.generate_icon = AsyncMock(return_value=solid_png_b64)
    stale = controller.session.begin_generation()
    controller.session.begin_generation()

    await controller._generate(stale, "rocket")

    assert _deliver(controller) == 1
    assert controller.session.icon is None
    controller.viewer.set_image.assert_not_called()


def test_packaging_success_creates_handle(controller, solid_png_b64, solid_source):
    controller.session.accept_image(controller.session.begin_generation(), _icon(solid_png_b64, solid_source))
    request_id, icon = controller.session.begin_export()

    controller._package(request_id, icon, "Demo")

    assert _deliver(controller) == 1
    handle = controller.session.handle
    assert handle is not None and not handle.released
    assert "favicon-48x48.png" not in handle.archive.entry_names
    controller.bottom.show_result.assert_called_with(True)
    app_controller.filedialog.asksaveasfilename.assert_called_once()


def test_packaging_failure_reported_as_packaging_failed(controller, solid_png_b64, solid_source):
    controller.package_service = MagicMock(spec=PackageService)
    controller.package_service.create_package.side_effect = PackagingFailure("boom")
    controller.session.accept_image(controller.session.begin_generation(), _icon(solid_png_b64, solid_source))
    request_id, icon = controller.session.begin_export()

    controller._package(request_id, icon, "Demo")

    assert _deliver(controller) == 1
    controller.sidebar.set_status.assert_called_with(PACKAGING_FAILED, error=True)
    controller.bottom.set_exporting.assert_called_with(False)
    assert controller.session.handle is None


def test_stale_archive_never_becomes_handle(controller, solid_png_b64, solid_source):
    controller.session.accept_image(controller.session.begin_generation(), _icon(solid_png_b64, solid_source))
    request_id, icon = controller.session.begin_export()
    controller.session.begin_generation()

    controller._package(request_id, icon, "Demo")

    assert _deliver(controller) == 1
    assert controller.session.handle is None
    controller.bottom.show_result.assert_not_called()


def test_shutdown_releases_live_handle(controller, solid_png_b64, solid_source, tmp_path):
    controller.session.accept_image(controller.session.begin_generation(), _icon(solid_png_b64, solid_source))
    request_id, icon = controller.session.begin_export()
    controller._package(request_id, icon, "Demo")
    _deliver(controller)
    handle = controller.session.handle
    path = handle.path

    controller.shutdown()

    assert handle.released
    assert not path.exists()
    assert list(tmp_path.iterdir()) == []


def test_copied_snippet_follows_configured_sizes(controller):
    controller._handle_copy_snippet()

    snippet = controller.window.clipboard_append.call_args.args[0]
    hrefs = re.findall(r'href="/([^"]+)"', snippet)
    assert "favicon-16x16.png" in hrefs and "favicon-32x32.png" in hrefs
    assert "favicon-48x48.png" not in hrefs
