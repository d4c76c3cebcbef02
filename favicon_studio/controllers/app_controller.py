"""Контроллер приложения: оркестрация UI, генерации и упаковки.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: клиент генерации и конвейер упаковки передаются извне; состояние сессии хранит `FaviconSession`.
Clean Code:
- Сетевые и тяжёлые операции выполняются в рабочих потоках, результаты возвращаются
  в поток Tk через очередь и `after()`.
"""
from __future__ import annotations

import asyncio
import logging
import queue
import threading
from dataclasses import dataclass, field
from tkinter import TclError, filedialog
from typing import Callable, Optional

import customtkinter as ctk

from favicon_studio.config import Settings
from favicon_studio.errors import FaviconStudioError, PackagingFailure, UpstreamGenerationFailure
from favicon_studio.models.favicon_model import PackageArchive
from favicon_studio.models.naming import ARCHIVE_FILENAME
from favicon_studio.services.artifact_store import ArtifactHandle
from favicon_studio.services.generation_service import IconGenerator
from favicon_studio.services.image_service import ImageService
from favicon_studio.services.package_service import PackageService
from favicon_studio.services.session import FaviconSession, GeneratedIcon
from favicon_studio.services.snippet_service import get_snippet
from favicon_studio.ui.bottom_bar import BottomBar
from favicon_studio.ui.image_viewer import ImageViewer
from favicon_studio.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Не удалось сгенерировать иконку. Попробуйте ещё раз."
PACKAGING_FAILED = "Не удалось собрать ZIP. Попробуйте ещё раз."
POLL_INTERVAL_MS = 50
COPIED_RESET_MS = 2500


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Генерация изображения через `IconGenerator` в цикле событий сессии.
    - Упаковка через `PackageService` и выдача архива через дескриптор сессии.
    - Копирование HTML-сниппета в буфер обмена.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk
    settings: Settings

    package_service: Optional[PackageService] = None
    generator: Optional[IconGenerator] = None
    session: FaviconSession = field(default_factory=FaviconSession)
    _image_service: ImageService = field(default_factory=ImageService)
    _results: "queue.Queue[Callable[[], None]]" = field(default_factory=queue.Queue)
    _closed: bool = False
    _loop: Optional[asyncio.AbstractEventLoop] = None

    def __post_init__(self) -> None:
        if self.package_service is None:
            self.package_service = PackageService(max_workers=self.settings.resize_workers)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий и запускает опрос очереди результатов."""
        self.sidebar.on_generate = self._handle_generate
        self.bottom.on_export = self._handle_export
        self.bottom.on_save_again = self._handle_save_again
        self.bottom.on_copy_snippet = self._handle_copy_snippet
        # one loop for the whole session: the async client keeps its connections bound to it
        self._loop = asyncio.new_event_loop()
        threading.Thread(target=self._loop.run_forever, name="generation-loop", daemon=True).start()
        self.window.after(POLL_INTERVAL_MS, self._drain_results)

    def shutdown(self) -> None:
        """Освобождает живой дескриптор архива; результаты рабочих потоков больше не принимаются."""
        self._closed = True
        self.session.close()
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._loop.stop)

    # ---- Handlers ----
    def _handle_generate(self) -> None:
        prompt = self.sidebar.get_prompt()
        if not prompt:
            self.sidebar.set_status("Опишите иконку.", error=True)
            return

        request_id = self.session.begin_generation()
        self.viewer.set_image(None)
        self.viewer.set_placeholder("Генерация…")
        self.sidebar.set_busy(True)
        self.sidebar.set_status("")
        self.bottom.set_exporting(False)
        self.bottom.set_export_enabled(False)
        self.bottom.show_result(False)
        self.bottom.show_copied(False)

        asyncio.run_coroutine_threadsafe(self._generate(request_id, prompt), self._loop)

    def _handle_export(self) -> None:
        started = self.session.begin_export()
        if started is None:
            return
        request_id, icon = started
        self.bottom.set_exporting(True)
        self.sidebar.set_status("")
        app_name = self.sidebar.get_app_name() or self.settings.app_name
        self._run_in_worker(lambda: self._package(request_id, icon, app_name))

    def _handle_save_again(self) -> None:
        handle = self.session.handle
        if handle is not None and not handle.released:
            self._save(handle)

    def _handle_copy_snippet(self) -> None:
        try:
            self.window.clipboard_clear()
            self.window.clipboard_append(get_snippet(self.settings.sizes))
        except TclError:
            logger.exception("failed to copy snippet to clipboard")
            return
        self.bottom.show_copied(True)
        self.window.after(COPIED_RESET_MS, lambda: self.bottom.show_copied(False))

    # ---- Workers: generation loop and threads (never touch widgets) ----
    async def _generate(self, request_id: int, prompt: str) -> None:
        try:
            if self.generator is None:
                self.generator = IconGenerator.from_settings(self.settings)
            payload = await self.generator.generate_icon(prompt)
            source = self._image_service.decode_base64_png(payload)
        except FaviconStudioError as exc:
            logger.exception("icon generation failed")
            failure = exc if isinstance(exc, UpstreamGenerationFailure) else UpstreamGenerationFailure(str(exc))
            self._results.put(lambda: self._on_generation_failed(request_id, failure))
            return
        except Exception as exc:
            logger.exception("unexpected error during icon generation")
            failure = UpstreamGenerationFailure(f"Непредвиденная ошибка генерации: {exc}")
            self._results.put(lambda: self._on_generation_failed(request_id, failure))
            return
        icon = GeneratedIcon(payload=payload, source=source)
        self._results.put(lambda: self._on_generated(request_id, icon))

    def _package(self, request_id: int, icon: GeneratedIcon, app_name: str) -> None:
        try:
            archive = self.package_service.create_package(
                icon.source,
                sizes=self.settings.sizes,
                app_name=app_name,
                theme_color=self.settings.theme_color,
                background_color=self.settings.background_color,
            )
        except PackagingFailure as exc:
            logger.exception("favicon packaging failed")
            self._results.put(lambda failure=exc: self._on_packaging_failed(request_id, failure))
            return
        self._results.put(lambda: self._on_packaged(request_id, archive))

    # ---- Results (Tk thread) ----
    def _on_generated(self, request_id: int, icon: GeneratedIcon) -> None:
        if not self.session.accept_image(request_id, icon):
            return
        self.sidebar.set_busy(False)
        self.viewer.set_image(icon.source.pil_image)
        self.bottom.set_export_enabled(True)
        self.sidebar.set_status(f"Готово: {icon.source.width}×{icon.source.height}")

    def _on_generation_failed(self, request_id: int, _exc: UpstreamGenerationFailure) -> None:
        if not self.session.reject(request_id):
            return
        self.sidebar.set_busy(False)
        self.viewer.set_placeholder("Здесь появится иконка")
        self.sidebar.set_status(GENERATION_FAILED, error=True)

    def _on_packaged(self, request_id: int, archive: PackageArchive) -> None:
        handle = self.session.accept_archive(request_id, archive)
        if handle is None:
            return
        self.bottom.set_exporting(False)
        self.bottom.show_result(True)
        self._save(handle)

    def _on_packaging_failed(self, request_id: int, _exc: PackagingFailure) -> None:
        if not self.session.reject(request_id):
            return
        self.bottom.set_exporting(False)
        self.sidebar.set_status(PACKAGING_FAILED, error=True)

    # ---- Helpers ----
    def _save(self, handle: ArtifactHandle) -> None:
        try:
            target = filedialog.asksaveasfilename(
                title="Сохранить пакет фавиконок",
                initialfile=handle.archive.filename or ARCHIVE_FILENAME,
                defaultextension=".zip",
                filetypes=(("ZIP", "*.zip"),),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return
        if not target:
            return
        try:
            handle.save_to(target)
        except OSError:
            logger.exception("failed to save favicon archive")
            self.sidebar.set_status(f"Не удалось сохранить файл: {target}", error=True)
            return
        self.sidebar.set_status(f"Сохранено: {target}")

    def _run_in_worker(self, target: Callable[[], None]) -> None:
        threading.Thread(target=target, daemon=True).start()

    def _drain_results(self) -> None:
        if self._closed:
            return
        while True:
            try:
                callback = self._results.get_nowait()
            except queue.Empty:
                break
            callback()
        self.window.after(POLL_INTERVAL_MS, self._drain_results)
