"""Состояние одной пользовательской сессии без привязки к UI.

Каждая генерация и каждый экспорт получают номер запроса. Новая генерация
делает устаревшими все незавершённые запросы: их результаты отбрасываются,
а текущий дескриптор архива освобождается.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from favicon_studio.models.favicon_model import PackageArchive, SourceImage
from favicon_studio.services.artifact_store import ArtifactHandle, ArtifactSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedIcon:
    """Принятый результат генерации: исходный base64 и декодированное изображение."""
    payload: str
    source: SourceImage


class FaviconSession:
    def __init__(self, slot: Optional[ArtifactSlot] = None) -> None:
        self._slot = slot or ArtifactSlot()
        self._lock = threading.Lock()
        self._request_id = 0
        self._icon: Optional[GeneratedIcon] = None

    @property
    def icon(self) -> Optional[GeneratedIcon]:
        return self._icon

    @property
    def handle(self) -> Optional[ArtifactHandle]:
        return self._slot.current

    def begin_generation(self) -> int:
        """Новая генерация: сбрасывает изображение и освобождает текущий архив."""
        with self._lock:
            self._request_id += 1
            request_id = self._request_id
            self._icon = None
        self._slot.clear()
        logger.debug("generation request %d started", request_id)
        return request_id

    def accept_image(self, request_id: int, icon: GeneratedIcon) -> bool:
        with self._lock:
            if request_id != self._request_id:
                logger.info("discarding stale image from request %d", request_id)
                return False
            self._icon = icon
            return True

    def begin_export(self) -> Optional[tuple[int, GeneratedIcon]]:
        """Номер запроса экспорта и изображение для упаковки; None, если изображения нет."""
        with self._lock:
            if self._icon is None:
                return None
            self._request_id += 1
            return self._request_id, self._icon

    def accept_archive(self, request_id: int, archive: PackageArchive) -> Optional[ArtifactHandle]:
        """Превращает архив в живой дескриптор, если запрос не устарел."""
        with self._lock:
            if request_id != self._request_id:
                logger.info("discarding stale archive from request %d", request_id)
                return None
        return self._slot.replace(archive)

    def reject(self, request_id: int) -> bool:
        """True, если неудавшийся запрос всё ещё актуален и об ошибке надо сообщить."""
        with self._lock:
            return request_id == self._request_id

    def close(self) -> None:
        with self._lock:
            self._request_id += 1
            self._icon = None
        self._slot.close()
