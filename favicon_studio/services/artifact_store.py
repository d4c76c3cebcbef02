"""Владение готовым архивом: ровно один живой дескриптор на сессию.

Дескриптор держит временный файл с архивом (аналог ссылки на скачивание).
При замене предыдущий дескриптор освобождается ровно один раз, как и при закрытии сессии.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Optional

from favicon_studio.models.favicon_model import PackageArchive

logger = logging.getLogger(__name__)


class ArtifactHandle:
    """Временный файл с архивом; `release()` удаляет его один раз."""

    def __init__(self, archive: PackageArchive, directory: Optional[str | Path] = None) -> None:
        fd, name = tempfile.mkstemp(prefix="favicon_", suffix=".zip", dir=directory)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(archive.data)
        except BaseException:
            Path(name).unlink(missing_ok=True)
            raise
        self._path: Optional[Path] = Path(name)
        self._lock = threading.Lock()
        self.archive = archive

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("artifact handle already released")
        return self._path

    @property
    def released(self) -> bool:
        return self._path is None

    def save_to(self, destination: str | Path) -> Path:
        """Копирует архив в выбранное пользователем место («скачивание»)."""
        target = Path(destination)
        shutil.copyfile(self.path, target)
        logger.info("saved favicon archive to %s", target)
        return target

    def release(self) -> bool:
        """Удаляет временный файл. Возвращает False, если дескриптор уже освобождён."""
        with self._lock:
            if self._path is None:
                return False
            path, self._path = self._path, None
        path.unlink(missing_ok=True)
        logger.debug("released artifact %s", path)
        return True


class ArtifactSlot:
    """Единственный владелец текущего дескриптора: replace-and-release."""

    def __init__(self, directory: Optional[str | Path] = None) -> None:
        self._directory = directory
        self._current: Optional[ArtifactHandle] = None

    @property
    def current(self) -> Optional[ArtifactHandle]:
        return self._current

    def replace(self, archive: PackageArchive) -> ArtifactHandle:
        # new file is created first: a failed write keeps the previous handle alive
        handle = ArtifactHandle(archive, directory=self._directory)
        previous, self._current = self._current, handle
        if previous is not None:
            previous.release()
        return handle

    def clear(self) -> None:
        previous, self._current = self._current, None
        if previous is not None:
            previous.release()

    close = clear

    def __enter__(self) -> "ArtifactSlot":
        return self

    def __exit__(self, *_exc) -> None:
        self.clear()
