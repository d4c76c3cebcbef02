"""Конвейер упаковки: исходное изображение -> варианты -> ICO + манифест -> ZIP.

SOLID:
- SRP: только оркестрация шагов; каждый шаг живёт в своём сервисе.
- DIP: сервисы шагов передаются в конструктор, по умолчанию создаются конкретные реализации.
Любая ошибка шага превращается в единую `PackagingFailure`; частичный архив не возвращается.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from favicon_studio.errors import PackagingFailure
from favicon_studio.models.favicon_model import PackageArchive, SourceImage
from favicon_studio.models.naming import FAVICON_SIZES
from favicon_studio.services.archive_service import ArchiveService
from favicon_studio.services.color_service import AUTO_COLOR, ColorService
from favicon_studio.services.ico_service import IcoService
from favicon_studio.services.image_service import ImageService
from favicon_studio.services.manifest_service import ManifestService
from favicon_studio.services.resample_service import ResampleService

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "My App"


def canonical_sizes(sizes: Iterable[int]) -> List[int]:
    """Канонический порядок размеров: по возрастанию, без повторов."""
    return sorted(set(sizes))


@dataclass
class PackageService:
    """Собирает пакет фавиконок из одного исходного изображения.

    Не хранит состояния между вызовами: каждый вызов независим и не имеет побочных эффектов.
    """
    max_workers: Optional[int] = None
    image_service: ImageService = field(default_factory=ImageService)
    resample_service: ResampleService = field(default_factory=ResampleService)
    ico_service: IcoService = field(default_factory=IcoService)
    manifest_service: ManifestService = field(default_factory=ManifestService)
    archive_service: ArchiveService = field(default_factory=ArchiveService)
    color_service: ColorService = field(default_factory=ColorService)

    def create_package(
        self,
        source: SourceImage,
        sizes: Iterable[int] = FAVICON_SIZES,
        app_name: str = DEFAULT_APP_NAME,
        theme_color: Optional[str] = None,
        background_color: Optional[str] = None,
    ) -> PackageArchive:
        """Полный конвейер упаковки.

        Args:
            source: Декодированное исходное изображение.
            sizes: Требуемые размеры; порядок и повторы не важны.
            app_name: Имя приложения для манифеста.
            theme_color: `#rrggbb`, `"auto"` (средний цвет изображения) или None (белый).
            background_color: `#rrggbb`, `"auto"` или None (как цвет темы).

        Raises:
            PackagingFailure: если любой шаг не удался; причина доступна в `__cause__`.
        """
        try:
            ordered = canonical_sizes(sizes)
            logger.info("packaging favicon set", extra={"sizes": ordered, "app_name": app_name})

            variants = self.resample_service.resize_many(source, ordered, max_workers=self.max_workers)
            container = self.ico_service.encode_container(variants)

            if AUTO_COLOR in (theme_color, background_color):
                auto = self.color_service.dominant_color(source)
                theme_color = auto if theme_color == AUTO_COLOR else theme_color
                background_color = auto if background_color == AUTO_COLOR else background_color

            manifest = self.manifest_service.build_manifest(
                ordered, app_name, theme_color=theme_color, background_color=background_color
            )
            return self.archive_service.assemble(container, variants, manifest, app_name)
        except PackagingFailure:
            raise
        except Exception as exc:
            raise PackagingFailure(f"Не удалось собрать пакет фавиконок: {exc}") from exc

    def create_package_from_base64(self, payload: str, **kwargs) -> PackageArchive:
        """Декодирует base64-PNG и упаковывает его; ошибки декодирования тоже `PackagingFailure`."""
        try:
            source = self.image_service.decode_base64_png(payload)
        except Exception as exc:
            raise PackagingFailure(f"Не удалось декодировать изображение: {exc}") from exc
        return self.create_package(source, **kwargs)
