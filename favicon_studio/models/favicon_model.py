"""Модели данных пакета фавиконок.

Принципы:
- SRP: только структуры данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`), каждая сущность принадлежит одному вызову упаковки.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from PIL import Image

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.naming import ARCHIVE_FILENAME


@dataclass(frozen=True)
class SourceImage:
    """Декодированное исходное изображение.

    Fields:
        pil_image: Изображение PIL в режиме RGBA.
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, всегда "RGBA".
    """
    pil_image: Image.Image
    width: int
    height: int
    mode: str

    @classmethod
    def from_pil(cls, image: Image.Image) -> "SourceImage":
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        width, height = rgba.size
        return cls(pil_image=rgba, width=width, height=height, mode=rgba.mode)


@dataclass(frozen=True)
class RasterVariant:
    """Квадратный вариант изображения, закодированный в PNG.

    Fields:
        size: Сторона квадрата, px.
        png_bytes: PNG, который декодируется ровно в `size`×`size`.
    """
    size: int
    png_bytes: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise InvalidArgument(f"Размер варианта должен быть положительным целым: {self.size!r}")


@dataclass(frozen=True)
class IconDirectoryEntry:
    """Запись каталога ICO-контейнера (16 байт, little-endian)."""
    width: int
    height: int
    color_count: int
    planes: int
    bit_depth: int
    length: int
    offset: int

    @property
    def size(self) -> int:
        # 0 in the width byte means 256
        return self.width or 256


@dataclass(frozen=True)
class IconReference:
    src: str
    sizes: str
    type: str

    def to_dict(self) -> Dict[str, str]:
        return {"src": self.src, "sizes": self.sizes, "type": self.type}


@dataclass(frozen=True)
class ManifestDocument:
    """Документ web-манифеста.

    Fields:
        name: Полное имя приложения.
        short_name: Короткое имя (не длиннее 12 символов).
        theme_color: Цвет темы, `#rrggbb`.
        background_color: Цвет фона, `#rrggbb`.
        display: Режим отображения.
        icons: Ссылки на иконки по возрастанию размера.
    """
    name: str
    short_name: str
    theme_color: str
    background_color: str
    display: str
    icons: Tuple[IconReference, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "short_name": self.short_name,
            "icons": [icon.to_dict() for icon in self.icons],
            "theme_color": self.theme_color,
            "background_color": self.background_color,
            "display": self.display,
        }

    def to_json(self) -> bytes:
        """Детерминированная сериализация: UTF-8, отступ 2, перевод строки в конце."""
        text = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    @property
    def icon_paths(self) -> Tuple[str, ...]:
        return tuple(icon.src for icon in self.icons)


@dataclass(frozen=True)
class PackageArchive:
    """Готовый ZIP-архив пакета фавиконок."""
    data: bytes = field(repr=False)
    entry_names: Tuple[str, ...]
    filename: str = ARCHIVE_FILENAME

    @property
    def size_bytes(self) -> int:
        return len(self.data)
