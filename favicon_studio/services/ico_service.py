"""Кодирование многоразмерного ICO-контейнера с PNG-полезной нагрузкой.

Формат (все поля little-endian):
- заголовок 6 байт: reserved (0), type (1 = иконка), count;
- каталог: по 16 байт на изображение: width, height (0 означает 256), colors, reserved,
  planes, bit depth, длина данных, абсолютное смещение данных;
- данные: PNG-байты изображений подряд в порядке каталога.
"""
from __future__ import annotations

import logging
import struct
from typing import List, Sequence

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.favicon_model import IconDirectoryEntry, RasterVariant

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<HHH"
ENTRY_FORMAT = "<BBBBHHII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)

ICON_TYPE = 1
MAX_ICON_SIZE = 256
COLOR_PLANES = 1
BIT_DEPTH = 32

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_dimensions(png_bytes: bytes) -> tuple[int, int]:
    """Ширина и высота из чанка IHDR (big-endian)."""
    if len(png_bytes) < 24 or not png_bytes.startswith(_PNG_SIGNATURE) or png_bytes[12:16] != b"IHDR":
        raise InvalidArgument("Данные варианта не являются PNG")
    width, height = struct.unpack(">II", png_bytes[16:24])
    return width, height


class IcoService:
    def encode_container(self, variants: Sequence[RasterVariant]) -> bytes:
        """Собирает ICO-контейнер из вариантов в заданном порядке.

        Raises:
            InvalidArgument: пустой набор, размер больше 256 или PNG не совпадает с объявленным размером.
        """
        if not variants:
            raise InvalidArgument("Нельзя собрать ICO без изображений")

        count = len(variants)
        offset = HEADER_SIZE + ENTRY_SIZE * count
        directory = bytearray()
        payload = bytearray()

        for variant in variants:
            if variant.size > MAX_ICON_SIZE:
                raise InvalidArgument(f"ICO не поддерживает размер {variant.size} (максимум {MAX_ICON_SIZE})")
            width, height = _png_dimensions(variant.png_bytes)
            if (width, height) != (variant.size, variant.size):
                raise InvalidArgument(
                    f"PNG {width}x{height} не совпадает с размером варианта {variant.size}"
                )
            dim = 0 if variant.size == MAX_ICON_SIZE else variant.size
            length = len(variant.png_bytes)
            directory += struct.pack(
                ENTRY_FORMAT,
                dim,
                dim,
                0,  # palette colours, 0 for truecolour
                0,  # reserved
                COLOR_PLANES,
                BIT_DEPTH,
                length,
                offset,
            )
            payload += variant.png_bytes
            offset += length

        header = struct.pack(HEADER_FORMAT, 0, ICON_TYPE, count)
        data = header + bytes(directory) + bytes(payload)
        logger.debug("encoded ico: %d images, %d bytes", count, len(data))
        return data

    def read_directory(self, data: bytes) -> List[IconDirectoryEntry]:
        """Разбирает заголовок и каталог контейнера с проверкой границ."""
        if len(data) < HEADER_SIZE:
            raise InvalidArgument("Контейнер короче заголовка")
        reserved, icon_type, count = struct.unpack_from(HEADER_FORMAT, data, 0)
        if reserved != 0 or icon_type != ICON_TYPE:
            raise InvalidArgument("Неверный заголовок ICO")
        if count == 0:
            raise InvalidArgument("Контейнер не содержит изображений")
        if len(data) < HEADER_SIZE + ENTRY_SIZE * count:
            raise InvalidArgument("Каталог выходит за пределы контейнера")

        entries: List[IconDirectoryEntry] = []
        for index in range(count):
            width, height, colors, _reserved, planes, bit_depth, length, offset = struct.unpack_from(
                ENTRY_FORMAT, data, HEADER_SIZE + ENTRY_SIZE * index
            )
            if offset + length > len(data):
                raise InvalidArgument(f"Изображение #{index} выходит за пределы контейнера")
            entries.append(
                IconDirectoryEntry(
                    width=width,
                    height=height,
                    color_count=colors,
                    planes=planes,
                    bit_depth=bit_depth,
                    length=length,
                    offset=offset,
                )
            )
        return entries

    def extract_images(self, data: bytes) -> List[bytes]:
        """Возвращает полезную нагрузку каждого изображения в порядке каталога."""
        return [data[e.offset:e.offset + e.length] for e in self.read_directory(data)]
