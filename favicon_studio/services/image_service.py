"""Декодирование изображения, полученного от сервиса генерации.

Принципы:
- SRP: класс отвечает только за превращение base64-PNG в `SourceImage`.
- OCP: новые источники (файл, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `SourceImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.favicon_model import SourceImage

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = "data:image/png;base64,"


class ImageService:
    def decode_base64_png(self, payload: str | bytes) -> SourceImage:
        """Декодирует base64-PNG и возвращает исходное изображение.

        Args:
            payload: Строка base64 (допускается префикс `data:image/png;base64,`).

        Returns:
            `SourceImage` c `PIL.Image.Image` в режиме RGBA и его размерами.

        Raises:
            InvalidArgument: если данные пусты, не являются base64 или не являются PNG.
        """
        if isinstance(payload, bytes):
            payload = payload.decode("ascii", errors="strict")
        if not payload or not payload.strip():
            raise InvalidArgument("Пустые данные изображения")

        text = payload.strip()
        if text.startswith(_DATA_URL_PREFIX):
            text = text[len(_DATA_URL_PREFIX):]

        try:
            raw = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidArgument("Данные изображения не являются base64") from exc

        try:
            pil_image = Image.open(io.BytesIO(raw))
            pil_image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise InvalidArgument("Данные не являются изображением") from exc

        if pil_image.format != "PNG":
            raise InvalidArgument(f"Ожидался PNG, получен {pil_image.format}")

        source = SourceImage.from_pil(pil_image)
        logger.debug("decoded source image %dx%d (%d bytes)", source.width, source.height, len(raw))
        return source

