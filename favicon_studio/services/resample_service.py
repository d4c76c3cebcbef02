from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from PIL import Image, ImageOps

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.favicon_model import RasterVariant, SourceImage

logger = logging.getLogger(__name__)

# Lanczos handles both up- and downscaling without visible aliasing
RESAMPLE_FILTER = Image.Resampling.LANCZOS
PNG_COMPRESS_LEVEL = 9


def _validate_size(target_size: object) -> int:
    if isinstance(target_size, bool) or not isinstance(target_size, int):
        raise InvalidArgument(f"Размер должен быть целым числом: {target_size!r}")
    if target_size <= 0:
        raise InvalidArgument(f"Размер должен быть положительным: {target_size}")
    return target_size


class ResampleService:
    def resize(self, source: SourceImage, target_size: int) -> RasterVariant:
        """
        Приводит исходное изображение к квадрату `target_size`×`target_size` и кодирует в PNG.
        Неквадратный источник обрезается по центру. Альфа-канал сохраняется.
        """
        size = _validate_size(target_size)
        image = source.pil_image
        if image.mode != "RGBA":
            image = image.convert("RGBA")

        resized = ImageOps.fit(image, (size, size), method=RESAMPLE_FILTER, centering=(0.5, 0.5))
        # metadata from the source must not leak into the variant bytes
        resized.info = {}

        buf = io.BytesIO()
        resized.save(buf, format="PNG", compress_level=PNG_COMPRESS_LEVEL, optimize=False)
        return RasterVariant(size=size, png_bytes=buf.getvalue())

    def resize_many(
        self,
        source: SourceImage,
        sizes: Sequence[int],
        max_workers: Optional[int] = None,
    ) -> List[RasterVariant]:
        """
        Ресемплинг сразу нескольких размеров.
        При `max_workers` > 1 размеры считаются параллельно; порядок результата всегда равен порядку `sizes`.
        """
        for size in sizes:
            _validate_size(size)
        if not max_workers or max_workers <= 1 or len(sizes) <= 1:
            return [self.resize(source, size) for size in sizes]

        logger.debug("resampling %d sizes with %d workers", len(sizes), max_workers)
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="resample") as pool:
            # map() yields in submission order regardless of completion order
            return list(pool.map(lambda s: self.resize(source, s), sizes))
