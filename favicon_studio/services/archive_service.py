"""Сборка ZIP-архива пакета фавиконок.

Принципы:
- Детерминизм: фиксированный порядок записей, фиксированная дата и права, один уровень сжатия.
- Атомарность: архив собирается в памяти и возвращается только целиком.
"""
from __future__ import annotations

import io
import logging
import zipfile
from typing import List, Sequence, Tuple

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.favicon_model import ManifestDocument, PackageArchive, RasterVariant
from favicon_studio.models.naming import ICO_FILENAME, MANIFEST_FILENAME, png_filename

logger = logging.getLogger(__name__)

# earliest timestamp the zip format can represent
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
COMPRESSION = zipfile.ZIP_DEFLATED
COMPRESS_LEVEL = 9
FILE_MODE = 0o644
UNIX_SYSTEM = 3


def _zip_info(name: str) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(filename=name, date_time=FIXED_DATE_TIME)
    info.compress_type = COMPRESSION
    info.create_system = UNIX_SYSTEM
    info.external_attr = (0o100000 | FILE_MODE) << 16
    return info


class ArchiveService:
    def plan_entries(
        self,
        container_bytes: bytes,
        variants: Sequence[RasterVariant],
        manifest: ManifestDocument,
    ) -> List[Tuple[str, bytes]]:
        """Проверяет входные данные и возвращает записи архива в каноническом порядке."""
        if not container_bytes:
            raise InvalidArgument("Пустой ICO-контейнер")
        if not variants:
            raise InvalidArgument("Нет PNG-вариантов для архива")

        ordered = sorted(variants, key=lambda v: v.size)
        sizes = [v.size for v in ordered]
        if len(set(sizes)) != len(sizes):
            raise InvalidArgument(f"Повторяющиеся размеры вариантов: {sizes}")

        entries: List[Tuple[str, bytes]] = [(ICO_FILENAME, container_bytes)]
        entries.extend((png_filename(v.size), v.png_bytes) for v in ordered)
        entries.append((MANIFEST_FILENAME, manifest.to_json()))

        names = {name for name, _data in entries}
        missing = [path for path in manifest.icon_paths if path not in names]
        if missing:
            raise InvalidArgument(f"Манифест ссылается на отсутствующие файлы: {missing}")
        return entries

    def assemble(
        self,
        container_bytes: bytes,
        variants: Sequence[RasterVariant],
        manifest: ManifestDocument,
        app_name: str,
    ) -> PackageArchive:
        """Упаковывает ICO, PNG-варианты и манифест в один ZIP.

        Returns:
            `PackageArchive` с байтами архива и именами записей в порядке записи.

        Raises:
            InvalidArgument: если входные данные неполны или манифест ссылается на отсутствующий файл.
        """
        entries = self.plan_entries(container_bytes, variants, manifest)

        buf = io.BytesIO()
        with zipfile.ZipFile(buf, mode="w", compression=COMPRESSION, compresslevel=COMPRESS_LEVEL) as zf:
            for name, data in entries:
                zf.writestr(_zip_info(name), data, compress_type=COMPRESSION, compresslevel=COMPRESS_LEVEL)

        archive = PackageArchive(data=buf.getvalue(), entry_names=tuple(name for name, _ in entries))
        logger.info(
            "assembled favicon archive",
            extra={"app_name": app_name, "entries": len(entries), "size_bytes": archive.size_bytes},
        )
        return archive

    def list_entries(self, data: bytes) -> List[str]:
        """Имена записей архива в порядке хранения."""
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            return zf.namelist()
