"""Имена файлов пакета фавиконок.

Единственный источник имён: архив, манифест и HTML-сниппет строятся из этих констант.
"""
from __future__ import annotations

FAVICON_SIZES: tuple[int, ...] = (16, 32, 48)

ICO_FILENAME = "favicon.ico"
MANIFEST_FILENAME = "site.webmanifest"
ARCHIVE_FILENAME = "favicon_package.zip"
PNG_MIME_TYPE = "image/png"


def png_filename(size: int) -> str:
    """`16` -> `favicon-16x16.png`."""
    return f"favicon-{size}x{size}.png"


def sizes_label(size: int) -> str:
    return f"{size}x{size}"
