"""HTML-разметка для `<head>`, ссылающаяся на файлы пакета.

Строится из тех же констант имён и того же списка размеров, что и архив с манифестом,
поэтому не расходится с ними.
"""
from __future__ import annotations

from typing import Iterable

from favicon_studio.models.naming import (
    FAVICON_SIZES,
    ICO_FILENAME,
    MANIFEST_FILENAME,
    PNG_MIME_TYPE,
    png_filename,
    sizes_label,
)


def _build_snippet(sizes: Iterable[int]) -> str:
    lines = [f'<link rel="icon" href="/{ICO_FILENAME}" sizes="any">']
    for size in sorted(set(sizes)):
        lines.append(
            f'<link rel="icon" type="{PNG_MIME_TYPE}" sizes="{sizes_label(size)}" href="/{png_filename(size)}">'
        )
    lines.append(f'<link rel="manifest" href="/{MANIFEST_FILENAME}">')
    return "\n".join(lines)


HTML_SNIPPET = _build_snippet(FAVICON_SIZES)


def get_snippet(sizes: Iterable[int] = FAVICON_SIZES) -> str:
    """Разметка для списка размеров, с которым собирается пакет (по умолчанию стандартный)."""
    sizes = tuple(sizes)
    if sizes == tuple(FAVICON_SIZES):
        return HTML_SNIPPET
    return _build_snippet(sizes)
