from __future__ import annotations

from typing import Iterable, Optional

from favicon_studio.errors import InvalidArgument
from favicon_studio.models.favicon_model import IconReference, ManifestDocument
from favicon_studio.models.naming import PNG_MIME_TYPE, png_filename, sizes_label

DEFAULT_COLOR = "#ffffff"
DISPLAY_MODE = "standalone"
SHORT_NAME_LIMIT = 12


def short_name_for(app_name: str) -> str:
    name = app_name.strip()
    if len(name) <= SHORT_NAME_LIMIT:
        return name
    return name[:SHORT_NAME_LIMIT].rstrip()


class ManifestService:
    def build_manifest(
        self,
        variant_sizes: Iterable[int],
        app_name: str,
        theme_color: Optional[str] = None,
        background_color: Optional[str] = None,
    ) -> ManifestDocument:
        """
        Web-манифест: по одной ссылке на каждый уникальный размер, по возрастанию.
        Пути совпадают с именами PNG-файлов в архиве.
        """
        if not app_name or not app_name.strip():
            raise InvalidArgument("Имя приложения не задано")

        requested = list(variant_sizes)
        if not requested:
            raise InvalidArgument("Манифест требует хотя бы один размер")
        for size in requested:
            if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
                raise InvalidArgument(f"Некорректный размер иконки: {size!r}")
        sizes = sorted(set(requested))

        icons = tuple(
            IconReference(src=png_filename(size), sizes=sizes_label(size), type=PNG_MIME_TYPE)
            for size in sizes
        )
        theme = theme_color or DEFAULT_COLOR
        return ManifestDocument(
            name=app_name.strip(),
            short_name=short_name_for(app_name),
            theme_color=theme,
            background_color=background_color or theme,
            display=DISPLAY_MODE,
            icons=icons,
        )
