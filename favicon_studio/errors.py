"""Иерархия ошибок приложения.

Компоненты поднимают исключения, а не глушат их:
- `InvalidArgument`: нарушение контракта вызова (пустой набор, размер <= 0);
- `UpstreamGenerationFailure`: внешний сервис генерации не вернул изображение;
- `PackagingFailure`: сводная ошибка конвейера упаковки.
"""
from __future__ import annotations


class FaviconStudioError(Exception):
    """Базовый класс всех ошибок приложения."""


class InvalidArgument(FaviconStudioError, ValueError):
    """Некорректный или отсутствующий входной аргумент."""


class UpstreamGenerationFailure(FaviconStudioError):
    """Генерация изображения завершилась неудачей."""


class PackagingFailure(FaviconStudioError):
    """Ресемплинг, кодирование контейнера или сборка архива не удались."""
