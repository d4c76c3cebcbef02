"""Точка входа в приложение."""
from favicon_studio.app import FaviconStudioApp
from favicon_studio.config import get_settings
from favicon_studio.logging_config import setup_logging


def main() -> None:
    """Загружает настройки, включает логирование и запускает главное окно."""
    settings = get_settings()
    setup_logging(settings.log_level, use_json=settings.log_json)
    app = FaviconStudioApp(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
