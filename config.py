"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Параметры загрузки изображений (максимальный размер, допустимые форматы).
- Параметры извлечения палитры (размер выборки, шаг квантизации, число цветов).
- Палитра по умолчанию, предложенные палитры, CORS и уровень логирования.
"""

import os


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str] | None = None) -> list[str]:
    """Преобразует переменную окружения вида 'a,b,c' в список."""
    value = os.environ.get(name)
    if value is None:
        return list(default or [])
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Базовая конфигурация приложения."""

    MAX_CONTENT_LENGTH = _get_env_int("MAX_CONTENT_LENGTH", 16 * 1024 * 1024)
    ALLOWED_EXTENSIONS = {"png", "jpg", "jpeg", "webp", "gif", "bmp"}
    ALLOWED_IMAGE_FORMATS = {"png", "jpeg", "webp", "gif", "bmp"}
    MAX_IMAGE_PIXELS = _get_env_int("MAX_IMAGE_PIXELS", 20_000_000)

    SAMPLE_MAX_DIMENSION = _get_env_int("SAMPLE_MAX_DIMENSION", 200)
    QUANTIZATION_FACTOR = _get_env_int("QUANTIZATION_FACTOR", 32)
    DEFAULT_COLOR_COUNT = _get_env_int("DEFAULT_COLOR_COUNT", 5)
    MIN_COLOR_COUNT = _get_env_int("MIN_COLOR_COUNT", 1)
    MAX_COLOR_COUNT = _get_env_int("MAX_COLOR_COUNT", 15)

    SHARE_PALETTE_SIZE = _get_env_int("SHARE_PALETTE_SIZE", 5)
    DEFAULT_PALETTE = _get_env_list(
        "DEFAULT_PALETTE",
        default=["#141414", "#f27d26", "#e4e3e0", "#8e9299", "#ffffff"],
    )
    # Готовые палитры «Sugerencia 1..3», которые можно применить одним действием
    SUGGESTED_PALETTES = [
        ["#2C3E50", "#E74C3C", "#ECF0F1", "#3498DB", "#2980B9"],
        ["#1B1B1B", "#FFD700", "#F5F5F5", "#C0C0C0", "#808080"],
        ["#2D5A27", "#F1C40F", "#FFFFFF", "#E67E22", "#D35400"],
    ]
    EXPORT_TITLE = os.environ.get("EXPORT_TITLE", "ABEJORRO DIGITAL COLOR")

    CORS_ENABLED = _get_env_bool("CORS_ENABLED", default=False)
    CORS_ORIGINS = _get_env_list(
        "CORS_ORIGINS",
        default=["http://127.0.0.1:5000", "http://localhost:5000"],
    )

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    @staticmethod
    def allowed_file(filename: str) -> bool:
        """Проверяет расширение имени загружаемого файла."""
        return (
            "." in filename
            and filename.rsplit(".", 1)[1].lower() in Config.ALLOWED_EXTENSIONS
        )
