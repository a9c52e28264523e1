"""
Модуль: `utils/errors.py`.
Назначение: Типизированные ошибки ядра палитры.
"""


class PaletteError(Exception):
    """Базовая ошибка обработки палитры."""


class DecodeError(PaletteError):
    """Изображение не удалось загрузить или декодировать."""


class ParseError(PaletteError):
    """Строка не является корректным CSS-цветом."""


class ValidationError(PaletteError):
    """Входные данные палитры не прошли проверку."""
