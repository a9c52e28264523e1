"""
Модуль: `utils/share.py`.
Назначение: Сериализация палитры в ссылку вида ?colors=rrggbb,rrggbb,... и обратно.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence
from urllib.parse import urlencode

from utils.color_space import parse
from utils.errors import ParseError, ValidationError

logger = logging.getLogger(__name__)

SHARE_PARAM = "colors"
SHARE_PALETTE_SIZE = 5


def encode_palette(colors: Iterable[str]) -> str:
    """Склеивает HEX-цвета без решётки через запятую в порядке палитры."""
    return ",".join(parse(color).hex[1:] for color in colors)


def decode_palette(raw: str | None, expected_size: int = SHARE_PALETTE_SIZE) -> list[str]:
    """Разбирает строку ссылки; выбрасывает ValidationError при любом несоответствии."""
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Пустая ссылка на палитру")

    segments = [segment.strip() for segment in raw.split(",")]
    if len(segments) != expected_size:
        raise ValidationError(
            f"Ожидалось {expected_size} цветов, получено {len(segments)}"
        )

    colors = []
    for segment in segments:
        try:
            colors.append(parse("#" + segment.lstrip("#")).hex)
        except ParseError as exc:
            raise ValidationError(f"Некорректный цвет в ссылке: {segment!r}") from exc
    return colors


def restore_palette(
    raw: str | None,
    default: Sequence[str],
    expected_size: int = SHARE_PALETTE_SIZE,
) -> list[str]:
    """Восстанавливает палитру из ссылки или возвращает палитру по умолчанию."""
    try:
        return decode_palette(raw, expected_size)
    except ValidationError as exc:
        logger.debug("Ссылка на палитру отклонена: %s", exc)
        return [parse(color).hex for color in default]


def share_query(colors: Iterable[str]) -> str:
    """Строка запроса для адреса страницы, запятые остаются читаемыми."""
    return "?" + urlencode({SHARE_PARAM: encode_palette(colors)}, safe=",")
