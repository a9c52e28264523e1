"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: utils/transforms.py – перцептивные преобразования цвета.

Назначение модуля:
- Построение гармоний (аналоги, триада, комплементарный цвет, тени, тона) в LCH.
- Коррекция яркости, насыщенности и «теплоты» цвета.
- Расчёт относительной яркости и контраста по WCAG 2.x.

Все функции чистые: принимают HEX-строку или Color и возвращают новые значения.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from utils.color_space import Color, from_lch, parse, to_lch
from utils.errors import ValidationError


def _rotate(color: str | Color, *offsets: float) -> list[str]:
    lch = to_lch(color)
    return [from_lch(lch.l, lch.c, (lch.h + offset) % 360).hex for offset in offsets]


def analogous(color: str | Color) -> list[str]:
    """Два соседних цвета: H + 30° и H − 30°."""
    return _rotate(color, 30, -30)


def triadic(color: str | Color) -> list[str]:
    """Два цвета триады: H + 120° и H + 240°."""
    return _rotate(color, 120, 240)


def complementary(color: str | Color) -> list[str]:
    """Противоположный цвет: H + 180°."""
    return _rotate(color, 180)


def shades(color: str | Color) -> list[str]:
    """Три всё более тёмных варианта: L × 0.8, 0.6, 0.4."""
    lch = to_lch(color)
    return [from_lch(lch.l * factor, lch.c, lch.h).hex for factor in (0.8, 0.6, 0.4)]


def tones(color: str | Color) -> list[str]:
    """Три всё менее насыщенных варианта: C × 0.7, 0.4, 0.1."""
    lch = to_lch(color)
    return [from_lch(lch.l, lch.c * factor, lch.h).hex for factor in (0.7, 0.4, 0.1)]


HARMONIES: dict[str, Callable[[str | Color], list[str]]] = {
    "analogous": analogous,
    "triadic": triadic,
    "complementary": complementary,
    "shades": shades,
    "tones": tones,
}


def harmony(kind: str, color: str | Color) -> list[str]:
    """Выполняет построение гармонии указанного вида."""
    builder = HARMONIES.get((kind or "").strip().lower())
    if builder is None:
        raise ValidationError(f"Неизвестный тип гармонии: {kind!r}")
    return builder(color)


def adjust(
    color: str | Color,
    brightness: float = 0,
    saturation: float = 1,
    warmth: float = 0,
) -> str:
    """Корректирует цвет в пространстве LCH.

    brightness прибавляется к L (результат в пределах 0..100), saturation
    умножает C (не меньше 0), warmth сдвигает H по кругу 360°.
    """
    lch = to_lch(color)
    lightness = max(0.0, min(100.0, lch.l + brightness))
    chroma = max(0.0, lch.c * saturation)
    hue = (lch.h + warmth + 360) % 360
    return from_lch(lightness, chroma, hue).hex


def relative_luminance(color: str | Color) -> float:
    """Относительная яркость по WCAG 2.x."""

    def linearize(channel: int) -> float:
        v = channel / 255
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    c = parse(color)
    return 0.2126 * linearize(c.r) + 0.7152 * linearize(c.g) + 0.0722 * linearize(c.b)


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    aa: bool
    aaa: bool
    aa_large: bool

    def to_dict(self) -> dict:
        return {"ratio": self.ratio, "aa": self.aa, "aaa": self.aaa, "aaLarge": self.aa_large}


def contrast(foreground: str | Color, background: str | Color) -> ContrastResult:
    """Коэффициент контраста двух цветов и соответствие уровням AA/AAA."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    ratio = (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)
    return ContrastResult(
        ratio=round(ratio, 2),
        aa=ratio >= 4.5,
        aaa=ratio >= 7,
        aa_large=ratio >= 3,
    )
