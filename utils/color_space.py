"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: utils/color_space.py – представления цвета и переходы между ними.

Назначение модуля:
- Разбор CSS-строк цвета в значение Color и каноничный HEX.
- Переходы RGB ↔ HSL ↔ CIELAB (D50) ↔ LCH.
- Отображение цветов вне охвата sRGB с сохранением светлоты и оттенка.
- Форматирование цвета в HEX/RGB/HSL/LCH-строки.

Переход sRGB ↔ CIELAB выполняет coloraide (пространство "lab" – D50 с
адаптацией Брэдфорда, как в CSS Color 4), полярный шаг Lab ↔ LCH считается здесь.
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import NamedTuple

from PIL import ImageColor
from coloraide import Color as ColorAide

from utils.errors import ParseError

BLACK_HEX = "#000000"

# Ниже этой хромы цвет считается ахроматическим (C = 0, H = 0)
ACHROMATIC_CHROMA = 1e-4
# Хрома любого цвета sRGB в CIELAB заметно меньше; большие значения урезаются
MAX_CHROMA = 200.0
# Точность поиска хромы на границе охвата sRGB
GAMUT_EPSILON = 1e-3


def round_half_up(value: float) -> int:
    """Округление «половина вверх», как Math.round в браузере."""
    return int(math.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 255 if value > 0 else 0
    return max(0, min(255, round_half_up(value)))


@dataclass(frozen=True)
class Color:
    """Неизменяемый sRGB-цвет с 8-битными каналами."""

    r: int
    g: int
    b: int

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> "Color":
        """Собирает цвет из произвольных чисел, обрезая их до 0..255."""
        return cls(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.hex


class Lch(NamedTuple):
    l: float  # noqa: E741
    c: float
    h: float


def parse(value: str | Color) -> Color:
    """Разбирает любую CSS-запись цвета, поддерживаемую Pillow.

    Принимаются HEX (3/4/6/8 знаков), rgb()/rgba(), hsl(), hsv() и именованные
    цвета. Альфа-канал отбрасывается. При ошибке выбрасывается ParseError.
    """
    if isinstance(value, Color):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ParseError(f"Некорректный цвет: {value!r}")
    try:
        channels = ImageColor.getrgb(value.strip())
    except ValueError as exc:
        raise ParseError(f"Некорректный цвет: {value!r}") from exc
    return Color(*channels[:3])


def normalize_hex(value: str | Color) -> str:
    """Возвращает каноничный HEX или чёрный цвет, если строку разобрать нельзя."""
    try:
        return parse(value).hex
    except ParseError:
        return BLACK_HEX


def lab_to_lch(l: float, a: float, b: float) -> Lch:  # noqa: E741
    chroma = math.hypot(a, b)
    if chroma < ACHROMATIC_CHROMA:
        return Lch(l, 0.0, 0.0)
    return Lch(l, chroma, math.degrees(math.atan2(b, a)) % 360)


def lch_to_lab(l: float, c: float, h: float) -> tuple[float, float, float]:  # noqa: E741
    radians = math.radians(h)
    return l, c * math.cos(radians), c * math.sin(radians)


def _lab_color(l: float, a: float, b: float) -> ColorAide:  # noqa: E741
    return ColorAide("lab", [l, a, b])


def _to_color(lab: ColorAide) -> Color:
    r, g, b = lab.convert("srgb").coords()
    return Color.from_rgb(r * 255, g * 255, b * 255)


def to_lab(color: Color) -> tuple[float, float, float]:
    """sRGB → CIELAB (D50)."""
    srgb = ColorAide("srgb", [color.r / 255, color.g / 255, color.b / 255])
    l, a, b = srgb.convert("lab").coords()  # noqa: E741
    return l, a, b


def from_lab(l: float, a: float, b: float) -> Color:  # noqa: E741
    """CIELAB → sRGB; каналы за пределами охвата обрезаются до 0..255."""
    return _to_color(_lab_color(l, a, b))


def to_lch(color: str | Color) -> Lch:
    """Переводит цвет в LCH. Для ахроматических цветов C = 0 и H = 0."""
    return lab_to_lch(*to_lab(parse(color)))


def from_lch(l: float, c: float, h: float) -> Color:  # noqa: E741
    """LCH → sRGB с отображением в охват.

    Если цвет не помещается в sRGB, хрома уменьшается двоичным поиском до
    границы охвата при неизменных L и H. Неконечный оттенок означает
    ахроматический цвет, неконечная светлота – чёрный.
    """
    if math.isnan(l):
        return Color(0, 0, 0)
    l = max(0.0, min(100.0, l))  # noqa: E741
    if not math.isfinite(h) or math.isnan(c):
        c, h = 0.0, 0.0
    c = max(-MAX_CHROMA, min(MAX_CHROMA, c))

    candidate = _lab_color(*lch_to_lab(l, c, h))
    if candidate.in_gamut("srgb"):
        return _to_color(candidate)

    low, high = 0.0, c
    while abs(high - low) > GAMUT_EPSILON:
        middle = (low + high) / 2
        if _lab_color(*lch_to_lab(l, middle, h)).in_gamut("srgb"):
            low = middle
        else:
            high = middle
    return _to_color(_lab_color(*lch_to_lab(l, low, h)))


def to_hsl(color: str | Color) -> tuple[float, float, float]:
    """Возвращает (оттенок°, насыщенность %, светлота %)."""
    c = parse(color)
    h, lightness, s = colorsys.rgb_to_hls(c.r / 255, c.g / 255, c.b / 255)
    return h * 360, s * 100, lightness * 100


def to_formats(color: str | Color) -> dict[str, str]:
    """Представляет цвет в форматах HEX, RGB, HSL и LCH."""
    c = parse(color)
    h, s, lightness = to_hsl(c)
    lch = to_lch(c)
    return {
        "hex": c.hex,
        "rgb": f"rgb({c.r}, {c.g}, {c.b})",
        "hsl": f"hsl({round_half_up(h) % 360}, {round_half_up(s)}%, {round_half_up(lightness)}%)",
        "lch": f"lch({round_half_up(lch.l)} {round_half_up(lch.c)} {round_half_up(lch.h) % 360})",
    }
