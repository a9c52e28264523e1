"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: utils/export_handler.py – формирование данных для экспорта палитр.

Назначение модуля:
- Подготовка содержимого палитры в форматах CSS, PNG, SVG и JSON.
- Возврат бинарных данных, имени файла и MIME-типа для отправки пользователю.
"""

import io
import json
import math
from datetime import datetime
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont

from utils.color_space import parse

DEFAULT_TITLE = "ABEJORRO DIGITAL COLOR"
BACKGROUND = "#f5f5f0"
INK = "#141414"
MUTED = "#8e9299"


def _render_palette_css(colors: List[str]) -> str:
    """CSS-переменные палитры, градиент из первых двух цветов и утилиты."""
    lines = [":root {"]
    for index, color in enumerate(colors, start=1):
        lines.append(f"  --color-{index}: {color};")
    second = colors[1] if len(colors) > 1 else colors[0]
    lines.append(f"  --gradient-primary: linear-gradient(135deg, {colors[0]}, {second});")
    lines.append("}")
    lines.append("")
    lines.append(".bg-primary { background-color: var(--color-1); }")
    lines.append(".text-primary { color: var(--color-1); }")
    lines.append(".border-primary { border-color: var(--color-1); }")
    return "\n".join(lines) + "\n"


def _render_palette_png(colors: List[str], title: str) -> bytes:
    """Рендерит PNG с цветными плашками, HEX-подписями и номерами цветов."""
    total_colors = len(colors)
    columns = min(total_colors, 5)
    rows = math.ceil(total_colors / columns)

    swatch_width = 160
    swatch_height = 250
    label_height = 70
    card_gap = 25
    padding = 50
    header_height = 130

    width = padding * 2 + columns * swatch_width + (columns - 1) * card_gap
    height = header_height + padding + rows * (swatch_height + label_height) + (rows - 1) * card_gap

    image = Image.new("RGB", (width, height), parse(BACKGROUND).rgb)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    draw.text((padding, 50), title, fill=parse(INK).rgb, font=font)
    draw.text((padding, 80), "PALETA DE DISENO GENERADA", fill=parse(MUTED).rgb, font=font)

    for index, color in enumerate(colors):
        row = index // columns
        col = index % columns

        x1 = padding + col * (swatch_width + card_gap)
        y1 = header_height + row * (swatch_height + label_height + card_gap)
        x2 = x1 + swatch_width - 1
        y2 = y1 + swatch_height - 1

        draw.rectangle((x1 + 5, y1 + 5, x2 + 5, y2 + 5), fill=(228, 228, 224))
        draw.rectangle((x1, y1, x2, y2), fill=parse(color).rgb)

        draw.text((x1, y2 + 20), color.upper(), fill=parse(INK).rgb, font=font)
        draw.text((x1, y2 + 42), f"COLOR {index + 1}", fill=parse(MUTED).rgb, font=font)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG", optimize=True)
    return buffer.getvalue()


def _render_palette_svg(colors: List[str], title: str) -> str:
    """Векторный документ с прямоугольниками цветов и HEX-подписями."""
    width = max(700, 100 + len(colors) * 120)
    swatches = "".join(
        f'\n  <g transform="translate({50 + i * 120}, 100)">'
        f'\n    <rect width="100" height="150" fill="{color}" rx="8" />'
        f'\n    <text y="180" font-family="monospace" font-size="12" font-weight="bold">{color.upper()}</text>'
        f'\n    <text y="195" font-family="sans-serif" font-size="10" fill="#888">COLOR {i + 1}</text>'
        f"\n  </g>"
        for i, color in enumerate(colors)
    )
    return (
        f'<svg width="{width}" height="300" viewBox="0 0 {width} 300" xmlns="http://www.w3.org/2000/svg">'
        f'\n  <rect width="100%" height="100%" fill="{BACKGROUND}" />'
        f'\n  <text x="50" y="50" font-family="sans-serif" font-size="24" font-weight="bold">{escape(title)}</text>'
        f"{swatches}"
        "\n</svg>\n"
    )


def export_palette_data(
    colors: List[str],
    format_type: str = "css",
    title: str = DEFAULT_TITLE,
) -> Tuple[Optional[bytes], Optional[str], Optional[str]]:
    """Генерирует данные для экспорта палитры в различных форматах.

    Возвращает кортеж (content, filename, mimetype). Для пустой палитры или
    неизвестного формата все три значения равны None.
    """
    if not colors:
        return None, None, None

    colors = [parse(color).hex for color in colors]

    if format_type == "css":
        return _render_palette_css(colors).encode("utf-8"), "colores.css", "text/css"

    if format_type == "png":
        return _render_palette_png(colors, title), "paleta-abejorro.png", "image/png"

    if format_type == "svg":
        return _render_palette_svg(colors, title).encode("utf-8"), "paleta-abejorro.svg", "image/svg+xml"

    if format_type == "json":
        content = json.dumps(
            {
                "name": title,
                "colors": colors,
                "generated": datetime.now().isoformat(),
            },
            indent=2,
        )
        return content.encode("utf-8"), "palette.json", "application/json"

    return None, None, None
