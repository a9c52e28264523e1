"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: utils/image_processor.py – обработка изображений.

Назначение модуля:
- Открытие изображения из файла, байтов, потока или data URL.
- Пропорциональное уменьшение до 200 пикселей по большей стороне.
- Выделение доминирующих цветов через квантизатор корзин.
"""

import base64
import binascii
import io
import logging
import re

import numpy as np
from PIL import Image, UnidentifiedImageError

from utils.errors import DecodeError
from utils.quantizer import QUANTIZATION_FACTOR, quantize

logger = logging.getLogger(__name__)

SAMPLE_MAX_DIMENSION = 200

_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,(?P<payload>.+)$", re.DOTALL)


def decode_data_url(value: str) -> bytes:
    """Извлекает байты изображения из строки вида data:image/png;base64,..."""
    match = _DATA_URL_RE.match(value.strip())
    if not match:
        raise DecodeError("Строка не является data URL изображения")
    try:
        return base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError("Повреждённые данные base64") from exc


def _open_image(source) -> Image.Image:
    if isinstance(source, str) and source.startswith("data:"):
        source = decode_data_url(source)
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        image = Image.open(source)
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Не удалось открыть изображение: {exc}") from exc
    return image


def sample_size(width: int, height: int, max_dimension: int = SAMPLE_MAX_DIMENSION) -> tuple[int, int]:
    """Размер выборки: большая сторона не больше max_dimension, без увеличения."""
    scale = min(max_dimension / width, max_dimension / height, 1)
    return (
        max(1, int(width * scale + 0.5)),
        max(1, int(height * scale + 0.5)),
    )


def sample_pixels(source, max_dimension: int = SAMPLE_MAX_DIMENSION) -> np.ndarray:
    """Возвращает массив пикселей (N, 3) uint8 построчно, без альфа-канала."""
    with _open_image(source) as image:
        logger.debug("Изображение открыто, размер: %s, режим: %s", image.size, image.mode)
        rgb = image.convert("RGB")

    size = sample_size(*rgb.size, max_dimension=max_dimension)
    if size != rgb.size:
        rgb = rgb.resize(size, Image.Resampling.BILINEAR)
        logger.debug("Изображение уменьшено до %dx%d", *size)

    return np.asarray(rgb, dtype=np.uint8).reshape(-1, 3)


def extract_palette(
    source,
    num_colors: int = 5,
    max_dimension: int = SAMPLE_MAX_DIMENSION,
    factor: int = QUANTIZATION_FACTOR,
) -> list[str]:
    """Извлекает доминирующие цвета изображения в виде HEX-строк."""
    pixels = sample_pixels(source, max_dimension=max_dimension)
    logger.debug("Количество пикселей для квантизации: %d", pixels.shape[0])
    hex_colors = quantize(pixels, num_colors, factor=factor)
    logger.debug("Итоговые HEX-цвета: %s", hex_colors)
    return hex_colors
