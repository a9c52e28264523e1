"""
Модуль: `utils/quantizer.py`.
Назначение: Поиск доминирующих цветов по гистограмме грубых цветовых корзин.
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)

QUANTIZATION_FACTOR = 32


def quantize(pixels, count: int, factor: int = QUANTIZATION_FACTOR) -> list[str]:
    """Группирует пиксели по корзинам и возвращает самые частые HEX-цвета.

    Каждый канал округляется до ближайшего кратного factor (половина вверх) и
    обрезается до 0..255. Корзины сортируются по убыванию числа пикселей, при
    равенстве по возрастанию ключа (r, g, b).
    """
    if count <= 0:
        return []

    channels = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)
    if channels.shape[0] == 0:
        return []

    keys = np.floor(channels / factor + 0.5).astype(np.int64) * factor
    keys = np.clip(keys, 0, 255)
    packed = (keys[:, 0] << 16) | (keys[:, 1] << 8) | keys[:, 2]

    buckets, counts = np.unique(packed, return_counts=True)
    order = np.argsort(-counts, kind="stable")[:count]
    logger.debug("Корзин: %d, пикселей: %d", buckets.size, channels.shape[0])

    return [
        f"#{(key >> 16) & 0xFF:02x}{(key >> 8) & 0xFF:02x}{key & 0xFF:02x}"
        for key in (int(k) for k in buckets[order])
    ]
