"""Общие фикстуры: приложение Flask и изображения, собранные в памяти."""

from __future__ import annotations

import io

import pytest
from PIL import Image

from app import create_app


@pytest.fixture()
def app():
    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app):
    return app.test_client()


def make_image_bytes(size=(100, 100), color=(20, 20, 20), mode="RGB", image_format="PNG") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=image_format)
    return buffer.getvalue()


def make_two_tone_png() -> bytes:
    """100x100: 60 строк (20, 20, 20) сверху и 40 строк (250, 10, 10) снизу."""
    image = Image.new("RGB", (100, 100), (20, 20, 20))
    image.paste((250, 10, 10), (0, 60, 100, 100))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def two_tone_png() -> bytes:
    return make_two_tone_png()
