"""
Название: «Abejorro»
Язык: Python (Flask)
Краткое описание: сервис извлечения цветовых палитр из изображений,
перцептивной коррекции цвета, гармоний, проверки контраста и экспорта.
"""

import logging
import os

from flask import Flask, jsonify

from config import Config
from extensions import cors
from routes.api import register_routes as register_api_routes
from utils.color_space import parse
from utils.errors import ParseError


def _normalize_configured_palettes(app: Flask) -> None:
    """Проверяет палитры из конфигурации и приводит их к каноничным HEX."""
    try:
        default = [parse(color).hex for color in app.config["DEFAULT_PALETTE"]]
        suggested = [
            [parse(color).hex for color in palette]
            for palette in app.config["SUGGESTED_PALETTES"]
        ]
    except ParseError as exc:
        raise RuntimeError(f"Некорректный цвет в палитре из конфигурации: {exc}") from exc

    if not default:
        raise RuntimeError("DEFAULT_PALETTE должна содержать хотя бы один цвет")

    app.config["DEFAULT_PALETTE"] = default
    app.config["SUGGESTED_PALETTES"] = suggested


def create_app(config_object=Config) -> Flask:
    """Фабрика приложения, собирающая все модули воедино."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    _normalize_configured_palettes(app)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])

    if app.config["CORS_ENABLED"]:
        cors.init_app(
            app,
            resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        )

    register_api_routes(app)

    @app.errorhandler(413)
    def payload_too_large(error):
        """Ответ на слишком большой запрос (MAX_CONTENT_LENGTH)."""
        limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        return (
            jsonify({"success": False, "error": f"Файл слишком большой. Максимальный размер: {limit_mb} МБ"}),
            413,
        )

    @app.after_request
    def apply_security_headers(response):
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        return response

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}, 200

    return app


app = create_app()


if __name__ == "__main__":
    is_production = os.environ.get("FLASK_ENV", "").lower() == "production"
    app.run(debug=not is_production)
