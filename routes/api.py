"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: routes/api.py – JSON API-маршруты.

Назначение модуля:
- Загрузка изображений (файл или data URL) и извлечение доминирующих цветов.
- Форматы цвета, гармонии, коррекция и проверка контраста.
- Состояние редактора, ссылки на палитру и экспорт в CSS/PNG/SVG/JSON.
"""

import io
import math

from PIL import Image, UnidentifiedImageError
from flask import current_app, jsonify, request, send_file

from config import Config
from utils.color_space import parse, to_formats
from utils.errors import DecodeError, ParseError, ValidationError
from utils.export_handler import export_palette_data
from utils.image_processor import decode_data_url, extract_palette
from utils.share import encode_palette, restore_palette, share_query, SHARE_PARAM
from utils.state import EditorState, reduce
from utils.transforms import HARMONIES, adjust, contrast, harmony

Image.MAX_IMAGE_PIXELS = Config.MAX_IMAGE_PIXELS


def _api_error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def _clamp_color_count(raw_value: int | None) -> int:
    config = current_app.config
    if raw_value is None:
        return config["DEFAULT_COLOR_COUNT"]
    return max(config["MIN_COLOR_COUNT"], min(config["MAX_COLOR_COUNT"], raw_value))


def _requested_color_count() -> int | None:
    """Количество цветов из формы, строки запроса или JSON-тела."""
    value = request.values.get("color_count", type=int)
    if value is not None:
        return value
    payload = request.get_json(silent=True) or {}
    try:
        return int(payload["color_count"])
    except (KeyError, TypeError, ValueError):
        return None


def _validate_uploaded_image(stream):
    """Проверяет, что поток содержит изображение допустимого формата и размера."""
    stream.seek(0)
    try:
        with Image.open(stream) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError):
        return _api_error("Файл не является корректным изображением", 400)
    finally:
        stream.seek(0)

    try:
        with Image.open(stream) as image:
            image_format = (image.format or "").lower()
            width, height = image.size
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError):
        return _api_error("Файл не является корректным изображением", 400)
    finally:
        stream.seek(0)

    if image_format not in current_app.config["ALLOWED_IMAGE_FORMATS"]:
        return _api_error("Недопустимый формат изображения", 400)

    if width * height > current_app.config["MAX_IMAGE_PIXELS"]:
        return _api_error("Изображение слишком большое по разрешению", 400)

    return None


def _request_image_stream():
    """Возвращает (поток, ошибка) из multipart-файла или поля image_data."""
    if "image" in request.files:
        file = request.files["image"]

        # Проверяем, что пользователь действительно выбрал файл
        if file.filename == "":
            return None, _api_error("Файл не выбран", 400)

        if not Config.allowed_file(file.filename):
            return None, _api_error("Недопустимый тип файла", 400)

        return io.BytesIO(file.read()), None

    payload = request.get_json(silent=True) or {}
    data_url = request.form.get("image_data") or payload.get("image_data")
    if not data_url:
        return None, _api_error("Файл не был загружен", 400)

    try:
        return io.BytesIO(decode_data_url(data_url)), None
    except DecodeError as exc:
        return None, _api_error(str(exc), 400)


def _palette_colors(raw_colors):
    """Проверяет список цветов палитры и приводит его к каноничным HEX."""
    if not isinstance(raw_colors, list) or not raw_colors:
        raise ValidationError("Палитра должна содержать корректные цвета")

    max_count = current_app.config["MAX_COLOR_COUNT"]
    if len(raw_colors) > max_count:
        raise ValidationError(f"Палитра не может содержать больше {max_count} цветов")

    try:
        return [parse(color).hex for color in raw_colors]
    except ParseError as exc:
        raise ValidationError(str(exc)) from exc


def _number(data, name: str, default: float) -> float:
    value = data.get(name, default)
    if value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Параметр {name} должен быть числом") from exc
    if not math.isfinite(number):
        raise ValidationError(f"Параметр {name} должен быть конечным числом")
    return number


def register_routes(app):
    @app.route("/api/upload", methods=["POST"])
    def upload_image():
        """Обработчик загрузки изображения и извлечения палитры."""
        try:
            stream, error = _request_image_stream()
            if error is not None:
                return error

            validation_error = _validate_uploaded_image(stream)
            if validation_error is not None:
                return validation_error

            color_count = _clamp_color_count(_requested_color_count())

            try:
                palette = extract_palette(
                    stream,
                    color_count,
                    max_dimension=app.config["SAMPLE_MAX_DIMENSION"],
                    factor=app.config["QUANTIZATION_FACTOR"],
                )
            except DecodeError as exc:
                current_app.logger.warning("Не удалось декодировать изображение: %s", exc)
                return _api_error("Не удалось обработать изображение", 400)

            return jsonify(
                {
                    "success": True,
                    "palette": palette,
                    "share": encode_palette(palette),
                }
            )

        except Exception:
            current_app.logger.exception("Критическая ошибка обработки загрузки")
            return _api_error("Внутренняя ошибка сервера", 500)

    @app.get("/api/colors/formats")
    def color_formats():
        try:
            return jsonify({"success": True, "formats": to_formats(request.args.get("color", ""))})
        except ParseError as exc:
            return _api_error(str(exc), 400)

    @app.get("/api/colors/harmony")
    def color_harmony():
        """Гармонии выбранного цвета; без параметра kind возвращаются все виды."""
        kind = request.args.get("kind")
        try:
            color = parse(request.args.get("color", ""))
            if kind:
                harmonies = {kind: harmony(kind, color)}
            else:
                harmonies = {name: builder(color) for name, builder in HARMONIES.items()}
        except (ParseError, ValidationError) as exc:
            return _api_error(str(exc), 400)

        return jsonify({"success": True, "color": color.hex, "harmonies": harmonies})

    @app.route("/api/colors/adjust", methods=["POST"])
    def adjust_color():
        data = request.get_json(silent=True) or {}
        try:
            adjusted = adjust(
                parse(data.get("color", "")),
                brightness=_number(data, "brightness", 0.0),
                saturation=_number(data, "saturation", 1.0),
                warmth=_number(data, "warmth", 0.0),
            )
        except (ParseError, ValidationError) as exc:
            return _api_error(str(exc), 400)

        return jsonify({"success": True, "color": adjusted, "formats": to_formats(adjusted)})

    @app.get("/api/contrast")
    def check_contrast():
        try:
            result = contrast(
                parse(request.args.get("foreground", "")),
                parse(request.args.get("background", "")),
            )
        except ParseError as exc:
            return _api_error(str(exc), 400)

        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/state", methods=["POST"])
    def apply_state_action():
        """Применяет действие редактора к присланному состоянию."""
        data = request.get_json(silent=True) or {}
        try:
            raw_state = data.get("state") or {}
            if not isinstance(raw_state, dict):
                raise ValidationError("Состояние должно быть объектом")
            state = EditorState.from_dict(raw_state, app.config["DEFAULT_PALETTE"])
            action = data.get("action")
            if action is not None:
                if not isinstance(action, dict):
                    raise ValidationError("Действие должно быть объектом")
                state = reduce(state, action)
        except ValidationError as exc:
            return _api_error(str(exc), 400)

        return jsonify(
            {
                "success": True,
                "state": state.to_dict(),
                "adjusted": state.adjusted_color,
                "variations": state.variations(),
                "share": encode_palette(state.palette),
            }
        )

    @app.route("/api/palette/share", methods=["POST"])
    def share_palette():
        data = request.get_json(silent=True) or {}
        try:
            colors = _palette_colors(data.get("colors"))
        except ValidationError as exc:
            return _api_error(str(exc), 400)

        return jsonify({"success": True, "share": encode_palette(colors), "query": share_query(colors)})

    @app.get("/api/palette/restore")
    def restore_shared_palette():
        """Восстанавливает палитру из ссылки; некорректная ссылка даёт палитру по умолчанию."""
        raw = request.args.get(SHARE_PARAM)
        palette = restore_palette(
            raw,
            default=app.config["DEFAULT_PALETTE"],
            expected_size=app.config["SHARE_PALETTE_SIZE"],
        )
        return jsonify({"success": True, "palette": palette, "share": encode_palette(palette)})

    @app.get("/api/palette/suggestions")
    def suggested_palettes():
        """Готовые палитры; применяются действием load_palette."""
        suggestions = [
            {"name": f"Sugerencia {index}", "palette": palette, "share": encode_palette(palette)}
            for index, palette in enumerate(app.config["SUGGESTED_PALETTES"], start=1)
        ]
        return jsonify({"success": True, "suggestions": suggestions})

    @app.route("/api/export", methods=["POST"])
    def export_palette():
        try:
            data = request.get_json(silent=True) or {}
            format_type = request.args.get("format", "css").lower()

            try:
                colors = _palette_colors(data.get("colors"))
            except ValidationError:
                return _api_error("Не переданы корректные цвета палитры", 400)

            content, filename, mimetype = export_palette_data(
                colors, format_type, title=app.config["EXPORT_TITLE"]
            )
            if content is None:
                return _api_error("Неподдерживаемый формат экспорта", 400)

            return send_file(
                io.BytesIO(content),
                mimetype=mimetype,
                as_attachment=True,
                download_name=filename,
            )

        except Exception:
            current_app.logger.exception("Ошибка экспорта палитры")
            return _api_error("Внутренняя ошибка сервера", 500)
