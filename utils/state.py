"""
Программа: «Abejorro» – генератор цветовых палитр по изображениям.
Модуль: utils/state.py – состояние редактора палитры.

Назначение модуля:
- Неизменяемая запись состояния: палитра, выбранный цвет, ползунки коррекции.
- Чистые функции-переходы и reducer, применяющий действие к состоянию.
- Производные значения: скорректированный цвет и его вариации.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

from utils.color_space import normalize_hex, parse
from utils.errors import ParseError, ValidationError
from utils.transforms import adjust, analogous, shades, tones, triadic


@dataclass(frozen=True)
class Adjustments:
    brightness: float = 0.0
    saturation: float = 1.0
    warmth: float = 0.0


@dataclass(frozen=True)
class EditorState:
    """Снимок состояния редактора. Любое действие создаёт новый снимок."""

    palette: tuple[str, ...]
    selected: str
    adjustments: Adjustments = field(default_factory=Adjustments)

    @classmethod
    def initial(cls, palette: Sequence[str]) -> "EditorState":
        colors = _normalize_palette(palette)
        return cls(palette=colors, selected=colors[0])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_palette: Sequence[str]) -> "EditorState":
        """Восстанавливает состояние из JSON-представления клиента."""
        palette = data.get("palette") or default_palette
        state = cls.initial(palette)

        selected = data.get("selected")
        if selected is not None:
            state = select_color(state, selected)

        raw_adjustments = data.get("adjustments") or {}
        if not isinstance(raw_adjustments, Mapping):
            raise ValidationError("Параметры коррекции должны быть объектом")
        return set_adjustments(state, **_adjustment_fields(raw_adjustments))

    @property
    def adjusted_color(self) -> str:
        a = self.adjustments
        return adjust(self.selected, a.brightness, a.saturation, a.warmth)

    def variations(self) -> dict[str, list[str]]:
        color = self.adjusted_color
        return {
            "analogous": analogous(color),
            "triadic": triadic(color),
            "shades": shades(color),
            "tones": tones(color),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "palette": list(self.palette),
            "selected": self.selected,
            "adjustments": {
                "brightness": self.adjustments.brightness,
                "saturation": self.adjustments.saturation,
                "warmth": self.adjustments.warmth,
            },
        }


def _normalize_palette(colors: Sequence[str]) -> tuple[str, ...]:
    if not isinstance(colors, (list, tuple)):
        raise ValidationError("Палитра должна быть списком цветов")
    if not colors:
        raise ValidationError("Палитра должна содержать хотя бы один цвет")
    try:
        return tuple(parse(color).hex for color in colors)
    except ParseError as exc:
        raise ValidationError(str(exc)) from exc


def _adjustment_fields(raw: Mapping[str, Any]) -> dict[str, float]:
    fields = {}
    for name in ("brightness", "saturation", "warmth"):
        if raw.get(name) is None:
            continue
        try:
            value = float(raw[name])
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Параметр {name} должен быть числом") from exc
        if not math.isfinite(value):
            raise ValidationError(f"Параметр {name} должен быть конечным числом")
        fields[name] = value
    return fields


def select_color(state: EditorState, color: str) -> EditorState:
    """Выбирает цвет для редактирования; цвет может не входить в палитру."""
    try:
        return replace(state, selected=parse(color).hex)
    except ParseError as exc:
        raise ValidationError(str(exc)) from exc


def set_adjustments(
    state: EditorState,
    brightness: float | None = None,
    saturation: float | None = None,
    warmth: float | None = None,
) -> EditorState:
    current = state.adjustments
    adjustments = Adjustments(
        brightness=current.brightness if brightness is None else brightness,
        saturation=current.saturation if saturation is None else saturation,
        warmth=current.warmth if warmth is None else warmth,
    )
    return replace(state, adjustments=adjustments)


def load_palette(state: EditorState, colors: Sequence[str]) -> EditorState:
    """Новая палитра после извлечения: выбран первый цвет, ползунки сброшены."""
    return EditorState.initial(colors)


def edit_selected(state: EditorState, raw_color: str) -> EditorState:
    """Заменяет выбранный цвет во всех позициях палитры.

    Нераспознанный ввод превращается в чёрный цвет, как в поле выбора цвета.
    """
    new_color = normalize_hex(raw_color)
    palette = tuple(new_color if color == state.selected else color for color in state.palette)
    return replace(state, palette=palette, selected=new_color)


def reduce(state: EditorState, action: Mapping[str, Any]) -> EditorState:
    """Применяет действие {"type": ..., ...} к состоянию."""
    action_type = action.get("type")
    if action_type == "select":
        return select_color(state, action.get("color"))
    if action_type == "adjust":
        return set_adjustments(state, **_adjustment_fields(action))
    if action_type == "reset_adjustments":
        return replace(state, adjustments=Adjustments())
    if action_type == "load_palette":
        return load_palette(state, action.get("colors") or [])
    if action_type == "edit_selected":
        return edit_selected(state, action.get("color"))
    raise ValidationError(f"Неизвестное действие: {action_type!r}")
