"""Утилиты для работы с Cucumber Expression."""
from __future__ import annotations

import re

from domain.enums import StepPatternType

_PLACEHOLDER_RE = re.compile(r"\{([^{}]*)\}")

_TYPE_MAP: dict[str, str] = {
    "int": r"(-?\d+)",
    "integer": r"(-?\d+)",
    "float": r"(-?\d+(?:\.\d+)?)",
    "double": r"(-?\d+(?:\.\d+)?)",
    "bigdecimal": r"(-?\d+(?:\.\d+)?)",
    "byte": r"(-?\d+)",
    "short": r"(-?\d+)",
    "long": r"(-?\d+)",
    "word": r"([^\s]+)",
    "string": r'"([^"]*)"',
}


def detect_pattern_type(pattern: str) -> StepPatternType:
    """Определяет тип паттерна шага."""

    stripped = pattern.strip()
    if stripped.startswith("^") or stripped.endswith("$"):
        return StepPatternType.REGULAR_EXPRESSION
    if re.search(r"\\.|\[|\]|\(\?|\.\*|\.\+", pattern):
        return StepPatternType.REGULAR_EXPRESSION
    return StepPatternType.CUCUMBER_EXPRESSION


def cucumber_expression_to_regex(pattern: str) -> str:
    """Преобразует Cucumber Expression в регулярное выражение.

    Каждый ``{type}`` даёт ровно одну захватывающую группу, неизвестный тип
    (и пустой ``{}``) превращается в ``(.*)``.
    """

    parts: list[str] = []
    last_end = 0
    for match in _PLACEHOLDER_RE.finditer(pattern):
        parts.append(_escape_literal(pattern[last_end : match.start()]))
        type_name = match.group(1).split(":")[-1].strip().casefold()
        parts.append(_TYPE_MAP.get(type_name, r"(.*)"))
        last_end = match.end()

    parts.append(_escape_literal(pattern[last_end:]))
    return f"^{''.join(parts)}$"


def cucumber_parameter_names(pattern: str) -> list[str]:
    """Имена параметров из плейсхолдеров (``{string}`` -> ``string``, ``{}`` -> ``argN``)."""

    names: list[str] = []
    for idx, match in enumerate(_PLACEHOLDER_RE.finditer(pattern), start=1):
        sanitized = re.sub(r"\W+", "_", match.group(1)).strip("_")
        names.append(sanitized or f"arg{idx}")
    return names


def _escape_literal(text: str) -> str:
    return re.escape(text).replace("\\ ", " ")
