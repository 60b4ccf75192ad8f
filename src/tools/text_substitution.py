"""Подстановка значений примеров в плейсхолдеры ``<name>``."""
from __future__ import annotations

from typing import Mapping


def substitute_placeholders(text: str | None, substitutions: Mapping[str, str] | None) -> str | None:
    """Заменяет каждое ``<name>`` на значение из словаря.

    Замены применяются по порядку словаря, поэтому значение, само содержащее
    ``<other>``, может быть переписано следующей заменой.
    """

    if text is None or not substitutions:
        return text

    for name, value in substitutions.items():
        text = text.replace(f"<{name}>", value)
    return text
