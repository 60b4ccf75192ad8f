"""Построение образца текста шага с плейсхолдерами ``{param}``."""
from __future__ import annotations

import itertools
import re

from domain.enums import StepKeyword
from domain.errors import ConfigurationError
from domain.models import Binding, Step
from tools.step_matcher import BindingMatch

UNKNOWN_PARAMETER = "{?param?}"

# Вложенные группы не поддерживаются: берётся текст до первой закрывающей скобки
_PATTERN_GROUP_RE = re.compile(r"\([^)]+\)")


def parameter_placeholder(binding: Binding, index: int) -> str:
    """Плейсхолдер для параметра с позиционным индексом ``index``."""

    if index >= len(binding.parameter_names):
        return UNKNOWN_PARAMETER
    return "{" + binding.parameter_names[index] + "}"


def sample_text_from_match(binding: Binding, text: str, match: re.Match[str]) -> str:
    """Заменяет захваченные группы в реальном тексте шага на плейсхолдеры.

    Группы обрабатываются с конца, чтобы замены не сдвигали смещения
    ещё не обработанных групп.
    """

    sample = text
    for group_index in range(len(match.groups()), 0, -1):
        start, end = match.span(group_index)
        if start < 0:
            continue
        sample = sample[:start] + parameter_placeholder(binding, group_index - 1) + sample[end:]
    return sample


def sample_text_from_pattern(binding: Binding) -> str:
    """Строит образец текста по самому паттерну, когда вхождений нет."""

    sample = binding.pattern.strip("^$")
    counter = itertools.count()
    return _PATTERN_GROUP_RE.sub(lambda _: parameter_placeholder(binding, next(counter)), sample)


def representative_from_match(step: Step, binding_match: BindingMatch) -> Step:
    """Копия шага в категории сопоставления с плейсхолдерами вместо аргументов."""

    sample = step.copy(keyword=_canonical(binding_match.keyword))
    sample.text = sample_text_from_match(binding_match.binding, step.text, binding_match.match)
    return sample


def representative_from_pattern(binding: Binding) -> Step:
    """Образец шага для определения, которое ни разу не сопоставилось."""

    return Step(keyword=_canonical(binding.keyword), text=sample_text_from_pattern(binding))


def _canonical(keyword: StepKeyword) -> StepKeyword:
    if not keyword.is_canonical:
        raise ConfigurationError(
            f"Step definition category must be Given, When or Then, got {keyword.value}"
        )
    return keyword
