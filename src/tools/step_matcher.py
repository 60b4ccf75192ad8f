"""Сопоставление шагов сценария с определениями шагов по регулярным выражениям."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from domain.enums import StepKeyword
from domain.errors import ConfigurationError
from domain.models import Binding, Step


@dataclass
class BindingMatch:
    """Результат успешного сопоставления шага с определением."""

    binding: Binding
    keyword: StepKeyword
    match: re.Match[str]

    @property
    def arguments(self) -> list[str]:
        """Значения захваченных групп (без группы 0), неучаствовавшие группы дают ''."""

        return [value or "" for value in self.match.groups()]


class StepMatcher:
    """Ищет первое подходящее определение шага в порядке каталога.

    Неоднозначности (несколько паттернов подходят к одному тексту) не
    считаются ошибкой: выигрывает определение, объявленное раньше.
    """

    def __init__(self, bindings: Iterable[Binding]) -> None:
        self.bindings = list(bindings)

    @staticmethod
    def resolve_keyword(step: Step, current: StepKeyword | None) -> StepKeyword:
        """Возвращает категорию шага с учётом наследования для And/But.

        And/But без предшествующего Given/When/Then нарушают структуру
        сценария, такой шаг прерывает проход.
        """

        if step.keyword.is_canonical:
            return step.keyword
        if current is None:
            raise ConfigurationError(
                f"Step '{step.keyword.value} {step.text}' has no preceding Given, When or Then to inherit from"
            )
        return current

    def match_step(self, step: Step, keyword: StepKeyword) -> BindingMatch | None:
        """Находит первое определение категории ``keyword``, чей паттерн встречается в тексте шага."""

        for binding in self.bindings:
            if binding.keyword is not keyword:
                continue
            match = binding.regex.search(step.text)
            if match:
                return BindingMatch(binding=binding, keyword=keyword, match=match)
        return None
