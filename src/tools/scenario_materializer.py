"""Материализация сценария-шаблона в конкретные шаги."""
from __future__ import annotations

import logging

from domain.models import ExampleSet, ScenarioOutline, Step
from tools.text_substitution import substitute_placeholders

logger = logging.getLogger(__name__)


class ScenarioMaterializer:
    """Разворачивает Scenario Outline по первой строке первого блока Examples.

    Остальные строки примеров не используются: в отчёте достаточно одного
    конкретного вхождения на сценарий-шаблон.
    """

    def materialize(self, outline: ScenarioOutline) -> list[Step]:
        """Возвращает копии шагов шаблона с подставленными значениями."""

        substitutions = self.first_example_substitutions(outline)
        if substitutions is None:
            logger.debug("Сценарий-шаблон '%s' не содержит примеров", outline.title)
            return []
        return [self._materialize_step(step, substitutions) for step in outline.steps]

    @staticmethod
    def first_example_substitutions(outline: ScenarioOutline) -> dict[str, str] | None:
        """Строит словарь плейсхолдер -> значение для первой строки примеров."""

        if not outline.example_sets or not outline.example_sets[0].body:
            return None
        example_set = outline.example_sets[0]
        row = example_set.body[0]
        _ensure_row_matches_header(example_set, row, outline.title)
        return dict(zip(example_set.header, row))

    @staticmethod
    def _materialize_step(step: Step, substitutions: dict[str, str]) -> Step:
        new_step = step.copy()
        new_step.text = substitute_placeholders(new_step.text, substitutions)
        new_step.multiline_text = substitute_placeholders(new_step.multiline_text, substitutions)
        if new_step.table is not None:
            new_step.table.body = [
                [substitute_placeholders(cell, substitutions) for cell in row]
                for row in new_step.table.body
            ]
        return new_step


def _ensure_row_matches_header(example_set: ExampleSet, row: list[str], title: str) -> None:
    if len(row) != len(example_set.header):
        raise ValueError(
            f"Examples of '{title}': row has {len(row)} cells, header has {len(example_set.header)}"
        )
