"""Сборка отчёта: какие шаги сценариев покрывает каждое определение шага."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from domain.enums import StepKeyword
from domain.models import (
    Binding,
    Feature,
    FeatureRef,
    Instance,
    Parameter,
    ScenarioOutline,
    ScenarioRef,
    Step,
    StepDefinitionEntry,
    StepDefinitionReport,
)
from tools.sample_text import representative_from_match, representative_from_pattern
from tools.scenario_materializer import ScenarioMaterializer
from tools.step_matcher import BindingMatch, StepMatcher

logger = logging.getLogger(__name__)

BACKGROUND_SCENARIO_TITLE = "Background"
UNKNOWN_LINE = -1
GENERATED_AT_FORMAT = "%m/%d/%Y %H:%M"


class StepDefinitionReportGenerator:
    """Один проход генерации отчёта по каталогу определений и feature-файлам.

    Проход последовательный: порядок обработки определяет, какое вхождение
    станет образцом шага и в каком порядке появятся записи без определения.
    """

    def __init__(
        self,
        bindings: Sequence[Binding],
        features: Sequence[Feature],
        project_name: str,
        show_bindings_without_instance: bool = True,
        materializer: ScenarioMaterializer | None = None,
    ) -> None:
        self.bindings = list(bindings)
        self.features = list(features)
        self.project_name = project_name
        self.show_bindings_without_instance = show_bindings_without_instance
        self.matcher = StepMatcher(self.bindings)
        self.materializer = materializer or ScenarioMaterializer()

        self._report: StepDefinitionReport | None = None
        self._entry_by_binding: dict[Binding, StepDefinitionEntry] = {}
        self._orphans: list[StepDefinitionEntry] = []

    def generate_report(self) -> StepDefinitionReport:
        """Строит и возвращает отчёт; каждый вызов начинает новый проход."""

        logger.info(
            "Генерация отчёта '%s': определений %s, feature-файлов %s",
            self.project_name,
            len(self.bindings),
            len(self.features),
        )
        self.initialize()
        for feature in self.features:
            self.record_feature(feature)
        report = self.finalize()
        logger.info(
            "Отчёт '%s' готов: записей %s, без вхождений %s, шагов без определения %s",
            report.project_name,
            len(report.step_definitions),
            len(report.unused_bindings),
            len(report.orphans),
        )
        return report

    def initialize(self) -> None:
        """Создаёт по записи на каждое определение до обработки шагов."""

        self._report = StepDefinitionReport(
            project_name=self.project_name,
            generated_at=datetime.now().strftime(GENERATED_AT_FORMAT),
            show_bindings_without_instance=self.show_bindings_without_instance,
        )
        self._entry_by_binding = {}
        self._orphans = []
        for binding in self.bindings:
            entry = StepDefinitionEntry(keyword=binding.keyword, binding=binding)
            self._entry_by_binding[binding] = entry
            self._report.step_definitions.append(entry)

    def record_feature(self, feature: Feature) -> None:
        """Регистрирует шаги фона и всех сценариев одного feature-файла."""

        feature_ref = FeatureRef(file_path=feature.source_file, title=feature.title)
        if feature.background is not None:
            background_ref = ScenarioRef(title=BACKGROUND_SCENARIO_TITLE)
            self.record_steps(feature_ref, background_ref, feature.background, False)

        for scenario in feature.scenarios:
            line = scenario.file_line if scenario.file_line is not None else UNKNOWN_LINE
            scenario_ref = ScenarioRef(title=scenario.title, source_line=line)
            if isinstance(scenario, ScenarioOutline):
                steps = self.materializer.materialize(scenario)
                self.record_steps(feature_ref, scenario_ref, steps, True)
            else:
                self.record_steps(feature_ref, scenario_ref, scenario.steps, False)

    def record_steps(
        self,
        feature_ref: FeatureRef,
        scenario_ref: ScenarioRef,
        steps: Iterable[Step],
        from_outline: bool,
    ) -> None:
        """Регистрирует последовательность шагов с наследованием категории And/But."""

        current: StepKeyword | None = None
        for step in steps:
            current = StepMatcher.resolve_keyword(step, current)
            self.record_step(feature_ref, scenario_ref, step, current, from_outline)

    def record_step(
        self,
        feature_ref: FeatureRef,
        scenario_ref: ScenarioRef,
        step: Step,
        keyword: StepKeyword,
        from_outline: bool,
    ) -> StepDefinitionEntry:
        """Сопоставляет шаг и добавляет вхождение в соответствующую запись."""

        instance = Instance(
            from_scenario_outline=from_outline,
            step=step,
            feature=feature_ref,
            scenario=scenario_ref,
        )
        binding_match = self.matcher.match_step(step, keyword)
        if binding_match is None:
            entry = self._orphan_entry(step, keyword)
        else:
            entry = self._entry_by_binding[binding_match.binding]
            instance.parameters = self._parameters(binding_match)
            if entry.representative_step is None:
                entry.representative_step = representative_from_match(step, binding_match)

        entry.instances.append(instance)
        return entry

    def finalize(self) -> StepDefinitionReport:
        """Дополняет образцы для неиспользованных определений и помечает пустые записи."""

        if self._report is None:
            raise RuntimeError("Report generation pass was not initialized")

        for entry in self._report.step_definitions:
            if entry.representative_step is None and entry.binding is not None:
                entry.representative_step = representative_from_pattern(entry.binding)
            if not entry.instances:
                entry.instances = None

        report, self._report = self._report, None
        return report

    def _orphan_entry(self, step: Step, keyword: StepKeyword) -> StepDefinitionEntry:
        for entry in self._orphans:
            if entry.representative_step.text == step.text:
                return entry

        logger.debug("Шаг без определения: %s %s", keyword.value, step.text)
        entry = StepDefinitionEntry(keyword=keyword, representative_step=step.copy(keyword=keyword))
        self._orphans.append(entry)
        self._report.step_definitions.append(entry)
        return entry

    @staticmethod
    def _parameters(binding_match: BindingMatch) -> list[Parameter] | None:
        arguments = binding_match.arguments
        if not arguments:
            return None
        names = binding_match.binding.parameter_names
        return [Parameter(name=name, value=value) for name, value in zip(names, arguments)]
