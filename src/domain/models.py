"""Доменные модели: определения шагов, разобранные feature-файлы и отчёт."""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from .enums import StepKeyword
from .errors import BindingError


@dataclass(eq=False)
class Binding:
    """Определение шага (step definition) с регулярным выражением.

    Сравнение и хэширование идут по ссылке: один и тот же паттерн,
    объявленный дважды, даёт два разных определения в отчёте.
    """

    keyword: StepKeyword
    pattern: str
    parameter_names: list[str] = field(default_factory=list)
    method_reference: str | None = None
    regex: re.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.keyword, str) and not isinstance(self.keyword, StepKeyword):
            self.keyword = StepKeyword.from_string(self.keyword)
        self.parameter_names = [str(name) for name in self.parameter_names]
        try:
            self.regex = re.compile(self.pattern)
        except re.error as error:
            raise BindingError(
                f"Invalid step pattern {self.pattern!r}: {error}",
                method_reference=self.method_reference,
            ) from error


@dataclass
class Table:
    """Табличный аргумент шага: заголовок и строки данных."""

    header: list[str]
    body: list[list[str]] = field(default_factory=list)

    def copy(self) -> "Table":
        return Table(header=list(self.header), body=[list(row) for row in self.body])


@dataclass
class Step:
    """Шаг сценария в том виде, в каком он записан в feature-файле."""

    keyword: StepKeyword
    text: str
    multiline_text: str | None = None
    table: Table | None = None

    def copy(self, keyword: StepKeyword | None = None) -> "Step":
        """Глубокая копия шага, при необходимости с другим ключевым словом."""

        return Step(
            keyword=keyword or self.keyword,
            text=self.text,
            multiline_text=self.multiline_text,
            table=self.table.copy() if self.table else None,
        )


@dataclass
class Scenario:
    """Обычный сценарий."""

    title: str
    steps: list[Step] = field(default_factory=list)
    file_line: int | None = None


@dataclass
class ExampleSet:
    """Блок Examples сценария-шаблона."""

    header: list[str]
    body: list[list[str]] = field(default_factory=list)
    title: str | None = None


@dataclass
class ScenarioOutline(Scenario):
    """Сценарий-шаблон с плейсхолдерами ``<name>`` и таблицами примеров."""

    example_sets: list[ExampleSet] = field(default_factory=list)


@dataclass
class Feature:
    """Разобранный feature-файл."""

    source_file: str
    title: str
    background: list[Step] | None = None
    scenarios: list[Scenario] = field(default_factory=list)


@dataclass
class FeatureRef:
    file_path: str
    title: str


@dataclass
class ScenarioRef:
    title: str
    source_line: int = -1


@dataclass
class Parameter:
    name: str
    value: str


@dataclass
class Instance:
    """Конкретное вхождение шага в сценарии."""

    from_scenario_outline: bool
    step: Step
    feature: FeatureRef
    scenario: ScenarioRef
    parameters: list[Parameter] | None = None


@dataclass
class StepDefinitionEntry:
    """Строка отчёта: определение шага либо текст шага без определения.

    ``binding`` равен None для синтетических записей (шаги без определения).
    ``instances`` становится None после финализации, если вхождений нет.
    """

    keyword: StepKeyword
    binding: Binding | None = None
    representative_step: Step | None = None
    instances: list[Instance] | None = field(default_factory=list)

    @property
    def is_orphan(self) -> bool:
        return self.binding is None

    @property
    def method_reference(self) -> str | None:
        return self.binding.method_reference if self.binding else None

    @property
    def pattern(self) -> str | None:
        return self.binding.pattern if self.binding else None


@dataclass
class StepDefinitionReport:
    """Итоговый отчёт, который передаётся на сериализацию."""

    project_name: str
    generated_at: str
    show_bindings_without_instance: bool
    step_definitions: list[StepDefinitionEntry] = field(default_factory=list)

    @property
    def unused_bindings(self) -> list[StepDefinitionEntry]:
        return [
            entry for entry in self.step_definitions if not entry.is_orphan and not entry.instances
        ]

    @property
    def orphans(self) -> list[StepDefinitionEntry]:
        return [entry for entry in self.step_definitions if entry.is_orphan]
