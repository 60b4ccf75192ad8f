"""Загрузка .feature файлов в доменные модели через gherkin-official."""
from __future__ import annotations

import logging
from typing import Any, Iterable

from gherkin.errors import ParserError
from gherkin.parser import Parser

from domain.enums import StepKeyword
from domain.errors import FeatureParseError
from domain.models import ExampleSet, Feature, Scenario, ScenarioOutline, Step, Table
from infrastructure.fs_repo import FsRepository

logger = logging.getLogger(__name__)

DEFAULT_FEATURE_PATTERNS = ["**/*.feature"]

_KEYWORD_BY_TYPE = {
    "Context": StepKeyword.GIVEN,
    "Action": StepKeyword.WHEN,
    "Outcome": StepKeyword.THEN,
}


class FeatureParser:
    """Преобразует AST gherkin-official в Feature/Scenario/Step."""

    def __init__(self) -> None:
        self._parser = Parser()

    def parse(self, text: str, source_file: str) -> Feature | None:
        """Разбирает текст feature-файла. Файл без блока Feature даёт None."""

        try:
            document = self._parser.parse(text)
        except ParserError as error:
            raise FeatureParseError(f"{source_file}: {error}", path=source_file) from error

        feature = document.get("feature")
        if not feature:
            return None

        result = Feature(source_file=source_file, title=feature.get("name", ""))
        for child in self._iter_children(feature.get("children", [])):
            if "background" in child:
                background = result.background or []
                background.extend(self._convert_step(step) for step in child["background"].get("steps", []))
                result.background = background
            elif "scenario" in child:
                result.scenarios.append(self._convert_scenario(child["scenario"]))
        return result

    def _iter_children(self, children: Iterable[dict[str, Any]]) -> Iterable[dict[str, Any]]:
        for child in children:
            if "rule" in child:
                yield from self._iter_children(child["rule"].get("children", []))
            else:
                yield child

    def _convert_scenario(self, scenario: dict[str, Any]) -> Scenario:
        title = scenario.get("name", "")
        line = (scenario.get("location") or {}).get("line")
        steps = [self._convert_step(step) for step in scenario.get("steps", [])]
        examples = scenario.get("examples") or []
        keyword = scenario.get("keyword", "").casefold()

        if not examples and "outline" not in keyword and "template" not in keyword:
            return Scenario(title=title, steps=steps, file_line=line)

        example_sets = [
            ExampleSet(
                header=_cells(example.get("tableHeader")),
                body=[_cells(row) for row in example.get("tableBody") or []],
                title=example.get("name") or None,
            )
            for example in examples
        ]
        return ScenarioOutline(title=title, steps=steps, file_line=line, example_sets=example_sets)

    @staticmethod
    def _convert_step(step: dict[str, Any]) -> Step:
        doc_string = step.get("docString")
        data_table = step.get("dataTable")
        table = None
        if data_table and data_table.get("rows"):
            rows = [_cells(row) for row in data_table["rows"]]
            table = Table(header=rows[0], body=rows[1:])

        return Step(
            keyword=_step_keyword(step),
            text=step.get("text", ""),
            multiline_text=doc_string.get("content") if doc_string else None,
            table=table,
        )


class FeatureLoader:
    """Находит и разбирает все feature-файлы проекта."""

    def __init__(
        self,
        fs_repo: FsRepository,
        patterns: list[str] | None = None,
        parser: FeatureParser | None = None,
    ) -> None:
        self.fs_repo = fs_repo
        self.patterns = patterns or list(DEFAULT_FEATURE_PATTERNS)
        self.parser = parser or FeatureParser()

    def load_features(self) -> list[Feature]:
        features: list[Feature] = []
        for relative_path in self.fs_repo.iter_source_files(self.patterns):
            feature = self.parser.parse(self.fs_repo.read_text_file(relative_path), relative_path)
            if feature is None:
                logger.warning("Файл %s не содержит блока Feature", relative_path)
                continue
            features.append(feature)
        logger.debug("Загружено feature-файлов: %s", len(features))
        return features


def _step_keyword(step: dict[str, Any]) -> StepKeyword:
    try:
        return StepKeyword.from_string(step.get("keyword", ""))
    except ValueError:
        return _KEYWORD_BY_TYPE.get(step.get("keywordType", ""), StepKeyword.AND)


def _cells(row: dict[str, Any] | None) -> list[str]:
    if not row:
        return []
    return [cell.get("value", "") for cell in row.get("cells", [])]
