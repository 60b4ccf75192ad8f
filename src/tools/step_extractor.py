"""Извлечение определений шагов (bindings) из исходных файлов тестового проекта."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from domain.enums import StepKeyword, StepPatternType
from domain.errors import BindingError
from domain.models import Binding
from infrastructure.fs_repo import FsRepository
from tools.cucumber_expression import (
    cucumber_expression_to_regex,
    cucumber_parameter_names,
    detect_pattern_type,
)

logger = logging.getLogger(__name__)

DEFAULT_BINDING_PATTERNS = [
    "**/*Steps.cs",
    "**/*Steps.java",
    "**/*Steps.kt",
    "**/*Steps.py",
    "**/steps/*.py",
]

_SUPPORTED_KEYWORDS_PATTERN = "|".join(
    re.escape(keyword) for keyword in sorted(StepKeyword.supported_keywords(), key=len, reverse=True)
)
# [Given(@"...")] для C#, @Given("...") для Java/Kotlin, @given(r"...") для Python
_ANNOTATION_RE = re.compile(
    rf"[\[@]\s*(?P<keyword>{_SUPPORTED_KEYWORDS_PATTERN})\s*\(\s*"
    r"(?P<prefix>[@rRuU]{0,2})(?P<quote>[\"'])(?P<pattern>(?:\\.|\"\"|(?!(?P=quote)).)*?)(?P=quote)"
    r"\s*[,)]",
    re.IGNORECASE,
)
_METHOD_RE = re.compile(r"(?P<name>[A-Za-z_][\w]*)\s*\((?P<params>[^)]*)\)", re.UNICODE)
_IGNORED_PARAMETERS = {"self", "context", "cls"}


@dataclass
class ExtractedAnnotation:
    """Вспомогательная структура для найденной аннотации шага."""

    keyword: StepKeyword
    pattern: str
    line_number: int
    class_name: str | None = None
    method_name: str | None = None
    method_parameters: list[str] = field(default_factory=list)

    def method_reference(self, relative_path: str) -> str:
        if self.class_name and self.method_name:
            return f"{self.class_name}.{self.method_name}"
        return self.method_name or f"{relative_path}:{self.line_number}"


class StepExtractor:
    """Извлекает определения шагов BDD из исходников, используя FsRepository.

    Поддерживаются атрибуты C# ``[Given(@"...")]``, аннотации Java/Kotlin
    ``@Given("...")`` и декораторы Python ``@given("...")``. Разбор
    построчный; имена параметров берутся из сигнатуры следующего за
    аннотацией метода.
    """

    def __init__(
        self,
        fs_repo: FsRepository,
        patterns: List[str] | None = None,
    ) -> None:
        self.fs_repo = fs_repo
        self.patterns = patterns or list(DEFAULT_BINDING_PATTERNS)

    def extract_bindings(self) -> list[Binding]:
        """Проходит по исходникам и возвращает определения шагов в порядке объявления."""

        bindings: list[Binding] = []
        for relative_path in self.fs_repo.iter_source_files(self.patterns):
            content = self.fs_repo.read_text_file(relative_path)
            for annotation in self._iter_annotations(content.splitlines()):
                bindings.append(self._to_binding(relative_path, annotation))
        logger.debug("Найдено определений шагов: %s", len(bindings))
        return bindings

    @staticmethod
    def _to_binding(relative_path: str, annotation: ExtractedAnnotation) -> Binding:
        if not annotation.keyword.is_canonical:
            raise BindingError(
                f"{relative_path}:{annotation.line_number}: step definition category must be "
                f"Given, When or Then, got {annotation.keyword.value}",
                method_reference=annotation.method_reference(relative_path),
            )
        pattern_type = detect_pattern_type(annotation.pattern)
        regex = (
            cucumber_expression_to_regex(annotation.pattern)
            if pattern_type is StepPatternType.CUCUMBER_EXPRESSION
            else annotation.pattern
        )
        try:
            compiled = re.compile(regex)
        except re.error as error:
            raise BindingError(
                f"{relative_path}:{annotation.line_number}: invalid step pattern {annotation.pattern!r}: {error}",
                method_reference=annotation.method_reference(relative_path),
            ) from error

        return Binding(
            keyword=annotation.keyword,
            pattern=regex,
            parameter_names=StepExtractor._parameter_names(annotation, pattern_type, compiled),
            method_reference=annotation.method_reference(relative_path),
        )

    @staticmethod
    def _parameter_names(
        annotation: ExtractedAnnotation,
        pattern_type: StepPatternType,
        compiled: re.Pattern[str],
    ) -> list[str]:
        if annotation.method_parameters:
            return list(annotation.method_parameters)
        if pattern_type is StepPatternType.CUCUMBER_EXPRESSION:
            return cucumber_parameter_names(annotation.pattern)

        names_by_index = {index: name for name, index in compiled.groupindex.items()}
        return [names_by_index.get(index, f"group{index}") for index in range(1, compiled.groups + 1)]

    @staticmethod
    def _iter_annotations(lines: Iterable[str]) -> Iterable[ExtractedAnnotation]:
        """Находит аннотации шагов по строкам файла и окружение класса/метода."""

        normalized_lines = list(lines)
        class_stack: list[tuple[str, int]] = []  # (class_name, depth_at_open)
        pending_class: str | None = None
        brace_depth = 0
        for idx, line in enumerate(normalized_lines, start=1):
            open_braces = line.count("{")
            close_braces = line.count("}")

            if pending_class and open_braces:
                class_stack.append((pending_class, brace_depth + open_braces))
                pending_class = None

            class_match = re.search(r"\b(class|object)\s+(?P<name>[A-Za-z_][\w]*)", line)
            if class_match:
                class_name = class_match.group("name")
                if open_braces:
                    class_stack.append((class_name, brace_depth + open_braces))
                elif not line.rstrip().endswith(":"):
                    pending_class = class_name

            for match in _ANNOTATION_RE.finditer(line):
                method_name, method_params = StepExtractor._find_method_context(
                    normalized_lines, idx
                )
                yield ExtractedAnnotation(
                    keyword=StepKeyword.from_string(match.group("keyword")),
                    pattern=_unescape(match.group("pattern"), match.group("prefix")),
                    line_number=idx,
                    class_name=class_stack[-1][0] if class_stack else None,
                    method_name=method_name,
                    method_parameters=method_params,
                )

            # Фигурные скобки внутри паттернов не должны влиять на вложенность
            if _ANNOTATION_RE.search(line):
                open_braces = close_braces = 0
            brace_depth += open_braces - close_braces
            while class_stack and brace_depth < class_stack[-1][1]:
                class_stack.pop()

    @staticmethod
    def _find_method_context(lines: Sequence[str], start_index: int) -> tuple[str | None, list[str]]:
        """Ищет объявление метода в нескольких следующих строках."""

        for line in lines[start_index - 1 : start_index + 6]:
            if _ANNOTATION_RE.search(line):
                continue
            method_match = _METHOD_RE.search(line)
            if not method_match:
                continue
            parameters = StepExtractor._parse_method_parameters(method_match.group("params"))
            return method_match.group("name"), parameters
        return None, []

    @staticmethod
    def _parse_method_parameters(params_block: str) -> list[str]:
        """Грубый разбор имён параметров метода C#/Java/Kotlin/Python."""

        parameters: list[str] = []
        for raw_param in filter(None, (part.strip() for part in params_block.split(","))):
            raw_param = raw_param.split("=", 1)[0].strip()
            if ":" in raw_param:  # Kotlin и аннотации типов Python
                name_tokens = raw_param.split(":", 1)[0].split()
            else:
                name_tokens = raw_param.split()
            if not name_tokens:
                continue
            name = name_tokens[-1].lstrip("*&")
            if name and name not in _IGNORED_PARAMETERS:
                parameters.append(name)
        return parameters


def _unescape(pattern: str, prefix: str) -> str:
    """Снимает экранирование строкового литерала исходного языка."""

    if "@" in prefix:  # verbatim-строка C#
        return pattern.replace('""', '"')
    if "r" in prefix.casefold():
        return pattern
    return re.sub(r"\\([\\\"'])", r"\1", pattern)
