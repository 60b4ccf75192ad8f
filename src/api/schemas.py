"""Pydantic-схемы запросов и ответов для HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from domain.enums import StepKeyword


def _to_camel(value: str) -> str:
    """Преобразует snake_case в camelCase для JSON."""

    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class ApiBaseModel(BaseModel):
    """Базовая модель для API со стилем camelCase и populate_by_name."""

    model_config = ConfigDict(
        alias_generator=_to_camel, populate_by_name=True, from_attributes=True
    )


class TableDto(ApiBaseModel):
    header: list[str] = Field(default_factory=list, description="Заголовок таблицы")
    body: list[list[str]] = Field(default_factory=list, description="Строки таблицы")


class StepDto(ApiBaseModel):
    """Шаг сценария или образец шага определения."""

    keyword: StepKeyword = Field(..., description="Ключевое слово шага (Given/When/Then/And/But)")
    text: str = Field(..., description="Текст шага")
    multiline_text: str | None = Field(
        default=None, description="Многострочный аргумент шага (doc string)"
    )
    table: TableDto | None = Field(default=None, description="Табличный аргумент шага")


class FeatureRefDto(ApiBaseModel):
    file_path: str = Field(..., description="Путь к feature-файлу относительно проекта")
    title: str = Field(..., description="Название feature")


class ScenarioRefDto(ApiBaseModel):
    title: str = Field(..., description="Название сценария или Background")
    source_line: int = Field(default=-1, description="Строка сценария в файле, -1 если неизвестна")


class ParameterDto(ApiBaseModel):
    name: str = Field(..., description="Имя параметра определения шага")
    value: str = Field(..., description="Значение, захваченное из текста шага")


class InstanceDto(ApiBaseModel):
    """Конкретное вхождение шага."""

    from_scenario_outline: bool = Field(
        ..., description="Шаг получен из первой строки примеров Scenario Outline"
    )
    step: StepDto
    feature: FeatureRefDto
    scenario: ScenarioRefDto
    parameters: list[ParameterDto] | None = Field(
        default=None, description="Параметры шага; null если определение их не принимает"
    )


class StepDefinitionEntryDto(ApiBaseModel):
    """Запись отчёта: определение шага либо текст шага без определения."""

    keyword: StepKeyword = Field(..., description="Категория: Given/When/Then")
    method_reference: str | None = Field(
        default=None, description="Ссылка на реализацию; null для шагов без определения"
    )
    pattern: str | None = Field(default=None, description="Регулярное выражение определения")
    representative_step: StepDto | None = Field(
        default=None, description="Образец шага с плейсхолдерами {param}"
    )
    instances: list[InstanceDto] | None = Field(
        default=None, description="Вхождения; null если определение ни разу не использовано"
    )


class StepDefinitionReportDto(ApiBaseModel):
    """Отчёт по определениям шагов проекта."""

    project_name: str = Field(..., description="Имя проекта")
    generated_at: str = Field(..., description="Время генерации")
    show_bindings_without_instance: bool = Field(
        ..., description="Флаг отображения определений без вхождений"
    )
    step_definitions: list[StepDefinitionEntryDto] = Field(default_factory=list)


class GenerateReportRequest(ApiBaseModel):
    """Запрос на построение отчёта."""

    project_root: str = Field(..., description="Путь к тестовому проекту")
    project_name: str | None = Field(default=None, description="Имя проекта в отчёте")
    show_bindings_without_instance: bool | None = Field(
        default=None, description="Переопределяет настройку сервиса"
    )
