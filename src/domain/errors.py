"""Ошибки построения отчёта по определениям шагов."""
from __future__ import annotations


class ReportError(RuntimeError):
    """Базовая ошибка генерации отчёта."""


class BindingError(ReportError):
    """Некорректное определение шага (например, невалидная регулярка)."""

    def __init__(self, message: str, *, method_reference: str | None = None) -> None:
        super().__init__(message)
        self.method_reference = method_reference


class FeatureParseError(ReportError):
    """Feature-файл не удалось разобрать."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(ReportError):
    """Нарушен инвариант каталога шагов, продолжать проход нельзя."""
