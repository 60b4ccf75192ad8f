"""Сервисы и фабрики для работы с отчётами."""
from __future__ import annotations

import logging

from app.config import Settings, get_settings
from infrastructure.report_store import ReportStore
from services.report_service import ReportService

logger = logging.getLogger(__name__)


def create_report_service(settings: Settings | None = None) -> ReportService:
    """Собирает ReportService из настроек приложения."""

    settings = settings or get_settings()
    logger.debug(
        "Создание ReportService: features=%s, bindings=%s",
        settings.feature_patterns,
        settings.binding_patterns,
    )
    return ReportService(
        feature_patterns=settings.feature_patterns,
        binding_patterns=settings.binding_patterns,
        report_store=ReportStore(),
        project_name=settings.project_name,
        show_bindings_without_instance=settings.show_bindings_without_instance,
    )


__all__ = ["ReportService", "create_report_service"]
