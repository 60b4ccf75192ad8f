"""Сервис генерации отчёта по определениям шагов для проекта на диске."""
from __future__ import annotations

import logging
from pathlib import Path

from domain.models import Binding, Feature, StepDefinitionReport
from infrastructure.fs_repo import FsRepository
from infrastructure.report_store import ReportStore
from tools.feature_parser import FeatureLoader
from tools.report_generator import StepDefinitionReportGenerator
from tools.step_extractor import StepExtractor

logger = logging.getLogger(__name__)


class ReportService:
    """Фасад для HTTP-слоя и CLI: загрузка входных данных, проход генерации, сохранение."""

    def __init__(
        self,
        feature_patterns: list[str],
        binding_patterns: list[str],
        report_store: ReportStore,
        project_name: str | None = None,
        show_bindings_without_instance: bool = True,
    ) -> None:
        self.feature_patterns = list(feature_patterns)
        self.binding_patterns = list(binding_patterns)
        self.report_store = report_store
        self.project_name = project_name
        self.show_bindings_without_instance = show_bindings_without_instance

    def load_bindings(self, project_root: str) -> list[Binding]:
        extractor = StepExtractor(FsRepository(project_root), self.binding_patterns)
        return extractor.extract_bindings()

    def load_features(self, project_root: str) -> list[Feature]:
        loader = FeatureLoader(FsRepository(project_root), self.feature_patterns)
        return loader.load_features()

    def generate(
        self,
        project_root: str,
        *,
        project_name: str | None = None,
        show_bindings_without_instance: bool | None = None,
    ) -> StepDefinitionReport:
        """Строит отчёт для проекта: определения шагов против всех feature-файлов."""

        logger.info("[ReportService] Генерация отчёта для %s", project_root)
        bindings = self.load_bindings(project_root)
        features = self.load_features(project_root)
        logger.debug(
            "[ReportService] Определений: %s, feature-файлов: %s", len(bindings), len(features)
        )

        generator = StepDefinitionReportGenerator(
            bindings,
            features,
            project_name=project_name or self.project_name or Path(project_root).expanduser().resolve().name,
            show_bindings_without_instance=(
                self.show_bindings_without_instance
                if show_bindings_without_instance is None
                else show_bindings_without_instance
            ),
        )
        return generator.generate_report()

    def write(self, report: StepDefinitionReport, output_path: str | Path) -> Path:
        """Сохраняет отчёт; формат выбирается по расширению (.xml или JSON)."""

        return self.report_store.save(report, output_path)


__all__ = ["ReportService"]
