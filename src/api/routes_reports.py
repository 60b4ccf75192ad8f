"""Роуты построения отчёта по определениям шагов."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request, status

from api.schemas import GenerateReportRequest, StepDefinitionReportDto
from domain.errors import ReportError
from services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])
logger = logging.getLogger(__name__)


def _get_report_service(request: Request) -> ReportService:
    service: ReportService | None = getattr(request.app.state, "report_service", None)
    if not service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Report service is not initialized",
        )
    return service


@router.post(
    "/step-definitions",
    response_model=StepDefinitionReportDto,
    summary="Построить отчёт по определениям шагов",
)
def generate_step_definition_report(
    payload: GenerateReportRequest, request: Request
) -> StepDefinitionReportDto:
    """Сопоставляет шаги всех feature-файлов проекта с его определениями шагов."""

    service = _get_report_service(request)
    path_obj = Path(payload.project_root).expanduser()
    if not path_obj.exists():
        logger.warning("Путь проекта не найден: %s", payload.project_root)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project root not found: {payload.project_root}",
        )

    logger.info("API: построение отчёта для %s", payload.project_root)
    try:
        report = service.generate(
            payload.project_root,
            project_name=payload.project_name,
            show_bindings_without_instance=payload.show_bindings_without_instance,
        )
    except ReportError as exc:
        logger.warning("API: не удалось построить отчёт для %s: %s", payload.project_root, exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    response = StepDefinitionReportDto.model_validate(report)
    logger.info(
        "API: отчёт для %s готов, записей: %s",
        payload.project_root,
        len(response.step_definitions),
    )
    return response
