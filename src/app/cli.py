"""Командная строка step-report."""
from __future__ import annotations

from pathlib import Path

import click

from app.config import get_settings
from app.logging_config import init_logging
from domain.errors import ReportError
from domain.models import StepDefinitionReport
from services import create_report_service


@click.group()
@click.option("--log-level", default=None, help="Уровень логирования (по умолчанию из настроек)")
def cli(log_level: str | None) -> None:
    """Отчёт о покрытии шагов сценариев определениями шагов."""

    init_logging(log_level or get_settings().log_level)


@cli.command()
@click.argument(
    "project_root", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Файл отчёта: .xml для XML, иначе JSON",
)
@click.option("--project-name", default=None, help="Имя проекта в отчёте")
@click.option(
    "--show-unused/--hide-unused",
    default=None,
    help="Показывать определения без вхождений (флаг отображения в отчёте)",
)
def generate(
    project_root: Path,
    output: Path | None,
    project_name: str | None,
    show_unused: bool | None,
) -> None:
    """Строит отчёт по определениям шагов для PROJECT_ROOT."""

    service = create_report_service(get_settings())
    try:
        report = service.generate(
            str(project_root),
            project_name=project_name,
            show_bindings_without_instance=show_unused,
        )
    except ReportError as e:
        raise click.ClickException(str(e)) from e

    _echo_summary(report)
    if output is not None:
        path = service.write(report, output.resolve())
        click.echo(f"Report written to {path}")


@cli.command()
def serve() -> None:
    """Запускает HTTP API."""

    from app.main import main

    main()


def _echo_summary(report: StepDefinitionReport) -> None:
    bindings = [entry for entry in report.step_definitions if not entry.is_orphan]
    click.echo(f"Project: {report.project_name} ({report.generated_at})")
    click.echo(f"Step definitions: {len(bindings)}")
    click.echo(f"  used: {len(bindings) - len(report.unused_bindings)}")
    click.echo(f"  unused: {len(report.unused_bindings)}")
    click.echo(f"Steps without definition: {len(report.orphans)}")
    for entry in report.orphans:
        occurrences = len(entry.instances or [])
        click.echo(f"  {entry.keyword.value} {entry.representative_step.text} (x{occurrences})")


if __name__ == "__main__":
    cli()
