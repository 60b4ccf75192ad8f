"""Сериализация готового отчёта по определениям шагов в JSON и XML.

Отсутствующие вхождения и параметры сохраняются как ``null`` (в XML
элемент не выводится), чтобы отличать «не было вызовов» от пустого
списка.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

from domain.enums import ReportFormat
from domain.models import Instance, Step, StepDefinitionEntry, StepDefinitionReport

logger = logging.getLogger(__name__)

XML_NAMESPACE = "urn:step-report:step-definition-report"


def step_to_dict(step: Step) -> dict[str, Any]:
    return {
        "keyword": step.keyword.value,
        "text": step.text,
        "multilineText": step.multiline_text,
        "table": (
            {"header": list(step.table.header), "body": [list(row) for row in step.table.body]}
            if step.table
            else None
        ),
    }


def instance_to_dict(instance: Instance) -> dict[str, Any]:
    return {
        "fromScenarioOutline": instance.from_scenario_outline,
        "step": step_to_dict(instance.step),
        "feature": {"filePath": instance.feature.file_path, "title": instance.feature.title},
        "scenario": {"title": instance.scenario.title, "sourceLine": instance.scenario.source_line},
        "parameters": (
            [{"name": p.name, "value": p.value} for p in instance.parameters]
            if instance.parameters is not None
            else None
        ),
    }


def entry_to_dict(entry: StepDefinitionEntry) -> dict[str, Any]:
    return {
        "keyword": entry.keyword.value,
        "methodReference": entry.method_reference,
        "pattern": entry.pattern,
        "representativeStep": (
            step_to_dict(entry.representative_step) if entry.representative_step else None
        ),
        "instances": (
            [instance_to_dict(instance) for instance in entry.instances]
            if entry.instances is not None
            else None
        ),
    }


def report_to_dict(report: StepDefinitionReport) -> dict[str, Any]:
    """Формат-нейтральное представление отчёта (camelCase)."""

    return {
        "projectName": report.project_name,
        "generatedAt": report.generated_at,
        "showBindingsWithoutInstance": report.show_bindings_without_instance,
        "stepDefinitions": [entry_to_dict(entry) for entry in report.step_definitions],
    }


def report_to_json(report: StepDefinitionReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)


def report_to_xml(report: StepDefinitionReport) -> str:
    """XML-документ отчёта ``<stepDefinitionReport>``."""

    root = ET.Element(
        "stepDefinitionReport",
        {
            "xmlns": XML_NAMESPACE,
            "projectName": report.project_name,
            "generatedAt": report.generated_at,
            "showBindingsWithoutInstance": _xml_bool(report.show_bindings_without_instance),
        },
    )
    for entry in report.step_definitions:
        entry_el = ET.SubElement(root, "stepDefinition", {"type": entry.keyword.value})
        if entry.binding is not None:
            ET.SubElement(
                entry_el, "binding", {"methodReference": entry.method_reference or ""}
            ).text = entry.binding.pattern
        if entry.representative_step is not None:
            _append_step(entry_el, "scenarioStep", entry.representative_step)
        if entry.instances is None:
            continue

        instances_el = ET.SubElement(entry_el, "instances")
        for instance in entry.instances:
            instance_el = ET.SubElement(
                instances_el,
                "instance",
                {"fromScenarioOutline": _xml_bool(instance.from_scenario_outline)},
            )
            ET.SubElement(
                instance_el,
                "featureRef",
                {"filePath": instance.feature.file_path, "name": instance.feature.title},
            )
            ET.SubElement(
                instance_el,
                "scenarioRef",
                {"name": instance.scenario.title, "sourceFileLine": str(instance.scenario.source_line)},
            )
            _append_step(instance_el, "scenarioStep", instance.step)
            if instance.parameters is not None:
                parameters_el = ET.SubElement(instance_el, "parameters")
                for parameter in instance.parameters:
                    ET.SubElement(
                        parameters_el, "parameter", {"name": parameter.name, "value": parameter.value}
                    )

    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True).decode("utf-8") + "\n"


def _append_step(parent: ET.Element, tag: str, step: Step) -> ET.Element:
    step_el = ET.SubElement(parent, tag, {"keyword": step.keyword.value})
    ET.SubElement(step_el, "text").text = step.text
    if step.multiline_text is not None:
        ET.SubElement(step_el, "multilineTextArgument").text = step.multiline_text
    if step.table is not None:
        table_el = ET.SubElement(step_el, "tableArg")
        for tag_name, rows in (("header", [step.table.header]), ("body", step.table.body)):
            section_el = ET.SubElement(table_el, tag_name)
            for row in rows:
                row_el = ET.SubElement(section_el, "row")
                for cell in row:
                    ET.SubElement(row_el, "cell").text = cell
    return step_el


def _xml_bool(value: bool) -> str:
    return "true" if value else "false"


class ReportStore:
    """Сохраняет отчёт на диск в формате, выбранном по расширению файла."""

    def save(self, report: StepDefinitionReport, output_path: str | Path) -> Path:
        path = Path(output_path).expanduser()
        report_format = ReportFormat.from_path(path.name)
        content = report_to_xml(report) if report_format is ReportFormat.XML else report_to_json(report)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("Отчёт '%s' сохранён в %s (%s)", report.project_name, path, report_format.value)
        return path
