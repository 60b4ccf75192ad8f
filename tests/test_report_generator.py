from __future__ import annotations

import re

import pytest

from domain.enums import StepKeyword
from domain.errors import ConfigurationError
from domain.models import (
    Binding,
    ExampleSet,
    Feature,
    FeatureRef,
    Scenario,
    ScenarioOutline,
    ScenarioRef,
    Step,
    StepDefinitionEntry,
)
from tools.report_generator import StepDefinitionReportGenerator


def _bindings() -> list[Binding]:
    return [
        Binding(StepKeyword.GIVEN, r"^I have (\d+) cukes$", ["count"], "CukeSteps.GivenCukes"),
        Binding(StepKeyword.WHEN, r"^I eat (\d+) cukes$", ["eaten"], "CukeSteps.WhenEat"),
        Binding(StepKeyword.THEN, r"^I have (\d+) cukes left$", ["left"], "CukeSteps.ThenLeft"),
        Binding(StepKeyword.THEN, r"^I am (full|hungry)$", [], "CukeSteps.ThenMood"),
        Binding(StepKeyword.GIVEN, r"^nobody calls (.*) or (.*)$", ["first"], "CukeSteps.Unused"),
    ]


def _feature() -> Feature:
    return Feature(
        source_file="features/cukes.feature",
        title="Cukes",
        background=[Step(StepKeyword.GIVEN, "I have 10 cukes")],
        scenarios=[
            Scenario(
                title="Eat some",
                file_line=7,
                steps=[
                    Step(StepKeyword.WHEN, "I eat 3 cukes"),
                    Step(StepKeyword.THEN, "I have 7 cukes left"),
                    Step(StepKeyword.AND, "I am full"),
                    Step(StepKeyword.AND, "the cukes are tasty"),
                ],
            ),
            ScenarioOutline(
                title="Eat many",
                steps=[
                    Step(StepKeyword.WHEN, "I eat <n> cukes"),
                    Step(StepKeyword.THEN, "the cukes are tasty"),
                ],
                example_sets=[ExampleSet(header=["n"], body=[["4"], ["5"]])],
            ),
        ],
    )


def _generate(bindings=None, features=None, **kwargs):
    bindings = _bindings() if bindings is None else bindings
    features = [_feature()] if features is None else features
    generator = StepDefinitionReportGenerator(bindings, features, project_name="Cukes", **kwargs)
    return bindings, generator.generate_report()


def _entry_for(report, binding: Binding) -> StepDefinitionEntry:
    matches = [entry for entry in report.step_definitions if entry.binding is binding]
    assert len(matches) == 1
    return matches[0]


def test_every_binding_has_exactly_one_entry_in_catalog_order() -> None:
    bindings, report = _generate()

    binding_entries = [entry for entry in report.step_definitions if not entry.is_orphan]

    assert [entry.binding for entry in binding_entries] == bindings
    assert report.step_definitions[: len(bindings)] == binding_entries


def test_report_header_fields() -> None:
    _, report = _generate(show_bindings_without_instance=False)

    assert report.project_name == "Cukes"
    assert report.show_bindings_without_instance is False
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}", report.generated_at)


def test_matched_instances_carry_context_and_parameters() -> None:
    bindings, report = _generate()

    eat_entry = _entry_for(report, bindings[1])

    assert len(eat_entry.instances) == 2
    plain, outline = eat_entry.instances
    assert plain.feature == FeatureRef(file_path="features/cukes.feature", title="Cukes")
    assert plain.scenario == ScenarioRef(title="Eat some", source_line=7)
    assert plain.from_scenario_outline is False
    assert [(p.name, p.value) for p in plain.parameters] == [("eaten", "3")]
    assert outline.from_scenario_outline is True
    assert outline.scenario == ScenarioRef(title="Eat many", source_line=-1)
    assert outline.step.text == "I eat 4 cukes"
    assert [(p.name, p.value) for p in outline.parameters] == [("eaten", "4")]


def test_background_steps_are_reported_under_background_scenario() -> None:
    bindings, report = _generate()

    given_entry = _entry_for(report, bindings[0])

    assert len(given_entry.instances) == 1
    instance = given_entry.instances[0]
    assert instance.scenario.title == "Background"
    assert instance.scenario.source_line == -1
    assert instance.from_scenario_outline is False


def test_representative_step_comes_from_first_match() -> None:
    bindings, report = _generate()

    assert _entry_for(report, bindings[1]).representative_step == Step(
        StepKeyword.WHEN, "I eat {eaten} cukes"
    )
    mood = _entry_for(report, bindings[3])
    assert mood.representative_step == Step(StepKeyword.THEN, "I am {?param?}")


def test_and_step_is_matched_under_inherited_category() -> None:
    bindings, report = _generate()

    mood = _entry_for(report, bindings[3])

    assert len(mood.instances) == 1
    assert mood.instances[0].step.keyword is StepKeyword.AND
    assert mood.representative_step.keyword is StepKeyword.THEN


def test_parameters_are_truncated_to_declared_names() -> None:
    bindings, report = _generate()

    mood = _entry_for(report, bindings[3])

    assert mood.instances[0].parameters == []


def test_unmatched_steps_collapse_into_one_orphan_entry() -> None:
    _, report = _generate()

    orphans = report.orphans

    assert len(orphans) == 1
    orphan = orphans[0]
    assert orphan.keyword is StepKeyword.THEN
    assert orphan.representative_step == Step(StepKeyword.THEN, "the cukes are tasty")
    assert [instance.scenario.title for instance in orphan.instances] == ["Eat some", "Eat many"]
    assert [instance.from_scenario_outline for instance in orphan.instances] == [False, True]


def test_orphans_are_appended_after_bindings_in_first_seen_order() -> None:
    feature = Feature(
        source_file="a.feature",
        title="A",
        scenarios=[
            Scenario(
                title="s",
                steps=[
                    Step(StepKeyword.GIVEN, "first unknown"),
                    Step(StepKeyword.WHEN, "second unknown"),
                    Step(StepKeyword.GIVEN, "first unknown"),
                ],
            )
        ],
    )

    bindings, report = _generate(features=[feature])

    texts = [entry.representative_step.text for entry in report.step_definitions[len(bindings):]]
    assert texts == ["first unknown", "second unknown"]
    assert len(report.orphans[0].instances) == 2


def test_unused_binding_gets_sample_from_pattern_and_no_instances() -> None:
    bindings, report = _generate()

    unused = _entry_for(report, bindings[4])

    assert unused.instances is None
    assert unused.representative_step == Step(StepKeyword.GIVEN, "nobody calls {first} or {?param?}")
    assert report.unused_bindings == [unused]


def test_outline_without_examples_contributes_nothing() -> None:
    feature = Feature(
        source_file="a.feature",
        title="A",
        scenarios=[ScenarioOutline(title="empty", steps=[Step(StepKeyword.GIVEN, "I have <n> cukes")])],
    )

    _, report = _generate(features=[feature])

    assert report.orphans == []
    assert all(entry.instances is None for entry in report.step_definitions)


def test_binding_with_non_canonical_category_aborts_the_pass() -> None:
    bindings = [Binding(StepKeyword.AND, r"^misconfigured$")]

    with pytest.raises(ConfigurationError):
        _generate(bindings=bindings, features=[])


def test_scenario_opening_with_conjunction_aborts_the_pass() -> None:
    feature = Feature(
        source_file="a.feature",
        title="A",
        scenarios=[Scenario(title="s", steps=[Step(StepKeyword.AND, "I have 5 cukes")])],
    )

    with pytest.raises(ConfigurationError, match="I have 5 cukes"):
        _generate(features=[feature])


def test_each_generation_starts_a_fresh_pass() -> None:
    bindings = _bindings()
    generator = StepDefinitionReportGenerator(bindings, [_feature()], project_name="Cukes")

    first = generator.generate_report()
    second = generator.generate_report()

    assert first is not second
    assert len(second.orphans) == 1
    assert len(second.orphans[0].instances) == 2
