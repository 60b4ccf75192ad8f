from __future__ import annotations

import pytest

from domain.enums import StepKeyword
from domain.errors import BindingError, ConfigurationError
from domain.models import Binding, Step
from tools.step_matcher import StepMatcher


def _binding(keyword: StepKeyword, pattern: str, *names: str) -> Binding:
    return Binding(keyword=keyword, pattern=pattern, parameter_names=list(names))


def test_first_declared_binding_wins_for_ambiguous_patterns() -> None:
    first = _binding(StepKeyword.GIVEN, r"^I have (\d+) cukes$", "count")
    second = _binding(StepKeyword.GIVEN, r"^I have (.*) cukes$", "amount")
    matcher = StepMatcher([first, second])

    for _ in range(3):
        result = matcher.match_step(Step(StepKeyword.GIVEN, "I have 5 cukes"), StepKeyword.GIVEN)
        assert result.binding is first
        assert result.arguments == ["5"]


def test_bindings_of_other_category_are_skipped() -> None:
    when = _binding(StepKeyword.WHEN, r"^I eat (\d+)$")
    then = _binding(StepKeyword.THEN, r"^I eat (\d+)$")
    matcher = StepMatcher([when, then])

    result = matcher.match_step(Step(StepKeyword.AND, "I eat 3"), StepKeyword.THEN)

    assert result.binding is then
    assert result.keyword is StepKeyword.THEN


def test_pattern_is_searched_not_fully_matched() -> None:
    binding = _binding(StepKeyword.GIVEN, r"logged in")
    matcher = StepMatcher([binding])

    result = matcher.match_step(Step(StepKeyword.GIVEN, "the user is logged in as admin"), StepKeyword.GIVEN)

    assert result is not None
    assert result.arguments == []


def test_no_match_returns_none() -> None:
    matcher = StepMatcher([_binding(StepKeyword.GIVEN, r"^I have (\d+) cukes$")])

    assert matcher.match_step(Step(StepKeyword.GIVEN, "I have many cukes"), StepKeyword.GIVEN) is None


def test_optional_group_that_did_not_participate_yields_empty_value() -> None:
    binding = _binding(StepKeyword.THEN, r"^I see (\d+) items?( in total)?$")
    matcher = StepMatcher([binding])

    result = matcher.match_step(Step(StepKeyword.THEN, "I see 2 items"), StepKeyword.THEN)

    assert result.arguments == ["2", ""]


@pytest.mark.parametrize(
    ("keyword", "current", "expected"),
    [
        (StepKeyword.GIVEN, StepKeyword.THEN, StepKeyword.GIVEN),
        (StepKeyword.WHEN, None, StepKeyword.WHEN),
        (StepKeyword.AND, StepKeyword.WHEN, StepKeyword.WHEN),
        (StepKeyword.BUT, StepKeyword.THEN, StepKeyword.THEN),
    ],
)
def test_resolve_keyword_inherits_for_conjunctions(
    keyword: StepKeyword, current: StepKeyword | None, expected: StepKeyword
) -> None:
    assert StepMatcher.resolve_keyword(Step(keyword, "text"), current) is expected


@pytest.mark.parametrize("keyword", [StepKeyword.AND, StepKeyword.BUT])
def test_conjunction_without_preceding_category_fails(keyword: StepKeyword) -> None:
    step = Step(keyword, "I have 5 cukes")

    with pytest.raises(ConfigurationError, match="I have 5 cukes"):
        StepMatcher.resolve_keyword(step, None)


def test_invalid_pattern_is_rejected_when_binding_is_created() -> None:
    with pytest.raises(BindingError, match="Invalid step pattern"):
        Binding(keyword=StepKeyword.GIVEN, pattern="^broken (group$", method_reference="Steps.Broken")


def test_bindings_are_compared_by_identity() -> None:
    first = _binding(StepKeyword.GIVEN, "^same$")
    second = _binding(StepKeyword.GIVEN, "^same$")

    assert first != second
    assert len({first, second}) == 2
