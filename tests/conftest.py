from __future__ import annotations

from pathlib import Path

import pytest

STEPS_SOURCE = """
using TechTalk.SpecFlow;

[Binding]
public class CukeSteps
{
    [Given(@"^I have (\\d+) cukes$")]
    public void GivenIHaveCukes(int count)
    {
    }

    [When(@"^I eat (\\d+) cukes$")]
    public void WhenIEat(int eaten)
    {
    }

    [Then(@"^I have (\\d+) cukes left$")]
    public void ThenCukesLeft(int left)
    {
    }

    [Then(@"^I feel (.*)$")]
    public void ThenIFeel(string mood)
    {
    }
}
"""

FEATURE_SOURCE = """Feature: Cukes

  Background:
    Given I have 10 cukes

  Scenario: Eat some
    When I eat 3 cukes
    Then I have 7 cukes left
    And the basket is empty

  Scenario Outline: Eat many
    When I eat <n> cukes
    Then the basket is empty

    Examples:
      | n |
      | 4 |
      | 5 |
"""


@pytest.fixture()
def cukes_project(tmp_path: Path) -> Path:
    """Минимальный проект: одно определение шагов и один feature-файл."""

    root = tmp_path / "Cukes.Specs"
    (root / "Steps").mkdir(parents=True)
    (root / "Features").mkdir()
    (root / "Steps" / "CukeSteps.cs").write_text(STEPS_SOURCE, encoding="utf-8")
    (root / "Features" / "cukes.feature").write_text(FEATURE_SOURCE, encoding="utf-8")
    return root
