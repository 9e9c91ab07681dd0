"""Shared fixtures: small synthetic datasets exposed through InMemoryHost."""

from __future__ import annotations

import pytest

from varmeta.host.memory import HostVariable, InMemoryHost


@pytest.fixture
def survey_variables() -> list[HostVariable]:
    """Five variables: two with value labels, one string."""
    return [
        HostVariable(name="id", label="Respondent ID"),
        HostVariable(name="sex", label="Sex of respondent", value_label_name="sex"),
        HostVariable(name="age", label="Age in years"),
        HostVariable(name="city", label="City of residence", is_string=True),
        HostVariable(name="income", label="", value_label_name="incband"),
    ]


@pytest.fixture
def survey_value_labels() -> dict[str, dict[int, str]]:
    return {
        "sex": {1: "male", 2: "female"},
        "incband": {1: "low", 2: "middle", 3: "high"},
    }


@pytest.fixture
def survey_host(
    survey_variables: list[HostVariable], survey_value_labels: dict[str, dict[int, str]]
) -> InMemoryHost:
    return InMemoryHost(survey_variables, value_label_sets=survey_value_labels)
