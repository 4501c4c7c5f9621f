from __future__ import annotations

import math

import pytest

from src.core.contracts import AnalysisParameters
from src.core.parameters import (
    PARAMETER_SPECS,
    default_parameters,
    parse_parameter,
    update_parameters,
)


def test_default_parameters_match_documented_defaults():
    params = default_parameters()

    assert params == AnalysisParameters(
        n_components=10,
        cv_folds=5,
        bootstrap_iterations=100,
        learning_rate=0.001,
        epochs=100,
    )


@pytest.mark.parametrize("name", sorted(PARAMETER_SPECS))
@pytest.mark.parametrize("raw", ["abc", "", None, float("nan"), "nan", "inf", 10**400, "1e400"])
def test_non_numeric_input_falls_back_to_default(name, raw):
    assert parse_parameter(name, raw) == PARAMETER_SPECS[name].default


@pytest.mark.parametrize("name", sorted(PARAMETER_SPECS))
def test_default_substitution_ignores_previous_value(name):
    params = update_parameters(default_parameters(), name, "garbage")
    params = update_parameters(params, name, "still garbage")

    assert getattr(params, name) == PARAMETER_SPECS[name].default


def test_invalid_input_replaces_prior_valid_value_with_default():
    params = update_parameters(default_parameters(), "epochs", "250")
    assert params.epochs == 250

    params = update_parameters(params, "epochs", "x")
    assert params.epochs == 100


def test_integer_fields_parse_and_truncate():
    assert parse_parameter("n_components", "12") == 12
    assert parse_parameter("n_components", " 7 ") == 7
    assert parse_parameter("cv_folds", "4.9") == 4
    assert isinstance(parse_parameter("bootstrap_iterations", 200.0), int)


def test_float_field_parses_float():
    value = parse_parameter("learning_rate", "0.05")

    assert isinstance(value, float)
    assert math.isclose(value, 0.05)


def test_bounds_are_not_enforced():
    assert parse_parameter("n_components", "0") == 0
    assert parse_parameter("learning_rate", "0.5") == pytest.approx(0.5)


def test_unknown_parameter_raises_key_error():
    with pytest.raises(KeyError):
        parse_parameter("momentum", "0.9")


def test_update_parameters_leaves_other_fields_untouched():
    base = default_parameters()
    updated = update_parameters(base, "learning_rate", "0.01")

    assert updated.learning_rate == pytest.approx(0.01)
    assert updated.n_components == base.n_components
    assert updated.epochs == base.epochs
    assert base.learning_rate == pytest.approx(0.001)
