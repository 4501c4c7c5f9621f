"""Analysis parameter parsing.

Raw UI values are parsed per field type. Anything that does not parse to a
finite number falls back to that field's default; the previous value is never
kept. Bounds are exposed for the input widgets only and are not enforced here.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any

from src.config import PARAMETER_DEFAULTS
from src.core.contracts import AnalysisParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    label: str
    kind: type
    default: int | float
    min_value: int | float | None
    max_value: int | float | None
    step: int | float
    help: str = ""


PARAMETER_SPECS: dict[str, ParameterSpec] = {
    "n_components": ParameterSpec(
        name="n_components",
        label="PLS components",
        kind=int,
        default=PARAMETER_DEFAULTS.n_components,
        min_value=PARAMETER_DEFAULTS.n_components_bounds[0],
        max_value=PARAMETER_DEFAULTS.n_components_bounds[1],
        step=1,
        help="Number of latent variables for PLS-DA.",
    ),
    "cv_folds": ParameterSpec(
        name="cv_folds",
        label="Cross-validation folds",
        kind=int,
        default=PARAMETER_DEFAULTS.cv_folds,
        min_value=PARAMETER_DEFAULTS.cv_folds_bounds[0],
        max_value=PARAMETER_DEFAULTS.cv_folds_bounds[1],
        step=1,
    ),
    "bootstrap_iterations": ParameterSpec(
        name="bootstrap_iterations",
        label="Bootstrap iterations",
        kind=int,
        default=PARAMETER_DEFAULTS.bootstrap_iterations,
        min_value=PARAMETER_DEFAULTS.bootstrap_iterations_bounds[0],
        max_value=PARAMETER_DEFAULTS.bootstrap_iterations_bounds[1],
        step=10,
        help="Resamples used for the stability coefficients.",
    ),
    "learning_rate": ParameterSpec(
        name="learning_rate",
        label="CNN learning rate",
        kind=float,
        default=PARAMETER_DEFAULTS.learning_rate,
        min_value=PARAMETER_DEFAULTS.learning_rate_bounds[0],
        max_value=PARAMETER_DEFAULTS.learning_rate_bounds[1],
        step=0.0001,
    ),
    "epochs": ParameterSpec(
        name="epochs",
        label="CNN epochs",
        kind=int,
        default=PARAMETER_DEFAULTS.epochs,
        min_value=PARAMETER_DEFAULTS.epochs_bounds[0],
        max_value=PARAMETER_DEFAULTS.epochs_bounds[1],
        step=10,
    ),
}


def default_parameters() -> AnalysisParameters:
    return AnalysisParameters(**{name: spec.default for name, spec in PARAMETER_SPECS.items()})


def _to_number(raw: Any) -> float | None:
    """Return ``raw`` as a finite float, or None when it is not a number."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except (ValueError, OverflowError):
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def parse_parameter(name: str, raw: Any) -> int | float:
    """Parse ``raw`` for parameter ``name``, substituting the default on failure.

    Raises KeyError for an unrecognized parameter name.
    """
    spec = PARAMETER_SPECS[name]
    value = _to_number(raw)
    if value is None:
        logger.debug("Parameter %s: %r is not a number, using default %r", name, raw, spec.default)
        return spec.default
    if spec.kind is int:
        # Integer fields truncate toward zero.
        return int(value)
    return float(value)


def update_parameters(params: AnalysisParameters, name: str, raw: Any) -> AnalysisParameters:
    """Return a copy of ``params`` with ``name`` set from ``raw``."""
    return replace(params, **{name: parse_parameter(name, raw)})
