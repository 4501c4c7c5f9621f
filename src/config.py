# src/config.py

import os
from dataclasses import dataclass, field
from typing import List

# --- Base paths ---
# Project root can be overridden if needed (e.g. for tests or deployment)
BASE_DIR = os.path.abspath(os.getenv("RAMAN_BASE_DIR", os.path.join(os.path.dirname(__file__), "..")))


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# ---------------------------
# Structured configuration
# ---------------------------

@dataclass(frozen=True)
class ParameterDefaults:
    """Fallback values for the analysis parameters.

    A field falls back to its default whenever the raw UI input does not parse
    to a number. The bounds only feed the input widgets; nothing rejects a run
    because a value sits outside them.
    """

    n_components: int = 10
    cv_folds: int = 5
    bootstrap_iterations: int = 100
    learning_rate: float = 0.001
    epochs: int = 100

    # Input control bounds (min, max); None means unbounded.
    n_components_bounds: tuple = (1, 50)
    cv_folds_bounds: tuple = (3, 20)
    bootstrap_iterations_bounds: tuple = (50, 1000)
    learning_rate_bounds: tuple = (0.0001, 0.1)
    epochs_bounds: tuple = (10, 1000)


@dataclass(frozen=True)
class RunConfig:
    """Pacing and result generation for an analysis run.

    Values can be overridden via environment variables:
    - RAMAN_STAGE_DELAY_S
    - RAMAN_RANDOM_SEED
    - RAMAN_WINNER_POLICY ("fixed" or "metrics")
    """

    stage_delay_s: float = field(
        default_factory=lambda: float(os.getenv("RAMAN_STAGE_DELAY_S", "1.0"))
    )
    random_seed: int | None = field(default_factory=lambda: _env_optional_int("RAMAN_RANDOM_SEED"))
    winner_policy: str = field(default_factory=lambda: os.getenv("RAMAN_WINNER_POLICY", "fixed"))
    significance_level: float = 0.05
    n_cv_folds_reported: int = 5
    n_importance_features: int = 20


@dataclass(frozen=True)
class LoggingConfig:
    """Logging and notification event log settings.

    Values can be overridden via environment variables:
    - RAMAN_LOG_LEVEL
    - RAMAN_EVENT_LOG_DIR
    - RAMAN_EVENT_LOG (set to 0 to disable the JSONL event log)
    """

    level: str = field(default_factory=lambda: os.getenv("RAMAN_LOG_LEVEL", "INFO"))
    event_log_dir: str = field(
        default_factory=lambda: os.getenv(
            "RAMAN_EVENT_LOG_DIR", os.path.join(BASE_DIR, "ui_state", "events")
        )
    )
    event_log_enabled: bool = field(default_factory=lambda: _env_flag("RAMAN_EVENT_LOG", True))


@dataclass(frozen=True)
class ReportConfig:
    """Report export settings."""

    filename: str = "raman_analysis_report.json"
    mime_type: str = "application/json"
    indent: int = 2
    accepted_upload_types: List[str] = field(default_factory=lambda: ["csv", "txt", "xlsx", "spc"])


# Instantiate structured configs
PARAMETER_DEFAULTS = ParameterDefaults()
RUN = RunConfig()
LOGGING = LoggingConfig()
REPORT = ReportConfig()


# ---------------------------
# Backwards-compatible aliases
# ---------------------------

# Analysis parameter defaults
N_COMPONENTS = PARAMETER_DEFAULTS.n_components
CV_FOLDS = PARAMETER_DEFAULTS.cv_folds
BOOTSTRAP_ITERATIONS = PARAMETER_DEFAULTS.bootstrap_iterations
LEARNING_RATE = PARAMETER_DEFAULTS.learning_rate
EPOCHS = PARAMETER_DEFAULTS.epochs

# Run pacing
STAGE_DELAY_S = RUN.stage_delay_s
RANDOM_SEED = RUN.random_seed
WINNER_POLICY = RUN.winner_policy
SIGNIFICANCE_LEVEL = RUN.significance_level

# Logging
LOG_LEVEL = LOGGING.level
EVENT_LOG_DIR = LOGGING.event_log_dir
EVENT_LOG_ENABLED = LOGGING.event_log_enabled

# Report
REPORT_FILENAME = REPORT.filename
REPORT_MIME_TYPE = REPORT.mime_type
ACCEPTED_UPLOAD_TYPES = REPORT.accepted_upload_types


def get_run_config(
    *,
    stage_delay_s: float | None = None,
    random_seed: int | None = None,
    winner_policy: str | None = None,
) -> RunConfig:
    """Return an immutable run configuration with optional overrides.

    Defaults come from ``RUN``. Callers (mostly tests) can override individual
    fields without touching the environment.
    """

    base = RUN

    return RunConfig(
        stage_delay_s=base.stage_delay_s if stage_delay_s is None else float(stage_delay_s),
        random_seed=base.random_seed if random_seed is None else int(random_seed),
        winner_policy=winner_policy or base.winner_policy,
        significance_level=base.significance_level,
        n_cv_folds_reported=base.n_cv_folds_reported,
        n_importance_features=base.n_importance_features,
    )
