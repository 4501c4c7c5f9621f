from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.config import get_run_config
from src.core.contracts import CNN_METHOD, VIP_METHOD, UploadedDataset
from src.jobs.controller import NO_DATASET_MESSAGE, RunController
from src.jobs.engine import AnalysisEngine, ReferenceEngine
from src.jobs.stages import ANALYSIS_STAGES
from src.jobs.types import RunPhase


EXPECTED_PERCENTS = [15, 30, 45, 60, 75, 90, 100]
EXPECTED_MESSAGES = [
    "Loading and preprocessing data…",
    "Running PLS-DA analysis…",
    "Computing VIP scores…",
    "Training CNN model…",
    "Calculating SHAP values…",
    "Statistical validation…",
    "Analysis complete!",
]


@pytest.fixture
def notes():
    return []


@pytest.fixture
def controller(notes) -> RunController:
    config = get_run_config(stage_delay_s=0.0, winner_policy="fixed")
    return RunController(config=config, engine=ReferenceEngine(config), subscribers=[notes.append])


def _upload(name="sample.csv", size=2 * 1024 * 1024):
    return SimpleNamespace(name=name, size=size)


def test_stage_table_is_fixed():
    assert [s.percent for s in ANALYSIS_STAGES] == EXPECTED_PERCENTS
    assert [s.message for s in ANALYSIS_STAGES] == EXPECTED_MESSAGES


def test_select_dataset_replaces_prior_and_keeps_state(controller, notes):
    controller.select_dataset(_upload("a.csv", 10))
    controller.select_dataset(_upload("b.csv", 20))

    assert controller.dataset == UploadedDataset(name="b.csv", size=20)
    assert controller.phase == RunPhase.IDLE
    assert [n.kind for n in notes] == ["upload", "upload"]
    assert "b.csv" in notes[-1].message


def test_start_run_without_dataset_emits_one_error_and_stays_idle(controller, notes):
    before = controller.status

    assert controller.start_run() is False

    assert controller.status is before
    assert controller.phase == RunPhase.IDLE
    errors = [n for n in notes if n.level == "error"]
    assert len(errors) == 1
    assert errors[0].message == NO_DATASET_MESSAGE
    assert len(notes) == 1


def test_full_run_walks_seven_ordered_stages(controller, notes):
    controller.select_dataset(_upload())
    notes.clear()

    assert controller.start_run() is True
    assert controller.phase == RunPhase.RUNNING
    assert controller.status.progress == 0

    seen = []
    for _ in range(7):
        assert controller.phase == RunPhase.RUNNING
        stage = controller.advance()
        seen.append((controller.status.progress, controller.status.message))
        assert stage is not None

    assert seen == list(zip(EXPECTED_PERCENTS, EXPECTED_MESSAGES))
    assert controller.phase == RunPhase.COMPLETE
    assert controller.advance() is None

    progress_notes = [n for n in notes if n.kind == "progress"]
    assert [n.message for n in progress_notes] == EXPECTED_MESSAGES
    assert notes[-1].kind == "complete"


def test_stages_do_not_depend_on_parameters(controller):
    controller.select_dataset(_upload(size=1))
    controller.update_parameter("epochs", "5000")
    controller.update_parameter("cv_folds", "3")
    controller.start_run()

    percents = []
    while controller.status.is_running:
        controller.advance()
        percents.append(controller.status.progress)

    assert percents == EXPECTED_PERCENTS


def test_results_absent_until_last_stage(controller):
    controller.select_dataset(_upload())
    controller.start_run()

    for _ in range(6):
        controller.advance()
        assert controller.results is None

    controller.advance()
    assert controller.results is not None


def test_reference_scenario(controller):
    controller.select_dataset(_upload("sample.csv", 2 * 1024 * 1024))
    controller.start_run()
    bundle = controller.run_to_completion(sleep=lambda _s: None)

    assert controller.phase == RunPhase.COMPLETE
    assert bundle is controller.results
    assert bundle.vip.method == VIP_METHOD
    assert bundle.cnn.method == CNN_METHOD
    assert bundle.vip.accuracy == pytest.approx(0.847)
    assert bundle.cnn.accuracy == pytest.approx(0.923)
    assert bundle.comparison.winner == CNN_METHOD
    assert bundle.comparison.p_value == pytest.approx(0.032)
    assert bundle.comparison.is_significant is True
    assert len(bundle.vip.cv_scores) == 5
    assert len(bundle.cnn.cv_scores) == 5
    assert len(bundle.vip.feature_importance) == 20


def test_run_to_completion_sleeps_stage_delay_before_each_stage(notes):
    config = get_run_config(stage_delay_s=1.0)
    controller = RunController(config=config, subscribers=[notes.append])
    controller.select_dataset(_upload())
    controller.start_run()

    delays = []
    statuses = []
    controller.run_to_completion(sleep=delays.append, on_stage=lambda s: statuses.append(s.progress))

    assert delays == [1.0] * 7
    assert statuses == EXPECTED_PERCENTS


def test_reentrant_start_is_rejected(controller, notes):
    controller.select_dataset(_upload())
    controller.start_run()
    controller.advance()
    status_before = controller.status.progress

    assert controller.start_run() is False

    assert controller.status.is_running
    assert controller.status.progress == status_before
    assert notes[-1].level == "warning"
    assert notes[-1].kind == "rejected"


def test_reentrant_start_from_subscriber_is_rejected(notes):
    controller = RunController(config=get_run_config(stage_delay_s=0.0))
    results = []

    def _start_again(note):
        if note.kind == "progress":
            results.append(controller.start_run())

    controller.subscribe(_start_again)
    controller.select_dataset(_upload())
    controller.start_run()
    controller.run_to_completion(sleep=lambda _s: None)

    assert results == [False] * 7
    assert controller.phase == RunPhase.COMPLETE


def test_rerun_overwrites_previous_results(controller):
    controller.select_dataset(_upload())
    controller.start_run()
    first = controller.run_to_completion(sleep=lambda _s: None)

    assert controller.start_run() is True
    assert controller.results is None
    assert controller.phase == RunPhase.RUNNING

    second = controller.run_to_completion(sleep=lambda _s: None)
    assert second is not first
    assert first.vip.accuracy == second.vip.accuracy
    assert first.vip.cv_scores == second.vip.cv_scores


def test_parameters_are_snapshotted_at_run_start(controller):
    controller.select_dataset(_upload())
    controller.update_parameter("n_components", "12")
    controller.start_run()
    snapshot = controller.run_parameters

    controller.advance()
    controller.update_parameter("n_components", "30")
    controller.run_to_completion(sleep=lambda _s: None)

    assert snapshot.n_components == 12
    assert controller.run_parameters.n_components == 12
    assert controller.parameters.n_components == 30


def test_cancel_reverts_to_idle_without_results(controller, notes):
    controller.select_dataset(_upload())
    controller.start_run()

    def _cancel_at_45(status):
        if status.progress == 45:
            controller.cancel()

    out = controller.run_to_completion(sleep=lambda _s: None, on_stage=_cancel_at_45)

    assert out is None
    assert controller.phase == RunPhase.IDLE
    assert controller.results is None
    assert controller.run_parameters is None
    assert notes[-1].kind == "cancelled"
    assert controller.cancel() is False


def test_engine_failure_reverts_to_idle_and_propagates(notes):
    class _Broken(AnalysisEngine):
        def produce(self, dataset, params):
            raise RuntimeError("engine down")

    controller = RunController(
        config=get_run_config(stage_delay_s=0.0),
        engine=_Broken(),
        subscribers=[notes.append],
    )
    controller.select_dataset(_upload())
    controller.start_run()

    with pytest.raises(RuntimeError):
        controller.run_to_completion(sleep=lambda _s: None)

    assert controller.phase == RunPhase.IDLE
    assert controller.results is None


def test_update_parameter_invalid_returns_default(controller):
    assert controller.update_parameter("bootstrap_iterations", "lots") == 100
    assert controller.parameters.bootstrap_iterations == 100


def test_report_download_notification(controller, notes):
    controller.notify_report_downloaded()

    assert notes[-1].kind == "download"
    assert notes[-1].level == "success"


class _Interrupted(BaseException):
    pass


def test_subscriber_raising_on_last_stage_still_completes_run(controller):
    controller.select_dataset(_upload())
    controller.start_run()
    for _ in range(6):
        controller.advance()

    def _interrupt(note):
        if note.kind == "progress" and note.message == "Analysis complete!":
            raise _Interrupted()

    controller.subscribe(_interrupt)
    with pytest.raises(_Interrupted):
        controller.advance()

    assert controller.phase == RunPhase.COMPLETE
    assert controller.status.progress == 100
    assert controller.results is not None
    assert controller.run_to_completion(sleep=lambda _s: None) is controller.results
    assert controller.start_run() is True


def test_advance_past_last_stage_materializes_results(controller, notes):
    controller.select_dataset(_upload())
    controller.start_run()
    controller.status.stage_index = len(ANALYSIS_STAGES)

    assert controller.advance() is None

    assert controller.phase == RunPhase.COMPLETE
    assert controller.results is not None
    assert notes[-1].kind == "complete"


def test_update_parameter_with_oversized_int_returns_default(controller):
    assert controller.update_parameter("epochs", 10**400) == 100
