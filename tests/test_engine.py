from __future__ import annotations

import pytest

from src.config import get_run_config
from src.core.contracts import CNN_METHOD, VIP_METHOD, AnalysisParameters, UploadedDataset
from src.jobs.engine import REFERENCE_METRICS, ReferenceEngine


DATASET = UploadedDataset(name="sample.csv", size=2_097_152)


def test_reference_metrics_are_deterministic():
    engine = ReferenceEngine(get_run_config())
    first = engine.produce(DATASET, AnalysisParameters())
    second = engine.produce(UploadedDataset(name="other.txt", size=1), AnalysisParameters(epochs=500))

    for a, b in zip(first.methods(), second.methods()):
        assert a.accuracy == b.accuracy
        assert a.auc == b.auc
        assert a.cv_scores == b.cv_scores
        assert a.top_features == b.top_features
    assert first.comparison == second.comparison


def test_feature_importance_is_random_uniform():
    engine = ReferenceEngine(get_run_config())
    first = engine.produce(DATASET, AnalysisParameters())
    second = engine.produce(DATASET, AnalysisParameters())

    assert len(first.vip.feature_importance) == 20
    assert len(first.cnn.feature_importance) == 20
    assert first.vip.feature_importance != second.vip.feature_importance
    assert first.vip.feature_importance != first.cnn.feature_importance
    assert all(0.0 <= v < 1.0 for v in first.vip.feature_importance + first.cnn.feature_importance)


def test_seed_makes_importance_reproducible():
    a = ReferenceEngine(get_run_config(random_seed=7)).produce(DATASET, AnalysisParameters())
    b = ReferenceEngine(get_run_config(random_seed=7)).produce(DATASET, AnalysisParameters())

    assert a.vip.feature_importance == b.vip.feature_importance


def test_reference_bundle_values():
    bundle = ReferenceEngine(get_run_config(winner_policy="fixed")).produce(DATASET, AnalysisParameters())

    assert bundle.vip.method == VIP_METHOD
    assert bundle.cnn.method == CNN_METHOD
    assert bundle.vip.accuracy == pytest.approx(0.847)
    assert bundle.cnn.accuracy == pytest.approx(0.923)
    assert bundle.vip.cv_scores == REFERENCE_METRICS[VIP_METHOD]["cv_scores"]
    assert bundle.comparison.winner == CNN_METHOD
    assert bundle.comparison.is_significant is (bundle.comparison.p_value < 0.05)
    assert set(bundle.comparison.stability) == {VIP_METHOD, CNN_METHOD}


def test_metrics_winner_policy_derives_from_accuracy():
    bundle = ReferenceEngine(get_run_config(winner_policy="metrics")).produce(DATASET, AnalysisParameters())

    assert bundle.comparison.winner == CNN_METHOD
