import json

import numpy as np
import pytest

from adopter_analysis.algorithms import get_algorithm
from adopter_analysis.evaluator import Evaluator, evaluate, evaluate_scores
from adopter_analysis.exceptions import EvaluationError


def test_constant_scores_give_half_auc():
    y = np.array([0, 1, 0, 1, 0, 0])
    result = evaluate_scores(y, np.full(len(y), 0.3))
    assert result.auc == pytest.approx(0.5)


def test_perfect_ranking_gives_unit_auc():
    y = np.array([0, 0, 0, 1, 1])
    result = evaluate_scores(y, np.array([0.1, 0.2, 0.3, 0.8, 0.9]))
    assert result.auc == pytest.approx(1.0)
    assert result.precision == 1.0 and result.recall == 1.0 and result.f1 == 1.0


def test_auc_is_threshold_independent_but_cutoff_metrics_use_half():
    y = np.array([0, 0, 1, 1])
    # perfect ranking, but everything scored below 0.5
    result = evaluate_scores(y, np.array([0.1, 0.2, 0.3, 0.4]))
    assert result.auc == pytest.approx(1.0)
    assert result.recall == 0.0
    assert result.precision == 0.0
    np.testing.assert_array_equal(result.confusion_matrix, [[2, 0], [2, 0]])


def test_confusion_matrix_layout_and_half_is_positive():
    y = np.array([0, 0, 1, 1, 1])
    scores = np.array([0.7, 0.2, 0.5, 0.9, 0.1])
    result = evaluate_scores(y, scores)
    # [[TN, FP], [FN, TP]]
    np.testing.assert_array_equal(result.confusion_matrix, [[1, 1], [1, 2]])
    assert result.precision == pytest.approx(2 / 3)
    assert result.recall == pytest.approx(2 / 3)


def test_auc_bounds_for_random_scores():
    rng = np.random.default_rng(0)
    for _ in range(20):
        y = rng.integers(0, 2, size=50)
        y[:2] = [0, 1]
        auc = evaluate_scores(y, rng.uniform(size=50)).auc
        assert 0.0 <= auc <= 1.0


def test_single_class_test_set_raises():
    with pytest.raises(EvaluationError):
        evaluate_scores(np.zeros(10, dtype=int), np.linspace(0, 1, 10))


def test_evaluate_uses_model_feature_subset(separable_dataset):
    model = get_algorithm("naive_bayes").train(
        separable_dataset.features(["signal"]), separable_dataset.labels
    )
    result = evaluate(model, separable_dataset)
    assert result.auc == pytest.approx(1.0)
    assert result.confusion_matrix.sum() == len(separable_dataset)


def test_evaluator_saves_metrics_json(tmp_path):
    result = evaluate_scores(np.array([0, 1, 0, 1]), np.array([0.2, 0.8, 0.4, 0.6]))
    path = tmp_path / "out" / "metrics.json"
    evaluator = Evaluator(str(path), figures_dir=str(tmp_path), verbose=False)

    evaluator.save_metrics({"model": result, "mean": np.float64(0.75)})

    saved = json.loads(path.read_text())
    assert saved["model"]["AUC"] == pytest.approx(1.0)
    assert saved["model"]["Confusion_Matrix"] == [[2, 0], [0, 2]]
    assert saved["mean"] == pytest.approx(0.75)


def test_evaluator_plots_confusion_matrix(tmp_path):
    result = evaluate_scores(np.array([0, 1, 0, 1]), np.array([0.2, 0.8, 0.6, 0.4]))
    evaluator = Evaluator(str(tmp_path / "m.json"), figures_dir=str(tmp_path / "figs"), verbose=False)
    path = evaluator.plot_confusion_matrix(result, "tree")
    assert path.endswith(".png")
    assert (tmp_path / "figs").exists()
