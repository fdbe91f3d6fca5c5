import json
import os
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from sklearn.metrics import (
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
    roc_curve,
)

from .algorithms import TrainedModel, get_algorithm
from .dataset import Dataset
from .exceptions import EvaluationError
from .utils.logger import get_logger

DECISION_THRESHOLD = 0.5


@dataclass(frozen=True, eq=False)
class EvaluationResult:
    """Metrics for one (model, test set) pair. Positive class is label 1."""
    auc: float
    precision: float
    recall: float
    f1: float
    confusion_matrix: np.ndarray
    fpr: np.ndarray = field(repr=False)
    tpr: np.ndarray = field(repr=False)
    thresholds: np.ndarray = field(repr=False)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "AUC": self.auc,
            "Precision": self.precision,
            "Recall": self.recall,
            "F1": self.f1,
            "Confusion_Matrix": self.confusion_matrix.tolist(),
        }


def evaluate_scores(y_true, y_proba) -> EvaluationResult:
    """ROC/AUC over all thresholds; precision/recall/F1 at the fixed 0.5 cut."""
    y_true = np.asarray(y_true).astype(int)
    y_proba = np.asarray(y_proba).astype(float)

    if len(np.unique(y_true)) < 2:
        raise EvaluationError(
            f"AUC is undefined: test set contains only label {np.unique(y_true).tolist()}"
        )

    fpr, tpr, thresholds = roc_curve(y_true, y_proba, pos_label=1)
    y_pred = (y_proba >= DECISION_THRESHOLD).astype(int)

    return EvaluationResult(
        auc=float(roc_auc_score(y_true, y_proba)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        confusion_matrix=confusion_matrix(y_true, y_pred, labels=[0, 1]),
        fpr=fpr,
        tpr=tpr,
        thresholds=thresholds,
    )


def evaluate(model: TrainedModel, test_set: Dataset) -> EvaluationResult:
    algorithm = get_algorithm(model.algorithm)
    scores = algorithm.score_probabilities(model, test_set.features(model.features))
    return evaluate_scores(test_set.labels, scores)


class Evaluator:
    """Save evaluation metrics as JSON and confusion matrices as heatmaps."""

    def __init__(self, metrics_path: str, figures_dir: str = "artifacts", verbose: bool = True):
        self.metrics_path = metrics_path
        self.figures_dir = figures_dir
        self.verbose = verbose
        self.logger = get_logger(self.__class__.__name__)

    def plot_confusion_matrix(self, result: EvaluationResult, name: str, normalize: bool = True) -> str:
        """Plot confusion matrix and save to figures_dir. Returns saved path."""
        cm = result.confusion_matrix

        if normalize:
            cm = cm.astype(float)
            row_sums = cm.sum(axis=1, keepdims=True)
            row_sums[row_sums == 0] = 1.0
            cm = cm / row_sums

        plt.figure(figsize=(6, 5))
        sns.heatmap(
            cm,
            annot=True,
            fmt=".2f" if normalize else "d",
            cmap="Blues",
            xticklabels=["Free", "Adopter"],
            yticklabels=["Free", "Adopter"],
        )
        plt.xlabel("Predicted")
        plt.ylabel("Actual")
        plt.title(f"Confusion Matrix: {name}" + (" (Normalized)" if normalize else ""))

        os.makedirs(self.figures_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(self.figures_dir, f"confusion_matrix_{name}_{timestamp}.png")

        plt.tight_layout()
        plt.savefig(path, dpi=200)
        plt.close()

        if self.verbose:
            self.logger.info(f"Saved confusion matrix: {path}")

        return path

    def log_result(self, name: str, result: EvaluationResult) -> None:
        tn, fp, fn, tp = result.confusion_matrix.ravel()
        self.logger.info(
            f"{name}: AUC={result.auc:.4f} precision={result.precision:.4f} "
            f"recall={result.recall:.4f} F1={result.f1:.4f} "
            f"[TN={tn} FP={fp} FN={fn} TP={tp}]"
        )

    def save_metrics(self, report: Mapping[str, Any]) -> str:
        """Write a report (EvaluationResults are flattened) to metrics_path as JSON."""

        def _encode(value):
            if isinstance(value, EvaluationResult):
                return value.as_dict()
            if isinstance(value, np.ndarray):
                return value.tolist()
            if isinstance(value, np.generic):
                return value.item()
            raise TypeError(f"Cannot serialize {type(value).__name__}")

        directory = os.path.dirname(self.metrics_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.metrics_path, "w") as f:
            json.dump(report, f, indent=4, default=_encode)

        if self.verbose:
            self.logger.info(f"Saved metrics: {self.metrics_path}")
        return self.metrics_path
