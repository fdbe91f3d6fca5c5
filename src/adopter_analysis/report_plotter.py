import os
from typing import Mapping

import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.tree import plot_tree

from .algorithms import TrainedModel
from .evaluator import EvaluationResult
from .exceptions import ConfigError
from .utils.logger import get_logger


class ReportPlotter:
    """Render ROC comparisons, feature-count sweeps and tree diagrams to PNG."""

    def __init__(self, output_dir: str = "artifacts", verbose: bool = True):
        self.output_dir = output_dir
        self.verbose = verbose
        self.logger = get_logger(self.__class__.__name__)
        os.makedirs(self.output_dir, exist_ok=True)

    def _save(self, filename: str) -> str:
        path = os.path.join(self.output_dir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=200)
        plt.close()
        if self.verbose:
            self.logger.info(f"Saved plot: {path}")
        return path

    def roc_curves(self, results: Mapping[str, EvaluationResult], filename: str = "roc_curves.png") -> str:
        plt.figure(figsize=(7, 6))
        for name, result in results.items():
            sns.lineplot(
                x=result.fpr,
                y=result.tpr,
                label=f"{name} (AUC={result.auc:.3f})",
                estimator=None,
                sort=False,
            )
        plt.plot([0, 1], [0, 1], linestyle="--", color="grey")
        plt.xlabel("False positive rate")
        plt.ylabel("True positive rate")
        plt.title("ROC Curves")
        plt.legend(loc="lower right")
        return self._save(filename)

    def feature_sweep(self, sweep, filename: str = "feature_count_sweep.png") -> str:
        counts = [n for n, _ in sweep]
        aucs = [auc for _, auc in sweep]
        plt.figure(figsize=(7, 5))
        sns.lineplot(x=counts, y=aucs, marker="o")
        plt.xlabel("Number of top-ranked features")
        plt.ylabel("Validation AUC")
        plt.title("Feature Count Sweep")
        return self._save(filename)

    def decision_tree(self, model: TrainedModel, filename: str = "decision_tree.png") -> str:
        if model.algorithm != "decision_tree":
            raise ConfigError(f"Cannot draw a tree for '{model.algorithm}' model")

        prep = model.estimator.named_steps["prep"]
        tree = model.estimator.named_steps["clf"]
        plt.figure(figsize=(16, 9))
        plot_tree(
            tree,
            feature_names=list(prep.get_feature_names_out()),
            class_names=["free", "adopter"],
            filled=True,
            rounded=True,
            fontsize=7,
        )
        return self._save(filename)
