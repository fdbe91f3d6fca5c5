from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np

from .algorithms import ClassificationAlgorithm, TrainedModel, get_algorithm
from .balancer import Balancer
from .dataset import Dataset
from .evaluator import EvaluationResult, evaluate
from .feature_ranker import top_features
from .partitioner import k_fold_splits
from .utils.logger import get_logger


@dataclass(frozen=True)
class CrossValidationResult:
    fold_aucs: tuple[float, ...]

    @property
    def mean_auc(self) -> float:
        return float(np.mean(self.fold_aucs))

    @property
    def std_auc(self) -> float:
        return float(np.std(self.fold_aucs))


class ModelTrainer:
    """
    Trains one algorithm on a fixed feature subset.

    Provides:
      - fit: train on a (balanced) training set
      - cross_validate: stratified k-fold AUC, balancing only the training folds
    """

    def __init__(
        self,
        algorithm: Union[ClassificationAlgorithm, str],
        hyperparameters: Optional[Mapping[str, Any]] = None,
        balancer: Optional[Balancer] = None,
        n_splits: int = 5,
    ):
        self.algorithm = get_algorithm(algorithm) if isinstance(algorithm, str) else algorithm
        self.hyperparameters = dict(hyperparameters or {})
        self.balancer = balancer
        self.n_splits = n_splits
        self.logger = get_logger(self.__class__.__name__)

    def fit(self, train_set: Dataset, features: Sequence[str]) -> TrainedModel:
        return self.algorithm.train(
            train_set.features(features),
            train_set.labels,
            self.hyperparameters,
        )

    def cross_validate(
        self,
        dataset: Dataset,
        features: Sequence[str],
        seed: int,
    ) -> CrossValidationResult:
        """
        Stratified CV. Each training fold is oversampled (if a balancer is set)
        with its own seed; held-out folds are never resampled. An
        EvaluationError on any fold aborts the whole run.
        """
        dataset.require_features(features)
        fold_aucs: list[float] = []
        splits = k_fold_splits(dataset, self.n_splits, seed)

        for fold, (train_set, test_set) in enumerate(splits, start=1):
            if self.balancer is not None:
                train_set = self.balancer.oversample(train_set, seed=seed + fold)

            model = self.fit(train_set, features)
            result = evaluate(model, test_set)
            fold_aucs.append(result.auc)

            self.logger.info(f"Fold {fold}/{self.n_splits} ROC-AUC: {result.auc:.4f}")

        cv = CrossValidationResult(tuple(fold_aucs))
        self.logger.info(
            f"{self.algorithm.name} CV ROC-AUC: {cv.mean_auc:.4f} (+/- {cv.std_auc:.4f})"
        )
        return cv


def cross_validate(
    dataset: Dataset,
    algorithm: Union[ClassificationAlgorithm, str],
    features: Sequence[str],
    k: int,
    seed: int,
    target_fraction: Optional[float] = None,
    hyperparameters: Optional[Mapping[str, Any]] = None,
) -> CrossValidationResult:
    balancer = Balancer(target_fraction) if target_fraction is not None else None
    trainer = ModelTrainer(
        algorithm,
        hyperparameters=hyperparameters,
        balancer=balancer,
        n_splits=k,
    )
    return trainer.cross_validate(dataset, features, seed)


def compare_algorithms(
    train_set: Dataset,
    test_set: Dataset,
    features: Sequence[str],
    names: Sequence[str],
    hyperparameters: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> dict[str, EvaluationResult]:
    """Train each named algorithm on the same data and evaluate on test_set."""
    hyperparameters = hyperparameters or {}
    results: dict[str, EvaluationResult] = {}
    for name in names:
        trainer = ModelTrainer(name, hyperparameters=hyperparameters.get(name))
        model = trainer.fit(train_set, features)
        results[name] = evaluate(model, test_set)
    return results


def feature_count_sweep(
    train_set: Dataset,
    validation_set: Dataset,
    ranking: Sequence[tuple[str, float]],
    algorithm: Union[ClassificationAlgorithm, str],
    max_features: Optional[int] = None,
    hyperparameters: Optional[Mapping[str, Any]] = None,
) -> list[tuple[int, float]]:
    """Validation AUC for the top-1, top-2, ... ranked features.

    Only reports the curve; choosing the feature count is left to the caller.
    """
    trainer = ModelTrainer(algorithm, hyperparameters=hyperparameters)
    max_features = min(max_features or len(ranking), len(ranking))
    sweep: list[tuple[int, float]] = []
    for n in range(1, max_features + 1):
        model = trainer.fit(train_set, top_features(list(ranking), n))
        sweep.append((n, evaluate(model, validation_set).auc))
    return sweep
