"""
Capability interface over external classifiers.

Each algorithm exposes ``train`` and ``score_probabilities``; callers pick a
variant by name through :func:`get_algorithm` and never look inside the
fitted estimator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import numpy as np
import pandas as pd
from sklearn.base import ClassifierMixin
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import GaussianNB
from sklearn.neighbors import KNeighborsClassifier
from sklearn.pipeline import Pipeline
from sklearn.tree import DecisionTreeClassifier

from .exceptions import ConfigError
from .preprocessor import Preprocessor


@dataclass(frozen=True)
class TrainedModel:
    """Fitted estimator bound to the feature subset and hyperparameters used."""
    algorithm: str
    features: tuple[str, ...]
    hyperparameters: Mapping[str, Any] = field(default_factory=dict)
    estimator: Pipeline = field(default=None, repr=False, compare=False)


class ClassificationAlgorithm(ABC):
    name: str = ""
    scale_numeric: bool = False
    default_hyperparameters: Mapping[str, Any] = {}

    @abstractmethod
    def _make_classifier(self, hyperparameters: Mapping[str, Any]) -> ClassifierMixin:
        ...

    def resolve_hyperparameters(self, hyperparameters: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        params = dict(self.default_hyperparameters)
        params.update(hyperparameters or {})
        return params

    def train(
        self,
        features: pd.DataFrame,
        labels: np.ndarray,
        hyperparameters: Optional[Mapping[str, Any]] = None,
    ) -> TrainedModel:
        params = self.resolve_hyperparameters(hyperparameters)
        transformer = Preprocessor(use_scaler=self.scale_numeric).build(features)
        estimator = Pipeline(
            steps=[
                ("prep", transformer),
                ("clf", self._make_classifier(params)),
            ]
        )
        estimator.fit(features, np.asarray(labels).astype(int))
        return TrainedModel(
            algorithm=self.name,
            features=tuple(features.columns),
            hyperparameters=params,
            estimator=estimator,
        )

    def score_probabilities(self, model: TrainedModel, features: pd.DataFrame) -> np.ndarray:
        """Positive-class (label 1) probability per row."""
        if model.algorithm != self.name:
            raise ConfigError(f"Model was trained by '{model.algorithm}', not '{self.name}'")
        missing = [c for c in model.features if c not in features.columns]
        if missing:
            raise ConfigError(f"Features used in training are absent: {missing}")

        X = features[list(model.features)]
        proba = model.estimator.predict_proba(X)
        classes = list(model.estimator.classes_)
        if 1 not in classes:
            return np.zeros(len(X), dtype=float)
        return proba[:, classes.index(1)].astype(float)


class DecisionTreeAlgorithm(ClassificationAlgorithm):
    """Entropy (information-gain) splits; ``minsplit``/``maxdepth`` bound the tree."""

    name = "decision_tree"
    default_hyperparameters = {"minsplit": 20, "maxdepth": 30, "random_state": 0}

    def _make_classifier(self, hyperparameters):
        return DecisionTreeClassifier(
            criterion="entropy",
            min_samples_split=int(hyperparameters["minsplit"]),
            max_depth=int(hyperparameters["maxdepth"]),
            random_state=hyperparameters.get("random_state"),
        )


class NaiveBayesAlgorithm(ClassificationAlgorithm):
    name = "naive_bayes"
    default_hyperparameters = {"var_smoothing": 1e-9}

    def _make_classifier(self, hyperparameters):
        return GaussianNB(var_smoothing=hyperparameters["var_smoothing"])


class KNearestNeighborsAlgorithm(ClassificationAlgorithm):
    name = "knn"
    scale_numeric = True
    default_hyperparameters = {"n_neighbors": 5}

    def _make_classifier(self, hyperparameters):
        return KNeighborsClassifier(n_neighbors=int(hyperparameters["n_neighbors"]))


class RandomForestAlgorithm(ClassificationAlgorithm):
    name = "random_forest"
    default_hyperparameters = {"n_estimators": 500, "random_state": 0, "n_jobs": 1}

    def _make_classifier(self, hyperparameters):
        return RandomForestClassifier(
            n_estimators=int(hyperparameters["n_estimators"]),
            random_state=hyperparameters.get("random_state"),
            n_jobs=hyperparameters.get("n_jobs"),
        )


class LogisticRegressionAlgorithm(ClassificationAlgorithm):
    name = "logistic_regression"
    scale_numeric = True
    default_hyperparameters = {"C": 1.0, "max_iter": 1000}

    def _make_classifier(self, hyperparameters):
        return LogisticRegression(C=hyperparameters["C"], max_iter=int(hyperparameters["max_iter"]))


ALGORITHMS: dict[str, type[ClassificationAlgorithm]] = {
    cls.name: cls
    for cls in (
        DecisionTreeAlgorithm,
        NaiveBayesAlgorithm,
        KNearestNeighborsAlgorithm,
        RandomForestAlgorithm,
        LogisticRegressionAlgorithm,
    )
}


def get_algorithm(name: str) -> ClassificationAlgorithm:
    try:
        return ALGORITHMS[name]()
    except KeyError:
        raise ConfigError(
            f"Unknown algorithm '{name}'. Available: {sorted(ALGORITHMS)}"
        ) from None
