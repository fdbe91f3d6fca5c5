from dataclasses import dataclass
from typing import Iterable, Sequence

import pandas as pd
from joblib import Parallel, delayed

from .algorithms import DecisionTreeAlgorithm
from .dataset import Dataset
from .evaluator import evaluate
from .exceptions import ConfigError
from .utils.logger import get_logger


@dataclass(frozen=True)
class GridPoint:
    minsplit: int
    maxdepth: int
    auc: float


@dataclass(frozen=True)
class SearchResult:
    """All grid points in iteration order plus the selected one."""
    points: tuple[GridPoint, ...]
    best: GridPoint

    @property
    def best_params(self) -> dict[str, int]:
        return {"minsplit": self.best.minsplit, "maxdepth": self.best.maxdepth}

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [(p.minsplit, p.maxdepth, p.auc) for p in self.points],
            columns=["minsplit", "maxdepth", "auc"],
        )


def _score_point(
    train_set: Dataset,
    validation_set: Dataset,
    features: Sequence[str],
    minsplit: int,
    maxdepth: int,
    seed: int,
) -> GridPoint:
    algorithm = DecisionTreeAlgorithm()
    model = algorithm.train(
        train_set.features(features),
        train_set.labels,
        {"minsplit": minsplit, "maxdepth": maxdepth, "random_state": seed},
    )
    return GridPoint(minsplit, maxdepth, evaluate(model, validation_set).auc)


class GridSearch:
    """Exhaustive search over decision-tree minsplit x maxdepth by validation AUC."""

    def __init__(
        self,
        minsplit_values: Iterable[int] = range(2, 51, 2),
        maxdepth_values: Iterable[int] = range(3, 11),
        n_jobs: int = 1,
    ):
        self.minsplit_values = list(minsplit_values)
        self.maxdepth_values = list(maxdepth_values)
        if not self.minsplit_values or not self.maxdepth_values:
            raise ConfigError(
                f"Grid is empty: minsplit={self.minsplit_values}, maxdepth={self.maxdepth_values}"
            )
        self.n_jobs = n_jobs
        self.logger = get_logger(self.__class__.__name__)

    def combinations(self) -> list[tuple[int, int]]:
        """Iteration order: minsplit ascending, then maxdepth ascending."""
        return [(ms, md) for ms in self.minsplit_values for md in self.maxdepth_values]

    @staticmethod
    def select(points: Sequence[GridPoint]) -> GridPoint:
        """First point with strictly maximal AUC."""
        best = points[0]
        for point in points[1:]:
            if point.auc > best.auc:
                best = point
        return best

    def search(
        self,
        train_set: Dataset,
        validation_set: Dataset,
        features: Sequence[str],
        seed: int,
    ) -> SearchResult:
        train_set.require_features(features)
        grid = self.combinations()
        self.logger.info(
            f"Starting grid search ({len(grid)} combinations, n_jobs={self.n_jobs})"
        )

        # Parallel returns results in submission order
        points = Parallel(n_jobs=self.n_jobs)(
            delayed(_score_point)(train_set, validation_set, features, ms, md, seed)
            for ms, md in grid
        )
        best = self.select(points)

        self.logger.info(
            f"Best validation ROC-AUC: {best.auc:.4f} "
            f"(minsplit={best.minsplit}, maxdepth={best.maxdepth})"
        )
        return SearchResult(tuple(points), best)
