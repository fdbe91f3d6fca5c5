import numpy as np
import pandas as pd
from sklearn.metrics import mutual_info_score

from .dataset import Dataset


class FeatureRanker:
    """Univariate information-gain ranking of features against the label.

    Nominal and low-cardinality numeric columns are used as-is; other numeric
    columns are cut into equal-frequency bins before computing the gain.
    """

    def __init__(self, n_bins: int = 10):
        self.n_bins = n_bins

    def _discretize(self, values: pd.Series) -> np.ndarray:
        if isinstance(values.dtype, pd.CategoricalDtype) or values.nunique() <= self.n_bins:
            return pd.factorize(values)[0]
        return pd.qcut(values, q=self.n_bins, labels=False, duplicates="drop").to_numpy()

    def information_gain(self, values: pd.Series, labels: np.ndarray) -> float:
        """H(label) - H(label | feature), in nats."""
        if values.nunique() <= 1:
            return 0.0
        return float(mutual_info_score(labels, self._discretize(values)))

    def rank(self, train_set: Dataset) -> list[tuple[str, float]]:
        labels = train_set.labels
        scores = [
            (name, self.information_gain(train_set.frame[name], labels))
            for name in train_set.feature_names
        ]
        # sorted() is stable, so equal scores keep column order
        return sorted(scores, key=lambda item: -item[1])


def rank_features(train_set: Dataset, n_bins: int = 10) -> list[tuple[str, float]]:
    return FeatureRanker(n_bins=n_bins).rank(train_set)


def top_features(ranking: list[tuple[str, float]], n: int) -> list[str]:
    return [name for name, _ in ranking[:n]]
