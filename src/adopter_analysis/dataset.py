from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from .exceptions import ConfigError


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable view over a validated user table.

    ``frame`` holds feature columns plus the label column. Every operation
    returns a new Dataset; the wrapped frame is never modified in place.
    """
    frame: pd.DataFrame
    target_col: str = "adopter"
    nominal_cols: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def feature_names(self) -> list[str]:
        return [c for c in self.frame.columns if c != self.target_col]

    @property
    def labels(self) -> np.ndarray:
        return self.frame[self.target_col].to_numpy(dtype=int)

    @property
    def positive_count(self) -> int:
        return int(self.labels.sum())

    @property
    def positive_fraction(self) -> float:
        if len(self) == 0:
            return 0.0
        return self.positive_count / len(self)

    def features(self, columns: Sequence[str] | None = None) -> pd.DataFrame:
        """Return the feature frame, optionally restricted to ``columns``."""
        if columns is None:
            return self.frame[self.feature_names]
        self.require_features(columns)
        return self.frame[list(columns)]

    def require_features(self, columns: Sequence[str]) -> None:
        missing = [c for c in columns if c not in self.frame.columns or c == self.target_col]
        if missing:
            raise ConfigError(f"Requested feature columns not in dataset: {missing}")

    def subset(self, indices: Sequence[int] | np.ndarray) -> "Dataset":
        """Rows at the given positions, re-indexed from zero."""
        frame = self.frame.iloc[np.asarray(indices, dtype=int)].reset_index(drop=True)
        return Dataset(frame, self.target_col, self.nominal_cols)

    def with_frame(self, frame: pd.DataFrame) -> "Dataset":
        return Dataset(frame.reset_index(drop=True), self.target_col, self.nominal_cols)
