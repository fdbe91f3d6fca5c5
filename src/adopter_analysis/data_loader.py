import os
from typing import Optional, Sequence

import pandas as pd

from .dataset import Dataset
from .exceptions import LoadError
from .utils.logger import get_logger


class DataLoader:
    """Loads the user-behaviour CSV, validates it, and tags nominal columns."""

    def __init__(
        self,
        path: str,
        target_col: str = "adopter",
        id_col: Optional[str] = "net_user",
        nominal_cols: Sequence[str] = ("male", "good_country"),
    ):
        self.path = path
        self.target_col = target_col
        self.id_col = id_col
        self.nominal_cols = tuple(nominal_cols)
        self.logger = get_logger(self.__class__.__name__)

    def _read(self) -> pd.DataFrame:
        if not os.path.isfile(self.path):
            raise LoadError(f"Dataset file not found: {self.path}")
        try:
            return pd.read_csv(self.path)
        except pd.errors.EmptyDataError as exc:
            raise LoadError(f"Dataset file is empty: {self.path}") from exc
        except pd.errors.ParserError as exc:
            raise LoadError(f"Malformed dataset file {self.path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise LoadError(f"Dataset file {self.path} is not valid UTF-8 text: {exc}") from exc

    def _validate(self, df: pd.DataFrame) -> None:
        required = [self.target_col, *self.nominal_cols]
        if self.id_col:
            required.append(self.id_col)
        missing_cols = [c for c in required if c not in df.columns]
        if missing_cols:
            raise LoadError(f"Required columns missing from {self.path}: {missing_cols}")

        if df.empty:
            raise LoadError(f"Dataset {self.path} has no rows")

        na_counts = df.isna().sum()
        na_counts = na_counts[na_counts > 0]
        if not na_counts.empty:
            raise LoadError(
                f"Missing values in {self.path}: "
                + ", ".join(f"{col}={n}" for col, n in na_counts.items())
            )

        labels = set(pd.unique(df[self.target_col]))
        if not labels.issubset({0, 1}):
            raise LoadError(
                f"Label column '{self.target_col}' must be 0/1, found {sorted(map(str, labels))}"
            )

    def _coerce(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()
        numeric_cols = [
            c for c in out.columns
            if c not in self.nominal_cols and c != self.id_col
        ]
        for col in numeric_cols:
            try:
                out[col] = pd.to_numeric(out[col])
            except (ValueError, TypeError) as exc:
                raise LoadError(f"Non-numeric value in column '{col}': {exc}") from exc

        out[self.target_col] = out[self.target_col].astype(int)
        for col in self.nominal_cols:
            out[col] = pd.Categorical(out[col], ordered=False)
        return out

    def load(self) -> Dataset:
        df = self._read()
        self._validate(df)
        df = self._coerce(df)
        if self.id_col:
            df = df.drop(columns=[self.id_col])

        dataset = Dataset(df.reset_index(drop=True), self.target_col, self.nominal_cols)
        self.logger.info(
            f"Loaded dataset: {len(dataset):,} rows x {len(dataset.feature_names)} features "
            f"(positive rate {dataset.positive_fraction:.3%})"
        )
        return dataset
