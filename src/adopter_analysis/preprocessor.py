from __future__ import annotations

from typing import Optional

import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from .utils.logger import get_logger


class Preprocessor:
    """Builds a ColumnTransformer for numeric/nominal features."""

    def __init__(self, use_scaler: bool = False, verbose: bool = False):
        """
        Parameters
        ----------
        use_scaler:
            Whether to standardize numeric features. Distance- and
            gradient-based models (kNN, logistic regression) need it; trees
            and naive Bayes do not.
        verbose:
            If True, logs detected feature groups.
        """
        self.use_scaler = use_scaler
        self.verbose = verbose
        self.logger = get_logger(self.__class__.__name__)
        self.transformer: Optional[ColumnTransformer] = None

    def build(self, X: pd.DataFrame) -> ColumnTransformer:
        """Build (but do not fit) the preprocessing transformer.

        Columns with pandas ``category`` dtype are nominal and one-hot
        encoded as unordered classes; everything else is numeric.
        """
        nominal_cols = X.select_dtypes(include=["category", "object"]).columns.tolist()
        numeric_cols = [col for col in X.columns if col not in nominal_cols]

        num_step = StandardScaler() if self.use_scaler else "passthrough"
        self.transformer = ColumnTransformer(
            transformers=[
                ("num", num_step, numeric_cols),
                ("nom", OneHotEncoder(handle_unknown="ignore", sparse_output=False), nominal_cols),
            ],
            remainder="drop",
        )

        if self.verbose:
            self.logger.info(
                f"Columns detected: numeric={len(numeric_cols)}, nominal={len(nominal_cols)}"
            )

        return self.transformer
