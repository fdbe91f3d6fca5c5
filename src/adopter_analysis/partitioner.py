import numpy as np
from sklearn.model_selection import StratifiedKFold, train_test_split

from .dataset import Dataset
from .exceptions import ConfigError


def _check_fraction(name: str, value: float) -> None:
    if not 0.0 < value < 1.0:
        raise ConfigError(f"{name} must be strictly between 0 and 1, got {value}")


def stratified_split(
    dataset: Dataset,
    train_fraction: float,
    seed: int,
) -> tuple[Dataset, Dataset]:
    """Split into (train, test) preserving the label ratio. Deterministic given seed."""
    _check_fraction("train_fraction", train_fraction)
    positions = np.arange(len(dataset))
    train_idx, test_idx = train_test_split(
        positions,
        train_size=train_fraction,
        stratify=dataset.labels,
        random_state=seed,
    )
    return dataset.subset(np.sort(train_idx)), dataset.subset(np.sort(test_idx))


def stratified_three_way_split(
    dataset: Dataset,
    train_fraction: float,
    validation_fraction: float,
    seed: int,
) -> tuple[Dataset, Dataset, Dataset]:
    """Split into (train, validation, test); test gets whatever remains.

    Fractions are of the full dataset. Both cuts are stratified on the label.
    """
    _check_fraction("train_fraction", train_fraction)
    _check_fraction("validation_fraction", validation_fraction)
    if train_fraction + validation_fraction >= 1.0:
        raise ConfigError(
            "train_fraction + validation_fraction must leave room for a test set, "
            f"got {train_fraction} + {validation_fraction}"
        )

    train, rest = stratified_split(dataset, train_fraction, seed)
    # validation share of what is left after taking the training part
    relative = validation_fraction / (1.0 - train_fraction)
    validation, test = stratified_split(rest, relative, seed)
    return train, validation, test


def k_fold_indices(dataset: Dataset, k: int, seed: int) -> list[np.ndarray]:
    """Held-out row positions for each of k stratified folds.

    The returned arrays partition ``range(len(dataset))``.
    """
    if k < 2:
        raise ConfigError(f"k must be at least 2, got {k}")
    skf = StratifiedKFold(n_splits=k, shuffle=True, random_state=seed)
    positions = np.arange(len(dataset))
    return [np.sort(val_idx) for _, val_idx in skf.split(positions, dataset.labels)]


def k_fold_splits(dataset: Dataset, k: int, seed: int) -> list[tuple[Dataset, Dataset]]:
    """(train, test) pairs where test is fold i and train is everything else."""
    folds = k_fold_indices(dataset, k, seed)
    all_positions = np.arange(len(dataset))
    splits = []
    for held_out in folds:
        train_idx = np.setdiff1d(all_positions, held_out, assume_unique=True)
        splits.append((dataset.subset(train_idx), dataset.subset(held_out)))
    return splits
