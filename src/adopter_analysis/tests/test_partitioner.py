import numpy as np
import pandas as pd
import pytest

from adopter_analysis.exceptions import ConfigError
from adopter_analysis.partitioner import (
    k_fold_indices,
    k_fold_splits,
    stratified_split,
    stratified_three_way_split,
)

from conftest import make_dataset


def test_stratified_split_small_minority_counts(small_dataset):
    train, test = stratified_split(small_dataset, train_fraction=0.7, seed=1)

    assert len(train) == 70 and len(test) == 30
    assert train.positive_count in (3, 4)
    assert test.positive_count in (1, 2)
    assert train.positive_count + test.positive_count == 5


def test_stratified_split_preserves_positive_fraction(medium_dataset):
    train, test = stratified_split(medium_dataset, train_fraction=0.7, seed=5)
    full = medium_dataset.positive_fraction
    assert abs(train.positive_fraction - full) < 0.01
    assert abs(test.positive_fraction - full) < 0.01


def test_stratified_split_is_deterministic(medium_dataset):
    a_train, a_test = stratified_split(medium_dataset, 0.7, seed=9)
    b_train, b_test = stratified_split(medium_dataset, 0.7, seed=9)
    pd.testing.assert_frame_equal(a_train.frame, b_train.frame)
    pd.testing.assert_frame_equal(a_test.frame, b_test.frame)


def test_stratified_split_rejects_bad_fraction(medium_dataset):
    with pytest.raises(ConfigError):
        stratified_split(medium_dataset, 1.0, seed=0)


def test_three_way_split_is_disjoint_and_exhaustive():
    dataset = make_dataset(500, 100, seed=2)
    # tag rows so membership can be traced after re-indexing
    frame = dataset.frame.assign(row_id=np.arange(len(dataset)))
    dataset = dataset.with_frame(frame)

    train, validation, test = stratified_three_way_split(dataset, 0.6, 0.2, seed=4)

    ids = [set(part.frame["row_id"]) for part in (train, validation, test)]
    assert not ids[0] & ids[1] and not ids[0] & ids[2] and not ids[1] & ids[2]
    assert ids[0] | ids[1] | ids[2] == set(range(500))
    assert (len(train), len(validation), len(test)) == (300, 100, 100)
    for part in (train, validation, test):
        assert abs(part.positive_fraction - 0.2) < 0.02


def test_three_way_split_requires_room_for_test(medium_dataset):
    with pytest.raises(ConfigError):
        stratified_three_way_split(medium_dataset, 0.7, 0.3, seed=0)


def test_k_fold_indices_partition_dataset(medium_dataset):
    folds = k_fold_indices(medium_dataset, k=5, seed=3)

    assert len(folds) == 5
    combined = np.concatenate(folds)
    assert len(combined) == len(medium_dataset)
    assert set(combined.tolist()) == set(range(len(medium_dataset)))
    for fold in folds:
        frac = medium_dataset.labels[fold].mean()
        assert abs(frac - medium_dataset.positive_fraction) < 0.02


def test_k_fold_splits_train_is_complement(medium_dataset):
    for train, test in k_fold_splits(medium_dataset, k=4, seed=0):
        assert len(train) + len(test) == len(medium_dataset)


def test_k_fold_rejects_k_below_two(medium_dataset):
    with pytest.raises(ConfigError):
        k_fold_indices(medium_dataset, k=1, seed=0)
