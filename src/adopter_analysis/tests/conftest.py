import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from adopter_analysis.dataset import Dataset


def make_dataset(n: int, n_pos: int, seed: int = 0) -> Dataset:
    """Synthetic user table; positives score higher on ``songsListened``."""
    rng = np.random.default_rng(seed)
    labels = np.zeros(n, dtype=int)
    labels[rng.choice(n, size=n_pos, replace=False)] = 1
    frame = pd.DataFrame(
        {
            "age": rng.integers(15, 60, size=n),
            "friend_cnt": rng.poisson(20, size=n),
            "songsListened": rng.normal(1000, 200, size=n) + labels * 400,
            "male": pd.Categorical(rng.integers(0, 2, size=n)),
            "adopter": labels,
        }
    )
    return Dataset(frame, "adopter", ("male",))


@pytest.fixture
def small_dataset() -> Dataset:
    return make_dataset(100, 5, seed=1)


@pytest.fixture
def medium_dataset() -> Dataset:
    return make_dataset(400, 80, seed=3)


@pytest.fixture
def separable_dataset() -> Dataset:
    """One feature (``signal``) perfectly separates the classes."""
    rng = np.random.default_rng(11)
    n = 400
    labels = np.array([0, 1] * (n // 2))
    frame = pd.DataFrame(
        {
            "signal": labels * 10.0 + rng.uniform(0, 1, size=n),
            "noise": rng.normal(size=n),
            "adopter": labels,
        }
    )
    return Dataset(frame, "adopter", ())


@pytest.fixture
def raw_csv(tmp_path):
    """Write a small user CSV in the production schema, return its path."""
    df = pd.DataFrame(
        {
            "net_user": [f"user_{i}" for i in range(6)],
            "age": [22, 31, 19, 45, 27, 38],
            "male": [1, 0, 1, 1, 0, 0],
            "friend_cnt": [10, 3, 55, 8, 12, 0],
            "songsListened": [1200, 300, 5400, 80, 990, 15],
            "good_country": [1, 1, 0, 1, 0, 1],
            "delta_friend_cnt": [1, 0, -2, 0, 3, 0],
            "adopter": [0, 0, 1, 0, 1, 0],
        }
    )
    path = tmp_path / "users.csv"
    df.to_csv(path, index=False)
    return path
