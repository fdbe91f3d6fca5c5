import numpy as np
from imblearn.over_sampling import RandomOverSampler

from .dataset import Dataset
from .exceptions import ConfigError
from .utils.logger import get_logger


class Balancer:
    """
    Random over-sampling of the minority class up to a target proportion.

    Minority rows are duplicated verbatim (sampled with replacement); majority
    rows pass through untouched and no synthetic feature vectors are created.

    Example:
        balancer = Balancer(target_minority_fraction=0.33)
        balanced = balancer.oversample(train, seed=7)
    """

    def __init__(self, target_minority_fraction: float = 0.33):
        if not 0.0 < target_minority_fraction < 1.0:
            raise ConfigError(
                "target_minority_fraction must be strictly between 0 and 1, "
                f"got {target_minority_fraction}"
            )
        self.target_minority_fraction = target_minority_fraction
        self.logger = get_logger(self.__class__.__name__)

    def oversample(self, train_set: Dataset, seed: int) -> Dataset:
        y = train_set.labels
        classes, counts = np.unique(y, return_counts=True)

        if len(classes) < 2:
            self.logger.warning("Only one class present. Skipping balancing.")
            return train_set

        n_minority = int(counts.min())
        current = n_minority / len(y)
        target = self.target_minority_fraction
        if current >= target:
            self.logger.info(
                f"Minority fraction {current:.3f} already >= target {target:.3f}; unchanged"
            )
            return train_set

        # imblearn expresses the target as minority/majority after resampling
        sampler = RandomOverSampler(
            sampling_strategy=target / (1.0 - target),
            random_state=seed,
        )
        positions = np.arange(len(y)).reshape(-1, 1)
        sampler.fit_resample(positions, y)
        balanced = train_set.subset(sampler.sample_indices_)

        self.logger.info(
            f"Oversampled minority {n_minority:,} -> "
            f"{len(balanced) - (len(y) - n_minority):,} "
            f"({len(balanced):,} rows, target fraction {target:.2f})"
        )
        return balanced


def oversample(train_set: Dataset, target_minority_fraction: float, seed: int) -> Dataset:
    """Functional shortcut for ``Balancer(target).oversample(train_set, seed)``."""
    return Balancer(target_minority_fraction).oversample(train_set, seed)
