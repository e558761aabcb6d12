"""Order-preserving holdout (train/test) splitting."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from tableflow.data.dataset import Dataset
from tableflow.data.table import Table
from tableflow.errors import InvalidArgumentError


def _check_ratio(test_ratio: float) -> float:
    try:
        ratio = float(test_ratio)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"test_ratio must be a number, got {test_ratio!r}") from None
    # NaN fails both comparisons
    if not (0.0 <= ratio <= 1.0):
        raise InvalidArgumentError(f"test_ratio must be in [0.0, 1.0], got {test_ratio}")
    return ratio


def _round_half_up(x: float) -> int:
    # x is never negative here; round() would round half to even
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class HoldoutSplit:
    """
    Sizes of a contiguous train/test split over ``n`` rows.

    Rows ``[0, train_size)`` are train and ``[train_size, n)`` are test.
    """

    n: int
    train_size: int
    test_size: int

    @property
    def train_indices(self) -> np.ndarray:
        return np.arange(0, self.train_size, dtype=np.int64)

    @property
    def test_indices(self) -> np.ndarray:
        return np.arange(self.train_size, self.n, dtype=np.int64)

    def to_dict(self) -> Dict[str, Any]:
        return {"n": self.n, "train_size": self.train_size, "test_size": self.test_size}


def holdout_split(n: int, test_ratio: float) -> HoldoutSplit:
    """
    Compute train/test sizes for ``n`` rows.

    ``test_size`` is ``n * test_ratio`` rounded half away from zero and
    clamped to ``[0, n]``; ``train_size`` is the remainder.

    Parameters
    ----------
    n : int
        Number of rows
    test_ratio : float
        Fraction of rows for the test partition, in ``[0.0, 1.0]``

    Returns
    -------
    HoldoutSplit

    Raises
    ------
    InvalidArgumentError
        If ``test_ratio`` is outside ``[0.0, 1.0]`` or NaN, or ``n`` is negative

    Examples
    --------
    >>> holdout_split(10, 0.2)
    HoldoutSplit(n=10, train_size=8, test_size=2)
    >>> holdout_split(5, 0.5).test_size
    3
    """
    ratio = _check_ratio(test_ratio)
    if n < 0:
        raise InvalidArgumentError(f"n must be non-negative, got {n}")

    test_size = min(max(_round_half_up(n * ratio), 0), n)
    return HoldoutSplit(n=n, train_size=n - test_size, test_size=test_size)


def train_test_split(
    features: Table,
    target: Union[pd.Series, Sequence[Any]],
    test_ratio: float,
) -> Tuple[Table, Table, pd.Series, pd.Series]:
    """
    Split features and target into contiguous train and test partitions.

    The first ``train_size`` rows go to train and the rest to test, in the
    current row order; nothing is shuffled here. Shuffle the dataset first
    for a random split.

    Parameters
    ----------
    features : Table
        Feature columns
    target : pd.Series
        Target values, one per feature row
    test_ratio : float
        Fraction of rows for the test partition, in ``[0.0, 1.0]``

    Returns
    -------
    X_train, X_test : Table
    y_train, y_test : pd.Series
        Target partitions with a fresh RangeIndex and the target's name

    Raises
    ------
    InvalidArgumentError
        If ``test_ratio`` is invalid or the row counts differ
    """
    ratio = _check_ratio(test_ratio)

    y = target if isinstance(target, pd.Series) else pd.Series(list(target))
    n = features.height()
    if len(y) != n:
        raise InvalidArgumentError(
            f"Features have {n} rows but target has {len(y)} values"
        )

    split = holdout_split(n, ratio)
    X_train = features.slice(0, split.train_size)
    X_test = features.slice(split.train_size, split.test_size)
    y_train = y.iloc[: split.train_size].reset_index(drop=True)
    y_test = y.iloc[split.train_size :].reset_index(drop=True)
    return X_train, X_test, y_train, y_test


def split_dataset(dataset: Dataset, test_ratio: float) -> Tuple[Dataset, Dataset]:
    """
    Split a whole dataset into train and test datasets.

    Both results are new datasets whose ``parent_id`` is ``dataset.id``.
    """
    split = holdout_split(dataset.height(), test_ratio)
    table = dataset.table
    train = Dataset(table.slice(0, split.train_size), parent_id=dataset.id)
    test = Dataset(table.slice(split.train_size, split.test_size), parent_id=dataset.id)
    return train, test
