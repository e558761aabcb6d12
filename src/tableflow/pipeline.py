"""End-to-end data preparation: load, shuffle, split."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

import pandas as pd

from tableflow.config import PipelineConfig
from tableflow.data.dataset import Dataset
from tableflow.data.loaders import load_dataset
from tableflow.data.table import Table
from tableflow.loading.batch_loader import BatchLoader
from tableflow.splitting.holdout import train_test_split

logger = logging.getLogger(__name__)


@dataclass
class PreparedData:
    """
    Output of :func:`prepare_dataset`.

    Attributes
    ----------
    dataset : Dataset
        The (possibly shuffled) dataset the partitions were cut from
    X_train, X_test : Table
        Feature partitions
    y_train, y_test : pd.Series
        Target partitions
    """

    dataset: Dataset
    X_train: Table
    X_test: Table
    y_train: pd.Series
    y_test: pd.Series

    @property
    def n_train(self) -> int:
        return self.X_train.height()

    @property
    def n_test(self) -> int:
        return self.X_test.height()

    def summary(self) -> Dict[str, Any]:
        """Sizes and identity as a JSON-friendly dict."""
        return {
            "dataset_id": str(self.dataset.id),
            "timestamp": self.dataset.timestamp,
            "n_rows": self.dataset.height(),
            "n_features": self.X_train.width(),
            "feature_columns": self.X_train.columns,
            "target_col": self.y_train.name,
            "n_train": self.n_train,
            "n_test": self.n_test,
        }


def prepare_dataset(config: PipelineConfig) -> PreparedData:
    """
    Load a dataset and cut it into train/test feature and target partitions.

    Steps: load the input file, shuffle (seeded when ``config.seed`` is
    set) unless ``config.shuffle`` is off, separate the target column,
    then split contiguously by ``config.test_ratio``.

    Parameters
    ----------
    config : PipelineConfig
        Pipeline settings

    Returns
    -------
    PreparedData

    Raises
    ------
    DataPathNotFoundError
        If the input file does not exist
    NotFoundError
        If the target column is missing
    """
    logger.info("Preparing dataset:")
    logger.info(f"  Input: {config.input_path}")
    logger.info(f"  Target: {config.target_col}")
    logger.info(f"  Test ratio: {config.test_ratio}")

    dataset = load_dataset(config.data_spec())
    logger.info(f"Loaded dataset {dataset.id} at {dataset.timestamp}: {dataset.height()} rows")

    if config.shuffle:
        dataset = dataset.shuffle(seed=config.seed)
        seed_note = f"seed={config.seed}" if config.seed is not None else "unseeded"
        logger.info(f"Shuffled into dataset {dataset.id} ({seed_note})")

    X, y = dataset.split_feature_target(config.target_col)
    logger.info(f"Features: {X.width()} columns; target: '{config.target_col}'")

    X_train, X_test, y_train, y_test = train_test_split(X, y, config.test_ratio)
    logger.info(f"Split: {X_train.height()} train / {X_test.height()} test rows")

    if X_train.height() == 0 or X_test.height() == 0:
        logger.warning(
            f"One partition is empty (train={X_train.height()}, test={X_test.height()})"
        )

    return PreparedData(
        dataset=dataset,
        X_train=X_train,
        X_test=X_test,
        y_train=y_train,
        y_test=y_test,
    )


def iter_batches(
    table: Table,
    batch_size: int,
    shuffle: bool = False,
    seed: Optional[int] = None,
) -> Iterator[Table]:
    """
    Iterate one pass of batches over ``table``.

    Examples
    --------
    >>> [b.height() for b in iter_batches(Table({"x": range(5)}), 2)]
    [2, 2, 1]
    """
    return iter(BatchLoader(Dataset(table), batch_size, shuffle=shuffle, seed=seed))
