"""Train/test splitting utilities."""

from tableflow.splitting.holdout import (
    HoldoutSplit,
    holdout_split,
    train_test_split,
    split_dataset,
)

__all__ = [
    "HoldoutSplit",
    "holdout_split",
    "train_test_split",
    "split_dataset",
]
