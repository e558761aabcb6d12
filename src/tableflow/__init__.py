"""
tableflow: tabular dataset loading and preparation for ML.

This package provides:
- A format-agnostic ``Table`` with CSV, JSON and Parquet codecs
- ``Dataset`` identity, seeded shuffling and feature/target separation
- Order-preserving train/test splitting
- A stateful ``BatchLoader`` for mini-batch iteration
- A Typer CLI (``tableflow``)
"""

__version__ = "0.1.0"

from tableflow.errors import (
    TableflowError,
    NotFoundError,
    DataPathNotFoundError,
    OutOfRangeError,
    InvalidArgumentError,
    DecodeError,
    EncodeError,
)
from tableflow.data import Table, Dataset, DataFormat, DataSpec, load_table, load_dataset, save_table
from tableflow.splitting import train_test_split, split_dataset
from tableflow.loading import BatchLoader, LoaderState
from tableflow.config import PipelineConfig
from tableflow.pipeline import prepare_dataset, iter_batches, PreparedData

__all__ = [
    "__version__",
    # Errors
    "TableflowError",
    "NotFoundError",
    "DataPathNotFoundError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "DecodeError",
    "EncodeError",
    # Data
    "Table",
    "Dataset",
    "DataFormat",
    "DataSpec",
    "load_table",
    "load_dataset",
    "save_table",
    # Splitting and batching
    "train_test_split",
    "split_dataset",
    "BatchLoader",
    "LoaderState",
    # Pipeline
    "PipelineConfig",
    "PreparedData",
    "prepare_dataset",
    "iter_batches",
]
