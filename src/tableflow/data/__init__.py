"""
Tabular data layer for tableflow.

This module provides:
- ``Table``: an immutable-by-convention column table backed by pandas
- ``Dataset``: a table with identity, shuffling and feature/target split
- Loaders for CSV, JSON and Parquet files (via :mod:`tableflow.formats`)

Example usage:
    from tableflow.data import load_dataset

    dataset = load_dataset(Path("data/security_dataset.csv"), target_col="target")
    X, y = dataset.shuffle(seed=42).split_feature_target("target")
"""

from tableflow.data.spec import DataSpec, DataFormat
from tableflow.data.table import Table
from tableflow.data.dataset import Dataset
from tableflow.data.random_source import (
    RandomSource,
    NumpyRandomSource,
    default_random_source,
    set_default_random_source,
    using_random_source,
)
from tableflow.data.loaders import (
    load_table,
    load_dataset,
    save_table,
    save_dataset,
    infer_format,
)
from tableflow.data.validation import (
    validate_columns,
    validate_column_names,
    generate_missingness_report,
)

__all__ = [
    # Core types
    "DataSpec",
    "DataFormat",
    "Table",
    "Dataset",
    # Randomness
    "RandomSource",
    "NumpyRandomSource",
    "default_random_source",
    "set_default_random_source",
    "using_random_source",
    # Loaders
    "load_table",
    "load_dataset",
    "save_table",
    "save_dataset",
    "infer_format",
    # Validation
    "validate_columns",
    "validate_column_names",
    "generate_missingness_report",
]
