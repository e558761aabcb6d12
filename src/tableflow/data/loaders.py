"""File loading and saving for tableflow.

This module reads and writes CSV, JSON and Parquet files through the codec
registry in :mod:`tableflow.formats`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from tableflow import formats
from tableflow.data.dataset import Dataset
from tableflow.data.spec import DataFormat, DataSpec
from tableflow.data.table import Table
from tableflow.data.validation import validate_columns
from tableflow.errors import DataPathNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def infer_format(path: PathLike) -> DataFormat:
    """
    Infer data format from file path.

    Parameters
    ----------
    path : Path
        Path to data file

    Returns
    -------
    DataFormat
        Inferred format (csv, json or parquet)

    Raises
    ------
    InvalidArgumentError
        If format cannot be inferred
    """
    return DataFormat.from_path(Path(path))


def _resolve_format(path: Path, format: Optional[Union[str, DataFormat]]) -> DataFormat:
    if format is None:
        return infer_format(path)
    return DataFormat.parse(format)


def load_table(
    path: PathLike,
    format: Optional[Union[str, DataFormat]] = None,
    columns: Optional[List[str]] = None,
) -> Table:
    """
    Load a table from a CSV, JSON or Parquet file.

    Parameters
    ----------
    path : Path
        Path to data file
    format : str or DataFormat, optional
        Format tag; inferred from the suffix if not given
    columns : List[str], optional
        Subset of columns to keep, in this order

    Returns
    -------
    Table
        Decoded table

    Raises
    ------
    DataPathNotFoundError
        If the file does not exist
    DecodeError
        If the file contents are invalid for the format
    NotFoundError
        If a requested column is missing

    Examples
    --------
    >>> table = load_table(Path("data/security_dataset.csv"))
    >>> table = load_table(Path("events.json"), columns=["id", "action"])
    """
    path = Path(path)
    if not path.exists():
        raise DataPathNotFoundError(f"Data file not found: {path}")

    fmt = _resolve_format(path, format)
    logger.info(f"Loading table from {path} (format: {fmt.value})")

    table = formats.get_codec(fmt).decode(path.read_bytes())

    if columns is not None:
        validate_columns(table, required=columns)
        table = table.select(columns)

    if table.height() == 0:
        logger.warning(f"Loaded table from {path} has no rows")
    logger.info(f"Loaded {table.height()} rows x {table.width()} columns")

    return table


def load_dataset(
    spec_or_path: Union[DataSpec, PathLike],
    format: Optional[Union[str, DataFormat]] = None,
    target_col: Optional[str] = None,
) -> Dataset:
    """
    Load a file into a new :class:`Dataset`.

    Parameters
    ----------
    spec_or_path : DataSpec or Path
        Full data specification, or just a path
    format : str or DataFormat, optional
        Format tag when a bare path is given
    target_col : str, optional
        Target column that must be present, when a bare path is given

    Returns
    -------
    Dataset
        Dataset with a fresh identity

    Raises
    ------
    NotFoundError
        If the target column is missing
    """
    if isinstance(spec_or_path, DataSpec):
        spec = spec_or_path
    else:
        spec = DataSpec(path=Path(spec_or_path), format=format, target_col=target_col)

    table = load_table(spec.path, format=spec.format, columns=spec.columns)
    if spec.target_col is not None:
        validate_columns(table, target_col=spec.target_col)

    dataset = Dataset(table)
    logger.debug(f"Created dataset {dataset.id} from {spec.path}")
    return dataset


def save_table(
    table: Table,
    path: PathLike,
    format: Optional[Union[str, DataFormat]] = None,
) -> Path:
    """
    Write a table to a file, creating parent directories as needed.

    Parameters
    ----------
    table : Table
        Table to write
    path : Path
        Destination file
    format : str or DataFormat, optional
        Format tag; inferred from the suffix if not given

    Returns
    -------
    Path
        The written path

    Raises
    ------
    EncodeError
        If the table cannot be represented in the format
    """
    path = Path(path)
    fmt = _resolve_format(path, format)

    data = formats.get_codec(fmt).encode(table)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Saved {table.height()} rows to {path} (format: {fmt.value})")
    return path


def save_dataset(
    dataset: Dataset,
    path: PathLike,
    format: Optional[Union[str, DataFormat]] = None,
) -> Path:
    """Write a dataset's table to ``path``; see :func:`save_table`."""
    return save_table(dataset.table, path, format=format)
