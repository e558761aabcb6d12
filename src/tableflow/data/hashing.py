"""Content hashing for files and tables."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict

import numpy as np
import pandas as pd

from tableflow.data.table import Table
from tableflow.errors import DataPathNotFoundError


def compute_file_hash(
    file_path: Path,
    algorithm: str = "sha256",
    chunk_size: int = 8192,
) -> str:
    """
    Compute cryptographic hash of a file.

    Parameters
    ----------
    file_path : Path
        Path to file
    algorithm : str
        Hash algorithm (sha256, sha1, md5)
    chunk_size : int
        Size of chunks for reading file

    Returns
    -------
    hash_hex : str
        Hexadecimal hash digest
    """
    hasher = hashlib.new(algorithm)

    with open(file_path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    return hasher.hexdigest()


def compute_table_hash(
    table: Table,
    algorithm: str = "sha256",
    canonical: bool = False,
) -> str:
    """
    Compute a content hash of a table.

    Row order is part of the hash unless ``canonical`` is set, so a
    shuffled table hashes differently from its source.

    Parameters
    ----------
    table : Table
        Input table
    algorithm : str
        Hash algorithm
    canonical : bool
        If True, sort columns and rows first so that order is ignored

    Returns
    -------
    hash_hex : str
        Hexadecimal hash digest
    """
    hasher = hashlib.new(algorithm)
    df = table.to_pandas()

    if canonical:
        df = df.sort_index(axis=1)
        if df.shape[1]:
            df = _sort_rows(df)

    for name, dtype in df.dtypes.items():
        hasher.update(f"{name}:{dtype};".encode("utf-8"))

    if df.shape[0] and df.shape[1]:
        hasher.update(_row_bytes(df))

    return hasher.hexdigest()


def _rows_as_json(df: pd.DataFrame) -> np.ndarray:
    return np.array(
        [json.dumps(row, sort_keys=True, default=str) for row in df.to_numpy().tolist()]
    )


def _sort_rows(df: pd.DataFrame) -> pd.DataFrame:
    try:
        return df.sort_values(by=list(df.columns), kind="mergesort").reset_index(drop=True)
    except TypeError:
        # Cells that do not compare (dicts, mixed types): order by row text
        order = np.argsort(_rows_as_json(df), kind="stable")
        return df.iloc[order].reset_index(drop=True)


def _row_bytes(df: pd.DataFrame) -> bytes:
    try:
        return pd.util.hash_pandas_object(df, index=False).to_numpy().tobytes()
    except TypeError:
        # Unhashable cells such as nested lists or dicts from free-form JSON
        return "\n".join(_rows_as_json(df)).encode("utf-8")


def get_file_metadata(file_path: Path) -> Dict[str, Any]:
    """
    Get metadata about a data file.

    Returns
    -------
    metadata : dict
        Dictionary with path, size_bytes and sha256_hash

    Raises
    ------
    DataPathNotFoundError
        If the file does not exist
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise DataPathNotFoundError(f"Data path not found: {file_path}")

    return {
        "path": str(file_path),
        "size_bytes": file_path.stat().st_size,
        "sha256_hash": compute_file_hash(file_path, algorithm="sha256"),
    }
