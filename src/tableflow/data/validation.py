"""Data validation utilities for tableflow."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

from tableflow.errors import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from tableflow.data.table import Table


def validate_column_names(names: Iterable[Any]) -> List[str]:
    """
    Check that column names are non-empty strings and unique.

    Parameters
    ----------
    names : Iterable
        Column names in table order

    Returns
    -------
    List[str]
        The names, as a list

    Raises
    ------
    InvalidArgumentError
        If a name is not a string, is empty, or appears more than once
    """
    names = list(names)
    bad = [n for n in names if not isinstance(n, str) or n == ""]
    if bad:
        raise InvalidArgumentError(f"Column names must be non-empty strings, got: {bad[:5]}")

    seen = set()
    duplicates = []
    for name in names:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise InvalidArgumentError(f"Duplicate column names: {duplicates[:5]}")

    return names


def validate_columns(
    table: Table,
    target_col: Optional[str] = None,
    required: Optional[List[str]] = None,
) -> None:
    """
    Validate that required columns exist in a table.

    Parameters
    ----------
    table : Table
        Input table
    target_col : str, optional
        Target column name
    required : List[str], optional
        Other column names that must be present

    Raises
    ------
    NotFoundError
        If any required column is missing
    """
    errors = []
    available = set(table.columns)

    if target_col is not None and target_col not in available:
        errors.append(f"Target column '{target_col}' not found. Available: {sorted(available)[:10]}")

    if required is not None:
        missing = [c for c in required if c not in available]
        if missing:
            errors.append(f"Columns not found: {missing[:10]}")

    if errors:
        raise NotFoundError("\n".join(errors))


def generate_missingness_report(table: Table) -> Dict[str, Any]:
    """
    Generate a report on missing values in a table.

    Returns
    -------
    Dict[str, Any]
        Report containing:
        - total_missing: total count of missing values
        - cols_with_missing: list of columns with missing values
        - missing_counts: dict of {column: count}
        - missing_pct: dict of {column: percentage}
        - rows_with_missing: number of rows with any missing value
    """
    df = table.to_pandas()
    n_rows = len(df)

    missing_counts = df.isna().sum()
    cols_with_missing = missing_counts[missing_counts > 0]
    rows_with_missing = int(df.isna().any(axis=1).sum()) if n_rows else 0

    if n_rows:
        missing_pct = (cols_with_missing / n_rows * 100).round(2).to_dict()
        rows_pct = round(rows_with_missing / n_rows * 100, 2)
    else:
        missing_pct = {}
        rows_pct = 0.0

    return {
        "total_missing": int(missing_counts.sum()),
        "cols_with_missing": cols_with_missing.index.tolist(),
        "n_cols_with_missing": len(cols_with_missing),
        "missing_counts": {k: int(v) for k, v in cols_with_missing.items()},
        "missing_pct": missing_pct,
        "rows_with_missing": rows_with_missing,
        "rows_with_missing_pct": rows_pct,
        "total_cells": int(df.shape[0] * df.shape[1]),
    }
