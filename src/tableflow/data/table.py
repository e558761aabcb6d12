"""Columnar in-memory table used as the universal data representation."""

from __future__ import annotations

import operator
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from tableflow.errors import InvalidArgumentError, NotFoundError, OutOfRangeError
from tableflow.data.validation import validate_column_names

ColumnData = Union[pd.Series, np.ndarray, Sequence[Any]]


def _as_column(name: str, values: ColumnData) -> pd.Series:
    """Coerce a column payload to a Series with a fresh RangeIndex."""
    if isinstance(values, pd.Series):
        return values.reset_index(drop=True).rename(name)
    if isinstance(values, (str, bytes)) or not hasattr(values, "__len__"):
        raise InvalidArgumentError(
            f"Column '{name}' must be a sequence of values, got {type(values).__name__}"
        )
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise InvalidArgumentError(
                f"Column '{name}' must be one-dimensional, got shape {values.shape}"
            )
        return pd.Series(values, name=name)
    return pd.Series(list(values), name=name)


class Table:
    """
    Rows x uniquely named columns, each column holding one scalar type.

    A ``Table`` never shares mutable storage with its inputs or with the
    tables derived from it: every operation that changes shape or row
    order returns a new ``Table`` and leaves the receiver untouched.

    Parameters
    ----------
    data : Mapping[str, sequence] or pd.DataFrame or Table, optional
        Column name -> values, or an existing frame/table to copy

    Raises
    ------
    InvalidArgumentError
        If column names are duplicated or columns differ in length

    Examples
    --------
    >>> table = Table({"a": [1, 2, 3], "target": [0, 1, 0]})
    >>> table.height(), table.width()
    (3, 2)
    >>> table.drop("target").columns
    ['a']
    """

    __slots__ = ("_df",)

    def __init__(self, data: Union[Mapping[str, ColumnData], pd.DataFrame, Table, None] = None):
        if data is None:
            df = pd.DataFrame()
        elif isinstance(data, Table):
            df = data._df.copy()
        elif isinstance(data, pd.DataFrame):
            df = data.copy()
        elif isinstance(data, Mapping):
            df = self._frame_from_mapping(data)
        else:
            raise InvalidArgumentError(
                f"Cannot build a Table from {type(data).__name__}; "
                "expected a mapping of columns or a DataFrame"
            )

        names = [str(c) for c in df.columns]
        validate_column_names(names)
        df.columns = names
        self._df = df.reset_index(drop=True)

    @staticmethod
    def _frame_from_mapping(data: Mapping[str, ColumnData]) -> pd.DataFrame:
        names = [str(name) for name in data.keys()]
        validate_column_names(names)

        columns = {str(name): _as_column(str(name), values) for name, values in data.items()}
        lengths = {name: len(col) for name, col in columns.items()}
        if len(set(lengths.values())) > 1:
            raise InvalidArgumentError(f"All columns must have the same length, got {lengths}")

        return pd.DataFrame(columns, columns=names)

    @classmethod
    def _wrap(cls, df: pd.DataFrame) -> Table:
        # df must already be a private copy with unique string column names
        table = cls.__new__(cls)
        table._df = df.reset_index(drop=True)
        return table

    @classmethod
    def from_pandas(cls, df: pd.DataFrame) -> Table:
        """Build a table from a DataFrame (the frame is copied)."""
        return cls(df)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        columns: Optional[List[str]] = None,
    ) -> Table:
        """Build a table from an iterable of row dicts."""
        return cls(pd.DataFrame.from_records(list(records), columns=columns))

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    def height(self) -> int:
        """Number of rows."""
        return int(self._df.shape[0])

    def width(self) -> int:
        """Number of columns."""
        return int(self._df.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height(), self.width()

    @property
    def columns(self) -> List[str]:
        return list(self._df.columns)

    @property
    def dtypes(self) -> Dict[str, str]:
        """Column name -> dtype name."""
        return {name: str(dtype) for name, dtype in self._df.dtypes.items()}

    def __len__(self) -> int:
        return self.height()

    def __contains__(self, name: object) -> bool:
        return name in self._df.columns

    def __repr__(self) -> str:
        return f"Table(height={self.height()}, width={self.width()}, columns={self.columns})"

    # ------------------------------------------------------------------
    # Column operations
    # ------------------------------------------------------------------

    def _require(self, name: str) -> None:
        if name not in self._df.columns:
            raise NotFoundError(f"Column '{name}' not found. Available: {self.columns}")

    def column(self, name: str) -> pd.Series:
        """
        Return a copy of the named column.

        Raises
        ------
        NotFoundError
            If the column does not exist
        """
        self._require(name)
        return self._df[name].copy()

    def drop(self, name: str) -> Table:
        """
        Return a new table without ``name``.

        Raises
        ------
        NotFoundError
            If the column does not exist
        """
        self._require(name)
        return Table._wrap(self._df.drop(columns=[name]))

    def select(self, names: Sequence[str]) -> Table:
        """Return a new table holding only ``names``, in that order."""
        names = list(names)
        for name in names:
            self._require(name)
        validate_column_names(names)
        return Table._wrap(self._df[names].copy())

    def with_column(self, name: str, values: ColumnData) -> Table:
        """
        Return a new table with ``name`` added (or replaced).

        Raises
        ------
        InvalidArgumentError
            If ``values`` does not have one entry per row

        Notes
        -----
        A table with no columns still has a row count (e.g. after dropping
        its last column); only the fully empty ``Table()`` takes its height
        from the first column added.
        """
        column = _as_column(str(name), values)
        if self.height() == 0 and self.width() == 0:
            df = pd.DataFrame(index=pd.RangeIndex(len(column)))
        else:
            if len(column) != self.height():
                raise InvalidArgumentError(
                    f"Column '{name}' has {len(column)} values, table has {self.height()} rows"
                )
            df = self._df.copy()
        df[str(name)] = column.set_axis(df.index)
        return Table._wrap(df)

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------

    def slice(self, start: int, length: int) -> Table:
        """
        Return rows ``[start, start + length)`` as a new table.

        Raises
        ------
        OutOfRangeError
            If the range does not fit inside the table
        """
        start = operator.index(start)
        length = operator.index(length)
        n = self.height()
        if start < 0 or length < 0 or start + length > n:
            raise OutOfRangeError(
                f"Slice [{start}, {start + length}) is out of range for a table of {n} rows"
            )
        return Table._wrap(self._df.iloc[start : start + length].copy())

    def take(self, indices: Union[Sequence[int], np.ndarray]) -> Table:
        """
        Gather rows at ``indices`` (in that order) into a new table.

        Raises
        ------
        OutOfRangeError
            If any index falls outside ``[0, height())``
        """
        idx = np.asarray(indices, dtype=np.int64)
        if idx.ndim != 1:
            raise InvalidArgumentError(f"Row indices must be one-dimensional, got shape {idx.shape}")
        n = self.height()
        if idx.size and (idx.min() < 0 or idx.max() >= n):
            raise OutOfRangeError(
                f"Row indices must lie in [0, {n}), got range [{idx.min()}, {idx.max()}]"
            )
        return Table._wrap(self._df.take(idx))

    def head(self, k: int = 5) -> Table:
        """First ``k`` rows (fewer if the table is shorter)."""
        return self.slice(0, min(max(k, 0), self.height()))

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def equals(self, other: object) -> bool:
        """True when ``other`` is a table with identical columns, dtypes and values."""
        return isinstance(other, Table) and self._df.equals(other._df)

    def to_pandas(self) -> pd.DataFrame:
        """Return a copy of the table as a DataFrame."""
        return self._df.copy()

    def to_records(self) -> List[Dict[str, Any]]:
        """Return the rows as a list of dicts."""
        return self._df.to_dict(orient="records")
