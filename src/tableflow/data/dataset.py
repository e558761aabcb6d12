"""Dataset container types for tableflow."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from tableflow.data.hashing import compute_table_hash
from tableflow.data.random_source import RandomSource, resolve_random_source
from tableflow.data.table import Table

TIMESTAMP_FORMAT = "%d-%m-%y-%H"


class Dataset:
    """
    Identity-tagged wrapper around a :class:`Table`.

    Each dataset gets a random ``id`` and a ``created_at`` time when it is
    constructed; neither changes afterwards. The dataset owns a private
    copy of its table, so two datasets never share mutable column storage.

    Parameters
    ----------
    table : Table
        Rows to wrap (copied)
    parent_id : uuid.UUID, optional
        Identity of the dataset this one was derived from

    Examples
    --------
    >>> dataset = Dataset(Table({"x": [1, 2, 3], "target": [0, 1, 0]}))
    >>> shuffled = dataset.shuffle(seed=7)
    >>> X, y = shuffled.split_feature_target("target")
    >>> X.height() == len(y) == 3
    True
    """

    __slots__ = ("_table", "_id", "_created_at", "_parent_id")

    def __init__(self, table: Table, parent_id: Optional[uuid.UUID] = None):
        self._table = Table(table)
        self._id = uuid.uuid4()
        self._created_at = datetime.now()
        self._parent_id = parent_id

    @property
    def table(self) -> Table:
        return self._table

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def parent_id(self) -> Optional[uuid.UUID]:
        """Identity of the dataset this one was shuffled or split from."""
        return self._parent_id

    @property
    def timestamp(self) -> str:
        """Creation time as ``dd-mm-yy-HH``."""
        return self._created_at.strftime(TIMESTAMP_FORMAT)

    @property
    def columns(self) -> List[str]:
        return self._table.columns

    def height(self) -> int:
        return self._table.height()

    def width(self) -> int:
        return self._table.width()

    def __len__(self) -> int:
        return self.height()

    def __repr__(self) -> str:
        return (
            f"Dataset(id={self._id}, height={self.height()}, width={self.width()}, "
            f"created_at={self._created_at.isoformat(timespec='seconds')})"
        )

    def shuffle(
        self,
        seed: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ) -> Dataset:
        """
        Return a new dataset whose rows are a uniform random permutation of these.

        Parameters
        ----------
        seed : int, optional
            Fixes the permutation; the same seed always gives the same order
        random_source : RandomSource, optional
            Source to draw from when no seed is given; defaults to the
            process-wide source

        Returns
        -------
        Dataset
            Shuffled copy; this dataset is left unchanged
        """
        source = resolve_random_source(seed=seed, random_source=random_source)
        permutation = source.permutation(self.height())
        return Dataset(self._table.take(permutation), parent_id=self._id)

    def split_feature_target(self, target_column: str) -> Tuple[Table, pd.Series]:
        """
        Split into features (all other columns) and the target column.

        Raises
        ------
        NotFoundError
            If ``target_column`` does not exist
        """
        y = self._table.column(target_column)
        X = self._table.drop(target_column)
        return X, y

    def take(self, indices) -> Dataset:
        """Return a new dataset holding the rows at ``indices``."""
        return Dataset(self._table.take(indices), parent_id=self._id)

    def fingerprint(self) -> str:
        """Content hash of the table (row order sensitive)."""
        return compute_table_hash(self._table)

    def summary(self) -> Dict[str, Any]:
        """Identity and shape as a JSON-friendly dict."""
        return {
            "id": str(self._id),
            "parent_id": str(self._parent_id) if self._parent_id else None,
            "created_at": self._created_at.isoformat(timespec="seconds"),
            "n_rows": self.height(),
            "n_columns": self.width(),
            "columns": self.columns,
        }
