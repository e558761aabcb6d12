"""Data specification types for tableflow data loading."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, List, Dict, Any, Union

from tableflow.errors import InvalidArgumentError


class DataFormat(str, Enum):
    """Supported data formats."""

    CSV = "csv"
    JSON = "json"
    PARQUET = "parquet"

    @classmethod
    def parse(cls, value: Union[str, DataFormat]) -> DataFormat:
        """
        Normalize a format tag.

        Accepts enum members, their values in any case, and ``columnar``
        as an alias of ``parquet``.

        Raises
        ------
        InvalidArgumentError
            If the tag names no supported format
        """
        if isinstance(value, cls):
            return value

        tag = str(value).strip().lower().lstrip(".")
        if tag in ("columnar", "pq"):
            tag = cls.PARQUET.value
        try:
            return cls(tag)
        except ValueError:
            supported = ", ".join(f.value for f in cls)
            raise InvalidArgumentError(
                f"Unsupported data format: {value!r}. Expected one of: {supported}"
            ) from None

    @classmethod
    def from_path(cls, path: Path) -> DataFormat:
        """
        Infer format from path suffix.

        Parameters
        ----------
        path : Path
            Path to data file

        Returns
        -------
        DataFormat
            Inferred format

        Raises
        ------
        InvalidArgumentError
            If format cannot be inferred
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix == ".csv":
            return cls.CSV
        elif suffix == ".json":
            return cls.JSON
        elif suffix in (".parquet", ".pq"):
            return cls.PARQUET
        else:
            raise InvalidArgumentError(
                f"Cannot infer data format from path: {path}. "
                f"Expected a .csv, .json or .parquet file."
            )


@dataclass
class DataSpec:
    """
    Specification for loading a dataset.

    Parameters
    ----------
    path : Path
        Path to data file (.csv, .json, .parquet)
    format : DataFormat, optional
        Data format; inferred from path if not specified
    target_col : str, optional
        Name of the target column; checked for presence when set
    columns : List[str], optional
        Subset of columns to keep after decoding

    Examples
    --------
    >>> spec = DataSpec(path=Path("data/security_dataset.csv"), target_col="target")
    >>> spec.format
    <DataFormat.CSV: 'csv'>
    """

    path: Path
    format: Optional[DataFormat] = None
    target_col: Optional[str] = None
    columns: Optional[List[str]] = None

    def __post_init__(self):
        self.path = Path(self.path)

        if self.format is None:
            self.format = DataFormat.from_path(self.path)
        else:
            self.format = DataFormat.parse(self.format)

    def to_dict(self) -> Dict[str, Any]:
        """Convert spec to dictionary for serialization."""
        return {
            "path": str(self.path),
            "format": self.format.value if self.format else None,
            "target_col": self.target_col,
            "columns": self.columns,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> DataSpec:
        """Create spec from dictionary."""
        d = d.copy()
        if "path" in d:
            d["path"] = Path(d["path"])
        if d.get("format") is not None:
            d["format"] = DataFormat.parse(d["format"])
        return cls(**d)

    def with_target_col(self, target_col: str) -> DataSpec:
        """Return a new spec with updated target column."""
        return DataSpec(
            path=self.path,
            format=self.format,
            target_col=target_col,
            columns=self.columns,
        )
