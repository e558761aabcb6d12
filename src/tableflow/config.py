"""Configuration dataclass for the data preparation pipeline."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tableflow.data.spec import DataFormat, DataSpec
from tableflow.errors import DataPathNotFoundError, InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_INPUT_PATH = Path("data/security_dataset.csv")


@dataclass
class PipelineConfig:
    """Configuration for loading, shuffling and splitting one dataset."""

    # Data
    input_path: Path = DEFAULT_INPUT_PATH
    format: Optional[DataFormat] = None  # Inferred from input_path suffix when None
    target_col: str = "target"

    # Splitting
    test_ratio: float = 0.2
    seed: Optional[int] = None
    shuffle: bool = True

    # Batching (one pass over the train partition when set)
    batch_size: Optional[int] = None

    def __post_init__(self):
        """Normalize paths and format, then validate ranges."""
        self.input_path = Path(self.input_path)
        if self.format is not None:
            self.format = DataFormat.parse(self.format)

        if not self.target_col:
            raise InvalidArgumentError("target_col must be a non-empty column name")

        try:
            ratio = float(self.test_ratio)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"test_ratio must be a number, got {self.test_ratio!r}") from None
        if math.isnan(ratio) or not 0.0 <= ratio <= 1.0:
            raise InvalidArgumentError(f"test_ratio must be in [0.0, 1.0], got {self.test_ratio}")
        self.test_ratio = ratio

        if self.batch_size is not None:
            if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
                raise InvalidArgumentError(f"batch_size must be an integer, got {self.batch_size!r}")
            if self.batch_size <= 0:
                raise InvalidArgumentError(f"batch_size must be positive, got {self.batch_size}")

    @property
    def resolved_format(self) -> DataFormat:
        """Configured format, or the one implied by the input suffix."""
        if self.format is not None:
            return self.format
        return DataFormat.from_path(self.input_path)

    def data_spec(self) -> DataSpec:
        """Build the :class:`DataSpec` for the input file."""
        return DataSpec(path=self.input_path, format=self.resolved_format, target_col=self.target_col)

    def with_overrides(self, **overrides: Any) -> PipelineConfig:
        """
        Return a copy with the given fields replaced.

        ``None`` values are skipped so unset CLI options keep the
        configured value.

        Raises
        ------
        InvalidArgumentError
            If a key is not a config field
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown config field(s): {unknown}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dict with Path and enum values as strings."""
        d = asdict(self)
        d["input_path"] = str(self.input_path)
        d["format"] = self.format.value if self.format else None
        return d

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> PipelineConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown config field(s): {unknown}")
        return cls(**d)

    @classmethod
    def load(cls, path: Union[str, Path]) -> PipelineConfig:
        """
        Load config from a JSON or YAML file.

        Parameters
        ----------
        path : Path
            ``.json``, ``.yaml`` or ``.yml`` file holding a mapping of fields

        Raises
        ------
        DataPathNotFoundError
            If the file does not exist
        InvalidArgumentError
            If the file is malformed or holds unknown fields
        """
        path = Path(path)
        if not path.exists():
            raise DataPathNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as handle:
            try:
                if path.suffix.lower() in (".yaml", ".yml"):
                    payload = yaml.safe_load(handle) or {}
                else:
                    payload = json.load(handle)
            except (yaml.YAMLError, json.JSONDecodeError) as e:
                raise InvalidArgumentError(f"Failed to parse config {path}: {e}") from e

        if not isinstance(payload, dict):
            raise InvalidArgumentError(
                f"Config {path} must hold a mapping, got {type(payload).__name__}"
            )

        logger.debug(f"Loaded config from {path}: {payload}")
        return cls.from_dict(payload)
