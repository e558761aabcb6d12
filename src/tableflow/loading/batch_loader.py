"""Stateful mini-batch iteration over a dataset."""

from __future__ import annotations

import math
import uuid
from enum import Enum
from typing import Optional

import numpy as np

from tableflow.data.dataset import Dataset
from tableflow.data.random_source import NumpyRandomSource, RandomSource, resolve_random_source
from tableflow.data.table import Table
from tableflow.errors import InvalidArgumentError


class LoaderState(str, Enum):
    """Iteration state of a :class:`BatchLoader`."""

    READY = "ready"
    EXHAUSTED = "exhausted"


class BatchLoader:
    """
    Yields a dataset's rows in fixed-size batches, one pass per session.

    A session is one pass over a permutation of the row indices: the
    identity permutation, or a fresh random one when ``shuffle`` is set.
    Every row appears in exactly one batch per session and only the last
    batch may be short. Once the pass is exhausted the loader returns
    ``None`` until :meth:`restart` begins a new session.

    Parameters
    ----------
    dataset : Dataset
        Rows to iterate over
    batch_size : int
        Rows per batch (> 0)
    shuffle : bool
        Draw a new random permutation for every session
    seed : int, optional
        Seed for the loader's own random stream; successive sessions still
        get different permutations, but the sequence is reproducible
    random_source : RandomSource, optional
        Source to draw permutations from when no seed is given

    Raises
    ------
    InvalidArgumentError
        If ``batch_size`` is not a positive integer

    Examples
    --------
    >>> loader = BatchLoader(dataset, batch_size=2)
    >>> while (batch := loader.next_batch()) is not None:
    ...     consume(batch)
    >>> loader.restart()
    """

    def __init__(
        self,
        dataset: Dataset,
        batch_size: int,
        shuffle: bool = False,
        *,
        seed: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ):
        if isinstance(batch_size, bool) or not isinstance(batch_size, (int, np.integer)):
            raise InvalidArgumentError(
                f"batch_size must be an integer, got {type(batch_size).__name__}"
            )
        if batch_size <= 0:
            raise InvalidArgumentError(f"batch_size must be positive, got {batch_size}")

        self._dataset = dataset
        self._batch_size = int(batch_size)
        self._shuffle = bool(shuffle)
        # A seed is turned into one stream for the loader's lifetime so
        # each restart reshuffles differently
        if seed is not None:
            self._random_source: Optional[RandomSource] = NumpyRandomSource(seed)
        else:
            self._random_source = random_source

        self._session_count = 0
        self._begin_session()

    def _begin_session(self) -> None:
        n = self._dataset.height()
        if self._shuffle:
            source = resolve_random_source(random_source=self._random_source)
            self._permutation = source.permutation(n)
        else:
            self._permutation = np.arange(n, dtype=np.int64)
        self._cursor = 0
        self._session_id = uuid.uuid4()
        self._session_count += 1

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def shuffle(self) -> bool:
        return self._shuffle

    @property
    def state(self) -> LoaderState:
        if self._cursor >= len(self._permutation):
            return LoaderState.EXHAUSTED
        return LoaderState.READY

    @property
    def is_exhausted(self) -> bool:
        return self.state is LoaderState.EXHAUSTED

    @property
    def cursor(self) -> int:
        """Position of the next batch within the current permutation."""
        return self._cursor

    @property
    def session_id(self) -> uuid.UUID:
        return self._session_id

    @property
    def session_count(self) -> int:
        """Number of sessions begun, counting the initial one."""
        return self._session_count

    @property
    def permutation(self) -> np.ndarray:
        """Copy of the current session's row order."""
        return self._permutation.copy()

    @property
    def batches_per_pass(self) -> int:
        return math.ceil(len(self._permutation) / self._batch_size)

    def __len__(self) -> int:
        return self.batches_per_pass

    def remaining_batches(self) -> int:
        """Batches left before the current session is exhausted."""
        remaining = len(self._permutation) - self._cursor
        return math.ceil(remaining / self._batch_size)

    def __repr__(self) -> str:
        return (
            f"BatchLoader(n={len(self._permutation)}, batch_size={self._batch_size}, "
            f"shuffle={self._shuffle}, cursor={self._cursor}, state={self.state.value})"
        )

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------

    def next_batch_indices(self) -> Optional[np.ndarray]:
        """
        Advance past the next batch and return its row indices.

        Returns ``None`` once the session is exhausted.
        """
        if self.is_exhausted:
            return None
        end = min(self._cursor + self._batch_size, len(self._permutation))
        indices = self._permutation[self._cursor : end].copy()
        self._cursor = end
        return indices

    def next_batch(self) -> Optional[Table]:
        """
        Return the next batch of rows, or ``None`` once the session is exhausted.

        The loader never restarts on its own; call :meth:`restart` to
        begin another pass.
        """
        indices = self.next_batch_indices()
        if indices is None:
            return None
        return self._dataset.table.take(indices)

    def restart(self) -> None:
        """Begin a new session: new permutation, cursor at 0, new session id."""
        self._begin_session()

    def __iter__(self) -> BatchLoader:
        return self

    def __next__(self) -> Table:
        batch = self.next_batch()
        if batch is None:
            raise StopIteration
        return batch
