"""Tests for tableflow.loading.batch_loader module."""

from __future__ import annotations

import numpy as np
import pytest

from tableflow.data import Dataset, NumpyRandomSource, Table
from tableflow.errors import InvalidArgumentError
from tableflow.loading import BatchLoader, LoaderState


@pytest.fixture
def five_rows():
    return Dataset(Table({"row": [0, 1, 2, 3, 4]}))


def _drain(loader):
    batches = []
    while (batch := loader.next_batch()) is not None:
        batches.append(batch.column("row").tolist())
    return batches


# ============================================================================
# Construction
# ============================================================================


class TestConstruction:
    @pytest.mark.parametrize("batch_size", [0, -3])
    def test_non_positive_batch_size(self, five_rows, batch_size):
        with pytest.raises(InvalidArgumentError):
            BatchLoader(five_rows, batch_size)

    @pytest.mark.parametrize("batch_size", [2.0, "2", True])
    def test_non_integer_batch_size(self, five_rows, batch_size):
        with pytest.raises(InvalidArgumentError):
            BatchLoader(five_rows, batch_size)

    def test_initial_state(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        assert loader.state is LoaderState.READY
        assert loader.cursor == 0
        assert loader.session_count == 1
        assert loader.batch_size == 2
        assert loader.shuffle is False
        assert loader.dataset is five_rows
        np.testing.assert_array_equal(loader.permutation, np.arange(5))

    def test_permutation_property_is_a_copy(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        perm = loader.permutation
        perm[:] = 0
        np.testing.assert_array_equal(loader.permutation, np.arange(5))

    def test_empty_dataset_starts_exhausted(self):
        loader = BatchLoader(Dataset(Table({"row": []})), 3)
        assert loader.is_exhausted
        assert loader.next_batch() is None
        assert len(loader) == 0


# ============================================================================
# Iteration
# ============================================================================


class TestIteration:
    def test_five_rows_batch_two(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        assert loader.next_batch().column("row").tolist() == [0, 1]
        assert loader.next_batch().column("row").tolist() == [2, 3]
        assert loader.next_batch().column("row").tolist() == [4]
        assert loader.next_batch() is None
        assert loader.state is LoaderState.EXHAUSTED

    def test_stays_exhausted(self, five_rows):
        loader = BatchLoader(five_rows, 5)
        _drain(loader)
        for _ in range(3):
            assert loader.next_batch() is None
        assert loader.session_count == 1

    def test_batch_larger_than_dataset(self, five_rows):
        assert _drain(BatchLoader(five_rows, 100)) == [[0, 1, 2, 3, 4]]

    def test_counts(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        assert loader.batches_per_pass == len(loader) == 3
        assert loader.remaining_batches() == 3
        loader.next_batch()
        assert loader.remaining_batches() == 2
        assert loader.cursor == 2

    @pytest.mark.parametrize("n,batch_size", [(10, 3), (10, 10), (7, 1), (100, 32)])
    def test_pass_covers_every_row_once(self, n, batch_size):
        loader = BatchLoader(Dataset(Table({"row": list(range(n))})), batch_size, shuffle=True, seed=0)
        batches = _drain(loader)
        seen = [row for batch in batches for row in batch]
        assert sorted(seen) == list(range(n))
        assert all(len(b) == batch_size for b in batches[:-1])
        assert 0 < len(batches[-1]) <= batch_size

    def test_batches_follow_permutation(self):
        loader = BatchLoader(Dataset(Table({"row": list(range(9))})), 4, shuffle=True, seed=3)
        perm = loader.permutation.tolist()
        assert [row for batch in _drain(loader) for row in batch] == perm

    def test_next_batch_indices(self, five_rows):
        loader = BatchLoader(five_rows, 3)
        assert loader.next_batch_indices().tolist() == [0, 1, 2]
        assert loader.next_batch_indices().tolist() == [3, 4]
        assert loader.next_batch_indices() is None

    def test_iterator_protocol(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        assert iter(loader) is loader
        assert [b.height() for b in loader] == [2, 2, 1]
        # Exhausted loaders do not restart on iteration
        assert list(loader) == []

    def test_rows_keep_their_columns(self):
        dataset = Dataset(Table({"row": list(range(6)), "double": [2 * i for i in range(6)]}))
        for batch in BatchLoader(dataset, 4, shuffle=True, seed=8):
            assert batch.columns == ["row", "double"]
            assert batch.column("double").tolist() == [2 * r for r in batch.column("row")]


# ============================================================================
# Sessions
# ============================================================================


class TestRestart:
    def test_restart_resets_cursor_and_session(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        first_session = loader.session_id
        _drain(loader)

        loader.restart()
        assert loader.session_id != first_session
        assert loader.session_count == 2
        assert loader.cursor == 0
        assert loader.state is LoaderState.READY
        assert _drain(loader) == [[0, 1], [2, 3], [4]]

    def test_restart_mid_pass(self, five_rows):
        loader = BatchLoader(five_rows, 2)
        loader.next_batch()
        loader.restart()
        assert loader.next_batch().column("row").tolist() == [0, 1]

    def test_restart_reshuffles(self):
        loader = BatchLoader(Dataset(Table({"row": list(range(50))})), 10, shuffle=True, seed=1)
        first = loader.permutation
        loader.restart()
        second = loader.permutation
        assert sorted(second.tolist()) == list(range(50))
        assert not np.array_equal(first, second)

    def test_seeded_loaders_repeat(self):
        dataset = Dataset(Table({"row": list(range(20))}))
        a = BatchLoader(dataset, 5, shuffle=True, seed=11)
        b = BatchLoader(dataset, 5, shuffle=True, seed=11)
        assert _drain(a) == _drain(b)
        a.restart()
        b.restart()
        assert _drain(a) == _drain(b)

    def test_explicit_random_source(self):
        dataset = Dataset(Table({"row": list(range(20))}))
        a = BatchLoader(dataset, 5, shuffle=True, random_source=NumpyRandomSource(4))
        b = BatchLoader(dataset, 5, shuffle=True, seed=4)
        np.testing.assert_array_equal(a.permutation, b.permutation)

    def test_restart_empty_stays_exhausted(self):
        loader = BatchLoader(Dataset(Table({"row": []})), 2)
        loader.restart()
        assert loader.is_exhausted
