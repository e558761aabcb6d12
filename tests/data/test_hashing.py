"""Tests for table and file hashing utilities."""

import pytest

from tableflow.data import Dataset, Table
from tableflow.data.hashing import compute_file_hash, compute_table_hash, get_file_metadata
from tableflow.errors import DataPathNotFoundError
from tableflow.formats import JsonCodec


def test_compute_file_hash(tmp_path):
    """Test file hashing is stable and reproducible."""
    path = tmp_path / "content.txt"
    path.write_text("test content\n")

    # Hash should be reproducible
    hash1 = compute_file_hash(path)
    hash2 = compute_file_hash(path)
    assert hash1 == hash2
    assert len(hash1) == 64  # SHA256 hex length

    # Different content should give different hash
    path.write_text("different content\n")
    assert compute_file_hash(path) != hash1


def test_compute_file_hash_small_chunks(tmp_path):
    path = tmp_path / "content.txt"
    path.write_text("x" * 1000)
    assert compute_file_hash(path, chunk_size=7) == compute_file_hash(path)


def test_table_hash_is_row_order_sensitive():
    table = Table({"A": [1, 2, 3], "B": [4, 5, 6]})
    reordered = table.take([2, 0, 1])

    assert compute_table_hash(table) == compute_table_hash(Table(table))
    assert compute_table_hash(table) != compute_table_hash(reordered)


def test_table_hash_canonical():
    """With canonical=True, column and row order are ignored."""
    t1 = Table({"A": [1, 2, 3], "B": [4, 5, 6]})
    t2 = Table({"B": [6, 4, 5], "A": [3, 1, 2]})

    assert compute_table_hash(t1) != compute_table_hash(t2)
    assert compute_table_hash(t1, canonical=True) == compute_table_hash(t2, canonical=True)


def test_table_hash_sees_dtype():
    ints = Table({"A": [1, 2, 3]})
    floats = Table({"A": [1.0, 2.0, 3.0]})
    assert compute_table_hash(ints) != compute_table_hash(floats)


def test_table_hash_empty():
    assert compute_table_hash(Table()) == compute_table_hash(Table())


def test_table_hash_nested_values():
    """Free-form JSON can put lists and dicts in cells; they still hash."""
    table = Table.from_records(
        [
            {"a": 1, "tags": ["x", "y"]},
            {"a": 2, "tags": {"k": 1}},
            {"a": 3, "tags": None},
        ]
    )

    digest = compute_table_hash(table)
    assert len(digest) == 64
    assert compute_table_hash(Table(table)) == digest
    assert compute_table_hash(table.take([1, 0, 2])) != digest
    assert compute_table_hash(table.with_column("tags", [["x"], {"k": 2}, None])) != digest

    reordered = table.take([2, 0, 1])
    assert compute_table_hash(reordered, canonical=True) == compute_table_hash(table, canonical=True)


def test_nested_json_dataset_fingerprint():
    payload = b'[{"id": 1, "meta": {"port": 22}}, {"id": 2, "meta": [1, 2]}]'
    table = JsonCodec(record_model=None).decode(payload)

    dataset = Dataset(table)
    assert dataset.fingerprint() == compute_table_hash(table)
    assert dataset.shuffle(seed=0).height() == 2


def test_get_file_metadata(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n")

    meta = get_file_metadata(path)
    assert meta["path"] == str(path)
    assert meta["size_bytes"] == path.stat().st_size
    assert meta["sha256_hash"] == compute_file_hash(path)


def test_get_file_metadata_missing(tmp_path):
    with pytest.raises(DataPathNotFoundError):
        get_file_metadata(tmp_path / "missing.csv")
