"""Pytest configuration and fixtures."""

import json
import uuid

import numpy as np
import pandas as pd
import pytest

from tableflow.data import Dataset, Table
from tableflow.formats import SECURITY_COLUMNS


@pytest.fixture
def ten_row_table():
    """Ten rows: a row number, one float feature and an alternating 0/1 target."""
    return Table(
        {
            "row": list(range(10)),
            "feature": [i * 0.5 for i in range(10)],
            "target": [i % 2 for i in range(10)],
        }
    )


@pytest.fixture
def ten_row_dataset(ten_row_table):
    return Dataset(ten_row_table)


@pytest.fixture
def security_df():
    """Ten synthetic security events with a binary target."""
    rng = np.random.default_rng(42)
    n = 10
    return pd.DataFrame(
        {
            "id": [str(uuid.UUID(int=i + 1)) for i in range(n)],
            "timestamp": [f"{(i % 28) + 1:02d}-03-24-{i % 24:02d}" for i in range(n)],
            "source_ip": [f"10.0.0.{i}" for i in range(n)],
            "destination_ip": [f"192.168.1.{rng.integers(1, 255)}" for _ in range(n)],
            "action": rng.choice(["allow", "deny"], size=n),
            "protocol": rng.choice(["tcp", "udp", "icmp"], size=n),
            "target": [i % 2 for i in range(n)],
        }
    )


@pytest.fixture
def security_records(security_df):
    """The security events as JSON-style records keyed by ``uuid``."""
    records = security_df[SECURITY_COLUMNS].to_dict(orient="records")
    for record in records:
        record["uuid"] = record.pop("id")
    return records


@pytest.fixture
def security_csv(tmp_path, security_df):
    path = tmp_path / "security_dataset.csv"
    security_df.to_csv(path, index=False)
    return path


@pytest.fixture
def security_json(tmp_path, security_records):
    path = tmp_path / "security_dataset.json"
    path.write_text(json.dumps(security_records), encoding="utf-8")
    return path


@pytest.fixture
def security_parquet(tmp_path, security_df):
    pytest.importorskip("pyarrow")
    path = tmp_path / "security_dataset.parquet"
    security_df.to_parquet(path, index=False)
    return path
