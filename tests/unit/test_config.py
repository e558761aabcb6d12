"""Tests for tableflow.config module."""

import json
from pathlib import Path

import pytest
import yaml

from tableflow.config import PipelineConfig
from tableflow.data import DataFormat
from tableflow.errors import DataPathNotFoundError, InvalidArgumentError


class TestPipelineConfig:
    def test_defaults(self):
        config = PipelineConfig()
        assert config.input_path == Path("data/security_dataset.csv")
        assert config.format is None
        assert config.resolved_format == DataFormat.CSV
        assert config.target_col == "target"
        assert config.test_ratio == 0.2
        assert config.shuffle is True
        assert config.seed is None
        assert config.batch_size is None

    def test_normalizes_path_and_format(self):
        config = PipelineConfig(input_path="events.bin", format="columnar")
        assert config.input_path == Path("events.bin")
        assert config.format == DataFormat.PARQUET
        assert config.resolved_format == DataFormat.PARQUET

    @pytest.mark.parametrize("ratio", [-0.5, 1.5, float("nan"), "abc"])
    def test_invalid_test_ratio(self, ratio):
        with pytest.raises(InvalidArgumentError, match="test_ratio"):
            PipelineConfig(test_ratio=ratio)

    @pytest.mark.parametrize("batch_size", [0, -1, 2.5, True])
    def test_invalid_batch_size(self, batch_size):
        with pytest.raises(InvalidArgumentError, match="batch_size"):
            PipelineConfig(batch_size=batch_size)

    def test_empty_target(self):
        with pytest.raises(InvalidArgumentError):
            PipelineConfig(target_col="")

    def test_unknown_format(self):
        with pytest.raises(InvalidArgumentError):
            PipelineConfig(format="xml")

    def test_data_spec(self):
        spec = PipelineConfig(input_path="events.json", target_col="action").data_spec()
        assert spec.path == Path("events.json")
        assert spec.format == DataFormat.JSON
        assert spec.target_col == "action"

    def test_with_overrides_skips_none(self):
        base = PipelineConfig(seed=3, test_ratio=0.3)
        updated = base.with_overrides(seed=None, test_ratio=0.5, target_col="label")
        assert updated.seed == 3
        assert updated.test_ratio == 0.5
        assert updated.target_col == "label"
        assert base.test_ratio == 0.3

    def test_with_overrides_validates(self):
        with pytest.raises(InvalidArgumentError):
            PipelineConfig().with_overrides(test_ratio=2.0)
        with pytest.raises(InvalidArgumentError, match="Unknown"):
            PipelineConfig().with_overrides(learning_rate=0.1)

    def test_to_dict(self):
        d = PipelineConfig(format="json", seed=1).to_dict()
        assert d["input_path"] == "data/security_dataset.csv"
        assert d["format"] == "json"
        assert d["seed"] == 1
        json.dumps(d)


class TestLoadSave:
    def test_save_load_json(self, tmp_path):
        config = PipelineConfig(input_path=tmp_path / "x.csv", test_ratio=0.25, seed=9, batch_size=4)
        path = tmp_path / "cfg" / "pipeline.json"
        config.save(path)
        assert PipelineConfig.load(path) == config

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text(
            yaml.safe_dump({"input_path": "events.json", "target_col": "action", "shuffle": False})
        )
        config = PipelineConfig.load(path)
        assert config.input_path == Path("events.json")
        assert config.resolved_format == DataFormat.JSON
        assert config.shuffle is False

    def test_load_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert PipelineConfig.load(path) == PipelineConfig()

    def test_load_missing(self, tmp_path):
        with pytest.raises(DataPathNotFoundError):
            PipelineConfig.load(tmp_path / "absent.json")

    def test_load_malformed(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")
        with pytest.raises(InvalidArgumentError, match="parse"):
            PipelineConfig.load(path)

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidArgumentError, match="mapping"):
            PipelineConfig.load(path)

    def test_load_unknown_field(self, tmp_path):
        path = tmp_path / "extra.json"
        path.write_text(json.dumps({"epochs": 3}))
        with pytest.raises(InvalidArgumentError, match="epochs"):
            PipelineConfig.load(path)
