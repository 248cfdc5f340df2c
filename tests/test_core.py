"""Tests for civicprofile.core (config, loading, validation)."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime
from pathlib import Path

import polars as pl
import pytest

from civicprofile.core.config import (
    DEFAULT_SOURCES,
    SERVICE_REQUESTS,
    ReportConfig,
)
from civicprofile.core.utils import (
    infer_type_label,
    load_file,
    normalize_frame,
)
from civicprofile.core.validation import (
    ProfileError,
    SchemaError,
    require_columns,
    require_temporal,
    validate_positive,
    validate_top_n,
)
from civicprofile.datasets import Dataset


# ── config ───────────────────────────────────────────────────────────

class TestConfig:
    def test_defaults(self):
        cfg = ReportConfig()
        assert cfg.top_n == 50
        assert cfg.parallel is False
        assert cfg.source_keys == [
            "building_violations",
            "ordinance_violations",
            "service_requests",
        ]

    def test_immutable(self):
        cfg = ReportConfig()
        with pytest.raises(FrozenInstanceError):
            cfg.top_n = 10  # type: ignore[misc]

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CIVICPROFILE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("CIVICPROFILE_TOP_N", "20")
        monkeypatch.setenv("CIVICPROFILE_LOG_LEVEL", "debug")
        cfg = ReportConfig.from_env()
        assert cfg.data_dir == tmp_path.resolve()
        assert cfg.top_n == 20
        assert cfg.log_level == "DEBUG"

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("CIVICPROFILE_TOP_N", "20")
        cfg = ReportConfig.from_env(top_n=7, data_dir=None)
        assert cfg.top_n == 7
        assert cfg.data_dir == Path("data")

    def test_source_lookup(self):
        cfg = ReportConfig()
        assert cfg.source("service_requests") is SERVICE_REQUESTS
        with pytest.raises(KeyError):
            cfg.source("parking_tickets")

    def test_with_sources(self):
        cfg = ReportConfig().with_sources(["service_requests"])
        assert cfg.sources == (SERVICE_REQUESTS,)

    def test_service_requests_excludes_information_calls(self):
        assert "311 INFORMATION ONLY CALL" in SERVICE_REQUESTS.excluded_categories

    def test_source_path(self, tmp_path):
        for source in DEFAULT_SOURCES:
            assert source.path(tmp_path).parent == tmp_path

    @pytest.mark.parametrize("field", ["top_n", "max_workers"])
    def test_rejects_non_positive_settings(self, field):
        with pytest.raises(ProfileError, match=f"{field} must be a positive integer"):
            ReportConfig(**{field: 0})

    def test_env_value_not_an_integer(self, monkeypatch):
        monkeypatch.setenv("CIVICPROFILE_TOP_N", "fifty")
        with pytest.raises(ProfileError, match="CIVICPROFILE_TOP_N must be an integer"):
            ReportConfig.from_env()

    def test_env_value_not_positive(self, monkeypatch):
        monkeypatch.setenv("CIVICPROFILE_MAX_WORKERS", "0")
        with pytest.raises(ProfileError, match="max_workers"):
            ReportConfig.from_env()


# ── validation ───────────────────────────────────────────────────────

class TestValidation:
    def test_require_columns(self):
        df = pl.DataFrame({"a": [1], "b": [2]})
        require_columns(df, "a", "b")
        with pytest.raises(SchemaError) as excinfo:
            require_columns(df, "a", "c")
        assert excinfo.value.column == "c"
        assert excinfo.value.available == ["a", "b"]

    def test_schema_error_hierarchy(self):
        err = SchemaError("x", [])
        assert isinstance(err, ProfileError)
        assert isinstance(err, KeyError)
        assert str(err) == "Column 'x' not found. Available columns: (none)"

    def test_validate_top_n(self):
        validate_top_n(1)
        for bad in (0, -3, 1.0, "5"):
            with pytest.raises(ValueError):
                validate_top_n(bad)  # type: ignore[arg-type]

    def test_validate_top_n_raises_profile_error(self):
        with pytest.raises(ProfileError, match="n must be positive"):
            validate_top_n(0)

    def test_validate_positive(self):
        validate_positive("workers", 3)
        for bad in (0, -1, True, 2.5):
            with pytest.raises(ProfileError, match="workers must be a positive integer"):
                validate_positive("workers", bad)  # type: ignore[arg-type]

    def test_require_temporal(self):
        df = pl.DataFrame(
            {"d": [date(2023, 1, 1)], "ts": [datetime(2023, 1, 1)], "s": ["01/01/2023"]}
        )
        require_temporal(df, "d")
        require_temporal(df, "ts")
        with pytest.raises(SchemaError, match="must hold dates") as excinfo:
            require_temporal(df, "s")
        assert excinfo.value.column == "s"
        with pytest.raises(SchemaError, match="not found"):
            require_temporal(df, "missing")


# ── loading ──────────────────────────────────────────────────────────

class TestLoading:
    def test_load_csv_parses_dates(self, tmp_path):
        path = tmp_path / "v.csv"
        path.write_text("d,x\n01/31/2020,1.5\n,\nnot a date,2.5\n")
        df = load_file(path, date_columns=["d"], date_format="%m/%d/%Y")
        assert df.schema["d"] == pl.Date
        assert df["d"].to_list() == [date(2020, 1, 31), None, None]
        assert df["x"].null_count() == 1

    def test_load_csv_parses_datetimes(self, tmp_path):
        path = tmp_path / "c.csv"
        path.write_text("ts\n03/04/2023 01:15:00 PM\n")
        df = load_file(path, ["ts"], "%m/%d/%Y %I:%M:%S %p")
        assert df["ts"].to_list() == [datetime(2023, 3, 4, 13, 15)]

    def test_parquet_round_trip_keeps_temporal(self, tmp_path):
        path = tmp_path / "p.parquet"
        pl.DataFrame({"d": [date(2021, 1, 1)]}).write_parquet(path)
        df = load_file(path, ["d"], "%m/%d/%Y")
        assert df.schema["d"] == pl.Date

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file type"):
            load_file(tmp_path / "data.xlsx")

    def test_missing_date_column(self, tmp_path):
        path = tmp_path / "v.csv"
        path.write_text("a\n1\n")
        with pytest.raises(SchemaError):
            load_file(path, date_columns=["d"])

    def test_nan_becomes_null(self):
        df = normalize_frame(pl.DataFrame({"x": [1.0, float("nan"), None]}))
        assert df["x"].null_count() == 2

    def test_load_json_lines(self, tmp_path):
        path = tmp_path / "r.jsonl"
        path.write_text(
            '{"SR_TYPE": "Pothole", "CREATED_DATE": "01/03/2024"}\n'
            '{"SR_TYPE": "Graffiti", "CREATED_DATE": null}\n'
        )
        df = load_file(path, ["CREATED_DATE"], "%m/%d/%Y")
        assert df.height == 2
        assert df["SR_TYPE"].to_list() == ["Pothole", "Graffiti"]
        assert df["CREATED_DATE"].to_list() == [date(2024, 1, 3), None]

    def test_load_json_array(self, tmp_path):
        path = tmp_path / "r.json"
        path.write_text('[{"a": 1}, {"a": 2}]')
        assert load_file(path)["a"].to_list() == [1, 2]

    def test_all_empty_date_column_is_date(self, tmp_path):
        path = tmp_path / "e.csv"
        path.write_text("d,x\n,1\n,2\n")
        df = load_file(path, ["d"], "%m/%d/%Y")
        assert df.schema["d"] == pl.Date
        assert df["d"].null_count() == 2

    @pytest.mark.parametrize(
        ("dtype", "label"),
        [
            (pl.Int8(), "integer"),
            (pl.UInt64(), "integer"),
            (pl.Float32(), "floating-point"),
            (pl.Boolean(), "boolean"),
            (pl.Date(), "date"),
            (pl.Datetime("ms"), "date"),
            (pl.String(), "text"),
            (pl.Categorical(), "text"),
            (pl.Null(), "text"),
        ],
    )
    def test_infer_type_label(self, dtype, label):
        assert infer_type_label(dtype) == label


# ── dataset ──────────────────────────────────────────────────────────

class TestDataset:
    def test_declared_date_columns_must_exist(self):
        with pytest.raises(SchemaError):
            Dataset(name="x", data=pl.DataFrame({"a": [1]}), date_columns=("d",))

    def test_immutable(self):
        ds = Dataset(name="x", data=pl.DataFrame({"a": [1]}))
        with pytest.raises(FrozenInstanceError):
            ds.name = "y"  # type: ignore[misc]

    def test_from_source(self, data_dir):
        ds = Dataset.from_source(SERVICE_REQUESTS, data_dir)
        assert ds.name == "service_requests"
        assert ds.row_count == 5
        assert ds.date_columns == SERVICE_REQUESTS.date_columns
        assert ds.data.schema["CREATED_DATE"] == pl.Datetime
        assert repr(ds) == "Dataset(service_requests, rows=5, cols=7)"
