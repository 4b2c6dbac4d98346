import numpy as np
import pytest

from src.kriging.model import CovarianceParameters, Location
from src.utils.config import load_config, parameters_from_config, targets_from_config
from src.utils.io import drop_non_finite, load_coords, load_values, save_csv
from src.utils.logging import log, set_verbose
from src.utils.paths import results_dir, tables_dir

CONFIG = """
dataset:
  coords_file: data/coords.npy
  values_file: data/values.npy
mean: 1.5
covariance:
  sill: 5.0
  range: 0.25
targets:
  - [0.5, 0.5]
  - [0.2, 0.8]
"""


def test_load_config(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text(CONFIG, encoding="utf-8")
    cfg = load_config(p)
    assert cfg["mean"] == 1.5

    params = parameters_from_config(cfg["covariance"])
    assert params == CovarianceParameters(sill=5.0, range=0.25, smoothness=0.5, nugget=0.0)
    assert targets_from_config(cfg) == [Location(0.5, 0.5), Location(0.2, 0.8)]


def test_empty_config(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == {}


def test_config_must_be_mapping(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(p)


def test_parameters_missing_range():
    with pytest.raises(KeyError):
        parameters_from_config({"sill": 1.0})


def test_parameter_variant_overrides_base():
    base = CovarianceParameters(sill=5.0, range=0.25, smoothness=0.5, nugget=0.0)
    p = parameters_from_config({"name": "m15", "smoothness": 1.5, "nugget": 0.1}, base=base)
    assert p == CovarianceParameters(sill=5.0, range=0.25, smoothness=1.5, nugget=0.1)


def test_load_coords_and_values(tmp_path):
    np.save(tmp_path / "coords.npy", np.arange(6.0).reshape(3, 2))
    np.save(tmp_path / "values.npy", np.array([[1.0], [2.0], [3.0]]))
    np.save(tmp_path / "bands.npy", {"Delta": np.array([4.0, 5.0, 6.0])}, allow_pickle=True)

    assert load_coords(tmp_path / "coords.npy").shape == (3, 2)
    assert load_values(tmp_path / "values.npy").shape == (3,)
    assert np.allclose(load_values(tmp_path / "bands.npy", values_key="Delta"), [4.0, 5.0, 6.0])
    with pytest.raises(KeyError):
        load_values(tmp_path / "bands.npy", values_key="Theta")


def test_load_coords_rejects_3d(tmp_path):
    np.save(tmp_path / "c3.npy", np.zeros((4, 3)))
    with pytest.raises(ValueError):
        load_coords(tmp_path / "c3.npy")


def test_drop_non_finite():
    coords = np.array([[0.0, 0.0], [np.nan, 1.0], [2.0, 2.0]])
    values = np.array([1.0, 2.0, np.inf])
    c, v = drop_non_finite(coords, values)
    assert c.shape == (1, 2)
    assert v.tolist() == [1.0]


def test_save_csv_union_header(tmp_path):
    path = tmp_path / "sub" / "rows.csv"
    save_csv([{"a": 1}, {"a": 2, "b": 3}], path)
    assert path.read_text(encoding="utf-8").splitlines()[0] == "a,b"


def test_results_dir_override(tmp_path, monkeypatch):
    monkeypatch.setenv("KRIGING_RESULTS_DIR", str(tmp_path))
    assert results_dir() == tmp_path.resolve()
    assert tables_dir() == tmp_path.resolve() / "tables"


def test_log_levels(capsys):
    try:
        set_verbose(False)
        log("hidden")
        log("shown", level="WARNING")
    finally:
        set_verbose(True)
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "WARNING shown" in out
