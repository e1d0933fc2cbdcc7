"""
Global pytest fixtures and configuration for the test suite.

Provides reusable fixtures for testing the histogram hierarchy without
duplicating setup code across test modules.
"""

from __future__ import annotations

import math
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generator

import h5py
import numpy as np
import pytest
import tomli_w

from jetperf.modules.config import HistogramConfig
from jetperf.modules.jet import Flavor, Jet, TagTriple
from jetperf.modules.jet_reader import JET_FIELDS


@pytest.fixture
def tmp_test_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test operations.

    Automatically cleaned up after test completion.

    Yields:
        Path to temporary directory
    """
    tmp_dir = Path(tempfile.mkdtemp(prefix="jetperf_test_"))
    try:
        yield tmp_dir
    finally:
        if tmp_dir.exists():
            shutil.rmtree(tmp_dir)


@pytest.fixture
def small_config() -> HistogramConfig:
    """
    Default pt edges with 10 bins per histogram.

    Bin width is 0.1 for the tagger histograms and 2.0 for the
    log-ratio histograms over [-10, 10).
    """
    return HistogramConfig(n_bins=10)


@pytest.fixture
def make_jet() -> Callable[..., Jet]:
    """
    Factory for jets with sensible defaults.

    Returns:
        Function accepting any Jet field (and pb, pc, pu) as keyword
    """
    def _make_jet(truth_label=Flavor.B, pt=25_000.0, pb=0.8, pc=0.1, pu=0.1,
                  mv1=0.9, mv2c00=0.5, mv2c10=0.5, mv2c20=0.5) -> Jet:
        return Jet(
            truth_label=truth_label,
            pt=pt,
            tag=TagTriple(pb, pc, pu),
            mv1=mv1,
            mv2c00=mv2c00,
            mv2c10=mv2c10,
            mv2c20=mv2c20,
        )
    return _make_jet


@pytest.fixture
def sample_config_dict() -> Dict[str, Any]:
    """
    Provide a minimal valid histogram configuration dictionary.

    Returns:
        Dictionary with the layout of histograms.toml
    """
    return {
        "histograms": {
            "n_bins": 20,
            "tagger_range": [0.0, 1.0],
            "gaia_range": [-5.0, 5.0],
        },
        "pt_bins": {
            "edges_gev": [0, 50, 100, math.inf],
            "scale": 1000,
        },
    }


@pytest.fixture
def config_file(tmp_test_dir: Path, sample_config_dict: Dict[str, Any]) -> Path:
    """
    Write sample_config_dict to a TOML file.

    Returns:
        Path to the TOML file
    """
    config_path = tmp_test_dir / "histograms.toml"
    with open(config_path, "wb") as f:
        tomli_w.dump(sample_config_dict, f)
    return config_path


def _jet_dtype(weight_field: str | None = None) -> np.dtype:
    fields = [("truth_label", "i4")] + [(name, "f4") for name in JET_FIELDS[1:]]
    if weight_field:
        fields.append((weight_field, "f8"))
    return np.dtype(fields)


@pytest.fixture
def mock_jet_array() -> np.ndarray:
    """
    Generate a reproducible structured array of jets.

    Labels cycle through B, C, U, T; weights are 0.5, 1.0, 1.5, ...

    Returns:
        Numpy structured array with JET_FIELDS and a 'weight' field
    """
    n_jets = 200
    rng = np.random.default_rng(42)

    data = np.zeros(n_jets, dtype=_jet_dtype("weight"))
    labels = [int(Flavor.B), int(Flavor.C), int(Flavor.U), int(Flavor.T)]
    data["truth_label"] = [labels[i % 4] for i in range(n_jets)]
    data["pt"] = rng.uniform(0.0, 800_000.0, n_jets)
    probs = rng.dirichlet([2.0, 2.0, 2.0], n_jets)
    data["pb"] = probs[:, 0]
    data["pc"] = probs[:, 1]
    data["pu"] = probs[:, 2]
    for name in ("mv1", "mv2c00", "mv2c10", "mv2c20"):
        data[name] = rng.uniform(0.0, 1.0, n_jets)
    data["weight"] = 0.5 * (np.arange(n_jets) % 3 + 1)

    return data


@pytest.fixture
def jets_file(tmp_test_dir: Path, mock_jet_array: np.ndarray) -> Path:
    """
    Write mock_jet_array to an HDF5 file as dataset 'jets'.

    Returns:
        Path to the HDF5 file
    """
    file_path = tmp_test_dir / "jets.h5"
    with h5py.File(file_path, "w") as f:
        f.create_dataset("jets", data=mock_jet_array)
    return file_path


@pytest.fixture
def output_file(tmp_test_dir: Path) -> Generator[h5py.File, None, None]:
    """
    Open a fresh writable HDF5 file.

    Yields:
        Open h5py.File, closed after the test
    """
    with h5py.File(tmp_test_dir / "hists.h5", "w") as f:
        yield f
