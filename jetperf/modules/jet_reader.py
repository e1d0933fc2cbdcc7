"""
Read jets from an HDF5 structured-array dataset

The dataset must have one row per jet with the fields listed in
JET_FIELDS. An optional weight field gives the per-jet weight; without
one every jet has weight 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional

import h5py
import numpy as np

from .exceptions import DataLoadError, FieldMissingError
from .jet import Jet, TagTriple

JET_FIELDS: tuple[str, ...] = (
    "truth_label", "pt", "pb", "pc", "pu",
    "mv1", "mv2c00", "mv2c10", "mv2c20",
)

logger = logging.getLogger("JetPerf.JetReader")


def count_jets(file_path: str | Path, dataset: str = "jets") -> int:
    """Number of rows in the jet dataset"""
    with _open(file_path) as in_file:
        return len(_get_dataset(in_file, dataset, file_path))


def read_jets(file_path: str | Path,
              dataset: str = "jets",
              weight_field: Optional[str] = None,
              chunk_size: int = 100_000) -> Iterator[tuple[Jet, float]]:
    """
    Yield (jet, weight) for every row of `dataset`

    Args:
        file_path: Input HDF5 file
        dataset: Name of the structured-array dataset
        weight_field: Field holding per-jet weights (None for unit weights)
        chunk_size: Rows read from disk at a time

    Raises:
        DataLoadError: If the file or dataset cannot be read
        FieldMissingError: If a required field is missing
    """
    with _open(file_path) as in_file:
        ds = _get_dataset(in_file, dataset, file_path)

        fields = ds.dtype.names or ()
        required = JET_FIELDS + ((weight_field,) if weight_field else ())
        for field in required:
            if field not in fields:
                raise FieldMissingError(field, str(file_path))

        n_jets = len(ds)
        logger.info(f"Reading {n_jets} jets from {file_path}:{dataset}")
        for start in range(0, n_jets, chunk_size):
            chunk = ds[start:start + chunk_size]
            if weight_field:
                weights = chunk[weight_field].astype(np.float64)
            else:
                weights = np.ones(len(chunk))
            for row, weight in zip(chunk, weights):
                yield _jet_from_row(row), float(weight)


def _jet_from_row(row: np.void) -> Jet:
    return Jet(
        truth_label=int(row["truth_label"]),
        pt=float(row["pt"]),
        tag=TagTriple(float(row["pb"]), float(row["pc"]), float(row["pu"])),
        mv1=float(row["mv1"]),
        mv2c00=float(row["mv2c00"]),
        mv2c10=float(row["mv2c10"]),
        mv2c20=float(row["mv2c20"]),
    )


def _open(file_path: str | Path) -> h5py.File:
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"Input file not found: {file_path}")
    try:
        return h5py.File(file_path, "r")
    except OSError as e:
        raise DataLoadError(f"Cannot open input file {file_path}: {e}") from e


def _get_dataset(in_file: h5py.File, dataset: str, file_path) -> h5py.Dataset:
    if dataset not in in_file:
        raise DataLoadError(
            f"Dataset '{dataset}' not found in {file_path}. "
            f"Available: {list(in_file.keys())}"
        )
    ds = in_file[dataset]
    if not isinstance(ds, h5py.Dataset):
        raise DataLoadError(f"'{dataset}' in {file_path} is not a dataset")
    return ds
