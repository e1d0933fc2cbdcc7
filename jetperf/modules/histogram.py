"""
Fixed-range, equal-width weighted histogram

A thin layer over a one-axis hist.Hist with double storage that adds
merging checks and HDF5 write-out. Bin contents are exposed with one
underflow and one overflow bin: index 0 is underflow, index n_bins + 1
is overflow. Non-finite values are absorbed by the flow bins (-inf to
underflow, +inf and NaN to overflow).
"""

from __future__ import annotations

import h5py
import hist
import numpy as np

from .exceptions import DuplicateGroupError, HistogramMismatchError


class Histogram:
    """
    Weighted 1D histogram with flow bins.

    Attributes:
        n_bins: Number of in-range bins
        low: Lower edge of the first bin
        high: Upper edge of the last bin
    """

    def __init__(self, n_bins: int, low: float, high: float) -> None:
        if n_bins < 1:
            raise ValueError(f"Histogram needs at least one bin, got {n_bins}")
        if not low < high:
            raise ValueError(f"Histogram range is empty: [{low}, {high})")

        self.n_bins = int(n_bins)
        self.low = float(low)
        self.high = float(high)
        self._hist = hist.Hist(
            hist.axis.Regular(self.n_bins, self.low, self.high, underflow=True, overflow=True),
            storage=hist.storage.Double(),
        )

    @property
    def values(self) -> np.ndarray:
        """Array of n_bins + 2 summed weights, flow bins included"""
        return self._hist.values(flow=True)

    def find_bin(self, value: float) -> int:
        """Index into values for value, flow bins included"""
        # the axis gives -1 for underflow and n_bins for overflow (NaN too)
        return int(self._hist.axes[0].index(value)) + 1

    def fill(self, value: float, weight: float = 1.0) -> None:
        self._hist.fill(value, weight=weight)

    @property
    def edges(self) -> np.ndarray:
        return self._hist.axes[0].edges

    def total(self) -> float:
        """Sum of weights in all bins, flow bins included"""
        return float(self._hist.sum(flow=True))

    def same_binning(self, other: Histogram) -> bool:
        return (
            self.n_bins == other.n_bins
            and self.low == other.low
            and self.high == other.high
        )

    def add(self, other: Histogram) -> None:
        """Add the contents of other bin by bin"""
        if not self.same_binning(other):
            raise HistogramMismatchError(
                f"Cannot add histogram ({other.n_bins}, {other.low}, {other.high}) "
                f"to histogram ({self.n_bins}, {self.low}, {self.high})"
            )
        self._hist += other._hist

    def __iadd__(self, other: Histogram) -> Histogram:
        self.add(other)
        return self

    def write_to(self, group: h5py.Group, name: str) -> h5py.Dataset:
        """
        Write the bin contents as dataset `name` under `group`

        Raises:
            DuplicateGroupError: If `name` already exists in `group`
        """
        if name in group:
            raise DuplicateGroupError(name, group.name)
        ds = group.create_dataset(name, data=self.values, compression="gzip")
        ds.attrs["n_bins"] = self.n_bins
        ds.attrs["low"] = self.low
        ds.attrs["high"] = self.high
        return ds

    def __repr__(self) -> str:
        return f"Histogram({self.n_bins}, {self.low}, {self.high})"
