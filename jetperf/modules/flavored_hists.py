"""
Momentum-binned discriminant histograms for one truth flavor
"""

from __future__ import annotations

import logging
from typing import Optional

import h5py

from .btag_hists import BtagHists
from .config import HistogramConfig
from .exceptions import HistogramMismatchError, HistogramsFinalizedError
from .jet import Jet
from .pt_bins import PtBinTable
from .store import create_group


class FlavoredHists:
    """
    Discriminant histograms for all jets plus one set per pt bin.

    Attributes:
        pt_bins: Momentum bin table
        btag: Histograms for jets of any pt
        pt_btag: Histograms per pt bin, same order as pt_bins
        n_pt_missed: Jets that matched no pt bin (counted in btag only)
    """

    def __init__(self, config: Optional[HistogramConfig] = None) -> None:
        config = config or HistogramConfig.default()
        self.logger: logging.Logger = logging.getLogger("JetPerf.FlavoredHists")

        self.pt_bins = PtBinTable(config.pt_edges, config.pt_scale)
        self.btag = BtagHists(config)
        self.pt_btag: list[BtagHists] = [BtagHists(config) for _ in range(len(self.pt_bins))]
        self.n_pt_missed = 0
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def fill(self, jet: Jet, weight: float = 1.0) -> None:
        if self._finalized:
            raise HistogramsFinalizedError("Cannot fill FlavoredHists after write_to")
        self.btag.fill(jet, weight)
        index = self.pt_bins.find_bin(jet.pt)
        if index is None:
            self.n_pt_missed += 1
            return
        self.pt_btag[index].fill(jet, weight)

    def total_weight(self) -> float:
        return self.btag.total_weight()

    def check_compatible(self, other: FlavoredHists) -> None:
        """
        Raises:
            HistogramMismatchError: If pt bins or histogram binning differ
        """
        if self.pt_bins != other.pt_bins:
            raise HistogramMismatchError(
                f"Cannot add FlavoredHists with different pt bins: "
                f"{other.pt_bins} vs {self.pt_bins}"
            )
        if not self.btag.same_binning(other.btag):
            raise HistogramMismatchError("Cannot add FlavoredHists with different binning")

    def add(self, other: FlavoredHists) -> None:
        """
        Add the contents of other

        Raises:
            HistogramsFinalizedError: If these histograms were already written
            HistogramMismatchError: If the binning differs (nothing is added)
        """
        if self._finalized:
            raise HistogramsFinalizedError("Cannot add to FlavoredHists after write_to")
        self.check_compatible(other)
        self.btag.add(other.btag)
        for mine, theirs in zip(self.pt_btag, other.pt_btag):
            mine.add(theirs)
        self.n_pt_missed += other.n_pt_missed

    def __iadd__(self, other: FlavoredHists) -> FlavoredHists:
        self.add(other)
        return self

    def write_to(self, group: h5py.Group) -> None:
        """
        Write btag/all and btag/ptBins/<low>-<high> under `group`

        Raises:
            DuplicateGroupError: If any output group already exists
        """
        self._finalized = True
        btag_group = create_group(group, "btag")
        all_pt = create_group(btag_group, "all")
        self.btag.write_to(all_pt)

        pt_group = create_group(btag_group, "ptBins")
        for name, hists in zip(self.pt_bins.labels(), self.pt_btag):
            hists.write_to(create_group(pt_group, name))

        self.logger.debug(f"Wrote {len(self.pt_btag)} pt bins to {pt_group.name}")
        if self.n_pt_missed:
            self.logger.warning(
                f"{self.n_pt_missed} jet(s) in {group.name} matched no pt bin "
                f"and are only counted in 'all'"
            )
