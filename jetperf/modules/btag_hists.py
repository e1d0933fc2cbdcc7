"""
Flavor tagging discriminant histograms for one slice of jets

A BtagHists bundles the seven discriminant histograms that are filled for
every jet: the four scalar tagger outputs and the three log-ratio
discriminants built from the tagger probability triple.
"""

from __future__ import annotations

import logging
from typing import Optional

import h5py

from .config import HistogramConfig
from .discriminants import btag_anti_c, btag_anti_u, gr1
from .exceptions import HistogramMismatchError, HistogramsFinalizedError
from .histogram import Histogram
from .jet import Jet

# (attribute, dataset name) in write-out order
HIST_NAMES: tuple[tuple[str, str], ...] = (
    ("mv1", "mv1"),
    ("gaia_anti_light", "gaiaAntiU"),
    ("gaia_anti_charm", "gaiaAntiC"),
    ("gaia_gr1", "gaiaGr1"),
    ("mv2c00", "mv2c00"),
    ("mv2c10", "mv2c10"),
    ("mv2c20", "mv2c20"),
)


class BtagHists:
    """Seven discriminant histograms sharing one bin count"""

    def __init__(self, config: Optional[HistogramConfig] = None) -> None:
        config = config or HistogramConfig.default()
        self.logger: logging.Logger = logging.getLogger("JetPerf.BtagHists")

        n_bins = config.n_bins
        tag_low, tag_high = config.tagger_range
        gaia_low, gaia_high = config.gaia_range

        self.mv1 = Histogram(n_bins, tag_low, tag_high)
        self.gaia_anti_light = Histogram(n_bins, gaia_low, gaia_high)
        self.gaia_anti_charm = Histogram(n_bins, gaia_low, gaia_high)
        self.gaia_gr1 = Histogram(n_bins, gaia_low, gaia_high)
        self.mv2c00 = Histogram(n_bins, tag_low, tag_high)
        self.mv2c10 = Histogram(n_bins, tag_low, tag_high)
        self.mv2c20 = Histogram(n_bins, tag_low, tag_high)
        self._finalized = False

    @property
    def finalized(self) -> bool:
        """True once write_to has been called"""
        return self._finalized

    def fill(self, jet: Jet, weight: float = 1.0) -> None:
        if self._finalized:
            raise HistogramsFinalizedError("Cannot fill BtagHists after write_to")
        self.mv1.fill(jet.mv1, weight)
        self.gaia_anti_light.fill(btag_anti_u(jet.tag), weight)
        self.gaia_anti_charm.fill(btag_anti_c(jet.tag), weight)
        self.gaia_gr1.fill(gr1(jet.tag), weight)
        self.mv2c00.fill(jet.mv2c00, weight)
        self.mv2c10.fill(jet.mv2c10, weight)
        self.mv2c20.fill(jet.mv2c20, weight)

    def histograms(self) -> dict[str, Histogram]:
        """Histograms keyed by their output dataset name"""
        return {name: getattr(self, attr) for attr, name in HIST_NAMES}

    def total_weight(self) -> float:
        """Summed weight of all filled jets"""
        return self.mv1.total()

    def same_binning(self, other: BtagHists) -> bool:
        return all(
            getattr(self, attr).same_binning(getattr(other, attr))
            for attr, _ in HIST_NAMES
        )

    def add(self, other: BtagHists) -> None:
        """
        Add the contents of other histogram by histogram

        Raises:
            HistogramsFinalizedError: If these histograms were already written
            HistogramMismatchError: If the binning differs (nothing is added)
        """
        if self._finalized:
            raise HistogramsFinalizedError("Cannot add to BtagHists after write_to")
        if not self.same_binning(other):
            raise HistogramMismatchError("Cannot add BtagHists with different binning")
        for attr, _ in HIST_NAMES:
            getattr(self, attr).add(getattr(other, attr))

    def __iadd__(self, other: BtagHists) -> BtagHists:
        self.add(other)
        return self

    def write_to(self, group: h5py.Group) -> None:
        """
        Write the seven histograms as datasets of `group`

        Raises:
            DuplicateGroupError: If any of the datasets already exists
        """
        self._finalized = True
        for name, hist in self.histograms().items():
            hist.write_to(group, name)
        self.logger.debug(f"Wrote {len(HIST_NAMES)} histograms to {group.name}")
