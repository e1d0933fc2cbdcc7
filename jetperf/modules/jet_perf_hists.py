"""
Top level jet performance histograms, split by truth flavor
"""

from __future__ import annotations

import logging
from typing import Optional

import h5py

from .config import HistogramConfig
from .discriminants import flavor_string
from .exceptions import HistogramsFinalizedError, UnknownFlavorError
from .flavored_hists import FlavoredHists
from .jet import FLAVORS, Flavor, Jet
from .store import create_group

# Storage slot per flavor
FLAVOR_SLOTS: dict[Flavor, int] = {flavor: slot for slot, flavor in enumerate(FLAVORS)}


class JetPerfHists:
    """
    One FlavoredHists per truth flavor.

    Usage:
        >>> hists = JetPerfHists()
        >>> for jet, weight in jets:
        >>>     hists.fill(jet, weight)
        >>> with h5py.File("hists.h5", "w") as out_file:
        >>>     hists.write_to(out_file)
    """

    def __init__(self, config: Optional[HistogramConfig] = None) -> None:
        config = config or HistogramConfig.default()
        self.logger: logging.Logger = logging.getLogger("JetPerf.JetPerfHists")
        self.flavors: list[FlavoredHists] = [FlavoredHists(config) for _ in FLAVORS]
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _slot(self, label) -> int:
        try:
            return FLAVOR_SLOTS[label]
        except (KeyError, TypeError):
            raise UnknownFlavorError(label) from None

    def __getitem__(self, flavor) -> FlavoredHists:
        return self.flavors[self._slot(flavor)]

    def fill(self, jet: Jet, weight: float = 1.0) -> None:
        """
        Fill the histograms of the jet's truth flavor

        Raises:
            HistogramsFinalizedError: If the histograms were already written
            UnknownFlavorError: If the truth label is not B, C, U or T;
                no histogram is filled in that case
        """
        if self._finalized:
            raise HistogramsFinalizedError("Cannot fill JetPerfHists after write_to")
        self.flavors[self._slot(jet.truth_label)].fill(jet, weight)

    def total_weights(self) -> dict[str, float]:
        """Summed weight per flavor name"""
        return {
            flavor_string(flavor): self[flavor].total_weight()
            for flavor in FLAVORS
        }

    def add(self, other: JetPerfHists) -> None:
        """
        Add the contents of other, e.g. histograms filled in another thread

        Raises:
            HistogramsFinalizedError: If these histograms, or any flavor, were
                already written (nothing is added)
            HistogramMismatchError: If the binning differs (nothing is added)
        """
        if self._finalized or any(mine.finalized for mine in self.flavors):
            raise HistogramsFinalizedError("Cannot add to JetPerfHists after write_to")
        for mine, theirs in zip(self.flavors, other.flavors):
            mine.check_compatible(theirs)
        for mine, theirs in zip(self.flavors, other.flavors):
            mine.add(theirs)

    def __iadd__(self, other: JetPerfHists) -> JetPerfHists:
        self.add(other)
        return self

    def write_to(self, group: h5py.Group) -> None:
        """
        Write one group per flavor (B, C, U, T) under `group`

        Raises:
            DuplicateGroupError: If a flavor group already exists
        """
        self._finalized = True
        for flavor in FLAVORS:
            name = flavor_string(flavor)
            self[flavor].write_to(create_group(group, name))
        self.logger.info(f"Wrote histograms for {len(FLAVORS)} flavors to {group.file.filename}")
