"""
Transverse momentum bin table

A jet goes to the bin of the first edge strictly greater than its pt,
so bin i covers [edge[i-1], edge[i]) and bin 0 only holds pt below
edge[0]. A pt exactly on an edge belongs to the bin that edge opens.
With +inf as the last edge every finite pt has a bin.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from typing import Iterable, Optional

from .discriminants import NONE_LABEL, bin_string
from .exceptions import ConfigurationError


class PtBinTable:
    """
    Ascending upper bin edges with successor lookup.

    Attributes:
        edges: Upper bin edges in the jet pt unit
        scale: Divisor converting an edge back to its label unit
    """

    def __init__(self, edges: Iterable[float], scale: int = 1000) -> None:
        self.edges: tuple[float, ...] = tuple(float(edge) for edge in edges)
        self.scale = scale

        if not self.edges:
            raise ConfigurationError("Momentum bin table needs at least one edge")
        for lo, hi in zip(self.edges, self.edges[1:]):
            if not lo < hi:
                raise ConfigurationError(
                    f"Momentum bin edges must be strictly ascending: {lo} >= {hi}"
                )

    def __len__(self) -> int:
        return len(self.edges)

    def find_bin(self, pt: float) -> Optional[int]:
        """Index of the first edge > pt, or None if there is none"""
        if math.isnan(pt):
            return None
        index = bisect_right(self.edges, pt)
        if index == len(self.edges):
            return None
        return index

    def bounds(self) -> list[tuple[float, float]]:
        """(lower, upper) edge for each bin, lower is -inf for the first"""
        lows = (-math.inf,) + self.edges[:-1]
        return list(zip(lows, self.edges))

    def labels(self) -> list[str]:
        """Group names '<low>-<high>' for each bin, in ascending order"""
        names = []
        for low, high in self.bounds():
            low_label = NONE_LABEL if low == -math.inf else bin_string(low, self.scale)
            names.append(f"{low_label}-{bin_string(high, self.scale)}")
        return names

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PtBinTable):
            return NotImplemented
        return self.edges == other.edges and self.scale == other.scale

    def __repr__(self) -> str:
        return f"PtBinTable({list(self.edges)}, scale={self.scale})"
