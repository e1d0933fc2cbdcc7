"""
Jet record and truth flavor definitions

The integer values of Flavor are the truth label ids written by the upstream
jet producer (light = 0, charm = 4, bottom = 5, tau = 15), so they are not
contiguous and do not follow the B, C, U, T output order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class Flavor(IntEnum):
    """Truth flavor of a jet"""

    U = 0
    C = 4
    B = 5
    T = 15


# Canonical order for output
FLAVORS: tuple[Flavor, ...] = (Flavor.B, Flavor.C, Flavor.U, Flavor.T)


@dataclass(frozen=True)
class TagTriple:
    """Flavor tagger class probabilities (b, c, light). Not normalized."""

    pb: float
    pc: float
    pu: float


@dataclass(frozen=True)
class Jet:
    """
    One jet as seen by the histogramming code.

    Attributes:
        truth_label: Flavor, or the raw integer label from the input file
        pt: Transverse momentum in MeV
        tag: Probability triple used for the log-ratio discriminants
        mv1, mv2c00, mv2c10, mv2c20: Scalar tagger outputs
    """

    truth_label: Union[Flavor, int]
    pt: float
    tag: TagTriple
    mv1: float
    mv2c00: float
    mv2c10: float
    mv2c20: float
