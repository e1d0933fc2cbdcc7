"""
Discriminant formulas and output naming helpers

The log-ratio discriminants are evaluated with numpy so that a zero
probability gives ±inf (or NaN) instead of raising. Those values are
passed on to the histograms unchanged.
"""

from __future__ import annotations

import math

import numpy as np

from .exceptions import UnknownFlavorError
from .jet import Flavor, TagTriple

INF_LABEL = "INF"
NONE_LABEL = "NONE"

_FLAVOR_NAMES = {
    Flavor.B: "B",
    Flavor.C: "C",
    Flavor.U: "U",
    Flavor.T: "T",
}


def btag_anti_u(tag: TagTriple) -> float:
    """ln(pb / pu): b versus light"""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(np.float64(tag.pb) / np.float64(tag.pu)))


def btag_anti_c(tag: TagTriple) -> float:
    """ln(pb / pc): b versus charm"""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(np.float64(tag.pb) / np.float64(tag.pc)))


def gr1(tag: TagTriple) -> float:
    """ln(pb / sqrt(pc * pu))"""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log(
            np.float64(tag.pb) / np.sqrt(np.float64(tag.pc) * np.float64(tag.pu))
        ))


def flavor_string(flavor) -> str:
    """
    Output group name for a truth flavor

    Raises:
        UnknownFlavorError: If flavor is not one of B, C, U, T
    """
    try:
        return _FLAVOR_NAMES[flavor]
    except (KeyError, TypeError):
        raise UnknownFlavorError(flavor) from None


def bin_string(edge: float, scale: int = 1000) -> str:
    """Label for a scaled momentum edge, in the unscaled unit, truncated toward zero"""
    if math.isinf(edge):
        return INF_LABEL
    return str(int(int(edge) / scale))
