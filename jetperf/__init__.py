"""
Jet flavor tagging performance histograms

Fills weighted discriminant histograms split by truth flavor and
transverse momentum bin, and writes them to HDF5.
"""

from .modules.btag_hists import BtagHists
from .modules.config import HistogramConfig
from .modules.exceptions import (
    ConfigurationError,
    DataLoadError,
    DuplicateGroupError,
    FieldMissingError,
    HistogramMismatchError,
    HistogramsFinalizedError,
    JetPerfError,
    UnknownFlavorError,
)
from .modules.flavored_hists import FlavoredHists
from .modules.histogram import Histogram
from .modules.jet import FLAVORS, Flavor, Jet, TagTriple
from .modules.jet_perf_hists import JetPerfHists
from .modules.pt_bins import PtBinTable

__version__ = "0.1.0"
