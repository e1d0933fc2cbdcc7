"""
Histogram configuration

Loads binning parameters from a TOML file. The bundled default lives in
jetperf/config/histograms.toml.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import tomli

from .exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "histograms.toml"

logger = logging.getLogger("JetPerf.HistogramConfig")


@dataclass(frozen=True)
class HistogramConfig:
    """
    Binning shared by the whole histogram hierarchy.

    Attributes:
        n_bins: Bin count of every discriminant histogram
        tagger_range: (low, high) for mv1 and the mv2 taggers
        gaia_range: (low, high) for the log-ratio discriminants
        pt_edges_gev: Ascending upper momentum bin edges in GeV
        pt_scale: Factor converting GeV edges to the jet pt unit (MeV)
    """

    n_bins: int = 1000
    tagger_range: tuple[float, float] = (0.0, 1.0)
    gaia_range: tuple[float, float] = (-10.0, 10.0)
    pt_edges_gev: tuple[float, ...] = (
        0, 20, 30, 40, 50, 60, 75, 90, 110, 150, 200, 600, math.inf)
    pt_scale: int = 1000

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        if self.n_bins < 1:
            raise ConfigurationError(f"n_bins must be positive, got {self.n_bins}")
        for name in ("tagger_range", "gaia_range"):
            rng = getattr(self, name)
            if len(rng) != 2 or not rng[0] < rng[1]:
                raise ConfigurationError(
                    f"{name} must be [low, high] with low < high, got {list(rng)}"
                )
        if not self.pt_edges_gev:
            raise ConfigurationError("pt_bins.edges_gev must not be empty")
        for lo, hi in zip(self.pt_edges_gev, self.pt_edges_gev[1:]):
            if not lo < hi:
                raise ConfigurationError(
                    f"pt_bins.edges_gev must be strictly ascending: {lo} >= {hi}"
                )
        if self.pt_scale <= 0:
            raise ConfigurationError(f"pt_bins.scale must be positive, got {self.pt_scale}")

    @property
    def pt_edges(self) -> tuple[float, ...]:
        """Momentum bin edges in the jet pt unit"""
        return tuple(edge * self.pt_scale for edge in self.pt_edges_gev)

    @classmethod
    def from_dict(cls, config: dict[str, Any], source: str = "<dict>") -> HistogramConfig:
        try:
            hists = config["histograms"]
            pt_bins = config["pt_bins"]
            return cls(
                n_bins=int(hists["n_bins"]),
                tagger_range=tuple(float(x) for x in hists["tagger_range"]),
                gaia_range=tuple(float(x) for x in hists["gaia_range"]),
                pt_edges_gev=tuple(float(x) for x in pt_bins["edges_gev"]),
                pt_scale=int(pt_bins["scale"]),
            )
        except KeyError as e:
            raise ConfigurationError(
                f"Missing required key {e} in histogram configuration {source}"
            ) from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid value in histogram configuration {source}: {e}"
            ) from e

    @classmethod
    def from_toml(cls, config_path: str | Path) -> HistogramConfig:
        """
        Load configuration from a TOML file

        Raises:
            ConfigurationError: If file not found, parsing fails or values are invalid
        """
        config_path = Path(config_path)
        try:
            with open(config_path, "rb") as f:
                config = tomli.load(f)
        except FileNotFoundError:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}"
            )
        except tomli.TOMLDecodeError as e:
            raise ConfigurationError(
                f"Error parsing TOML file {config_path}: {e}"
            )

        loaded = cls.from_dict(config, source=str(config_path))
        logger.info(f"Loaded histogram configuration from {config_path}")
        return loaded

    @classmethod
    def default(cls) -> HistogramConfig:
        return _load_default()


@lru_cache(maxsize=1)
def _load_default() -> HistogramConfig:
    return HistogramConfig.from_toml(DEFAULT_CONFIG_PATH)
