"""
Validation tests for properties of the filled histograms.

- Weight conservation across flavors and pt bins
- Jets with unknown flavor contribute nothing
- Linearity of filling in the weight
- Non-finite discriminants are accepted, never raised
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from jetperf.modules.exceptions import JetPerfError, UnknownFlavorError
from jetperf.modules.jet import Flavor
from jetperf.modules.jet_perf_hists import JetPerfHists


@pytest.mark.validation
class TestWeightConservation:
    """Total weight in the all-pt histograms equals the filled weight."""

    def test_batch(self, small_config, make_jet) -> None:
        rng = np.random.default_rng(7)
        hists = JetPerfHists(small_config)
        flavors = list(Flavor)
        total = 0.0
        for i in range(500):
            weight = float(rng.normal(1.0, 0.5))
            jet = make_jet(
                truth_label=flavors[i % 4],
                pt=float(rng.exponential(60_000.0)),
                pb=float(rng.uniform()), pc=float(rng.uniform()), pu=float(rng.uniform()),
                mv1=float(rng.uniform()),
            )
            hists.fill(jet, weight)
            total += weight

        assert sum(hists.total_weights().values()) == pytest.approx(total)
        for flavor in Flavor:
            per_flavor = hists[flavor]
            bin_total = sum(bin_hists.total_weight() for bin_hists in per_flavor.pt_btag)
            assert bin_total == pytest.approx(per_flavor.total_weight())
            for hist in per_flavor.btag.histograms().values():
                assert hist.total() == pytest.approx(per_flavor.total_weight())

    def test_unknown_flavor_jets_are_dropped_entirely(self, small_config, make_jet) -> None:
        hists = JetPerfHists(small_config)
        labels = [Flavor.B, 3, Flavor.U, 42, Flavor.T]
        accepted = 0.0
        n_errors = 0

        for label in labels:
            try:
                hists.fill(make_jet(truth_label=label), 1.0)
                accepted += 1.0
            except UnknownFlavorError:
                n_errors += 1

        assert n_errors == 2
        assert sum(hists.total_weights().values()) == accepted == 3.0

    def test_unknown_flavor_is_jet_perf_error(self, small_config, make_jet) -> None:
        with pytest.raises(JetPerfError):
            JetPerfHists(small_config).fill(make_jet(truth_label=1), 1.0)


@pytest.mark.validation
class TestNumericEdgeCases:
    """Numeric edge cases are histogrammed, not escalated."""

    @pytest.mark.parametrize("pb, pc, pu", [
        (0.5, 0.5, 0.0),
        (0.0, 0.5, 0.5),
        (0.0, 0.0, 0.0),
        (1.0, 0.0, 0.0),
    ])
    def test_degenerate_triples_are_filled(self, small_config, make_jet, pb, pc, pu) -> None:
        hists = JetPerfHists(small_config)

        hists.fill(make_jet(pb=pb, pc=pc, pu=pu), 1.0)

        btag = hists[Flavor.B].btag
        for hist in (btag.gaia_anti_light, btag.gaia_anti_charm, btag.gaia_gr1):
            assert hist.total() == 1.0

    def test_tagger_scores_out_of_range(self, small_config, make_jet) -> None:
        hists = JetPerfHists(small_config)

        hists.fill(make_jet(mv1=-0.5, mv2c10=1.5, mv2c20=math.nan), 1.0)

        btag = hists[Flavor.B].btag
        assert btag.mv1.values[0] == 1.0
        assert btag.mv2c10.values[-1] == 1.0
        assert btag.mv2c20.values[-1] == 1.0


@pytest.mark.validation
class TestLinearity:
    """Filling twice with w equals filling once with 2w."""

    def test_full_hierarchy(self, small_config, make_jet) -> None:
        jet = make_jet(truth_label=Flavor.C, pt=95_000.0, pb=0.2, pc=0.5, pu=0.3)
        twice = JetPerfHists(small_config)
        twice.fill(jet, 0.75)
        twice.fill(jet, 0.75)
        once = JetPerfHists(small_config)
        once.fill(jet, 1.5)

        for mine, theirs in zip(twice[Flavor.C].pt_btag, once[Flavor.C].pt_btag):
            for name, hist in mine.histograms().items():
                np.testing.assert_allclose(hist.values, theirs.histograms()[name].values)
