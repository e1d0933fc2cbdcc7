#!/usr/bin/env python3
"""
Fill jet flavor tagging performance histograms

Reads jets from an HDF5 file, fills discriminant histograms split by truth
flavor and transverse momentum, and writes them to a new HDF5 file:

    /<B|C|U|T>/btag/all/<histograms>
    /<B|C|U|T>/btag/ptBins/<low>-<high>/<histograms>

Usage:
    # Default binning, unit weights
    jetperf jets.h5 -o hists.h5

    # Per-jet weights and custom binning
    jetperf jets.h5 --weight-field weight --config my_binning.toml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import h5py
from tqdm import tqdm

from jetperf.modules.config import HistogramConfig
from jetperf.modules.exceptions import JetPerfError
from jetperf.modules.jet_perf_hists import JetPerfHists
from jetperf.modules.jet_reader import count_jets, read_jets
from jetperf.utils.logging_config import get_tqdm_kwargs, setup_logging, suppress_warnings


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "input_file",
        help="HDF5 file with a structured jet dataset"
    )

    parser.add_argument(
        "--output", "-o",
        default="jet_perf_hists.h5",
        help="Output HDF5 file, must not exist (default: jet_perf_hists.h5)"
    )

    parser.add_argument(
        "--dataset",
        default="jets",
        help="Name of the jet dataset in the input file (default: jets)"
    )

    parser.add_argument(
        "--weight-field",
        default=None,
        help="Field with per-jet weights (default: unit weights)"
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Histogram binning TOML file (default: bundled histograms.toml)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def run(args) -> JetPerfHists:
    """Fill histograms from args.input_file and write them to args.output"""
    logger = setup_logging(args.verbose)

    if args.config:
        config = HistogramConfig.from_toml(args.config)
    else:
        config = HistogramConfig.default()

    logger.info("=" * 70)
    logger.info("Jet flavor tagging performance histograms")
    logger.info("=" * 70)
    logger.info(f"  Input:   {args.input_file}:{args.dataset}")
    logger.info(f"  Weights: {args.weight_field or 'unit'}")
    logger.info(f"  Output:  {args.output}")
    logger.info(f"  Bins:    {config.n_bins} per histogram, {len(config.pt_edges_gev)} pt bins")

    if Path(args.output).exists():
        raise FileExistsError(f"Output file already exists: {args.output}")

    hists = JetPerfHists(config)
    n_jets = count_jets(args.input_file, args.dataset)
    jets = read_jets(args.input_file, args.dataset, weight_field=args.weight_field)
    for jet, weight in tqdm(jets, total=n_jets, **get_tqdm_kwargs("Filling")):
        hists.fill(jet, weight)

    with h5py.File(args.output, "w-") as out_file:
        hists.write_to(out_file)

    for flavor, total in hists.total_weights().items():
        logger.info(f"  {flavor}: total weight {total:.6g}")
    return hists


def main(argv=None) -> int:
    """Command line entry point"""
    args = parse_args(argv)
    suppress_warnings()
    try:
        run(args)
    except (JetPerfError, FileExistsError) as e:
        setup_logging(args.verbose).error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
