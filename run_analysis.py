#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional

from core.exceptions import AntennaLabError
from core.numeric import format_impedance
from inout.design_parser import parse_design, parse_sweep_config
from inout.presets import PRESETS, get_preset
from evaluation.sweep import sweep
from models.antenna_model import AntennaModel
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def _print_report(model: AntennaModel) -> None:
    summary = model.summary()
    nodes = model.calculate_nodes_and_antinodes().nodes
    print(f"Frequency:          {summary['frequency_mhz']:.3f} MHz")
    print(f"Length:             {summary['length_m']:.3f} m ({summary['electrical_length']:.3f} λ)")
    print(f"Antenna type:       {summary['antenna_type']}")
    print(f"Feed impedance:     {summary['impedance']}")
    print(f"Matching network:   {summary['matching_network']}")
    print(f"System impedance:   {summary['system_impedance']}")
    print(f"SWR:                {summary['swr']:.2f}:1 (Z0 = {model.design.reference_impedance:g} Ω)")
    print(f"Phase angle:        {summary['phase_angle_deg']:.1f}°")
    print(f"Harmonic:           {summary['harmonic']}")
    print(f"Resonance:          {summary['resonance']} - {summary['guidance']}")
    print(f"Current nodes:      {', '.join(f'{x:.3f}' for x in nodes.current_nodes)}")
    print(f"Current antinodes:  {', '.join(f'{x:.3f}' for x in nodes.current_antinodes)}")
    print(f"Voltage nodes:      {', '.join(f'{x:.3f}' for x in nodes.voltage_nodes)}")
    print(f"Voltage antinodes:  {', '.join(f'{x:.3f}' for x in nodes.voltage_antinodes)}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Analyse a wire antenna design and optionally sweep it.

    Command-line arguments:
      --design: Path to a YAML design file.
      --preset: Name of a built-in example design (instead of --design).
      --list-presets: Print the available presets and exit.
      --sweep: Optional path to a YAML sweep configuration.
      --dump: Optional CSV path for the sweep table.
      --verbose: Enable DEBUG logging.
      --log-file: Optional path that receives a copy of the log.
    """
    parser = argparse.ArgumentParser(description="Closed-form wire antenna analysis.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--design", help="Path to the YAML design file.")
    source.add_argument("--preset", help="Built-in example design name.")
    source.add_argument("--list-presets", action="store_true", help="List built-in designs.")
    parser.add_argument("--sweep", help="Path to the YAML sweep configuration file.", default=None)
    parser.add_argument("--dump", help="Write the sweep table to this CSV file.", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    parser.add_argument("--log-file", help="Also append log records to this file.", default=None)
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    if args.list_presets:
        for key, preset in sorted(PRESETS.items()):
            print(f"{key:18s} {preset.title} ({preset.frequency:g} MHz, {preset.category})")
        return 0

    if not (args.design or args.preset):
        parser.error("one of --design, --preset or --list-presets is required")

    try:
        design = parse_design(args.design) if args.design else get_preset(args.preset).to_design()
        model = AntennaModel(design)
        _print_report(model)

        if args.sweep:
            result = sweep(model, parse_sweep_config(args.sweep))
            logger.info("Sweep completed.")
            for err in result.errors:
                logger.warning(err)
            best = result.best()
            if best is not None:
                print(f"Sweep completed: {result.stats['points']} points in {result.stats['elapsed']:.3f} s; "
                      f"best SWR {best.swr:.2f} at {best.parameters} "
                      f"({format_impedance(best.impedance.resistance, best.impedance.reactance)})")
            if args.dump:
                result.to_dataframe().to_csv(args.dump, index=False)
                print(f"Sweep results dumped to {args.dump}")
    except (AntennaLabError, OSError) as e:
        logger.error("Analysis failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
