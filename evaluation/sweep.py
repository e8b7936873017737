# evaluation/sweep.py
import itertools
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from core.types import Impedance
from inout.design_parser import validate_sweep_config
from models.antenna_model import AntennaModel
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_POINTS = 11
BATCH_SIZE = 100


@dataclass
class SweepPoint:
    """
    One evaluated design variant.

    Attributes:
        parameters: Swept field values for this point.
        impedance: Feed impedance (None when evaluation failed).
        system_impedance: Impedance after the matching network.
        swr: SWR against the design's reference impedance.
        error: Error message when evaluation failed.
    """
    parameters: Dict[str, float]
    impedance: Optional[Impedance] = None
    system_impedance: Optional[Impedance] = None
    swr: Optional[float] = None
    resonant: Optional[bool] = None
    harmonic: Optional[int] = None
    error: Optional[str] = None


@dataclass
class SweepResult:
    results: Dict[Tuple[Tuple[str, float], ...], Optional[SweepPoint]]
    errors: List[str]
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dataframe(self):
        import pandas as pd
        rows = []
        for key, point in self.results.items():
            row: Dict[str, Any] = dict(key)
            if point is not None:
                row.update({
                    "resistance": point.impedance.resistance,
                    "reactance": point.impedance.reactance,
                    "system_resistance": point.system_impedance.resistance,
                    "system_reactance": point.system_impedance.reactance,
                    "swr": point.swr,
                    "resonant": point.resonant,
                    "harmonic": point.harmonic,
                })
            else:
                row.update({"resistance": None, "reactance": None, "system_resistance": None,
                            "system_reactance": None, "swr": None, "resonant": None, "harmonic": None})
            rows.append(row)
        return pd.DataFrame(rows)

    def best(self) -> Optional[SweepPoint]:
        """Point with the lowest SWR."""
        valid = [p for p in self.results.values() if p is not None]
        return min(valid, key=lambda p: p.swr) if valid else None


def _axis_values(entry: Dict[str, Any]) -> List[float]:
    if "values" in entry:
        return [float(v) for v in entry["values"]]
    start, end = map(float, entry["range"])
    points = entry.get("points", DEFAULT_POINTS)
    if entry.get("scale", "linear") == "log":
        return np.logspace(np.log10(start), np.log10(end), points).tolist()
    return np.linspace(start, end, points).tolist()


def _evaluate_point(model: AntennaModel, overrides: Dict[str, float]) -> SweepPoint:
    try:
        variant = model.clone(**overrides)
        impedance = variant.calculate_impedance()
        matched = variant.apply_matching(impedance)
        nodes = variant.calculate_nodes_and_antinodes()
        return SweepPoint(
            parameters=overrides,
            impedance=impedance,
            system_impedance=matched.impedance,
            swr=variant.calculate_swr(),
            resonant=nodes.is_resonant,
            harmonic=nodes.harmonic,
        )
    except (ArithmeticError, ValueError) as e:
        logger.error("Error evaluating sweep point %s: %s", overrides, e)
        return SweepPoint(parameters=overrides, error=str(e))


def evaluate_batch(model: AntennaModel, batch: List[Dict[str, float]]) -> List[SweepPoint]:
    """Evaluate a batch of sweep points."""
    return [_evaluate_point(model, overrides) for overrides in batch]


def sweep(model: AntennaModel, config: Dict[str, Any], max_workers: Optional[int] = None) -> SweepResult:
    """
    Evaluate the model over the cartesian product of the configured axes.

    Every variant shares the model's ImpedanceCalculator, so repeated
    geometries hit the same (lock-guarded) cache across worker threads.
    """
    config = validate_sweep_config(config)
    keys = [entry["param"] for entry in config["sweep"]]
    axes = [_axis_values(entry) for entry in config["sweep"]]
    sweep_points = [dict(zip(keys, combo)) for combo in itertools.product(*axes)]

    results: Dict[Tuple[Tuple[str, float], ...], Optional[SweepPoint]] = {}
    errors: List[str] = []
    start_time = time.time()

    batches = [sweep_points[i:i + BATCH_SIZE] for i in range(0, len(sweep_points), BATCH_SIZE)]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(evaluate_batch, model, batch) for batch in batches]
        for future in futures:
            for point in future.result():
                key = tuple((k, round(v, 9)) for k, v in point.parameters.items())
                if point.error:
                    errors.append(f"Params {point.parameters}: {point.error}")
                    results[key] = None
                else:
                    results[key] = point

    elapsed = time.time() - start_time
    stats = {"points": len(sweep_points), "elapsed": elapsed}
    logger.info("Sweep of %d points finished in %.3f s (%d errors).", len(sweep_points), elapsed, len(errors))
    return SweepResult(results, errors, stats)
