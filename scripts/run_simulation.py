#!/usr/bin/env python3
"""Main script to run the scaffold fire simulation."""

import logging
import sys
from pathlib import Path

# Add the src directory to the Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from scaffold_fire.config import SCENARIOS
from scaffold_fire.model import ScaffoldFireModel

logger = logging.getLogger(__name__)

CONFIG = {
    "scenario": "bamboo_worst_case",
    "seed": 42,
    "max_ticks": 1000,
    "print_every": 10,
    "history_csv": None,  # e.g. "results/history.csv"
}


def print_grid(model: ScaffoldFireModel) -> None:
    """
    Print a simple representation of the grid to console.

    Args:
        model: The ScaffoldFireModel instance to visualize
    """
    m = model.metrics
    print(
        f"tick {m.duration_ticks:4d}  burning {m.active_fire_count:3d}  "
        f"lost {m.structural_loss:3d}  max {m.current_temperature:6.1f}°C"
    )
    print(model.grid.render())


def main():
    """Run the scaffold fire simulation."""
    config = SCENARIOS[CONFIG["scenario"]]

    print("--- CREATING MODEL ---")
    model = ScaffoldFireModel(config, seed=CONFIG["seed"])

    print("--- INITIAL STATE (AFTER IGNITION) ---")
    print_grid(model)

    # Main simulation loop
    for _ in range(CONFIG["max_ticks"]):
        model.step()
        if model.metrics.duration_ticks % CONFIG["print_every"] == 0:
            print_grid(model)
        if not model.running:
            print("\nFire has burned out.")
            break
    else:
        logger.warning(f"Stopped after {CONFIG['max_ticks']} ticks with the fire still active")

    print("\n--- SUMMARY ---")
    print(model.summary().to_string())

    if CONFIG["history_csv"]:
        out = project_root / CONFIG["history_csv"]
        out.parent.mkdir(parents=True, exist_ok=True)
        model.history().to_csv(out)
        logger.info(f"History saved to {out}")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
    main()
