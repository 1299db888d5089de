"""Headless scaffold fire model driving the tick engine."""

import logging
from typing import Optional

import pandas as pd
from mesa import DataCollector, Model

from . import engine
from .config import Configuration
from .errors import InvariantViolationError
from .grid import ScaffoldGrid, initialize
from .parameters import ParameterSet, resolve_inputs
from .stats import TickMetrics, initial_metrics, is_terminated

logger = logging.getLogger(__name__)

METRIC_FIELDS = (
    "peak_temperature",
    "current_temperature",
    "collapsed_count",
    "burnt_count",
    "active_fire_count",
    "max_fire_area",
    "duration_ticks",
    "fire_duration_ticks",
)


class ScaffoldFireModel(Model):
    """Main model for a scaffold fire run using the cellular automaton engine."""

    def __init__(
        self,
        config: Optional[Configuration] = None,
        params: Optional[ParameterSet] = None,
        seed: Optional[int] = None,
        ignite: bool = True,
    ):
        """
        Initialize the scaffold fire model.

        Args:
            config: Run configuration, defaults to a bare bamboo scaffold
            params: Parameter table, defaults when None
            seed: Seed for the model's random generator
            ignite: Apply the forced ignition before the first tick
        """
        super().__init__(seed=seed)
        self.ignite = ignite
        self.grid: ScaffoldGrid
        self.metrics: TickMetrics
        self.reset(config, params)

    def reset(self, config: Optional[Configuration] = None, params: Optional[ParameterSet] = None) -> None:
        """
        Replace the grid wholesale, optionally with a new configuration.

        Telemetry collected so far is discarded.
        """
        if config is None:
            config = getattr(self, "config", None) or Configuration()
        if params is None:
            params = getattr(self, "params", None)
        self.config, self.params = resolve_inputs(config, params)

        self.grid = initialize(self.config, self.params, self.random)
        if self.ignite:
            self.grid = engine.force_ignite(self.grid, self.config, self.params)
        self.metrics = initial_metrics(self.params)
        self.running = True
        self.datacollector = DataCollector(
            model_reporters={name: _reporter(name) for name in METRIC_FIELDS}
        )
        logger.info(
            f"Initialized {self.config.width}x{self.config.height} {self.config.material.value} scaffold "
            f"(netting={self.config.netting.value}, debris={self.config.debris_coverage:.0%}, "
            f"weather={self.config.weather.value})"
        )

    def step(self):
        """Advance one tick and record its telemetry."""
        if not self.running:
            return
        lost_before = self.metrics.structural_loss
        try:
            self.grid, self.metrics = engine.step(self.grid, self.config, self.params, self.random, self.metrics)
        except InvariantViolationError as e:
            logger.error(f"Tick {self.metrics.duration_ticks + 1} aborted: {e}")
            self.running = False
            raise
        self.datacollector.collect(self)

        if self.metrics.structural_loss > lost_before:
            logger.info(
                f"Tick {self.metrics.duration_ticks}: {self.metrics.structural_loss} structural cells lost"
            )
        if is_terminated(self.metrics):
            self.running = False
            logger.info(
                f"Simulation ended after {self.metrics.duration_ticks} ticks "
                f"(fire burned for {self.metrics.fire_duration_ticks})"
            )

    def run(self, max_ticks: int = 1000) -> TickMetrics:
        """
        Step until the run terminates or ``max_ticks`` ticks have passed.

        Returns:
            Metrics of the last tick
        """
        for _ in range(max_ticks):
            if not self.running:
                break
            self.step()
        if self.running:
            logger.warning(f"Run still active after {max_ticks} ticks")
        return self.metrics

    def history(self) -> pd.DataFrame:
        """Telemetry time series, one row per tick."""
        df = self.datacollector.get_model_vars_dataframe()
        df.index = pd.RangeIndex(1, len(df) + 1, name="tick")
        return df

    def summary(self) -> pd.Series:
        """Final metrics together with the configuration that produced them."""
        data = {
            "material": self.config.material.value,
            "netting": self.config.netting.value,
            "debris_coverage": self.config.debris_coverage,
            "weather": self.config.weather.value,
        }
        data.update(self.metrics.to_dict())
        data["structural_loss"] = self.metrics.structural_loss
        return pd.Series(data)


def _reporter(name: str):
    return lambda model: getattr(model.metrics, name)
