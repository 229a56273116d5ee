"""Simulation engine and results."""

from rebalance_sim.simulator.models import (
    SimulationResult,
    StepRecord,
    TradeAction,
    summarize_records,
)
from rebalance_sim.simulator.engine import DrawdownTracker, run_simulation

__all__ = [
    "DrawdownTracker",
    "SimulationResult",
    "StepRecord",
    "TradeAction",
    "run_simulation",
    "summarize_records",
]
