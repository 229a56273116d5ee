"""Rebalancing strategy simulator over synthetic price paths."""

from rebalance_sim.config import MarketConfig, RunConfig, StrategyConfig
from rebalance_sim.market import generate_price_path
from rebalance_sim.simulator import SimulationResult, run_simulation

__all__ = [
    "MarketConfig",
    "RunConfig",
    "SimulationResult",
    "StrategyConfig",
    "generate_price_path",
    "run_simulation",
]
