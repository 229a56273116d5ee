"""Simulation event routing."""

from __future__ import annotations

from dataclasses import dataclass

from rebalance_sim.monitoring.notifier import Notifier
from rebalance_sim.simulator.models import SimulationResult, TradeAction


@dataclass
class Monitor:
    notifier: Notifier

    def indicators_ready(self, day: int) -> None:
        self.notifier.notify("WARMUP_COMPLETE", f"indicators defined from day {day}")

    def rebalance(self, day: int, action: TradeAction, amount: float, fee: float) -> None:
        self.notifier.notify(
            "REBALANCE",
            f"day {day} {action.value} {abs(amount):.2f} (fee {fee:.2f})",
        )

    def run_complete(self, result: SimulationResult) -> None:
        self.notifier.notify(
            "RUN_COMPLETE",
            f"{result.total_rebalances} rebalances, fees {result.total_fees:.2f}, "
            f"strategy {result.strategy_return * 100:.2f}% vs hold {result.hold_return * 100:.2f}%",
        )
