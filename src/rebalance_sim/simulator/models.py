"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class TradeAction(str, Enum):
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class StepRecord:
    day: int
    price: float
    hold_value: float
    strategy_cash: float
    strategy_asset_value: float
    strategy_value: float
    allocation: float
    target_allocation: float
    hold_drawdown: float
    strategy_drawdown: float
    rsi: Optional[float] = None
    adx: Optional[float] = None
    action: TradeAction = TradeAction.HOLD
    trade_amount: Optional[float] = None  # signed; set only when a trade executed
    fee: float = 0.0


@dataclass(frozen=True)
class SimulationResult:
    records: tuple[StepRecord, ...]
    total_rebalances: int
    total_fees: float
    hold_return: float
    strategy_return: float
    max_drawdown_hold: float
    max_drawdown_strategy: float

    @property
    def final_step(self) -> StepRecord:
        return self.records[-1]

    @property
    def alpha(self) -> float:
        return self.strategy_return - self.hold_return


def summarize_records(records: Sequence[StepRecord], initial_capital: float) -> SimulationResult:
    """Aggregate a full record sequence into a result."""
    if not records:
        raise ValueError("records must not be empty")
    if initial_capital <= 0:
        raise ValueError("initial_capital must be positive")

    final = records[-1]
    total_rebalances = sum(1 for record in records if record.action != TradeAction.HOLD)
    total_fees = 0.0
    for record in records:
        total_fees += record.fee
    return SimulationResult(
        records=tuple(records),
        total_rebalances=total_rebalances,
        total_fees=total_fees,
        hold_return=(final.hold_value - initial_capital) / initial_capital,
        strategy_return=(final.strategy_value - initial_capital) / initial_capital,
        max_drawdown_hold=max(record.hold_drawdown for record in records),
        max_drawdown_strategy=max(record.strategy_drawdown for record in records),
    )
