"""Day-by-day rebalancing simulation against a buy-and-hold benchmark."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

from rebalance_sim.config.models import InvalidConfigError, MarketConfig, StrategyConfig
from rebalance_sim.simulator.models import (
    SimulationResult,
    StepRecord,
    TradeAction,
    summarize_records,
)
from rebalance_sim.strategy.allocation import initial_target_allocation, target_allocation
from rebalance_sim.strategy.indicators import IndicatorState, advance
from rebalance_sim.strategy.rebalance import exceeds_dust, should_rebalance

if TYPE_CHECKING:
    from rebalance_sim.monitoring.monitor import Monitor


@dataclass
class DrawdownTracker:
    peak: float
    max_drawdown: float = 0.0

    def update(self, value: float) -> float:
        self.peak = max(self.peak, value)
        drawdown = (self.peak - value) / self.peak
        self.max_drawdown = max(self.max_drawdown, drawdown)
        return drawdown


@dataclass
class _Book:
    cash: float
    units: float

    def asset_value(self, price: float) -> float:
        return self.units * price

    def total_value(self, price: float) -> float:
        return self.cash + self.units * price


def _allocation(asset_value: float, total_value: float) -> float:
    if total_value == 0:
        return 0.0
    return asset_value / total_value


def _validate_path(market: MarketConfig, price_path: Sequence[float]) -> None:
    if len(price_path) != market.days + 1:
        raise InvalidConfigError(
            f"price_path has {len(price_path)} prices, expected days + 1 = {market.days + 1}"
        )
    if price_path[0] != market.initial_price:
        raise InvalidConfigError(
            f"price_path starts at {price_path[0]}, expected initial_price {market.initial_price}"
        )
    for day, price in enumerate(price_path):
        if not math.isfinite(price) or price <= 0:
            raise InvalidConfigError(f"price on day {day} must be positive and finite, got {price}")


def run_simulation(
    market: MarketConfig,
    strategy: StrategyConfig,
    price_path: Sequence[float],
    monitor: Optional["Monitor"] = None,
) -> SimulationResult:
    _validate_path(market, price_path)

    capital = strategy.initial_capital
    initial_price = market.initial_price
    target = initial_target_allocation(strategy)

    # The benchmark is bought once at the configured split and never traded.
    hold = _Book(
        cash=capital * (1 - strategy.target_allocation),
        units=capital * strategy.target_allocation / initial_price,
    )
    book = _Book(cash=capital * (1 - target), units=capital * target / initial_price)
    hold_drawdown = DrawdownTracker(peak=capital)
    strategy_drawdown = DrawdownTracker(peak=capital)
    indicators = IndicatorState.create(strategy.indicator_period)

    records: list[StepRecord] = [
        StepRecord(
            day=0,
            price=initial_price,
            hold_value=capital,
            strategy_cash=book.cash,
            strategy_asset_value=book.asset_value(initial_price),
            strategy_value=capital,
            allocation=target,
            target_allocation=target,
            hold_drawdown=0.0,
            strategy_drawdown=0.0,
        )
    ]

    warmed_up = False
    for day in range(1, len(price_path)):
        price = price_path[day]
        prev_price = price_path[day - 1]
        indicators, reading = advance(indicators, price, prev_price)
        if monitor is not None and reading.ready and not warmed_up:
            monitor.indicators_ready(day)
        warmed_up = warmed_up or reading.ready

        target = target_allocation(strategy, reading, price, target)

        hold_value = hold.total_value(price)
        hold_dd = hold_drawdown.update(hold_value)

        asset_value = book.asset_value(price)
        total_value = book.cash + asset_value
        allocation = _allocation(asset_value, total_value)

        action = TradeAction.HOLD
        trade_amount: Optional[float] = None
        fee = 0.0
        if should_rebalance(strategy, day, allocation, target):
            diff = total_value * target - asset_value
            if exceeds_dust(diff):
                fee = abs(diff) * strategy.transaction_fee_rate
                book.cash -= diff + fee
                book.units += diff / price
                trade_amount = diff
                action = TradeAction.BUY if diff > 0 else TradeAction.SELL
                asset_value = book.asset_value(price)
                total_value = book.cash + asset_value
                allocation = _allocation(asset_value, total_value)
                if monitor is not None:
                    monitor.rebalance(day, action, diff, fee)

        strategy_dd = strategy_drawdown.update(total_value)

        records.append(
            StepRecord(
                day=day,
                price=price,
                hold_value=hold_value,
                strategy_cash=book.cash,
                strategy_asset_value=asset_value,
                strategy_value=total_value,
                allocation=allocation,
                target_allocation=target,
                hold_drawdown=hold_dd,
                strategy_drawdown=strategy_dd,
                rsi=reading.rsi,
                adx=reading.adx,
                action=action,
                trade_amount=trade_amount,
                fee=fee,
            )
        )

    result = summarize_records(records, capital)
    if monitor is not None:
        monitor.run_complete(result)
    return result
