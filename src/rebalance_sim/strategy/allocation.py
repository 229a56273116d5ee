"""Target allocation policies, one per allocation mode."""

from __future__ import annotations

from typing import Callable

from rebalance_sim.config.models import AllocationMode, StrategyConfig
from rebalance_sim.strategy.indicators import IndicatorReading

RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
NEUTRAL_ALLOCATION = 0.5

AllocationPolicy = Callable[[StrategyConfig, IndicatorReading, float, float], float]


def fixed_target(strategy: StrategyConfig, reading: IndicatorReading, price: float, carried: float) -> float:
    return strategy.target_allocation


def rsi_target(strategy: StrategyConfig, reading: IndicatorReading, price: float, carried: float) -> float:
    """Oversold readings lean to ``max_allocation``, overbought to ``min_allocation``."""
    if reading.rsi is None:
        return carried
    factor = (reading.rsi - RSI_OVERSOLD) / (RSI_OVERBOUGHT - RSI_OVERSOLD)
    factor = max(0.0, min(1.0, factor))
    return strategy.max_allocation - factor * (strategy.max_allocation - strategy.min_allocation)


def adx_target(strategy: StrategyConfig, reading: IndicatorReading, price: float, carried: float) -> float:
    trend = reading.trend
    if trend is None:
        return carried
    if trend.adx > strategy.adx_threshold:
        return strategy.max_allocation if price > trend.sma else strategy.min_allocation
    return (strategy.max_allocation + strategy.min_allocation) / 2.0


_POLICIES: dict[AllocationMode, AllocationPolicy] = {
    AllocationMode.FIXED: fixed_target,
    AllocationMode.RSI: rsi_target,
    AllocationMode.ADX: adx_target,
}


def initial_target_allocation(strategy: StrategyConfig) -> float:
    if strategy.allocation_mode == AllocationMode.FIXED:
        return strategy.target_allocation
    return NEUTRAL_ALLOCATION


def target_allocation(
    strategy: StrategyConfig,
    reading: IndicatorReading,
    price: float,
    carried: float,
) -> float:
    return _POLICIES[strategy.allocation_mode](strategy, reading, price, carried)
