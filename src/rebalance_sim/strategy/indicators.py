"""Streaming RSI and ADX style indicators over bounded windows."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Optional


@dataclass
class IndicatorState:
    """Rolling windows owned by exactly one simulation run.

    Every deque is bounded by ``period``; pushing into a full window evicts
    the oldest entry.
    """

    period: int
    gains: deque[float]
    losses: deque[float]
    true_ranges: deque[float]
    plus_dm: deque[float]
    minus_dm: deque[float]
    prices: deque[float]

    @classmethod
    def create(cls, period: int) -> "IndicatorState":
        if period < 1:
            raise ValueError("period must be positive")
        return cls(
            period=period,
            gains=deque(maxlen=period),
            losses=deque(maxlen=period),
            true_ranges=deque(maxlen=period),
            plus_dm=deque(maxlen=period),
            minus_dm=deque(maxlen=period),
            prices=deque(maxlen=period),
        )


@dataclass(frozen=True)
class TrendReading:
    adx: float
    sma: float


@dataclass(frozen=True)
class IndicatorReading:
    rsi: Optional[float] = None
    trend: Optional[TrendReading] = None

    @property
    def adx(self) -> Optional[float]:
        return None if self.trend is None else self.trend.adx

    @property
    def ready(self) -> bool:
        return self.rsi is not None and self.trend is not None


def rsi_step(state: IndicatorState, price: float, prev_price: float) -> Optional[float]:
    change = price - prev_price
    state.gains.append(max(change, 0.0))
    state.losses.append(max(-change, 0.0))
    if len(state.gains) < state.period or len(state.losses) < state.period:
        return None

    avg_gain = sum(state.gains) / state.period
    avg_loss = sum(state.losses) / state.period
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def trend_step(state: IndicatorState, price: float, prev_price: float) -> Optional[TrendReading]:
    move_up = price - prev_price
    move_down = prev_price - price
    state.prices.append(price)
    state.true_ranges.append(abs(price - prev_price))
    state.plus_dm.append(move_up if move_up > 0 and move_up > move_down else 0.0)
    state.minus_dm.append(move_down if move_down > 0 and move_down > move_up else 0.0)
    if len(state.true_ranges) < state.period:
        return None

    tr_sum = sum(state.true_ranges)
    sma = sum(state.prices) / state.period
    if tr_sum == 0:
        return TrendReading(adx=0.0, sma=sma)
    plus_di = 100.0 * (sum(state.plus_dm) / tr_sum)
    minus_di = 100.0 * (sum(state.minus_dm) / tr_sum)
    dx = 100.0 * abs(plus_di - minus_di) / max(plus_di + minus_di, 1.0)
    return TrendReading(adx=dx, sma=sma)


def advance(
    state: IndicatorState, price: float, prev_price: float
) -> tuple[IndicatorState, IndicatorReading]:
    """Feed one day into ``state`` and return it with the day's reading.

    The state is consumed: callers must feed each day once and in order.
    """
    rsi = rsi_step(state, price, prev_price)
    trend = trend_step(state, price, prev_price)
    return state, IndicatorReading(rsi=rsi, trend=trend)


class IndicatorTracker:
    def __init__(self, period: int) -> None:
        self.state = IndicatorState.create(period)

    @property
    def period(self) -> int:
        return self.state.period

    def update_rsi(self, price: float, prev_price: float) -> Optional[float]:
        return rsi_step(self.state, price, prev_price)

    def update_trend(self, price: float, prev_price: float) -> Optional[TrendReading]:
        return trend_step(self.state, price, prev_price)

    def update(self, price: float, prev_price: float) -> IndicatorReading:
        self.state, reading = advance(self.state, price, prev_price)
        return reading
