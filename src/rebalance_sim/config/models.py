"""Configuration models for reproducible runs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class InvalidConfigError(ValueError):
    """Raised when a market or strategy configuration cannot be simulated."""


class ModelType(str, Enum):
    GBM = "GBM"
    OU = "OU"
    JUMP = "JUMP"


class AllocationMode(str, Enum):
    FIXED = "fixed"
    RSI = "rsi"
    ADX = "adx"


class RebalanceType(str, Enum):
    THRESHOLD = "threshold"
    TIME = "time"


def parse_enum(enum_cls, value: Any, key: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidConfigError(f"Invalid {key}: {value}") from exc


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class MarketConfig:
    initial_price: float = 100.0
    days: int = 365
    type: ModelType = ModelType.GBM
    drift: float = 0.05
    volatility: float = 0.40
    mean_reversion_speed: float = 5.0
    long_term_mean: float = 100.0
    jump_intensity: float = 2.0
    jump_mean: float = -0.15
    jump_std_dev: float = 0.1

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", parse_enum(ModelType, self.type, "type"))
        if not math.isfinite(self.initial_price) or self.initial_price <= 0:
            raise InvalidConfigError("initial_price must be positive")
        if not _is_int(self.days) or self.days <= 0:
            raise InvalidConfigError("days must be a positive integer")
        for key in (
            "drift",
            "volatility",
            "mean_reversion_speed",
            "long_term_mean",
            "jump_intensity",
            "jump_mean",
            "jump_std_dev",
        ):
            if not math.isfinite(getattr(self, key)):
                raise InvalidConfigError(f"{key} must be finite")
        if self.volatility < 0:
            raise InvalidConfigError("volatility must be non-negative")
        if self.jump_intensity < 0:
            raise InvalidConfigError("jump_intensity must be non-negative")
        if self.jump_std_dev < 0:
            raise InvalidConfigError("jump_std_dev must be non-negative")
        if self.type == ModelType.OU and self.long_term_mean <= 0:
            raise InvalidConfigError("long_term_mean must be positive for the OU model")


@dataclass(frozen=True)
class StrategyConfig:
    initial_capital: float = 10_000.0
    allocation_mode: AllocationMode = AllocationMode.FIXED
    target_allocation: float = 0.50
    min_allocation: float = 0.20
    max_allocation: float = 0.80
    indicator_period: int = 14
    adx_threshold: float = 25.0
    rebalance_type: RebalanceType = RebalanceType.THRESHOLD
    rebalance_threshold: float = 0.05
    rebalance_frequency: int = 30
    transaction_fee_rate: float = 0.001

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "allocation_mode",
            parse_enum(AllocationMode, self.allocation_mode, "allocation_mode"),
        )
        object.__setattr__(
            self,
            "rebalance_type",
            parse_enum(RebalanceType, self.rebalance_type, "rebalance_type"),
        )
        if not math.isfinite(self.initial_capital) or self.initial_capital <= 0:
            raise InvalidConfigError("initial_capital must be positive")
        for key in ("target_allocation", "min_allocation", "max_allocation"):
            value = getattr(self, key)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(f"{key} must be within [0, 1]")
        if self.min_allocation > self.max_allocation:
            raise InvalidConfigError("min_allocation must not exceed max_allocation")
        if not _is_int(self.indicator_period) or self.indicator_period < 2:
            raise InvalidConfigError("indicator_period must be an integer >= 2")
        if not 0.0 <= self.rebalance_threshold <= 0.5:
            raise InvalidConfigError("rebalance_threshold must be within [0, 0.5]")
        if not _is_int(self.rebalance_frequency) or self.rebalance_frequency < 1:
            raise InvalidConfigError("rebalance_frequency must be an integer >= 1")
        if self.transaction_fee_rate < 0:
            raise InvalidConfigError("transaction_fee_rate must be non-negative")


@dataclass(frozen=True)
class RunConfig:
    name: str
    market: MarketConfig = field(default_factory=MarketConfig)
    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    seed: Optional[int] = None
