"""Price path generation."""

from rebalance_sim.market.generator import (
    DT,
    TRADING_DAYS_PER_YEAR,
    PricePath,
    generate_gbm,
    generate_jump,
    generate_ou,
    generate_price_path,
)
from rebalance_sim.market.presets import MarketPreset, apply_preset
from rebalance_sim.market.sampler import NormalSampler, Sampler

__all__ = [
    "DT",
    "MarketPreset",
    "NormalSampler",
    "PricePath",
    "Sampler",
    "TRADING_DAYS_PER_YEAR",
    "apply_preset",
    "generate_gbm",
    "generate_jump",
    "generate_ou",
    "generate_price_path",
]
