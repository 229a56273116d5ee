"""Named market regimes layered over a base market config."""

from __future__ import annotations

from dataclasses import replace
from enum import Enum

from rebalance_sim.config.models import MarketConfig, ModelType


class MarketPreset(str, Enum):
    BULL = "BULL"
    BEAR = "BEAR"
    SIDEWAYS = "SIDEWAYS"
    VOLATILE = "VOLATILE"
    CRASH = "CRASH"


def apply_preset(config: MarketConfig, preset: MarketPreset) -> MarketConfig:
    preset = MarketPreset(preset)
    if preset == MarketPreset.BULL:
        return replace(config, type=ModelType.GBM, drift=0.25, volatility=0.20)
    if preset == MarketPreset.BEAR:
        return replace(config, type=ModelType.GBM, drift=-0.20, volatility=0.25)
    if preset == MarketPreset.SIDEWAYS:
        return replace(
            config,
            type=ModelType.OU,
            mean_reversion_speed=6.0,
            volatility=0.30,
            long_term_mean=config.initial_price,
        )
    if preset == MarketPreset.VOLATILE:
        return replace(config, type=ModelType.GBM, drift=0.0, volatility=0.80)
    return replace(
        config,
        type=ModelType.JUMP,
        drift=0.05,
        volatility=0.20,
        jump_intensity=3.0,
        jump_mean=-0.20,
        jump_std_dev=0.05,
    )
