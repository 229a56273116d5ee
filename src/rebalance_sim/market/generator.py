"""Synthetic daily price paths for GBM, mean-reverting and jump-diffusion models."""

from __future__ import annotations

import math
from typing import Callable, Optional

from rebalance_sim.config.models import InvalidConfigError, MarketConfig, ModelType
from rebalance_sim.market.sampler import NormalSampler, Sampler

TRADING_DAYS_PER_YEAR = 252
DT = 1.0 / TRADING_DAYS_PER_YEAR

PricePath = tuple[float, ...]


def generate_gbm(config: MarketConfig, sampler: Sampler) -> PricePath:
    drift_component = (config.drift - 0.5 * config.volatility**2) * DT
    diffusion_scale = config.volatility * math.sqrt(DT)
    prices = [config.initial_price]
    for _ in range(config.days):
        shock = sampler.sample(0.0, 1.0)
        prices.append(prices[-1] * math.exp(drift_component + diffusion_scale * shock))
    return tuple(prices)


def generate_ou(config: MarketConfig, sampler: Sampler) -> PricePath:
    """Ornstein-Uhlenbeck in log-price space, reverting to ``long_term_mean``."""
    diffusion_scale = config.volatility * math.sqrt(DT)
    target_log_price = math.log(config.long_term_mean)
    log_price = math.log(config.initial_price)
    prices = [config.initial_price]
    for _ in range(config.days):
        shock = sampler.sample(0.0, 1.0)
        log_price += (
            config.mean_reversion_speed * (target_log_price - log_price) * DT
            + diffusion_scale * shock
        )
        prices.append(math.exp(log_price))
    return tuple(prices)


def generate_jump(config: MarketConfig, sampler: Sampler) -> PricePath:
    """GBM with at most one log-normal jump per day.

    Per day the shock is drawn first, then the uniform for the jump test, then
    the jump size only when the test fires.
    """
    drift_component = (config.drift - 0.5 * config.volatility**2) * DT
    diffusion_scale = config.volatility * math.sqrt(DT)
    jump_probability = config.jump_intensity * DT
    prices = [config.initial_price]
    for _ in range(config.days):
        shock = sampler.sample(0.0, 1.0)
        jump_component = 0.0
        if sampler.uniform() < jump_probability:
            jump_component = sampler.sample(config.jump_mean, config.jump_std_dev)
        exponent = drift_component + diffusion_scale * shock + jump_component
        prices.append(prices[-1] * math.exp(exponent))
    return tuple(prices)


_GENERATORS: dict[ModelType, Callable[[MarketConfig, Sampler], PricePath]] = {
    ModelType.GBM: generate_gbm,
    ModelType.OU: generate_ou,
    ModelType.JUMP: generate_jump,
}


def generate_price_path(
    config: MarketConfig,
    sampler: Optional[Sampler] = None,
    seed: Optional[int] = None,
) -> PricePath:
    generator = _GENERATORS.get(config.type)
    if generator is None:
        raise InvalidConfigError(f"Unsupported model type: {config.type}")
    if sampler is not None and seed is not None:
        raise ValueError("Pass either sampler or seed, not both")
    if sampler is None:
        sampler = NormalSampler(seed=seed)
    return generator(config, sampler)
