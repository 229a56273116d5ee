"""Config models, loading and freezing."""

from rebalance_sim.config.models import (
    AllocationMode,
    InvalidConfigError,
    MarketConfig,
    ModelType,
    RebalanceType,
    RunConfig,
    StrategyConfig,
)
from rebalance_sim.config.loader import (
    compute_config_hash,
    freeze_config,
    load_config,
    serialize_config,
    verify_config_lock,
)

__all__ = [
    "AllocationMode",
    "InvalidConfigError",
    "MarketConfig",
    "ModelType",
    "RebalanceType",
    "RunConfig",
    "StrategyConfig",
    "compute_config_hash",
    "freeze_config",
    "load_config",
    "serialize_config",
    "verify_config_lock",
]
