"""Load and freeze run configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from rebalance_sim.config.models import (
    AllocationMode,
    InvalidConfigError,
    MarketConfig,
    ModelType,
    RebalanceType,
    RunConfig,
    StrategyConfig,
    parse_enum,
)
from rebalance_sim.market.presets import MarketPreset, apply_preset


def load_config(path: str | Path) -> RunConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    market = _parse_market(data.get("market") or {})
    preset = data.get("preset")
    if preset is not None:
        market = apply_preset(market, parse_enum(MarketPreset, preset, "preset"))
    strategy = _parse_strategy(data.get("strategy") or {})
    seed = data.get("seed")

    return RunConfig(
        name=name,
        market=market,
        strategy=strategy,
        seed=None if seed is None else int(seed),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest()


def freeze_config(path: str | Path, lock_path: Optional[str | Path] = None) -> Path:
    path = Path(path)
    config_hash = compute_config_hash(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)

    payload = {
        "config_path": str(path),
        "config_hash": config_hash,
        "frozen_at_utc": datetime.now(timezone.utc).isoformat(),
    }
    lock_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return lock_path


def verify_config_lock(path: str | Path, lock_path: Optional[str | Path] = None) -> bool:
    path = Path(path)
    if lock_path is None:
        lock_path = path.with_suffix(path.suffix + ".lock.json")
    lock_path = Path(lock_path)
    if not lock_path.exists():
        return False
    payload = json.loads(lock_path.read_text(encoding="utf-8"))
    expected = payload.get("config_hash")
    return expected == compute_config_hash(path)


def serialize_config(config: RunConfig) -> dict[str, Any]:
    payload = asdict(config)
    payload["market"]["type"] = config.market.type.value
    payload["strategy"]["allocation_mode"] = config.strategy.allocation_mode.value
    payload["strategy"]["rebalance_type"] = config.strategy.rebalance_type.value
    return payload


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise InvalidConfigError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise InvalidConfigError(f"Missing required config key: {key}")
    return data[key]


def _parse_market(data: dict[str, Any]) -> MarketConfig:
    defaults = MarketConfig()
    return MarketConfig(
        initial_price=float(data.get("initial_price", defaults.initial_price)),
        days=int(data.get("days", defaults.days)),
        type=parse_enum(ModelType, str(data.get("type", defaults.type.value)).upper(), "type"),
        drift=float(data.get("drift", defaults.drift)),
        volatility=float(data.get("volatility", defaults.volatility)),
        mean_reversion_speed=float(data.get("mean_reversion_speed", defaults.mean_reversion_speed)),
        long_term_mean=float(data.get("long_term_mean", defaults.long_term_mean)),
        jump_intensity=float(data.get("jump_intensity", defaults.jump_intensity)),
        jump_mean=float(data.get("jump_mean", defaults.jump_mean)),
        jump_std_dev=float(data.get("jump_std_dev", defaults.jump_std_dev)),
    )


def _parse_strategy(data: dict[str, Any]) -> StrategyConfig:
    defaults = StrategyConfig()
    return StrategyConfig(
        initial_capital=float(data.get("initial_capital", defaults.initial_capital)),
        allocation_mode=parse_enum(
            AllocationMode,
            str(data.get("allocation_mode", defaults.allocation_mode.value)).lower(),
            "allocation_mode",
        ),
        target_allocation=float(data.get("target_allocation", defaults.target_allocation)),
        min_allocation=float(data.get("min_allocation", defaults.min_allocation)),
        max_allocation=float(data.get("max_allocation", defaults.max_allocation)),
        indicator_period=int(data.get("indicator_period", defaults.indicator_period)),
        adx_threshold=float(data.get("adx_threshold", defaults.adx_threshold)),
        rebalance_type=parse_enum(
            RebalanceType,
            str(data.get("rebalance_type", defaults.rebalance_type.value)).lower(),
            "rebalance_type",
        ),
        rebalance_threshold=float(data.get("rebalance_threshold", defaults.rebalance_threshold)),
        rebalance_frequency=int(data.get("rebalance_frequency", defaults.rebalance_frequency)),
        transaction_fee_rate=float(data.get("transaction_fee_rate", defaults.transaction_fee_rate)),
    )
