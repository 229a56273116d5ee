from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from rebalance_sim.config import RunConfig, load_config
from rebalance_sim.market import MarketPreset, apply_preset, generate_price_path
from rebalance_sim.monitoring import LogNotifier, Monitor
from rebalance_sim.simulator import run_simulation


def _format_currency(value: float) -> str:
    return f"${value:,.2f}"


def _format_percent(value: float) -> str:
    return f"{value * 100:.2f}%"


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None)
    parser.add_argument("--preset", choices=[preset.value for preset in MarketPreset], default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--days", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    config = load_config(Path(args.config)) if args.config else RunConfig(name="default")
    market = config.market
    if args.preset:
        market = apply_preset(market, MarketPreset(args.preset))
    if args.days is not None:
        market = replace(market, days=args.days)
    seed = args.seed if args.seed is not None else config.seed

    monitor = Monitor(LogNotifier(stream=sys.stderr)) if args.verbose else None
    path = generate_price_path(market, seed=seed)
    result = run_simulation(market, config.strategy, path, monitor=monitor)
    final = result.final_step

    print(f"Run: {config.name} ({market.type.value}, {market.days} days, seed={seed})")
    print(f"Strategy equity:   {_format_currency(final.strategy_value)} ({_format_percent(result.strategy_return)})")
    print(f"Buy & hold equity: {_format_currency(final.hold_value)} ({_format_percent(result.hold_return)})")
    print(f"Alpha:             {_format_currency(final.strategy_value - final.hold_value)} ({_format_percent(result.alpha)})")
    print(
        f"Max drawdown:      {_format_percent(result.max_drawdown_strategy)} "
        f"(hold {_format_percent(result.max_drawdown_hold)})"
    )
    print(f"Rebalances:        {result.total_rebalances} (fees {_format_currency(result.total_fees)})")


if __name__ == "__main__":
    main()
