from __future__ import annotations

import streamlit as st

from rebalance_sim.config import (
    AllocationMode,
    InvalidConfigError,
    MarketConfig,
    ModelType,
    RebalanceType,
    StrategyConfig,
)
from rebalance_sim.market import MarketPreset, apply_preset, generate_price_path
from rebalance_sim.simulator import SimulationResult, TradeAction, run_simulation


def _format_currency(value: float) -> str:
    return f"${value:,.0f}"


def _format_percent(value: float) -> str:
    return f"{value * 100:.2f}%"


def _market_controls(base: MarketConfig) -> MarketConfig:
    sidebar = st.sidebar
    sidebar.header("Market")
    preset = sidebar.selectbox("Preset", ["(none)"] + [preset.value for preset in MarketPreset])
    if preset != "(none)":
        base = apply_preset(base, MarketPreset(preset))

    model_types = [model.value for model in ModelType]
    model = sidebar.selectbox("Model", model_types, index=model_types.index(base.type.value))
    initial_price = sidebar.number_input("Initial price", min_value=0.01, value=float(base.initial_price))
    days = int(sidebar.number_input("Days", min_value=1, max_value=5000, value=int(base.days), step=1))
    volatility = sidebar.number_input("Volatility (ann.)", min_value=0.0, value=float(base.volatility), step=0.01)
    drift = base.drift
    speed = base.mean_reversion_speed
    long_term_mean = base.long_term_mean
    jump_intensity = base.jump_intensity
    jump_mean = base.jump_mean
    jump_std_dev = base.jump_std_dev
    if model in (ModelType.GBM.value, ModelType.JUMP.value):
        drift = sidebar.number_input("Drift (ann.)", value=float(base.drift), step=0.01)
    if model == ModelType.OU.value:
        speed = sidebar.number_input("Reversion speed", value=float(base.mean_reversion_speed), step=0.5)
        long_term_mean = sidebar.number_input(
            "Long-term mean", min_value=0.01, value=float(base.long_term_mean)
        )
    if model == ModelType.JUMP.value:
        jump_intensity = sidebar.number_input("Jumps per year", min_value=0.0, value=float(base.jump_intensity))
        jump_mean = sidebar.number_input("Jump mean (log)", value=float(base.jump_mean), step=0.01)
        jump_std_dev = sidebar.number_input("Jump std dev (log)", min_value=0.0, value=float(base.jump_std_dev))

    return MarketConfig(
        initial_price=initial_price,
        days=days,
        type=ModelType(model),
        drift=drift,
        volatility=volatility,
        mean_reversion_speed=speed,
        long_term_mean=long_term_mean,
        jump_intensity=jump_intensity,
        jump_mean=jump_mean,
        jump_std_dev=jump_std_dev,
    )


def _strategy_controls(base: StrategyConfig) -> StrategyConfig:
    sidebar = st.sidebar
    sidebar.header("Strategy")
    capital = sidebar.number_input("Initial capital", min_value=1.0, value=float(base.initial_capital))
    modes = [mode.value for mode in AllocationMode]
    mode = sidebar.selectbox("Allocation mode", modes, index=modes.index(base.allocation_mode.value))
    target = sidebar.slider("Target allocation", 0.0, 1.0, float(base.target_allocation), 0.01)
    min_alloc, max_alloc = sidebar.slider(
        "Allocation bounds", 0.0, 1.0, (float(base.min_allocation), float(base.max_allocation)), 0.01
    )
    period = int(sidebar.number_input("Indicator period", min_value=2, value=int(base.indicator_period), step=1))
    adx_threshold = sidebar.number_input("ADX threshold", min_value=0.0, max_value=100.0, value=float(base.adx_threshold))
    triggers = [trigger.value for trigger in RebalanceType]
    trigger = sidebar.radio("Rebalance trigger", triggers, index=triggers.index(base.rebalance_type.value))
    threshold = sidebar.slider("Deviation threshold", 0.0, 0.5, float(base.rebalance_threshold), 0.01)
    frequency = int(sidebar.number_input("Interval (days)", min_value=1, value=int(base.rebalance_frequency), step=1))
    fee_rate = sidebar.number_input("Fee rate", min_value=0.0, value=float(base.transaction_fee_rate), step=0.0005, format="%.4f")

    return StrategyConfig(
        initial_capital=capital,
        allocation_mode=AllocationMode(mode),
        target_allocation=target,
        min_allocation=min_alloc,
        max_allocation=max_alloc,
        indicator_period=period,
        adx_threshold=adx_threshold,
        rebalance_type=RebalanceType(trigger),
        rebalance_threshold=threshold,
        rebalance_frequency=frequency,
        transaction_fee_rate=fee_rate,
    )


def _render_result(result: SimulationResult) -> None:
    final = result.final_step
    col_a, col_b, col_c, col_d, col_e = st.columns(5)
    col_a.metric("Strategy Equity", _format_currency(final.strategy_value), _format_percent(result.strategy_return))
    col_b.metric("Buy & Hold Equity", _format_currency(final.hold_value), _format_percent(result.hold_return))
    col_c.metric(
        "Alpha",
        _format_currency(final.strategy_value - final.hold_value),
        _format_percent(result.alpha),
    )
    col_d.metric(
        "Max Drawdown",
        _format_percent(result.max_drawdown_strategy),
        f"hold {_format_percent(result.max_drawdown_hold)}",
        delta_color="off",
    )
    col_e.metric("Trades", str(result.total_rebalances), f"fees {_format_currency(result.total_fees)}", delta_color="off")

    records = result.records
    st.subheader("Equity")
    st.line_chart(
        {
            "Strategy": [record.strategy_value for record in records],
            "Buy & hold": [record.hold_value for record in records],
        }
    )

    st.subheader("Price")
    st.line_chart({"Price": [record.price for record in records]})
    trades = [record for record in records if record.action != TradeAction.HOLD]
    st.caption(
        f"{sum(1 for r in trades if r.action == TradeAction.BUY)} buys, "
        f"{sum(1 for r in trades if r.action == TradeAction.SELL)} sells"
    )

    st.subheader("Allocation")
    st.line_chart(
        {
            "Realized": [record.allocation for record in records],
            "Target": [record.target_allocation for record in records],
        }
    )


def main() -> None:
    st.set_page_config(page_title="Rebalance Simulator", layout="wide")
    st.title("Rebalancing vs Buy & Hold")

    try:
        market = _market_controls(MarketConfig())
        strategy = _strategy_controls(StrategyConfig())
    except InvalidConfigError as exc:
        st.error(str(exc))
        return

    if st.sidebar.button("Regenerate market") or st.session_state.get("market") != market:
        st.session_state["market"] = market
        st.session_state["path"] = generate_price_path(market)

    result = run_simulation(market, strategy, st.session_state["path"])
    _render_result(result)


if __name__ == "__main__":
    main()
