import pytest

from rebalance_sim.config import (
    AllocationMode,
    InvalidConfigError,
    MarketConfig,
    ModelType,
    RebalanceType,
    StrategyConfig,
)
from rebalance_sim.market import generate_price_path
from rebalance_sim.monitoring import LogNotifier, Monitor, Notifier
from rebalance_sim.simulator import DrawdownTracker, TradeAction, run_simulation, summarize_records


class _ZeroSampler:
    def sample(self, mean: float, std_dev: float) -> float:
        return 0.0

    def uniform(self) -> float:
        return 0.99


class _RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.events = []

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))


def _market(path):
    return MarketConfig(initial_price=path[0], days=len(path) - 1)


def _random_path(days=300, seed=21, model=ModelType.GBM):
    market = MarketConfig(days=days, type=model, volatility=0.5)
    return market, generate_price_path(market, seed=seed)


def test_flat_market_end_to_end():
    market = MarketConfig(initial_price=100, days=2, type=ModelType.GBM, drift=0.0, volatility=0.0)
    path = generate_price_path(market, sampler=_ZeroSampler())
    assert path == (100.0, 100.0, 100.0)

    strategy = StrategyConfig(
        initial_capital=10000,
        allocation_mode=AllocationMode.FIXED,
        target_allocation=0.5,
        rebalance_type=RebalanceType.THRESHOLD,
        rebalance_threshold=0.05,
        transaction_fee_rate=0.001,
    )
    result = run_simulation(market, strategy, path)

    assert len(result.records) == 3
    assert result.total_rebalances == 0
    assert result.total_fees == 0
    assert result.strategy_return == 0
    assert result.hold_return == 0
    assert result.max_drawdown_hold == 0
    assert result.max_drawdown_strategy == 0


def test_sell_rebalance_charges_fee_to_cash():
    path = (100.0, 200.0)
    strategy = StrategyConfig(initial_capital=10000, target_allocation=0.5, transaction_fee_rate=0.01)
    result = run_simulation(_market(path), strategy, path)

    step = result.records[1]
    assert step.action == TradeAction.SELL
    assert step.trade_amount == pytest.approx(-2500.0)
    assert step.fee == pytest.approx(25.0)
    assert step.strategy_cash == pytest.approx(7475.0)
    assert step.strategy_asset_value == pytest.approx(7500.0)
    assert step.strategy_value == pytest.approx(14975.0)
    assert step.allocation == pytest.approx(7500.0 / 14975.0)
    assert step.hold_value == pytest.approx(15000.0)
    assert result.total_rebalances == 1
    assert result.total_fees == pytest.approx(25.0)
    assert result.strategy_return == pytest.approx(0.4975)
    assert result.hold_return == pytest.approx(0.5)


def test_buy_rebalance_after_drop():
    path = (100.0, 50.0)
    strategy = StrategyConfig(initial_capital=10000, target_allocation=0.5, transaction_fee_rate=0.01)
    result = run_simulation(_market(path), strategy, path)

    step = result.records[1]
    assert step.action == TradeAction.BUY
    assert step.trade_amount == pytest.approx(1250.0)
    assert step.strategy_cash == pytest.approx(5000.0 - 1250.0 - 12.5)
    assert step.strategy_asset_value == pytest.approx(3750.0)
    assert step.hold_drawdown == pytest.approx(0.25)
    assert result.max_drawdown_hold == pytest.approx(0.25)


def test_day_zero_seed_record():
    market, path = _random_path(days=10)
    strategy = StrategyConfig(initial_capital=5000, allocation_mode=AllocationMode.RSI, target_allocation=0.9)
    first = run_simulation(market, strategy, path).records[0]

    assert first.day == 0
    assert first.hold_value == 5000
    assert first.strategy_value == 5000
    assert first.strategy_cash == pytest.approx(2500.0)
    assert first.allocation == 0.5
    assert first.target_allocation == 0.5
    assert first.action == TradeAction.HOLD
    assert first.trade_amount is None
    assert first.rsi is None and first.adx is None


def test_no_rebalance_tracks_benchmark_exactly():
    market, path = _random_path()
    strategy = StrategyConfig(
        allocation_mode=AllocationMode.FIXED,
        target_allocation=0.5,
        rebalance_type=RebalanceType.THRESHOLD,
        rebalance_threshold=0.5,
    )
    result = run_simulation(market, strategy, path)

    assert result.total_rebalances == 0
    assert [r.strategy_value for r in result.records] == [r.hold_value for r in result.records]
    assert result.strategy_return == result.hold_return


def test_frictionless_full_rebalance_hits_target():
    market, path = _random_path()
    strategy = StrategyConfig(
        target_allocation=0.6,
        rebalance_type=RebalanceType.THRESHOLD,
        rebalance_threshold=0.0,
        transaction_fee_rate=0.0,
    )
    result = run_simulation(market, strategy, path)

    assert result.total_rebalances > 0
    assert result.total_fees == 0
    assert all(record.fee == 0 for record in result.records)
    for record in result.records:
        if record.action != TradeAction.HOLD:
            assert record.allocation == pytest.approx(0.6)
            assert abs(record.trade_amount) > 1.0


def test_time_trigger_only_trades_on_schedule():
    path = tuple(100.0 if day % 2 == 0 else 110.0 for day in range(12))
    strategy = StrategyConfig(rebalance_type=RebalanceType.TIME, rebalance_frequency=5)
    result = run_simulation(_market(path), strategy, path)

    traded = {record.day: record.action for record in result.records if record.action != TradeAction.HOLD}
    assert traded == {5: TradeAction.SELL, 10: TradeAction.BUY}


def test_indicators_switch_on_when_window_fills():
    path = (100.0, 101.0, 103.0, 102.0, 104.0, 105.0)
    strategy = StrategyConfig(allocation_mode=AllocationMode.RSI, indicator_period=3)
    records = run_simulation(_market(path), strategy, path).records

    assert records[1].rsi is None and records[1].adx is None
    assert records[2].rsi is None and records[2].adx is None
    assert records[3].rsi is not None and records[3].adx is not None
    assert records[1].target_allocation == 0.5
    assert records[2].target_allocation == 0.5


def test_rsi_mode_lightens_in_steady_rally():
    path = tuple(100.0 + day for day in range(20))
    strategy = StrategyConfig(allocation_mode=AllocationMode.RSI, indicator_period=5)
    records = run_simulation(_market(path), strategy, path).records

    assert records[5].rsi == 100.0
    assert all(record.target_allocation == pytest.approx(0.2) for record in records[5:])


def test_adx_mode_goes_long_in_strong_uptrend():
    path = tuple(100.0 * 1.01**day for day in range(20))
    strategy = StrategyConfig(allocation_mode=AllocationMode.ADX, indicator_period=5, adx_threshold=25.0)
    records = run_simulation(_market(path), strategy, path).records

    assert records[4].target_allocation == 0.5
    assert all(record.target_allocation == 0.8 for record in records[5:])


@pytest.mark.parametrize("mode", list(AllocationMode))
def test_simulation_is_deterministic(mode):
    market, path = _random_path(model=ModelType.JUMP)
    strategy = StrategyConfig(allocation_mode=mode)
    assert run_simulation(market, strategy, path) == run_simulation(market, strategy, path)


def test_drawdowns_are_non_negative():
    market, path = _random_path(days=500, seed=8)
    result = run_simulation(market, StrategyConfig(), path)

    assert result.records[0].hold_drawdown == 0
    assert all(record.hold_drawdown >= 0 for record in result.records)
    assert all(record.strategy_drawdown >= 0 for record in result.records)
    assert result.max_drawdown_hold == max(record.hold_drawdown for record in result.records)


def test_drawdown_tracker_peak_is_monotone():
    tracker = DrawdownTracker(peak=100.0)
    peaks = []
    for value in (100.0, 110.0, 99.0, 120.0, 90.0):
        tracker.update(value)
        peaks.append(tracker.peak)
    assert peaks == [100.0, 110.0, 110.0, 120.0, 120.0]
    assert tracker.max_drawdown == pytest.approx(0.25)


def test_result_is_recomputable_from_records():
    market, path = _random_path()
    strategy = StrategyConfig(allocation_mode=AllocationMode.ADX, rebalance_threshold=0.02)
    result = run_simulation(market, strategy, path)
    assert summarize_records(result.records, strategy.initial_capital) == result
    assert result.alpha == pytest.approx(result.strategy_return - result.hold_return)


def test_empty_price_path_rejected():
    with pytest.raises(InvalidConfigError):
        run_simulation(MarketConfig(), StrategyConfig(), ())


def test_zero_price_rejected_before_trading():
    market = MarketConfig(days=3)
    strategy = StrategyConfig(allocation_mode=AllocationMode.ADX, indicator_period=2)
    with pytest.raises(InvalidConfigError, match="day 1"):
        run_simulation(market, strategy, (100.0, 0.0, 0.0, 50.0))


@pytest.mark.parametrize("bad_price", [-5.0, float("nan"), float("inf")])
def test_non_finite_or_negative_prices_rejected(bad_price):
    with pytest.raises(InvalidConfigError):
        run_simulation(MarketConfig(days=2), StrategyConfig(), (100.0, 101.0, bad_price))


def test_path_length_must_match_days():
    with pytest.raises(InvalidConfigError, match=r"days \+ 1"):
        run_simulation(MarketConfig(days=365), StrategyConfig(), (100.0, 101.0))


def test_path_must_start_at_initial_price():
    with pytest.raises(InvalidConfigError, match="initial_price"):
        run_simulation(MarketConfig(initial_price=100.0, days=1), StrategyConfig(), (90.0, 95.0))


def test_monitor_receives_run_events():
    market, path = _random_path()
    notifier = _RecordingNotifier()
    strategy = StrategyConfig(allocation_mode=AllocationMode.RSI)
    result = run_simulation(market, strategy, path, monitor=Monitor(notifier))

    events = [event for event, _ in notifier.events]
    assert events.count("WARMUP_COMPLETE") == 1
    assert events.count("REBALANCE") == result.total_rebalances
    assert events[-1] == "RUN_COMPLETE"
    warmup = next(message for event, message in notifier.events if event == "WARMUP_COMPLETE")
    assert warmup == "indicators defined from day 14"


def test_log_notifier_prints_prefixed_line(capsys):
    LogNotifier().notify("REBALANCE", "day 3 buy 12.00 (fee 0.01)")
    assert capsys.readouterr().out.strip() == "[REBALANCE-SIM] REBALANCE: day 3 buy 12.00 (fee 0.01)"
