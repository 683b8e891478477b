import math

import pytest

from fxhedge.meta.currency_catalog import STRATEGIES
from fxhedge.schemas.legs import OptionLeg, Strategy
from fxhedge.schemas.market import MarketContext
from fxhedge.schemas.strategy import StrategyPresetRequest
from fxhedge.services.evaluation import evaluate_strategy
from fxhedge.services.payoff import sweep_grid, sweep_step
from fxhedge.services.presets import (
    build_preset_legs,
    default_levels,
    preset_strategy,
    solve_zero_cost_collar,
)
from fxhedge.services.risk_reward import break_even_points, risk_reward_ratio
from fxhedge.services.strategy import compose_strategy


def _abs_leg(kind, strike, **kw):
    return OptionLeg(kind=kind, strike=strike, strike_mode="absolute", **kw)


def test_grid_has_101_points_spanning_the_sweep(eurusd):
    ev = evaluate_strategy(Strategy(legs=[_abs_leg("call", 1.14)]), eurusd)
    step = sweep_step(eurusd.spot)

    assert len(ev.curve) == 101
    assert abs(ev.curve[0].sweep_spot - 0.7 * eurusd.spot) <= step / 2
    assert abs(ev.curve[-1].sweep_spot - 1.3 * eurusd.spot) <= step / 2
    assert [p.sweep_spot for p in ev.curve] == pytest.approx(list(sweep_grid(eurusd.spot)))


def test_empty_strategy_leaves_rate_unhedged(eurusd):
    ev = evaluate_strategy(Strategy(legs=[]), eurusd, include_premium=True)

    assert all(p.hedged_rate == p.unhedged_rate for p in ev.curve)
    assert ev.summary.best_case == 0.0
    assert ev.summary.worst_case == 0.0
    assert ev.summary.risk_reward_ratio == 0.0
    assert ev.summary.break_even_points == []
    assert ev.forward_rate == pytest.approx(1.08 * math.exp(-0.01))


def test_straddle_is_symmetric_without_premium(eurusd):
    legs = [_abs_leg("call", eurusd.spot), _abs_leg("put", eurusd.spot)]
    ev = evaluate_strategy(Strategy(legs=legs), eurusd, include_premium=False)

    rel = [p.relative_payoff for p in ev.curve]
    for i in range(len(rel)):
        assert rel[i] == pytest.approx(rel[-1 - i], abs=1e-12)
    assert rel[50] == pytest.approx(0.0, abs=1e-12)


def test_vanilla_call_payoff_scenario(eurusd):
    composed = compose_strategy(Strategy(legs=[_abs_leg("call", 1.14)]), eurusd)
    premium = composed.outcomes[0].premium

    assert composed.outcomes[0].status == "ok"
    assert composed.outcomes[0].multiplier == 1.0
    assert composed.payoff(1.20, include_premium=True) == pytest.approx((1.20 - 1.14) - premium)
    assert composed.payoff(1.20, include_premium=False) == pytest.approx(0.06)
    assert composed.payoff(1.00, include_premium=True) == pytest.approx(-premium)


def test_knock_out_call_beyond_barrier_is_inactive(eurusd):
    leg = _abs_leg("callKO", 1.14, upper_barrier=1.16, upper_barrier_mode="absolute")
    composed = compose_strategy(Strategy(legs=[leg]), eurusd)
    outcome = composed.outcomes[0]
    vanilla = compose_strategy(Strategy(legs=[_abs_leg("call", 1.14)]), eurusd).total_premium

    assert outcome.multiplier == pytest.approx((0.08 / 1.08) / 0.1)
    assert outcome.premium == pytest.approx(vanilla * outcome.multiplier)
    assert composed.payoff(1.20, include_premium=True) == pytest.approx(-outcome.premium)
    assert composed.payoff(1.20, include_premium=False) == 0.0
    # below the barrier it pays like the vanilla call
    assert composed.payoff(1.15, include_premium=False) == pytest.approx(0.01)


def test_collar_clamps_hedged_rate(eurusd):
    S = eurusd.spot
    legs = [
        OptionLeg(leg_id="Put", kind="put", strike=95.0),
        OptionLeg(leg_id="Call", kind="call", strike=105.0, quantity_pct=-100.0),
    ]
    k_put, k_call = 0.95 * S, 1.05 * S

    bare = evaluate_strategy(Strategy(legs=legs), eurusd, include_premium=False)
    for p in bare.curve:
        assert p.hedged_rate == pytest.approx(min(max(p.sweep_spot, k_put), k_call))

    netted = evaluate_strategy(Strategy(legs=legs), eurusd, include_premium=True)
    net_premium = netted.composed.total_premium
    assert abs(net_premium) < 0.01
    for p in netted.curve:
        assert p.hedged_rate == pytest.approx(min(max(p.sweep_spot, k_put), k_call) - net_premium)


def test_reference_markers_on_first_point_only(eurusd):
    legs = [
        OptionLeg(leg_id="Put", kind="put", strike=95.0),
        _abs_leg("callKO", 1.14, upper_barrier=1.2, upper_barrier_mode="absolute"),
    ]
    ev = evaluate_strategy(Strategy(legs=legs), eurusd)

    assert ev.curve[0].reference_markers == pytest.approx(
        {"Put Strike": 0.95 * 1.08, "Option 2 Strike": 1.14, "Option 2 Upper Barrier": 1.2}
    )
    assert all(p.reference_markers == {} for p in ev.curve[1:])


def test_break_even_points_are_bracketed(eurusd):
    ev = evaluate_strategy(Strategy(legs=[_abs_leg("call", 1.14)]), eurusd, include_premium=True)
    spots = [p.sweep_spot for p in ev.curve]
    rel = [p.relative_payoff for p in ev.curve]

    assert len(ev.summary.break_even_points) == 1
    for be in ev.summary.break_even_points:
        brackets = [
            (spots[i - 1], spots[i])
            for i in range(1, len(rel))
            if (rel[i - 1] < 0 <= rel[i]) or (rel[i - 1] > 0 >= rel[i])
        ]
        assert any(lo < be <= hi for lo, hi in brackets)

    premium = ev.composed.total_premium
    assert ev.summary.break_even_points[0] == pytest.approx(1.14 + premium, abs=1e-9)


def test_break_even_interpolation():
    assert break_even_points([1.0, 2.0, 3.0], [-1.0, 1.0, 3.0]) == [1.5]
    assert break_even_points([1.0, 2.0, 3.0], [2.0, 0.0, -1.0]) == [2.0]
    # touching zero from zero is not a crossing
    assert break_even_points([1.0, 2.0, 3.0], [0.0, 0.0, 1.0]) == []


def test_risk_reward_ratio_edge_cases():
    assert risk_reward_ratio(2.0, -4.0) == 0.5
    assert risk_reward_ratio(1.0, 0.0) == math.inf
    assert risk_reward_ratio(0.0, 0.0) == 0.0
    assert risk_reward_ratio(-1.0, 0.0) == 0.0


def test_long_call_without_premium_is_unbounded(eurusd):
    ev = evaluate_strategy(Strategy(legs=[_abs_leg("call", 1.14)]), eurusd, include_premium=False)
    assert ev.summary.worst_case == 0.0
    assert ev.summary.worst_case_spot == ev.curve[0].sweep_spot
    assert ev.summary.best_case_spot == ev.curve[-1].sweep_spot
    assert math.isinf(ev.summary.risk_reward_ratio)


def test_bad_legs_do_not_abort_evaluation(eurusd):
    good = _abs_leg("put", 1.05)
    broken = _abs_leg("call", 1.10, volatility_pct=0.0)
    unfinished = OptionLeg(kind="callKO", strike=110.0)

    ev = evaluate_strategy(Strategy(legs=[good, broken, unfinished]), eurusd)
    alone = evaluate_strategy(Strategy(legs=[good]), eurusd)

    statuses = [o.status for o in ev.composed.outcomes]
    assert statuses == ["ok", "error", "skipped"]
    assert "volatility" in ev.composed.outcomes[1].error
    assert ev.composed.outcomes[2].error == "missing barrier"
    assert ev.composed.total_premium == pytest.approx(alone.composed.total_premium)
    assert [p.hedged_rate for p in ev.curve] == pytest.approx([p.hedged_rate for p in alone.curve])


def test_zero_maturity_reports_every_leg_as_error():
    market = MarketContext(spot=1.08, maturity=0.0)
    ev = evaluate_strategy(Strategy(legs=[_abs_leg("call", 1.1), _abs_leg("put", 1.0)]), market)
    assert [o.status for o in ev.composed.outcomes] == ["error", "error"]
    assert all(p.hedged_rate == p.unhedged_rate for p in ev.curve)


def test_default_levels_follow_pair_strike():
    lv = default_levels(spot=1.08, default_strike=1.14)
    assert lv.strike_upper == 1.14
    assert lv.strike_lower == pytest.approx(1.083)
    assert lv.strike_mid == 1.08
    assert lv.barrier_upper == pytest.approx(1.197)
    assert lv.barrier_lower == pytest.approx(1.026)

    assert default_levels(spot=2.0).strike_upper == pytest.approx(2.1)


@pytest.mark.parametrize(
    "preset,codes,signs",
    [
        ("collar", ["put", "call"], [1, -1]),
        ("strangle", ["put", "call"], [1, 1]),
        ("straddle", ["put", "call"], [1, 1]),
        ("put", ["put"], [1]),
        ("call", ["call"], [1]),
        ("seagull", ["put", "call", "put"], [1, -1, -1]),
        ("call_ko", ["callKO"], [1]),
        ("put_ki", ["putKI"], [1]),
        ("call_ko_put_ki", ["callKO", "putKI"], [1, 1]),
        ("forward", ["put", "call"], [1, -1]),
    ],
)
def test_preset_leg_shapes(preset, codes, signs):
    legs = build_preset_legs(
        preset,
        spot=1.08,
        levels=default_levels(spot=1.08, default_strike=1.14),
        volatility_pct=10.0,
        forward=1.07,
    )
    assert [leg.kind.code for leg in legs] == codes
    assert [math.copysign(1, leg.quantity_pct) for leg in legs] == signs


def test_unknown_preset_raises():
    with pytest.raises(ValueError):
        build_preset_legs("butterfly", spot=1.0, levels=default_levels(spot=1.0), volatility_pct=10.0)


def test_zero_cost_collar_from_call_strike(eurusd):
    res = solve_zero_cost_collar(eurusd, vol=0.10, call_strike=1.134)
    assert res.call_strike == 1.134
    assert 0.8 * 1.08 < res.put_strike < 1.134
    assert res.net_premium == pytest.approx(0.0, abs=1e-4)


def test_zero_cost_collar_from_put_strike(eurusd):
    res = solve_zero_cost_collar(eurusd, vol=0.10, put_strike=1.03)
    assert 1.03 < res.call_strike < 1.2 * 1.08
    assert res.put_price == pytest.approx(res.call_price, abs=1e-4)


@pytest.mark.parametrize("preset", sorted(STRATEGIES))
def test_every_preset_pays_somewhere_on_the_sweep(eurusd, preset):
    resp = preset_strategy(
        StrategyPresetRequest(market=eurusd, preset=preset, pair="EUR/USD", include_premium=False)
    )
    relative = [p.hedged_rate - p.unhedged_rate for p in resp.evaluation.curve]
    assert max(relative) > 0


def test_put_ki_preset_is_live_below_the_lower_barrier(eurusd):
    (leg,) = build_preset_legs(
        "put_ki", spot=1.08, levels=default_levels(spot=1.08, default_strike=1.14), volatility_pct=10.0
    )
    assert leg.upper_barrier is None
    assert leg.lower_barrier == pytest.approx(1.026)

    composed = compose_strategy(Strategy(legs=[leg]), eurusd)
    assert composed.payoff(1.0, include_premium=False) == pytest.approx(1.083 - 1.0)
    assert composed.payoff(1.05, include_premium=False) == 0.0


def test_forward_preset_locks_the_forward_rate(eurusd):
    resp = preset_strategy(StrategyPresetRequest(market=eurusd, preset="forward", bid_spread_pct=1.0))
    ev = resp.evaluation
    fwd = 1.08 * math.exp(-0.01)

    assert ev.forward_rate == pytest.approx(fwd)
    assert [leg.strike for leg in resp.legs] == pytest.approx([fwd, fwd])
    assert ev.total_premium == 0.0
    assert all(p.hedged_rate == pytest.approx(fwd, abs=1e-12) for p in ev.curve)
    assert ev.summary.break_even_points == pytest.approx([fwd], abs=1e-9)


def test_markers_for_legs_sharing_a_label_do_not_collide(eurusd):
    legs = [
        _abs_leg("put", 1.0, leg_id="Hedge"),
        _abs_leg("call", 1.2, leg_id="Hedge", quantity_pct=-100.0),
        _abs_leg("put", 0.95, leg_id="Tail"),
    ]
    ev = evaluate_strategy(Strategy(legs=legs), eurusd)

    assert ev.curve[0].reference_markers == {
        "Hedge (1) Strike": 1.0,
        "Hedge (2) Strike": 1.2,
        "Tail Strike": 0.95,
    }


def test_seagull_default_low_put_sits_below_the_bought_put(eurusd):
    resp = preset_strategy(StrategyPresetRequest(market=eurusd, preset="seagull", pair="EUR/USD"))
    long_put, _, short_put = resp.legs
    assert long_put.strike == pytest.approx(1.08)
    assert short_put.strike == pytest.approx(0.95 * 1.08)
    assert short_put.strike < long_put.strike
