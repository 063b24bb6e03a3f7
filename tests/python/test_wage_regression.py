import math

import numpy as np
import pandas as pd
import pytest

from exposure_atlas.utils.regression import (
    Observation,
    fit_log_trend,
    observations_from_frame,
    pow10,
    resolve_domain,
    valid_observations,
)


def _obs(*pts):
    return [Observation(*p) for p in pts]


def test_fit_recovers_log_line_with_noise():
    """
    Synthetic log-linear wages with small noise and employment weights:
    slope/intercept close to truth and R^2 high.
    """
    rng = np.random.default_rng(42)
    n = 400
    true_a, true_b = 4.5, 0.3
    x = rng.uniform(0, 1, size=n)
    y = 10 ** (true_a + true_b * x + rng.normal(0, 0.02, size=n))
    w = rng.uniform(100, 10_000, size=n)

    res = fit_log_trend([Observation(a, b, c) for a, b, c in zip(x, y, w)], (0.0, 1.0))

    assert res is not None
    assert res.r_squared > 0.9, f"Low R^2: {res.r_squared}"
    assert abs(res.intercept - true_a) < 0.01, f"Intercept off: {res.intercept}"
    assert abs(res.slope - true_b) < 0.02, f"Slope off: {res.slope}"


def test_end_to_end_scenario():
    res = fit_log_trend(_obs((0, 10, 1), (1, 100, 1), (2, 1000, 1)), (0, 2))

    assert res is not None
    assert res.slope == pytest.approx(1.0)
    assert res.intercept == pytest.approx(1.0)
    assert res.r_squared == pytest.approx(1.0)
    start, end = res.points
    assert (start.x, end.x) == (0.0, 2.0)
    assert start.y == pytest.approx(10.0)
    assert end.y == pytest.approx(1000.0)


@pytest.mark.parametrize("pts", [[], [(1, 10)], [(1, 10), (2, -5)], [(1, 10), (float("nan"), 3)]])
def test_fewer_than_two_valid_points_gives_no_result(pts):
    assert fit_log_trend(_obs(*pts)) is None


def test_missing_weight_behaves_like_weight_one():
    pts = [(0.1, 30_000), (0.4, 52_000), (0.7, 61_000), (0.9, 95_000)]
    without = fit_log_trend(_obs(*pts))
    with_one = fit_log_trend(_obs(*[(x, y, 1) for x, y in pts]))
    assert without == with_one


def test_invalid_points_do_not_influence_fit():
    clean = _obs((0.1, 30_000, 5), (0.4, 52_000, 2), (0.9, 95_000, 3))
    noisy = [
        clean[0],
        Observation(float("nan"), 40_000, 9),
        clean[1],
        Observation(0.5, 0, 9),
        Observation(0.6, -100, 9),
        Observation(float("inf"), 10, 9),
        Observation(0.3, float("inf"), 9),
        Observation(0.2, None, 9),
        clean[2],
    ]
    assert fit_log_trend(noisy) == fit_log_trend(clean)
    assert fit_log_trend(noisy, (0, 1)) == fit_log_trend(clean, (0, 1))


def test_identical_x_gives_no_result():
    assert fit_log_trend(_obs((2, 10), (2, 100), (2, 1000))) is None


def test_weight_concentrated_on_single_x_gives_no_result():
    assert fit_log_trend(_obs((1, 10, 5), (2, 100, 0), (3, 1000, -1))) is None


def test_all_zero_weights_give_no_result():
    assert fit_log_trend(_obs((1, 10, 0), (2, 100, 0), (3, 1000, -2))) is None


def test_open_domain_spans_valid_x_range():
    res = fit_log_trend(_obs((0.3, 20), (0.05, 15), (0.8, 70), (5.0, -1)), (None, None))
    assert res is not None
    assert res.points[0].x == 0.05
    assert res.points[1].x == 0.8


def test_partial_domain_fills_only_missing_bound():
    pts = _obs((0.2, 20), (0.6, 40), (0.4, 25))
    assert [p.x for p in fit_log_trend(pts, (0.0, None)).points] == [0.0, 0.6]
    assert [p.x for p in fit_log_trend(pts, (None, 1.0)).points] == [0.2, 1.0]


def test_reversed_domain_is_not_reordered():
    res = fit_log_trend(_obs((0, 10), (1, 100), (2, 1000)), (2, 0))
    assert [p.x for p in res.points] == [2.0, 0.0]
    assert res.points[0].y == pytest.approx(1000.0)


def test_perfect_fit_has_unit_r_squared():
    res = fit_log_trend(_obs((1, 10), (2, 100), (3, 1000)))
    assert res.r_squared == pytest.approx(1.0)
    assert res.slope == pytest.approx(1.0)
    assert res.intercept == pytest.approx(0.0, abs=1e-12)


def test_flat_log_values_give_zero_r_squared():
    res = fit_log_trend(_obs((1, 10), (2, 10), (3, 10)))
    assert res is not None
    assert res.r_squared == 0
    assert res.slope == pytest.approx(0.0, abs=1e-12)


def test_endpoints_are_back_transformed_from_log_line():
    res = fit_log_trend(_obs((0.1, 31_000, 2), (0.35, 48_000, 7), (0.8, 83_000, 1)), (0, 1))
    for p in res.points:
        assert p.y == pow10(res.intercept + res.slope * p.x)
        assert res.predict(p.x) == p.y


def test_negative_weight_matches_zero_weight():
    base = [(0.1, 31_000, 2), (0.35, 48_000, 7), (0.8, 83_000, 1)]
    neg = fit_log_trend(_obs(*base, (0.5, 200_000, -40)))
    zero = fit_log_trend(_obs(*base, (0.5, 200_000, 0)))
    assert neg == zero


def test_weights_pull_the_line():
    pts = [(0, 10), (1, 100), (2, 100)]
    light = fit_log_trend(_obs(*[(x, y, 1) for x, y in pts]))
    heavy_end = fit_log_trend(_obs((0, 10, 1), (1, 100, 50), (2, 100, 50)))
    assert heavy_end.slope < light.slope


def test_fit_does_not_mutate_input():
    pts = _obs((0, 10, -1), (1, 100, None), (2, 1000, 3))
    snapshot = list(pts)
    fit_log_trend(pts)
    assert pts == snapshot


def test_accepts_generator_input():
    res = fit_log_trend(Observation(x, 10 ** x) for x in range(4))
    assert res.slope == pytest.approx(1.0)


def test_valid_observations_resolves_weights():
    out = valid_observations(_obs((0, 1), (1, 2, -3), (2, 3, float("nan")), (3, 4, 2.5)))
    assert [o.weight for o in out] == [1.0, 0.0, 0.0, 2.5]


def test_resolve_domain_uses_min_max():
    assert resolve_domain((None, None), [3.0, -1.0, 2.0]) == (-1.0, 3.0)
    assert resolve_domain((5, None), [3.0, -1.0]) == (5.0, 3.0)


def test_observations_from_frame_maps_occupation_rows():
    df = pd.DataFrame({
        "soc_code": ["11-1011", "13-2011", "15-1252"],
        "employment": [200_000.0, np.nan, 1_500_000.0],
        "median_annual_wage": [190_000.0, 79_000.0, 130_000.0],
        "exposure_human_gamma": [0.3, 0.7, 0.9],
    })
    before = df.copy()

    obs = observations_from_frame(df, x="exposure_human_gamma")

    assert obs[0] == Observation(0.3, 190_000.0, 200_000.0)
    assert obs[1].weight is None
    assert [o.x for o in obs] == [0.3, 0.7, 0.9]
    pd.testing.assert_frame_equal(df, before)


def test_observations_from_frame_without_weight_column():
    df = pd.DataFrame({"e": [0.1, 0.2], "w": [1.0, 2.0]})
    obs = observations_from_frame(df, x="e", y="w", weight=None)
    assert all(o.weight is None for o in obs)


def test_observations_from_frame_rejects_unknown_column():
    df = pd.DataFrame({"median_annual_wage": [1.0], "employment": [1.0]})
    with pytest.raises(KeyError):
        observations_from_frame(df, x="exposure_dv_gamma")


def test_nan_wage_rows_from_frame_are_dropped_by_fit():
    df = pd.DataFrame({
        "employment": [1.0, 1.0, 1.0, 1.0],
        "median_annual_wage": [10.0, 100.0, np.nan, 1000.0],
        "exposure_dv_gamma": [0.0, 1.0, 1.5, 2.0],
    })
    res = fit_log_trend(observations_from_frame(df, x="exposure_dv_gamma"))
    assert res.slope == pytest.approx(1.0)
    assert math.isclose(res.points[1].x, 2.0)


def test_wide_domain_saturates_instead_of_raising():
    res = fit_log_trend(_obs((0, 10, 1), (1, 100, 1), (2, 1000, 1)), (0, 400))

    assert res is not None
    start, end = res.points
    assert start.y == pytest.approx(10.0)
    assert end.x == 400.0
    assert math.isinf(end.y)
    assert res.predict(400) == end.y
    assert res.predict(-400) == 0.0


def test_extreme_but_finite_wages_fit():
    res = fit_log_trend(_obs((0, 1e-300), (1, 1e300)))
    assert res.slope == pytest.approx(600.0)
    assert res.points[1].y == pytest.approx(1e300)


def test_pow10_saturates():
    assert pow10(3.0) == 1000.0
    assert math.isinf(pow10(400.0))
    assert pow10(-400.0) == 0.0
