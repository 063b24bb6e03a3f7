"""
Weighted log-linear trend used by the wage-vs-exposure chart and unit tests.
Built on NumPy for the fit and pandas for the occupation-frame adapter.

The fit is ordinary weighted least squares of log10(wage) on exposure, with
employment as the weight. The line is reported back in wage units at the two
ends of the display domain.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

Domain = Tuple[Optional[float], Optional[float]]

FULL_DOMAIN: Domain = (None, None)


@dataclass(frozen=True)
class Observation:
    x: float
    y: float
    weight: Optional[float] = None   # employment; absent means 1


@dataclass(frozen=True)
class RegressionPoint:
    x: float
    y: float                         # linear (wage) units


@dataclass(frozen=True)
class RegressionResult:
    points: Tuple[RegressionPoint, RegressionPoint]   # (x_start, x_end) in domain order
    slope: float                     # log10(y) per unit x
    intercept: float                 # log10(y) at x = 0
    r_squared: float                 # weighted, in log space

    def predict(self, x: float) -> float:
        """Trend value at ``x`` in wage units."""
        return pow10(self.intercept + self.slope * x)


def pow10(exponent: float) -> float:
    """10 ** exponent, saturating to inf (or 0) instead of raising on overflow."""
    with np.errstate(over="ignore", under="ignore"):
        return float(np.power(10.0, exponent))


def _is_finite_number(value) -> bool:
    return isinstance(value, Real) and math.isfinite(value)


def _effective_weight(weight) -> float:
    if weight is None:
        return 1.0
    if not _is_finite_number(weight):
        return 0.0
    return max(float(weight), 0.0)


def valid_observations(points: Iterable[Observation]) -> list[Observation]:
    """
    Keep points with finite x, finite y and y > 0, with the weight resolved.

    Missing weights become 1 and negative or non-finite weights become 0, so
    everything downstream can treat ``weight`` as a plain non-negative float.
    """
    kept: list[Observation] = []
    for p in points:
        if not (_is_finite_number(p.x) and _is_finite_number(p.y)) or p.y <= 0:
            continue
        kept.append(Observation(float(p.x), float(p.y), _effective_weight(p.weight)))
    return kept


def resolve_domain(domain: Domain, xs: Sequence[float]) -> tuple[float, float]:
    """Fill missing domain bounds with the min/max of ``xs``. Order is preserved."""
    start, end = domain
    x_start = float(min(xs)) if start is None else float(start)
    x_end = float(max(xs)) if end is None else float(end)
    return x_start, x_end


def fit_log_trend(
    points: Iterable[Observation],
    domain: Domain = FULL_DOMAIN,
) -> Optional[RegressionResult]:
    """
    Fit log10(y) = intercept + slope * x by weighted least squares (closed form).

    Returns ``None`` when no line can be drawn: fewer than two valid points,
    no positive weight, or all weight sitting on a single x value. Invalid
    points are dropped rather than reported. R^2 is 0 when the log values
    carry no weighted variance.
    """
    valid = valid_observations(points)
    if len(valid) < 2:
        return None

    x = np.array([p.x for p in valid], dtype=float)
    x_start, x_end = resolve_domain(domain, x.tolist())

    log_y = np.log10(np.array([p.y for p in valid], dtype=float))
    w = np.array([p.weight for p in valid], dtype=float)

    sw = float(np.sum(w))
    if sw == 0:
        return None

    swx = float(np.sum(w * x))
    swy = float(np.sum(w * log_y))
    swxy = float(np.sum(w * x * log_y))
    swx2 = float(np.sum(w * x * x))

    denom = sw * swx2 - swx * swx
    weighted_x = x[w > 0]
    if denom == 0 or weighted_x.min() == weighted_x.max():
        return None

    slope = (sw * swxy - swx * swy) / denom
    intercept = (swy - slope * swx) / sw

    mean_y = swy / sw
    ss_tot = float(np.sum(w * (log_y - mean_y) ** 2))
    ss_res = float(np.sum(w * (log_y - (intercept + slope * x)) ** 2))
    r_squared = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0

    return RegressionResult(
        points=(
            RegressionPoint(x_start, pow10(intercept + slope * x_start)),
            RegressionPoint(x_end, pow10(intercept + slope * x_end)),
        ),
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
    )


def observations_from_frame(
    df: pd.DataFrame,
    x: str,
    y: str = "median_annual_wage",
    weight: Optional[str] = "employment",
) -> list[Observation]:
    """
    Map occupation rows to observations. NaN weights are passed on as absent.
    Rows with NaN x/y are kept here and dropped by the fit itself.
    """
    missing = [c for c in (x, y, weight) if c is not None and c not in df.columns]
    if missing:
        raise KeyError(f"Columns not found: {', '.join(missing)}")

    xs = df[x].astype(float).to_numpy()
    ys = df[y].astype(float).to_numpy()
    if weight is None:
        ws = [None] * len(df)
    else:
        ws = [None if pd.isna(v) else float(v) for v in df[weight].to_numpy()]
    return [Observation(float(a), float(b), c) for a, b, c in zip(xs, ys, ws)]
