"""
Small deterministic occupation dataset used to bootstrap an empty DuckDB file
and as a fixture in tests. Shape matches the ingested occupation table.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

EDUCATION_LEVELS = [
    "No formal educational credential",
    "High school diploma or equivalent",
    "Postsecondary nondegree award",
    "Associate's degree",
    "Bachelor's degree",
    "Master's degree",
    "Doctoral or professional degree",
]

OCC_COLUMNS = [
    "soc_code",
    "soc_title",
    "employment",
    "median_annual_wage",
    "log_median_annual_wage",
    "exposure_human_gamma",
    "exposure_dv_gamma",
    "soc_exposure_count",
    "education",
]


def build_demo_occupations(n: int = 120, seed: int = 7) -> pd.DataFrame:
    """
    Log-wage rises roughly linearly with exposure (plus noise) so the trend
    line has something to show. Same seed, same frame.
    """
    rng = np.random.default_rng(seed)

    human = rng.uniform(0.0, 1.0, size=n)
    dv = np.clip(human + rng.normal(0, 0.1, size=n), 0.0, 1.0)
    edu_idx = rng.integers(0, len(EDUCATION_LEVELS), size=n)

    log_wage = 4.45 + 0.30 * human + 0.04 * edu_idx + rng.normal(0, 0.08, size=n)
    wage = np.round(10 ** log_wage, -1)
    employment = np.round(rng.lognormal(mean=10.5, sigma=1.2, size=n), -1)

    codes = [f"{11 + (i % 43):02d}-{1000 + i * 7:04d}" for i in range(n)]
    df = pd.DataFrame({
        "soc_code": codes,
        "soc_title": [f"Demo occupation {i + 1}" for i in range(n)],
        "employment": employment,
        "median_annual_wage": wage,
        "log_median_annual_wage": np.log10(wage),
        "exposure_human_gamma": human.round(4),
        "exposure_dv_gamma": dv.round(4),
        "soc_exposure_count": rng.integers(5, 40, size=n),
        "education": [EDUCATION_LEVELS[i] for i in edu_idx],
    })
    return df[OCC_COLUMNS]
