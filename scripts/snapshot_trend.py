#!/usr/bin/env python3
"""
Create lightweight wage-trend screenshots as CI artifacts (no browser needed).
Outputs:
  artifacts/wage_vs_exposure_human_gamma.png
  artifacts/wage_vs_exposure_dv_gamma.png
"""
from __future__ import annotations

import os
from pathlib import Path
import duckdb
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from exposure_atlas.utils.chart import should_draw_trend
from exposure_atlas.utils.config import load_cfg, trend_settings
from exposure_atlas.utils.glossary import EXPOSURE_MEASURES
from exposure_atlas.utils.regression import FULL_DOMAIN, fit_log_trend, observations_from_frame


DB = os.environ.get("DUCKDB_PATH", "warehouse/atlas.duckdb")
ART = Path("artifacts")

def _read_df(sql: str) -> pd.DataFrame:
    if not Path(DB).exists():
        return pd.DataFrame()
    with duckdb.connect(DB, read_only=True) as con:
        try:
            return con.execute(sql).fetchdf()
        except duckdb.CatalogException:
            return pd.DataFrame()

def wage_vs_exposure(df: pd.DataFrame, measure: str, trend: dict) -> Path:
    domain = (0.0, 1.0) if trend["pin_domain_to_unit"] else FULL_DOMAIN
    result = fit_log_trend(observations_from_frame(df, x=measure), domain)

    plt.figure(figsize=(8, 4.5))
    sizes = np.sqrt(df["employment"].fillna(0).clip(lower=0)) / 10
    plt.scatter(df[measure], df["median_annual_wage"], s=sizes, alpha=0.4)
    title = f"Median wage vs {EXPOSURE_MEASURES[measure]}"
    if should_draw_trend(result, trend["min_r_squared"]):
        start, end = result.points
        plt.plot([start.x, end.x], [start.y, end.y], color="#d62728")
        title += f" (R²={result.r_squared:.2f})"
    plt.yscale("log")
    plt.title(title)
    plt.xlabel("AI exposure")
    plt.ylabel("Median annual wage")
    out = ART / f"wage_vs_{measure}.png"
    plt.tight_layout()
    plt.savefig(out)
    plt.close()
    print(f"[snapshot] Wrote {out}")
    return out

def main():
    df = _read_df("SELECT * FROM fct_occupations")
    if df.empty:
        print("[snapshot] fct_occupations not available; nothing to draw.")
        return
    ART.mkdir(parents=True, exist_ok=True)
    trend = trend_settings(load_cfg())
    for measure in EXPOSURE_MEASURES:
        wage_vs_exposure(df, measure, trend)

if __name__ == "__main__":
    main()
