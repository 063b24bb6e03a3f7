import pandas as pd

import scripts.snapshot_trend as snapshot
from exposure_atlas.utils.demo import build_demo_occupations


def test_snapshot_uses_shared_trend_visibility(tmp_path, monkeypatch):
    calls = []

    def spy(result, min_r_squared=0.0):
        calls.append((result, min_r_squared))
        return False

    monkeypatch.setattr(snapshot, "ART", tmp_path)
    monkeypatch.setattr(snapshot, "should_draw_trend", spy)

    df = build_demo_occupations(n=30, seed=4)
    out = snapshot.wage_vs_exposure(
        df, "exposure_human_gamma", {"min_r_squared": 0.3, "pin_domain_to_unit": True}
    )

    assert out.exists()
    assert len(calls) == 1
    assert calls[0][1] == 0.3
    assert calls[0][0] is not None


def test_snapshot_handles_flat_wages(tmp_path, monkeypatch):
    monkeypatch.setattr(snapshot, "ART", tmp_path)
    df = pd.DataFrame({
        "employment": [10.0, 20.0, 30.0],
        "median_annual_wage": [50_000.0, 50_000.0, 50_000.0],
        "exposure_dv_gamma": [0.1, 0.5, 0.9],
    })

    out = snapshot.wage_vs_exposure(df, "exposure_dv_gamma", {"min_r_squared": 0.05, "pin_domain_to_unit": False})

    assert out.exists()
