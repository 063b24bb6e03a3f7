import math

import streamlit as st

from exposure_atlas.utils.chart import should_draw_trend, wage_scatter_chart
from exposure_atlas.utils.config import load_cfg, trend_settings
from exposure_atlas.utils.db import table_exists, query_df, load_occupation_points
from exposure_atlas.utils.glossary import EXPOSURE_MEASURES, KPI_TOOLTIPS
from exposure_atlas.utils.regression import FULL_DOMAIN, fit_log_trend, observations_from_frame, pow10

st.set_page_config(page_title="Wage vs Exposure", layout="wide")

TREND = trend_settings(load_cfg())

st.title("Wage vs AI Exposure")

if not table_exists("fct_occupations"):
    st.warning("Expected table `fct_occupations` not found. Run `scripts/ingest_occupations.py`.")
    st.stop()

# -------- Controls --------
left, right = st.columns([1, 2])
with left:
    measure = st.radio(
        "Exposure measure",
        list(EXPOSURE_MEASURES),
        format_func=EXPOSURE_MEASURES.get,
        index=0,
        help=KPI_TOOLTIPS["Exposure"],
    )
    levels = query_df(
        "SELECT DISTINCT education FROM fct_occupations WHERE education IS NOT NULL ORDER BY 1"
    )["education"].tolist()
    education = st.multiselect("Education (empty = all)", levels)
    pin_domain = st.checkbox("Draw trend across full 0–1 scale", value=TREND["pin_domain_to_unit"])
    min_r2 = st.slider("Hide trend below R²", 0.0, 1.0, TREND["min_r_squared"], step=0.01)
with right:
    st.caption(
        "Trend: employment-weighted least squares of log10(median wage) on exposure. "
        "Occupations without a positive wage are left out of the fit."
    )

# -------- Data pull --------
df = load_occupation_points(education)
if df.empty:
    st.info("No occupations after filters. Relax the education filter.")
    st.stop()

# -------- Regression (weighted, log space) --------
domain = (0.0, 1.0) if pin_domain else FULL_DOMAIN
result = fit_log_trend(observations_from_frame(df, x=measure), domain)

# -------- KPIs --------
k1, k2, k3, k4 = st.columns(4)
k1.metric("Occupations", f"{len(df):,}")
if result is None:
    k2.metric("R² (fit quality)", "n/a")
    k3.metric("Slope (log10 $ per unit)", "n/a")
    k4.metric("Wage multiple (0→1)", "n/a")
else:
    k2.metric("R² (fit quality)", f"{result.r_squared:.3f}", help=KPI_TOOLTIPS["R²"])
    k3.metric("Slope (log10 $ per unit)", f"{result.slope:.3f}", help=KPI_TOOLTIPS["Slope"])
    multiple = pow10(result.slope)
    k4.metric(
        "Wage multiple (0→1)",
        f"{multiple:.2f}×" if math.isfinite(multiple) else "n/a",
        help=KPI_TOOLTIPS["Wage multiple"],
    )

# -------- Plot --------
st.subheader(f"Median wage vs {EXPOSURE_MEASURES[measure]} (with fitted trend)")
chart = wage_scatter_chart(df, measure, result, min_r_squared=min_r2)
st.altair_chart(chart.interactive(), use_container_width=True)

# -------- Insights block (auto-generated) --------
with st.expander("Auto-insights", expanded=True):
    insight_lines = []
    if result is None:
        insight_lines.append("• Not enough variation in the filtered occupations to fit a trend.")
    else:
        start, end = result.points
        insight_lines.append(
            f"• The trend explains **{result.r_squared:.1%}** of employment-weighted variation in log wages."
        )
        direction = "rises" if result.slope > 0 else "falls"
        insight_lines.append(
            f"• Trend wage {direction} from **${start.y:,.0f}** at exposure {start.x:.2f} "
            f"to **${end.y:,.0f}** at exposure {end.x:.2f}."
        )
        if not should_draw_trend(result, min_r2):
            insight_lines.append(f"• Line hidden: R² is below the {min_r2:.2f} threshold.")
    st.markdown("\n".join(insight_lines))
