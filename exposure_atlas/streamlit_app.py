import os
from pathlib import Path

import streamlit as st


from exposure_atlas.utils.db import table_exists, query_df, ensure_demo_db, DUCKDB_PATH

# ensure a tiny demo DB exists when running in the cloud
ensure_demo_db()

APP_TITLE = "Exposure Atlas"
MODE = st.secrets.get("MODE", os.environ.get("MODE", "real"))

st.set_page_config(page_title=APP_TITLE, layout="wide")

# ---- Header / status ----
with st.sidebar:
    st.markdown(f"### {APP_TITLE}")
    st.caption("DuckDB + Altair + Streamlit")
    st.write(f"**Mode:** `{MODE}`")
    st.write(f"**DB:** `{DUCKDB_PATH}`")
    run_checks = st.checkbox("Run quick health checks", value=True)
    if st.button("Refresh"):
        st.rerun()

st.title(APP_TITLE)
st.write("Use the left sidebar to switch pages. This home view shows a quick health/status summary.")

# ---- Health checks ----
def health() -> dict:
    checks = {}
    checks["db_file_present"] = Path(DUCKDB_PATH).exists()
    checks["known_tables"] = {k: table_exists(k) for k in ["raw_occupations", "fct_occupations"]}
    return checks

if run_checks:
    with st.expander("Health checks", expanded=True):
        h = health()
        st.write(f"DB file present: **{h['db_file_present']}**")
        st.write("Known tables:")
        st.json(h["known_tables"])

# ---- Dataset snapshot ----
def render_snapshot():
    if not table_exists("fct_occupations"):
        st.info("Waiting for ingest… Expected table `fct_occupations` not found yet.")
        return
    df = query_df("""
        SELECT
          COUNT(*)                         AS occupations,
          SUM(employment)                  AS employment,
          median(median_annual_wage)       AS median_wage,
          AVG(exposure_human_gamma)        AS avg_human_exposure,
          AVG(exposure_dv_gamma)           AS avg_model_exposure
        FROM fct_occupations
    """)
    row = df.iloc[0].to_dict()
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Occupations", f"{int(row['occupations']):,}")
    c2.metric("Employment", f"{(row['employment'] or 0):,.0f}")
    c3.metric("Median wage", f"${(row['median_wage'] or 0):,.0f}")
    c4.metric("Avg exposure (human)", f"{(row['avg_human_exposure'] or 0):.2f}")
    c5.metric("Avg exposure (model)", f"{(row['avg_model_exposure'] or 0):.2f}")

render_snapshot()

st.caption("Tip: run `python scripts/ingest_occupations.py --csv data/occupations.csv` to load the real dataset.")
