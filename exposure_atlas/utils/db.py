import os
from functools import lru_cache
from typing import Any, Optional

import duckdb
import pandas as pd
import streamlit as st

from exposure_atlas.utils.demo import build_demo_occupations
from exposure_atlas.utils.sql import FCT_OCCUPATIONS_SQL

# On Streamlit Cloud, /mount/data is writable during the session
DUCKDB_PATH = st.secrets.get("DUCKDB_PATH", os.environ.get("DUCKDB_PATH", "/mount/data/atlas.duckdb"))


@lru_cache(maxsize=1)
def _connect() -> duckdb.DuckDBPyConnection:
    os.makedirs(os.path.dirname(DUCKDB_PATH) or ".", exist_ok=True)
    return duckdb.connect(DUCKDB_PATH, read_only=False)

def get_con() -> duckdb.DuckDBPyConnection:
    return _connect()

@st.cache_data(show_spinner=False)
def query_df(sql: str, params: tuple[Any, ...] = ()) -> pd.DataFrame:
    con = get_con()
    return con.execute(sql, params).fetchdf()

def table_exists(name: str) -> bool:
    con = get_con()
    try:
        con.execute(f"SELECT 1 FROM {name} LIMIT 1")
        return True
    except duckdb.Error:
        return False

def ensure_demo_db() -> None:
    """
    If the DuckDB file has no occupation table, load the SMALL demo dataset
    so the app runs without the real occupation CSV.
    """
    if table_exists("fct_occupations"):
        return

    con = get_con()
    con.register("df_occupations", build_demo_occupations())
    con.execute("CREATE OR REPLACE TABLE raw_occupations AS SELECT * FROM df_occupations")
    con.unregister("df_occupations")
    con.execute(FCT_OCCUPATIONS_SQL)

    print("[bootstrap] Demo DuckDB created with fct_occupations.")

def load_occupation_points(education: Optional[list[str]] = None) -> pd.DataFrame:
    """Occupation rows for the scatter, optionally limited to some education levels."""
    if education:
        placeholders = ", ".join("?" for _ in education)
        return query_df(
            f"SELECT * FROM fct_occupations WHERE education IN ({placeholders}) ORDER BY soc_code",
            tuple(education),
        )
    return query_df("SELECT * FROM fct_occupations ORDER BY soc_code")
