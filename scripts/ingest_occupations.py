#!/usr/bin/env python3
"""
Ingest the occupation CSV into DuckDB as raw_occupations and build fct_occupations.

Usage:
  python scripts/ingest_occupations.py --csv data/occupations.csv --db warehouse/atlas.duckdb
Env (optional):
  OCCUPATIONS_CSV (default: data/occupations.csv)
  DUCKDB_PATH     (default: warehouse/atlas.duckdb)
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
import duckdb

from exposure_atlas.utils.demo import OCC_COLUMNS
from exposure_atlas.utils.sql import FCT_OCCUPATIONS_SQL


def eprint(*a, **k):
    print(*a, file=sys.stderr, **k)


def connect(db_path: str) -> duckdb.DuckDBPyConnection:
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    con = duckdb.connect(db_path)
    con.execute("PRAGMA threads=4;")
    con.execute("PRAGMA enable_progress_bar=false;")
    return con


def read_csv_into_table(con: duckdb.DuckDBPyConnection, csv_path: Path, table: str) -> int:
    """
    Create or replace a DuckDB table from a CSV using read_csv_auto.
    Returns row count loaded.
    """
    if not csv_path.exists():
        raise FileNotFoundError(f"Expected file missing: {csv_path}")
    q = f"""
    CREATE OR REPLACE TABLE {table} AS
    SELECT * FROM read_csv_auto(
        '{csv_path.as_posix()}',
        header = true,
        sample_size = -1,
        normalize_names = true,
        all_varchar = false
    );
    """
    con.execute(q)
    count = con.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    return int(count)


def missing_columns(con: duckdb.DuckDBPyConnection, table: str) -> list[str]:
    have = {
        r[0] for r in con.execute(
            "SELECT column_name FROM information_schema.columns WHERE table_name = ?", [table]
        ).fetchall()
    }
    # log wage is derived in fct_occupations when absent
    return [c for c in OCC_COLUMNS if c not in have and c != "log_median_annual_wage"]


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Ingest occupation CSV into DuckDB")
    p.add_argument("--csv", default=os.environ.get("OCCUPATIONS_CSV", "data/occupations.csv"), help="Occupation CSV")
    p.add_argument("--db", default=os.environ.get("DUCKDB_PATH", "warehouse/atlas.duckdb"), help="DuckDB path")
    return p.parse_args()


def main():
    args = parse_args()
    con = connect(args.db)
    eprint(f"[ingest] Connected to DuckDB at {args.db}")

    eprint(f"→ Loading {args.csv} → raw_occupations")
    rows = read_csv_into_table(con, Path(args.csv), "raw_occupations")

    missing = missing_columns(con, "raw_occupations")
    if missing:
        raise ValueError(f"raw_occupations is missing columns: {', '.join(missing)}")

    con.execute(FCT_OCCUPATIONS_SQL)
    built = con.execute("SELECT COUNT(*) FROM fct_occupations").fetchone()[0]

    eprint("\n=== Ingest Summary ===")
    eprint(f"raw_occupations  rows={rows:,}")
    eprint(f"fct_occupations  rows={built:,}")

    con.close()


if __name__ == "__main__":
    try:
        main()
    except FileNotFoundError as e:
        eprint(f"[ERROR] {e}")
        sys.exit(2)
    except Exception as e:
        eprint(f"[FATAL] {type(e).__name__}: {e}")
        sys.exit(1)
