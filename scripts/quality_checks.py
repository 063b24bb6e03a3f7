#!/usr/bin/env python3
"""
Fast-fail data contracts & sanity checks on the ingested occupation table.

Usage:
  python scripts/quality_checks.py --db warehouse/atlas.duckdb
"""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import duckdb


def connect(db_path: str) -> duckdb.DuckDBPyConnection:
    if not Path(db_path).exists():
        raise FileNotFoundError(f"DuckDB not found at {db_path}. Did you run ingest?")
    return duckdb.connect(db_path, read_only=True)


def _run_count(con: duckdb.DuckDBPyConnection, sql: str) -> int:
    return int(con.execute(sql).fetchone()[0])


def _assert_zero(con: duckdb.DuckDBPyConnection, sql: str, msg: str, failures: list[str]) -> None:
    cnt = _run_count(con, sql)
    if cnt != 0:
        failures.append(f"{msg} (violations={cnt})")


def _assert_positive(con: duckdb.DuckDBPyConnection, sql: str, msg: str, failures: list[str]) -> None:
    cnt = _run_count(con, sql)
    if cnt <= 0:
        failures.append(f"{msg} (count={cnt})")


def check_occupations(con: duckdb.DuckDBPyConnection, table: str = "raw_occupations") -> list[str]:
    """Contracts for the occupation table feeding the wage-vs-exposure trend."""
    failures: list[str] = []

    # ---------- presence ----------
    _assert_positive(con, f"SELECT COUNT(*) FROM {table}", f"Missing or empty table: {table}", failures)
    if failures:
        return failures

    # ---------- PK uniqueness ----------
    _assert_zero(
        con,
        f"WITH a AS (SELECT soc_code, COUNT(*) c FROM {table} GROUP BY soc_code) SELECT COUNT(*) FROM a WHERE c>1",
        f"PK not unique on {table} (soc_code)",
        failures,
    )
    _assert_zero(con, f"SELECT COUNT(*) FROM {table} WHERE soc_code IS NULL",
                 f"PK contains NULLs on {table} (soc_code)", failures)

    # ---------- value constraints ----------
    _assert_zero(con, f"SELECT COUNT(*) FROM {table} WHERE median_annual_wage <= 0",
                 "Non-positive median_annual_wage", failures)
    _assert_zero(con, f"SELECT COUNT(*) FROM {table} WHERE employment < 0",
                 "Negative employment", failures)
    for col in ("exposure_human_gamma", "exposure_dv_gamma"):
        _assert_zero(con, f"SELECT COUNT(*) FROM {table} WHERE {col} < 0 OR {col} > 1",
                     f"{col} outside [0, 1]", failures)

    # ---------- usable for the trend ----------
    _assert_positive(
        con,
        f"""
        SELECT COUNT(*) FROM {table}
        WHERE median_annual_wage > 0 AND exposure_human_gamma IS NOT NULL
        """,
        "No rows usable for the wage trend (positive wage and exposure present)",
        failures,
    )

    return failures


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Occupation data quality checks")
    p.add_argument("--db", default=os.environ.get("DUCKDB_PATH", "warehouse/atlas.duckdb"))
    return p.parse_args()


def main():
    args = parse_args()
    con = connect(args.db)

    print(f"[quality] DB={args.db}")

    failures = check_occupations(con)

    if failures:
        print("\n[QUALITY FAIL] One or more data contracts were violated:")
        for i, f in enumerate(failures, 1):
            print(f" {i:02d}. {f}")
        print("\nFix the above issues (or data files) and rerun.")
        sys.exit(2)

    print("[quality] All checks passed ✔")
    con.close()


if __name__ == "__main__":
    try:
        main()
    except FileNotFoundError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(2)
    except duckdb.Error as e:
        print(f"[FATAL][DuckDB] {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"[FATAL] {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
