"""Query a compiled mentions table - list every mention of a given kind."""
from __future__ import annotations

import sys
from pathlib import Path

import duckdb


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: python query.py <compiled_dir> <kind>")
        print("Example: python query.py out/ agent")
        sys.exit(1)

    compiled = Path(sys.argv[1])
    kind = sys.argv[2]

    con = duckdb.connect(":memory:")
    con.execute(f"CREATE VIEW mentions AS SELECT * FROM '{compiled}/evidence/mentions.parquet'")

    sql = """
    SELECT
        name,
        COALESCE(id, mode) AS ref,
        COUNT(*) AS hits,
        MIN(ts) AS first_seen
    FROM mentions
    WHERE kind = ?
    GROUP BY name, ref
    ORDER BY hits DESC, name
    """

    print(f"--- Mentions of kind: {kind} ---\n")

    df = con.execute(sql, [kind]).fetchdf()
    if df.empty:
        print("No mentions found.")
    else:
        for _, row in df.iterrows():
            print(f"{row['name']}")
            print(f"  Ref: {row['ref']}")
            print(f"  Hits: {row['hits']}")
            print(f"  First seen: {row['first_seen']}")
            print()


if __name__ == "__main__":
    main()
