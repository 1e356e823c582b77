#!/usr/bin/env python3
"""
Create the schema and insert the demo matches into an empty database.
Run from project root: python3 scripts/seed_demo.py [--db PATH]
"""
from __future__ import annotations

import argparse
import json

from turfup.persistence import get_connection, init_db
from turfup.persistence.db import get_db_path, set_db_path
from turfup.persistence.seed import seed_demo_matches
from turfup.services import MatchAggregateReader


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo matches.")
    parser.add_argument("--db", help="SQLite file (default: TURFUP_DB_PATH or data/turfup.db)")
    args = parser.parse_args()
    if args.db:
        set_db_path(args.db)

    init_db(db_path=get_db_path())
    conn = get_connection()
    try:
        inserted = seed_demo_matches(conn)
        print(f"Inserted {inserted} demo matches into {get_db_path()}")
        for aggregate in MatchAggregateReader().list_matches(conn):
            print(json.dumps(aggregate.to_dict(), indent=2))
    finally:
        conn.close()


if __name__ == "__main__":
    main()
