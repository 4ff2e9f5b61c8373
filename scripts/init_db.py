from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path


def main() -> int:
    # Ensure project root (containing 'src') is importable
    project_root = Path(__file__).resolve().parents[1]
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    from src.db.migrate import run_migrations

    parser = argparse.ArgumentParser(description="Initialize SQLite database schema")
    parser.add_argument(
        "--db",
        default=os.getenv("DB_PATH") or os.path.join("data", "football.sqlite3"),
        help="Path to SQLite DB file (will be created if missing)",
    )
    args = parser.parse_args()

    db_path = os.path.abspath(args.db)
    applied = run_migrations(db_path)

    if applied:
        print(f"Applied migrations {', '.join(applied)} at: {db_path}")
    else:
        print(f"Schema already up to date at: {db_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
