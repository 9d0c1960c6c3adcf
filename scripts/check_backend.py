#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from the repo root:
  poetry run python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from the repo root
root_dir = Path(__file__).resolve().parent.parent
os.chdir(root_dir)
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


def main():
    errors = []

    # 1) .env
    env_file = root_dir / ".env"
    if not env_file.exists():
        errors.append(".env missing. Copy from .env.example and set DATABASE_URL, JWT_SECRET.")
    else:
        print("OK  .env exists")

    # 2) DB connection and tables
    try:
        from sqlalchemy import inspect, text

        from ishaazi.db.session import engine
        from ishaazi.db.tables import ALL_TABLE_NAMES

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("OK  Database connection (DATABASE_URL)")
        missing = set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names())
        if missing:
            errors.append(f"Tables missing: {', '.join(sorted(missing))}. Run: poetry run alembic upgrade head")
            print("FAIL Tables missing:", ", ".join(sorted(missing)))
        else:
            print("OK  All tables present")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 3) App import (catches missing deps, bad imports)
    try:
        from ishaazi.main import app  # noqa: F401
        print("OK  App import (ishaazi.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)
        print("\nFix the above, then run:")
        print("  poetry run uvicorn ishaazi.main:app --reload --host 0.0.0.0 --port 8000")
        return 1

    # 4) JWT secret
    from ishaazi.config import settings

    if settings.jwt_secret.startswith("change-me"):
        print("WARN JWT_SECRET is the built-in default; set it in .env to match the auth service")

    # 5) Port 8000
    try:
        import socket
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 8000))
        print("OK  Port 8000 is free")
    except OSError:
        errors.append("Port 8000 is in use. Stop the other process or use another port (e.g. --port 8001).")
        print("FAIL Port 8000 is in use")

    if errors:
        print("\n---")
        for e in errors:
            print("•", e)
        return 1

    print("\nAll checks passed. Start with: poetry run uvicorn ishaazi.main:app --reload")
    return 0


if __name__ == "__main__":
    sys.exit(main())
