"""Create the cards, goals and bingos tables in the configured database.

Reads DATABASE_URL (or PG* variables) from .env / environment.

Usage:
  python scripts/create_tables.py
"""

from __future__ import annotations

import pathlib

from dotenv import load_dotenv
from sqlalchemy import inspect

from goalbingo import models  # noqa: F401  (registers tables on Base.metadata)
from goalbingo.config import resolve_database_url
from goalbingo.db import create_app_engine
from goalbingo.models.base import Base

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]


def main() -> int:
    """Create all ORM tables in the target database."""

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    engine = create_app_engine(resolve_database_url())
    Base.metadata.create_all(bind=engine)

    tables = sorted(inspect(engine).get_table_names())
    print(f"Tables ready on {engine.url.render_as_string(hide_password=True)}: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
