"""Create database tables and id counters in the configured database.

Reads DATABASE_URL (or PG* variables) from .env / environment.

Usage:
  python scripts/create_tables.py
  python scripts/create_tables.py --show-counters
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.orm import Session

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from tally.config import resolve_database_url
from tally.db import create_app_engine, init_schema
from tally.models import IdCounter

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Create all ORM tables and bootstrap one counter per record family."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--show-counters", action="store_true", help="print counter values afterwards")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)

    database_url = resolve_database_url()
    engine = create_app_engine(database_url)
    init_schema(engine)
    logger.info("Tables created (or already exist) on %s", engine.url.render_as_string(hide_password=True))

    if args.show_counters:
        with Session(engine) as session:
            for row in session.scalars(select(IdCounter).order_by(IdCounter.family)):
                print(f"{row.family}: {row.value}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
