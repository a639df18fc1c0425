from database import engine, Base
from sqlalchemy import inspect
import logging

import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ('orders', 'order_items')


def init_database(bind=None):
    """
    Create any missing tables.

    Args:
        bind: Engine to initialise (defaults to the application engine)
    """
    target = bind or engine
    existing = set(inspect(target).get_table_names())
    missing = [t for t in REQUIRED_TABLES if t not in existing]

    Base.metadata.create_all(target)

    if missing:
        logger.info(f"Created tables: {', '.join(missing)}")
    else:
        logger.info("Database schema up to date")
