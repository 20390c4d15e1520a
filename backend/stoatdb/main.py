"""
Stoat database bootstrap - entry point.

Run once per deployment (or as often as you like; every step is idempotent)::

    python -m stoatdb

Environment Variables:
    MONGO_URI: MongoDB connection string
    DATABASE_NAME: Target database (default: stoatchat)
    SERVER_SELECTION_TIMEOUT_MS: How long to wait for the server (default: 5000)
    CASCADE_POLICY: cascade or orphan (default: cascade)
    LOG_LEVEL: Logging level (default: INFO)

Exit status is 0 when the store is fully bootstrapped, 1 otherwise.
"""
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from pymongo.database import Database
from pymongo.errors import PyMongoError

from stoatdb.config import get_settings
from stoatdb.core.exceptions import BootstrapError
from stoatdb.database.connections import close_connections, get_database
from stoatdb.services.bootstrap import BootstrapOrchestrator

logger = logging.getLogger("stoatdb")


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging the same way for every run."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(db: Optional[Database] = None) -> int:
    """
    Bootstrap the configured database, or ``db`` if given.

    On failure the partial report is logged too, so the operator can see
    which steps had already completed.

    Returns:
        Process exit status
    """
    orchestrator = None
    try:
        settings = get_settings()
        database = db if db is not None else get_database(settings.database_name)
        orchestrator = BootstrapOrchestrator(database)
        report = orchestrator.run()
    except ValidationError as e:
        logger.error("✗ Invalid configuration: %s", e)
        return 1
    except BootstrapError as e:
        logger.error("✗ Bootstrap failed: %s", e)
        _log_summary(orchestrator)
        return 1
    except PyMongoError as e:
        logger.error("✗ Database error during bootstrap: %s", e)
        _log_summary(orchestrator)
        return 1
    finally:
        if db is None:
            close_connections()

    for line in report.summary().splitlines():
        logger.info(line)
    return 0


def _log_summary(orchestrator: Optional[BootstrapOrchestrator]) -> None:
    if orchestrator is None:
        return
    for line in orchestrator.report.summary().splitlines():
        logger.error(line)


def run() -> None:
    """Console entry point."""
    try:
        level = get_settings().log_level
    except ValidationError:
        level = "INFO"
    configure_logging(level)
    sys.exit(main())
