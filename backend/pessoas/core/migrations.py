import logging

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Engine

from pessoas.core.errors import MigrationError

logger = logging.getLogger(__name__)

# revision scripts ship inside the package so an installed wheel can migrate itself
SCRIPT_LOCATION = "pessoas:migrations"


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", SCRIPT_LOCATION)
    return config


def run_migrations(engine: Engine) -> None:
    """
    bring the schema up to head before any traffic is served

    borrows a single pooled connection and hands it to alembic; already
    applied revisions are skipped using the alembic_version ledger.
    any failure is fatal to startup
    """
    config = alembic_config()
    logger.info("applying schema migrations")
    try:
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")
    except Exception as e:
        logger.error(f"schema migration failed: {e}", exc_info=True)
        raise MigrationError("schema migration failed") from e
    logger.info("schema is up to date")
