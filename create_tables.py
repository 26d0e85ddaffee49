# create_tables.py
"""Create (or recreate with --drop) all tables for DATABASE_URL"""
import argparse
import logging

from task_manager.config import Settings, setup_logging
from task_manager.database import Base, build_engine, init_db

logger = logging.getLogger("create_tables")


def create_tables(drop: bool = False):
    settings = Settings()
    setup_logging(settings.log_level)
    engine = build_engine(settings.database_url)
    try:
        if drop:
            import task_manager.models  # noqa: F401

            # drop_all orders the tables by foreign key dependency
            Base.metadata.drop_all(bind=engine)
            logger.info("Dropped existing tables")

        init_db(engine)
        logger.info("All tables created successfully")
    finally:
        engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()
    create_tables(drop=args.drop)
