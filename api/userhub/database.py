from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.exc import SQLAlchemyError
from typing import Generator
import logging

from . import config

logger = logging.getLogger(__name__)


if config.ENV == "test":
    # One shared connection so every threadpool worker sees the same in-memory db
    DATABASE_URL = "sqlite:///:memory:"
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

elif config.ENV == "local":
    DATABASE_URL = config.DATABASE_URL
    logger.info(f"Connecting to local database at: {DATABASE_URL}")
    connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
    engine = create_engine(DATABASE_URL, echo=True, connect_args=connect_args)

elif config.ENV == "prod":
    DATABASE_URL = config.DATABASE_URL
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set when ENV=prod")
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)
    logger.info("Connected to production database")

else:
    raise ValueError(f"Invalid environment: {config.ENV}")


def get_session() -> Generator[Session, None, None]:
    """
    Get a database session.
    """
    with Session(engine) as session:
        yield session


def init_db():
    """
    Initialize the database by creating all tables if they don't exist.
    """
    logger.debug("Initializing database tables")
    try:
        SQLModel.metadata.create_all(engine)
        logger.debug("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise


def drop_all_tables():
    """
    Drop all tables in the database.
    """
    logger.debug("Dropping all tables")
    try:
        SQLModel.metadata.drop_all(engine)
        logger.debug("All tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error dropping tables: {str(e)}")
        raise


def recreate_tables():
    """
    Drop all tables and recreate them.
    """
    logger.debug("Starting table recreation")
    try:
        drop_all_tables()
        init_db()
        logger.debug("Table recreation completed")
    except SQLAlchemyError as e:
        logger.error(f"Error during table recreation: {str(e)}")
        raise
