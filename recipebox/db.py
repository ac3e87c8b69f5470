from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import Settings


settings = Settings()

Base = declarative_base()


def make_engine(db_url: str):
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(db_url, connect_args=connect_args)


def make_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = make_engine(settings.db_url)
SessionLocal = make_session_factory(engine)


def init_db(bind=None):
    # models must be imported so the table is registered on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
