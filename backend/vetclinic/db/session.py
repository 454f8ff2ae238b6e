"""Module: session."""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync handlers on a thread pool.
        connect_args["check_same_thread"] = False
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            # One shared connection, otherwise every session sees an empty database.
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, connect_args=connect_args, future=True, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
