# app/data/database.py
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.utils.settings import DATABASE_URL, SQLITE_BUSY_TIMEOUT

Base = declarative_base()


def _serialize_sqlite_writes(engine: Engine) -> None:
    """
    pysqlite domyslnie nie wysyla BEGIN przed SELECT, wiec dwa place_order
    moglyby przeczytac ten sam stan magazynu. Kazda transakcja startuje od
    BEGIN IMMEDIATE i bierze blokade zapisu od razu, druga czeka (busy timeout).
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str = DATABASE_URL) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )
        _serialize_sqlite_writes(engine)
        return engine

    return create_engine(url, pool_pre_ping=True)


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Jedyny punkt commit/rollback dla jednej jednostki pracy."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
