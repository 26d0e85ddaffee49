from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    # SQLite needs check_same_thread off since FastAPI runs sync routes in a threadpool
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables known to the models package"""
    import task_manager.models  # noqa: F401  registers the models on Base

    Base.metadata.create_all(bind=engine)


# Required wherever a DB session is needed; one session per request
def get_db(request: Request):
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
