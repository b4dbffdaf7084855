from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

DEFAULT_UTILITY_TYPES = ["Electricity", "Water", "Gas", "Heating", "Internet", "Rent"]
DEFAULT_CAR_EXPENSE_TYPES = ["Fuel", "Insurance", "Maintenance", "Repair", "Tax", "Parking"]


def build_engine(database_url: str) -> Engine:
    """Create the engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_database(engine: Engine) -> None:
    """Create missing tables and seed the expense type lookups."""
    # models register themselves on Base.metadata when imported
    from app.models.expense_model import CarExpenseType, UtilityType
    import app.models.user_model  # noqa: F401

    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        for model, names in (
            (UtilityType, DEFAULT_UTILITY_TYPES),
            (CarExpenseType, DEFAULT_CAR_EXPENSE_TYPES),
        ):
            existing = set(session.scalars(select(model.name)))
            session.add_all(model(name=name) for name in names if name not in existing)
        session.commit()


def get_db_from_request(request: Request) -> sessionmaker:
    return request.app.state.session_factory


def get_session(request: Request) -> Iterator[Session]:
    session = get_db_from_request(request)()
    try:
        yield session
    finally:
        session.close()
