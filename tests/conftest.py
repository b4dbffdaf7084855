"""
Shared fixtures.

The settings object is built at import time, so the environment has to be
prepared before anything from `app` is imported.
"""
import os

os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from app.core.db import build_engine, build_session_factory, init_database
from app.main import app
from app.repositories.sql_expense_repository import (
    SqlCarExpenseRepository,
    SqlHouseExpenseRepository,
)
from app.repositories.sql_user_repository import SqlUserRepository
from app.services.auth_service import AuthService
from app.services.expense_service import ExpenseService


@pytest.fixture
def client():
    # each lifespan builds a fresh in-memory database
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session():
    engine = build_engine("sqlite://")
    init_database(engine)
    db_session = build_session_factory(engine)()
    try:
        yield db_session
    finally:
        db_session.close()
        engine.dispose()


@pytest.fixture
def auth_service(session):
    return AuthService(user_repository=SqlUserRepository(session))


@pytest.fixture
def user(auth_service):
    return auth_service.register(username="alice", password="secret123", email="alice@example.com")


@pytest.fixture
def other_user(auth_service):
    return auth_service.register(username="bob", password="secret123")


@pytest.fixture
def house_repository(session):
    return SqlHouseExpenseRepository(session)


@pytest.fixture
def car_repository(session):
    return SqlCarExpenseRepository(session)


@pytest.fixture
def house_service(house_repository):
    return ExpenseService(expense_repository=house_repository, kind="house")

