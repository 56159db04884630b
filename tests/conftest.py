"""Shared fixtures: a throwaway SQLite store wired into the API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from sales_app import crud, models
from sales_app.main import app, get_session_factory
from sales_app.preprocessing import preprocessing_data


SAMPLE_PAYLOAD = [
    {"id": 1, "title": "Mountain Bike", "description": "Aluminium frame", "price": 150,
     "dateOfSale": "2021-03-05T10:00:00+00:00", "category": "sport", "sold": True},
    {"id": 2, "title": "Gel Pen", "description": "Blue ink", "price": 5,
     "dateOfSale": "2021-03-20T08:30:00+00:00", "category": "office", "sold": False},
    {"id": 3, "title": "Laptop Sleeve", "description": "Fits 15 inch", "price": 45.5,
     "dateOfSale": "2022-03-11T12:00:00+00:00", "category": "electronics", "sold": True},
    {"id": 4, "title": "Monitor", "description": "27 inch display", "price": 329.85,
     "dateOfSale": "2022-03-02T18:45:00+00:00", "category": "electronics", "sold": True},
    {"id": 5, "title": "Desk Chair", "description": "Ergonomic", "price": 950,
     "dateOfSale": "2021-03-28T09:15:00+00:00", "category": "office", "sold": False},
    {"id": 6, "title": "Backpack", "description": "Water resistant bike bag", "price": 100.5,
     "dateOfSale": "2021-03-15T14:00:00+00:00", "category": "sport", "sold": True},
    {"id": 7, "title": "Headphones", "description": "Noise cancelling", "price": 240,
     "dateOfSale": "2021-11-27T20:29:54+05:30", "category": "electronics", "sold": True},
    {"id": 8, "title": "Jacket", "description": "Winter wear", "price": 780,
     "dateOfSale": "2022-11-03T11:00:00+00:00", "category": "clothing", "sold": False},
    {"id": 9, "title": "T-Shirt", "description": "Cotton", "price": 15,
     "dateOfSale": "2021-07-04T07:00:00+00:00", "category": "clothing", "sold": True},
]


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'transactions.db'}",
        connect_args={"check_same_thread": False},
    )
    models.Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seed(db):
    def _seed(payload=None):
        rows = preprocessing_data(SAMPLE_PAYLOAD if payload is None else payload)
        return crud.seed_transactions(db, rows)

    return _seed


@pytest.fixture()
def client(session_factory):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
