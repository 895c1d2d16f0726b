import os

# must be set before db.session is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from db.base import Base
from db.session import SessionLocal, engine
from main import app
from models.master_records import MasterRecord


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def count_rows():
    def _count(model, user_id: int) -> int:
        with SessionLocal() as session:
            return session.query(model).filter(model.user_id == user_id).count()

    return _count


@pytest.fixture
def masters_for():
    def _masters(user_id: int) -> list[MasterRecord]:
        with SessionLocal() as session:
            rows = (
                session.query(MasterRecord)
                .filter(MasterRecord.user_id == user_id)
                .order_by(MasterRecord.id.asc())
                .all()
            )
            return rows

    return _masters

