"""
Shared pytest fixtures.

Uses a SQLite file database so no Postgres is required for tests.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from schemaguard.db.base import Base, get_db
from schemaguard.main import app
from schemaguard.schemas.attributes import IntegerAttribute, StringAttribute
from schemaguard.schemas.schema import (
    SchemaDetails,
    SchemaKey,
    SchemaMeta,
    SchemaState,
    SchemaType,
    SchemaValidationType,
)

SQLITE_URL = "sqlite:///./test_schemaguard.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def make_schema(
    attributes,
    validation_type=SchemaValidationType.MATCHING,
    namespace="testing",
    schema_name="person",
    version="V1",
):
    """Build a fully formed SchemaDetails without touching the database."""
    return SchemaDetails(
        schema_key=SchemaKey(namespace=namespace, schema_name=schema_name, version=version),
        schema_state=SchemaState.CREATED,
        schema_type=SchemaType.JSON,
        validation_type=validation_type,
        schema_meta=SchemaMeta(created_by="tests", created_at=datetime(2026, 1, 1, tzinfo=timezone.utc)),
        attributes=tuple(attributes),
    )


@pytest.fixture()
def person_attributes():
    """NAME:String, AGE:Integer"""
    return [StringAttribute(name="NAME"), IntegerAttribute(name="AGE")]
