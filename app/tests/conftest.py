import uuid

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm.session import Session

from app.core.auth import AuthProvider, get_auth_provider
from app.database.db import Base
from app.main import app
from app.models.events import Owner, OwnerCatalog
from app.services.event_service import EventService, get_event_service
from app.tests.support import OWNER_ID, TestingSessionLocal, engine


@pytest.fixture(autouse=True)
def setup_database():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db: Session = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the service dependency so requests use the test database
def override_get_event_service(auth: AuthProvider = Depends(get_auth_provider)):
    with EventService(auth, session_factory=TestingSessionLocal) as service:
        yield service


app.dependency_overrides[get_event_service] = override_get_event_service


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalogs(db_session: Session) -> list[OwnerCatalog]:
    """Three catalog entries owned by OWNER_ID."""
    db_session.add(Owner(owner_id=OWNER_ID, name="Ada Lovelace", email="ada@example.com"))
    entries = [
        OwnerCatalog(
            catalog_id=uuid.uuid4(),
            owner_id=OWNER_ID,
            deployment_name=name,
            friendly_name=name.upper(),
            model_type="openai-chat",
        )
        for name in ("gpt-4o", "gpt-4o-mini", "gpt-35-turbo")
    ]
    db_session.add_all(entries)
    db_session.commit()
    return entries
