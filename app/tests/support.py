"""Shared test database and input builders."""
from datetime import datetime

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

from app.schemas.events import EventEditor

# Use an in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine: Engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

OWNER_ID = "owner-1"
IDENTITY_HEADER = {"X-MS-CLIENT-PRINCIPAL-ID": OWNER_ID}


def editor_data(**overrides) -> dict:
    data = {
        "name": "AI Hackathon",
        "description": "# Welcome",
        "start": datetime(2024, 5, 1, 9, 0),
        "end": datetime(2024, 5, 2, 17, 0),
        "time_zone": "UTC",
        "organizer_name": "Ada Lovelace",
        "organizer_email": "ada@example.com",
        "max_token_cap": 4000,
        "daily_request_cap": 100,
        "active": True,
    }
    data.update(overrides)
    return data


def make_editor(**overrides) -> EventEditor:
    return EventEditor(**editor_data(**overrides))
